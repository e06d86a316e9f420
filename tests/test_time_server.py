import socket
import threading
import time

import pytest

from netlab.time_server import TimeServer, format_time, main

CTIME_FORMAT = "%a %b %d %H:%M:%S %Y"


def _parse(text):
    assert text.endswith("\n")
    return time.mktime(time.strptime(text.rstrip("\n"), CTIME_FORMAT))


@pytest.mark.parametrize("stamp", [0, 86400 * 365, 1_000_000_000])
def test_format_time_round_trips_through_strptime(stamp):
    assert _parse(format_time(stamp)) == pytest.approx(stamp, abs=1)


def test_format_time_default_is_now():
    before = time.time()
    text = format_time()
    assert abs(_parse(text) - before) <= 2


def test_format_time_has_ctime_width():
    assert len(format_time(1_000_000_000)) == 25


@pytest.fixture
def client_socket():
    sock = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
    sock.bind(("127.0.0.1", 0))
    sock.settimeout(5)
    yield sock
    sock.close()


def test_handle_one_replies_with_time(client_socket, capsys):
    with TimeServer(0, "127.0.0.1") as server:
        client_socket.sendto(b"TIME", server.address)
        address = server.handle_one()
        reply, origin = client_socket.recvfrom(1024)
    assert address == client_socket.getsockname()
    assert origin == server.address
    assert abs(_parse(reply.decode()) - time.time()) <= 2
    assert f"Received request from: 127.0.0.1:{address[1]}" in capsys.readouterr().out


def test_serve_forever_answers_until_closed(client_socket):
    server = TimeServer(0, "127.0.0.1")
    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()
    try:
        for _ in range(2):
            client_socket.sendto(b"anything", server.address)
            reply, _ = client_socket.recvfrom(1024)
            assert abs(_parse(reply.decode()) - time.time()) <= 2
    finally:
        server.close()
    thread.join(timeout=5)
    assert not thread.is_alive()


def test_bind_conflict_raises_oserror():
    with TimeServer(0, "127.0.0.1") as server:
        with pytest.raises(OSError):
            TimeServer(server.address[1], "127.0.0.1")


def test_main_rejects_non_numeric_port():
    with pytest.raises(SystemExit):
        main(["port"])