import io
import socket
import threading

import pytest

from netlab.time_client import TimeClient, main

REPLY = b"Thu Jan  1 00:00:00 1970\n"


@pytest.fixture
def fake_server():
    sock = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
    sock.bind(("127.0.0.1", 0))
    requests = []

    def run():
        while True:
            try:
                data, addr = sock.recvfrom(1024)
            except OSError:
                return
            if data == b"stop":
                return
            requests.append(data)
            sock.sendto(REPLY, addr)

    thread = threading.Thread(target=run, daemon=True)
    thread.start()
    port = sock.getsockname()[1]
    yield port, requests
    with socket.socket(socket.AF_INET, socket.SOCK_DGRAM) as stopper:
        stopper.sendto(b"stop", ("127.0.0.1", port))
    thread.join(timeout=5)
    sock.close()


def test_query_sends_time_request_and_returns_reply(fake_server):
    port, requests = fake_server
    with TimeClient("127.0.0.1", port) as client:
        assert client.query() == REPLY.decode()
        assert client.query() == REPLY.decode()
    assert requests == [b"TIME", b"TIME"]


def test_query_after_close_raises():
    client = TimeClient("127.0.0.1", 9)
    client.close()
    with pytest.raises(OSError):
        client.query()


def test_main_queries_per_line_until_exit(fake_server, monkeypatch, capsys):
    port, requests = fake_server
    monkeypatch.setattr("sys.stdin", io.StringIO("\nnow\n.exit\nignored\n"))
    assert main(["127.0.0.1", str(port)]) == 0
    out = capsys.readouterr().out
    assert out.count(f"Server time: {REPLY.decode()}") == 2
    assert len(requests) == 2
    assert out.rstrip().endswith("Exited")