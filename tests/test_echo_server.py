import socket
import threading

import pytest

from netlab.echo_server import main, make_server


@pytest.fixture
def running_server():
    server = make_server(0, "127.0.0.1")
    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()
    yield server
    server.shutdown()
    server.server_close()
    thread.join(timeout=5)


def _roundtrip(sock, payload):
    sock.sendall(payload)
    received = b""
    while len(received) < len(payload):
        chunk = sock.recv(1024)
        if not chunk:
            break
        received += chunk
    return received


def test_echoes_payload(running_server):
    port = running_server.server_address[1]
    with socket.create_connection(("127.0.0.1", port)) as sock:
        assert _roundtrip(sock, b"hello\n") == b"hello\n"
        assert _roundtrip(sock, b"again\n") == b"again\n"


def test_serves_clients_concurrently(running_server):
    port = running_server.server_address[1]
    first = socket.create_connection(("127.0.0.1", port))
    second = socket.create_connection(("127.0.0.1", port))
    with first, second:
        assert _roundtrip(second, b"from second") == b"from second"
        assert _roundtrip(first, b"from first") == b"from first"


def test_announces_new_client(running_server, capsys):
    port = running_server.server_address[1]
    with socket.create_connection(("127.0.0.1", port)) as sock:
        local_port = sock.getsockname()[1]
        assert _roundtrip(sock, b"x") == b"x"
    assert f"New client connected: 127.0.0.1:{local_port}" in capsys.readouterr().out


def test_bind_conflict_raises_oserror(running_server):
    port = running_server.server_address[1]
    with pytest.raises(OSError):
        make_server(port, "127.0.0.1")


def test_main_rejects_non_numeric_port():
    with pytest.raises(SystemExit):
        main(["not-a-port"])