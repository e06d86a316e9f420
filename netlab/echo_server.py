"""Echo server: every client gets back exactly what it sends."""

from __future__ import annotations

import argparse
import socketserver
import sys

BUFFER_SIZE = 1023
BACKLOG = 5


class _EchoHandler(socketserver.BaseRequestHandler):
    def handle(self) -> None:
        host, port = self.client_address[:2]
        print(f"New client connected: {host}:{port}", flush=True)
        while True:
            try:
                data = self.request.recv(BUFFER_SIZE)
            except OSError:
                break
            if not data:
                break
            try:
                self.request.sendall(data)
            except OSError:
                break
        print(f"Client connection closed: {host}:{port}", flush=True)


class _EchoServer(socketserver.ThreadingTCPServer):
    daemon_threads = True
    request_queue_size = BACKLOG


def make_server(port: int, host: str = "") -> socketserver.ThreadingTCPServer:
    """Bind an echo server to ``(host, port)``; each client is served concurrently."""
    return _EchoServer((host, port), _EchoHandler)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="netlab-echo-server", description="Echo back whatever clients send."
    )
    parser.add_argument("port", type=int, help="port to listen on")
    args = parser.parse_args(argv)

    try:
        server = make_server(args.port)
    except OSError as exc:
        print(f"Binding failed: {exc}", file=sys.stderr)
        return 1

    print(f"Server started, listening on port {args.port}", flush=True)
    with server:
        try:
            server.serve_forever()
        except KeyboardInterrupt:
            pass
    print("Exited")
    return 0


if __name__ == "__main__":
    sys.exit(main())