"""UDP server answering every datagram with the current local time."""

from __future__ import annotations

import argparse
import select
import socket
import sys
import time

BUFFER_SIZE = 1023
POLL_INTERVAL = 0.2


def format_time(now: float | None = None) -> str:
    """Render ``now`` (seconds since the epoch) as a ctime line ending in a newline."""
    return time.ctime(time.time() if now is None else now) + "\n"


class TimeServer:
    """A bound UDP socket that replies to requests with the server's time."""

    def __init__(self, port: int, host: str = "") -> None:
        self._sock = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
        try:
            self._sock.bind((host, port))
        except OSError:
            self._sock.close()
            raise
        self.address = self._sock.getsockname()[:2]
        self._closed = False

    def __enter__(self) -> TimeServer:
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def handle_one(self) -> tuple[str, int]:
        """Wait for one request, answer it, and return the client's address."""
        _, client = self._sock.recvfrom(BUFFER_SIZE)
        host, port = client[:2]
        print(f"Received request from: {host}:{port}", flush=True)
        self._sock.sendto(format_time().encode("ascii"), client)
        return host, port

    def serve_forever(self) -> None:
        """Answer requests until :meth:`close` is called."""
        while not self._closed:
            try:
                readable, _, _ = select.select([self._sock], [], [], POLL_INTERVAL)
                if readable:
                    self.handle_one()
            except (OSError, ValueError) as exc:
                if self._closed:
                    return
                print(f"Recvfrom failed: {exc}", file=sys.stderr, flush=True)

    def close(self) -> None:
        """Stop serving and close the socket."""
        self._closed = True
        self._sock.close()


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="netlab-time-server", description="Answer time requests over UDP."
    )
    parser.add_argument("port", type=int, help="port to listen on")
    args = parser.parse_args(argv)

    try:
        server = TimeServer(args.port)
    except OSError as exc:
        print(f"Binding failed: {exc}", file=sys.stderr)
        return 1

    print(f"Server started on port {args.port}", flush=True)
    with server:
        try:
            server.serve_forever()
        except KeyboardInterrupt:
            pass
    print("Exited")
    return 0


if __name__ == "__main__":
    sys.exit(main())