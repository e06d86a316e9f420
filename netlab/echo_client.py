"""Line-oriented client for the echo server."""

from __future__ import annotations

import argparse
import socket
import sys

BUFFER_SIZE = 1023
EXIT_LINE = ".exit\n"


class EchoClient:
    """A TCP connection to an echo server."""

    def __init__(self, host: str, port: int) -> None:
        self._sock = socket.create_connection((host, port))

    def __enter__(self) -> EchoClient:
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def exchange(self, text: str) -> str:
        """Send ``text`` and return what the server sends back.

        Raises ``ConnectionError`` when the server has closed the connection.
        """
        self._sock.sendall(text.encode("utf-8"))
        data = self._sock.recv(BUFFER_SIZE)
        if not data:
            raise ConnectionError("server closed the connection")
        return data.decode("utf-8", errors="replace")

    def close(self) -> None:
        """Close the connection."""
        self._sock.close()


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="netlab-echo", description="Send lines to an echo server."
    )
    parser.add_argument("host", help="server IP address")
    parser.add_argument("port", type=int, help="server port")
    args = parser.parse_args(argv)

    try:
        client = EchoClient(args.host, args.port)
    except OSError as exc:
        print(f"Connecting failed: {exc}", file=sys.stderr)
        return 1

    print(f"Connected to server {args.host}:{args.port}")
    print('Input ".exit"(without quotes) to exit\n', flush=True)
    with client:
        while True:
            print("Message to send: ", end="", flush=True)
            line = sys.stdin.readline()
            if not line or line == EXIT_LINE:
                break
            try:
                reply = client.exchange(line)
            except OSError as exc:
                print(f"Receiving failed: {exc}", file=sys.stderr)
                break
            print(f"Server returned: {reply}", flush=True)
    print("Exited")
    return 0


if __name__ == "__main__":
    sys.exit(main())