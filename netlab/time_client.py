"""UDP client asking a time server for its clock."""

from __future__ import annotations

import argparse
import socket
import sys

BUFFER_SIZE = 1023
REQUEST = b"TIME"
EXIT_LINE = ".exit\n"


class TimeClient:
    """Sends time requests to one server over UDP."""

    def __init__(self, host: str, port: int) -> None:
        self._address = (host, port)
        self._sock = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)

    def __enter__(self) -> TimeClient:
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def query(self) -> str:
        """Request the server's time and return its reply."""
        self._sock.sendto(REQUEST, self._address)
        data, _ = self._sock.recvfrom(BUFFER_SIZE)
        return data.decode("utf-8", errors="replace")

    def close(self) -> None:
        """Close the socket."""
        self._sock.close()


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="netlab-time", description="Ask a time server for the current time."
    )
    parser.add_argument("host", help="server IP address")
    parser.add_argument("port", type=int, help="server port")
    args = parser.parse_args(argv)

    print(
        'Input ".exit"(without quotes) to exit, or anything else to check time\n',
        flush=True,
    )
    with TimeClient(args.host, args.port) as client:
        for line in sys.stdin:
            if line == EXIT_LINE:
                break
            try:
                reply = client.query()
            except OSError as exc:
                print(f"Recvfrom failed: {exc}", file=sys.stderr)
                continue
            print(f"Server time: {reply}", flush=True)
    print("Exited")
    return 0


if __name__ == "__main__":
    sys.exit(main())