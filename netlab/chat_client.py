"""Interactive chat client: a line naming the recipient, then a line of text."""

from __future__ import annotations

import argparse
import socket
import sys
import threading
from typing import Iterable, TextIO

from netlab.protocol import decode_frame, encode_frame

BUFFER_SIZE = 1023
EXIT_COMMAND = ".exit"


class LineComposer:
    """Pairs input lines into ``(target, message)`` tuples.

    The first non-empty line names the target and the following line is the
    message.
    """

    def __init__(self) -> None:
        self._target = ""

    def feed(self, line: str) -> tuple[str, str] | None:
        """Take one line; return a complete ``(target, message)`` or ``None``."""
        if not self._target:
            self._target = line
            return None
        target, self._target = self._target, ""
        return target, line


class ChatClient:
    """A connection to the chat server under one username."""

    def __init__(self, host: str, port: int, username: str) -> None:
        self.username = username
        self._sock = socket.create_connection((host, port))
        self._sock.sendall(username.encode("utf-8"))

    def __enter__(self) -> ChatClient:
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def send_message(self, target: str, message: str) -> None:
        """Send ``message`` addressed to the user ``target``."""
        self._sock.sendall(encode_frame(target, message))

    def receive(self) -> tuple[str, str]:
        """Wait for one incoming message and return ``(sender, message)``.

        Raises ``ConnectionError`` when the server has closed the connection.
        """
        data = self._sock.recv(BUFFER_SIZE)
        if not data:
            raise ConnectionError("server closed the connection")
        return decode_frame(data)

    def run(self, stdin: Iterable[str], stdout: TextIO) -> None:
        """Relay lines from ``stdin`` and print incoming messages to ``stdout``.

        Stops at end of input or at the line ``.exit``.
        """
        lock = threading.Lock()

        def write(text: str) -> None:
            with lock:
                stdout.write(text)
                stdout.flush()

        def listen() -> None:
            while True:
                try:
                    sender, message = self.receive()
                except ValueError:
                    continue
                except OSError:
                    return
                write(f"\n> {sender}:\n> {message}\n\n")

        receiver = threading.Thread(target=listen, daemon=True)
        receiver.start()
        composer = LineComposer()
        try:
            for raw_line in stdin:
                line = raw_line[:-1] if raw_line.endswith("\n") else raw_line
                if line == EXIT_COMMAND:
                    break
                pair = composer.feed(line)
                if pair is not None:
                    self.send_message(*pair)
                    write("\n")
        finally:
            try:
                self._sock.shutdown(socket.SHUT_RDWR)
            except OSError:
                pass
            receiver.join()

    def close(self) -> None:
        """Close the connection."""
        self._sock.close()


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="netlab-chat", description="Chat with other users through a chat server."
    )
    parser.add_argument("host", help="server IP address")
    parser.add_argument("port", type=int, help="server port")
    parser.add_argument("username", help="name to register under")
    args = parser.parse_args(argv)

    try:
        client = ChatClient(args.host, args.port, args.username)
    except OSError:
        print("Connecting to server failed.", file=sys.stderr)
        return 1

    print("Connected to server.")
    print("Usage: <Target user>(Line 1) + <Message>(Line 2)")
    print('Input ".exit"(without quotes) at any time to exit.', flush=True)
    with client:
        client.run(sys.stdin, sys.stdout)
    print("Exited.")
    return 0


if __name__ == "__main__":
    sys.exit(main())