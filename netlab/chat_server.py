"""Chat server relaying framed messages between named users."""

from __future__ import annotations

import argparse
import selectors
import socket
import sys
import threading

from netlab.protocol import decode_frame, encode_frame

BUFFER_SIZE = 1023
BACKLOG = 5


class ChatServer:
    """Accepts clients, registers their usernames and forwards messages."""

    def __init__(self, port: int, host: str = "") -> None:
        self._listener = socket.create_server((host, port), backlog=BACKLOG)
        self.address = self._listener.getsockname()[:2]
        self._wake_r, self._wake_w = socket.socketpair()
        self._stopping = threading.Event()
        self._users: dict[str, socket.socket] = {}
        self._names: dict[socket.socket, str] = {}

    def __enter__(self) -> ChatServer:
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def serve_forever(self) -> None:
        """Serve clients until :meth:`shutdown` is called."""
        with selectors.DefaultSelector() as selector:
            selector.register(self._listener, selectors.EVENT_READ)
            selector.register(self._wake_r, selectors.EVENT_READ)
            for conn in self._names:
                selector.register(conn, selectors.EVENT_READ)
            while not self._stopping.is_set():
                ready = {key.fileobj for key, _ in selector.select()}
                if self._wake_r in ready:
                    self._wake_r.recv(BUFFER_SIZE)
                    continue
                if self._listener in ready:
                    self._accept(selector)
                for conn in list(self._names):
                    if conn in ready:
                        self._handle(selector, conn)

    def _accept(self, selector: selectors.BaseSelector) -> None:
        try:
            conn, _ = self._listener.accept()
        except OSError:
            return
        try:
            raw_name = conn.recv(BUFFER_SIZE)
        except OSError:
            raw_name = b""
        name = raw_name.decode("utf-8", errors="replace")
        self._users[name] = conn
        self._names[conn] = name
        selector.register(conn, selectors.EVENT_READ)
        print(f"Client connected, username: {name}", flush=True)

    def _handle(self, selector: selectors.BaseSelector, conn: socket.socket) -> None:
        sender = self._names[conn]
        try:
            data = conn.recv(BUFFER_SIZE)
        except OSError:
            data = b""
        if not data:
            print(f"Client {sender} disconnected.", file=sys.stderr, flush=True)
            selector.unregister(conn)
            conn.close()
            self._users.pop(sender, None)
            del self._names[conn]
            return

        try:
            target, message = decode_frame(data)
        except ValueError:
            return
        print(f"\nFrom: {sender}\nTo: {target}\nContent: {message}\n", flush=True)

        recipient = self._users.get(target)
        if recipient is None:
            return
        try:
            recipient.sendall(encode_frame(sender, message))
        except OSError:
            pass

    def shutdown(self) -> None:
        """Ask a running :meth:`serve_forever` to return."""
        self._stopping.set()
        try:
            self._wake_w.send(b"\0")
        except OSError:
            pass

    def close(self) -> None:
        """Close the listening socket and every client connection."""
        for conn in self._names:
            conn.close()
        self._names.clear()
        self._users.clear()
        self._listener.close()
        self._wake_r.close()
        self._wake_w.close()


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="netlab-chat-server", description="Relay chat messages between users."
    )
    parser.add_argument("port", type=int, help="port to listen on")
    args = parser.parse_args(argv)

    try:
        server = ChatServer(args.port)
    except OSError:
        print("Binding failed.", file=sys.stderr)
        return 1

    print("Server started, waiting for connection...", flush=True)
    with server:
        try:
            server.serve_forever()
        except KeyboardInterrupt:
            pass
    print("Exited.")
    return 0


if __name__ == "__main__":
    sys.exit(main())