"""Framing for chat messages: ``<name length>#<name><message>``.

The same frame shape travels in both directions.

- From a client to the server, the name is the recipient.
- From the server to a client, the name is the sender.

The length counts the UTF-8 bytes of the name.
"""

SEPARATOR = b"#"


def encode_frame(name: str, message: str) -> bytes:
    """Build a frame carrying ``name`` and ``message``."""
    raw_name = name.encode("utf-8")
    return (
        str(len(raw_name)).encode("ascii")
        + SEPARATOR
        + raw_name
        + message.encode("utf-8")
    )


def decode_frame(data: bytes) -> tuple[str, str]:
    """Split a frame into ``(name, message)``.

    An empty length prefix means an empty name.

    If the data ends before the declared name length, the name is whatever
    bytes are present and the message is empty.

    Raises ``ValueError`` when the separator is missing or when the length
    prefix holds anything but decimal digits.
    """
    prefix, sep, rest = data.partition(SEPARATOR)
    if not sep:
        raise ValueError("frame has no '#' separator")
    if prefix and not prefix.isdigit():
        raise ValueError(f"invalid name length in frame: {prefix!r}")
    length = int(prefix) if prefix else 0
    name, message = rest[:length], rest[length:]
    return (
        name.decode("utf-8", errors="replace"),
        message.decode("utf-8", errors="replace"),
    )