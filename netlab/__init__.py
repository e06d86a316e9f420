"""TCP chat and echo servers and a UDP time server, each with a client."""

__version__ = "0.1.0"