# netlab

Three small client/server pairs built on plain sockets:

- **chat** – a TCP chat server that routes private messages between named users, plus a console client.
- **echo** – a TCP server that sends back every byte it receives, serving each client in its own thread, plus an interactive client.
- **time** – a UDP server that answers each datagram with its current local time, plus a client.

The package has no third-party dependencies.

## Installation

```
pip install .
```

To run the tests:

```
pip install .[test]
pytest
```

## Chat

Start the server on a port (it listens on all interfaces):

```
netlab-chat-server 9000
```

Connect one or more clients, each with a user name:

```
netlab-chat 127.0.0.1 9000 alice
netlab-chat 127.0.0.1 9000 bob
```

In the client, type the target user on one line and the message on the next.
An empty line where a target is expected is skipped. Incoming messages are shown as:

```
> alice:
> hello
```

Type `.exit` at any time to quit; end of input quits as well.

The server prints each registration (`Client connected, username: ...`), each
relayed message (`From:`, `To:`, `Content:`) and each disconnection. A message to a
user who is not connected, or a frame that cannot be parsed, is dropped.

On the wire, a message is framed as `<length>#<name><text>`: the decimal length of
the name in UTF-8 bytes, a `#`, the name, then the text. From client to server the
name is the recipient; from server to client it is the sender.
`netlab.protocol.encode_frame(name, message)` builds a frame and
`netlab.protocol.decode_frame(data)` returns `(name, message)`, raising `ValueError`
when the `#` is missing or the length is not made of decimal digits.

## Echo

```
netlab-echo-server 9001
netlab-echo 127.0.0.1 9001
```

Each line you type is sent to the server and the reply is printed. Type `.exit` to quit.

## Time

```
netlab-time-server 9002
netlab-time 127.0.0.1 9002
```

Press Enter (or type anything) to ask the server for its time; type `.exit` to quit.
The server replies with a `ctime`-style line such as `Mon Jan  1 12:00:00 2024`.

## Use from Python

Clients:

```python
from netlab.echo_client import EchoClient
from netlab.time_client import TimeClient

with EchoClient("127.0.0.1", 9001) as client:
    print(client.exchange("hello\n"))

with TimeClient("127.0.0.1", 9002) as client:
    print(client.query())
```

`ChatClient(host, port, username)` registers under a user name;
`send_message(target, message)` sends one message and `receive()` waits for the next
one and returns `(sender, message)`, raising `ConnectionError` once the server has
closed the connection. `run(stdin, stdout)` is the interactive loop the
`netlab-chat` command uses. `LineComposer` pairs input lines into
`(target, message)` tuples.

Servers:

- `ChatServer(port, host="")` binds at once; `serve_forever()` runs until
  `shutdown()` is called from another thread, and `close()` closes every socket.
  Its `address` attribute holds the bound `(host, port)`, so port `0` may be used.
- `make_server(port, host="")` in `netlab.echo_server` returns a
  `socketserver.ThreadingTCPServer` ready for `serve_forever()`.
- `TimeServer(port, host="")` answers one request with `handle_one()`, which returns
  the client's `(host, port)`, or keeps answering with `serve_forever()` until
  `close()` is called. `format_time(now=None)` gives the reply text.

All classes can be used as context managers.

## Limits

- Chat has only private messages between two users: no broadcast, rooms, history
  or authentication. User names are not checked for uniqueness; a second client with
  the same name takes over the routing for that name.
- Each read takes at most 1023 bytes and is treated as one whole frame; messages
  are not reassembled across reads.
- The time server speaks its own plain-text reply, not a standard time protocol.