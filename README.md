# rpcwire

`rpcwire` moves opaque byte messages between two async endpoints. Every
transport has the same three coroutines: `send`, `recv` and `close`. The code
above a transport therefore works the same whether the bytes travel through
memory, a pipe or a WebSocket. The package also has a few small sample services
that show what typical RPC endpoints look like.

## Messages and transports

A `rpcwire.message.Message` is a frozen dataclass. Its `data` attribute holds
the payload as `bytes`. You can build a message from `bytes`, `bytearray`,
`memoryview` or any iterable of ints, and `len(msg)` gives the payload size.

`rpcwire.message.Transport` is the abstract base class. It is also an async
context manager: `async with transport:` calls `close()` when the block ends.
Every failure a transport raises is a subclass of
`rpcwire.message.TransportError`.

| Transport | Module | Use it for |
|-----------|--------|------------|
| `InProcessTransport` | `rpcwire.inprocess` | Tests, and a client and a server in the same process |
| `StdioTransport` | `rpcwire.stdio` | Length-prefixed frames over stdin/stdout or any stream pair |
| `WebSocketTransport`, `WebSocketListener` | `rpcwire.websocket` | Network connections |

### In process

```python
import asyncio

from rpcwire.inprocess import InProcessTransport
from rpcwire.message import Message


async def demo():
    client, server = InProcessTransport.pair()
    await client.send(Message(b"\x01\x02\x03"))
    received = await server.recv()
    assert received.data == b"\x01\x02\x03"


asyncio.run(demo())
```

`InProcessTransport.pair()` returns two connected ends. Whatever one end sends,
the other receives. The message object itself is handed over, with no framing.

`close()` shuts the receiving side of that end:

- When the peer then sends to it, the peer gets `ChannelClosed`.
- Messages that were already queued can still be read.
- Once those are read, `recv()` raises `ChannelClosed`.

`ChannelClosed` is a subclass of `InProcessError`.

### Over stdin/stdout

Each message becomes one frame: the payload length as a 4-byte big-endian
unsigned integer, followed by the payload.

- `encode_frame(data)` builds a frame. It raises `StdioError` if the payload is
  longer than the 4-byte length can express.
- `read_frame(reader)` reads one frame from any object with an async
  `readexactly(n)` method, such as `asyncio.StreamReader`, and returns the
  payload.
- `StdioTransport(reader, writer)` wraps any reader and writer pair. The writer
  needs `write(data)` and an async `drain()`.
- `await StdioTransport.open()` builds a transport on the process's own stdin
  and stdout.

If the stream ends before a whole frame has arrived, the transport raises
`StdioError`. It raises the same error for OS-level I/O failures. `close()`
does nothing, because the standard streams need no explicit closing.

### WebSocket

```python
from rpcwire.message import Message
from rpcwire.websocket import WebSocketListener, WebSocketTransport


async def echo_once():
    listener = await WebSocketListener.bind("127.0.0.1:0")
    host, port = listener.local_addr()

    client = await WebSocketTransport.connect(f"ws://{host}:{port}")
    server = await listener.accept()

    await client.send(Message(b"ping"))
    await server.send(await server.recv())
    assert (await client.recv()).data == b"ping"

    await client.close()
    await server.close()
    await listener.close()
```

`WebSocketListener.bind("host:port")` starts listening. Port `0` picks a free
port, and `local_addr()` reports the `(host, port)` the listener is bound to.
`accept()` waits for the next client and returns a `WebSocketTransport`. After
`close()`, waiting in `accept()` raises `ConnectionClosed`. The listener can
also be used as an async context manager.

Messages travel as binary frames of up to 64 MiB (`DEFAULT_MAX_SIZE`). All
errors derive from `WebSocketError`:

- A text frame on the receiving side raises `UnexpectedMessageType`.
- A closed connection raises `ConnectionClosed`.
- Other protocol failures and socket failures raise `WebSocketError` itself.
- An address that cannot be parsed also raises `WebSocketError`.

## Sample services

Every service method is a coroutine. Each service logs what it does through
the standard `logging` module.

- `rpcwire.models` holds the dataclasses `Analysis`, `User`, `UserMetadata`,
  `Preferences`, `Transaction` and `TransactionResult`, and the `Role` enum
  (`ADMIN`, `MODERATOR`, `USER`, `GUEST`).
  - `to_plain(value)` turns records into plain dicts, lists and scalars for a
    codec. Enum members become their names, such as `"User"`, and bytes become
    lists of ints.
  - `from_plain(cls, data)` builds a record back from that plain form. It
    raises `TypeError` when a value has the wrong shape. It raises `ValueError`
    when a required field is missing, an enum name is unknown, or an integer is
    negative.
  - `Transaction.from_` appears under the key `"from"` in the plain form.
- `rpcwire.users.UserService` keeps users in memory:
  - `create_user`, `get_user` and `list_users_by_role` manage and query them.
  - `update_preferences` raises `LookupError` for an unknown id.
  - `process_transaction` rejects amounts that are not positive.
- `rpcwire.textdata.DataService` has two methods. `compress` drops zero bytes.
  `analyze` returns the same result as `analyze_text(text)`: counts of UTF-8
  bytes, words, characters and upper-case letters.
- `rpcwire.mathsvc` has two services:
  - `MathService` computes `factorial`, `fibonacci` and `is_prime` on unsigned
    64-bit values. It raises `OverflowError` when a result does not fit.
  - `Calculator` has `add`, which works on 32-bit signed integers, plus
    `greet` and `echo`.
- `rpcwire.tasks` has two services:
  - `TaskProcessor` provides `process_task` and `get_status` on the server
    side.
  - `ClientCallbacks` provides `on_progress`, `on_complete` and `log_message`
    for the server to call on its client. Each notification becomes one line.
    The line is added to `lines` and printed to the stream given as `out`, or
    to stdout if none is given.
- `rpcwire.echo.EchoServer` has `echo`, which returns `"Server echo: ..."`, and
  a 32-bit `add`.
- `rpcwire.processor.DataProcessor` has three methods:
  - `process_data` reverses bytes.
  - `transform` upper-cases and reverses text.
  - `calculate(x, y, op)` supports `add`, `sub`, `mul` and `div`. Division by
    zero and unknown operations return `0.0`.
- `rpcwire.streaming.StreamingService` serves streams of 10 chunks, each
  `chunk_size` bytes long (1024 by default). `get_chunk` returns `None` past
  the last chunk. The async generator `iter_chunks(stream_id)` yields every
  chunk in order.
- `rpcwire.counter` provides a counter and a loop that drives it:
  - `CounterService` holds an unsigned 32-bit counter with `increment(value)`
    (which stores `value + 1`) and `get_value()`.
  - `run_kernel(service, iterations=10)` calls `increment` repeatedly, starting
    from 0, and returns the last value.

## What the package does not include

There is no codec, request/response envelope or dispatcher. Nothing turns a
method call into a message, or a message back into a call on a service. The
services are plain objects that you call directly. Connecting them to a
transport, for example by encoding `to_plain(...)` output with a codec of your
choice, is up to your own code. The package also has no HTTP transport and no
command-line program.

## Running the tests

Install the `test` extra, then run `pytest` from the project root.