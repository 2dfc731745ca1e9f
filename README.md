# minnowtcp

The receiving half of a TCP implementation. It is pure Python and has no
dependencies.

- `minnowtcp.wrapping_integers.Wrap32` handles 32-bit sequence numbers that
  wrap around. It converts them to and from 64-bit absolute sequence numbers.
- `minnowtcp.byte_stream.ByteStream` is a bounded in-memory stream. It has a
  `Writer` side and a `Reader` side, and the module also provides a
  `read(reader, max_len)` helper.
- `minnowtcp.reassembler.Reassembler` takes indexed substrings that may
  overlap or arrive out of order. It puts them back together and writes them
  into a `ByteStream` as soon as they are contiguous.
- `minnowtcp.tcp_receiver.TCPReceiver` turns `TCPSenderMessage`s into stream
  bytes. It answers with a `TCPReceiverMessage` that carries the
  acknowledgement number and the window size.

## Installation

```
pip install minnowtcp
```

## Wrapping sequence numbers

```python
from minnowtcp.wrapping_integers import Wrap32

isn = Wrap32(15)
seqno = Wrap32.wrap(3 * (1 << 32) + 17, isn)
assert seqno == Wrap32(32)

# Pick the absolute number closest to a checkpoint.
assert Wrap32(1).unwrap(Wrap32(0), (1 << 32) - 1) == (1 << 32) + 1
```

## Byte streams

```python
from minnowtcp.byte_stream import ByteStream, read

stream = ByteStream(5)
stream.writer().push("hello world")   # only "hello" fits
stream.writer().close()

assert read(stream.reader(), 100) == "hello"
assert stream.reader().is_finished()
```

`Writer.push` keeps only as much data as the available capacity allows.
`Reader.peek` returns the next buffered chunk, or `""` when nothing is
buffered. `Reader.pop(n)` removes up to `n` bytes.

## Reassembling segments

```python
from minnowtcp.byte_stream import ByteStream, read
from minnowtcp.reassembler import Reassembler

reassembler = Reassembler(ByteStream(64))
reassembler.insert(3, "def", False)
assert reassembler.count_bytes_pending() == 3

reassembler.insert(0, "abc", False)
assert read(reassembler.reader(), 64) == "abcdef"
```

The reassembler drops bytes that lie beyond the output's available capacity.
It closes the output once the byte that ends the last substring has been
written.

## Receiving TCP segments

```python
from minnowtcp.byte_stream import ByteStream
from minnowtcp.reassembler import Reassembler
from minnowtcp.tcp_receiver import TCPReceiver, TCPSenderMessage
from minnowtcp.wrapping_integers import Wrap32

receiver = TCPReceiver(Reassembler(ByteStream(4000)))
receiver.receive(TCPSenderMessage(seqno=Wrap32(100), syn=True, payload="hi"))

reply = receiver.send()
assert reply.ackno == Wrap32(103)
assert reply.window_size == 3998
```

The advertised window size is the stream's free capacity, capped at 65535.
`ackno` stays `None` until a segment with `syn` set has arrived.

A message with `rst` set puts the stream into the error state. From then on,
every reply has `rst` set.

## What it does not do

The package contains no sending side and no network or socket code. Messages
are passed to `TCPReceiver.receive` and taken from `TCPReceiver.send` as plain
Python objects.

## Running the tests

```
pip install "minnowtcp[test]"
pytest
```