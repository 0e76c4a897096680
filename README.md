# netlab

A collection of small socket programs built on the Python standard library.
Each one shows a single networking idea and can be used as a library or
started as a command.

| Module                  | What it does                                                          |
|-------------------------|-----------------------------------------------------------------------|
| `netlab.addresses`      | Host byte order, `htons`/`htonl`, `inet_addr`/`inet_aton`/`inet_ntoa` |
| `netlab.calc`           | Calculator server and client speaking a small binary protocol         |
| `netlab.textcalc`       | Calculator server and client speaking a plain-text protocol           |
| `netlab.select_server`  | `SelectEchoServer`, an echo server multiplexed with `select`; a console watcher |
| `netlab.event_server`   | `EventEchoServer`, a selector-driven echo server with a `Trigger` mode (`LEVEL` or `EDGE`) |
| `netlab.news`           | Send a text file as multicast or broadcast datagrams, and receive them |
| `netlab.file_transfer`  | Send a file over TCP with a half-close; copy files by raw chunk or by line |
| `netlab.sockinfo`       | Socket buffer sizes, socket types, host lookups returning `HostInfo`  |
| `netlab.webserver`      | A tiny threaded HTTP/1.0 server answering `GET` for files             |

It needs Python 3.10 or later and has no dependencies outside the standard
library. Some socket options it uses, multicast membership for example,
behave as on POSIX systems.

## Installing

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Commands

```
netlab-addresses                          # byte order and address conversion demo
netlab-calc server PORT                   # answer five binary calculation requests
netlab-calc client HOST PORT              # prompts for operands and an operator
netlab-textcalc server PORT               # answer one text calculation request
netlab-textcalc client HOST PORT
netlab-select-echo server PORT            # echo for every connected client
netlab-select-echo console                # report stdin, "Time-out!" every 5 s of silence
netlab-event-echo PORT [--bufsize N] [--trigger level|edge]
netlab-news send GROUP PORT [--file news.txt]
netlab-news receive GROUP PORT
netlab-news send-brd ADDRESS PORT [--file news.txt]
netlab-news receive-brd PORT
netlab-file server PORT [--file README.md]
netlab-file client HOST PORT [--output receive.txt]
netlab-file copy [SOURCE] [TARGET]        # defaults: news.txt -> cpy.txt
netlab-file copy-lines [SOURCE] [TARGET]
netlab-sockinfo buffers | set-buffers | types
netlab-sockinfo name HOST
netlab-sockinfo addr ADDRESS
netlab-web PORT [--root DIR]
```

Run a server in one terminal and its client in another. A command given the
wrong arguments prints a usage line.

## Protocols

- **Binary calculator** (`netlab.calc`): one byte holding the operand count,
  that many 4-byte host-order signed integers, one operator byte (`+`, `-`,
  `*`). The reply is the 4-byte signed result. Any other operator returns the
  first operand.
- **Text calculator** (`netlab.textcalc`): `"<count> <n1> <n2> ... <op>"`,
  each number followed by one space; the reply is the decimal result.
- **Web server** (`netlab.webserver`): the request line must contain
  `HTTP/`, the method must be `GET`, and the file name must have an
  extension. `.html`/`.htm` files are sent as `text/html`, others as
  `text/plain`. Every reply carries the header `Content-length:2048`
  whatever the body size; failures get a `400 Bad Request` header block.

## Using it as a library

```python
from netlab.addresses import inet_aton, inet_ntoa
from netlab.calc import calculate, encode_request, decode_request
from netlab.textcalc import build_message, evaluate
from netlab.webserver import content_type

calculate([3, 4, 5], "+")                  # 12
decode_request(encode_request([1, 2], "-"))  # ([1, 2], "-")
build_message([1, 2, 3], "+")              # "3 1 2 3 +"
evaluate("3 1 2 3 +")                      # "6"
inet_ntoa(inet_aton("127.232.124.79"))     # "127.232.124.79"
content_type("index.html")                 # "text/html"
```

The multiplexing servers bind when created, report where they listen
through `address()`, handle one round of activity with `poll_once()`, run
until closed with `serve_forever()`, and release their sockets with
`close()` (or by leaving a `with` block):

```python
from netlab.event_server import EventEchoServer, Trigger

with EventEchoServer(0, "127.0.0.1", bufsize=4, trigger=Trigger.EDGE) as server:
    print(server.address())
    server.poll_once(1.0)
```

## What it does not include

- No plain greeting server or blocking one-client-at-a-time TCP echo
  server and client; the echo servers here are the `select` and selector
  based ones.
- No UDP echo server or client.
- No server that forks a process per client, and no echo log written by a
  helper process.
- No multi-client chat room or chat client.
- No tools for sending or receiving urgent (out-of-band) data or for
  peeking at received data.