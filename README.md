# simpleweb

A small web server and request-generating client that talk a minimal
HTTP/1.1 dialect over TCP port 8080. The server listens on all interfaces;
the client connects to `localhost`.

The server accepts connections and hands each one to a fixed-size
thread pool with a bounded task buffer. For every request it reads
the `Token` header (the sending device's UID) and the payload, then
answers with a JSON envelope:

```
{"code": 200, "msg": "success", "data": <payload>}
```

A GET query string such as `name=fifo-0&mode=fifo` (carried after a `?`
in the `Host` header) is turned into the JSON object
`{"name":"fifo-0","mode":"fifo"}`. A POST body is returned unchanged.
A request that cannot be parsed is answered with
`{"code": 400, "msg": "bad request"}`.

The client starts a number of worker threads that send requests in a loop
until interrupted, in one of two modes:

- **concurrent** (workload `0`): every thread POSTs a JSON body, and the
  threads wait at a shared barrier after each round.
- **FIFO** (any other workload): threads take turns under a lock, each
  sending a GET request.

If a request cannot reach the server, the client stops.

All output goes through a background logger that prints timestamped,
colour-tagged lines. Each process gets a random five-letter device UID,
which the client sends in its `Token` header.

## Installation

```
pip install .
```

## Running the server

```
simpleweb-server --threads 5 --buffer 10
```

Options:

- `--threads N`, `--thread N`, `-T N`, `-t N`: number of worker threads (default 5)
- `--buffer N`, `-B N`, `-b N`: size of the task buffer (default 10)
- `N M` with no flags: threads and buffer size, given as positional values

If the server is run without arguments, it prints its usage and exits.

## Running the client

Start the server first, then:

```
simpleweb-client --threads 5 --workload 0 --delay 2
```

Options:

- `--threads N`, `--thread N`, `-T N`, `-t N`: number of request threads (default 5)
- `--workload N`, `-W N`, `-w N`: `0` for concurrent mode, `1` for FIFO mode (default 0)
- `--delay N`, `-D N`, `-d N`: seconds to sleep between requests (default 2)
- `T W D` with no flags: threads, workload and delay, given as positional values

If the client is run without arguments, it prints its usage and exits. Press
Ctrl+C to stop either program.

## Using the library

The building blocks can be imported directly:

```python
from simpleweb.protocol import build_response, resolve_request

resolve_request(
    "GET / HTTP/1.1\r\nHost: localhost?name=a&mode=fifo\r\nToken: token\r\n\r\n"
)
# '{"name":"a","mode":"fifo"}'
```

- `simpleweb.logger`: `Logger`, the queued, threaded logger (usable as a
  context manager), the `Level` enum and `format_line`
- `simpleweb.device`: `Device`, holding the UID, logger and running flag,
  and `generate_uid`
- `simpleweb.pool`: `ThreadPool`, a fixed-size thread pool with a bounded buffer
- `simpleweb.protocol`: `get_header`, `get_load`, `params_to_json`,
  `resolve_request`, `build_get_request`, `build_post_request`,
  `build_response` and `ProtocolError`
- `simpleweb.transport`: `serve`, `send_request`, `read_request`,
  `send_response` and the `Requester` client
- `simpleweb.params`: `parse_client_args` and `parse_server_args`
- `simpleweb.client` and `simpleweb.server`: the two commands' `main`
  functions, plus `run_concurrent`, `run_fifo` and `handle_request`

## What it does not do

This is not a general HTTP server. It ignores the request path and
method-specific headers, serves no files, always closes the connection after
one response, and reads at most 2048 bytes of a request or reply. The port
(8080) and the client's target host (`localhost`) cannot be changed from the
command line.

## Running the tests

```
pip install ".[test]"
pytest
```