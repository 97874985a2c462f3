# nestkit

nestkit provides the parts of a small HTTP server that do not touch sockets.
These are an incremental HTTP/1.x parser, a request/response object, a
per-connection send state machine, rotating file logs, periodic tasks and
JSON configuration. It has no dependencies outside the standard library.

## Modules

- `nestkit.parser`: `HttpParser` takes bytes off the front of a `bytearray`
  and returns a `ParserState`. It handles `Content-Length` bodies,
  `Transfer-Encoding: chunked` bodies and streamed bodies. After parsing,
  `parser.request` holds the parsed head and `parser.chunk` holds the body
  data collected so far, as a `Packet`. After an error, `parser.reason` is
  `HttpStatusCode.BAD_REQUEST`.
- `nestkit.request`: `HttpRequest` is a request when `is_request` is true and
  a response otherwise. Header names are stored in lower case. It also covers
  query parameters (`set_query`, `get_parameter`), method, version, path
  (URL-decoded when needed), status code and body. `make_headers()` returns
  the first line and the headers; `append_to_buffer()` appends the body.
- `nestkit.context`:
  - `HttpContext` ties an `HttpParser` to one connection. `parse(buf)` hands
    each complete message or body chunk to the handler's `on_request` and
    returns how many it delivered. It calls `force_close()` on a parse error.
  - The `post_*` methods and `write_complete(conn)` send plain messages,
    header-then-packet messages, chunked bodies and streamed bodies in
    order, tracked by `PostState`.
  - `HttpHandler` is the abstract base for the event receiver.
  - The connection only needs `send(data: bytes)` and `force_close()`.
- `nestkit.httputils`: method, status code and content-type lookups
  (`parse_method`, `parse_status_code`, `parse_status_message`,
  `status_code_to_string`, `parse_content_type`, `content_type_to_string`,
  `get_content_type`), plus `url_encode`, `url_decode`, `need_url_decoding`,
  `char_to_hex` and `trim`.
- `nestkit.httptypes`: the `HttpStatusCode`, `Version`, `ContentType` and
  `HttpMethod` enumerations.
- `nestkit.packet`: `Packet` is a fixed-capacity byte buffer. `append`
  copies in only what fits. It carries `PacketType` flags and
  `index`/`timestamp`/`ext` metadata.
- `nestkit.strings`: path and split helpers (`file_path`, `file_name`,
  `extension`, `split_string`, `split_string_fsm`, ...).
- `nestkit.clock`: `now_ms`, `now`, `now_parts` and `iso_time`.
- `nestkit.filelog`: `FileLog` is an append-only log file. `rotate` renames
  the file and continues writing through the same descriptor.
- `nestkit.filemgr`: `FileMgr` keeps one `FileLog` per path. `on_check()`
  rotates logs by minute, hour or day, according to their `rotate_type`.
- `nestkit.logger`:
  - `Logger` has a level threshold. `set_logger` and `get_logger` install and
    return the process-wide logger.
  - `trace`, `debug`, `info`, `warn` and `error` write formatted lines.
    `TRACE`/`DEBUG`/`INFO` lines need an installed logger whose level lets
    them through.
  - `WARN`/`ERROR` lines are always written, to standard output when no
    logger is installed.
- `nestkit.task`: `Task` is a callback that becomes due after `interval`
  milliseconds. `TaskMgr.on_work()` runs overdue tasks and drops those that
  did not call `restart()`.
- `nestkit.config`: `Config` and `ConfigMgr` load a JSON service
  configuration.

## Install

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Parsing a request

```python
from nestkit.parser import HttpParser, ParserState

parser = HttpParser()
buf = bytearray(b"GET /index.html?a=1 HTTP/1.1\r\nHost: example.com\r\n\r\n")
state = parser.parse(buf)
if state == ParserState.EXPECT_HTTP_COMPLETE:
    req = parser.request
    print(req.path, req.get_parameter("a"), req.get_header("host"))
    # /index.html 1 example.com
```

## Building a response

```python
from nestkit.request import HttpRequest

res = HttpRequest(is_request=False)
res.status_code = 200
res.add_header("server", "nest")
res.add_header("content-length", "0")
wire = res.append_to_buffer()
# "HTTP/1.1 200 OK\r\nserver: nest\r\ncontent-length: 0\r\n\r\n"
```

## Connecting a transport

```python
from nestkit.context import HttpContext, HttpHandler

class Handler(HttpHandler):
    def on_new_connection(self, conn): ...
    def on_connection_destroy(self, conn): ...
    def on_recv(self, conn, data): ...
    def on_active(self, conn): ...
    def on_sent(self, conn): ...
    def on_sent_next_chunk(self, conn): return False
    def on_request(self, conn, req, packet):
        res = HttpRequest(is_request=False)
        res.status_code = 200
        res.add_header("content-length", "0")
        context.post_request(res)

context = HttpContext(conn, Handler())   # conn has send() and force_close()
context.parse(incoming_bytearray)        # on data received
context.write_complete(conn)             # when the transport finished a write
```

## Configuration

`Config().load(path)` reads a JSON file with this shape. `ConfigMgr().load_config(path)`
does the same and then makes the result its current `config`.

```json
{
  "name": "nest",
  "threads": 2,
  "cpu_start": 0,
  "cpus": 1,
  "log": {"level": "DEBUG", "path": "./logs/", "name": "nest.log", "rotate": "DAY"},
  "services": [{"addr": "0.0.0.0", "port": 8080, "protocol": "http", "transport": "tcp"}]
}
```

`load` raises `ConfigError` in these cases:

- the file cannot be read or parsed;
- the `services` section is missing or is not a list;
- a value has the wrong type;
- a port is outside 0 to 65535.

## Log rotation

```python
from nestkit.filemgr import FileMgr
from nestkit.filelog import RotateType

mgr = FileMgr()
log = mgr.get_file_log("app.log")   # raises OSError if it cannot be opened
log.rotate_type = RotateType.HOUR
log.write_log("hello\n")
mgr.on_check()  # call periodically, for example from a Task
```

When the hour changes, `app.log` is renamed to `app_YYYY-MM-DDTHH.log` and
writing continues in a fresh `app.log`.

## What it does not do

nestkit has no sockets, no event loop, no TCP server or client and no
command-line program. To serve HTTP, you supply a transport that calls
`HttpContext.parse` when data arrives and `HttpContext.write_complete` when a
write finishes. The transport must also provide `send` and `force_close`.