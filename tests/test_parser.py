from nestkit.httptypes import HttpMethod, HttpStatusCode
from nestkit.parser import HttpParser, ParserState


def test_empty_buffer_returns_current_state():
    parser = HttpParser()
    assert parser.parse(bytearray()) == ParserState.EXPECT_HEADERS


def test_get_request_completes():
    buf = bytearray(b"GET /index.html?x=1 HTTP/1.1\r\nHost: example.com\r\n\r\n")
    parser = HttpParser()
    assert parser.parse(buf) == ParserState.EXPECT_HTTP_COMPLETE
    req = parser.request
    assert req.is_request
    assert req.method == HttpMethod.GET
    assert req.path == "/index.html"
    assert req.get_parameter("x") == "1"
    assert req.get_header("host") == "example.com"
    assert buf == bytearray()


def test_incomplete_headers_continue():
    data = b"GET / HTTP/1.1\r\nHost: example.com\r\n"
    buf = bytearray(data)
    parser = HttpParser()
    assert parser.parse(buf) == ParserState.EXPECT_CONTINUE
    assert bytes(buf) == data


def test_content_length_body():
    buf = bytearray(b"POST /up HTTP/1.1\r\nContent-Length: 5\r\n\r\nhello")
    parser = HttpParser()
    assert parser.parse(buf) == ParserState.EXPECT_NORMAL_BODY
    assert parser.parse(buf) == ParserState.EXPECT_HTTP_COMPLETE
    assert parser.chunk.data == b"hello"
    assert parser.request.method == HttpMethod.POST


def test_body_split_across_reads():
    parser = HttpParser()
    buf = bytearray(b"POST /up HTTP/1.1\r\nContent-Length: 5\r\n\r\nhel")
    parser.parse(buf)
    assert parser.parse(buf) == ParserState.EXPECT_NORMAL_BODY
    buf += b"lo"
    assert parser.parse(buf) == ParserState.EXPECT_HTTP_COMPLETE
    assert parser.chunk.data == b"hello"


def test_zero_content_length_completes():
    buf = bytearray(b"POST /up HTTP/1.1\r\nContent-Length: 0\r\n\r\n")
    assert HttpParser().parse(buf) == ParserState.EXPECT_HTTP_COMPLETE


def test_ok_response_without_length_streams():
    parser = HttpParser()
    buf = bytearray(b"HTTP/1.1 200 OK\r\nServer: nest\r\n\r\n")
    assert parser.parse(buf) == ParserState.EXPECT_STREAM_BODY
    assert parser.request.is_stream
    buf += b"abc"
    assert parser.parse(buf) == ParserState.EXPECT_STREAM_BODY
    assert parser.chunk.data == b"abc"


def test_head_request_without_body_completes():
    buf = bytearray(b"HEAD / HTTP/1.0\r\nHost: example.com\r\n\r\n")
    parser = HttpParser()
    assert parser.parse(buf) == ParserState.EXPECT_HTTP_COMPLETE
    assert parser.request.method == HttpMethod.HEAD


def test_bad_method_line_is_error():
    buf = bytearray(b"GARBAGE\r\nHost: example.com\r\n\r\n")
    parser = HttpParser()
    assert parser.parse(buf) == ParserState.EXPECT_ERROR
    assert parser.reason == HttpStatusCode.BAD_REQUEST


def test_invalid_content_length_is_error():
    buf = bytearray(b"POST / HTTP/1.1\r\nContent-Length: abc\r\n\r\n")
    parser = HttpParser()
    assert parser.parse(buf) == ParserState.EXPECT_ERROR
    assert parser.reason == HttpStatusCode.BAD_REQUEST


def test_oversized_header_is_error():
    buf = bytearray(b"GET / HTTP/1.1\r\nX: " + b"a" * (64 * 1024 + 1))
    parser = HttpParser()
    assert parser.parse(buf) == ParserState.EXPECT_ERROR
    assert parser.reason == HttpStatusCode.BAD_REQUEST


def test_chunked_body():
    buf = bytearray(b"POST /u HTTP/1.1\r\nTransfer-Encoding: chunked\r\n\r\n5\r\nhello\r\n")
    parser = HttpParser()
    assert parser.parse(buf) == ParserState.EXPECT_CHUNK_LEN
    assert parser.request.is_chunked
    assert parser.parse(buf) == ParserState.EXPECT_CHUNK_BODY
    assert parser.parse(buf) == ParserState.EXPECT_CHUNK_COMPLETE
    assert parser.chunk.data == b"hello"
    parser.clear_for_next_chunk()
    assert parser.state == ParserState.EXPECT_CHUNK_LEN
    assert parser.chunk is None


def test_last_empty_chunk():
    buf = bytearray(b"POST /u HTTP/1.1\r\nTransfer-Encoding: chunked\r\n\r\n0\r\n\r\n")
    parser = HttpParser()
    assert parser.parse(buf) == ParserState.EXPECT_CHUNK_LEN
    assert parser.parse(buf) == ParserState.EXPECT_LAST_EMPTY_CHUNK
    assert parser.parse(buf) == ParserState.EXPECT_CHUNK_COMPLETE
    assert parser.chunk is None
    assert buf == bytearray()


def test_chunk_too_large_is_error():
    buf = bytearray(b"POST /u HTTP/1.1\r\nTransfer-Encoding: chunked\r\n\r\nFFFFFF\r\n")
    parser = HttpParser()
    parser.parse(buf)
    assert parser.parse(buf) == ParserState.EXPECT_ERROR
    assert parser.reason == HttpStatusCode.BAD_REQUEST


def test_long_chunk_line_without_crlf_is_error():
    buf = bytearray(b"POST /u HTTP/1.1\r\nTransfer-Encoding: chunked\r\n\r\n")
    parser = HttpParser()
    parser.parse(buf)
    buf += b"1" * 40
    assert parser.parse(buf) == ParserState.EXPECT_ERROR
    assert buf == bytearray()


def test_clear_for_next_http_allows_another_message():
    parser = HttpParser()
    buf = bytearray(b"GET /a HTTP/1.1\r\n\r\nGET /b HTTP/1.1\r\nHost: example.com\r\n\r\n")
    first = parser.parse(buf)
    assert first == ParserState.EXPECT_HTTP_COMPLETE
    assert parser.request.path == "/a"
    parser.clear_for_next_http()
    assert parser.request is None
    assert parser.state == ParserState.EXPECT_HEADERS
    assert parser.parse(buf) == ParserState.EXPECT_HTTP_COMPLETE
    assert parser.request.path == "/b"