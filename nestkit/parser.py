"""Incremental parser for HTTP requests and responses."""

from __future__ import annotations

import re
from enum import IntEnum
from typing import Optional

from .httptypes import HttpMethod, HttpStatusCode
from .packet import Packet
from .request import HttpRequest
from .strings import split_string

CRLFCRLF = b"\r\n\r\n"
CRLF = b"\r\n"
MAX_BODY_SIZE = 64 * 1024
MAX_CHUNK_SIZE = 1024 * 1024
MAX_CHUNK_LINE = 32

_HEX_NUMBER = re.compile(r"\s*([+-]?)(?:0[xX](?=[0-9a-fA-F]))?([0-9a-fA-F]*)")
_DEC_NUMBER = re.compile(r"\s*([+-]?\d+)")
_CONTENT_LENGTH = re.compile(r"\s*\+?(\d+)")


class ParserState(IntEnum):
    EXPECT_HEADERS = 0
    EXPECT_NORMAL_BODY = 1
    EXPECT_STREAM_BODY = 2
    EXPECT_HTTP_COMPLETE = 3
    EXPECT_CHUNK_LEN = 4
    EXPECT_CHUNK_BODY = 5
    EXPECT_CHUNK_COMPLETE = 6
    EXPECT_LAST_EMPTY_CHUNK = 7
    EXPECT_CONTINUE = 8
    EXPECT_ERROR = 9


def _parse_hex(text: str) -> int:
    match = _HEX_NUMBER.match(text)
    digits = match.group(2)
    if not digits:
        return 0
    value = int(digits, 16)
    return -value if match.group(1) == "-" else value


def _parse_int(text: str) -> int:
    match = _DEC_NUMBER.match(text)
    return int(match.group(1)) if match else 0


class HttpParser:
    """Consumes bytes from the front of a bytearray and tracks the parse state.

    ``request`` holds the parsed head, ``chunk`` the body data collected so
    far and ``reason`` the status to answer with after an error.
    """

    def __init__(self) -> None:
        self.state = ParserState.EXPECT_HEADERS
        self.reason = HttpStatusCode.UNKNOWN
        self.request: Optional[HttpRequest] = None
        self.chunk: Optional[Packet] = None
        self._header = ""
        self._chunk_length = 0
        self._content_length = 0
        self._is_stream = False
        self._is_chunked = False
        self._is_request = True

    def _fail(self) -> ParserState:
        self.reason = HttpStatusCode.BAD_REQUEST
        self.state = ParserState.EXPECT_ERROR
        return self.state

    def parse(self, buf: bytearray) -> ParserState:
        """Parse what ``buf`` holds, removing the bytes used; returns the state."""
        if not buf:
            return self.state
        state = self.state
        if state == ParserState.EXPECT_HEADERS:
            if len(buf) <= len(CRLFCRLF):
                return ParserState.EXPECT_CONTINUE
            end = buf.find(CRLFCRLF)
            if end < 0:
                if len(buf) > MAX_BODY_SIZE:
                    return self._fail()
                return ParserState.EXPECT_CONTINUE
            self._header = bytes(buf[:end]).decode("latin-1")
            del buf[:end + len(CRLFCRLF)]
            self._parse_headers()
        elif state == ParserState.EXPECT_NORMAL_BODY:
            self._parse_normal_body(buf)
        elif state == ParserState.EXPECT_STREAM_BODY:
            self._parse_stream(buf)
        elif state == ParserState.EXPECT_CHUNK_LEN:
            end = buf.find(CRLF)
            if end < 0:
                if len(buf) > MAX_CHUNK_LINE:
                    buf.clear()
                    return self._fail()
                return self.state
            self._chunk_length = _parse_hex(bytes(buf[:end]).decode("latin-1"))
            del buf[:end + len(CRLF)]
            if self._chunk_length > MAX_CHUNK_SIZE or self._chunk_length < 0:
                return self._fail()
            if self._chunk_length == 0:
                self.state = ParserState.EXPECT_LAST_EMPTY_CHUNK
            else:
                self.state = ParserState.EXPECT_CHUNK_BODY
        elif state == ParserState.EXPECT_CHUNK_BODY:
            self._parse_chunk(buf)
        elif state == ParserState.EXPECT_LAST_EMPTY_CHUNK:
            end = buf.find(CRLF)
            if end >= 0:
                del buf[:end + len(CRLF)]
                self.chunk = None
                self.state = ParserState.EXPECT_CHUNK_COMPLETE
        return self.state

    def clear_for_next_http(self) -> None:
        """Get ready for the next message on the same connection."""
        self.state = ParserState.EXPECT_HEADERS
        self._header = ""
        self.request = None
        self._content_length = -1
        self.chunk = None

    def clear_for_next_chunk(self) -> None:
        """Get ready for the next chunk of a chunked or streamed body."""
        if self._is_chunked:
            self.state = ParserState.EXPECT_CHUNK_LEN
            self._chunk_length = -1
        elif self._is_stream:
            self.state = ParserState.EXPECT_STREAM_BODY
        else:
            self.state = ParserState.EXPECT_HEADERS
            self._chunk_length = -1
        self.chunk = None

    def _fill(self, buf: bytearray) -> int:
        taken = self.chunk.append(buf)
        del buf[:taken]
        return taken

    def _parse_stream(self, buf: bytearray) -> None:
        if self.chunk is None:
            self.chunk = Packet.new(MAX_BODY_SIZE)
        self._fill(buf)
        if self.chunk.space == 0:
            self.state = ParserState.EXPECT_CHUNK_COMPLETE

    def _parse_normal_body(self, buf: bytearray) -> None:
        if self.chunk is None:
            self.chunk = Packet.new(self._content_length)
        self._content_length -= self._fill(buf)
        if self._content_length == 0:
            self.state = ParserState.EXPECT_HTTP_COMPLETE

    def _parse_chunk(self, buf: bytearray) -> None:
        if self.chunk is None:
            self.chunk = Packet.new(self._chunk_length)
        self._chunk_length -= self._fill(buf)
        if self._chunk_length == 0 or self.chunk.space == 0:
            self.state = ParserState.EXPECT_CHUNK_COMPLETE

    def _parse_headers(self) -> None:
        lines = split_string(self._header, "\r\n")
        if not lines:
            self._fail()
            return
        self._process_method_line(lines[0])
        if self.state == ParserState.EXPECT_ERROR:
            return
        req = self.request
        for line in lines[1:]:
            key, sep, value = line.partition(":")
            if sep:
                req.add_header(key, value.strip())

        length = req.get_header("content-length")
        if length:
            match = _CONTENT_LENGTH.match(length)
            if match is None:
                self._fail()
                return
            self._content_length = int(match.group(1))
            if self._content_length == 0:
                self.state = ParserState.EXPECT_HTTP_COMPLETE
            else:
                self.state = ParserState.EXPECT_NORMAL_BODY
        elif req.get_header("transfer-encoding") == "chunked":
            self._is_chunked = True
            req.is_chunked = True
            self.state = ParserState.EXPECT_CHUNK_LEN
        elif (not self._is_request and req.status_code != 200) or (
            self._is_request
            and req.method in (HttpMethod.GET, HttpMethod.HEAD, HttpMethod.OPTIONS)
        ):
            self._chunk_length = 0
            self.state = ParserState.EXPECT_HTTP_COMPLETE
        else:
            self._content_length = -1
            self._is_stream = True
            req.is_stream = True
            self.state = ParserState.EXPECT_STREAM_BODY

    def _process_method_line(self, line: str) -> None:
        parts = split_string(line, " ")
        if len(parts) != 3:
            self._fail()
            return
        self._is_request = not parts[0].lower().startswith("http")
        req = HttpRequest(self._is_request)
        self.request = req
        if self._is_request:
            req.set_method(parts[0])
            path, sep, query = parts[1].partition("?")
            req.set_path(path)
            if sep:
                req.set_query(query)
            req.set_version(parts[2])
        else:
            req.set_version(parts[0])
            req.status_code = _parse_int(parts[1])