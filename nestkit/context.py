"""Per-connection HTTP state: parses incoming bytes and sequences outgoing writes."""

from __future__ import annotations

from abc import ABC, abstractmethod
from enum import IntEnum
from typing import Any, Optional, Protocol

from .packet import Packet
from .parser import HttpParser, ParserState
from .request import HttpRequest

CHUNK_EOF = b"0\r\n\r\n"


class Connection(Protocol):
    """What the context needs from a transport connection."""

    def send(self, data: bytes) -> Any: ...

    def force_close(self) -> Any: ...


class PostState(IntEnum):
    """Which part of an outgoing message is waiting for its write to complete."""

    INIT = 0
    HTTP = 1
    HTTP_HEADER = 2
    HTTP_BODY = 3
    HTTP_STREAM_HEADER = 4
    HTTP_STREAM_CHUNK = 5
    CHUNK_HEADER = 6
    CHUNK_LEN = 7
    CHUNK_BODY = 8
    CHUNK_EOF = 9


class HttpHandler(ABC):
    """Receives connection events and parsed HTTP messages."""

    @abstractmethod
    def on_new_connection(self, conn: Connection) -> None:
        """A connection was accepted or established."""

    @abstractmethod
    def on_connection_destroy(self, conn: Connection) -> None:
        """A connection went away."""

    @abstractmethod
    def on_recv(self, conn: Connection, data: Packet) -> None:
        """Raw data arrived for ``conn``."""

    @abstractmethod
    def on_active(self, conn: Connection) -> None:
        """The connection became active."""

    @abstractmethod
    def on_sent(self, conn: Connection) -> None:
        """A whole message has been written."""

    @abstractmethod
    def on_sent_next_chunk(self, conn: Connection) -> bool:
        """A chunk has been written and the next one may be posted."""

    @abstractmethod
    def on_request(
        self, conn: Connection, req: Optional[HttpRequest], packet: Optional[Packet]
    ) -> None:
        """A message head, body or body chunk has been parsed."""


class HttpContext:
    """Ties a parser and an outgoing-write state machine to one connection."""

    def __init__(self, conn: Connection, handler: Optional[HttpHandler]) -> None:
        self.connection = conn
        self.handler = handler
        self.parser = HttpParser()
        self.post_state = PostState.INIT
        self.header = ""
        self.header_sent = False
        self.out_packet: Optional[Packet] = None

    def _send(self, data: bytes | str) -> None:
        if isinstance(data, str):
            data = data.encode("utf-8")
        self.connection.send(data)

    def parse(self, buf: bytearray) -> int:
        """Parse what ``buf`` holds, consuming it; returns the number of deliveries.

        Each complete message or body chunk is handed to the handler's
        ``on_request``; a parse error closes the connection.
        """
        delivered = 0
        while len(buf) > 1:
            before = (len(buf), self.parser.state)
            state = self.parser.parse(buf)
            if state in (ParserState.EXPECT_HTTP_COMPLETE, ParserState.EXPECT_CHUNK_COMPLETE):
                if self.handler is not None:
                    self.handler.on_request(self.connection, self.parser.request, self.parser.chunk)
                delivered += 1
                if state == ParserState.EXPECT_CHUNK_COMPLETE and self.parser.chunk is not None:
                    self.parser.clear_for_next_chunk()
                else:
                    self.parser.clear_for_next_http()
            elif state == ParserState.EXPECT_ERROR:
                self.connection.force_close()
                break
            elif (len(buf), self.parser.state) == before:
                break
        return delivered

    def post_request(self, request: HttpRequest) -> bool:
        """Send ``request`` as a chunked head, a stream head or a whole message."""
        if request.is_chunked:
            self.post_chunk_header(request.make_headers())
        elif request.is_stream:
            self.post_stream_header(request.make_headers())
        else:
            self.post_raw(request.append_to_buffer())
        return True

    def post_raw(self, header_and_body: str) -> bool:
        """Send a complete message; False while another write is pending."""
        if self.post_state != PostState.INIT:
            return False
        self.header = header_and_body
        self.post_state = PostState.HTTP
        self._send(self.header)
        return True

    def post_stream_header(self, header: str) -> bool:
        """Send the head of a streamed body."""
        if self.post_state != PostState.INIT:
            return False
        self.header = header
        self.post_state = PostState.INIT
        self._send(self.header)
        self.header_sent = True
        return True

    def post_chunk_header(self, header: str) -> bool:
        """Send the head of a chunked body."""
        if self.post_state != PostState.INIT:
            return False
        self.header = header
        self.post_state = PostState.INIT
        self._send(self.header)
        self.header_sent = True
        return True

    def post_header_and_packet(self, header: str, packet: Packet) -> bool:
        """Send ``header``, then ``packet`` once the header write completes."""
        if self.post_state != PostState.INIT:
            return False
        self.header = header
        self.out_packet = packet
        self.post_state = PostState.HTTP_HEADER
        self._send(self.header)
        return True

    def post_chunk(self, chunk: Packet) -> None:
        """Send one chunk: its length line now, its data when that write completes."""
        self.out_packet = chunk
        if not self.header_sent:
            self.post_state = PostState.CHUNK_HEADER
            self._send(self.header)
            self.header_sent = True
        else:
            self.post_state = PostState.CHUNK_LEN
            self.header = "%X\r\n" % chunk.size
            self._send(self.header)

    def post_eof_chunk(self) -> None:
        """Send the terminating zero-length chunk."""
        self.post_state = PostState.CHUNK_EOF
        self._send(CHUNK_EOF)

    def post_stream_chunk(self, packet: Packet) -> bool:
        """Send stream data (or the pending head first); False while busy."""
        if self.post_state != PostState.INIT:
            return False
        self.out_packet = packet
        if not self.header_sent:
            self.post_state = PostState.HTTP_STREAM_HEADER
            self._send(self.header)
            self.header_sent = True
        else:
            self.post_state = PostState.HTTP_STREAM_CHUNK
            self._send(packet.data)
        return True

    def write_complete(self, conn: Connection) -> None:
        """Advance the write state machine after the transport finished a write."""
        state = self.post_state
        handler = self.handler
        if state == PostState.INIT:
            return
        if state in (PostState.HTTP, PostState.HTTP_BODY, PostState.CHUNK_EOF):
            self.post_state = PostState.INIT
            if handler is not None:
                handler.on_sent(conn)
        elif state == PostState.HTTP_HEADER:
            self.post_state = PostState.HTTP_BODY
            self._send(self.out_packet.data)
        elif state == PostState.CHUNK_HEADER:
            self.post_state = PostState.CHUNK_LEN
            if handler is not None:
                handler.on_sent_next_chunk(conn)
        elif state == PostState.CHUNK_LEN:
            self.post_state = PostState.CHUNK_BODY
            self._send(self.out_packet.data)
        elif state in (
            PostState.CHUNK_BODY,
            PostState.HTTP_STREAM_HEADER,
            PostState.HTTP_STREAM_CHUNK,
        ):
            self.post_state = PostState.INIT
            if handler is not None:
                handler.on_sent_next_chunk(conn)