"""HTTP request or response head plus body."""

from __future__ import annotations

from typing import Union

from .httptypes import HttpMethod, Version
from .httputils import need_url_decoding, parse_method, parse_status_message, trim, url_decode, url_encode
from .strings import split_string

_METHOD_NAMES = {
    HttpMethod.GET: "GET",
    HttpMethod.POST: "POST",
    HttpMethod.HEAD: "HEAD",
    HttpMethod.PUT: "PUT",
    HttpMethod.DELETE: "DELETE",
    HttpMethod.OPTIONS: "OPTIONS",
    HttpMethod.PATCH: "PATCH",
}


class HttpRequest:
    """An HTTP message: a request when ``is_request`` is true, otherwise a response.

    Header names are stored in lower case; lookups ignore case.
    """

    def __init__(self, is_request: bool = True) -> None:
        self.is_request = is_request
        self.method = HttpMethod.INVALID
        self.version = Version.UNKNOWN
        self.path = ""
        self.query = ""
        self.body = ""
        self.status_code = 0
        self.is_stream = False
        self.is_chunked = False
        self.headers: dict[str, str] = {}
        self.parameters: dict[str, str] = {}

    def add_header(self, field: str, value: str) -> None:
        """Set header ``field`` (case-insensitive) to ``value``."""
        self.headers[field.lower()] = value

    def remove_header(self, key: str) -> None:
        """Remove header ``key`` if present."""
        self.headers.pop(key.lower(), None)

    def get_header(self, field: str) -> str:
        """Value of header ``field``, or an empty string."""
        return self.headers.get(field.lower(), "")

    def make_headers(self) -> str:
        """The first line and all headers, ending with the blank line."""
        lines = [self._request_first_line() if self.is_request else self._response_first_line()]
        lines.extend(f"{k}: {v}\r\n" for k, v in self.headers.items())
        lines.append("\r\n")
        return "".join(lines)

    def set_query(self, query: str) -> None:
        """Store the query string and add the parameters it holds."""
        self.query = query
        for item in split_string(query, "&"):
            key, sep, value = item.partition("=")
            if sep:
                self.set_parameter(trim(key), trim(value))

    def set_parameter(self, key: str, value: str) -> None:
        self.parameters[key] = value

    def get_parameter(self, key: str) -> str:
        """Value of query parameter ``key``, or an empty string."""
        return self.parameters.get(key, "")

    def set_method(self, method: Union[str, HttpMethod]) -> None:
        """Set the method from an HttpMethod or an upper-case method name."""
        if isinstance(method, str):
            self.method = parse_method(method)
        else:
            self.method = HttpMethod(method)

    def set_version(self, version: Union[str, Version]) -> None:
        """Set the version from a Version or an eight-character ``HTTP/1.x`` string."""
        if not isinstance(version, str):
            self.version = Version(version)
            return
        self.version = Version.UNKNOWN
        if len(version) == 8:
            if version[7] == "1":
                self.version = Version.HTTP11
            elif version[7] == "0":
                self.version = Version.HTTP10

    def set_path(self, path: str) -> None:
        """Set the path, URL-decoding it when needed."""
        self.path = url_decode(path) if need_url_decoding(path) else path

    def append_to_buffer(self) -> str:
        """Headers followed by the body."""
        return self.make_headers() + self.body

    def _version_text(self) -> str:
        return "HTTP/1.0 " if self.version == Version.HTTP10 else "HTTP/1.1 "

    def _request_first_line(self) -> str:
        method = _METHOD_NAMES.get(self.method, "UNKNOW")
        target = self.path or "/"
        if self.parameters:
            target += "?" + "&".join(f"{k}={v}" for k, v in self.parameters.items())
        return f"{method} {url_encode(target)} {self._version_text()}\r\n"

    def _response_first_line(self) -> str:
        return f"{self._version_text()}{self.status_code} {parse_status_message(self.status_code)}\r\n"