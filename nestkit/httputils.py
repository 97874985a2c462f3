"""HTTP helpers: method, status and content-type lookups, URL coding, trimming."""

from __future__ import annotations

from .httptypes import ContentType, HttpMethod, HttpStatusCode

_METHODS = {
    "GET": HttpMethod.GET,
    "PUT": HttpMethod.PUT,
    "POST": HttpMethod.POST,
    "HEAD": HttpMethod.HEAD,
    "DELETE": HttpMethod.DELETE,
    "OPTIONS": HttpMethod.OPTIONS,
}

_STATUS_MESSAGES = {
    0: "unknown",
    100: "Continue",
    101: "Switching Protocols",
    200: "OK",
    201: "Created",
    202: "Accepted",
    203: "Non Authoritative Information",
    204: "No Content",
    205: "Reset Content",
    206: "Partial Content",
    300: "Multiple Choices",
    301: "Moved Permanently",
    302: "Found",
    303: "See Other",
    304: "Not Modified",
    305: "Use Proxy",
    307: "Temporary Redirect",
    308: "Permanent Redirect",
    400: "Bad Request",
    401: "Unauthorized",
    402: "Payment Required",
    403: "Forbidden",
    404: "Not Found",
    405: "Method Not Allowed",
    406: "Not Acceptable",
    407: "Proxy Authentication Required",
    408: "Request Timeout",
    409: "Conflict",
    410: "Gone",
    411: "Length Required",
    412: "Precondition Failed",
    413: "Request Entity Too Large",
    414: "Request URI Too Large",
    415: "Unsupported Media Type",
    416: "Requested Range Not Satisfiable",
    417: "Expectation Failed",
    418: "Im A Teapot",
    421: "Misdirected Request",
    425: "Too Early",
    426: "Upgrade Required",
    428: "Precondition Required",
    429: "Too Many Requests",
    431: "Request Header Fields Too Large",
    451: "Unavailable For Legal Reasons",
    500: "Internal Server Error",
    501: "Not Implemented",
    502: "Bad Gateway",
    503: "Service Unavailable",
    504: "Gateway Timeout",
    505: "HTTP Version Not Supported",
    510: "Not Extended",
}

_STATUS_STRINGS = {
    100: "Continue",
    101: "Switching Protocols",
    200: "OK",
    201: "Created",
    202: "Accepted",
    203: "Non-Authoritative Information",
    204: "No Content",
    205: "Reset Content",
    206: "Partial Content",
    300: "Multiple Choices",
    301: "Moved Permanently",
    302: "Found",
    303: "See Other",
    304: "Not Modified",
    305: "Use Proxy",
    307: "Temporary Redirect",
    308: "Permanent Redirect",
    400: "Bad Request",
    401: "Unauthorized",
    402: "Payment Required",
    403: "Forbidden",
    404: "Not Found",
    405: "Method Not Allowed",
    406: "Not Acceptable",
    407: "Proxy Authentication Required",
    408: "Request Time-out",
    409: "Conflict",
    410: "Gone",
    411: "Length Required",
    412: "Precondition Failed",
    413: "Request Entity Too Large",
    414: "Request-URI Too Large",
    415: "Unsupported Media Type",
    416: "Requested Range Not Satisfiable",
    417: "Expectation Failed",
    418: "I'm a Teapot",
    421: "Misdirected Request",
    425: "Too Early",
    426: "Upgrade Required",
    428: "Precondition Required",
    429: "Too Many Requests",
    431: "Request Header Fields Too Large",
    451: "Unavailable For Legal Reasons",
    500: "Internal Server Error",
    501: "Not Implemented",
    502: "Bad Gateway",
    503: "Service Unavailable",
    504: "Gateway Time-out",
    505: "HTTP Version Not Supported",
    510: "Not Extended",
}

_STATUS_CLASSES = (
    (100, 200, "Informational"),
    (200, 300, "Successful"),
    (300, 400, "Redirection"),
    (400, 500, "Bad Request"),
    (500, 600, "Server Error"),
)

_CONTENT_TYPE_HEADERS = {
    ContentType.TEXT_HTML: "Content-Type: text/html; charset=utf-8\r\n",
    ContentType.APP_XFORM: "Content-Type: application/x-www-form-urlencoded\r\n",
    ContentType.TEXT_XML: "Content-Type: text/xml; charset=utf-8\r\n",
    ContentType.APP_XML: "Content-Type: application/xml; charset=utf-8\r\n",
    ContentType.APP_JSON: "Content-Type: application/json; charset=utf-8\r\n",
    ContentType.APP_MPEG_URL: "Content-Type: application/vnd.apple.mpegurl\r\n",
    ContentType.VIDEO_MP2T: "Content-Type: video/MP2T\r\n",
    ContentType.VIDEO_XFLV: "Content-Type: video/x-flv\r\n",
    ContentType.NONE: "",
}
_TEXT_PLAIN_HEADER = "Content-Type: text/plain; charset=utf-8\r\n"

_MIME_TYPES = {
    "text/html": ContentType.TEXT_HTML,
    "application/x-www-form-urlencoded": ContentType.APP_XFORM,
    "application/xml": ContentType.APP_XML,
    "application/json": ContentType.APP_JSON,
    "text/plain": ContentType.TEXT_PLAIN,
}

_EXTENSIONS = {
    "ts": ContentType.VIDEO_MP2T,
    "flv": ContentType.VIDEO_XFLV,
    "html": ContentType.TEXT_HTML,
}

_URL_SAFE = frozenset(
    b"ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789"
    b"-_.!~*'()&=/\\?"
)
_HEX_DIGITS = frozenset(b"0123456789abcdefABCDEF")
_WHITESPACE = " \t\n\v\f\r"


def parse_method(method: str) -> HttpMethod:
    """Map an upper-case method name to HttpMethod; anything else is INVALID."""
    return _METHODS.get(method, HttpMethod.INVALID)


def parse_status_code(code: int) -> HttpStatusCode:
    """Map a numeric status to HttpStatusCode; unknown numbers give UNKNOWN."""
    try:
        return HttpStatusCode(code)
    except ValueError:
        return HttpStatusCode.UNKNOWN


def parse_status_message(code: int) -> str:
    """Reason phrase used in response status lines; ``"unknown"`` if not listed."""
    return _STATUS_MESSAGES.get(code, "unknown")


def parse_content_type(content_type: str) -> ContentType:
    """Map a MIME type to ContentType; unrecognised types give NONE."""
    return _MIME_TYPES.get(content_type, ContentType.NONE)


def content_type_to_string(content_type: ContentType) -> str:
    """The full ``Content-Type`` header line for ``content_type``."""
    return _CONTENT_TYPE_HEADERS.get(content_type, _TEXT_PLAIN_HEADER)


def status_code_to_string(code: int) -> str:
    """Standard reason phrase, or a phrase for the status class of ``code``."""
    text = _STATUS_STRINGS.get(code)
    if text is not None:
        return text
    for low, high, phrase in _STATUS_CLASSES:
        if low <= code < high:
            return phrase
    return "Undefined Error"


def get_content_type(file_name: str) -> ContentType:
    """Guess the content type from a file name's extension."""
    pos = file_name.rfind(".")
    ext = file_name[pos + 1:].lower() if pos >= 0 else ""
    if not ext:
        return ContentType.NONE
    return _EXTENSIONS.get(ext, ContentType.TEXT_PLAIN)


def char_to_hex(c: int | str) -> str:
    """Two upper-case hex digits for a byte value or a one-byte character."""
    if isinstance(c, str):
        if len(c) != 1:
            raise ValueError("expected a single character")
        c = ord(c)
    if not 0 <= c <= 0xFF:
        raise ValueError(f"not a byte value: {c}")
    return f"{c:02X}"


def need_url_decoding(url: str) -> bool:
    """Whether ``url`` contains ``+`` or ``%`` and so needs decoding."""
    return "+" in url or "%" in url


def url_decode(url: str) -> str:
    """Decode ``+`` to space and valid ``%XX`` escapes; stray ``%`` is kept."""
    data = url.encode("utf-8", "surrogateescape")
    out = bytearray()
    length = len(data)
    i = 0
    while i < length:
        byte = data[i]
        if byte == ord("+"):
            out.append(ord(" "))
        elif byte == ord("%"):
            if (
                i + 2 < length
                and data[i + 1] in _HEX_DIGITS
                and data[i + 2] in _HEX_DIGITS
            ):
                out.append(int(data[i + 1:i + 3], 16))
                i += 2
            else:
                out.append(byte)
        else:
            out.append(byte)
        i += 1
    return out.decode("utf-8", "surrogateescape")


def url_encode(src: str) -> str:
    """Encode ``src``: space becomes ``+``, unsafe bytes become ``%XX``."""
    parts: list[str] = []
    for byte in src.encode("utf-8", "surrogateescape"):
        if byte == ord(" "):
            parts.append("+")
        elif byte in _URL_SAFE:
            parts.append(chr(byte))
        else:
            parts.append("%" + char_to_hex(byte))
    return "".join(parts)


def trim(s: str) -> str:
    """Strip leading and trailing ASCII whitespace."""
    return s.strip(_WHITESPACE)