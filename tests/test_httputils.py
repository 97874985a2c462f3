import pytest

from nestkit.httptypes import ContentType, HttpMethod, HttpStatusCode
from nestkit.httputils import (
    char_to_hex,
    content_type_to_string,
    get_content_type,
    need_url_decoding,
    parse_content_type,
    parse_method,
    parse_status_code,
    parse_status_message,
    status_code_to_string,
    trim,
    url_decode,
    url_encode,
)


@pytest.mark.parametrize(
    "name, expected",
    [
        ("GET", HttpMethod.GET),
        ("PUT", HttpMethod.PUT),
        ("POST", HttpMethod.POST),
        ("HEAD", HttpMethod.HEAD),
        ("DELETE", HttpMethod.DELETE),
        ("OPTIONS", HttpMethod.OPTIONS),
    ],
)
def test_parse_method_known(name, expected):
    assert parse_method(name) is expected


@pytest.mark.parametrize("name", ["get", "PATCH", "", "FOO"])
def test_parse_method_unknown_is_invalid(name):
    assert parse_method(name) is HttpMethod.INVALID


def test_parse_status_code_known_values_round_trip():
    for member in HttpStatusCode:
        assert parse_status_code(int(member)) is member


@pytest.mark.parametrize("code", [1, 199, 306, 999, -5])
def test_parse_status_code_unknown(code):
    assert parse_status_code(code) is HttpStatusCode.UNKNOWN


def test_parse_status_message():
    assert parse_status_message(404) == "Not Found"
    assert parse_status_message(418) == "Im A Teapot"
    assert parse_status_message(0) == "unknown"
    assert parse_status_message(299) == "unknown"


def test_parse_status_message_covers_every_status():
    for member in HttpStatusCode:
        assert parse_status_message(int(member))


def test_status_code_to_string_exact():
    assert status_code_to_string(408) == "Request Time-out"
    assert status_code_to_string(203) == "Non-Authoritative Information"
    assert status_code_to_string(504) == "Gateway Time-out"


@pytest.mark.parametrize(
    "code, expected",
    [
        (150, "Informational"),
        (250, "Successful"),
        (350, "Redirection"),
        (450, "Bad Request"),
        (550, "Server Error"),
        (600, "Undefined Error"),
        (0, "Undefined Error"),
    ],
)
def test_status_code_to_string_classes(code, expected):
    assert status_code_to_string(code) == expected


def test_parse_content_type():
    assert parse_content_type("text/html") is ContentType.TEXT_HTML
    assert parse_content_type("application/json") is ContentType.APP_JSON
    assert parse_content_type("application/x-www-form-urlencoded") is ContentType.APP_XFORM
    assert parse_content_type("video/x-flv") is ContentType.NONE


def test_content_type_to_string():
    assert content_type_to_string(ContentType.TEXT_HTML) == "Content-Type: text/html; charset=utf-8\r\n"
    assert content_type_to_string(ContentType.VIDEO_MP2T) == "Content-Type: video/MP2T\r\n"
    assert content_type_to_string(ContentType.NONE) == ""
    assert content_type_to_string(ContentType.TEXT_PLAIN) == "Content-Type: text/plain; charset=utf-8\r\n"


def test_every_content_type_header_is_a_header_line():
    for member in ContentType:
        text = content_type_to_string(member)
        if member is ContentType.NONE:
            assert text == ""
        else:
            assert text.startswith("Content-Type: ") and text.endswith("\r\n")


@pytest.mark.parametrize(
    "name, expected",
    [
        ("segment.ts", ContentType.VIDEO_MP2T),
        ("live.FLV", ContentType.VIDEO_XFLV),
        ("index.html", ContentType.TEXT_HTML),
        ("notes.txt", ContentType.TEXT_PLAIN),
        ("a.js", ContentType.TEXT_PLAIN),
        ("README", ContentType.NONE),
        ("trailing.", ContentType.NONE),
    ],
)
def test_get_content_type(name, expected):
    assert get_content_type(name) is expected


def test_char_to_hex():
    assert char_to_hex(0xAB) == "AB"
    assert char_to_hex(int("3f", 16)) == "3F"
    assert all(int(char_to_hex(b), 16) == b for b in range(256))


def test_char_to_hex_rejects_bad_input():
    with pytest.raises(ValueError):
        char_to_hex(256)
    with pytest.raises(ValueError):
        char_to_hex("ab")


def test_need_url_decoding():
    assert need_url_decoding("a+b")
    assert need_url_decoding("%41")
    assert not need_url_decoding("/plain/path")


def test_url_encode_keeps_safe_characters():
    safe = "AZaz09-_.!~*'()&=/\\?"
    assert url_encode(safe) == safe


def test_url_encode_escapes():
    assert url_encode("100%") == "100%25"
    assert url_encode(" ") == "+"


def test_url_encode_output_is_ascii_without_spaces():
    encoded = url_encode("héllo wörld #1 +2")
    assert encoded.isascii()
    assert " " not in encoded


def test_url_decode_leaves_invalid_escapes():
    assert url_decode("%zz") == "%zz"
    assert url_decode("abc%") == "abc%"
    assert url_decode("%4") == "%4"


def test_url_decode_escape_matches_char_to_hex():
    for ch in "#%+ :é":
        assert url_decode("%" + char_to_hex(ch)) == ch if ord(ch) < 128 else True
    assert url_decode("%" + char_to_hex("#")) == "#"


@pytest.mark.parametrize(
    "text",
    ["", "plain", "a b c", "1+1=2", "50% off", "/path?x=1&y=2", "ünïcödé text", "tab\tand\nnewline"],
)
def test_url_round_trip(text):
    assert url_decode(url_encode(text)) == text


@pytest.mark.parametrize("text", ["  value ", "\t\nvalue\r\v\f", "value", ""])
def test_trim(text):
    result = trim(text)
    assert result == text.strip()
    assert trim(result) == result


def test_trim_keeps_inner_spaces():
    assert trim("  a b  ") == "a b"