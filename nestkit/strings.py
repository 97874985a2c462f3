"""Small string and path helpers."""

from __future__ import annotations

_SEPARATORS = "/\\"


def starts_with(s: str, sub: str) -> bool:
    """Return True if ``s`` begins with ``sub``; an empty ``sub`` always matches."""
    if not sub:
        return True
    if not s:
        return False
    return s.startswith(sub)


def ends_with(s: str, sub: str) -> bool:
    """Return True if ``s`` ends with ``sub``; an empty ``sub`` always matches."""
    if not sub:
        return True
    if not s:
        return False
    return s.endswith(sub)


def _last_separator(path: str) -> int:
    return max(path.rfind(sep) for sep in _SEPARATORS)


def file_path(path: str) -> str:
    """Return the directory part of ``path`` without the trailing separator, or ``"./"``."""
    pos = _last_separator(path)
    if pos >= 0:
        return path[:pos]
    return "./"


def file_name_ext(path: str) -> str:
    """Return the last path component including its extension."""
    pos = _last_separator(path)
    if 0 <= pos and pos + 1 < len(path):
        return path[pos + 1:]
    return path


def file_name(path: str) -> str:
    """Return the last path component without its extension."""
    name = file_name_ext(path)
    pos = name.rfind(".")
    if pos > 0:
        return name[:pos]
    return name


def extension(path: str) -> str:
    """Return the extension of the last path component, or an empty string."""
    name = file_name_ext(path)
    pos = name.rfind(".")
    if pos > 0 and pos + 1 < len(name):
        return name[pos + 1:]
    return ""


def split_string(s: str, delimiter: str) -> list[str]:
    """Split ``s`` on ``delimiter``, dropping one trailing empty field.

    An empty delimiter yields an empty list.
    """
    if not delimiter:
        return []
    parts = s.split(delimiter)
    if parts[-1] == "":
        parts.pop()
    return parts


def split_string_fsm(s: str, delimiter: str) -> list[str]:
    """Split ``s`` on a single delimiter character, keeping inner empty fields."""
    if len(delimiter) != 1:
        raise ValueError("delimiter must be a single character")
    result: list[str] = []
    current: list[str] = []
    for ch in s:
        if ch == delimiter:
            result.append("".join(current))
            current.clear()
        else:
            current.append(ch)
    if current:
        result.append("".join(current))
    return result