"""RFC 6901 JSON Pointer helpers."""

from __future__ import annotations

import re
from typing import Optional

_ARRAY_INDEX_RE = re.compile(r"0|[1-9][0-9]*")
_BAD_ESCAPE_RE = re.compile(r"~(?![01])")


def escape_token(token: str) -> str:
    return token.replace("~", "~0").replace("/", "~1")


def unescape_token(token: str) -> str:
    # Order matters: "~01" must decode to "~1", not "/".
    return token.replace("~1", "/").replace("~0", "~")


def is_valid_pointer(path: object) -> bool:
    if not isinstance(path, str):
        return False
    if path == "":
        return True
    return path.startswith("/") and _BAD_ESCAPE_RE.search(path) is None


def parse_json_pointer(path: str) -> list[str]:
    """
    Split a pointer into unescaped reference tokens.

    ``""`` is the whole document and yields no tokens; ``"/"`` yields the
    single empty-string key.

    Raises:
        ValueError: if ``path`` is not a valid pointer.
    """
    if not is_valid_pointer(path):
        raise ValueError(f"Invalid JSON Pointer: {path!r}")
    if path == "":
        return []
    return [unescape_token(tok) for tok in path[1:].split("/")]


def format_json_pointer(tokens: list[str]) -> str:
    return "".join("/" + escape_token(str(tok)) for tok in tokens)


def parse_array_index(token: str) -> Optional[int]:
    """Return the index for a canonical unsigned base-10 token, else None."""
    if _ARRAY_INDEX_RE.fullmatch(token) is None:
        return None
    return int(token)


def is_proper_prefix(prefix: list[str], tokens: list[str]) -> bool:
    return len(prefix) < len(tokens) and tokens[: len(prefix)] == prefix
