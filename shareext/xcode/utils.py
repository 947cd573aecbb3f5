import re

from typing import Optional

# Strings made only of these characters are written without quotes
_UNQUOTED = re.compile(r"^[A-Za-z0-9_$/:.]+$")

# Keys of the pseudo-entries some tools add next to each object
_COMMENT_KEY = re.compile(r"_comment$")

_ESCAPES = {'"': '"', "\\": "\\", "n": "\n", "t": "\t", "r": "\r"}


def _escape(value: str) -> str:
    return (
        value.replace("\\", "\\\\")
        .replace('"', '\\"')
        .replace("\n", "\\n")
        .replace("\t", "\\t")
    )


def quote(value: str) -> str:
    if _UNQUOTED.match(value):
        return value
    return always_quote(value)


def always_quote(value: str) -> str:
    return f'"{_escape(value)}"'


def unquote(value: Optional[str]) -> Optional[str]:
    if value is None or len(value) < 2 or not value.startswith('"'):
        return value
    if not value.endswith('"'):
        return value
    body = value[1:-1]
    result = []
    chars = iter(body)
    for char in chars:
        if char == "\\":
            escaped = next(chars, "")
            result.append(_ESCAPES.get(escaped, escaped))
        else:
            result.append(char)
    return "".join(result)


def is_comment_key(key: str) -> bool:
    return bool(_COMMENT_KEY.search(key))
