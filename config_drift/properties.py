"""
Java ``.properties`` parsing.

Turns the raw text of a property file into a flat ``{key: value}`` mapping.
Supports the subset real config files use: ``#``/``!`` comments, ``=``, ``:``
or whitespace separators, backslash line continuations and the usual escapes.
"""

import re
from typing import Dict, Iterator, List

_ESCAPES = {"t": "\t", "n": "\n", "r": "\r", "f": "\f"}
_UNICODE_ESCAPE = re.compile(r"[0-9a-fA-F]{4}")
_SEPARATORS = "=:"
# Only \n, \r and \r\n end a line
_LINE_BREAK = re.compile(r"\r\n|\r|\n")


def _ends_with_continuation(line: str) -> bool:
    # An odd number of trailing backslashes continues the line
    trailing = len(line) - len(line.rstrip("\\"))
    return trailing % 2 == 1


def _logical_lines(text: str) -> Iterator[str]:
    """Yield logical lines: comments and blanks dropped, continuations joined."""
    parts: List[str] = []
    for raw in _LINE_BREAK.split(text):
        line = raw.lstrip(" \t\f")
        if not parts:
            if not line or line[0] in "#!":
                continue
        if _ends_with_continuation(line):
            parts.append(line[:-1])
            continue
        parts.append(line)
        yield "".join(parts)
        parts = []
    if parts:
        yield "".join(parts)


def _unescape(text: str) -> str:
    out: List[str] = []
    i = 0
    while i < len(text):
        ch = text[i]
        if ch != "\\" or i + 1 >= len(text):
            out.append(ch)
            i += 1
            continue
        nxt = text[i + 1]
        if nxt == "u" and _UNICODE_ESCAPE.fullmatch(text[i + 2:i + 6]):
            out.append(chr(int(text[i + 2:i + 6], 16)))
            i += 6
            continue
        out.append(_ESCAPES.get(nxt, nxt))
        i += 2
    return "".join(out)


def _split_key_value(line: str):
    """Find the end of the key (first unescaped separator or whitespace)."""
    i = 0
    while i < len(line):
        ch = line[i]
        if ch == "\\":
            i += 2
            continue
        if ch in _SEPARATORS or ch in " \t\f":
            break
        i += 1
    key = line[:i]
    rest = line[i:].lstrip(" \t\f")
    if rest and rest[0] in _SEPARATORS:
        rest = rest[1:].lstrip(" \t\f")
    return key, rest


def parse_properties(text: str) -> Dict[str, str]:
    """
    Parse property-file text into an ordered mapping.

    Args:
        text: Raw file content

    Returns:
        Dict of key -> value. A key repeated later in the file overrides the
        earlier value but keeps its first position. A line with only a key
        maps to an empty string.
    """
    props: Dict[str, str] = {}
    for line in _logical_lines(text):
        key, value = _split_key_value(line)
        props[_unescape(key)] = _unescape(value)
    return props
