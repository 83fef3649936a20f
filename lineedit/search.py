"""Pattern matching and in-line searching for the line editor."""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import IntEnum
from functools import lru_cache

__all__ = [
    "Direction",
    "SearchState",
    "el_match",
    "search_line",
    "char_search",
]

DEFAULT_PATTERN_LIMIT = 1024

_POSIX_CLASSES = {
    "alpha": "a-zA-Z",
    "digit": "0-9",
    "alnum": "a-zA-Z0-9",
    "upper": "A-Z",
    "lower": "a-z",
    "space": r" \t\n\r\f\v",
    "blank": r" \t",
    "xdigit": "0-9A-Fa-f",
    "punct": re.escape("!\"#$%&'()*+,-./:;<=>?@[\\]^_`{|}~"),
    "cntrl": r"\x00-\x1f\x7f",
    "print": r"\x20-\x7e",
    "graph": r"\x21-\x7e",
}

_INTERVAL = re.compile(r"\d+(,\d*)?")


class Direction(IntEnum):
    """Direction of a search through a line or the history."""

    FORWARD = 1
    BACKWARD = -1


def _translate_bracket(pattern: str, start: int) -> tuple[str, int]:
    """Translate a bracket expression beginning at ``start``.

    Returns the Python fragment and the index just past the closing ``]``.
    """
    n = len(pattern)
    j = start + 1
    negate = False
    if j < n and pattern[j] == "^":
        negate = True
        j += 1
    items: list[str] = []
    first = True
    while True:
        if j >= n:
            raise re.error("unmatched [")
        ch = pattern[j]
        if ch == "]" and not first:
            break
        first = False
        if ch == "[" and j + 1 < n and pattern[j + 1] in ":.=":
            kind = pattern[j + 1]
            close = pattern.find(kind + "]", j + 2)
            if close < 0:
                raise re.error("unterminated bracket class")
            name = pattern[j + 2:close]
            if kind == ":":
                if name not in _POSIX_CLASSES:
                    raise re.error(f"unknown character class {name!r}")
                items.append(_POSIX_CLASSES[name])
            else:
                if len(name) != 1:
                    raise re.error(f"unsupported collating element {name!r}")
                items.append(re.escape(name))
            j = close + 2
            continue
        items.append("\\" + ch if ch in "\\[]^" else ch)
        j += 1
    return "[" + ("^" if negate else "") + "".join(items) + "]", j + 1


def _bre_to_python(pattern: str) -> str:
    """Translate a POSIX basic regular expression into Python syntax."""
    out: list[str] = []
    n = len(pattern)
    i = 0
    # A '*' is literal at the start of the expression or of a group.
    star_literal = True
    while i < n:
        c = pattern[i]
        if c == "\\":
            if i + 1 >= n:
                raise re.error("trailing backslash")
            d = pattern[i + 1]
            i += 2
            if d == "(":
                out.append("(")
                star_literal = True
                if i < n and pattern[i] == "^":
                    out.append("^")
                    i += 1
                continue
            if d == ")":
                out.append(")")
            elif d == "{":
                close = pattern.find("\\}", i)
                if close < 0:
                    raise re.error("unterminated interval")
                body = pattern[i:close]
                if not _INTERVAL.fullmatch(body):
                    raise re.error(f"bad interval {body!r}")
                out.append("{" + body + "}")
                i = close + 2
            elif d in "123456789":
                out.append("\\" + d)
            else:
                out.append(re.escape(d))
            star_literal = False
            continue
        if c == "[":
            fragment, i = _translate_bracket(pattern, i)
            out.append(fragment)
            star_literal = False
            continue
        if c == "*" and star_literal:
            out.append(r"\*")
        elif c == "^" and i == 0:
            out.append("^")
            i += 1
            continue
        elif c == "$" and (i == n - 1 or pattern.startswith("\\)", i + 1)):
            out.append("$")
        elif c in ".*":
            out.append(c)
        else:
            out.append(re.escape(c))
        star_literal = False
        i += 1
    return "".join(out)


@lru_cache(maxsize=128)
def _compile(pattern: str) -> re.Pattern[str]:
    return re.compile(_bre_to_python(pattern))


def el_match(text: str, pattern: str) -> bool:
    """Return whether ``text`` contains ``pattern`` literally or as a basic regex.

    An invalid regular expression never matches.
    """
    if pattern in text:
        return True
    try:
        compiled = _compile(pattern)
    except re.error:
        return False
    return compiled.search(text) is not None


@dataclass
class SearchState:
    """Remembered history-search pattern and character-search settings."""

    pattern: str = ""
    pattern_direction: Direction | None = None
    char: str = ""
    char_direction: Direction = Direction.FORWARD
    till: bool = False
    max_length: int = DEFAULT_PATTERN_LIMIT

    def set_pattern(self, line: str, cursor: int) -> None:
        """Use the text before ``cursor`` as the search pattern."""
        length = max(0, min(cursor, len(line), self.max_length - 1))
        self.pattern = line[:length]

    def matches(self, text: str) -> bool:
        """Return whether ``text`` matches the current pattern."""
        return el_match(text, self.pattern)


def search_line(
    line: str, cursor: int, pattern: str, direction: Direction | int
) -> int | None:
    """Find a position from ``cursor`` where the rest of ``line`` matches.

    Backward searches go down to the start of the line, forward ones up to
    its last character. Returns the position found, or None.
    """
    direction = Direction(direction)
    if direction is Direction.BACKWARD:
        positions = range(min(cursor, len(line)), -1, -1)
    else:
        positions = range(max(cursor, 0), len(line))
    return next((pos for pos in positions if el_match(line[pos:], pattern)), None)


def char_search(
    line: str,
    cursor: int,
    ch: str,
    direction: Direction | int,
    count: int = 1,
    till: bool = False,
) -> int | None:
    """Find the ``count``-th occurrence of ``ch`` from ``cursor``.

    With ``till`` the result stops one place short of the character.
    Returns the new cursor position, or None when the search fails.
    """
    if len(ch) > 1:
        raise ValueError("char_search looks for a single character")
    if not ch or ch == "\0":
        return None
    step = int(Direction(direction))
    pos = cursor
    for _ in range(count):
        if 0 <= pos < len(line) and line[pos] == ch:
            pos += step
        while True:
            if pos >= len(line) or pos < 0:
                return None
            if line[pos] == ch:
                break
            pos += step
    if till:
        pos -= step
    return pos