"""Key-sequence escape parsing and dispatch of editor commands."""

from __future__ import annotations

import shlex
from typing import Any, Callable, Sequence

from lineedit.search import el_match

__all__ = ["CommandTable", "parse_escape", "parse_string"]

_SIMPLE_ESCAPES = {
    "a": 0o007,  # bell
    "b": 0o010,  # backspace
    "t": 0o011,  # horizontal tab
    "n": 0o012,  # new line
    "v": 0o013,  # vertical tab
    "f": 0o014,  # form feed
    "r": 0o015,  # carriage return
    "e": 0o033,  # escape
}

_HEX_DIGITS = "0123456789ABCDEF"
_OCTAL_DIGITS = "01234567"


def _take(text: str, start: int, alphabet: str, limit: int) -> str:
    """Return the longest run (at most ``limit``) of ``alphabet`` chars at ``start``."""
    end = start
    while end < len(text) and end - start < limit and text[end] in alphabet:
        end += 1
    return text[start:end]


def _parse_backslash(text: str, pos: int) -> tuple[int, int]:
    """Decode the escape whose letter is at ``pos`` (just after the backslash)."""
    letter = text[pos]
    if letter in _SIMPLE_ESCAPES:
        return _SIMPLE_ESCAPES[letter], pos + 1
    if letter == "U":
        if pos + 1 >= len(text) or text[pos + 1] != "+":
            raise ValueError("\\U escape must be followed by '+'")
        digits = _take(text, pos + 2, _HEX_DIGITS, 5)
        if len(digits) < 4:
            raise ValueError("\\U+ escape needs at least four hex digits")
        code = int(digits, 16)
        if code > 0x10FFFF:
            raise ValueError("code point outside the valid character range")
        return code, pos + 2 + len(digits)
    if letter in _OCTAL_DIGITS:
        digits = _take(text, pos, _OCTAL_DIGITS, 3)
        code = int(digits, 8)
        if code > 0xFF:
            raise ValueError("octal escape larger than one byte")
        return code, pos + len(digits)
    return ord(letter), pos + 1


def parse_escape(text: str, pos: int = 0) -> tuple[str, int]:
    """Decode one character of the form ``^c``, ``\\c``, ``\\ooo`` or ``\\U+xxxx``.

    Returns the character and the index just past what was consumed.
    Raises ValueError when the escape is not valid.
    """
    if pos < 0 or pos + 1 >= len(text):
        raise ValueError("incomplete escape sequence")
    lead = text[pos]
    if lead == "\\":
        code, end = _parse_backslash(text, pos + 1)
    elif lead == "^":
        following = text[pos + 1]
        code = 0o177 if following == "?" else ord(following) & 0o237
        end = pos + 2
    else:
        code, end = ord(lead), pos + 1
    return chr(code), end


def parse_string(text: str) -> str:
    """Expand every escape in ``text`` and ``M-`` meta prefixes into raw characters.

    Raises ValueError if an escape is not valid.
    """
    out: list[str] = []
    pos = 0
    while pos < len(text):
        ch = text[pos]
        if ch in "\\^":
            decoded, pos = parse_escape(text, pos)
            out.append(decoded)
        elif ch == "M" and text[pos + 1:pos + 2] == "-" and pos + 2 < len(text):
            out.append("\033")
            pos += 2
        else:
            out.append(ch)
            pos += 1
    return "".join(out)


class CommandTable:
    """Named editor commands, dispatched from argument vectors.

    A command name may carry a ``program:`` prefix; the command then only
    runs when the prefix matches this table's program name.
    """

    def __init__(self, program: str = "") -> None:
        self.program = program
        self._commands: dict[str, Callable[[Sequence[str]], Any]] = {}

    def register(self, name: str, func: Callable[[Sequence[str]], Any]) -> None:
        """Make ``func`` run for the command ``name``; it receives the argv."""
        if not name:
            raise ValueError("command name must not be empty")
        self._commands[name] = func

    def dispatch(self, argv: Sequence[str]) -> Any:
        """Run the command named by ``argv[0]`` and return what it returned.

        Returns None without running anything when the command is
        addressed to another program. Raises ValueError for an empty
        argv and KeyError for an unknown command.
        """
        if not argv:
            raise ValueError("no command given")
        head = argv[0]
        prefix, sep, name = head.partition(":")
        if sep:
            if not prefix or not el_match(self.program, prefix):
                return None
        else:
            name = head
        try:
            func = self._commands[name]
        except KeyError:
            raise KeyError(f"unknown command {name!r}") from None
        return func(argv)

    def parse_line(self, line: str) -> Any:
        """Split ``line`` into words the way a shell would and dispatch them."""
        return self.dispatch(shlex.split(line))