"""Virtual screen image of the edited line, and cursor placement on it."""

from __future__ import annotations

from enum import Enum, auto
from itertools import takewhile

from wcwidth import wcwidth

__all__ = ["VirtualScreen", "visual_char", "cursor_position"]

TAB_STOP = 8

# Cell that continues a character occupying more than one column.
FILL = ""
# Marks the end of the text on a row.
END = "\0"

_HEX = "0123456789ABCDEF"


class _CharClass(Enum):
    TAB = auto()
    NEWLINE = auto()
    PRINT = auto()
    ASCII_CONTROL = auto()
    NONPRINT = auto()


def _char_width(ch: str) -> int:
    """Columns taken by ``ch`` on the terminal; unknown widths count as 0."""
    width = wcwidth(ch)
    return 0 if width < 0 else width


def _classify(ch: str) -> _CharClass:
    if ch == "\t":
        return _CharClass.TAB
    if ch == "\n":
        return _CharClass.NEWLINE
    if ch.isprintable() and wcwidth(ch) >= 0:
        return _CharClass.PRINT
    if ord(ch) < 0x20 or ord(ch) == 0x7F:
        return _CharClass.ASCII_CONTROL
    return _CharClass.NONPRINT


def visual_char(ch: str) -> str:
    """Return how ``ch`` is drawn: itself if printable, else ``^c`` or ``\\U+xxxx``."""
    if len(ch) != 1:
        raise ValueError("visual_char takes a single character")
    code = ord(ch)
    if ch.isprintable() and wcwidth(ch) >= 0:
        return ch
    if code == 0x7F:
        return "^?"
    if code < 0x20:
        return "^" + chr(code | 0o100)
    digits = 5 if code > 0xFFFF else 4
    hexpart = "".join(_HEX[(code >> (4 * k)) & 0xF] for k in reversed(range(digits)))
    return "\\U+" + hexpart


def _visual_width(ch: str) -> int:
    cls = _classify(ch)
    if cls is _CharClass.PRINT:
        return _char_width(ch)
    if cls in (_CharClass.TAB, _CharClass.NEWLINE):
        return 0
    return len(visual_char(ch))


class VirtualScreen:
    """A grid of ``height`` rows by ``width`` columns with a drawing cursor.

    Text that runs past the last row scrolls the grid up by one row.
    """

    def __init__(self, width: int = 80, height: int = 24) -> None:
        if width <= 0 or height <= 0:
            raise ValueError("screen size must be positive")
        self.width = width
        self.height = height
        self.row = 0
        self.col = 0
        self._rows = [self._blank() for _ in range(height)]

    def _blank(self) -> list[str]:
        return [END] * (self.width + 1)

    @property
    def cursor(self) -> tuple[int, int]:
        """The drawing cursor as ``(row, column)``."""
        return self.row, self.col

    def newline(self) -> None:
        """Move to the start of the next row, scrolling if on the last one."""
        self.col = 0
        if self.row + 1 >= self.height:
            first = self._rows.pop(0)
            first[0] = END
            self._rows.append(first)
        else:
            self.row += 1

    def putc(self, ch: str, shift: bool = True) -> None:
        """Draw ``ch`` at the cursor; with ``shift`` advance past it.

        A wide character that would not fit pushes itself onto the next row.
        """
        width = _char_width(ch)
        while shift and self.col > 0 and self.col + width > self.width:
            self.putc(" ", True)
        cells = self._rows[self.row]
        cells[self.col] = ch
        for offset in range(1, width):
            if self.col + offset <= self.width:
                cells[self.col + offset] = FILL
        if not shift:
            return
        self.col += width
        if self.col >= self.width:
            cells[self.width] = END
            self.newline()

    def addc(self, ch: str) -> None:
        """Draw ``ch``, expanding tabs, newlines and control characters."""
        cls = _classify(ch)
        if cls is _CharClass.TAB:
            while True:
                self.putc(" ", True)
                if self.col % TAB_STOP == 0:
                    break
        elif cls is _CharClass.NEWLINE:
            old_row = self.row
            self.putc(END, False)
            if old_row == self.row:
                self.newline()
        elif cls is _CharClass.PRINT:
            self.putc(ch, True)
        else:
            for part in visual_char(ch):
                self.putc(part, True)

    def put_literal(self, ch: str, width: int) -> None:
        """Place a literal sequence taking ``width`` columns in one cell."""
        if not ch or width <= 0:
            return
        cells = self._rows[self.row]
        cells[self.col] = ch
        span = min(width, self.width - self.col)
        for offset in range(1, span):
            cells[self.col + offset] = FILL
        self.col += width
        if self.col >= self.width:
            cells[self.width] = END
            self.newline()

    def clear(self) -> None:
        """Empty every row and put the cursor home."""
        self._rows = [self._blank() for _ in range(self.height)]
        self.row = 0
        self.col = 0

    def lines(self) -> list[str]:
        """Return the text of every row, up to its end marker."""
        return ["".join(takewhile(lambda c: c != END, cells)) for cells in self._rows]


def cursor_position(
    text: str, cursor: int, prompt_pos: tuple[int, int], width: int
) -> tuple[int, int]:
    """Return the ``(row, column)`` where ``cursor`` in ``text`` lands on screen.

    ``prompt_pos`` is the ``(row, column)`` just after the prompt.
    """
    if width <= 0:
        raise ValueError("screen width must be positive")
    cursor = max(0, min(cursor, len(text)))
    v, h = prompt_pos
    for ch in text[:cursor]:
        cls = _classify(ch)
        if cls is _CharClass.NEWLINE:
            h = 0
            v += 1
        elif cls is _CharClass.TAB:
            h = (h // TAB_STOP + 1) * TAB_STOP
        else:
            w = wcwidth(ch)
            if w > 1 and h + w > width:
                h = 0
                v += 1
            h += _visual_width(ch)
        if h >= width:
            h -= width
            v += 1
    if cursor < len(text):
        w = wcwidth(text[cursor])
        if w > 1 and h + w > width:
            h = 0
            v += 1
    return v, h