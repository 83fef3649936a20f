"""Minimal terminal operations that turn one displayed line into another."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import Sequence, Union

__all__ = ["OpKind", "Op", "copy_and_pad", "update_line", "diff_display"]

# Smallest run of unchanged characters worth keeping by inserting or deleting.
MIN_END_KEEP = 4

_NUL = "\0"


class OpKind(Enum):
    """Kinds of terminal operation produced by a line update."""

    MOVE_TO_LINE = auto()
    MOVE_TO_CHAR = auto()
    OVERWRITE = auto()
    INSERT_WRITE = auto()
    DELETE_CHARS = auto()
    CLEAR_EOL = auto()


@dataclass(frozen=True)
class Op:
    """One terminal operation: a row or column, a count, or text to write."""

    kind: OpKind
    value: Union[int, str]


def _at(text: str, index: int) -> str:
    """Character at ``index``, or NUL past the end of ``text``."""
    return text[index] if 0 <= index < len(text) else _NUL


def _until_nul(text: str) -> str:
    return text.split(_NUL, 1)[0]


def copy_and_pad(text: str, width: int) -> str:
    """Return ``text`` cut or padded with spaces to exactly ``width`` columns."""
    if width < 0:
        raise ValueError("width must not be negative")
    return _until_nul(text)[:width].ljust(width)


def _strip_trailing_blanks(text: str, floor: int) -> int:
    end = len(text)
    while end > floor and text[end - 1] == " ":
        end -= 1
    return end


def _clear_eol(fx: int, sx: int, diff: int) -> Op:
    diff = max(diff, abs(fx), abs(sx))
    return Op(OpKind.CLEAR_EOL, diff)


def update_line(
    old: str,
    new: str,
    row: int,
    width: int,
    can_insert: bool = True,
    can_delete: bool = True,
) -> list[Op]:
    """Return the operations that redraw row ``row`` from ``old`` to ``new``.

    The update keeps the common start and end of the two lines and, where
    the terminal allows it, inserts or deletes characters to shift a
    common middle part instead of rewriting it. An empty list means the
    lines already look the same.
    """
    old = _until_nul(old)
    new = _until_nul(new)

    first = 0
    while first < len(old) and first < len(new) and old[first] == new[first]:
        first += 1
    ofd = nfd = first

    oe = _strip_trailing_blanks(old, ofd)
    ne = _strip_trailing_blanks(new, nfd)
    old = old[:oe]
    new = new[:ne]

    if ofd >= oe and nfd >= ne:
        return []

    # Find the start of the common tail.
    o, n = oe, ne
    while o > ofd and n > nfd:
        o -= 1
        n -= 1
        if old[o] != new[n]:
            break
    ols, nls = o + 1, n + 1

    osb = ose = ols
    nsb = nse = nls

    # Case 1: characters were inserted; look for old[ofd] in the new text.
    if ofd < oe:
        c = old[ofd]
        for n in range(nfd, nls):
            if _at(new, n) != c:
                continue
            o, p = ofd, n
            while p < nls and o < ols and _at(old, o) == _at(new, p):
                o += 1
                p += 1
            if (nse - nsb) < (p - n) and 2 * (p - n) > n - nfd:
                nsb, nse, osb, ose = n, p, ofd, o

    # Case 2: characters were deleted; look for new[nfd] in the old text.
    if nfd < ne:
        c = new[nfd]
        for o in range(ofd, ols):
            if _at(old, o) != c:
                continue
            n, p = nfd, o
            while p < ols and n < nls and _at(old, p) == _at(new, n):
                p += 1
                n += 1
            if (ose - osb) < (p - o) and 2 * (p - o) > o - ofd:
                nsb, nse, osb, ose = nfd, n, o, p

    # A short common tail is not worth keeping.
    if (oe - ols) < MIN_END_KEEP:
        ols, nls = oe, ne

    fx = (nsb - nfd) - (osb - ofd)
    sx = (nls - nse) - (ols - ose)

    if not can_insert:
        if fx > 0:
            osb = ose = ols
            nsb = nse = nls
        if sx > 0:
            ols, nls = oe, ne
        if (ols - ofd) < (nls - nfd):
            ols, nls = oe, ne
    if not can_delete:
        if fx < 0:
            osb = ose = ols
            nsb = nse = nls
        if sx < 0:
            ols, nls = oe, ne
        if (ols - ofd) > (nls - nfd):
            ols, nls = oe, ne

    if (ose - osb) < MIN_END_KEEP:
        osb = ose = ols
        nsb = nse = nls

    fx = (nsb - nfd) - (osb - ofd)
    sx = (nls - nse) - (ols - ose)

    ops: list[Op] = [Op(OpKind.MOVE_TO_LINE, row)]

    def overwrite(start: int, end: int) -> None:
        if end > start:
            ops.append(Op(OpKind.OVERWRITE, new[start:end]))

    def insert(start: int, count: int) -> None:
        ops.append(Op(OpKind.INSERT_WRITE, new[start:start + count]))

    last_useful = oe if ols != oe else ose

    if nsb != nfd and fx > 0 and last_useful + fx <= width:
        ops.append(Op(OpKind.MOVE_TO_CHAR, nfd))
        if nsb != ne:
            insert(nfd, fx)
            overwrite(nfd + fx, nsb)
        else:
            overwrite(nfd, nsb)
            return ops
    elif fx < 0:
        ops.append(Op(OpKind.MOVE_TO_CHAR, ofd))
        if osb != oe:
            ops.append(Op(OpKind.DELETE_CHARS, -fx))
            overwrite(nfd, nsb)
        else:
            overwrite(nfd, nsb)
            ops.append(_clear_eol(fx, sx, oe - ne))
            return ops
    else:
        fx = 0

    if sx < 0 and (ose + fx) < width:
        ops.append(Op(OpKind.MOVE_TO_CHAR, ose + fx))
        if ols != oe:
            ops.append(Op(OpKind.DELETE_CHARS, -sx))
            overwrite(nse, nls)
        else:
            overwrite(nse, nls)
            ops.append(_clear_eol(fx, sx, oe - ne))

    if nsb != nfd and (osb - ofd) <= (nsb - nfd) and fx == 0:
        ops.append(Op(OpKind.MOVE_TO_CHAR, nfd))
        if nsb != ne:
            fx = (nsb - nfd) - (osb - ofd)
            if fx > 0:
                insert(nfd, fx)
            overwrite(nfd + fx, nsb)
        else:
            overwrite(nfd, nsb)

    if sx >= 0:
        ops.append(Op(OpKind.MOVE_TO_CHAR, nse))
        if ols != oe:
            if sx > 0:
                insert(nse, sx)
            overwrite(nse + sx, nls)
        else:
            overwrite(nse, nls)

    return ops


def diff_display(
    old_lines: Sequence[str],
    new_lines: Sequence[str],
    width: int,
    can_insert: bool = True,
    can_delete: bool = True,
) -> tuple[list[Op], list[str]]:
    """Return the operations that redraw ``old_lines`` as ``new_lines``.

    Also returns the resulting display: every new row padded to ``width``,
    and old rows beyond the new ones cleared to empty strings.
    """
    if width <= 0:
        raise ValueError("width must be positive")
    ops: list[Op] = []
    display: list[str] = []
    for row, new in enumerate(new_lines):
        old = old_lines[row] if row < len(old_lines) else ""
        ops.extend(update_line(old, new, row, width, can_insert, can_delete))
        display.append(copy_and_pad(new, width))
    for row in range(len(new_lines), len(old_lines)):
        ops.append(Op(OpKind.MOVE_TO_LINE, row))
        ops.append(Op(OpKind.MOVE_TO_CHAR, 0))
        ops.append(Op(OpKind.CLEAR_EOL, len(_until_nul(old_lines[row]))))
        display.append("")
    return ops, display