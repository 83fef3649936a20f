import pytest

from lineedit.lineupdate import (
    Op,
    OpKind,
    copy_and_pad,
    diff_display,
    update_line,
)

WIDTH = 80


def _apply(rows, ops, width):
    """Play terminal operations on a dict of row -> list of characters."""
    screen = {r: list(text) for r, text in rows.items()}
    row = col = 0
    for op in ops:
        line = screen.setdefault(row, [])
        if op.kind is OpKind.MOVE_TO_LINE:
            row = op.value
            col = 0
        elif op.kind is OpKind.MOVE_TO_CHAR:
            col = op.value
        elif op.kind is OpKind.OVERWRITE:
            for ch in op.value:
                while len(line) <= col:
                    line.append(" ")
                line[col] = ch
                col += 1
        elif op.kind is OpKind.INSERT_WRITE:
            while len(line) < col:
                line.append(" ")
            line[col:col] = list(op.value)
            del line[width:]
            col += len(op.value)
        elif op.kind is OpKind.DELETE_CHARS:
            del line[col:col + op.value]
        elif op.kind is OpKind.CLEAR_EOL:
            del line[col:col + op.value]
    return {r: "".join(chars) for r, chars in screen.items()}


CASES = [
    ("abc", "abcd"),
    ("abcdef", "abc"),
    ("hello world foo", "hello big world foo"),
    ("hello big world foo", "hello world foo"),
    ("the quick brown fox", "the quick red fox"),
    ("", "prompt> text"),
    ("prompt> text", ""),
    ("abcdefghij", "xbcdefghij"),
    ("one two three four", "one 2 three four five"),
]


@pytest.mark.parametrize("old,new", CASES)
def test_update_reproduces_new_line(old, new):
    ops = update_line(old, new, 0, WIDTH)
    result = _apply({0: old}, ops, WIDTH)
    assert result[0].rstrip() == new.rstrip()


@pytest.mark.parametrize("old,new", CASES)
def test_update_without_insert_or_delete(old, new):
    ops = update_line(old, new, 0, WIDTH, can_insert=False, can_delete=False)
    kinds = {op.kind for op in ops}
    assert OpKind.INSERT_WRITE not in kinds
    assert OpKind.DELETE_CHARS not in kinds
    result = _apply({0: old}, ops, WIDTH)
    assert result[0].rstrip() == new.rstrip()


def test_identical_lines_need_nothing():
    assert update_line("same text", "same text", 3, WIDTH) == []


def test_trailing_blanks_are_ignored():
    assert update_line("abc" + " " * 10, "abc", 0, WIDTH) == []


def test_append_writes_only_new_character():
    ops = update_line("abc", "abcd", 2, WIDTH)
    assert ops == [
        Op(OpKind.MOVE_TO_LINE, 2),
        Op(OpKind.MOVE_TO_CHAR, 3),
        Op(OpKind.OVERWRITE, "d"),
    ]


def test_shortening_clears_to_end_of_line():
    ops = update_line("abcdef", "abc", 0, WIDTH)
    assert ops == [
        Op(OpKind.MOVE_TO_LINE, 0),
        Op(OpKind.MOVE_TO_CHAR, 3),
        Op(OpKind.CLEAR_EOL, 3),
    ]


def test_middle_insert_uses_insert_write():
    ops = update_line("hello world foo", "hello big world foo", 0, WIDTH)
    inserted = "".join(op.value for op in ops if op.kind is OpKind.INSERT_WRITE)
    assert inserted == "big "


def test_ops_start_on_requested_row():
    ops = update_line("x", "y", 5, WIDTH)
    assert ops[0] == Op(OpKind.MOVE_TO_LINE, 5)


@pytest.mark.parametrize("text,width", [("abc", 6), ("abcdefgh", 4), ("", 3)])
def test_copy_and_pad_length_and_prefix(text, width):
    padded = copy_and_pad(text, width)
    assert len(padded) == width
    assert padded.rstrip() == text[:width].rstrip()


def test_copy_and_pad_stops_at_nul():
    assert copy_and_pad("ab\0cd", 4) == "ab  "


def test_copy_and_pad_negative_width():
    with pytest.raises(ValueError):
        copy_and_pad("abc", -1)


def test_diff_display_pads_and_clears_extra_rows():
    old = ["first line", "second line", "third"]
    new = ["first LINE", "second"]
    ops, display = diff_display(old, new, 20)
    assert display == [copy_and_pad("first LINE", 20), copy_and_pad("second", 20), ""]
    result = _apply(dict(enumerate(old)), ops, 20)
    assert result[0].rstrip() == "first LINE"
    assert result[1].rstrip() == "second"
    assert result[2] == ""


def test_diff_display_more_new_rows_than_old():
    ops, display = diff_display(["a"], ["a", "b"], 10)
    result = _apply({0: "a"}, ops, 10)
    assert result[1].rstrip() == "b"
    assert [line.rstrip() for line in display] == ["a", "b"]


def test_diff_display_rejects_bad_width():
    with pytest.raises(ValueError):
        diff_display(["a"], ["b"], 0)