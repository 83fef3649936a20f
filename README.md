# lineedit

`lineedit` provides the parts a terminal line editor is built from. You can use each part on its own or combine them into an editor of your own.

- **`lineedit.search`** covers matching and in-line searching.
  - `el_match(text, pattern)` is true when `text` contains `pattern`, either as a plain substring or as a POSIX basic regular expression. An invalid expression never matches.
  - `search_line(line, cursor, pattern, direction)` returns the first position, scanning from `cursor` in the given `Direction` (`FORWARD` or `BACKWARD`), at which the rest of the line matches. It returns `None` if there is no such position.
  - `char_search(line, cursor, ch, direction, count=1, till=False)` is the vi `f`/`t` style character search.
  - `SearchState` keeps the current search pattern (`set_pattern`, `matches`) together with the last character-search settings.
- **`lineedit.keyparse`** decodes key-binding notation.
  - `parse_escape(text, pos)` decodes one `^X`, `\c`, octal `\ooo` or `\U+xxxx` escape. It returns the character and the index after the escape.
  - `parse_string(text)` expands every escape in the text and turns `M-` into ESC.
  - Invalid escapes raise `ValueError`.
  - `CommandTable` maps command names to handlers. `dispatch(argv)` runs the handler named by `argv[0]`. A `prog:` prefix limits the command to a matching program name. `parse_line(line)` splits a line the way a shell would and dispatches it.
- **`lineedit.prompt`** handles prompts.
  - `Prompt` holds a prompt function and an optional marker character for literal runs, such as escape sequences that take no screen width.
  - `text()` returns the prompt text. `segments()` splits it into `(text, is_literal)` pieces.
  - `default_prompt()` returns `"? "` and `default_rprompt()` returns `""`.
- **`lineedit.screen`** is a virtual screen.
  - `VirtualScreen` draws onto a grid of `width` by `height` cells. It expands tabs to 8-column stops, handles newlines, control characters and double-width characters, and scrolls when text runs past the last row.
  - `visual_char(ch)` gives the printable form of a character: `^X` or `\U+xxxx`.
  - `cursor_position(text, cursor, prompt_pos, width)` returns the `(row, column)` of the cursor.
- **`lineedit.lineupdate`** computes minimal repaints.
  - `update_line(old, new, row, width, can_insert, can_delete)` returns a list of `Op` values. Each has an `OpKind`: move to line or column, overwrite, insert-write, delete characters, or clear to end of line. Together they turn the old row into the new one.
  - `diff_display(old_lines, new_lines, width, ...)` does the same for a whole screen and also returns the padded result.
  - `copy_and_pad(text, width)` pads or cuts a row to exactly `width` columns.
- **`lineedit.inputqueue`** handles input.
  - `MacroStack` queues pushed-back strings for reading. It holds at most ten by default and raises `MacroOverflow` when full.
  - `Utf8Reader` reads UTF-8 characters from a binary stream or a file descriptor and skips invalid bytes.
  - `InputReader` reads pushed input first and then its read function, which you can replace with `set_read_function`. It can also read a line without editing through `read_line_unedited`.

## What the package does not do

These modules do not add up to a running editor. The package does not:

- put the terminal into raw mode;
- send escape sequences to a real terminal (the `Op` lists are left for the caller to carry out);
- store history or move through it;
- hold default key maps;
- provide an interactive `readline`-style function or a command-line program.

## Installation

```
pip install lineedit
```

## Examples

Parsing key-binding notation:

```python
from lineedit.keyparse import parse_string

parse_string("^A")      # "\x01"
parse_string("\\e[1~")  # "\x1b[1~"
parse_string("M-x")     # "\x1bx"
```

Searching backward from the end of a line:

```python
from lineedit.search import Direction, search_line

line = "git commit -m fix"
search_line(line, len(line), "commit", Direction.BACKWARD)  # 4
```

Drawing onto a virtual screen:

```python
from lineedit.screen import VirtualScreen

screen = VirtualScreen(width=10, height=3)
for ch in "hello\tworld":
    screen.addc(ch)
screen.lines()
```

Computing the repaint operations for a changed line:

```python
from lineedit.lineupdate import update_line

ops = update_line("hello world", "hello there world", 0, 80, True, True)
```

Reading pushed-back input before the stream:

```python
import io
from lineedit.inputqueue import InputReader

reader = InputReader(io.BytesIO("héllo\n".encode()))
reader.push("ab")
reader.getc()  # "a"
```

## Running the tests

```
pip install -e ".[test]"
pytest
```