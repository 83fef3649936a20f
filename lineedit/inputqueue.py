"""Character input for the line editor: pushed-back macros and UTF-8 reading."""

from __future__ import annotations

import codecs
import errno
import os
import sys
from collections import deque
from typing import BinaryIO, Callable, Optional, Union

__all__ = ["MacroOverflow", "MacroStack", "Utf8Reader", "InputReader"]

MAX_MACRO = 10
# Longest byte sequence gathered for one character before giving up.
MAX_CHAR_BYTES = 16

ReadFunc = Callable[[], Optional[str]]
Source = Union[BinaryIO, int, None]


class MacroOverflow(Exception):
    """Raised when no more pushed-back input fits in the macro queue."""


class MacroStack:
    """Strings pushed back as input, read character by character.

    Strings are read in the order they were pushed; at most ``capacity``
    may be waiting at once.
    """

    def __init__(self, capacity: int = MAX_MACRO) -> None:
        if capacity <= 0:
            raise ValueError("capacity must be positive")
        self.capacity = capacity
        self._queue: deque[str] = deque()
        self._offset = 0

    def __len__(self) -> int:
        return len(self._queue)

    def __bool__(self) -> bool:
        return bool(self._queue)

    def push(self, text: str) -> None:
        """Queue ``text`` to be read back; raises MacroOverflow when full."""
        if text is None:
            raise TypeError("cannot push None")
        if len(self._queue) >= self.capacity:
            raise MacroOverflow(f"at most {self.capacity} macros may be pending")
        self._queue.append(text)

    def _pop(self) -> None:
        self._queue.popleft()
        self._offset = 0

    def getc(self) -> Optional[str]:
        """Return the next pushed character, or None when nothing is queued."""
        while self._queue:
            current = self._queue[0]
            if self._offset >= len(current):
                self._pop()
                continue
            ch = current[self._offset]
            self._offset += 1
            if self._offset >= len(current):
                self._pop()
            return ch
        return None

    def clear(self) -> None:
        """Drop everything still queued."""
        self._queue.clear()
        self._offset = 0


class Utf8Reader:
    """Reads one UTF-8 character at a time from a binary stream or descriptor.

    Bytes that cannot start a character are skipped; a broken sequence is
    dropped except for its last byte, which is tried again on its own.
    """

    def __init__(self, source: Source = None) -> None:
        self._source = source

    def _read_byte(self) -> bytes:
        source = self._source
        if source is None:
            source = sys.stdin.buffer
        if isinstance(source, int):
            return os.read(source, 1)
        data = source.read(1)
        return data or b""

    def read_char(self) -> Optional[str]:
        """Return the next character, or None at end of input.

        Raises OSError (EILSEQ) if a sequence grows too long to decode.
        """
        buf = b""
        while True:
            byte = self._read_byte()
            if not byte:
                return None
            buf += byte
            while True:
                decoder = codecs.getincrementaldecoder("utf-8")()
                try:
                    text = decoder.decode(buf, final=False)
                except UnicodeDecodeError:
                    if len(buf) > 1:
                        buf = buf[-1:]
                        continue
                    buf = b""
                    break
                if text:
                    return text[0]
                if len(buf) >= MAX_CHAR_BYTES:
                    raise OSError(errno.EILSEQ, os.strerror(errno.EILSEQ))
                break


class InputReader:
    """Character source of the editor: pushed macros first, then the reader."""

    def __init__(self, source: Source = None, max_macros: int = MAX_MACRO) -> None:
        self.macros = MacroStack(max_macros)
        self._builtin = Utf8Reader(source)
        self._read: ReadFunc = self._builtin.read_char

    @property
    def read_function(self) -> Optional[ReadFunc]:
        """The installed read function, or None when the built-in one is used."""
        return None if self._read == self._builtin.read_char else self._read

    def set_read_function(self, func: Optional[ReadFunc]) -> None:
        """Install ``func`` to read characters; None restores the built-in reader."""
        self._read = self._builtin.read_char if func is None else func

    def push(self, text: str) -> None:
        """Push ``text`` back so it is read before any further input."""
        self.macros.push(text)

    def getc(self) -> Optional[str]:
        """Return the next character, or None at end of input."""
        ch = self.macros.getc()
        if ch is not None:
            return ch
        return self._read()

    def read_line_unedited(self, unbuffered: bool = False) -> Optional[str]:
        """Read a line without editing, keeping its line terminator.

        Stops after a newline or carriage return, at end of input, or after
        one character when ``unbuffered``. Returns None if nothing was read
        or the read was interrupted.
        """
        chars: list[str] = []
        try:
            while True:
                ch = self._read()
                if ch is None:
                    break
                chars.append(ch)
                if unbuffered or ch in "\r\n":
                    break
        except InterruptedError:
            return None
        return "".join(chars) or None