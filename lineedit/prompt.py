"""Prompt text and its literal (non-printing) segments."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Union

__all__ = ["Prompt", "default_prompt", "default_rprompt"]

PromptFunc = Callable[[], Union[str, bytes]]


def default_prompt() -> str:
    """Prompt used when none has been given."""
    return "? "


def default_rprompt() -> str:
    """Right-hand prompt used when none has been given."""
    return ""


@dataclass
class Prompt:
    """A left or right prompt: where its text comes from and how to show it.

    ``ignore`` is the character that starts and ends a literal run, which
    is sent to the terminal as is; an empty string disables literals.
    """

    right: bool = False
    func: PromptFunc | None = None
    ignore: str = ""
    position: tuple[int, int] = field(default=(0, 0))

    def __post_init__(self) -> None:
        self.set(self.func, self.ignore)

    def set(self, func: PromptFunc | None, ignore: str = "") -> None:
        """Install a prompt function; None restores the default."""
        if len(ignore) > 1:
            raise ValueError("the literal marker must be a single character")
        if func is None:
            func = default_rprompt if self.right else default_prompt
        self.func = func
        self.ignore = "" if ignore == "\0" else ignore
        self.position = (0, 0)

    def text(self) -> str:
        """Return the prompt's current text."""
        assert self.func is not None
        value = self.func()
        if isinstance(value, bytes):
            return value.decode("utf-8", errors="replace")
        return value

    def segments(self) -> list[tuple[str, bool]]:
        """Split the prompt into ``(text, is_literal)`` pieces.

        A literal run whose closing marker is missing, or is the very last
        character of the prompt, is dropped together with the rest.
        """
        text = self.text()
        marker = self.ignore
        result: list[tuple[str, bool]] = []
        plain: list[str] = []

        def flush() -> None:
            if plain:
                result.append(("".join(plain), False))
                plain.clear()

        pos = 0
        while pos < len(text):
            ch = text[pos]
            if marker and ch == marker:
                close = text.find(marker, pos + 1)
                if close < 0 or close + 1 >= len(text):
                    break
                flush()
                literal = text[pos + 1:close]
                if literal:
                    result.append((literal, True))
                pos = close + 1
                continue
            plain.append(ch)
            pos += 1
        flush()
        return result