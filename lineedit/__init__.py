"""Building blocks for a terminal line editor: search, key parsing, prompts, screen refresh and input."""

__version__ = "0.1.0"
__all__ = ["inputqueue", "keyparse", "lineupdate", "prompt", "screen", "search"]