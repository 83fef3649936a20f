import pytest

from lineedit.prompt import Prompt, default_prompt, default_rprompt


def test_default_prompts():
    assert default_prompt() == "? "
    assert default_rprompt() == ""


def test_new_prompt_uses_default():
    assert Prompt().text() == default_prompt()
    assert Prompt(right=True).text() == default_rprompt()


def test_set_custom_function():
    prompt = Prompt()
    prompt.set(lambda: "sh$ ")
    assert prompt.text() == "sh$ "


def test_set_none_restores_default():
    prompt = Prompt(right=True)
    prompt.set(lambda: "R")
    prompt.set(None)
    assert prompt.text() == default_rprompt()


def test_set_resets_position():
    prompt = Prompt()
    prompt.position = (2, 5)
    prompt.set(lambda: "> ")
    assert prompt.position == (0, 0)


def test_bytes_prompt_is_decoded():
    prompt = Prompt(func=lambda: "café> ".encode("utf-8"))
    assert prompt.text() == "café> "


def test_multi_char_marker_rejected():
    with pytest.raises(ValueError):
        Prompt().set(lambda: "x", "ab")


def test_segments_without_marker_is_whole_text():
    prompt = Prompt(func=lambda: "a\x01b")
    assert prompt.segments() == [("a\x01b", False)]


def test_segments_with_literal():
    prompt = Prompt(func=lambda: "A\x01\033[1m\x01B> ", ignore="\x01")
    assert prompt.segments() == [("A", False), ("\033[1m", True), ("B> ", False)]


def test_segments_joined_text_without_markers_matches_source():
    text = "x\x01ESC\x01y\x01Z\x01end"
    prompt = Prompt(func=lambda: text, ignore="\x01")
    joined = "".join(piece for piece, _ in prompt.segments())
    assert joined == text.replace("\x01", "")


def test_unterminated_literal_is_dropped():
    prompt = Prompt(func=lambda: "ab\x01cd", ignore="\x01")
    assert prompt.segments() == [("ab", False)]


def test_literal_closing_at_end_is_dropped():
    prompt = Prompt(func=lambda: "ab\x01cd\x01", ignore="\x01")
    assert prompt.segments() == [("ab", False)]


def test_empty_literal_is_skipped():
    prompt = Prompt(func=lambda: "a\x01\x01b", ignore="\x01")
    assert prompt.segments() == [("a", False), ("b", False)]


def test_nul_marker_disables_literals():
    prompt = Prompt(func=lambda: "a\x01b\x01c", ignore="\0")
    assert prompt.ignore == ""
    assert prompt.segments() == [("a\x01b\x01c", False)]