"""Tests for the numbered-list picker."""

from __future__ import annotations

import io

from goupdate.picker import render_options, select_one

OPTIONS = ["go1.25.0", "go1.24.3", "go1.23.1"]


def _answers(*values: str):
    it = iter(values)

    def fake_input(prompt: str) -> str:
        value = next(it)
        if isinstance(value, BaseException):
            raise value
        return value

    return fake_input


class TestSelectOne:
    """Tests for select_one()."""

    def test_returns_chosen_option(self):
        out = io.StringIO()
        assert select_one(OPTIONS, input_fn=_answers("2"), output=out) == "go1.24.3"
        assert "1. go1.25.0" in out.getvalue()
        assert "3. go1.23.1" in out.getvalue()

    def test_reprompts_on_invalid(self):
        out = io.StringIO()
        choice = select_one(OPTIONS, input_fn=_answers("9", "abc", " 1 "), output=out)
        assert choice == "go1.25.0"
        assert "Invalid choice '9'." in out.getvalue()
        assert "Invalid choice 'abc'." in out.getvalue()

    def test_quit(self):
        for answer in ("q", "", "QUIT"):
            assert select_one(OPTIONS, input_fn=_answers(answer), output=io.StringIO()) is None

    def test_eof_and_interrupt(self):
        for exc in (EOFError(), KeyboardInterrupt()):
            assert select_one(OPTIONS, input_fn=_answers(exc), output=io.StringIO()) is None

    def test_title_and_default_output(self, capsys):
        assert select_one(OPTIONS, title="Pick Go", input_fn=_answers("3")) == "go1.23.1"
        out = capsys.readouterr().out
        assert "Pick Go" in out
        assert "2. go1.24.3" in out

    def test_empty_options(self):
        assert select_one([], input_fn=_answers(), output=io.StringIO()) is None


def test_render_options():
    assert render_options(["a", "b"]) == "1. a\n2. b"
