"""Tests for the caller-held session value."""

import pytest

from code_compressor import SAMPLES, FormatKind, Session, compute_stats, decompress


class TestSessionCompress:
    def test_blank_input_raises(self):
        with pytest.raises(ValueError, match="Nothing to compress"):
            Session(input_text="  \n").compress()

    def test_compress_sets_output_and_stats(self):
        session = Session(input_text="  .a {  color : red ; }  ", format=FormatKind.CSS).compress()
        assert session.output_text == ".a{color:red;}"
        assert session.input_text == "  .a {  color : red ; }  "
        assert session.stats == compute_stats(session.input_text, session.output_text)

    def test_compress_returns_new_session(self):
        original = Session(input_text="let  x = 1;")
        compressed = original.compress()
        assert original.output_text == ""
        assert original.stats is None
        assert compressed is not original


class TestSessionDecompress:
    def test_blank_output_raises(self):
        with pytest.raises(ValueError, match="Nothing to decompress"):
            Session(input_text="x").decompress()

    def test_decompress_fills_input_and_clears_stats(self):
        session = Session(input_text='{"a": [1, 2]}', format=FormatKind.JSON).compress()
        assert session.stats is not None
        session = session.decompress()
        assert session.stats is None
        assert session.input_text == decompress('{"a":[1,2]}', FormatKind.JSON)


class TestSessionTransitions:
    def test_swap(self):
        session = Session(input_text="in", output_text="out").swap()
        assert (session.input_text, session.output_text) == ("out", "in")

    def test_swap_then_compress_again(self):
        session = Session(input_text="<div>  <p>a</p>  </div>", format="html").compress().swap()
        assert session.input_text == "<div><p>a</p></div>"
        assert session.compress().output_text == session.input_text

    def test_clear(self):
        session = Session(input_text=".a{}", format=FormatKind.CSS).compress().clear()
        assert session == Session(format=FormatKind.CSS)

    @pytest.mark.parametrize("fmt", list(FormatKind))
    def test_load_example(self, fmt: FormatKind):
        session = Session(format=fmt).load_example()
        assert session.input_text == SAMPLES[fmt]

    def test_with_format_keeps_texts(self):
        session = Session(input_text="a", output_text="b").with_format("json")
        assert session.format is FormatKind.JSON
        assert (session.input_text, session.output_text) == ("a", "b")

    def test_with_unknown_format_raises(self):
        with pytest.raises(ValueError):
            Session().with_format("yaml")

    def test_with_input(self):
        assert Session().with_input("x").input_text == "x"
