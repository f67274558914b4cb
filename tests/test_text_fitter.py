import pytest
from reportlab.lib.units import mm
from reportlab.pdfbase import pdfmetrics

from storyfolio.pdf_generation.text_fitter import fit_paragraphs, fit_text, strip_markdown


def char_count(fragment):
    return float(len(fragment))


def times_roman_16(fragment):
    return pdfmetrics.stringWidth(fragment, "Times-Roman", 16)


def test_fit_text_wraps_greedily():
    assert fit_text("aaa bbb ccc", char_count, 7) == ["aaa bbb", "ccc"]


def test_fit_text_keeps_line_exactly_at_max_width():
    assert fit_text("ab cd", char_count, 5) == ["ab cd"]


def test_fit_text_places_overflowing_word_alone():
    lines = fit_text("a extraordinarily b", char_count, 5)

    assert lines == ["a", "extraordinarily", "b"]


def test_fit_text_lines_fit_except_single_word_overflow():
    text = "the quick brown fox jumps over the supercalifragilistic lazy dog " * 4
    max_width = 12

    for line in fit_text(text, char_count, max_width):
        assert char_count(line) <= max_width or " " not in line


def test_fit_text_collapses_whitespace_and_newlines():
    assert fit_text("  one\n\ntwo\tthree  ", char_count, 100) == ["one two three"]


@pytest.mark.parametrize("text", ["", "   ", "\n\t"])
def test_fit_text_empty_input_yields_no_lines(text):
    assert fit_text(text, char_count, 10) == []


def test_fit_text_is_deterministic():
    text = "Once upon a time, in a kingdom lost beneath the tides, a hero rose. " * 5
    measure = times_roman_16

    first = fit_text(text, measure, 100 * mm)
    second = fit_text(text, measure, 100 * mm)

    assert first == second


@pytest.mark.parametrize("max_width", [0, -5])
def test_fit_text_rejects_non_positive_width(max_width):
    with pytest.raises(ValueError):
        fit_text("hello", char_count, max_width)


def test_long_text_wraps_within_column_using_font_metrics():
    text = (
        "The hero crossed the silver river where the old kings slept, carrying nothing "
        "but a lantern, a borrowed name and the memory of a song nobody else remembered."
    )
    measure = times_roman_16
    column = 98.5 * mm

    lines = fit_text(text, measure, column)

    assert len(lines) > 1
    assert all(measure(line) <= column for line in lines)
    assert " ".join(lines) == " ".join(text.split())


def test_fit_paragraphs_keeps_line_breaks_and_blank_lines():
    lines = fit_paragraphs("First paragraph.\n\nSecond one\nthird line", char_count, 100)

    assert lines == ["First paragraph.", "", "Second one", "third line"]


def test_fit_paragraphs_wraps_each_paragraph_separately():
    lines = fit_paragraphs("aaa bbb ccc\nddd", char_count, 7)

    assert lines == ["aaa bbb", "ccc", "ddd"]


@pytest.mark.parametrize("text", ["", "\n\n", "  \n\t"])
def test_fit_paragraphs_empty_input_yields_no_lines(text):
    assert fit_paragraphs(text, char_count, 10) == []


def test_fit_paragraphs_drops_surrounding_blank_lines():
    assert fit_paragraphs("\n\nonly\n\n", char_count, 10) == ["only"]


def test_strip_markdown_removes_only_marker_characters():
    cleaned = strip_markdown("# Title\n**Bold** and _italic_ [link](http://x.y) - item")

    assert cleaned == " Title\nBold and italic [link](http://x.y) - item"
    assert not {"*", "_", "#"} & set(cleaned)
