import pytest
from reportlab.lib.units import mm

from storyfolio.pdf_generation.composer import PageComposer
from storyfolio.pdf_generation.themes import CHRONICLE, PARCHMENT, STORYBOOK
from storyfolio.story import StoryPage


@pytest.fixture
def composer(page_size):
    return PageComposer(CHRONICLE, page_size)


def test_title_page_renders_upper_cased_title(composer, surface, make_story):
    lines = composer.compose_title_page(surface, make_story(title="The lost Kingdom"))

    assert lines == ["THE LOST KINGDOM"]
    assert surface.texts()[0] == "THE LOST KINGDOM"


def test_title_page_fills_background_first(composer, surface, make_story, page_size):
    composer.compose_title_page(surface, make_story())

    kind, rect, color = surface.calls[0]
    assert kind == "fill_rect"
    assert rect == (0, 0, page_size[0], page_size[1])
    assert color is CHRONICLE.cover_background


def test_long_title_wraps_within_title_margins(composer, surface, make_story, page_size):
    title = "The Extraordinarily Long Chronicle of the Seven Forgotten Kingdoms Beyond the Sea"

    lines = composer.compose_title_page(surface, make_story(title=title))

    max_width = page_size[0] - 2 * CHRONICLE.title_margin_mm * mm
    assert len(lines) > 1
    assert " ".join(lines) == title.upper()
    for line in lines:
        assert surface.measure_text(line, CHRONICLE.title_font, CHRONICLE.title_size) <= max_width
    baselines = [call[2][1] for call in surface.text_calls()[: len(lines)]]
    assert baselines == sorted(baselines, reverse=True)


def test_title_page_subtitle_combines_genre_and_mood(surface, make_story, page_size):
    PageComposer(PARCHMENT, page_size).compose_title_page(surface, make_story(genre="Mystery", mood="Dark"))

    assert "A Dark Mystery tale" in surface.texts()


def test_chronicle_title_page_has_border_and_no_branding(composer, surface, make_story):
    composer.compose_title_page(surface, make_story(genre="Fantasy"))

    assert len(surface.fills(CHRONICLE.border_color)) == 4
    assert surface.texts()[-1] == "A Fantasy Legend forged in Mythos"


def test_storybook_title_page_has_branding_and_no_border(surface, make_story, page_size):
    PageComposer(STORYBOOK, page_size).compose_title_page(surface, make_story())

    assert surface.fills(STORYBOOK.border_color) == []
    assert surface.texts()[-1] == STORYBOOK.branding


def test_content_page_draws_image_across_left_half(composer, surface, page_size):
    image = object()

    drawn = composer.compose_content_page(surface, StoryPage(text="Hello."), 0, 1, image)

    width, height = page_size
    assert drawn is True
    assert surface.images() == [("draw_image", image, (0, 0, width / 2, height))]
    assert surface.fills(CHRONICLE.placeholder_color) == []


def test_content_page_without_image_uses_placeholder(composer, surface, page_size):
    drawn = composer.compose_content_page(surface, StoryPage(text="Hello."), 0, 1, None)

    width, height = page_size
    assert drawn is False
    placeholder = surface.fills(CHRONICLE.placeholder_color)
    assert [call[1] for call in placeholder] == [(0, 0, width / 2, height)]
    assert "Hello." in surface.texts()


def test_content_page_recovers_from_image_draw_failure(composer, failing_surface):
    page = StoryPage(text="The page keeps going.", image=b"ignored")

    drawn = composer.compose_content_page(failing_surface, page, 2, 4, object())

    assert drawn is False
    assert len(failing_surface.fills(CHRONICLE.placeholder_color)) == 1
    assert failing_surface.texts() == ["FOLIO 3 OF 4", "The page keeps going.", "3"]


def test_content_page_paper_and_spine(composer, surface, page_size):
    composer.compose_content_page(surface, StoryPage(text="x"), 0, 1, None)

    width, height = page_size
    paper = surface.fills(CHRONICLE.paper_color)
    spine = surface.fills(CHRONICLE.divider_color)
    assert [call[1] for call in paper] == [(width / 2, 0, width / 2, height)]
    x, y, spine_width, spine_height = spine[0][1]
    assert x + spine_width / 2 == pytest.approx(width / 2)
    assert spine_height == height


def test_content_page_strips_markdown_before_layout(composer, surface):
    page = StoryPage(text="# Chapter One\n**Bold** words and _quiet_ ones.")

    composer.compose_content_page(surface, page, 0, 1, None)

    body = [call[1] for call in surface.text_calls() if call[3] is composer.body_style]
    assert body
    for line in body:
        assert not {"*", "_", "#"} & set(line)
    assert " ".join(body) == "Chapter One Bold words and quiet ones."


def test_content_page_body_lines_fit_column(composer, surface, page_size):
    text = "A hero rose from the valley and walked towards the mountains. " * 12

    composer.compose_content_page(surface, StoryPage(text=text), 0, 1, None)

    column = page_size[0] / 2 - 2 * CHRONICLE.margin
    body = [call for call in surface.text_calls() if call[3] is composer.body_style]
    assert len(body) > 1
    for _, line, _, style in body:
        assert surface.measure_text(line, style.font_name, style.font_size) <= column
    baselines = [call[2][1] for call in body]
    steps = {round(upper - lower, 6) for upper, lower in zip(baselines, baselines[1:])}
    assert steps == {round(CHRONICLE.body_leading, 6)}
    assert body[0][2] == (page_size[0] / 2 + CHRONICLE.margin, page_size[1] - CHRONICLE.body_offset_mm * mm)


@pytest.mark.parametrize(
    "theme,expected_folio,expected_number",
    [
        (CHRONICLE, "FOLIO 2 OF 5", "2"),
        (PARCHMENT, "FOLIO 2 / 5", "2"),
        (STORYBOOK, "FOLIO 2 / 5", "— 2 —"),
    ],
)
def test_folio_and_page_number_follow_theme(theme, expected_folio, expected_number, surface, page_size):
    composer = PageComposer(theme, page_size)

    composer.compose_content_page(surface, StoryPage(text="Short."), 1, 5, None)

    calls = surface.text_calls()
    assert calls[0][1] == expected_folio
    assert calls[0][3] is composer.folio_style
    assert calls[-1][1] == expected_number
    assert calls[-1][3] is composer.number_style


def test_corner_page_number_is_right_aligned_at_corner(composer, surface, page_size):
    composer.compose_content_page(surface, StoryPage(text="Short."), 0, 1, None)

    _, text, (x, y), style = surface.text_calls()[-1]
    inset = CHRONICLE.page_number_inset_mm * mm
    assert text == "1"
    assert style.align == "right"
    assert (x, y) == (page_size[0] - inset, inset)


def test_ornament_page_number_is_centred_in_text_region(surface, page_size):
    composer = PageComposer(STORYBOOK, page_size)

    composer.compose_content_page(surface, StoryPage(text="Short."), 0, 1, None)

    _, _, (x, _), style = surface.text_calls()[-1]
    assert style.align == "center"
    assert x == pytest.approx(page_size[0] * 3 / 4)


def test_empty_page_text_still_draws_folio_and_number(composer, surface):
    composer.compose_content_page(surface, StoryPage(text="***"), 0, 3, None)

    assert surface.texts() == ["FOLIO 1 OF 3", "1"]


def test_content_page_keeps_paragraph_breaks(composer, surface):
    page = StoryPage(text="First paragraph.\n\nSecond paragraph.")

    composer.compose_content_page(surface, page, 0, 1, None)

    body = [call for call in surface.text_calls() if call[3] is composer.body_style]
    assert [call[1] for call in body] == ["First paragraph.", "Second paragraph."]
    first_baseline, second_baseline = (call[2][1] for call in body)
    assert first_baseline - second_baseline == pytest.approx(2 * CHRONICLE.body_leading)
    assert "" not in surface.texts()


def test_content_page_single_newline_starts_new_line(composer, surface):
    composer.compose_content_page(surface, StoryPage(text="Line one\nLine two"), 0, 1, None)

    body = [call[1] for call in surface.text_calls() if call[3] is composer.body_style]
    assert body == ["Line one", "Line two"]
