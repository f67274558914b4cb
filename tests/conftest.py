from io import BytesIO

import pytest
from PIL import Image
from reportlab.lib.pagesizes import A4, landscape

from storyfolio.story import Story, StoryPage

PAGE_SIZE = landscape(A4)


class RecordingSurface:
    """Surface double that records every drawing call.

    Text is measured as ``len(text) * font_size * char_width`` so wrapping is
    easy to reason about in assertions.
    """

    def __init__(self, *, char_width=0.5, fail_images=False):
        self.char_width = char_width
        self.fail_images = fail_images
        self.calls = []

    def fill_rect(self, x, y, width, height, color):
        self.calls.append(("fill_rect", (x, y, width, height), color))

    def draw_text(self, text, x, y, style):
        self.calls.append(("draw_text", text, (x, y), style))

    def draw_image(self, image, x, y, width, height):
        if self.fail_images:
            raise RuntimeError("image data is corrupt")
        self.calls.append(("draw_image", image, (x, y, width, height)))

    def measure_text(self, text, font_name, font_size):
        return len(text) * font_size * self.char_width

    def texts(self):
        return [call[1] for call in self.calls if call[0] == "draw_text"]

    def text_calls(self):
        return [call for call in self.calls if call[0] == "draw_text"]

    def fills(self, color=None):
        return [call for call in self.calls if call[0] == "fill_rect" and (color is None or call[2] is color)]

    def images(self):
        return [call for call in self.calls if call[0] == "draw_image"]


@pytest.fixture
def page_size():
    return PAGE_SIZE


@pytest.fixture
def surface():
    return RecordingSurface()


@pytest.fixture
def failing_surface():
    return RecordingSurface(fail_images=True)


@pytest.fixture
def png_bytes():
    buffer = BytesIO()
    Image.new("RGB", (8, 6), (200, 40, 40)).save(buffer, format="PNG")
    return buffer.getvalue()


@pytest.fixture
def make_story():
    def _make(pages=None, *, title="The Lost Kingdom", genre="Fantasy", mood="Epic"):
        if pages is None:
            pages = [StoryPage(text="Once upon a time, a hero rose.")]
        return Story(title=title, genre=genre, mood=mood, style="Oil Painting", pages=pages)

    return _make
