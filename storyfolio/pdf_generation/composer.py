"""
Theme-driven drawing of title pages and split image/text content pages.
"""

from __future__ import annotations

import logging
from typing import Any

from reportlab.lib.units import mm

from storyfolio.story import Story, StoryPage

from .surface import RenderingSurface, TextStyle
from .text_fitter import fit_paragraphs, fit_text, strip_markdown
from .themes import Theme

logger = logging.getLogger(__name__)

TITLE_LEADING_FACTOR = 1.1


class PageComposer:
    """
    Draws pages onto a :class:`RenderingSurface` using one :class:`Theme`.

    Content pages are split down the middle: artwork on the left half, the
    page's prose on the right half.
    """

    def __init__(self, theme: Theme, page_size: tuple[float, float]) -> None:
        self.theme = theme
        self.page_size = page_size

        self.title_style = TextStyle(theme.title_font, theme.title_size, theme.title_color, "center")
        self.subtitle_style = TextStyle(
            theme.subtitle_font, theme.subtitle_size, theme.subtitle_color, "center"
        )
        self.branding_style = TextStyle(
            theme.branding_font, theme.branding_size, theme.branding_color, "center"
        )
        self.folio_style = TextStyle(theme.folio_font, theme.folio_size, theme.folio_color)
        self.body_style = TextStyle(theme.body_font, theme.body_size, theme.body_color)
        page_number_align = "right" if theme.page_number_style == "corner" else "center"
        self.number_style = TextStyle(
            theme.page_number_font,
            theme.page_number_size,
            theme.page_number_color,
            page_number_align,
        )

    # ------------------------------------------------------------------ title page

    def compose_title_page(self, surface: RenderingSurface, story: Story) -> list[str]:
        """Draw the cover and return the title lines that were rendered."""
        theme = self.theme
        width, height = self.page_size

        surface.fill_rect(0, 0, width, height, theme.cover_background)
        if theme.border_inset_mm is not None:
            self._draw_border(surface, theme.border_inset_mm * mm, theme.border_width)

        title_lines = fit_text(
            story.title.upper(),
            lambda fragment: surface.measure_text(fragment, theme.title_font, theme.title_size),
            width - 2 * theme.title_margin_mm * mm,
        )
        leading = theme.title_size * TITLE_LEADING_FACTOR
        baseline = height / 2 + 10 * mm + (len(title_lines) - 1) * leading / 2
        for line in title_lines:
            surface.draw_text(line, width / 2, baseline, self.title_style)
            baseline -= leading

        subtitle = theme.subtitle_template.format(
            genre=story.genre,
            mood=story.mood,
            style=story.style,
        )
        subtitle = " ".join(subtitle.split())
        if subtitle:
            # Sits 20mm under the last title line.
            surface.draw_text(subtitle, width / 2, baseline + leading - 20 * mm, self.subtitle_style)

        if theme.branding:
            surface.draw_text(
                theme.branding,
                width / 2,
                theme.page_number_inset_mm * mm,
                self.branding_style,
            )

        return title_lines

    def _draw_border(self, surface: RenderingSurface, inset: float, line_width: float) -> None:
        width, height = self.page_size
        color = self.theme.border_color
        half = line_width / 2
        inner_width = width - 2 * inset
        inner_height = height - 2 * inset

        surface.fill_rect(inset - half, inset - half, inner_width + line_width, line_width, color)
        surface.fill_rect(inset - half, height - inset - half, inner_width + line_width, line_width, color)
        surface.fill_rect(inset - half, inset - half, line_width, inner_height + line_width, color)
        surface.fill_rect(width - inset - half, inset - half, line_width, inner_height + line_width, color)

    # ------------------------------------------------------------------ content pages

    def compose_content_page(
        self,
        surface: RenderingSurface,
        page: StoryPage,
        index: int,
        total: int,
        image: Any | None,
    ) -> bool:
        """
        Draw story page ``index`` (0-based) of ``total``.

        Returns ``True`` when the artwork was drawn and ``False`` when the image
        region fell back to the placeholder fill.
        """
        theme = self.theme
        width, height = self.page_size
        split = width / 2
        number = index + 1

        artwork_drawn = False
        if image is not None:
            try:
                surface.draw_image(image, 0, 0, split, height)
                artwork_drawn = True
            except Exception as exc:
                logger.warning(
                    "Artwork for page %d could not be drawn (%s); using placeholder.", number, exc
                )
        if not artwork_drawn:
            surface.fill_rect(0, 0, split, height, theme.placeholder_color)

        surface.fill_rect(split, 0, split, height, theme.paper_color)
        surface.fill_rect(split - theme.divider_width / 2, 0, theme.divider_width, height, theme.divider_color)

        text_x = split + theme.margin
        folio = theme.folio_template.format(number=number, total=total)
        surface.draw_text(folio, text_x, height - theme.folio_offset_mm * mm, self.folio_style)

        lines = fit_paragraphs(
            strip_markdown(page.text),
            lambda fragment: surface.measure_text(fragment, theme.body_font, theme.body_size),
            split - 2 * theme.margin,
        )
        baseline = height - theme.body_offset_mm * mm
        for line in lines:
            if line:
                surface.draw_text(line, text_x, baseline, self.body_style)
            baseline -= theme.body_leading
        if lines and baseline + theme.body_leading < theme.margin:
            logger.debug("Text on page %d runs past the bottom margin (%d lines).", number, len(lines))

        self._draw_page_number(surface, number)
        return artwork_drawn

    def _draw_page_number(self, surface: RenderingSurface, number: int) -> None:
        theme = self.theme
        width, _ = self.page_size
        inset = theme.page_number_inset_mm * mm

        if theme.page_number_style == "ornament":
            surface.draw_text(f"— {number} —", width * 3 / 4, inset, self.number_style)
        else:
            surface.draw_text(str(number), width - inset, inset, self.number_style)
