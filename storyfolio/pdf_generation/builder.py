"""
High-level export of Storyfolio stories into printable landscape PDFs.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from io import BytesIO
from pathlib import Path
from typing import Any, Callable

from reportlab.lib.pagesizes import A4, LETTER, landscape
from reportlab.lib.utils import ImageReader
from reportlab.pdfgen import canvas

from storyfolio.common.errors import ArtworkError, ExportError
from storyfolio.common.settings import Settings, load_settings
from storyfolio.story import Story, StoryPage

from .composer import PageComposer
from .images import ImageLoader
from .surface import CanvasSurface
from .themes import Theme, resolve_theme

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[str, dict[str, Any]], None]

PAGE_SIZES = {
    "a4": landscape(A4),
    "letter": landscape(LETTER),
}

_WHITESPACE_RUN = re.compile(r"\s+")


def build_output_filename(title: str, suffix: str = "Chronicle") -> str:
    """
    Derive the PDF filename for ``title``: whitespace runs become ``_`` and
    ``_<suffix>.pdf`` is appended.
    """
    stem = _WHITESPACE_RUN.sub("_", title)
    clean_suffix = _WHITESPACE_RUN.sub("_", suffix)
    return f"{stem}_{clean_suffix}.pdf"


@dataclass(frozen=True)
class ExportResult:
    """Finished PDF plus a report of pages whose artwork fell back to the placeholder."""

    filename: str
    content: bytes
    page_count: int
    artwork_failures: tuple[int, ...] = ()

    @property
    def artwork_failure_count(self) -> int:
        return len(self.artwork_failures)


class StoryPDFExporter:
    """
    Render a :class:`Story` into a landscape PDF.

    The document holds one title page followed by one split image/text page per
    story page, in story order. Unusable artwork never aborts an export; only a
    failure to finalize the document raises :class:`ExportError`.
    """

    def __init__(
        self,
        theme: Theme | str | Path | None = None,
        *,
        page_size: tuple[float, float] = PAGE_SIZES["a4"],
        image_loader: ImageLoader | None = None,
        filename_suffix: str | None = None,
        settings: Settings | None = None,
        progress_callback: ProgressCallback | None = None,
    ) -> None:
        self.settings = settings or load_settings()
        self.theme = resolve_theme(theme if theme is not None else self.settings.default_theme)
        self.page_size = page_size
        # Configuration problems surface here, before any page is drawn.
        self.theme.validate(self.page_size)

        self.image_loader = image_loader or ImageLoader(request_timeout=self.settings.image_timeout)
        self.filename_suffix = filename_suffix or self.settings.filename_suffix
        self.progress_callback = progress_callback
        self.composer = PageComposer(self.theme, self.page_size)

    def output_filename(self, story: Story) -> str:
        return build_output_filename(story.title, self.filename_suffix)

    def export(self, story: Story) -> ExportResult:
        filename = self.output_filename(story)
        total = len(story.pages)
        logger.info("Exporting '%s' (%d pages, theme=%s)", story.title, total, self.theme.name)
        self._notify("export:start", title=story.title, total_pages=total, filename=filename)

        buffer = BytesIO()
        try:
            pdf = canvas.Canvas(buffer, pagesize=self.page_size)
        except Exception as exc:
            raise ExportError(f"Unable to allocate PDF document for '{story.title}'.") from exc
        pdf.setTitle(story.title)
        if story.genre:
            pdf.setSubject(story.genre)

        surface = CanvasSurface(pdf)
        self.composer.compose_title_page(surface, story)
        surface.show_page()

        failures: list[int] = []
        for index, page in enumerate(story.pages):
            number = index + 1
            self._notify("page:processing", page_number=number, total_pages=total)

            image = self._acquire_artwork(page, number)
            drawn = self.composer.compose_content_page(surface, page, index, total, image)
            if page.image is not None and not drawn:
                failures.append(number)
            surface.show_page()

            self._notify("page:done", page_number=number, total_pages=total, artwork=drawn)

        try:
            pdf.save()
            content = buffer.getvalue()
        except Exception as exc:
            raise ExportError(f"Unable to finalize PDF document for '{story.title}'.") from exc

        if failures:
            logger.warning(
                "Exported '%s' with placeholder artwork on %d page(s): %s",
                story.title,
                len(failures),
                ", ".join(str(number) for number in failures),
            )
        logger.info("Finished '%s': %d pages, %d bytes", filename, surface.page_count, len(content))

        result = ExportResult(
            filename=filename,
            content=content,
            page_count=surface.page_count,
            artwork_failures=tuple(failures),
        )
        self._notify(
            "export:complete",
            filename=filename,
            page_count=result.page_count,
            artwork_failures=result.artwork_failure_count,
        )
        return result

    def export_to_path(self, story: Story, destination: Path | str) -> tuple[Path, ExportResult]:
        """
        Export ``story`` and write it to ``destination``.

        A directory destination (or one without a suffix) receives the derived
        filename.
        """
        result = self.export(story)

        target = Path(destination)
        if target.is_dir() or not target.suffix:
            # Basename only; a title never places the file outside the destination.
            target = target / Path(result.filename).name

        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_bytes(result.content)
        except OSError as exc:
            raise ExportError(f"Unable to write PDF to {target}: {exc}") from exc
        return target, result

    # ------------------------------------------------------------------ helpers

    def _acquire_artwork(self, page: StoryPage, number: int) -> ImageReader | None:
        if page.image is None:
            return None
        try:
            return self.image_loader.load(page.image)
        except ArtworkError as exc:
            logger.warning("Artwork for page %d is unusable (%s); using placeholder.", number, exc)
            return None

    def _notify(self, stage: str, **payload: Any) -> None:
        if self.progress_callback is not None:
            self.progress_callback(stage, payload)


def export_story(story: Story, theme: Theme | str | Path | None = None, **kwargs: Any) -> ExportResult:
    """Convenience wrapper: build an exporter and export ``story`` in one call."""
    return StoryPDFExporter(theme, **kwargs).export(story)
