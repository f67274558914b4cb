"""
PDF composition and export for Storyfolio stories.
"""

from .builder import (
    PAGE_SIZES,
    ExportResult,
    StoryPDFExporter,
    build_output_filename,
    export_story,
)
from .composer import PageComposer
from .images import ImageLoader
from .surface import CanvasSurface, RenderingSurface, TextStyle
from .text_fitter import fit_paragraphs, fit_text, strip_markdown
from .themes import THEMES, Theme, get_theme, load_theme, resolve_theme

__all__ = [
    "PAGE_SIZES",
    "THEMES",
    "CanvasSurface",
    "ExportResult",
    "ImageLoader",
    "PageComposer",
    "RenderingSurface",
    "StoryPDFExporter",
    "TextStyle",
    "Theme",
    "build_output_filename",
    "export_story",
    "fit_paragraphs",
    "fit_text",
    "get_theme",
    "load_theme",
    "resolve_theme",
    "strip_markdown",
]
