"""
Storyfolio package: story snapshots and their print-ready PDF export.
"""

from .common import ArtworkError, ExportError, StoryfolioError, ThemeError
from .pdf_generation import (
    THEMES,
    ExportResult,
    StoryPDFExporter,
    Theme,
    build_output_filename,
    export_story,
    get_theme,
)
from .story import Story, StoryPage

__all__ = [
    "THEMES",
    "ArtworkError",
    "ExportError",
    "ExportResult",
    "Story",
    "StoryPage",
    "StoryPDFExporter",
    "StoryfolioError",
    "Theme",
    "ThemeError",
    "build_output_filename",
    "export_story",
    "get_theme",
]
