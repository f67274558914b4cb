"""
Exception hierarchy raised by the Storyfolio export pipeline.
"""

from __future__ import annotations


class StoryfolioError(Exception):
    """Base class for every error raised by Storyfolio."""


class ThemeError(StoryfolioError, ValueError):
    """
    A theme is malformed or cannot fit the target page.

    Raised while the exporter is being configured, never mid-export.
    """


class ArtworkError(StoryfolioError):
    """A page image could not be fetched or decoded."""


class ExportError(StoryfolioError):
    """
    The PDF document could not be finalized or written.

    Any bytes produced before this error must be discarded.
    """
