"""
Common utilities shared across Storyfolio modules.
"""

from .errors import ArtworkError, ExportError, StoryfolioError, ThemeError
from .settings import Settings, load_settings

__all__ = [
    "ArtworkError",
    "ExportError",
    "Settings",
    "StoryfolioError",
    "ThemeError",
    "load_settings",
]
