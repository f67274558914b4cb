"""
Environment-driven defaults for the exporter.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping

DEFAULT_THEME = "chronicle"
DEFAULT_IMAGE_TIMEOUT = 30.0
DEFAULT_FILENAME_SUFFIX = "Chronicle"


@dataclass(frozen=True)
class Settings:
    default_theme: str = DEFAULT_THEME
    image_timeout: float = DEFAULT_IMAGE_TIMEOUT
    filename_suffix: str = DEFAULT_FILENAME_SUFFIX


def load_settings(environ: Mapping[str, str] | None = None) -> Settings:
    """
    Read ``STORYFOLIO_*`` environment variables, falling back to built-in defaults.
    """
    env = os.environ if environ is None else environ

    theme = (env.get("STORYFOLIO_THEME") or DEFAULT_THEME).strip().lower()
    suffix = (env.get("STORYFOLIO_FILENAME_SUFFIX") or DEFAULT_FILENAME_SUFFIX).strip()

    raw_timeout = env.get("STORYFOLIO_IMAGE_TIMEOUT")
    if raw_timeout:
        try:
            timeout = float(raw_timeout)
        except ValueError as exc:
            raise ValueError(
                f"STORYFOLIO_IMAGE_TIMEOUT must be a number of seconds, received {raw_timeout!r}."
            ) from exc
        if timeout <= 0:
            raise ValueError("STORYFOLIO_IMAGE_TIMEOUT must be positive.")
    else:
        timeout = DEFAULT_IMAGE_TIMEOUT

    return Settings(
        default_theme=theme or DEFAULT_THEME,
        image_timeout=timeout,
        filename_suffix=suffix or DEFAULT_FILENAME_SUFFIX,
    )
