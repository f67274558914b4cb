"""
Greedy word wrapping of plain prose into a fixed column width.
"""

from __future__ import annotations

import re
from typing import Callable

MeasureFn = Callable[[str], float]

_MARKDOWN_MARKERS = re.compile(r"[*_#]")


def strip_markdown(text: str) -> str:
    """
    Remove markdown emphasis/heading markers (``*``, ``_``, ``#``).

    Nothing else is interpreted: links, lists and headings keep their text.
    """
    return _MARKDOWN_MARKERS.sub("", text)


def fit_text(text: str, measure: MeasureFn, max_width: float) -> list[str]:
    """
    Wrap ``text`` into lines whose measured width stays within ``max_width``.

    Words are whitespace-delimited and are never hyphenated: a word wider than
    the column is emitted alone on its own line.
    """
    if max_width <= 0:
        raise ValueError(f"max_width must be positive, received {max_width!r}.")

    lines: list[str] = []
    current = ""
    for word in text.split():
        if not current:
            current = word
            continue

        candidate = f"{current} {word}"
        if measure(candidate) <= max_width:
            current = candidate
        else:
            lines.append(current)
            current = word

    if current:
        lines.append(current)
    return lines


def fit_paragraphs(text: str, measure: MeasureFn, max_width: float) -> list[str]:
    """
    Wrap each newline-separated paragraph of ``text`` on its own.

    Explicit line breaks are kept and a blank source line becomes an empty
    string in the result. Leading and trailing blank lines are dropped.
    """
    lines: list[str] = []
    for paragraph in text.strip().splitlines():
        wrapped = fit_text(paragraph, measure, max_width)
        lines.extend(wrapped or [""])
    return lines
