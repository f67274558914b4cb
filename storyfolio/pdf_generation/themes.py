"""
Named layout presets for exported story PDFs.

A theme is pure data: margins, fonts, colours and decorative choices. The page
composer reads it and never branches on the preset name.
"""

from __future__ import annotations

from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Mapping

import yaml
from reportlab.lib import colors
from reportlab.lib.units import mm
from reportlab.pdfbase import pdfmetrics

from storyfolio.common.errors import ThemeError

PAGE_NUMBER_STYLES = ("corner", "ornament")


@dataclass(frozen=True)
class Theme:
    name: str

    # Geometry (millimetres)
    margin_mm: float
    title_margin_mm: float
    border_inset_mm: float | None
    border_width: float
    divider_width: float
    folio_offset_mm: float
    body_offset_mm: float
    page_number_inset_mm: float

    # Typography
    title_font: str
    title_size: float
    subtitle_font: str
    subtitle_size: float
    branding_font: str
    branding_size: float
    folio_font: str
    folio_size: float
    body_font: str
    body_size: float
    page_number_font: str
    page_number_size: float
    line_height: float

    # Colours
    cover_background: colors.Color
    border_color: colors.Color
    title_color: colors.Color
    subtitle_color: colors.Color
    branding_color: colors.Color
    placeholder_color: colors.Color
    paper_color: colors.Color
    divider_color: colors.Color
    folio_color: colors.Color
    body_color: colors.Color
    page_number_color: colors.Color

    # Decorative text
    folio_template: str = "FOLIO {number} OF {total}"
    subtitle_template: str = "A {genre} Legend forged in Mythos"
    branding: str | None = None
    page_number_style: str = "corner"

    @property
    def margin(self) -> float:
        return self.margin_mm * mm

    @property
    def body_leading(self) -> float:
        return self.body_size * self.line_height

    def with_overrides(self, **values: Any) -> "Theme":
        return replace(self, **values)

    def validate(self, page_size: tuple[float, float]) -> None:
        """
        Raise :class:`ThemeError` if the theme cannot lay out a page of ``page_size``.
        """
        for key in sorted(_NUMERIC_FIELDS):
            value = getattr(self, key)
            if value is None and key in _OPTIONAL_FIELDS:
                continue
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise ThemeError(f"Theme '{self.name}': {key} must be a number, received {value!r}.")

        for key in sorted(_COLOR_FIELDS):
            value = getattr(self, key)
            if not isinstance(value, colors.Color):
                raise ThemeError(f"Theme '{self.name}': {key} must be a colour, received {value!r}.")

        for key in sorted(_FONT_FIELDS):
            font_name = getattr(self, key)
            try:
                pdfmetrics.getFont(font_name)
            except Exception as exc:
                raise ThemeError(
                    f"Theme '{self.name}': {key} '{font_name}' is not a registered font."
                ) from exc

        non_negative = {
            "margin_mm": self.margin_mm,
            "title_margin_mm": self.title_margin_mm,
            "border_width": self.border_width,
            "divider_width": self.divider_width,
            "folio_offset_mm": self.folio_offset_mm,
            "body_offset_mm": self.body_offset_mm,
            "page_number_inset_mm": self.page_number_inset_mm,
        }
        if self.border_inset_mm is not None:
            non_negative["border_inset_mm"] = self.border_inset_mm
        for key, value in non_negative.items():
            if value < 0:
                raise ThemeError(f"Theme '{self.name}': {key} must not be negative, received {value}.")

        positive = {
            "title_size": self.title_size,
            "subtitle_size": self.subtitle_size,
            "branding_size": self.branding_size,
            "folio_size": self.folio_size,
            "body_size": self.body_size,
            "page_number_size": self.page_number_size,
            "line_height": self.line_height,
        }
        for key, value in positive.items():
            if value <= 0:
                raise ThemeError(f"Theme '{self.name}': {key} must be positive, received {value}.")

        if self.page_number_style not in PAGE_NUMBER_STYLES:
            raise ThemeError(
                f"Theme '{self.name}': unknown page_number_style '{self.page_number_style}'. "
                f"Expected one of: {', '.join(PAGE_NUMBER_STYLES)}."
            )

        width, height = page_size
        if width <= 0 or height <= 0:
            raise ThemeError(f"Page size must be positive, received {page_size}.")

        text_width = width / 2 - 2 * self.margin
        if text_width <= 0:
            raise ThemeError(
                f"Theme '{self.name}': margins of {self.margin_mm}mm leave no room for text "
                f"on a {width / mm:.0f}mm wide page."
            )
        if width - 2 * self.title_margin_mm * mm <= 0:
            raise ThemeError(f"Theme '{self.name}': title margins leave no room for the title.")
        if self.body_offset_mm * mm >= height:
            raise ThemeError(f"Theme '{self.name}': body_offset_mm falls outside the page.")

        try:
            self.folio_template.format(number=1, total=1)
            self.subtitle_template.format(genre="", mood="", style="")
        except (KeyError, IndexError, ValueError) as exc:
            raise ThemeError(f"Theme '{self.name}': invalid text template ({exc}).") from exc


CHRONICLE = Theme(
    name="chronicle",
    margin_mm=25,
    title_margin_mm=30,
    border_inset_mm=15,
    border_width=0.5 * mm,
    divider_width=1 * mm,
    folio_offset_mm=20,
    body_offset_mm=45,
    page_number_inset_mm=15,
    title_font="Times-Bold",
    title_size=54,
    subtitle_font="Times-Italic",
    subtitle_size=24,
    branding_font="Times-Italic",
    branding_size=10,
    folio_font="Times-Bold",
    folio_size=10,
    body_font="Times-Roman",
    body_size=16,
    page_number_font="Times-Roman",
    page_number_size=11,
    line_height=1.6,
    cover_background=colors.HexColor("#0F172A"),
    border_color=colors.HexColor("#C79900"),
    title_color=colors.white,
    subtitle_color=colors.HexColor("#64748B"),
    branding_color=colors.HexColor("#64748B"),
    placeholder_color=colors.HexColor("#F1F5F9"),
    paper_color=colors.HexColor("#FEFDFB"),
    divider_color=colors.HexColor("#DCDCDC"),
    folio_color=colors.HexColor("#B4B4B4"),
    body_color=colors.HexColor("#1E293B"),
    page_number_color=colors.HexColor("#D2D2D2"),
)

PARCHMENT = CHRONICLE.with_overrides(
    name="parchment",
    margin_mm=22,
    border_inset_mm=12,
    border_width=1.2 * mm,
    divider_width=0.6 * mm,
    body_size=15,
    line_height=1.5,
    subtitle_template="A {mood} {genre} tale",
    cover_background=colors.HexColor("#3B2A1A"),
    border_color=colors.HexColor("#B08D57"),
    title_color=colors.HexColor("#F5E6C8"),
    subtitle_color=colors.HexColor("#D8C3A0"),
    branding_color=colors.HexColor("#D8C3A0"),
    placeholder_color=colors.HexColor("#E9DFCB"),
    paper_color=colors.HexColor("#F7F0E1"),
    divider_color=colors.HexColor("#CDB992"),
    folio_color=colors.HexColor("#A08F72"),
    body_color=colors.HexColor("#3B2A1A"),
    page_number_color=colors.HexColor("#A08F72"),
    folio_template="FOLIO {number} / {total}",
)

STORYBOOK = CHRONICLE.with_overrides(
    name="storybook",
    margin_mm=20,
    title_margin_mm=24,
    border_inset_mm=None,
    folio_offset_mm=18,
    body_offset_mm=40,
    title_font="Helvetica-Bold",
    title_size=48,
    subtitle_font="Helvetica-Oblique",
    subtitle_size=20,
    branding_font="Helvetica",
    folio_font="Helvetica-Bold",
    folio_size=9,
    body_font="Helvetica",
    body_size=15,
    page_number_font="Helvetica",
    page_number_size=12,
    line_height=1.45,
    subtitle_template="A {mood} {genre} story",
    branding="Bound with Storyfolio",
    cover_background=colors.HexColor("#6C4FD3"),
    title_color=colors.white,
    subtitle_color=colors.HexColor("#FFE3B3"),
    branding_color=colors.HexColor("#E8E2FF"),
    placeholder_color=colors.HexColor("#E8F5FF"),
    paper_color=colors.HexColor("#F5F1FF"),
    divider_color=colors.HexColor("#D9D0F5"),
    folio_color=colors.HexColor("#9C95B8"),
    body_color=colors.HexColor("#2F2A40"),
    page_number_color=colors.HexColor("#4B506D"),
    folio_template="FOLIO {number} / {total}",
    page_number_style="ornament",
)

THEMES: dict[str, Theme] = {theme.name: theme for theme in (CHRONICLE, PARCHMENT, STORYBOOK)}

_COLOR_FIELDS = {f.name for f in fields(Theme) if f.name.endswith(("_color", "_background"))}
_THEME_FIELDS = {f.name for f in fields(Theme)}
_FONT_FIELDS = {name for name in _THEME_FIELDS if name.endswith("_font")}
_OPTIONAL_FIELDS = {"border_inset_mm"}
_NUMERIC_FIELDS = {
    name for name in _THEME_FIELDS if name.endswith(("_mm", "_size", "_width")) or name == "line_height"
}


def get_theme(name: str) -> Theme:
    try:
        return THEMES[name.strip().lower()]
    except KeyError:
        raise ThemeError(
            f"Unknown theme '{name}'. Available themes: {', '.join(sorted(THEMES))}."
        ) from None


def theme_from_mapping(data: Mapping[str, Any]) -> Theme:
    """
    Build a theme from a ``base`` preset plus field overrides.

    Colour values may be given as hex strings (``"#0F172A"``), integers or RGB
    lists; numeric values are coerced to floats.
    """
    overrides = dict(data)
    base = get_theme(str(overrides.pop("base", "chronicle")))

    unknown = sorted(set(overrides) - _THEME_FIELDS)
    if unknown:
        raise ThemeError(f"Unknown theme fields: {', '.join(unknown)}.")

    for key in _COLOR_FIELDS & set(overrides):
        value = overrides[key]
        if isinstance(value, colors.Color):
            continue
        try:
            overrides[key] = colors.HexColor(value) if isinstance(value, (str, int)) else colors.toColor(value)
        except (AssertionError, TypeError, ValueError) as exc:
            raise ThemeError(f"Invalid colour for {key}: {value!r}.") from exc

    for key in _NUMERIC_FIELDS & set(overrides):
        value = overrides[key]
        if value is None and key in _OPTIONAL_FIELDS:
            continue
        if isinstance(value, bool):
            raise ThemeError(f"Invalid number for {key}: {value!r}.")
        try:
            overrides[key] = float(value)
        except (TypeError, ValueError) as exc:
            raise ThemeError(f"Invalid number for {key}: {value!r}.") from exc

    overrides.setdefault("name", f"{base.name}-custom")
    return base.with_overrides(**overrides)


def load_theme(source: str | Path) -> Theme:
    path = Path(source)
    data = yaml.safe_load(path.read_text(encoding="utf-8"))
    if not isinstance(data, Mapping):
        raise ThemeError("Theme YAML must deserialize to a mapping.")
    return theme_from_mapping(data)


def resolve_theme(value: Theme | str | Path) -> Theme:
    """Accept a theme, a preset name or a path to a YAML theme file."""
    if isinstance(value, Theme):
        return value
    candidate = Path(value)
    if candidate.suffix.lower() in {".yaml", ".yml"}:
        return load_theme(candidate)
    return get_theme(str(value))
