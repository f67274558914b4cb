"""
Read-only story snapshots handed to the exporter.
"""

from __future__ import annotations

import json
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Mapping, Union

import yaml

# Anything the artwork loader knows how to turn into a drawable image: encoded
# bytes, a URL / data URI / path string, a Path, a Pillow image or an ImageReader.
ImageSource = Union[bytes, str, Path, Any]


def _coerce_optional_str(value: Any) -> str | None:
    if value is None:
        return None

    text = str(value).strip()
    return text or None


def _coerce_timestamp(value: Any) -> datetime:
    if value is None or value == "":
        return datetime.now(timezone.utc)

    if isinstance(value, datetime):
        return value if value.tzinfo else value.replace(tzinfo=timezone.utc)

    if isinstance(value, (int, float)) and not isinstance(value, bool):
        # Archived stories carry JavaScript-style epoch milliseconds.
        return datetime.fromtimestamp(value / 1000.0, tz=timezone.utc)

    if isinstance(value, str):
        text = value.strip()
        if text.isdigit():
            return datetime.fromtimestamp(int(text) / 1000.0, tz=timezone.utc)
        try:
            parsed = datetime.fromisoformat(text.replace("Z", "+00:00"))
        except ValueError as exc:
            raise ValueError(f"Invalid createdAt timestamp: {value!r}") from exc
        return parsed if parsed.tzinfo else parsed.replace(tzinfo=timezone.utc)

    raise ValueError(f"Unsupported createdAt value: {value!r}")


@dataclass(frozen=True)
class StoryPage:
    """
    A single illustrated page of a story.

    ``audio_data`` holds base64 narration for the playback collaborator; the
    exporter never reads it.
    """

    text: str
    image: ImageSource | None = None
    audio_data: str | None = None

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"text": self.text}
        if isinstance(self.image, (str, Path)):
            payload["imageUrl"] = str(self.image)
        if self.audio_data:
            payload["audioData"] = self.audio_data
        return payload

    @classmethod
    def from_dict(cls, entry: Mapping[str, Any]) -> "StoryPage":
        if not isinstance(entry, Mapping):
            raise ValueError(f"Invalid page entry: {entry!r}")
        if "text" not in entry:
            raise ValueError(f"Page entry is missing 'text': {entry!r}")

        image = entry.get("imageUrl", entry.get("image_url"))
        if isinstance(image, str):
            image = image.strip() or None

        return cls(
            text=str(entry["text"] or ""),
            image=image,
            audio_data=_coerce_optional_str(entry.get("audioData", entry.get("audio_data"))),
        )


@dataclass(frozen=True)
class Story:
    """Complete story snapshot: title, descriptors and ordered pages."""

    title: str
    pages: tuple[StoryPage, ...]
    genre: str = ""
    mood: str = ""
    style: str = ""
    id: str = field(default_factory=lambda: uuid.uuid4().hex)
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def __post_init__(self) -> None:
        if not isinstance(self.title, str) or not self.title.strip():
            raise ValueError("Story title must be a non-empty string.")
        # Accept any sequence from callers but freeze the page order.
        object.__setattr__(self, "pages", tuple(self.pages))

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "genre": self.genre,
            "mood": self.mood,
            "style": self.style,
            "createdAt": self.created_at.isoformat(),
            "pages": [page.to_dict() for page in self.pages],
        }

    def to_yaml(self) -> str:
        return yaml.safe_dump(self.to_dict(), sort_keys=False, allow_unicode=True)

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "Story":
        if "title" not in payload:
            raise ValueError("Story payload must include 'title'.")
        if "pages" not in payload:
            raise ValueError("Story payload must include 'pages'.")

        pages_payload = payload.get("pages") or []
        if not isinstance(pages_payload, list):
            raise ValueError("Story 'pages' must be a list.")

        pages = tuple(StoryPage.from_dict(entry) for entry in pages_payload)

        story_id = _coerce_optional_str(payload.get("id")) or uuid.uuid4().hex
        created_at = _coerce_timestamp(payload.get("createdAt", payload.get("created_at")))

        return cls(
            id=story_id,
            title=str(payload["title"] or "").strip(),
            genre=_coerce_optional_str(payload.get("genre")) or "",
            mood=_coerce_optional_str(payload.get("mood")) or "",
            style=_coerce_optional_str(payload.get("style")) or "",
            pages=pages,
            created_at=created_at,
        )

    @classmethod
    def from_yaml(cls, source: str | Path) -> "Story":
        path = Path(source)
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
        if not isinstance(data, Mapping):
            raise ValueError("Story YAML must deserialize to a mapping.")
        return cls.from_dict(data)

    @classmethod
    def from_json(cls, source: str | Path) -> "Story":
        path = Path(source)
        data = json.loads(path.read_text(encoding="utf-8"))
        if not isinstance(data, Mapping):
            raise ValueError("Story JSON must deserialize to a mapping.")
        return cls.from_dict(data)

    @classmethod
    def from_file(cls, source: str | Path) -> "Story":
        path = Path(source)
        suffix = path.suffix.lower()
        if suffix in {".yaml", ".yml"}:
            return cls.from_yaml(path)
        if suffix == ".json":
            return cls.from_json(path)
        raise ValueError("Unsupported story file format. Use YAML or JSON.")
