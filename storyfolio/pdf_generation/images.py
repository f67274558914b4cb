"""
Resolve story page image references into drawable reportlab images.
"""

from __future__ import annotations

import base64
import binascii
import logging
from io import BytesIO
from pathlib import Path
from typing import Any

import requests
from reportlab.lib.utils import ImageReader

from storyfolio.common.errors import ArtworkError

logger = logging.getLogger(__name__)


class ImageLoader:
    """
    Turn a page's image reference into an :class:`ImageReader`.

    Supported references: encoded bytes, ``data:`` URIs, http(s) URLs,
    filesystem paths, Pillow images and ready-made ``ImageReader`` objects.
    Every failure surfaces as :class:`ArtworkError` so the caller can fall back
    to a placeholder.
    """

    def __init__(
        self,
        *,
        request_timeout: float = 30.0,
        session: requests.Session | None = None,
    ) -> None:
        self.request_timeout = request_timeout
        self._session = session or requests.Session()

    def load(self, source: Any) -> ImageReader | None:
        if source is None:
            return None

        if isinstance(source, ImageReader):
            reader = source
        elif isinstance(source, (bytes, bytearray)):
            reader = self._from_bytes(bytes(source))
        elif isinstance(source, Path):
            reader = self._from_path(source)
        elif isinstance(source, str):
            reader = self._from_string(source)
        else:
            # Pillow images and file-like objects are accepted by ImageReader as-is.
            reader = self._wrap(source)

        # ImageReader decodes lazily; force it so broken artwork fails here, not mid-draw.
        try:
            width, height = reader.getSize()
        except Exception as exc:
            raise ArtworkError(f"Unable to decode image: {exc}") from exc
        if not width or not height:
            raise ArtworkError("Image has no drawable area.")
        return reader

    def _from_string(self, reference: str) -> ImageReader:
        candidate = reference.strip()
        if not candidate:
            raise ArtworkError("Empty image reference.")
        lowered = candidate.lower()
        if lowered.startswith("data:"):
            return self._from_data_uri(candidate)
        if lowered.startswith(("http://", "https://")):
            return self._from_url(candidate)
        return self._from_path(Path(candidate).expanduser())

    def _from_data_uri(self, uri: str) -> ImageReader:
        header, sep, payload = uri.partition(",")
        if not sep:
            raise ArtworkError("Malformed data URI: missing payload.")
        if ";base64" not in header.lower():
            raise ArtworkError("Only base64-encoded data URIs are supported.")
        try:
            data = base64.b64decode(payload, validate=False)
        except (binascii.Error, ValueError) as exc:
            raise ArtworkError("Data URI payload is not valid base64.") from exc
        return self._from_bytes(data)

    def _from_url(self, url: str) -> ImageReader:
        try:
            response = self._session.get(url, timeout=self.request_timeout)
            response.raise_for_status()
        except requests.RequestException as exc:
            raise ArtworkError(f"Failed to download image from {url}: {exc}") from exc
        logger.debug("Fetched %d bytes of artwork from %s", len(response.content), url)
        return self._from_bytes(response.content)

    def _from_path(self, path: Path) -> ImageReader:
        try:
            data = path.read_bytes()
        except (OSError, ValueError) as exc:
            raise ArtworkError(f"Unable to read image file {path}: {exc}") from exc
        return self._from_bytes(data)

    def _from_bytes(self, data: bytes) -> ImageReader:
        if not data:
            raise ArtworkError("Image data is empty.")
        return self._wrap(BytesIO(data))

    @staticmethod
    def _wrap(source: Any) -> ImageReader:
        try:
            return ImageReader(source)
        except Exception as exc:
            raise ArtworkError(f"Unsupported image source: {exc}") from exc
