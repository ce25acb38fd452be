"""Canonical image payload produced by preprocessing."""

from __future__ import annotations

import base64
from dataclasses import dataclass

SUPPORTED_FORMATS: tuple[str, ...] = ("image/jpeg", "image/png", "image/gif", "image/webp")


@dataclass(frozen=True)
class ImageBlob:
    """Encoded image bytes plus the facts the vision model request needs."""

    data: bytes
    mime_type: str
    width: int
    height: int

    @property
    def size_bytes(self) -> int:
        return len(self.data)

    @property
    def base64(self) -> str:
        return base64.b64encode(self.data).decode("ascii")

    @property
    def data_uri(self) -> str:
        return f"data:{self.mime_type};base64,{self.base64}"
