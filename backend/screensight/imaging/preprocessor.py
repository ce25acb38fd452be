"""Screenshot ingestion: load, validate, decode, resize and re-encode into an ImageBlob.

Sources may be raw bytes, an http(s) URL, a ``data:`` URI, or a bare base64
string (assumed JPEG). Size and MIME checks run before any pixel decode.
"""

from __future__ import annotations

import asyncio
import base64
import binascii
import io
import logging
import re
from collections.abc import Awaitable, Callable, Sequence
from dataclasses import dataclass, field

import numpy as np
from PIL import Image

from screensight.config import Settings, settings as default_settings
from screensight.errors import (
    BatchFailed,
    DecodeError,
    FetchError,
    TooLarge,
    UnsupportedFormat,
    VisionError,
)
from screensight.models.image import SUPPORTED_FORMATS, ImageBlob
from screensight.models.options import PreprocessingOptions

logger = logging.getLogger(__name__)

DEFAULT_MIME = "image/jpeg"

_PIL_FORMATS = {
    "image/jpeg": "JPEG",
    "image/png": "PNG",
    "image/gif": "GIF",
    "image/webp": "WEBP",
}

_DATA_URI_RE = re.compile(r"^data:(?P<mime>[\w.+-]+/[\w.+-]+)?(?P<params>(?:;[^,;]*)*),(?P<payload>.*)$", re.DOTALL)

# url -> (body, content-type header or None)
Fetcher = Callable[[str], Awaitable[tuple[bytes, str | None]]]


def sniff_mime(data: bytes) -> str:
    """MIME type from magic bytes; empty string when unrecognized."""
    if data.startswith(b"\xff\xd8\xff"):
        return "image/jpeg"
    if data.startswith(b"\x89PNG\r\n\x1a\n"):
        return "image/png"
    if data[:6] in (b"GIF87a", b"GIF89a"):
        return "image/gif"
    if data[:4] == b"RIFF" and data[8:12] == b"WEBP":
        return "image/webp"
    return ""


def compute_target_size(width: int, height: int, max_width: int, max_height: int) -> tuple[int, int]:
    """Fit inside max_width × max_height keeping aspect ratio. Never upscales."""
    if width <= max_width and height <= max_height:
        return width, height
    scale = min(max_width / width, max_height / height)
    return max(1, round(width * scale)), max(1, round(height * scale))


def estimated_decoded_size(payload: str) -> int:
    """Decoded size of a base64 payload, without decoding it. Embedded whitespace counts."""
    stripped = payload.strip()
    return len(stripped) * 3 // 4 - stripped[-2:].count("=")


def _decode_base64(payload: str) -> bytes:
    try:
        return base64.b64decode(payload.strip(), validate=False)
    except (binascii.Error, ValueError) as e:
        raise DecodeError(f"Invalid base64 payload: {e}") from e


async def _httpx_fetch(url: str, timeout_s: float) -> tuple[bytes, str | None]:
    import httpx

    async with httpx.AsyncClient(timeout=timeout_s, follow_redirects=True) as client:
        response = await client.get(url)
        response.raise_for_status()
        return response.content, response.headers.get("content-type")


@dataclass
class PreprocessBatch:
    images: list[ImageBlob] = field(default_factory=list)
    # (source index, error)
    errors: list[tuple[int, VisionError]] = field(default_factory=list)


class ImagePreprocessor:
    def __init__(self, settings: Settings | None = None, fetcher: Fetcher | None = None) -> None:
        self._settings = settings or default_settings
        self._fetcher = fetcher

    # ── Loading ──

    async def _fetch(self, url: str) -> tuple[bytes, str]:
        try:
            if self._fetcher is not None:
                data, content_type = await self._fetcher(url)
            else:
                data, content_type = await _httpx_fetch(url, self._settings.url_fetch_timeout_s)
        except VisionError:
            raise
        except Exception as e:
            raise FetchError(f"Failed to load image from URL {url}: {e}", details=str(e)) from e

        mime = (content_type or "").split(";")[0].strip().lower()
        if not mime.startswith("image/"):
            mime = sniff_mime(data)
        return data, mime

    async def _load(self, source: bytes | bytearray | str) -> tuple[bytes, str]:
        if isinstance(source, (bytes, bytearray)):
            data = bytes(source)
            return data, sniff_mime(data)

        if source.startswith(("http://", "https://")):
            return await self._fetch(source)

        if source.startswith("data:"):
            match = _DATA_URI_RE.match(source)
            if not match or ";base64" not in match.group("params"):
                raise DecodeError("Invalid data URL format")
            mime = (match.group("mime") or "").lower()
            if mime not in SUPPORTED_FORMATS:
                raise UnsupportedFormat(mime, SUPPORTED_FORMATS)
            payload = match.group("payload")
            self._check_encoded_size(payload)
            return _decode_base64(payload), mime

        self._check_encoded_size(source)
        return _decode_base64(source), DEFAULT_MIME

    def _check_encoded_size(self, payload: str) -> None:
        estimate = estimated_decoded_size(payload)
        if estimate > self._settings.image_max_bytes:
            raise TooLarge(estimate, self._settings.image_max_bytes)

    def _check(self, data: bytes, mime: str) -> None:
        if len(data) > self._settings.image_max_bytes:
            raise TooLarge(len(data), self._settings.image_max_bytes)
        if mime not in SUPPORTED_FORMATS:
            raise UnsupportedFormat(mime, SUPPORTED_FORMATS)

    # ── Encoding ──

    def _encode(self, img: Image.Image, mime: str, quality: int) -> bytes:
        pil_format = _PIL_FORMATS[mime]
        if pil_format == "JPEG" and img.mode != "RGB":
            rgba = img.convert("RGBA")
            flat = Image.new("RGB", rgba.size, (255, 255, 255))
            flat.paste(rgba, mask=rgba.split()[-1])
            img = flat
        elif pil_format != "JPEG" and img.mode not in ("RGB", "RGBA", "L", "P"):
            img = img.convert("RGBA")

        buf = io.BytesIO()
        if pil_format in ("JPEG", "WEBP"):
            img.save(buf, format=pil_format, quality=quality)
        else:
            img.save(buf, format=pil_format)
        return buf.getvalue()

    def validate_dimensions(self, width: int, height: int) -> bool:
        limit = self._settings.image_max_dimension
        return 0 < width <= limit and 0 < height <= limit

    # ── Public API ──

    async def process(
        self, source: bytes | bytearray | str, options: PreprocessingOptions | None = None
    ) -> ImageBlob:
        """Raises TooLarge, UnsupportedFormat, DecodeError or FetchError."""
        opts = options or PreprocessingOptions()
        max_width = opts.max_width or self._settings.image_max_width
        max_height = opts.max_height or self._settings.image_max_height
        quality = opts.quality or self._settings.image_quality
        out_mime = (opts.format or self._settings.image_output_format).lower()
        if out_mime not in SUPPORTED_FORMATS:
            raise UnsupportedFormat(out_mime, SUPPORTED_FORMATS)

        data, mime = await self._load(source)
        self._check(data, mime)

        # Pillow work runs off the event loop
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(
            None, self._transform, data, mime, max_width, max_height, quality, out_mime
        )

    def _transform(
        self, data: bytes, mime: str, max_width: int, max_height: int, quality: int, out_mime: str
    ) -> ImageBlob:
        try:
            img = Image.open(io.BytesIO(data))
            img.load()
        except Exception as e:
            raise DecodeError(f"Failed to decode {mime} image: {e}") from e

        src_width, src_height = img.size
        width, height = compute_target_size(src_width, src_height, max_width, max_height)
        if not self.validate_dimensions(width, height):
            raise DecodeError(f"Invalid image dimensions {width}x{height}")
        if (width, height) != img.size:
            if img.mode not in ("RGB", "RGBA"):
                img = img.convert("RGBA")
            img = img.resize((width, height), Image.Resampling.LANCZOS)

        encoded = self._encode(img, out_mime, quality)
        logger.debug(
            "Preprocessed %s %dx%d (%d bytes) -> %s %dx%d (%d bytes)",
            mime, src_width, src_height, len(data), out_mime, width, height, len(encoded),
        )
        return ImageBlob(data=encoded, mime_type=out_mime, width=width, height=height)

    def auto_crop(self, image: ImageBlob, padding: int = 20) -> ImageBlob:
        """Trim fully transparent margins, keeping ``padding`` px around the content.

        Never raises: on any failure the input image is returned unchanged.
        """
        try:
            img = Image.open(io.BytesIO(image.data)).convert("RGBA")
            alpha = np.asarray(img)[:, :, 3]
            rows = np.flatnonzero(alpha.any(axis=1))
            cols = np.flatnonzero(alpha.any(axis=0))
            if rows.size == 0:
                return image

            top = max(0, int(rows[0]) - padding)
            bottom = min(img.height, int(rows[-1]) + 1 + padding)
            left = max(0, int(cols[0]) - padding)
            right = min(img.width, int(cols[-1]) + 1 + padding)
            if (left, top, right, bottom) == (0, 0, img.width, img.height):
                return image

            cropped = img.crop((left, top, right, bottom))
            encoded = self._encode(cropped, image.mime_type, self._settings.image_quality)
            return ImageBlob(
                data=encoded, mime_type=image.mime_type, width=cropped.width, height=cropped.height
            )
        except Exception as e:
            logger.debug("Auto-crop failed, keeping original image: %s", e)
            return image

    async def batch_process(
        self,
        sources: Sequence[bytes | bytearray | str],
        options: PreprocessingOptions | None = None,
    ) -> PreprocessBatch:
        """Process each source on its own. Raises BatchFailed only if none succeeded."""
        batch = PreprocessBatch()
        for index, source in enumerate(sources):
            try:
                batch.images.append(await self.process(source, options))
            except VisionError as e:
                logger.warning("Failed to preprocess image %d: %s", index, e)
                batch.errors.append((index, e))

        if not batch.images and batch.errors:
            raise BatchFailed(
                f"All {len(batch.errors)} images failed preprocessing",
                [e for _, e in batch.errors],
            )
        return batch
