from __future__ import annotations

"""
Raster Image Processing.

Pillow-backed dimension probing and proportional resizing for PNG/JPEG
assets. Exposed as an ImageProcessor object so the tree builder and the
publisher receive it explicitly and tests can swap in a double.
"""

import io
import logging
from typing import Tuple

from PIL import Image

logger = logging.getLogger(__name__)

# Failures an image can raise while being decoded, probed or resized
IMAGE_ERRORS = (OSError, ValueError, Image.DecompressionBombError)

# Encoders keyed by the format Pillow detects on decode
_SAVE_OPTIONS = {
    "JPEG": {"quality": 75},
    "PNG": {},
}


class ImageProcessor:
    """
    Decode, probe and resize raster images.

    Attributes:
        resample: Pillow resampling filter used for downscaling.
    """

    def __init__(self, resample: int = Image.BILINEAR) -> None:
        self.resample = resample

    def dimensions(self, file_path: str) -> Tuple[int, int]:
        """
        Read the pixel dimensions of an image from its header.

        Pillow defers pixel decoding until the data is accessed, so only the
        header is parsed here.

        Args:
            file_path: Absolute path to the image.

        Returns:
            Tuple[int, int]: (width, height) in pixels.

        Raises:
            OSError: If the file cannot be opened or is not a supported image.
            Image.DecompressionBombError: If the pixel count exceeds Pillow's limit.
        """
        with Image.open(file_path) as img:
            return img.size

    def probe_width(self, file_path: str) -> int:
        width, _ = self.dimensions(file_path)
        return width

    def resize(self, file_path: str, width: int) -> bytes:
        """
        Resize an image to `width`, deriving the height from the aspect ratio.

        The result is encoded with the same format as the source.

        Args:
            file_path: Absolute path to the source image.
            width: Target pixel width.

        Returns:
            bytes: Encoded image data.

        Raises:
            OSError: If decoding or encoding fails.
            ValueError: If `width` is not positive.
        """
        with Image.open(file_path) as img:
            fmt = img.format or "PNG"
            src_width, src_height = img.size
            height = max(1, round(src_height * width / src_width))

            resized = img.resize((width, height), self.resample)
            if fmt == "JPEG" and resized.mode not in ("RGB", "L"):
                resized = resized.convert("RGB")

            buff = io.BytesIO()
            resized.save(buff, format=fmt, **_SAVE_OPTIONS.get(fmt, {}))

        logger.debug(f"Resized {file_path}: {src_width}x{src_height} -> {width}x{height}")
        return buff.getvalue()


_default_processor = ImageProcessor()


def default_image_processor() -> ImageProcessor:
    """Return the shared Pillow-backed processor."""
    return _default_processor
