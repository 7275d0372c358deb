"""
Source image probing.
"""
from pathlib import Path
from PIL import Image, UnidentifiedImageError
import logging

from ..core.extensions import format_from_path, format_from_pil
from ..core.interfaces import ImageDimensions, ImageFormat, SourceImageInfo

logger = logging.getLogger(__name__)

EXIF_ORIENTATION = 0x0112


def probe_source(path) -> SourceImageInfo:
    """
    Read dimensions and format of a source image with Pillow.

    Dimensions are reported after EXIF orientation, matching what
    -auto-orient produces before any resize. Documents Pillow cannot open
    (PDF) are described from the file suffix with unknown (0x0) dimensions.

    Raises:
        ValueError: If the file does not exist or is not a readable image.
    """
    path = Path(path)
    if not path.is_file():
        raise ValueError(f"Image file does not exist: {path}")

    try:
        with Image.open(path) as img:
            width, height = img.size
            image_format = format_from_pil(img.format)
            orientation = img.getexif().get(EXIF_ORIENTATION)
    except UnidentifiedImageError:
        image_format = format_from_path(path)
        if image_format is not ImageFormat.PDF:
            raise ValueError(f"Unreadable image: {path}") from None
        logger.debug(f"Probing {path.name} by suffix only")
        return SourceImageInfo(str(path), ImageDimensions(0, 0), image_format)

    if orientation in (5, 6, 7, 8):
        width, height = height, width

    if image_format is ImageFormat.UNKNOWN:
        image_format = format_from_path(path)

    return SourceImageInfo(str(path), ImageDimensions(width, height), image_format)
