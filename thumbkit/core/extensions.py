"""
Centralized image file extensions and format lookups.
"""
from pathlib import Path

from .interfaces import ImageFormat, OutputExtension

FORMAT_EXTENSIONS = {
    '.jpg': ImageFormat.JPEG,
    '.jpeg': ImageFormat.JPEG,
    '.png': ImageFormat.PNG,
    '.gif': ImageFormat.GIF,
    '.pdf': ImageFormat.PDF,
    '.webp': ImageFormat.WEBP,
    '.bmp': ImageFormat.BMP,
    '.tif': ImageFormat.TIFF,
    '.tiff': ImageFormat.TIFF,
}

# Pillow's Image.format names
PIL_FORMATS = {
    'JPEG': ImageFormat.JPEG,
    'MPO': ImageFormat.JPEG,
    'PNG': ImageFormat.PNG,
    'GIF': ImageFormat.GIF,
    'PDF': ImageFormat.PDF,
    'WEBP': ImageFormat.WEBP,
    'BMP': ImageFormat.BMP,
    'TIFF': ImageFormat.TIFF,
}

OUTPUT_EXTENSIONS = {
    'jpg': OutputExtension.JPG,
    'jpeg': OutputExtension.JPG,
    'png': OutputExtension.PNG,
    'gif': OutputExtension.GIF,
    'webp': OutputExtension.WEBP,
}


def format_from_path(path) -> ImageFormat:
    """Guess the image format from a file suffix."""
    return FORMAT_EXTENSIONS.get(Path(path).suffix.lower(), ImageFormat.UNKNOWN)


def format_from_pil(name) -> ImageFormat:
    """Map a Pillow format name to an ImageFormat."""
    return PIL_FORMATS.get((name or "").upper(), ImageFormat.UNKNOWN)


def output_extension(value) -> OutputExtension:
    """
    Resolve an output extension from a name or a path.

    Raises:
        ValueError: If the extension is not a supported output type.
    """
    name = str(value).lower()
    suffix = Path(name).suffix
    # bare names like "jpg" or ".jpg" have no suffix of their own
    name = suffix.lstrip(".") if suffix else name.lstrip(".")
    try:
        return OUTPUT_EXTENSIONS[name]
    except KeyError:
        raise ValueError(f"Unsupported output extension: {value}") from None
