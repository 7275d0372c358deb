"""
thumbkit - ImageMagick command synthesis for on-the-fly image conversion.

Turns a bag of requested transformations into one ordered, shell-escaped
convert command line:
- Resize, fill-and-crop with gravity, shrink-only sizing
- PDF page and GIF frame selection
- Colorspace, monochrome, metadata stripping and filter passthrough
- WebP, MozJPEG or plain ImageMagick output encoding

Example usage:
    from thumbkit import ImageProcessor

    processor = ImageProcessor()
    request = processor.create_request(
        "photo.jpg",
        {"width": 800, "height": 600, "crop": True, "gravity": "center", "quality": 85},
        "thumb.jpg",
    )

    command = processor.generate_command(request)
    print(command)

    # Or run it
    result = processor.process_new_image(request)
"""

from .core.exceptions import ThumbkitError, ConfigurationError, ExecutionError
from .core.interfaces import (
    ImageFormat,
    OutputExtension,
    Encoder,
    ImageDimensions,
    SourceImageInfo,
    OutputSpec,
    ConversionRequest,
    ProcessorConfig,
)
from .core.options import OptionsBag, OptionValue, Presence
from .core.extensions import format_from_path, output_extension
from .command import (
    Command,
    CommandBuilder,
    CommandRunner,
    EncoderPipeline,
    ExecutableProbe,
    GeometryCache,
    ResizeMode,
    SizeResolver,
)
from .image import ImageProcessor, ConversionResult, probe_source

__version__ = "1.0.0"

__all__ = [
    # Main facade
    "ImageProcessor",
    "ProcessorConfig",
    "ConversionResult",

    # Core types
    "ImageFormat",
    "OutputExtension",
    "Encoder",
    "ImageDimensions",
    "SourceImageInfo",
    "OutputSpec",
    "ConversionRequest",

    # Options
    "OptionsBag",
    "OptionValue",
    "Presence",

    # Command synthesis
    "Command",
    "CommandBuilder",
    "CommandRunner",
    "EncoderPipeline",
    "ExecutableProbe",
    "GeometryCache",
    "ResizeMode",
    "SizeResolver",

    # Helpers
    "probe_source",
    "format_from_path",
    "output_extension",

    # Errors
    "ThumbkitError",
    "ConfigurationError",
    "ExecutionError",
]
