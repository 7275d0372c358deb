"""
Core module - Interfaces, data types, options and errors for thumbkit.
"""
from .exceptions import ConfigurationError, ExecutionError, ThumbkitError
from .interfaces import (
    # Enums
    ImageFormat,
    OutputExtension,
    Encoder,

    # Data classes
    ImageDimensions,
    SourceImageInfo,
    OutputSpec,
    ConversionRequest,
    ProcessorConfig,

    # Abstract interfaces
    IEncoderProbe,
    ICommandGenerator,
    ICommandRunner,
)
from .options import OptionsBag, OptionValue, Presence

__all__ = [
    # Enums
    "ImageFormat",
    "OutputExtension",
    "Encoder",

    # Data classes
    "ImageDimensions",
    "SourceImageInfo",
    "OutputSpec",
    "ConversionRequest",
    "ProcessorConfig",

    # Abstract interfaces
    "IEncoderProbe",
    "ICommandGenerator",
    "ICommandRunner",

    # Options
    "OptionsBag",
    "OptionValue",
    "Presence",

    # Errors
    "ThumbkitError",
    "ConfigurationError",
    "ExecutionError",
]
