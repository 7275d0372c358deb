"""
Abstract interfaces and data types shared by all thumbkit components.
Collaborators are consumed through these contracts only.
"""
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Dict, Tuple

if TYPE_CHECKING:
    from ..command.command import Command
    from .options import OptionsBag


class ImageFormat(Enum):
    """Source image formats the command generator distinguishes."""
    JPEG = "jpeg"
    PNG = "png"
    GIF = "gif"
    PDF = "pdf"
    WEBP = "webp"
    BMP = "bmp"
    TIFF = "tiff"
    UNKNOWN = "unknown"


class OutputExtension(Enum):
    """Output file types."""
    JPG = "jpg"
    PNG = "png"
    GIF = "gif"
    WEBP = "webp"


class Encoder(Enum):
    """Optional external encoders that can take over the final write."""
    CWEBP = "cwebp"
    MOZJPEG = "mozjpeg"


@dataclass(frozen=True)
class ImageDimensions:
    """Represents image dimensions."""
    width: int
    height: int


@dataclass(frozen=True)
class SourceImageInfo:
    """Already-probed source image metadata. Read-only for one conversion."""
    path: str
    dimensions: ImageDimensions
    format: ImageFormat = ImageFormat.UNKNOWN

    @property
    def is_pdf(self) -> bool:
        return self.format is ImageFormat.PDF

    @property
    def is_gif(self) -> bool:
        return self.format is ImageFormat.GIF


@dataclass(frozen=True)
class OutputSpec:
    """Where and how the converted image is written."""
    path: str
    extension: OutputExtension
    is_webp: bool = False
    is_mozjpeg: bool = False

    @classmethod
    def for_extension(cls, path: str, extension: OutputExtension, mozjpeg: bool = False) -> "OutputSpec":
        """
        Build an OutputSpec deriving the encoder flags from the extension.

        Args:
            path: Output file path
            extension: Output file type
            mozjpeg: Whether MozJPEG compression was requested
        """
        return cls(
            path=str(path),
            extension=extension,
            is_webp=extension is OutputExtension.WEBP,
            is_mozjpeg=bool(mozjpeg) and extension is OutputExtension.JPG,
        )

    @property
    def is_gif(self) -> bool:
        return self.extension is OutputExtension.GIF


@dataclass(frozen=True)
class ConversionRequest:
    """One image conversion: source, requested options and output target."""
    source: SourceImageInfo
    options: "OptionsBag"
    output: OutputSpec


FORWARDED_OPTIONS = ("background", "rotate", "unsharp", "sharpen", "blur", "filter")


@dataclass
class ProcessorConfig:
    """Configuration for command generation."""
    convert_command: str = "/usr/bin/convert"
    cwebp_command: str = "/usr/bin/cwebp"
    mozjpeg_command: str = "/opt/mozjpeg/bin/cjpeg"
    forwarded_options: Tuple[str, ...] = field(default_factory=lambda: FORWARDED_OPTIONS)

    def encoder_paths(self) -> Dict[Encoder, str]:
        return {
            Encoder.CWEBP: self.cwebp_command,
            Encoder.MOZJPEG: self.mozjpeg_command,
        }


class IEncoderProbe(ABC):
    """Interface for optional encoder discovery."""

    @abstractmethod
    def is_available(self, encoder: Encoder) -> bool:
        """Whether the encoder binary can be executed on this host."""
        pass


class ICommandGenerator(ABC):
    """Interface for command synthesis."""

    @abstractmethod
    def generate_command(self, request: ConversionRequest) -> "Command":
        """Build the conversion command for one request."""
        pass


class ICommandRunner(ABC):
    """Interface for command execution."""

    @abstractmethod
    def run(self, command: "Command") -> None:
        """Execute a command, raising on failure."""
        pass
