"""
Pytest configuration and fixtures for thumbkit tests.
"""
import pytest
import tempfile
import shutil
from pathlib import Path
from PIL import Image

from thumbkit.core.interfaces import (
    ConversionRequest,
    Encoder,
    IEncoderProbe,
    ImageDimensions,
    ImageFormat,
    OutputExtension,
    OutputSpec,
    SourceImageInfo,
)
from thumbkit.core.options import OptionsBag


class FakeProbe(IEncoderProbe):
    """Encoder probe answering from a fixed set, recording every question."""

    def __init__(self, available=()):
        self.available = set(available)
        self.calls = []

    def is_available(self, encoder: Encoder) -> bool:
        self.calls.append(encoder)
        return encoder in self.available


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests."""
    temp_path = Path(tempfile.mkdtemp(prefix="thumbkit_test_"))
    yield temp_path
    shutil.rmtree(temp_path, ignore_errors=True)


@pytest.fixture
def sample_image(temp_dir) -> Path:
    """Create a sample test image."""
    image_path = temp_dir / "test_image.jpg"
    img = Image.new("RGB", (800, 600), color="blue")
    img.save(image_path, "JPEG", quality=90)
    return image_path


@pytest.fixture
def gif_image(temp_dir) -> Path:
    """Create a small animated GIF."""
    image_path = temp_dir / "animated.gif"
    frames = [Image.new("P", (120, 80), color=i) for i in range(4)]
    frames[0].save(image_path, "GIF", save_all=True, append_images=frames[1:])
    return image_path


@pytest.fixture
def no_encoders():
    return FakeProbe()


@pytest.fixture
def all_encoders():
    return FakeProbe({Encoder.CWEBP, Encoder.MOZJPEG})


@pytest.fixture
def jpeg_source() -> SourceImageInfo:
    return SourceImageInfo("/tmp/source.jpg", ImageDimensions(1000, 1000), ImageFormat.JPEG)


@pytest.fixture
def jpg_output() -> OutputSpec:
    return OutputSpec.for_extension("/tmp/out.jpg", OutputExtension.JPG)


@pytest.fixture
def make_request(jpeg_source, jpg_output):
    """Factory for conversion requests with sensible defaults."""
    def _make(options=None, source=None, output=None):
        return ConversionRequest(
            source=source or jpeg_source,
            options=options if isinstance(options, OptionsBag) else OptionsBag(options),
            output=output or jpg_output,
        )
    return _make


@pytest.fixture
def make_probe():
    """The FakeProbe class, for tests that need a specific encoder set."""
    return FakeProbe
