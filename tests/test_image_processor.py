"""
Tests for source probing and the ImageProcessor facade.
"""
import pytest
from pathlib import Path
from unittest.mock import Mock
from PIL import Image

from thumbkit.command.quality import ExecutableProbe
from thumbkit.core.exceptions import ConfigurationError, ExecutionError
from thumbkit.core.interfaces import (
    ImageFormat,
    OutputExtension,
    ProcessorConfig,
)
from thumbkit.core.options import OptionsBag
from thumbkit.image import ConversionResult, ImageProcessor, probe_source


class TestProbeSource:
    """Tests for probe_source."""

    def test_jpeg(self, sample_image):
        info = probe_source(sample_image)

        assert info.path == str(sample_image)
        assert info.dimensions.width == 800
        assert info.dimensions.height == 600
        assert info.format is ImageFormat.JPEG

    def test_gif(self, gif_image):
        info = probe_source(gif_image)

        assert info.is_gif is True
        assert (info.dimensions.width, info.dimensions.height) == (120, 80)

    def test_exif_rotation_swaps_dimensions(self, temp_dir):
        path = temp_dir / "rotated.jpg"
        img = Image.new("RGB", (800, 600), color="red")
        exif = img.getexif()
        exif[0x0112] = 6
        img.save(path, "JPEG", exif=exif)

        info = probe_source(path)

        assert (info.dimensions.width, info.dimensions.height) == (600, 800)

    def test_pdf_by_suffix(self, temp_dir):
        path = temp_dir / "doc.pdf"
        path.write_bytes(b"%PDF-1.4\n%%EOF\n")

        info = probe_source(path)

        assert info.is_pdf is True
        assert info.dimensions.width == 0

    def test_nonexistent_raises(self, temp_dir):
        with pytest.raises(ValueError, match="does not exist"):
            probe_source(temp_dir / "missing.jpg")

    def test_unreadable_raises(self, temp_dir):
        path = temp_dir / "fake.jpg"
        path.write_text("not an image")

        with pytest.raises(ValueError, match="Unreadable image"):
            probe_source(path)


class TestImageProcessor:
    """Tests for ImageProcessor."""

    def test_creation_defaults(self):
        processor = ImageProcessor()

        assert processor.config.convert_command == "/usr/bin/convert"
        assert isinstance(processor.probe, ExecutableProbe)

    def test_generate_command(self, make_request, no_encoders):
        processor = ImageProcessor(probe=no_encoders)

        command = processor.generate_command(make_request({"width": 300, "quality": 85}))

        assert str(command) == "/usr/bin/convert -auto-orient /tmp/source.jpg -thumbnail 300 -quality 85 /tmp/out.jpg"

    def test_requests_do_not_share_geometry(self, make_request, no_encoders):
        processor = ImageProcessor(probe=no_encoders)

        first = processor.generate_command(make_request({"width": 300}))
        second = processor.generate_command(make_request({"width": 600, "resize": True}))

        assert "-thumbnail" in first.argv() and "300" in first.argv()
        assert "-resize" in second.argv() and "600" in second.argv()

    def test_create_request(self, sample_image, temp_dir, no_encoders):
        processor = ImageProcessor(probe=no_encoders)
        output = temp_dir / "thumb.jpg"

        request = processor.create_request(sample_image, {"width": 100, "mozjpeg": 1}, output)

        assert request.source.format is ImageFormat.JPEG
        assert request.output.extension is OutputExtension.JPG
        assert request.output.is_mozjpeg is True
        assert request.output.path == str(output)
        assert isinstance(request.options, OptionsBag)

    def test_create_request_webp(self, sample_image, temp_dir, no_encoders):
        processor = ImageProcessor(probe=no_encoders)

        request = processor.create_request(sample_image, OptionsBag(), temp_dir / "thumb.webp")

        assert request.output.is_webp is True

    def test_create_request_relative_output(self, sample_image, no_encoders):
        processor = ImageProcessor(probe=no_encoders)

        request = processor.create_request(sample_image, {"width": 100}, "./thumb.jpg")

        assert request.output.extension is OutputExtension.JPG
        assert request.output.path == "./thumb.jpg"

    def test_process_new_image(self, make_request, no_encoders):
        runner = Mock()
        processor = ImageProcessor(probe=no_encoders, runner=runner)

        result = processor.process_new_image(make_request({"width": 300}))

        assert isinstance(result, ConversionResult)
        assert result.success is True
        assert result.output_path == Path("/tmp/out.jpg")
        assert result.command == "/usr/bin/convert -auto-orient /tmp/source.jpg -thumbnail 300 /tmp/out.jpg"
        runner.run.assert_called_once()

    def test_process_new_image_propagates_failure(self, make_request, no_encoders):
        runner = Mock()
        runner.run.side_effect = ExecutionError("convert failed with code 1", returncode=1)
        processor = ImageProcessor(probe=no_encoders, runner=runner)

        with pytest.raises(ExecutionError):
            processor.process_new_image(make_request({}))

    def test_process_new_image_configuration_error(self, make_request, no_encoders):
        from thumbkit.core.interfaces import ImageDimensions, SourceImageInfo

        runner = Mock()
        processor = ImageProcessor(probe=no_encoders, runner=runner)
        source = SourceImageInfo("", ImageDimensions(1, 1))

        with pytest.raises(ConfigurationError):
            processor.process_new_image(make_request({}, source=source))
        runner.run.assert_not_called()

    def test_custom_config(self, make_request, make_probe):
        from thumbkit.core.interfaces import Encoder, OutputSpec

        config = ProcessorConfig(mozjpeg_command="/usr/local/bin/cjpeg")
        processor = ImageProcessor(config=config, probe=make_probe({Encoder.MOZJPEG}))
        output = OutputSpec.for_extension("/tmp/out.jpg", OutputExtension.JPG, mozjpeg=True)

        command = processor.generate_command(make_request({"quality": 75}, output=output))

        assert command.stages()[1][0] == "/usr/local/bin/cjpeg"
