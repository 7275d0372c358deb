"""
ImageProcessor - facade for turning conversion requests into convert commands.
Owns configuration and encoder discovery; every request gets its own builder.
"""
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping, Optional, Union
import logging

from ..command.builder import CommandBuilder
from ..command.command import Command
from ..command.quality import ExecutableProbe, QualitySelector
from ..command.runner import CommandRunner
from ..core.exceptions import ExecutionError
from ..core.extensions import output_extension
from ..core.interfaces import (
    ConversionRequest,
    ICommandGenerator,
    ICommandRunner,
    IEncoderProbe,
    OutputSpec,
    ProcessorConfig,
)
from ..core.options import OptionsBag
from .info import probe_source

logger = logging.getLogger(__name__)


@dataclass
class ConversionResult:
    """Result of an image conversion."""
    success: bool
    output_path: Optional[Path] = None
    command: str = ""


class ImageProcessor(ICommandGenerator):
    """
    Generates and runs ImageMagick conversions.

    Example:
        processor = ImageProcessor()
        request = ConversionRequest(
            source=probe_source("photo.jpg"),
            options=OptionsBag({"width": 800, "height": 600, "crop": True}),
            output=OutputSpec.for_extension("thumb.jpg", OutputExtension.JPG),
        )
        print(processor.generate_command(request))
    """

    def __init__(
        self,
        config: Optional[ProcessorConfig] = None,
        probe: Optional[IEncoderProbe] = None,
        runner: Optional[ICommandRunner] = None
    ):
        self.config = config or ProcessorConfig()
        self.probe = probe or ExecutableProbe(self.config.encoder_paths())
        self.runner = runner or CommandRunner()
        self.quality_selector = QualitySelector(self.probe, self.config.mozjpeg_command)

    def generate_command(self, request: ConversionRequest) -> Command:
        """Build the convert command for one request."""
        return CommandBuilder(request, self.quality_selector, self.config).build()

    def process_new_image(self, request: ConversionRequest) -> ConversionResult:
        """
        Generate the command for a request and run it.

        Returns:
            ConversionResult with the command line that was executed.

        Raises:
            ConfigurationError: If the request cannot produce a command.
            ExecutionError: If the conversion fails.
        """
        command = self.generate_command(request)
        output_path = Path(request.output.path)

        try:
            self.runner.run(command)
        except ExecutionError as e:
            logger.error(f"Conversion failed for {Path(request.source.path).name}: {e}")
            raise

        logger.info(f"Converted: {Path(request.source.path).name} -> {output_path.name}")
        return ConversionResult(success=True, output_path=output_path, command=str(command))

    def create_request(
        self,
        source_path: Path,
        options: Union[OptionsBag, Mapping[str, Any]],
        output_path: Path
    ) -> ConversionRequest:
        """
        Build a request from files on disk.

        The source is probed with Pillow and the output type comes from the
        output suffix; the mozjpeg option marks JPEG output for MozJPEG.
        """
        bag = options if isinstance(options, OptionsBag) else OptionsBag(options)
        output = OutputSpec.for_extension(
            str(output_path),
            output_extension(output_path),
            mozjpeg=bag.is_set("mozjpeg")
        )
        return ConversionRequest(probe_source(source_path), bag, output)
