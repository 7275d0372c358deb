"""
Assembles the full convert command for one conversion request.
"""
from typing import Optional
import logging

from ..core.exceptions import ConfigurationError
from ..core.interfaces import ConversionRequest, ProcessorConfig
from .command import Command, literal
from .geometry import GeometryCache, SizeResolver
from .quality import EncoderPipeline, QualitySelector

logger = logging.getLogger(__name__)


class CommandBuilder:
    """
    Builds one command for one request.

    Holds the request's working copy of the options and its geometry cache,
    so a builder must not be reused across requests.
    """

    def __init__(
        self,
        request: ConversionRequest,
        quality_selector: QualitySelector,
        config: Optional[ProcessorConfig] = None
    ):
        self.config = config or ProcessorConfig()
        self.source = request.source
        self.output = request.output
        self.options = request.options.copy()
        self.geometry = GeometryCache()
        self.size_resolver = SizeResolver(self.source, self.options, self.geometry)
        self.quality_selector = quality_selector
        self.pipeline: Optional[EncoderPipeline] = None

    def build(self) -> Command:
        """
        Generate the command.

        Raises:
            ConfigurationError: If the source or output path is missing.
        """
        self._validate()

        command = Command(self.config.convert_command)

        if self.source.is_pdf:
            command.add_option("-density", self.options.get("density").as_str())

        if self.source.is_gif:
            command.add_flag("-coalesce")

        command.add_flag("-auto-orient")
        command.add_value(self.source_token())
        command.extend(self.size_resolver.size_clause())
        command.add_option("-colorspace", self.options.get("colorspace").as_str())

        if self.options.is_set("monochrome"):
            command.add_flag("-monochrome")

        command.extend(self.forwarded_options())

        # -thumbnail strips profiles on its own, -strip is still emitted when asked for
        if self.options.is_set("strip"):
            command.add_flag("-strip")

        command.add_option("-limit thread", self.options.get("thread").as_str())

        self.pipeline = self.quality_selector.apply(command, self.options, self.output)

        logger.debug(f"Command: {command}")
        return command

    def source_token(self) -> str:
        """Source path with a page or frame selector where one applies."""
        path = self.source.path

        if self.source.is_pdf:
            page_number = self.options.get("page_number").as_int() or 1
            return f"{path}[{max(page_number - 1, 0)}]"

        if self.source.is_gif and not self.output.is_gif:
            frame = self.options.get("gif-frame").as_str() or "0"
            return f"{path}[{frame}]"

        return path

    def forwarded_options(self) -> Command:
        """Passthrough options, emitted as -<name> <value> in configured order."""
        clause = Command()
        for name in self.config.forwarded_options:
            option = self.options.get(name)
            if option.is_set:
                clause.add_token(literal(f"-{name}"))
                clause.add_value(option.as_str())
        return clause

    def _validate(self) -> None:
        if not self.source.path:
            raise ConfigurationError("Source image path is missing")
        if not self.output.path:
            raise ConfigurationError("Output image path is missing")
