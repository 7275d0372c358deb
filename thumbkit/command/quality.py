"""
Output encoder selection.

Exactly one pipeline writes the output file:
- WEBP: convert writes WebP itself with an explicit lossless define
- MOZJPEG: convert streams TGA into mozjpeg's cjpeg through a pipe
- DEFAULT: convert writes the file directly
"""
from enum import Enum
from typing import Callable, Dict, Mapping, Tuple
import logging
import os

from ..core.interfaces import Encoder, IEncoderProbe, OutputSpec
from ..core.options import OptionsBag
from .command import Command, literal

logger = logging.getLogger(__name__)


class EncoderPipeline(Enum):
    WEBP = "webp"
    MOZJPEG = "mozjpeg"
    DEFAULT = "default"


class ExecutableProbe(IEncoderProbe):
    """Checks encoder binaries at well-known paths. Answers are cached per instance."""

    def __init__(self, paths: Mapping[Encoder, str]):
        self.paths = dict(paths)
        self._cache: Dict[Encoder, bool] = {}

    def is_available(self, encoder: Encoder) -> bool:
        if encoder not in self._cache:
            path = self.paths.get(encoder)
            available = bool(path) and os.path.isfile(path) and os.access(path, os.X_OK)
            if not available:
                logger.debug(f"Encoder {encoder.value} not available at {path}")
            self._cache[encoder] = available
        return self._cache[encoder]


PipelineRule = Tuple[EncoderPipeline, Callable[[OutputSpec, IEncoderProbe], bool]]

# checked in order, first match wins
PIPELINE_RULES: Tuple[PipelineRule, ...] = (
    (EncoderPipeline.WEBP, lambda output, probe: output.is_webp and probe.is_available(Encoder.CWEBP)),
    (EncoderPipeline.MOZJPEG, lambda output, probe: output.is_mozjpeg and probe.is_available(Encoder.MOZJPEG)),
)


def select_pipeline(output: OutputSpec, probe: IEncoderProbe) -> EncoderPipeline:
    """Resolve the encoder pipeline for an output target."""
    for pipeline, applies in PIPELINE_RULES:
        if applies(output, probe):
            return pipeline
    return EncoderPipeline.DEFAULT


class QualitySelector:
    """Renders the trailing quality/output clause of a convert command."""

    def __init__(self, probe: IEncoderProbe, mozjpeg_command: str):
        self.probe = probe
        self.mozjpeg_command = mozjpeg_command
        self._renderers = {
            EncoderPipeline.WEBP: self._webp_clause,
            EncoderPipeline.MOZJPEG: self._mozjpeg_clause,
            EncoderPipeline.DEFAULT: self._default_clause,
        }

    def select(self, output: OutputSpec) -> EncoderPipeline:
        return select_pipeline(output, self.probe)

    def apply(self, command: Command, options: OptionsBag, output: OutputSpec) -> EncoderPipeline:
        """
        Append the clause for the selected pipeline to a command.

        Args:
            command: The convert command being assembled
            options: Working options of the request
            output: Output target

        Returns:
            The pipeline that was rendered.
        """
        pipeline = self.select(output)
        logger.debug(f"Encoder pipeline for {output.path}: {pipeline.value}")
        self._renderers[pipeline](command, options, output)
        return pipeline

    def _webp_clause(self, command: Command, options: OptionsBag, output: OutputSpec) -> None:
        lossless = "true" if options.is_set("webp-lossless") else "false"
        command.add_option("-quality", options.get("quality").as_str())
        command.add_flag("-define")
        command.add_token(literal(f"webp:lossless={lossless}"))
        command.add_value(output.path)

    def _mozjpeg_clause(self, command: Command, options: OptionsBag, output: OutputSpec) -> None:
        command.add_token(literal("TGA:-"))

        encoder = Command(self.mozjpeg_command)
        encoder.add_option("-quality", options.get("quality").as_str())
        encoder.add_option("-outfile", output.path)
        encoder.add_flag("-targa")
        command.pipe_to(encoder)

    def _default_clause(self, command: Command, options: OptionsBag, output: OutputSpec) -> None:
        command.add_option("-quality", options.get("quality").as_str())
        command.add_value(output.path)
