"""
Command synthesis module for thumbkit.
Resolves geometry, encoder pipeline and argument order for convert.
"""
from .command import Command, Part, literal, value
from .geometry import GeometryCache, ResizeMode, SizeResolver
from .quality import (
    EncoderPipeline,
    ExecutableProbe,
    QualitySelector,
    select_pipeline,
)
from .builder import CommandBuilder
from .runner import CommandRunner

__all__ = [
    "Command",
    "Part",
    "literal",
    "value",
    "GeometryCache",
    "ResizeMode",
    "SizeResolver",
    "EncoderPipeline",
    "ExecutableProbe",
    "QualitySelector",
    "select_pipeline",
    "CommandBuilder",
    "CommandRunner",
]
