"""
Size resolution for one conversion request.

Requests fall into three groups:
- no resize, when neither width nor height is given
- simple resize, when width and/or height are given; ImageMagick keeps the
  aspect ratio on a missing axis
- crop, when width, height and crop are all given; the image is resized to
  fill the box and then cut to it around the gravity point
"""
from enum import Enum
from typing import Any, Callable, Dict, Optional
import logging

from ..core.interfaces import SourceImageInfo
from ..core.options import OptionsBag
from .command import Command, Token, literal, render_token, value

logger = logging.getLogger(__name__)


class ResizeMode(Enum):
    NONE = "none"
    SIMPLE = "simple"
    CROP = "crop"


class GeometryCache:
    """
    Per-request store for derived geometry values.

    A value is computed on first read and returned unchanged afterwards, even
    if the options it was computed from change later in the request.
    """

    DIMENSIONS = "dimensions"
    RESIZE_OPERATOR = "resizeOperator"

    def __init__(self):
        self._values: Dict[str, Any] = {}

    def get(self, key: str, calculate: Callable[[], Any]) -> Any:
        if key not in self._values:
            self._values[key] = calculate()
        return self._values[key]

    def __contains__(self, key: str) -> bool:
        return key in self._values


class SizeResolver:
    """Builds the resize/crop clause of a convert command."""

    def __init__(
        self,
        source: SourceImageInfo,
        options: OptionsBag,
        cache: Optional[GeometryCache] = None
    ):
        self.source = source
        self.options = options
        self.cache = cache if cache is not None else GeometryCache()

    def resize_mode(self) -> ResizeMode:
        has_width = self.options.is_set("width")
        has_height = self.options.is_set("height")

        if has_width and has_height and self.options.is_set("crop"):
            return ResizeMode.CROP
        if has_width or has_height:
            return ResizeMode.SIMPLE
        return ResizeMode.NONE

    def size_clause(self) -> Command:
        """Resize tokens for the request; empty when no resize is asked for."""
        mode = self.resize_mode()
        logger.debug(f"Resize mode for {self.source.path}: {mode.value}")

        if mode is ResizeMode.CROP:
            return self._crop_clause()
        if mode is ResizeMode.SIMPLE:
            return self._simple_clause()
        return Command()

    def _crop_clause(self) -> Command:
        # must run before the dimensions are first cached
        self.update_target_dimensions()

        clause = Command()
        clause.add_flag(self.resize_operator())
        clause.add_token(*self.dimensions(), literal("^"))
        clause.add_option("-gravity", self.options.get("gravity").as_str())
        clause.add_token(literal("-extent"))
        clause.add_token(*self.dimensions())
        return clause

    def _simple_clause(self) -> Command:
        clause = Command()
        clause.add_flag(self.resize_operator())
        if self.options.is_set("preserve-natural-size"):
            # ImageMagick's shrink-only geometry flag
            clause.add_token(*self.dimensions(), value(">"))
        else:
            clause.add_token(*self.dimensions())
        return clause

    def dimensions(self) -> Token:
        """Target geometry token, e.g. 800x600, 800 or x600."""
        return self.cache.get(GeometryCache.DIMENSIONS, self._calculate_dimensions)

    def dimensions_string(self) -> str:
        return render_token(self.dimensions())

    def resize_operator(self) -> str:
        return self.cache.get(GeometryCache.RESIZE_OPERATOR, self._calculate_resize_operator)

    def _calculate_dimensions(self) -> Token:
        width = self.options.get("width")
        height = self.options.get("height")

        parts = []
        if width.is_set:
            parts.append(value(width.value))
        if height.is_set:
            parts.extend([literal("x"), value(height.value)])
        return tuple(parts)

    def _calculate_resize_operator(self) -> str:
        return "-resize" if self.options.is_set("resize") else "-thumbnail"

    def update_target_dimensions(self) -> None:
        """
        Clamp the target box to the source size when preserve-natural-size is set.

        Writes go to the request's working options. Axes with a non-numeric
        target or an unknown (zero) source size are left as requested.
        """
        if not self.options.is_set("preserve-natural-size"):
            return

        original = self.source.dimensions
        for name, source_size in (("width", original.width), ("height", original.height)):
            target = self.options.get(name).as_int()
            if target is None or source_size <= 0:
                continue
            if source_size < target:
                logger.debug(f"Clamping {name} from {target} to natural size {source_size}")
                self.options.set_option(name, source_size)
