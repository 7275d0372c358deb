"""
Option bag holding the transformations requested for one image.

Lookups return an OptionValue that tells apart an absent option, an option
that is present but empty/false, and an option carrying a usable value.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Iterator, Mapping, Optional, Tuple
import logging

logger = logging.getLogger(__name__)


class Presence(Enum):
    """Tri-state result of an option lookup."""
    ABSENT = "absent"
    EMPTY = "empty"
    SET = "set"


@dataclass(frozen=True)
class OptionValue:
    """Typed result of looking up one option."""
    name: str
    presence: Presence
    value: Any = None

    @property
    def is_absent(self) -> bool:
        return self.presence is Presence.ABSENT

    @property
    def is_set(self) -> bool:
        return self.presence is Presence.SET

    def as_str(self) -> Optional[str]:
        """The value as a string, or None unless the option is set."""
        if not self.is_set:
            return None
        return str(self.value)

    def as_int(self) -> Optional[int]:
        """The value as an int, or None when unset or not numeric."""
        if not self.is_set or isinstance(self.value, bool):
            return None
        try:
            return int(self.value)
        except (TypeError, ValueError):
            return None


def _is_empty(value: Any) -> bool:
    if value is None or isinstance(value, bool):
        return not value
    if isinstance(value, (int, float)):
        return value == 0
    if isinstance(value, str):
        return value in ("", "0")
    if isinstance(value, (list, tuple, dict)):
        return not value
    return False


class OptionsBag:
    """
    Ordered mapping of option name to value.

    Writes only go through set_option(); copy() gives an independent bag so
    a conversion can adjust its own working values.

    Example:
        bag = OptionsBag({"width": 800, "crop": True})
        bag.get("width").as_int()   # 800
        bag.get("height").is_absent  # True
    """

    def __init__(self, options: Optional[Mapping[str, Any]] = None):
        self._options: Dict[str, Any] = dict(options or {})

    def get(self, name: str) -> OptionValue:
        """Look up an option by name."""
        if name not in self._options:
            return OptionValue(name, Presence.ABSENT)
        value = self._options[name]
        presence = Presence.EMPTY if _is_empty(value) else Presence.SET
        return OptionValue(name, presence, value)

    def is_set(self, name: str) -> bool:
        """Whether the option is present with a non-empty value."""
        return self.get(name).is_set

    def set_option(self, name: str, value: Any) -> None:
        logger.debug(f"Option {name} set to {value!r}")
        self._options[name] = value

    def copy(self) -> "OptionsBag":
        return OptionsBag(dict(self.items()))

    def items(self) -> Iterator[Tuple[str, Any]]:
        return iter(self._options.items())

    def __contains__(self, name: str) -> bool:
        return name in self._options

    def __len__(self) -> int:
        return len(self._options)

    def __repr__(self) -> str:
        return f"OptionsBag({self._options!r})"
