"""
Exception types raised by thumbkit.
"""
from typing import Optional


class ThumbkitError(Exception):
    """Base class for all thumbkit errors."""


class ConfigurationError(ThumbkitError, ValueError):
    """Raised when a conversion request is missing state the command cannot be built without."""


class ExecutionError(ThumbkitError, RuntimeError):
    """Raised by the command runner when a stage fails or its binary is missing."""

    def __init__(self, message: str, returncode: Optional[int] = None, stderr: str = ""):
        super().__init__(message)
        self.returncode = returncode
        self.stderr = stderr
