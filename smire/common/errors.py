"""Domain errors raised by the analytics tools."""

from __future__ import annotations


class SmireError(Exception):
    """Base class for errors raised by this package."""


class InvalidArgumentError(SmireError, ValueError):
    """Raised when a caller-supplied tool argument fails validation."""


class UnknownToolError(SmireError, LookupError):
    """Raised when a tool name is not part of the catalog."""
