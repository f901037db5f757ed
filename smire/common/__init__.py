"""Common utilities: errors and settings."""

from smire.common.errors import InvalidArgumentError, SmireError, UnknownToolError
from smire.common.settings import Settings, load_settings

__all__ = ["InvalidArgumentError", "Settings", "SmireError", "UnknownToolError", "load_settings"]
