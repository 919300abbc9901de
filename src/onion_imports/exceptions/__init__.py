"""Exception hierarchy for onion-imports."""

from .analysis import AnalysisError, FileAccessError
from .base import OnionImportsError
from .config import ConfigurationError, InvalidConfigError, InvalidPathError

__all__ = [
    "OnionImportsError",
    "AnalysisError",
    "FileAccessError",
    "ConfigurationError",
    "InvalidPathError",
    "InvalidConfigError",
]
