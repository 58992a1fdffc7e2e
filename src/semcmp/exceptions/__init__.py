"""Exception hierarchy for semcmp."""

from .base import SemcmpError
from .config import (
    ConfigurationError,
    InvalidConfigError,
    InvalidVersionError,
)
from .loading import (
    DeclarationFormatError,
    LoaderError,
    LoadingError,
    PredicateSyntaxError,
)

__all__ = [
    "SemcmpError",
    "LoadingError",
    "LoaderError",
    "DeclarationFormatError",
    "PredicateSyntaxError",
    "ConfigurationError",
    "InvalidConfigError",
    "InvalidVersionError",
]
