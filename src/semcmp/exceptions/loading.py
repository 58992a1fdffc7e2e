"""Loading-related exceptions: unreadable dumps, malformed declarations, bad predicates."""

from pathlib import Path
from typing import Optional

from .base import SemcmpError


class LoadingError(SemcmpError):
    """Base class for errors raised while materializing a declaration tree."""
    pass


class LoaderError(LoadingError):
    """Raised when a declaration dump cannot be read at all."""

    def __init__(self, path: Path, reason: str):
        super().__init__(
            f"Cannot read declaration dump: {path}",
            details={"path": str(path), "reason": reason},
        )
        self.path = path
        self.reason = reason


class DeclarationFormatError(LoadingError):
    """Raised when a declaration dump does not have the expected shape."""

    def __init__(self, reason: str, path: Optional[Path] = None, where: str = ""):
        details = {"reason": reason}
        if path is not None:
            details["path"] = str(path)
        if where:
            details["where"] = where
        super().__init__(f"Malformed declaration dump: {reason}", details=details)
        self.reason = reason
        self.path = path
        self.where = where


class PredicateSyntaxError(LoadingError):
    """Raised when predicate text cannot be tokenized or parsed."""

    def __init__(self, text: str, reason: str, position: int = -1):
        details = {"text": text, "reason": reason}
        if position >= 0:
            details["position"] = str(position)
        super().__init__(f"Cannot parse predicate: {reason}", details=details)
        self.text = text
        self.reason = reason
        self.position = position
