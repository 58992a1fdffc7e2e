"""Report entry model: severity, strictness and the item itself."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum


class Severity(IntEnum):
    """How much a finding matters, in increasing order.

    DEBUG, NOTE, WARNING and ERROR are about the tool itself; MINOR,
    BREAKING and MAJOR classify compatibility impact.
    """

    DEBUG = 0
    NOTE = 1
    MINOR = 2  # safe addition, minor version bump
    WARNING = 3
    BREAKING = 4  # may break downstream, still only a minor bump
    MAJOR = 5  # requires a major version bump
    ERROR = 6

    @property
    def label(self) -> str:
        return self.name.capitalize()

    @classmethod
    def parse(cls, name: str) -> "Severity":
        """Look a severity up by case-insensitive name."""
        try:
            return cls[name.strip().upper()]
        except KeyError:
            choices = ", ".join(s.name.lower() for s in cls)
            raise ValueError(f"unknown severity {name!r} (choose from: {choices})")


class Strictness(IntEnum):
    """Pruning eligibility of a report node.

    LAZY:    deleted unless a surviving descendant is STRICT
    INHERIT: deleted iff its parent is deleted
    STRICT:  never deleted
    """

    LAZY = 0
    INHERIT = 1
    STRICT = 2


@dataclass(frozen=True)
class ReportItem:
    """A single diagnostic line."""

    severity: Severity
    text: str
    strictness: Strictness = Strictness.STRICT

    def to_dict(self) -> dict:
        return {
            "severity": self.severity.name.lower(),
            "strictness": self.strictness.name.lower(),
            "text": self.text,
        }
