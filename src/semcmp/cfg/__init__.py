"""Conditional-availability predicates: algebra and mini-language parser."""

from .algebra import (
    ENUMERATION_WARN_VARS,
    NEVER,
    UNIVERSAL,
    All,
    Any,
    Config,
    Feature,
    Flag,
    FreeVar,
    Never,
    Not,
    TargetProperty,
    Universal,
    all_of,
    assignments,
    choice_axes,
)
from .parser import config_from_attrs, config_from_meta, parse_config, parse_meta

__all__ = [
    "ENUMERATION_WARN_VARS",
    "NEVER",
    "UNIVERSAL",
    "All",
    "Any",
    "Config",
    "Feature",
    "Flag",
    "FreeVar",
    "Never",
    "Not",
    "TargetProperty",
    "Universal",
    "all_of",
    "assignments",
    "choice_axes",
    "config_from_attrs",
    "config_from_meta",
    "parse_config",
    "parse_meta",
]
