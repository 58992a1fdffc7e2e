"""Shared CLI helpers."""

from pathlib import Path
from typing import Optional

from rich.console import Console

from ..config import CompareSettings, load_settings

console = Console()


def resolve_settings(
    config: Optional[Path] = None,
    output_format: Optional[str] = None,
    min_severity: Optional[str] = None,
    fail_on: Optional[str] = None,
    verbose: bool = False,
    quiet: bool = False,
) -> CompareSettings:
    """Build settings from CLI options."""
    overrides = {
        "output_format": output_format,
        "min_severity": min_severity,
        "fail_on": fail_on,
    }
    if verbose:
        overrides["verbose"] = True
    if quiet:
        overrides["quiet"] = True
    return load_settings(config_file=config, **overrides)
