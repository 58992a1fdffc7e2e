"""Configuration loading and management for semcmp.

Configuration sources are merged in priority order:
    1. Defaults (defined in CompareSettings)
    2. Global config (~/.semcmp.toml)
    3. Project config (./semcmp.toml)
    4. Explicit config file
    5. Environment variables (SEMCMP_* prefix)
    6. CLI overrides (passed as kwargs)

Example:
    >>> settings = load_settings(fail_on="minor")
    >>> settings.fail_on_level
    <Severity.MINOR: 2>
"""

from __future__ import annotations

import os
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Literal, Optional, get_type_hints

from .exceptions import InvalidConfigError, SemcmpError
from .report.models import Severity

Verbosity = Literal["quiet", "normal", "verbose"]
OutputFormat = Literal["rich", "json", "github"]

OUTPUT_FORMATS = ("rich", "json", "github")
VERBOSITIES = ("quiet", "normal", "verbose")

GLOBAL_CONFIG_NAME = ".semcmp.toml"
PROJECT_CONFIG_NAME = "semcmp.toml"
ENV_PREFIX = "SEMCMP_"


@dataclass(frozen=True)
class CompareSettings:
    """Settings for a comparison run.

    Attributes:
        Classification:
            report_additions: Report new public declarations (MINOR)
            report_widening: Report widened availability (MINOR)

        Output control:
            min_severity: Hide entries below this severity when rendering
            output_format: rich, json or github
            verbosity: Logging verbosity level

        Gating:
            fail_on: Exit non-zero once the aggregate severity reaches this
    """

    # Classification
    report_additions: bool = True
    report_widening: bool = True

    # Output control
    min_severity: str = "note"
    output_format: OutputFormat = "rich"
    verbosity: Verbosity = "normal"

    # Gating
    fail_on: str = "major"

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        for key in ("min_severity", "fail_on"):
            value = getattr(self, key)
            try:
                Severity.parse(value)
            except (ValueError, AttributeError) as e:
                raise InvalidConfigError(key, value, str(e))

        if self.output_format not in OUTPUT_FORMATS:
            raise InvalidConfigError(
                "output_format", self.output_format, f"expected one of {', '.join(OUTPUT_FORMATS)}"
            )
        if self.verbosity not in VERBOSITIES:
            raise InvalidConfigError(
                "verbosity", self.verbosity, f"expected one of {', '.join(VERBOSITIES)}"
            )

    @property
    def min_severity_level(self) -> Severity:
        return Severity.parse(self.min_severity)

    @property
    def fail_on_level(self) -> Severity:
        return Severity.parse(self.fail_on)


default_settings = CompareSettings()


def load_settings(config_file: Optional[Path] = None, **overrides: Any) -> CompareSettings:
    """Load settings with auto-discovery and merging.

    Args:
        config_file: Optional explicit config file path
        **overrides: Direct overrides (typically from CLI flags); None
                     values are ignored so unset flags do not mask files

    Returns:
        Validated CompareSettings instance

    Raises:
        SemcmpError: If a config file is missing or unreadable
        InvalidConfigError: If a value is invalid
    """
    merged: dict = {}

    global_config = Path.home() / GLOBAL_CONFIG_NAME
    if global_config.exists():
        merged.update(_load_config_file(global_config, "global"))

    project_config = Path.cwd() / PROJECT_CONFIG_NAME
    if project_config.exists():
        merged.update(_load_config_file(project_config, "project"))

    if config_file is not None:
        if not config_file.exists():
            raise SemcmpError(f"Config file not found: {config_file}")
        merged.update(_load_config_file(config_file, "explicit"))

    merged.update(_load_env_vars())

    # Convert verbosity boolean flags to string
    if overrides.pop("verbose", False):
        overrides["verbosity"] = "verbose"
    if overrides.pop("quiet", False):
        overrides["verbosity"] = "quiet"

    merged.update({k: v for k, v in overrides.items() if v is not None})

    known = {f.name for f in fields(CompareSettings)}
    unknown = sorted(set(merged) - known)
    if unknown:
        raise InvalidConfigError(unknown[0], merged[unknown[0]], "unknown setting")

    return CompareSettings(**merged)


def _load_config_file(path: Path, label: str) -> dict:
    try:
        data = _load_toml_file(path)
    except SemcmpError:
        raise
    except Exception as e:
        raise SemcmpError(f"Invalid {label} config '{path}': {e}")
    # Allow the settings to live under a [semcmp] table as well
    section = data.get("semcmp")
    if isinstance(section, dict):
        return dict(section)
    return data


def _load_env_vars() -> dict[str, Any]:
    """Load configuration from SEMCMP_* environment variables.

    Supported environment variables:
        SEMCMP_REPORT_ADDITIONS: bool (true/false/1/0)
        SEMCMP_REPORT_WIDENING: bool
        SEMCMP_MIN_SEVERITY: debug/note/minor/warning/breaking/major/error
        SEMCMP_OUTPUT_FORMAT: rich/json/github
        SEMCMP_VERBOSITY: quiet/normal/verbose
        SEMCMP_FAIL_ON: severity name

    Returns:
        Dict of field_name -> parsed_value for any SEMCMP_* vars found.
    """
    type_hints = get_type_hints(CompareSettings)

    result: dict[str, Any] = {}

    for field_name in CompareSettings.__dataclass_fields__:
        env_key = f"{ENV_PREFIX}{field_name.upper()}"
        env_value = os.environ.get(env_key)

        if env_value is None:
            continue

        type_hint = type_hints.get(field_name)
        if type_hint is None:
            continue

        try:
            result[field_name] = _parse_env_value(env_value, type_hint)
        except ValueError as e:
            raise InvalidConfigError(env_key, env_value, str(e))

    return result


def _parse_env_value(value: str, type_hint: Any) -> Any:
    """Parse environment variable string to the correct type.

    Raises:
        ValueError: If value can't be parsed to expected type
    """
    if type_hint is bool:
        lower = value.lower()
        if lower in ("true", "1", "yes", "on"):
            return True
        elif lower in ("false", "0", "no", "off"):
            return False
        else:
            raise ValueError(f"expected true/false, got '{value}'")

    # String (including Literal types like Verbosity)
    return value


def _load_toml_file(path: Path) -> dict:
    """Load TOML file and return parsed dict.

    Raises:
        SemcmpError: If tomllib/tomli not available
        Exception: If TOML parsing fails
    """
    try:
        # Python 3.11+ has tomllib in stdlib
        import tomllib
    except ModuleNotFoundError:
        try:
            # Fallback to tomli for Python 3.9-3.10
            import tomli as tomllib  # type: ignore
        except ImportError:
            raise SemcmpError(
                "TOML support requires Python 3.11+ or 'tomli' package. "
                "Install with: pip install tomli"
            )

    with open(path, "rb") as f:
        return tomllib.load(f)
