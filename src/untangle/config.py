"""Configuration loading and management for untangle.

Configuration is an explicit value: callers build an AnalysisConfig (directly
or through load_config) and hand it to the components that need it. Nothing
in the analysis engine reads the environment or files on its own.

Sources are merged in priority order:
    1. Defaults (defined on the dataclasses)
    2. Project config (./untangle.toml)
    3. Explicit config file
    4. Environment variables (UNTANGLE_* prefix)
    5. Keyword overrides

Example:
    >>> config = load_config(verbose=True)
    >>> config.verbosity
    'verbose'
    >>> config.scoring.damping
    0.85
"""

from __future__ import annotations

import os
import tomllib
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Literal, Optional, get_type_hints

from .exceptions import ConfigurationError, InvalidConfigError

Verbosity = Literal["quiet", "normal", "verbose"]

_ENV_PREFIX = "UNTANGLE_"
_PROJECT_CONFIG = "untangle.toml"


@dataclass(frozen=True)
class ScoringConfig:
    """Structural scorer parameters.

    Attributes:
        spectral_weight: Weight of the dominant-eigenvector sub-score
        degree_weight: Weight of the fan-in / fan-out sub-score
        centrality_weight: Weight of the power-iteration sub-score
        damping: Damping factor for the centrality power iteration
        iterations: Fixed number of power iterations (no convergence check)
        spectral_fallback: Uniform sub-score used when eigen-decomposition fails
        imaginary_tolerance: Largest imaginary part accepted on the dominant
            eigenvalue before the decomposition counts as non-real
    """

    spectral_weight: float = 0.4
    degree_weight: float = 0.3
    centrality_weight: float = 0.3
    damping: float = 0.85
    iterations: int = 20
    spectral_fallback: float = 0.5
    imaginary_tolerance: float = 1e-9

    def __post_init__(self) -> None:
        for name in ("spectral_weight", "degree_weight", "centrality_weight"):
            if getattr(self, name) < 0:
                raise ValueError(f"{name} must be non-negative")

        weight_sum = self.spectral_weight + self.degree_weight + self.centrality_weight
        if not 0.99 <= weight_sum <= 1.01:
            raise ValueError(f"Scoring weights must sum to 1.0, got {weight_sum:.3f}")

        if not 0.0 <= self.damping <= 1.0:
            raise ValueError("damping must be between 0.0 and 1.0")
        if self.iterations < 1:
            raise ValueError("iterations must be at least 1")
        if not 0.0 <= self.spectral_fallback <= 1.0:
            raise ValueError("spectral_fallback must be between 0.0 and 1.0")
        if self.imaginary_tolerance < 0:
            raise ValueError("imaginary_tolerance must be non-negative")


@dataclass(frozen=True)
class EffortConfig:
    """Effort-estimate parameters.

    Attributes:
        minutes_per_module: Base refactoring time per module
        workday_minutes: Length of a working day used for the "Nd Nh" format
        min_multiplier: Lower clamp of the complexity multiplier
        max_multiplier: Upper clamp of the complexity multiplier
    """

    minutes_per_module: int = 20
    workday_minutes: int = 480
    min_multiplier: float = 0.5
    max_multiplier: float = 2.0

    def __post_init__(self) -> None:
        if self.minutes_per_module < 0:
            raise ValueError("minutes_per_module must be non-negative")
        if self.workday_minutes < 60:
            raise ValueError("workday_minutes must be at least 60")
        if self.min_multiplier < 0:
            raise ValueError("min_multiplier must be non-negative")
        if self.max_multiplier < self.min_multiplier:
            raise ValueError("max_multiplier must not be below min_multiplier")


@dataclass(frozen=True)
class AnalysisConfig:
    """Top-level configuration for one analysis run."""

    scoring: ScoringConfig = field(default_factory=ScoringConfig)
    effort: EffortConfig = field(default_factory=EffortConfig)
    verbosity: Verbosity = "normal"

    def __post_init__(self) -> None:
        if self.verbosity not in ("quiet", "normal", "verbose"):
            raise ValueError("verbosity must be one of quiet, normal, verbose")


_SECTIONS: dict[str, type] = {"scoring": ScoringConfig, "effort": EffortConfig}


def load_config(config_file: Optional[Path] = None, **overrides) -> AnalysisConfig:
    """Load configuration with auto-discovery and merging.

    Args:
        config_file: Optional explicit TOML config file
        **overrides: Direct overrides. ``verbose``/``quiet`` booleans map to
            ``verbosity``; ``scoring``/``effort`` may be dicts or config objects.

    Returns:
        Validated AnalysisConfig instance

    Raises:
        ConfigurationError: If a config file is missing or any value is invalid
    """
    merged: dict[str, Any] = {}

    project_config = Path.cwd() / _PROJECT_CONFIG
    if project_config.exists():
        _merge(merged, _load_toml(project_config))

    if config_file is not None:
        if not config_file.exists():
            raise ConfigurationError(f"Config file not found: {config_file}")
        _merge(merged, _load_toml(config_file))

    _merge(merged, _load_env_vars())

    if "verbose" in overrides:
        if overrides.pop("verbose"):
            overrides["verbosity"] = "verbose"
    if "quiet" in overrides:
        if overrides.pop("quiet"):
            overrides["verbosity"] = "quiet"

    _merge(merged, overrides)

    for section, cls in _SECTIONS.items():
        value = merged.get(section)
        if isinstance(value, dict):
            try:
                merged[section] = cls(**value)
            except (TypeError, ValueError) as e:
                raise ConfigurationError(f"Invalid [{section}] config: {e}") from e

    try:
        return AnalysisConfig(**merged)
    except (TypeError, ValueError) as e:
        raise ConfigurationError(f"Invalid configuration: {e}") from e


def _merge(target: dict[str, Any], source: dict[str, Any]) -> None:
    """Shallow merge, except section tables which merge key by key."""
    for key, value in source.items():
        if key in _SECTIONS and isinstance(value, dict) and isinstance(target.get(key), dict):
            target[key] = {**target[key], **value}
        else:
            target[key] = value


def _load_env_vars() -> dict[str, Any]:
    """Load configuration from UNTANGLE_* environment variables.

    Top-level fields use ``UNTANGLE_<FIELD>`` (e.g. UNTANGLE_VERBOSITY);
    section fields use ``UNTANGLE_<SECTION>_<FIELD>``
    (e.g. UNTANGLE_SCORING_DAMPING, UNTANGLE_EFFORT_MINUTES_PER_MODULE).
    """
    result: dict[str, Any] = {}

    verbosity = os.environ.get(f"{_ENV_PREFIX}VERBOSITY")
    if verbosity is not None:
        result["verbosity"] = verbosity

    for section, cls in _SECTIONS.items():
        type_hints = get_type_hints(cls)
        section_values: dict[str, Any] = {}
        for f in fields(cls):
            env_key = f"{_ENV_PREFIX}{section.upper()}_{f.name.upper()}"
            env_value = os.environ.get(env_key)
            if env_value is None:
                continue
            try:
                section_values[f.name] = _parse_env_value(env_value, type_hints[f.name])
            except ValueError as e:
                raise InvalidConfigError(env_key, env_value, str(e)) from e
        if section_values:
            result[section] = section_values

    return result


def _parse_env_value(value: str, type_hint: Any) -> Any:
    """Parse an environment variable string to the field's type."""
    if type_hint is bool:
        lower = value.lower()
        if lower in ("true", "1", "yes", "on"):
            return True
        if lower in ("false", "0", "no", "off"):
            return False
        raise ValueError(f"expected true/false, got '{value}'")
    if type_hint is int:
        return int(value)
    if type_hint is float:
        return float(value)
    return value


def _load_toml(path: Path) -> dict[str, Any]:
    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as e:
        raise ConfigurationError(f"Invalid config file '{path}': {e}") from e
