"""Configuration loading and management for the Vibe Coding Profiler.

Every policy constant the engine uses (level bands, AI-confidence bands,
episode gaps, community thresholds) lives in ``ThresholdConfig`` so it can
be tuned without touching scoring code. Sources are merged in priority order:
    1. Defaults (defined in the dataclasses)
    2. Global config (~/.vibe-profiler.toml)
    3. Project config (./vibe-profiler.toml)
    4. Explicit config file
    5. Environment variables (VIBE_PROFILER_* prefix)
    6. Keyword overrides (typically CLI flags)

Example:
    >>> config = load_config(verbose=True)
    >>> config.verbosity
    'verbose'
    >>> config.thresholds.episode_gap_hours
    4.0
"""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Literal, Optional, get_type_hints

from .exceptions import ConfigurationError, InvalidConfigError

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

Verbosity = Literal["quiet", "normal", "verbose"]

ENV_PREFIX = "VIBE_PROFILER_"
THRESHOLD_ENV_PREFIX = "VIBE_PROFILER_THRESHOLD_"


@dataclass(frozen=True)
class ThresholdConfig:
    """Policy thresholds for scoring, persona selection and community rollup.

    Attributes:
        Axis levels:
            level_medium_from: Scores below this are ``low``
            level_high_from: Scores at or above this are ``high``

        AI attribution:
            ai_confidence_medium_from: AI-assisted commits needed for ``medium``
            ai_confidence_high_from: AI-assisted commits needed for ``high``

        Time segmentation:
            episode_gap_hours: Idle gap that closes a work episode (axis scoring)
            streak_gap_hours: Idle gap that closes a session (streak and peak day)
            quick_fix_max_lines: Changed lines below which a fix counts as quick
            quick_fix_max_files: Files at or below which a fix counts as quick

        Persona confidence:
            confidence_margin_points: Points past a threshold for a "deep" match
            low_volume_commits: Below this, persona confidence is capped at low
            fallback_medium_commits: Commit volume for medium fallback confidence
            fallback_high_commits: Commit volume for high fallback confidence
            max_why_items: Evidence strings kept on a persona

        Community:
            community_min_profiles: k-anonymity threshold for the whole payload
            community_bucket_min: Profiles needed before a persona row is published
            community_eligible_min_commits: Commit floor used by eligibility helpers
            adoption_light_below: Collaboration rates below this are ``light``
            adoption_moderate_below: ... ``moderate``
            adoption_heavy_below: ... ``heavy``; anything higher is ``ai-native``

        Coverage:
            coverage_sample_limit: Fallback vectors kept as samples
    """

    # === Axis levels ===
    level_medium_from: int = 35
    level_high_from: int = 65

    # === AI attribution ===
    ai_confidence_medium_from: int = 3
    ai_confidence_high_from: int = 10

    # === Time segmentation ===
    episode_gap_hours: float = 4.0
    streak_gap_hours: float = 8.0
    quick_fix_max_lines: int = 50
    quick_fix_max_files: int = 3

    # === Persona confidence ===
    confidence_margin_points: int = 10
    low_volume_commits: int = 20
    fallback_medium_commits: int = 80
    fallback_high_commits: int = 200
    max_why_items: int = 6

    # === Community ===
    community_min_profiles: int = 10
    community_bucket_min: int = 25
    community_eligible_min_commits: int = 80
    adoption_light_below: float = 0.10
    adoption_moderate_below: float = 0.30
    adoption_heavy_below: float = 0.60

    # === Coverage ===
    coverage_sample_limit: int = 20

    def __post_init__(self) -> None:
        """Validate threshold configuration."""
        if not 0 < self.level_medium_from < self.level_high_from <= 100:
            raise InvalidConfigError(
                "level_medium_from/level_high_from",
                f"{self.level_medium_from}/{self.level_high_from}",
                "bands must satisfy 0 < medium < high <= 100",
            )

        if not 0 < self.ai_confidence_medium_from < self.ai_confidence_high_from:
            raise InvalidConfigError(
                "ai_confidence_medium_from/ai_confidence_high_from",
                f"{self.ai_confidence_medium_from}/{self.ai_confidence_high_from}",
                "bands must be positive and strictly increasing",
            )

        for name in ("episode_gap_hours", "streak_gap_hours"):
            if getattr(self, name) <= 0:
                raise InvalidConfigError(name, getattr(self, name), "must be positive")

        if not 0 < self.fallback_medium_commits < self.fallback_high_commits:
            raise InvalidConfigError(
                "fallback_medium_commits/fallback_high_commits",
                f"{self.fallback_medium_commits}/{self.fallback_high_commits}",
                "bands must be positive and strictly increasing",
            )

        at_least_one = [
            "quick_fix_max_lines",
            "quick_fix_max_files",
            "max_why_items",
            "community_min_profiles",
            "community_bucket_min",
            "community_eligible_min_commits",
            "coverage_sample_limit",
        ]
        for name in at_least_one:
            if getattr(self, name) < 1:
                raise InvalidConfigError(name, getattr(self, name), "must be at least 1")

        if not 0 <= self.confidence_margin_points <= 100:
            raise InvalidConfigError(
                "confidence_margin_points", self.confidence_margin_points, "must be in [0, 100]"
            )
        if self.low_volume_commits < 0:
            raise InvalidConfigError(
                "low_volume_commits", self.low_volume_commits, "must be non-negative"
            )

        if not (
            0.0
            < self.adoption_light_below
            < self.adoption_moderate_below
            < self.adoption_heavy_below
            <= 1.0
        ):
            raise InvalidConfigError(
                "adoption_*_below",
                f"{self.adoption_light_below}/{self.adoption_moderate_below}/"
                f"{self.adoption_heavy_below}",
                "bands must be strictly increasing inside (0, 1]",
            )


# Default threshold configuration (singleton)
DEFAULT_THRESHOLDS = ThresholdConfig()


@dataclass(frozen=True)
class ProfilerConfig:
    """Top-level configuration: output control plus nested thresholds.

    Attributes:
        verbosity: Logging verbosity level
        log_file: Optional path for a plain-text log file
        git_max_commits: Commits read by the local git extractor
        thresholds: Policy thresholds shared by every engine stage
    """

    verbosity: Verbosity = "normal"
    log_file: Optional[str] = None
    git_max_commits: int = 5000
    thresholds: ThresholdConfig = field(default_factory=ThresholdConfig)

    def __post_init__(self) -> None:
        if self.verbosity not in ("quiet", "normal", "verbose"):
            raise InvalidConfigError("verbosity", self.verbosity, "expected quiet/normal/verbose")
        if self.git_max_commits < 1:
            raise InvalidConfigError("git_max_commits", self.git_max_commits, "must be at least 1")


def load_config(config_file: Optional[Path] = None, **overrides) -> ProfilerConfig:
    """Load configuration with auto-discovery and merging.

    Args:
        config_file: Optional explicit config file path
        **overrides: Direct overrides. ``verbose``/``quiet`` booleans are
            translated to ``verbosity``; ``thresholds`` may be a dict or a
            ``ThresholdConfig``.

    Returns:
        Validated ProfilerConfig instance

    Raises:
        ConfigurationError: If a config file is missing or unparsable
        InvalidConfigError: If a value fails validation
    """
    merged: dict = {}
    threshold_values: dict = {}

    candidates = [
        ("global", Path.home() / ".vibe-profiler.toml"),
        ("project", Path.cwd() / "vibe-profiler.toml"),
    ]
    for label, path in candidates:
        if path.exists():
            _merge_file(merged, threshold_values, path, label)

    if config_file is not None:
        if not config_file.exists():
            raise ConfigurationError(f"Config file not found: {config_file}")
        _merge_file(merged, threshold_values, config_file, "explicit")

    env_scalars, env_thresholds = _load_env_vars()
    merged.update(env_scalars)
    threshold_values.update(env_thresholds)

    if "verbose" in overrides:
        if overrides["verbose"]:
            overrides["verbosity"] = "verbose"
        del overrides["verbose"]
    if "quiet" in overrides:
        if overrides["quiet"]:
            overrides["verbosity"] = "quiet"
        del overrides["quiet"]

    override_thresholds = overrides.pop("thresholds", None)
    if isinstance(override_thresholds, ThresholdConfig):
        threshold_values = {
            f.name: getattr(override_thresholds, f.name) for f in fields(ThresholdConfig)
        }
    elif isinstance(override_thresholds, dict):
        threshold_values.update(override_thresholds)

    merged.update({k: v for k, v in overrides.items() if v is not None})

    try:
        thresholds = ThresholdConfig(**threshold_values)
    except TypeError as e:
        raise ConfigurationError(f"Invalid [thresholds] config: {e}")

    try:
        return ProfilerConfig(thresholds=thresholds, **merged)
    except TypeError as e:
        raise ConfigurationError(f"Invalid configuration: {e}")


def _merge_file(merged: dict, threshold_values: dict, path: Path, label: str) -> None:
    try:
        data = _load_toml_file(path)
    except (OSError, tomllib.TOMLDecodeError) as e:
        raise ConfigurationError(f"Invalid {label} config '{path}': {e}")

    section = data.pop("thresholds", None)
    if section is not None:
        if not isinstance(section, dict):
            raise InvalidConfigError("thresholds", section, "expected a table")
        threshold_values.update(section)
    merged.update(data)


def _load_env_vars() -> tuple[dict[str, Any], dict[str, Any]]:
    """Read VIBE_PROFILER_* and VIBE_PROFILER_THRESHOLD_* environment variables.

    Returns:
        (top-level values, threshold values) keyed by dataclass field name.
    """
    scalars = _collect_env(ProfilerConfig, ENV_PREFIX, skip={"thresholds"})
    thresholds = _collect_env(ThresholdConfig, THRESHOLD_ENV_PREFIX, skip=set())
    return scalars, thresholds


def _collect_env(cls: type, prefix: str, skip: set[str]) -> dict[str, Any]:
    type_hints = get_type_hints(cls)
    result: dict[str, Any] = {}

    for f in fields(cls):
        if f.name in skip:
            continue
        env_key = f"{prefix}{f.name.upper()}"
        env_value = os.environ.get(env_key)
        if env_value is None:
            continue

        try:
            parsed = _parse_env_value(env_value, type_hints[f.name])
        except ValueError as e:
            raise InvalidConfigError(env_key, env_value, str(e))
        if parsed is not None:
            result[f.name] = parsed

    return result


def _parse_env_value(value: str, type_hint: Any) -> Any:
    """Parse an environment variable string to the field's type.

    Raises:
        ValueError: If the value can't be parsed to the expected type
    """
    args = getattr(type_hint, "__args__", ())
    origin = getattr(type_hint, "__origin__", None)
    if type(None) in args:
        non_none_types = [t for t in args if t is not type(None)]
        if non_none_types:
            type_hint = non_none_types[0]
            origin = getattr(type_hint, "__origin__", None)

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

    if type_hint is str or origin is Literal:
        return value

    return None


def _load_toml_file(path: Path) -> dict:
    with open(path, "rb") as f:
        return tomllib.load(f)
