"""Readiness check settings.

Settings are resolved from, lowest precedence first: built-in defaults,
``READINESS_*`` environment variables, an optional YAML settings file,
and explicit overrides (usually CLI arguments).

Example settings file::

    timeout: 300
    settle_delay: 15
    poll_interval: 5
    restart_threshold: 3
    failure_reasons:
      - CrashLoopBackOff
      - ImagePullBackOff
"""
import logging
import os
from dataclasses import dataclass, field, fields, replace
from typing import Any, Dict, FrozenSet, Mapping, Optional

import yaml

logger = logging.getLogger(__name__)

DEFAULT_FAILURE_REASONS = frozenset({
    "CrashLoopBackOff",
    "ImagePullBackOff",
    "ErrImagePull",
    "RunContainerError",
})

ENV_VARS = {
    "timeout": "READINESS_TIMEOUT",
    "settle_delay": "READINESS_SETTLE_DELAY",
    "poll_interval": "READINESS_POLL_INTERVAL",
    "restart_threshold": "READINESS_RESTART_THRESHOLD",
}


@dataclass(frozen=True)
class Settings:
    """Tunables for one readiness check (all durations in seconds)."""
    timeout: float = 500
    settle_delay: float = 10
    poll_interval: float = 5
    restart_threshold: int = 3
    failure_reasons: FrozenSet[str] = field(default=DEFAULT_FAILURE_REASONS)

    def __post_init__(self):
        for name in ("timeout", "settle_delay", "poll_interval", "restart_threshold"):
            if getattr(self, name) < 0:
                raise ValueError(f"{name} must be non-negative, got {getattr(self, name)}")
        if not isinstance(self.failure_reasons, frozenset):
            object.__setattr__(self, "failure_reasons", frozenset(self.failure_reasons))

    def with_overrides(self, overrides: Mapping[str, Any]) -> "Settings":
        """Return a copy with non-None overrides applied."""
        known = {f.name for f in fields(self)}
        unknown = set(overrides) - known
        if unknown:
            raise ValueError(f"Unknown settings: {', '.join(sorted(unknown))}")
        values = {k: v for k, v in overrides.items() if v is not None}
        return replace(self, **values)


def _coerce(name: str, raw: str) -> Any:
    if name == "restart_threshold":
        return int(raw)
    return float(raw)


def settings_from_env(environ: Optional[Mapping[str, str]] = None) -> Dict[str, Any]:
    """Collect overrides from READINESS_* environment variables."""
    environ = os.environ if environ is None else environ
    overrides = {}
    for name, var in ENV_VARS.items():
        raw = environ.get(var)
        if raw:
            try:
                overrides[name] = _coerce(name, raw)
            except ValueError:
                raise ValueError(f"{var} must be a number, got '{raw}'")
    return overrides


def settings_from_file(path: str) -> Dict[str, Any]:
    """Load overrides from a YAML settings file."""
    with open(path) as f:
        data = yaml.safe_load(f)

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"Settings file {path} must contain a mapping")
    logger.debug(f"Loaded settings from {path}: {data}")
    return data


def load_settings(
    path: Optional[str] = None,
    overrides: Optional[Mapping[str, Any]] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> Settings:
    """Resolve settings from defaults, environment, file and overrides."""
    settings = Settings().with_overrides(settings_from_env(environ))
    if path:
        settings = settings.with_overrides(settings_from_file(path))
    if overrides:
        settings = settings.with_overrides(overrides)
    return settings
