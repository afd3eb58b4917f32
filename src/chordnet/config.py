"""Analysis defaults: discovery, loading, validation.

Resolution order (later wins): built-in defaults, a ``.chordnet.json``
file found by walking up from the working directory, ``CHORDNET_*``
environment variables.  Explicit CLI options override all of these.
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any

log = logging.getLogger(__name__)

CONFIG_NAME = ".chordnet.json"
ENV_PREFIX = "CHORDNET_"


@dataclass(frozen=True)
class AnalysisConfig:
    damping: float = 0.85
    iterations: int = 100
    max_cycle_length: int = 6
    max_community_iterations: int = 100


_FIELD_TYPES = {f.name: (float if f.name == "damping" else int) for f in fields(AnalysisConfig)}


def find_config_root(start: str | Path = ".") -> Path | None:
    """Walk up from *start* looking for a .chordnet.json file.

    Returns the directory containing the config, or None.
    """
    current = Path(start).resolve()
    while True:
        if (current / CONFIG_NAME).is_file():
            return current
        if current == current.parent:
            return None
        current = current.parent


def _coerce(key: str, value: Any, source: str):
    kind = _FIELD_TYPES[key]
    if isinstance(value, bool):
        raise ValueError(f"{source}: {key} must be a number, got {value!r}")
    try:
        coerced = kind(value)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"{source}: {key} must be {kind.__name__}, got {value!r}") from exc
    if kind is int and isinstance(value, float) and not value.is_integer():
        raise ValueError(f"{source}: {key} must be an integer, got {value!r}")
    if kind is int and coerced < 1:
        raise ValueError(f"{source}: {key} must be at least 1, got {value!r}")
    if kind is float and not 0.0 < coerced <= 1.0:
        raise ValueError(f"{source}: {key} must lie in (0, 1], got {value!r}")
    return coerced


def load_config(root: Path) -> dict[str, Any]:
    """Read and validate .chordnet.json from *root*.

    Returns only recognised keys.  Raises FileNotFoundError or ValueError
    on problems.
    """
    config_path = root / CONFIG_NAME
    if not config_path.exists():
        raise FileNotFoundError(f"No config at {config_path}")
    try:
        raw = json.loads(config_path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise ValueError(f"{config_path}: invalid JSON ({exc})") from exc
    if not isinstance(raw, dict):
        raise ValueError(f"{config_path}: top level must be an object")

    values: dict[str, Any] = {}
    for key, value in raw.items():
        if key not in _FIELD_TYPES:
            log.warning("Ignoring unknown config key %r in %s", key, config_path)
            continue
        values[key] = _coerce(key, value, str(config_path))
    return values


def _env_overrides(environ) -> dict[str, Any]:
    values: dict[str, Any] = {}
    for key in _FIELD_TYPES:
        env_key = ENV_PREFIX + key.upper()
        raw = environ.get(env_key)
        if raw is not None and raw.strip():
            values[key] = _coerce(key, raw.strip(), env_key)
    return values


def get_config(start: str | Path = ".", environ=None) -> AnalysisConfig:
    """Resolve defaults, config file and environment into an AnalysisConfig."""
    environ = os.environ if environ is None else environ
    cfg = AnalysisConfig()
    root = find_config_root(start)
    if root is not None:
        cfg = replace(cfg, **load_config(root))
        log.info("Loaded analysis config from %s", root / CONFIG_NAME)
    env = _env_overrides(environ)
    if env:
        cfg = replace(cfg, **env)
    return cfg
