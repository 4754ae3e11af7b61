from __future__ import annotations

from typing import Optional

import yaml


def load_yaml(path: str) -> dict:
    with open(path, "r", encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


def deep_update(base: dict, patch: dict) -> dict:
    # Recursively merge dict patch into base (in-place).
    for k, v in (patch or {}).items():
        if isinstance(v, dict) and isinstance(base.get(k), dict):
            deep_update(base[k], v)
        else:
            base[k] = v
    return base


DEFAULTS = {
    "run": {"name": "brickfall", "seed": 1},
    "cascade": {"workers": 1},
    "render": {"enabled": False, "width": 1100, "height": 700, "cell_px": 24, "highlight": None},
    "log": {"out": "logs"},
}


def load_config(
    base: Optional[str] = None,
    exp: Optional[str] = None,
    overrides: Optional[dict] = None,
) -> dict:
    """DEFAULTS <- base file <- experiment overlay <- overrides (e.g. CLI flags)."""
    cfg = _copy(DEFAULTS)
    if base:
        deep_update(cfg, load_yaml(base))
    if exp:
        deep_update(cfg, load_yaml(exp))
    if overrides:
        deep_update(cfg, overrides)
    validate(cfg)
    return cfg


def validate(cfg: dict) -> None:
    for section in ("run", "cascade", "render", "log"):
        if not isinstance(cfg.get(section), dict):
            raise ValueError(f"config section '{section}' is missing or not a mapping")
    _positive_int(cfg, "cascade", "workers")
    _positive_int(cfg, "render", "cell_px")
    _positive_int(cfg, "render", "width")
    _positive_int(cfg, "render", "height")


def _positive_int(cfg: dict, section: str, key: str) -> int:
    value = cfg[section].get(key)
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"{section}.{key} must be an integer, got {value!r}")
    if value < 1:
        raise ValueError(f"{section}.{key} must be >= 1, got {value}")
    return value


def _copy(d: dict) -> dict:
    return {k: _copy(v) if isinstance(v, dict) else v for k, v in d.items()}
