# config_manager.py - JSON config manager

import json
import logging
import os
import random
from typing import Any, Callable, Dict, Optional

logger = logging.getLogger(__name__)

DEFAULTS: Dict[str, Any] = {
    "n": 3,  # window length, context is n-1 words
    "max_words": 50,
    "seed": None,  # int for reproducible generation
    "count": 1,
    "workers": 4,
    "log_level": "INFO",
    "log_file": None,
}

# value types for coercion when a value arrives as a string (CLI /config)
_TYPES: Dict[str, type] = {
    "n": int,
    "max_words": int,
    "seed": int,
    "count": int,
    "workers": int,
    "log_level": str,
    "log_file": str,
}

# only these may be unset
_NULLABLE = {"seed", "log_file"}


def _coerce(key: str, val: Any) -> Any:
    """Convert `val` to the type of option `key`. Raises ValueError when it can't."""
    if val is None or (isinstance(val, str) and val.lower() in ("none", "null", "")):
        if key in _NULLABLE:
            return None
        raise ValueError(f"{key} cannot be empty")
    typ = _TYPES[key]
    if typ is int:
        # bools and floats would be silently truncated
        if isinstance(val, bool) or isinstance(val, float):
            raise ValueError(f"{key} must be an integer, got {val!r}")
        try:
            return int(val)
        except (TypeError, ValueError):
            raise ValueError(f"{key} must be an integer, got {val!r}") from None
    if not isinstance(val, str):
        raise ValueError(f"{key} must be a string, got {val!r}")
    return val


class Config:
    """Defaults overlaid with an optional JSON file. No file means in-memory only."""

    def __init__(self, path: Optional[str] = None):
        self.path = path
        self.data: Dict[str, Any] = dict(DEFAULTS)
        self._load()

    def _load(self):
        if not self.path or not os.path.exists(self.path):
            return
        try:
            with open(self.path, "r", encoding="utf8") as f:
                loaded = json.load(f)
        except (OSError, ValueError) as e:
            logger.warning("could not read config %s, using defaults: %s", self.path, e)
            return
        if not isinstance(loaded, dict):
            logger.warning("config %s is not a JSON object, using defaults", self.path)
            return
        for k, v in loaded.items():
            if k not in DEFAULTS:
                logger.debug("ignoring unknown config key %r", k)
                continue
            try:
                self.data[k] = _coerce(k, v)
            except ValueError as e:
                logger.warning("bad value in %s, keeping default %s=%r: %s", self.path, k, DEFAULTS[k], e)

    def save(self):
        if not self.path:
            return
        with open(self.path, "w", encoding="utf8") as f:
            json.dump(self.data, f, indent=2)

    def get(self, key: str, default: Any = None) -> Any:
        return self.data.get(key, default)

    def set(self, key: str, val: Any):
        """Set one option, coercing strings to the option's type, then persist."""
        if key not in DEFAULTS:
            raise KeyError(f"no such option: {key}")
        self.data[key] = _coerce(key, val)
        self.save()

    def update(self, **overrides: Any):
        """Apply non-None overrides (e.g. parsed CLI flags) without saving."""
        for k, v in overrides.items():
            if v is not None and k in DEFAULTS:
                self.data[k] = v

    def as_dict(self) -> Dict[str, Any]:
        return dict(self.data)

    def rand_func(self) -> Callable[[int], int]:
        """Random source for the chain, seeded when `seed` is set."""
        seed = self.data.get("seed")
        if seed is None:
            return random.randrange
        return random.Random(seed).randrange
