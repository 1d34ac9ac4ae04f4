"""Configuration loader for morpher.

Loads defaults from config.json at project root, with hardcoded fallbacks.
"""

import json
from pathlib import Path
from typing import Any

# Hardcoded fallback defaults
FALLBACK_DEFAULTS = {
    "dictionary": None,
    "index": None,
    "ingestor": "opencorpora",
    "encoding": "utf-8",
    "cache_dir": "sources",
    "group_reentry": "append",
    "intern_attributes": True,
    "force": False,
    "quiet": False,
}

_config: dict[str, Any] | None = None


def _find_config() -> Path | None:
    """Find config.json by walking up from current file."""
    paths = [
        Path(__file__).parent.parent.parent / "config.json",  # python/morpher -> root
        Path.cwd() / "config.json",
        Path.cwd().parent / "config.json",
    ]
    for path in paths:
        if path.exists():
            return path
    return None


def load() -> dict[str, Any]:
    """Load configuration from config.json or use fallbacks."""
    global _config
    if _config is not None:
        return _config

    config_path = _find_config()
    if config_path:
        try:
            with open(config_path, encoding="utf-8") as f:
                data = json.load(f)
            if isinstance(data, dict):
                _config = data
                return _config
        except (json.JSONDecodeError, OSError):
            pass

    # Fallback
    _config = {"defaults": dict(FALLBACK_DEFAULTS)}
    return _config


def reset() -> None:
    """Forget the cached configuration."""
    global _config
    _config = None


def get_default(key: str, fallback: Any = None) -> Any:
    """Get a default value from config."""
    cfg = load()
    return cfg.get("defaults", {}).get(key, fallback)


# Convenience accessors
def default_encoding() -> str:
    return get_default("encoding", FALLBACK_DEFAULTS["encoding"])


def default_cache_dir() -> str:
    return get_default("cache_dir", FALLBACK_DEFAULTS["cache_dir"])


def default_group_reentry() -> str:
    return get_default("group_reentry", FALLBACK_DEFAULTS["group_reentry"])


def default_intern_attributes() -> bool:
    return get_default("intern_attributes", FALLBACK_DEFAULTS["intern_attributes"])
