"""Logic for loading and merging configuration files."""

import copy
import logging
from pathlib import Path
from typing import Any

import yaml

from typegraph.normalize_type import collapse_aliases

logger = logging.getLogger(__name__)

DEFAULT_CONFIG: dict[str, Any] = {
    "analysis": {
        "deep": True,
        "structural_types": True,
        "magic_prefix": "__",
    },
    "aliases": {},
    "passthrough_types": [
        "callable",
        "resource",
        "null",
        "void",
        "self",
        "static",
        "iterable",
    ],
    "namespace": {},
}


def merge_config(base: dict[str, Any], update: dict[str, Any]) -> dict[str, Any]:
    """Merge a user config section by section over a base config.

    - 'analysis', 'aliases' and 'namespace' are merged key by key.
    - 'passthrough_types' is additive (deduplicated, sorted).
    - Merged aliases are collapsed so no alias target is itself an alias.
    - Unknown sections are ignored with a warning.
    """
    result = copy.deepcopy(base)
    for key, value in update.items():
        if key not in DEFAULT_CONFIG:
            logger.warning("Ignoring unknown config section: %s", key)
            continue
        if value is None:
            continue

        expected = type(DEFAULT_CONFIG[key])
        if not isinstance(value, expected):
            msg = f"Config section '{key}' must be a {expected.__name__}"
            raise ValueError(msg)

        if key == "passthrough_types":
            result[key] = sorted({*result.get(key, []), *value})
        else:
            result[key] = {**result.get(key, {}), **value}

    result["aliases"] = collapse_aliases(result.get("aliases", {}))
    return result


def load_config(path: str | None = None) -> dict[str, Any]:
    """Load configuration from a YAML file and merge it with defaults."""
    config = copy.deepcopy(DEFAULT_CONFIG)
    if path:
        p = Path(path)
        if p.exists():
            user_config = yaml.safe_load(p.read_text(encoding="utf-8")) or {}
            config = merge_config(config, user_config)
        else:
            logger.warning("Config file not found: %s. Using defaults.", p)
    return config
