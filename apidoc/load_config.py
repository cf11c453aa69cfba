"""Logic for loading and merging parser configuration files."""

import copy
import hashlib
import json
from pathlib import Path
from typing import Any

import yaml

from apidoc.deep_merge import deep_merge

DUPLICATE_CLASS_POLICIES = ("overwrite", "error")

DEFAULT_CONFIG: dict[str, Any] = {
    "sources": {
        "suffix": ".md",
        "params_file": "params.md",
        "exclude": [],
    },
    "rules": {
        # overwrite: last class declaration wins; error: reject the duplicate
        "duplicate_classes": "overwrite",
    },
    "logging": {
        "level": "INFO",
    },
}


def load_config(path: str | Path | None = None) -> dict[str, Any]:
    """Load configuration from a YAML file and merge it with defaults."""
    config = copy.deepcopy(DEFAULT_CONFIG)
    if path:
        p = Path(path)
        if p.exists():
            user_config = yaml.safe_load(p.read_text(encoding="utf-8")) or {}
            config = deep_merge(config, user_config)
    policy = config["rules"].get("duplicate_classes")
    if policy not in DUPLICATE_CLASS_POLICIES:
        msg = (
            f"Invalid rules.duplicate_classes: {policy!r} "
            f"(expected one of {', '.join(DUPLICATE_CLASS_POLICIES)})"
        )
        raise ValueError(msg)
    return config


def config_fingerprint(config: dict[str, Any]) -> str:
    """Return a short digest of the configuration, independent of key order."""
    canonical = json.dumps(config, sort_keys=True, separators=(",", ":"))
    return hashlib.sha256(canonical.encode("utf-8")).hexdigest()[:12]
