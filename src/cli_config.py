"""Runtime configuration: YAML config file and CLI overrides.

Values land on ``Constants`` so modules read a single source. Precedence,
lowest first: Constants defaults, config file, CLI flags.
"""

from __future__ import annotations

import logging
import os
from typing import Any, Dict, Optional

import yaml

from constants import Constants

logger = logging.getLogger(__name__)

# config key path -> (Constants attribute, converter)
_CONFIG_KEYS = {
    ("github", "api_base"): ("GITHUB_API_BASE", str),
    ("github", "per_page"): ("REPO_API_PER_PAGE", int),
    ("github", "max_pages"): ("REPO_API_MAX_PAGES", int),
    ("http", "timeout"): ("REQUEST_TIMEOUT", int),
    ("http", "retries"): ("HTTP_RETRY_MAX", int),
    ("workers",): ("MAX_WORKERS", int),
}


def load_config_file(config_path: Optional[str]) -> Dict[str, Any]:
    """Load a YAML configuration file.

    Args:
        config_path: Path to YAML config file.

    Returns:
        Configuration dict; empty when the path is unset, missing or invalid.
    """
    if not config_path:
        return {}

    if not os.path.isfile(config_path):
        logger.warning("Config file not found: %s", config_path)
        return {}

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        logger.warning("Failed to load config %s: %s", config_path, e)
        return {}
    if not isinstance(data, dict):
        logger.warning("Ignoring config %s: top level is not a mapping", config_path)
        return {}
    return data


def _lookup(data: Dict[str, Any], keys) -> Any:
    node: Any = data
    for key in keys:
        if not isinstance(node, dict) or key not in node:
            return None
        node = node[key]
    return node


def apply_config(data: Dict[str, Any]) -> None:
    """Copy recognised config values onto Constants, skipping invalid ones."""
    for keys, (attr, convert) in _CONFIG_KEYS.items():
        raw = _lookup(data, keys)
        if raw is None:
            continue
        try:
            value = convert(raw)
        except (TypeError, ValueError):
            logger.warning("Ignoring invalid config value %s=%r", ".".join(keys), raw)
            continue
        if convert is int and value < 1:
            logger.warning("Ignoring non-positive config value %s=%r", ".".join(keys), raw)
            continue
        setattr(Constants, attr, value)


def apply_cli_overrides(args) -> None:
    """Apply CLI flags, which take precedence over the config file."""
    if getattr(args, "API_BASE", None):
        Constants.GITHUB_API_BASE = args.API_BASE
    if getattr(args, "WORKERS", None) is not None:
        Constants.MAX_WORKERS = max(1, int(args.WORKERS))
    if getattr(args, "PER_PAGE", None) is not None:
        Constants.REPO_API_PER_PAGE = max(1, int(args.PER_PAGE))


def configure(args) -> None:
    """Load the config file named on the CLI and apply all overrides."""
    apply_config(load_config_file(getattr(args, "CONFIG", None)))
    apply_cli_overrides(args)
