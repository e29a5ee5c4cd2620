from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from result import Err, Ok, Result

from bundlesize.config.defaults import default_config
from bundlesize.config.schema import AppConfig

logger = logging.getLogger(__name__)

CONFIG_PATH = Path("bundlesize.json")


def _read_payload(path: Path) -> Result[dict[str, Any], str]:
    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as exc:
        return Err(f"Failed reading config at {path}: {exc}.")
    if not isinstance(payload, dict):
        return Err(f"Config at {path} must be a JSON object.")
    return Ok(payload)


def load_config(path: Path | None = None) -> Result[AppConfig, str]:
    """Load settings from *path*, or from ``./bundlesize.json`` when no path is given.

    Keys missing from the file keep their defaults.  Only the implicit
    ``./bundlesize.json`` may be absent; an explicit path that does not exist
    is an error like any other unreadable file.
    """
    defaults = default_config()
    if path is None and not CONFIG_PATH.exists():
        logger.debug("No %s found, using built-in defaults", CONFIG_PATH)
        return Ok(defaults)

    resolved = (path or CONFIG_PATH).expanduser()
    payload = _read_payload(resolved)
    if isinstance(payload, Err):
        return Err(payload.unwrap_err())

    try:
        config = AppConfig.from_dict(payload.unwrap(), defaults)
    except (TypeError, ValueError) as exc:
        return Err(f"Invalid config at {resolved}: {exc}")
    logger.debug("Loaded config from %s", resolved)
    return Ok(config)


def config_json(config: AppConfig) -> str:
    """Render *config* in the file format ``load_config`` reads."""
    return json.dumps(config.to_dict(), indent=2)
