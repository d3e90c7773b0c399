"""Policy file loading (JSON or TOML)."""

from __future__ import annotations

import json
import logging
import tomllib
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from tasklint.config.policy import Policy
from tasklint.exceptions import ConfigError

logger = logging.getLogger(__name__)


def _read_payload(config_path: Path) -> Any:
    text = config_path.read_text(encoding="utf-8")
    if config_path.suffix.lower() == ".toml":
        payload = tomllib.loads(text)
        # pyproject-style files keep settings under [tool.tasklint]
        if "tool" in payload and "tasklint" in payload["tool"]:
            return payload["tool"]["tasklint"]
        return payload.get("tasklint", payload)
    return json.loads(text)


def load_policy(path: str | Path) -> Policy:
    """Load and shape-validate a policy file.

    Keys missing from the file keep their defaults.

    Args:
        path: Path to a ``.json`` or ``.toml`` policy file.

    Returns:
        A validated, immutable :class:`Policy`.

    Raises:
        ConfigError: If the file is unreadable, malformed, or any parameter
            fails its shape rule.
    """
    config_path = Path(path).expanduser().resolve()

    try:
        raw_payload = _read_payload(config_path)
    except OSError as exc:
        raise ConfigError(f"failed reading config file: {config_path}") from exc
    except json.JSONDecodeError as exc:
        raise ConfigError(f"invalid JSON in config file: {config_path}") from exc
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(f"invalid TOML in config file: {config_path}") from exc

    if not isinstance(raw_payload, dict):
        raise ConfigError(f"config file must contain an object: {config_path}")

    try:
        policy = Policy.model_validate(raw_payload)
    except ValidationError as exc:
        raise ConfigError(f"invalid config: {exc}") from exc

    logger.debug("loaded policy from %s (%d keys overridden)", config_path, len(raw_payload))
    return policy
