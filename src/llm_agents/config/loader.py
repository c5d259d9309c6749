"""
Configuration file loading.

JSON files (``.json``) are parsed with the json module; anything else is
read as YAML. The loaded record is merged onto ``AgentConfig.default()``.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError as PydanticValidationError

from llm_agents.config.core import AgentConfig
from llm_agents.errors import ConfigError


def _load_file(path: Path) -> Any:
    content = path.read_text(encoding="utf-8")
    if path.suffix == ".json":
        return json.loads(content)
    return yaml.safe_load(content)


def load_agent_config(path: str | Path) -> AgentConfig:
    """Load an agent configuration file.

    Args:
        path: Path to a JSON or YAML file

    Returns:
        Defaults overlaid with the file's values

    Raises:
        ConfigError: If the file cannot be read, parsed or validated
    """
    file_path = Path(path)
    try:
        data = _load_file(file_path)
    except OSError as e:
        raise ConfigError(f"failed to read config file: {e}", path=str(file_path)) from e
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise ConfigError(f"failed to parse config file: {e}", path=str(file_path)) from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError(
            f"config file must contain an object, got {type(data).__name__}",
            path=str(file_path),
        )
    return agent_config_from_dict(data, path=str(file_path))


def agent_config_from_dict(data: dict[str, Any], *, path: str | None = None) -> AgentConfig:
    """Build an agent configuration from already-parsed data.

    Raises:
        ConfigError: If the data does not describe a valid configuration
    """
    try:
        loaded = AgentConfig.model_validate(data)
    except PydanticValidationError as e:
        raise ConfigError(f"invalid config: {e}", path=path) from e
    except ConfigError as e:
        raise ConfigError(f"invalid config: {e.message}", path=path) from e
    config = AgentConfig.default()
    config.merge(loaded)
    return config
