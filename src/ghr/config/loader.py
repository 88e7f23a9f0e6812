"""YAML configuration file loading with Pydantic validation."""

from pathlib import Path
from typing import TypeVar

import yaml
from pydantic import BaseModel, ValidationError

from ghr.errors import ConfigError

from .models import ClientConfig

T = TypeVar("T", bound=BaseModel)

DEFAULT_CONFIG_PATH = Path.home() / ".ghr" / "client.yaml"


def load_yaml(path: Path) -> dict:
    """Load a YAML file and return its contents as a dict.

    Raises:
        ConfigError: If the file cannot be read or parsed, or is not a mapping.
    """
    try:
        with open(path) as f:
            data = yaml.safe_load(f)
    except FileNotFoundError:
        raise ConfigError(f"Configuration file not found: {path}") from None
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"Configuration in {path} must be a mapping")
    return data


def load_config(path: Path, model_class: type[T]) -> T:
    """Load and validate a YAML config file against a Pydantic model.

    Raises:
        ConfigError: If validation fails.
    """
    data = load_yaml(path)
    try:
        return model_class(**data)
    except ValidationError as e:
        raise ConfigError(f"Configuration validation failed for {path}: {e}") from e


def load_client_config(path: Path | None = None) -> ClientConfig:
    """Load the client configuration.

    An explicit path must exist. Without one, ``~/.ghr/client.yaml`` is
    used when present and defaults otherwise.
    """
    if path is not None:
        return load_config(path, ClientConfig)
    if DEFAULT_CONFIG_PATH.exists():
        return load_config(DEFAULT_CONFIG_PATH, ClientConfig)
    return ClientConfig()
