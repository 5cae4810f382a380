"""
Generator configuration: YAML file, .env file and environment overrides.

Precedence (highest first):
    1. FIXTUREGEN_* environment variables (a .env file is loaded first)
    2. The YAML config file
    3. Defaults declared on GeneratorSettings
"""

import logging
import os
import string
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, Field, ValidationError



logger = logging.getLogger(__name__)

PROJECT_ROOT = Path(__file__).resolve().parents[2]
DEFAULT_CONFIG_PATH = PROJECT_ROOT / "config" / "generator.yaml"
ENV_PREFIX = "FIXTUREGEN_"


class GeneratorSettings(BaseModel):
    """Settings shared by the randomizer and the generator engine."""

    random_length: int = Field(default=10, ge=1)
    """Number of random characters appended to the prefix."""

    random_prefix: str = "test_"
    """Fixed prefix of every random string, makes test data easy to spot."""

    alphabet: str = Field(default=string.ascii_letters, min_length=1)
    """Characters random strings are drawn from."""

    max_depth: int = Field(default=32, ge=1)
    """Deepest allowed chain of nested entity generation."""

    seed: Optional[int] = None
    """Seed for reproducible random strings (None = fresh entropy per call)."""


class ConfigError(Exception):
    """Raised when configuration values are invalid."""
    pass


def _env_overrides() -> Dict[str, Any]:
    overrides: Dict[str, Any] = {}
    for name in GeneratorSettings.model_fields:
        value = os.getenv(ENV_PREFIX + name.upper())
        if value is not None:
            overrides[name] = value
    return overrides


def load_settings(path: Optional[Path] = None, env_file: Optional[Path] = None) -> GeneratorSettings:
    """
    Load generator settings.

    Args:
        path: YAML config file (default: config/generator.yaml, optional)
        env_file: .env file to load before reading the environment

    Returns:
        Validated GeneratorSettings

    Raises:
        FileNotFoundError: If an explicitly given config file does not exist
        ConfigError: If the file cannot be parsed or the merged values fail validation
    """
    load_dotenv(env_file)

    data: Dict[str, Any] = {}
    config_path = Path(path) if path is not None else DEFAULT_CONFIG_PATH
    if config_path.exists():
        with open(config_path, "r", encoding="utf-8") as f:
            try:
                data = yaml.safe_load(f) or {}
            except yaml.YAMLError as e:
                raise ConfigError(f"Cannot parse config file {config_path}: {e}") from e
        if not isinstance(data, dict):
            raise ConfigError(f"Config file must contain a mapping: {config_path}")
        logger.debug("Loaded generator config from %s", config_path)
    elif path is not None:
        raise FileNotFoundError(f"Config file not found: {config_path}")

    data.update(_env_overrides())

    try:
        return GeneratorSettings.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid generator config: {e}") from e
