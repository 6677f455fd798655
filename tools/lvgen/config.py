"""
YAML configuration for a generation run.

Example::

    output:
      package: constants
      template_dir: ./templates
    log_level: INFO

Every key is optional.
"""

import logging
from dataclasses import dataclass
from typing import Optional

import yaml

from .emitter import DEFAULT_PACKAGE
from .errors import ConfigError

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


@dataclass
class GeneratorConfig:
    """Settings for one generation run."""
    package: str = DEFAULT_PACKAGE
    template_dir: Optional[str] = None
    log_level: str = "WARNING"

    @property
    def log_level_value(self) -> int:
        return getattr(logging, self.log_level)


def _optional_str(data: dict, key: str, context: str) -> Optional[str]:
    """Return data[key] if present, raising ConfigError if it is not a string."""
    value = data.get(key)
    if value is None:
        return None
    if not isinstance(value, str):
        raise ConfigError(f"Field '{key}' in {context} section must be a string")
    return value


def parse_config_yaml(yaml_str: str) -> GeneratorConfig:
    """Parse a YAML config string into a GeneratorConfig.

    Args:
        yaml_str: YAML document; empty documents give the defaults.

    Returns:
        GeneratorConfig with defaults filled in.

    Raises:
        ConfigError: If the document is not valid YAML or a field is invalid.
    """
    try:
        data = yaml.safe_load(yaml_str)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML: {e}")

    if data is None:
        return GeneratorConfig()
    if not isinstance(data, dict):
        raise ConfigError("YAML root must be a mapping")

    cfg = GeneratorConfig()

    # ---- output section (optional) ----
    output = data.get("output")
    if output is not None:
        if not isinstance(output, dict):
            raise ConfigError("Section 'output' must be a mapping")
        package = _optional_str(output, "package", "output")
        if package is not None:
            if not package.isidentifier():
                raise ConfigError(f"Invalid Go package name '{package}'")
            cfg.package = package
        cfg.template_dir = _optional_str(output, "template_dir", "output")

    # ---- log level (optional) ----
    log_level = _optional_str(data, "log_level", "root")
    if log_level is not None:
        log_level = log_level.upper()
        if log_level not in LOG_LEVELS:
            raise ConfigError(
                f"Unknown log_level '{log_level}', expected one of "
                f"{', '.join(LOG_LEVELS)}")
        cfg.log_level = log_level

    return cfg


def load_config(path: str) -> GeneratorConfig:
    """Read and parse a YAML config file."""
    with open(path) as f:
        return parse_config_yaml(f.read())
