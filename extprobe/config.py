"""
Probe configuration with YAML parsing and validation
"""

from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Optional

import yaml

from .errors import ConfigError


DEFAULT_INDEX_URL = "https://raw.githubusercontent.com/keiyoushi/extensions/refs/heads/repo/index.min.json"
DEFAULT_OUTPUT_PATH = "index.min.json"
DEFAULT_LANG = "es"

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass(frozen=True)
class ProbeConfig:
    """Settings for a single probe run"""
    index_url: str = DEFAULT_INDEX_URL
    output_path: str = DEFAULT_OUTPUT_PATH
    lang: str = DEFAULT_LANG
    log_level: str = "WARNING"
    log_file: Optional[str] = None

    def __post_init__(self):
        for name in ("index_url", "output_path", "lang"):
            value = getattr(self, name)
            if not isinstance(value, str):
                raise ConfigError(f"{name} must be a string, got {type(value).__name__}")
        if self.log_file is not None and not isinstance(self.log_file, str):
            raise ConfigError(f"log_file must be a string, got {type(self.log_file).__name__}")
        if not self.index_url:
            raise ConfigError("index_url is required")
        if not self.output_path:
            raise ConfigError("output_path is required")
        if str(self.log_level).upper() not in LOG_LEVELS:
            raise ConfigError(f"log_level must be one of {', '.join(LOG_LEVELS)}, got {self.log_level}")

    @property
    def output(self) -> Path:
        return Path(self.output_path).expanduser()

    def with_overrides(self, **overrides) -> "ProbeConfig":
        """Return a copy with every non-None override applied"""
        changes = {key: value for key, value in overrides.items() if value is not None}
        if not changes:
            return self
        return replace(self, **changes)

    @classmethod
    def from_yaml(cls, path: str) -> "ProbeConfig":
        """Load configuration from YAML file"""
        config_path = Path(path).expanduser()
        if not config_path.exists():
            raise ConfigError(f"Configuration file not found: {config_path}")

        try:
            with config_path.open("r", encoding="utf-8") as handle:
                data = yaml.safe_load(handle) or {}
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML in configuration file: {e}") from e
        except OSError as e:
            raise ConfigError(f"Cannot read configuration file {config_path}: {e}") from e

        if not isinstance(data, dict):
            raise ConfigError("Configuration root must be a mapping.")

        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ConfigError(f"Unknown configuration keys: {', '.join(unknown)}")

        return cls(**data)
