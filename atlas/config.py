"""Configuration loading for Atlas.

Settings come from built-in defaults, optionally overridden by a YAML file
(`atlas.yml` in the working directory unless another path is given).
"""

import logging
from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from atlas.errors import ConfigError

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_FILE = "atlas.yml"


@dataclass
class AtlasConfig:
    """Effective settings for a game."""
    player_count: int = 2
    state_file: str = ".atlas/state.json"
    storage_key: str = "atlas_game_state"
    log_path: str = "logs/atlas"
    points_per_entry: int = 1

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    def with_overrides(self, **overrides: Any) -> "AtlasConfig":
        """Return a copy with every non-None override applied."""
        values = self.to_dict()
        values.update({k: v for k, v in overrides.items() if v is not None})
        config = AtlasConfig(**values)
        config.validate()
        return config

    def validate(self) -> None:
        if self.player_count not in (1, 2):
            raise ConfigError(f"player_count must be 1 or 2, got {self.player_count}")
        if not isinstance(self.points_per_entry, int) or isinstance(self.points_per_entry, bool) or self.points_per_entry < 1:
            raise ConfigError(f"points_per_entry must be a positive integer, got {self.points_per_entry}")
        if not self.storage_key:
            raise ConfigError("storage_key must not be empty")


def load_config(config_file: Optional[str] = None) -> AtlasConfig:
    """Load configuration from YAML.

    Args:
        config_file: Path to a YAML file. When None, `atlas.yml` is read if
            present and defaults are used otherwise.

    Raises:
        ConfigError: if an explicit file is missing, the YAML is invalid, or
            a value is out of range
    """
    if config_file is None:
        file_path = Path(DEFAULT_CONFIG_FILE)
        if not file_path.exists():
            return AtlasConfig()
    else:
        file_path = Path(config_file)
        if not file_path.exists():
            raise ConfigError(f"Config file not found: {file_path}")

    try:
        with open(file_path, "r") as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {file_path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(f"Config file {file_path} must contain a mapping")

    known = {f.name for f in fields(AtlasConfig)}
    unknown = sorted(set(data) - known)
    if unknown:
        logger.warning(f"Ignoring unknown config keys in {file_path}: {', '.join(unknown)}")

    try:
        config = AtlasConfig(**{k: v for k, v in data.items() if k in known})
    except TypeError as e:
        raise ConfigError(f"Invalid config in {file_path}: {e}") from e
    config.validate()

    logger.info(f"Loaded config from {file_path}")
    return config
