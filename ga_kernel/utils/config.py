"""
Configuration management for GA-Kernel.

Provides the configuration class holding library-wide defaults, plus a
process-wide active configuration read by the Multivector and PackedBlade
constructors when no dtype/device is passed explicitly.
"""

import json
from dataclasses import dataclass, field, asdict
from typing import Dict, Any
from pathlib import Path

from ..core.constants import DEFAULT_DTYPE, DEFAULT_DEVICE, DEFAULT_MAX_DIMENSION


@dataclass
class Config:
    """
    Configuration for GA-Kernel values.

    Attributes:
        dtype: Default coefficient dtype name ('float32', 'float64', 'int64', ...)
        device: Default device for coefficient storage ('cpu', 'cuda', 'mps')
        max_dimension: Largest N accepted by the dense Multivector (2^N slots)
    """

    dtype: str = DEFAULT_DTYPE
    device: str = DEFAULT_DEVICE
    max_dimension: int = DEFAULT_MAX_DIMENSION

    # Additional fields
    extra: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Convert config to dictionary."""
        return asdict(self)

    @classmethod
    def from_dict(cls, config_dict: Dict[str, Any]) -> 'Config':
        """Create config from dictionary."""
        # Extract known fields
        known_fields = {f.name for f in cls.__dataclass_fields__.values()}
        known_kwargs = {k: v for k, v in config_dict.items() if k in known_fields}
        extra_kwargs = {k: v for k, v in config_dict.items() if k not in known_fields}

        config = cls(**known_kwargs)
        config.extra.update(extra_kwargs)
        return config

    def update(self, **kwargs) -> 'Config':
        """Return a new config with updated values."""
        config_dict = self.to_dict()
        config_dict.update(kwargs)
        return Config.from_dict(config_dict)


_active_config = Config()


def get_config() -> Config:
    """Return the active configuration."""
    return _active_config


def set_config(config: Config) -> Config:
    """
    Replace the active configuration.

    Args:
        config: New configuration

    Returns:
        The previously active configuration, so callers can restore it
    """
    global _active_config
    previous = _active_config
    _active_config = config
    return previous


def load_config(filepath: str) -> Config:
    """
    Load configuration from JSON file.

    Args:
        filepath: Path to JSON config file

    Returns:
        Config object
    """
    filepath = Path(filepath)
    with open(filepath, 'r') as f:
        config_dict = json.load(f)
    return Config.from_dict(config_dict)


def save_config(config: Config, filepath: str) -> None:
    """
    Save configuration to JSON file.

    Args:
        config: Config object to save
        filepath: Output file path
    """
    filepath = Path(filepath)
    filepath.parent.mkdir(parents=True, exist_ok=True)

    with open(filepath, 'w') as f:
        json.dump(config.to_dict(), f, indent=2)
