"""Engine configuration: defaults, YAML overrides and validation."""

from .defaults import DefaultConfig, get_default_config
from .loader import ConfigLoader

__all__ = ["DefaultConfig", "ConfigLoader", "get_default_config"]
