"""Configuration files (YAML) and helpers.

`ConfigManager` reads the default files from this folder and merges them
with user overrides; `MultipageConfig` is the typed view handed to services.
"""

from .settings import MultipageConfig
from .manager import ConfigManager, get_user_config_dir

__all__ = [
    "ConfigManager",
    "MultipageConfig",
    "get_user_config_dir",
]
