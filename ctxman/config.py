"""
Client configuration for ctxman.

The config file location is resolved in order of priority:
1. --config option / CTXMAN_CONFIG environment variable
2. CTXMAN_CONFIG_DIR environment variable
3. $XDG_CONFIG_HOME/ctxman
4. ~/.config/ctxman
"""

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

CONFIG_FILENAME = "config"

LOG_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warn": logging.WARNING,
    "error": logging.ERROR,
}


def default_config_dir() -> Path:
    """Get the per-user config directory"""
    env_dir = os.environ.get("CTXMAN_CONFIG_DIR")
    if env_dir:
        return Path(env_dir).expanduser()
    xdg_home = os.environ.get("XDG_CONFIG_HOME")
    if xdg_home:
        return Path(xdg_home) / "ctxman"
    return Path.home() / ".config" / "ctxman"


def default_config_path() -> Path:
    return default_config_dir() / CONFIG_FILENAME


@dataclass
class ClientOptions:
    """Options shared by every command"""
    config_path: Optional[Path] = None
    loglevel: str = "info"

    def __post_init__(self):
        if self.config_path is None:
            self.config_path = default_config_path()
        else:
            self.config_path = Path(self.config_path).expanduser()


def configure_logging(level: str = "info"):
    """Send log records to stderr at the requested level"""
    logging.basicConfig(
        level=LOG_LEVELS.get(level.lower(), logging.INFO),
        format="%(levelname)s %(message)s",
        force=True,
    )
