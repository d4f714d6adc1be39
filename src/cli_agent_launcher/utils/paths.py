"""Host path helpers: home, OS config directory and XDG lookups."""

import os
import sys
from pathlib import Path


def expand_tilde(path_str: str) -> Path:
    """Expand a leading ``~`` to the user's home directory."""
    if path_str == "~":
        return Path.home()
    if path_str.startswith("~/") or path_str.startswith("~\\"):
        return Path.home() / path_str[2:]
    return Path(path_str)


def home_dir() -> Path:
    return Path.home()


def config_dir() -> Path:
    """OS-specific user configuration directory."""
    if sys.platform == "win32":
        appdata = os.environ.get("APPDATA")
        return Path(appdata) if appdata else Path.home() / "AppData" / "Roaming"
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support"
    return xdg_config_home()


def xdg_config_home() -> Path:
    """$XDG_CONFIG_HOME, falling back to ~/.config when unset or relative."""
    value = os.environ.get("XDG_CONFIG_HOME")
    if value and os.path.isabs(value):
        return Path(value)
    return Path.home() / ".config"


def is_unix() -> bool:
    return os.name == "posix"
