"""
Config Module

Handles user configuration for git-autocommit.
Looks for config in multiple places (in order):

1. .autocommitrc in current directory (project-specific)
2. .autocommitrc in home directory (global default)
3. Built-in defaults

Config format (JSON):
{
    "mode": "select",
    "border": "heavy",
    "keys": {"commit": "c"}
}
"""

import json
import sys
from dataclasses import dataclass, asdict, field
from pathlib import Path
from typing import Optional

# Valid configuration values
VALID_MODES = {"staged", "select"}
VALID_BORDERS = {"round", "solid", "double", "heavy", "ascii"}

DEFAULT_KEYS = {
    "toggle_select": "space",
    "preview": "enter",
    "stage_toggle": "s",
    "regenerate": "r",
    "edit": "e",
    "commit": "enter",
    "quit": "q",
}


@dataclass
class Config:
    """User configuration with sensible defaults."""
    mode: str = "staged"
    show_notifications: bool = True
    max_subject_length: int = 50
    border: str = "round"
    width: float = 0.8
    height: float = 0.8
    preview_width: float = 0.5
    message_height: int = 12
    keys: dict = field(default_factory=lambda: dict(DEFAULT_KEYS))

    def to_dict(self) -> dict:
        return {k: v for k, v in asdict(self).items() if v is not None}

    def validate(self) -> list[str]:
        """Validate config values and return list of warnings.

        Invalid values are replaced with defaults silently after warning.
        """
        warnings = []
        defaults = Config()

        if self.mode not in VALID_MODES:
            warnings.append(f"Invalid mode '{self.mode}', using '{defaults.mode}'")
            self.mode = defaults.mode

        if self.border not in VALID_BORDERS:
            warnings.append(f"Invalid border '{self.border}', using '{defaults.border}'")
            self.border = defaults.border

        if not isinstance(self.show_notifications, bool):
            warnings.append(f"Invalid show_notifications '{self.show_notifications}', using {str(defaults.show_notifications).lower()}")
            self.show_notifications = defaults.show_notifications

        for name in ('max_subject_length', 'message_height'):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
                warnings.append(f"Invalid {name} '{value}', using {getattr(defaults, name)}")
                setattr(self, name, getattr(defaults, name))

        for name in ('width', 'height'):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, (int, float)) or not 0 < value <= 1:
                warnings.append(f"Invalid {name} '{value}', using {getattr(defaults, name)}")
                setattr(self, name, getattr(defaults, name))

        value = self.preview_width
        if isinstance(value, bool) or not isinstance(value, (int, float)) or not 0 < value < 1:
            warnings.append(f"Invalid preview_width '{value}', using {defaults.preview_width}")
            self.preview_width = defaults.preview_width

        warnings.extend(self._merge_keys())
        return warnings

    def _merge_keys(self) -> list[str]:
        """Overlay user key names on the defaults, dropping unknown actions."""
        warnings = []
        user_keys = self.keys if isinstance(self.keys, dict) else {}
        if not isinstance(self.keys, dict):
            warnings.append("Invalid keys, using defaults")

        merged = dict(DEFAULT_KEYS)
        for action, key in user_keys.items():
            if action not in DEFAULT_KEYS:
                warnings.append(f"Unknown key action '{action}' ignored")
            elif not isinstance(key, str) or not key:
                warnings.append(f"Invalid key for '{action}', using '{DEFAULT_KEYS[action]}'")
            else:
                merged[action] = key
        self.keys = merged
        return warnings

    @classmethod
    def from_dict(cls, data: dict) -> 'Config':
        valid_keys = {f.name for f in cls.__dataclass_fields__.values()}
        filtered = {k: v for k, v in data.items() if k in valid_keys}
        config = cls(**filtered)
        # Validate and print warnings to stderr
        for warning in config.validate():
            print(f"Config warning: {warning}", file=sys.stderr)
        return config


class ConfigManager:
    """Manages loading and saving configuration."""

    CONFIG_FILENAME = ".autocommitrc"

    def __init__(self):
        self._config: Optional[Config] = None
        self._config_path: Optional[Path] = None

    def load(self) -> Config:
        if self._config is not None:
            return self._config

        local_path = Path.cwd() / self.CONFIG_FILENAME
        if local_path.exists():
            self._config = self._load_from_file(local_path)
            self._config_path = local_path
            return self._config

        home_path = Path.home() / self.CONFIG_FILENAME
        if home_path.exists():
            self._config = self._load_from_file(home_path)
            self._config_path = home_path
            return self._config

        self._config = Config()
        return self._config

    def _load_from_file(self, path: Path) -> Config:
        try:
            with open(path, 'r') as f:
                data = json.load(f)
            if not isinstance(data, dict):
                raise ValueError("top level must be an object")
            return Config.from_dict(data)
        except (json.JSONDecodeError, ValueError, IOError) as e:
            print(f"Warning: Could not load {path}: {e}", file=sys.stderr)
            return Config()

    def save(self, config: Config, global_config: bool = True) -> Path:
        path = Path.home() / self.CONFIG_FILENAME if global_config else Path.cwd() / self.CONFIG_FILENAME
        with open(path, 'w') as f:
            json.dump(config.to_dict(), f, indent=2)
        return path

    def get_config_path(self) -> Optional[Path]:
        return self._config_path


_manager = ConfigManager()


def load_config() -> Config:
    return _manager.load()


def save_config(config: Config, global_config: bool = True) -> Path:
    return _manager.save(config, global_config)


def get_config_path() -> Optional[Path]:
    return _manager.get_config_path()


__all__ = [
    "Config",
    "ConfigManager",
    "load_config",
    "save_config",
    "get_config_path",
    "DEFAULT_KEYS",
    "VALID_MODES",
    "VALID_BORDERS",
]
