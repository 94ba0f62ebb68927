# src/container_finder/core/managers/config_manager.py
import json
import logging
from typing import Any, Dict, Iterable, Optional

from container_finder.core.errors import ConfigOverrideError
from container_finder.core.utils.path_utils import PathUtils

logger = logging.getLogger(__name__)

_TRUE_WORDS = {"1", "true", "yes", "on"}
_FALSE_WORDS = {"0", "false", "no", "off"}


class ConfigManager:
    """
    Singleton holding the tool's settings.

    Values come from the bundled settings.json; the CLI layers 'key=value'
    overrides on top (--set) before anything reads them.
    """
    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super(ConfigManager, cls).__new__(cls)
            cls._instance._config = {}
            cls._instance.reset()
        return cls._instance

    def get_all(self) -> Dict[str, Any]:
        """The effective configuration, overrides included (printed by --show-config)."""
        return self._config

    def get_nested(self, key_path: str, default: Optional[Any] = None) -> Any:
        """Looks up a dotted key such as 'parser.features'."""
        value = self._config
        for key in key_path.split('.'):
            if not isinstance(value, dict):
                return default
            value = value.get(key)
        return default if value is None else value

    def set_nested(self, key_path: str, value: Any) -> None:
        """
        Stores `value` under a dotted key.

        A string replacing an existing int/float/bool is converted to that type,
        so '--set output.indent=4' stores the number 4.

        Raises:
            ConfigOverrideError: If the path runs through a non-section value,
                                 or the string cannot be converted.
        """
        *sections, leaf = key_path.split('.')
        target = self._config
        for key in sections:
            target = target.setdefault(key, {})
            if not isinstance(target, dict):
                raise ConfigOverrideError(f"'{key}' in '{key_path}' is a value, not a section.")

        current = target.get(leaf)
        if isinstance(current, dict):
            raise ConfigOverrideError(f"'{key_path}' is a section; set one of its keys instead.")
        if isinstance(value, str) and current is not None and not isinstance(current, str):
            value = self._convert(key_path, value, type(current))

        target[leaf] = value
        logger.info("Configuration updated: %s = %r", key_path, value)

    def apply_overrides(self, overrides: Iterable[str]) -> None:
        """Applies 'dotted.key=value' strings in order."""
        for item in overrides:
            key_path, sep, value = item.partition("=")
            key_path = key_path.strip()
            if not sep or not key_path:
                raise ConfigOverrideError(f"Expected 'key=value', got '{item}'.")
            self.set_nested(key_path, value.strip())

    def reset(self) -> None:
        """Drops all overrides and reloads settings.json; an unusable file gives an empty config."""
        config_path = PathUtils.get_settings_file()
        if not config_path.exists():
            logger.warning("settings.json not found at %s. Using empty config.", config_path)
            self._config = {}
            return
        try:
            with open(config_path, "r", encoding="utf-8") as f:
                self._config = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.error("Failed to load %s: %s", config_path, e)
            self._config = {}
            return
        logger.debug("Configuration loaded from %s.", config_path)

    @staticmethod
    def _convert(key_path: str, raw: str, target_type: type) -> Any:
        if target_type is bool:
            word = raw.lower()
            if word in _TRUE_WORDS:
                return True
            if word in _FALSE_WORDS:
                return False
            raise ConfigOverrideError(f"'{key_path}' expects true/false, got '{raw}'.")
        try:
            return target_type(raw)
        except (TypeError, ValueError) as e:
            raise ConfigOverrideError(
                f"'{key_path}' expects {target_type.__name__}, got '{raw}'."
            ) from e


config_manager = ConfigManager()
