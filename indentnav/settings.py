"""Settings persistence for indentnav.

Settings live in one JSON file in the user's config directory. A
``defaults`` section applies to every document; sections keyed by a
document's absolute path override it for that document.
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional

import platformdirs

from .constants import NavigatorConstants

logger = logging.getLogger(__name__)

DEFAULTS_KEY = "defaults"

DEFAULT_SETTINGS: Dict[str, Any] = {
    "tab_width": NavigatorConstants.DEFAULT_TAB_WIDTH,
    "show_line_numbers": NavigatorConstants.DEFAULT_SHOW_LINE_NUMBERS,
}


class SettingsPersistence:
    """Loads and stores settings, falling back to built-in defaults."""

    def __init__(self, config_dir: Optional[Path] = None):
        """Initialize settings persistence.

        Args:
            config_dir: Directory holding ``settings.json``; defaults to the
                platform config directory.
        """
        self._config_dir = Path(config_dir) if config_dir else Path(platformdirs.user_config_dir("indentnav"))
        self._settings_file = self._config_dir / "settings.json"
        self._settings_cache: Optional[Dict[str, Dict[str, Any]]] = None

    @property
    def settings_file(self) -> Path:
        return self._settings_file

    def _load_all_settings(self) -> Dict[str, Dict[str, Any]]:
        """Load the whole settings file, or an empty dict if it is unusable."""
        if self._settings_cache is not None:
            return self._settings_cache

        if not self._settings_file.exists():
            self._settings_cache = {}
            return self._settings_cache

        try:
            with open(self._settings_file, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (json.JSONDecodeError, OSError) as e:
            logger.warning(f"Could not load settings from {self._settings_file}: {e}")
            data = {}

        if not isinstance(data, dict):
            logger.warning("Settings file has invalid format (not a dict), ignoring")
            data = {}

        self._settings_cache = data
        return self._settings_cache

    def _save_all_settings(self, settings: Dict[str, Dict[str, Any]]) -> bool:
        """Write the whole settings file atomically (temp file + rename)."""
        temp_file = self._settings_file.with_suffix(NavigatorConstants.ATOMIC_SAVE_SUFFIX)
        try:
            self._config_dir.mkdir(parents=True, exist_ok=True)
            with open(temp_file, 'w', encoding='utf-8') as f:
                json.dump(settings, f, indent=2)
            temp_file.replace(self._settings_file)
        except OSError as e:
            logger.warning(f"Could not save settings to {self._settings_file}: {e}")
            try:
                if temp_file.exists():
                    temp_file.unlink()
            except OSError:
                pass
            return False

        self._settings_cache = settings
        return True

    def _section(self, all_settings: Dict[str, Any], key: str) -> Dict[str, Any]:
        section = all_settings.get(key, {})
        if not isinstance(section, dict):
            logger.warning(f"Settings for {key} are not a dict, ignoring")
            return {}
        valid = {}
        for name, value in section.items():
            if self.validate_setting(name, value):
                valid[name] = value
            else:
                logger.warning(f"Ignoring invalid setting {name}={value!r} in {key}")
        return valid

    @staticmethod
    def _document_key(document_path: str) -> Optional[str]:
        try:
            return os.path.abspath(document_path)
        except (OSError, ValueError):
            logger.warning(f"Invalid document path: {document_path}")
            return None

    def load_settings(self, document_path: Optional[str] = None) -> Dict[str, Any]:
        """Load effective settings for a document.

        Args:
            document_path: Path of the document being edited, or None for
                the global defaults only.

        Returns:
            Built-in defaults overlaid with the stored defaults and then the
            document's own settings.
        """
        all_settings = self._load_all_settings()
        merged = dict(DEFAULT_SETTINGS)
        merged.update(self._section(all_settings, DEFAULTS_KEY))
        if document_path is not None:
            key = self._document_key(document_path)
            if key is not None:
                merged.update(self._section(all_settings, key))
        return merged

    def save_settings(self, document_path: Optional[str], settings: Dict[str, Any]) -> bool:
        """Save settings for a document, or the global defaults if path is None.

        Returns:
            True if save was successful, False otherwise.
        """
        if document_path is None:
            key = DEFAULTS_KEY
        else:
            key = self._document_key(document_path)
            if key is None:
                return False

        invalid = [name for name, value in settings.items() if not self.validate_setting(name, value)]
        if invalid:
            logger.warning(f"Refusing to save invalid settings: {', '.join(sorted(invalid))}")
            return False

        all_settings = dict(self._load_all_settings())
        all_settings[key] = dict(settings)
        return self._save_all_settings(all_settings)

    def validate_setting(self, key: str, value: Any) -> bool:
        """Validate a setting value.

        Unknown keys are accepted so newer settings files still load.
        """
        if key == 'tab_width':
            # bool is an int subclass; reject it explicitly
            if not isinstance(value, int) or isinstance(value, bool):
                return False
            return NavigatorConstants.MIN_TAB_WIDTH <= value <= NavigatorConstants.MAX_TAB_WIDTH

        if key == 'show_line_numbers':
            return isinstance(value, bool)

        return True

    def clear_cache(self) -> None:
        """Clear the in-memory cache of settings."""
        self._settings_cache = None


# Global instance
_persistence: Optional[SettingsPersistence] = None


def get_persistence() -> SettingsPersistence:
    """Get the global settings persistence instance.

    Returns:
        The singleton SettingsPersistence instance.
    """
    global _persistence
    if _persistence is None:
        _persistence = SettingsPersistence()
    return _persistence
