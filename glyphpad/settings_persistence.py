"""Per-document settings kept between editing sessions.

Settings live in a JSON file in the user's config directory, keyed by the
absolute path of the document. The editor uses them to reopen a file with
the cursor where it was last saved.
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional

import platformdirs

from .model import Location

logger = logging.getLogger(__name__)

CURSOR_KEY = "cursor"


class SettingsPersistence:
    """Manages persistent storage of per-document settings."""

    def __init__(self, config_dir: Optional[Path] = None):
        self._config_dir = Path(config_dir or platformdirs.user_config_dir("glyphpad"))
        self._settings_file = self._config_dir / "documents.json"
        self._settings_cache: Optional[Dict[str, Dict[str, Any]]] = None

    def _load_all_settings(self) -> Dict[str, Dict[str, Any]]:
        if self._settings_cache is not None:
            return self._settings_cache

        if not self._settings_file.exists():
            self._settings_cache = {}
            return self._settings_cache

        try:
            with open(self._settings_file, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (json.JSONDecodeError, OSError) as e:
            logger.warning("Could not load settings from %s: %s", self._settings_file, e)
            data = {}

        if not isinstance(data, dict):
            logger.warning("Settings file has invalid format (not a dict), ignoring")
            data = {}
        self._settings_cache = data
        return self._settings_cache

    def _save_all_settings(self, settings: Dict[str, Dict[str, Any]]) -> bool:
        temp_file = self._settings_file.with_suffix('.tmp')
        try:
            self._config_dir.mkdir(parents=True, exist_ok=True)
            with open(temp_file, 'w', encoding='utf-8') as f:
                json.dump(settings, f, indent=2)
            temp_file.replace(self._settings_file)
        except OSError as e:
            logger.warning("Could not save settings to %s: %s", self._settings_file, e)
            try:
                if temp_file.exists():
                    temp_file.unlink()
            except OSError:
                pass
            return False
        self._settings_cache = settings
        return True

    def load_settings(self, document_path: Optional[str]) -> Dict[str, Any]:
        """Settings stored for ``document_path``; empty if there are none."""
        if document_path is None:
            return {}
        doc_settings = self._load_all_settings().get(os.path.abspath(document_path), {})
        if not isinstance(doc_settings, dict):
            logger.warning("Settings for %s are not a dict, ignoring", document_path)
            return {}
        return doc_settings.copy()

    def save_settings(self, document_path: Optional[str], settings: Dict[str, Any]) -> bool:
        """Store ``settings`` for ``document_path``. Returns False on failure."""
        if document_path is None:
            return False
        all_settings = dict(self._load_all_settings())
        all_settings[os.path.abspath(document_path)] = settings
        return self._save_all_settings(all_settings)

    def load_cursor(self, document_path: Optional[str]) -> Optional[Location]:
        value = self.load_settings(document_path).get(CURSOR_KEY)
        if (not isinstance(value, list) or len(value) != 2
                or not all(isinstance(v, int) and v >= 0 for v in value)):
            return None
        return Location(line_index=value[0], grapheme_index=value[1])

    def save_cursor(self, document_path: Optional[str], location: Location) -> bool:
        settings = self.load_settings(document_path)
        settings[CURSOR_KEY] = [location.line_index, location.grapheme_index]
        return self.save_settings(document_path, settings)

    def clear_cache(self) -> None:
        self._settings_cache = None


_persistence: Optional[SettingsPersistence] = None


def get_persistence() -> SettingsPersistence:
    """Get the global settings persistence instance."""
    global _persistence
    if _persistence is None:
        _persistence = SettingsPersistence()
    return _persistence
