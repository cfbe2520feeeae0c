"""
String key/value storage in the shape of the browser storage APIs.

One instance plays "local storage" (optionally backed by a JSON file so it
survives restarts), another plays "session storage" (memory only, cleared
when the session ends).
"""

import json
import logging
from pathlib import Path
from typing import Dict, List, Optional

logger = logging.getLogger(__name__)

THEME_KEY = "theme"
THEMES = ("light", "dark")


class KeyValueStorage:
    def __init__(self, path: Optional[Path] = None):
        self.path = Path(path) if path else None
        self._items: Dict[str, str] = {}
        if self.path and self.path.is_file():
            try:
                data = json.loads(self.path.read_text(encoding="utf-8") or "{}")
                self._items = {str(k): str(v) for k, v in data.items()}
            except (OSError, ValueError, AttributeError) as e:
                logger.warning("Could not read %s, starting empty: %s", self.path, e)

    def get(self, key: str) -> Optional[str]:
        return self._items.get(key)

    def set(self, key: str, value: str) -> None:
        self.update({key: value})

    def update(self, values: Dict[str, str]) -> None:
        """Set several keys with one write; nothing changes if the write fails."""
        items = dict(self._items)
        items.update((k, str(v)) for k, v in values.items())
        self._commit(items)

    def remove(self, key: str) -> None:
        if key in self._items:
            items = dict(self._items)
            del items[key]
            self._commit(items)

    def clear(self) -> None:
        self._commit({})

    def keys(self) -> List[str]:
        return list(self._items)

    def __contains__(self, key: str) -> bool:
        return key in self._items

    def _commit(self, items: Dict[str, str]) -> None:
        self._write(items)
        self._items = items

    def _write(self, items: Dict[str, str]) -> None:
        if not self.path:
            return
        self.path.parent.mkdir(parents=True, exist_ok=True)
        staged = self.path.with_name(self.path.name + ".tmp")
        staged.write_text(json.dumps(items, indent=2) + "\n", encoding="utf-8")
        staged.replace(self.path)


class ThemePreference:
    """light/dark preference kept as a plain string in local storage."""

    def __init__(self, storage: KeyValueStorage):
        self.storage = storage

    @property
    def current(self) -> str:
        saved = self.storage.get(THEME_KEY)
        return saved if saved in THEMES else "light"

    def set(self, theme: str) -> str:
        if theme not in THEMES:
            raise ValueError(f"theme must be one of {THEMES}")
        self.storage.set(THEME_KEY, theme)
        return theme

    def toggle(self) -> str:
        return self.set("dark" if self.current == "light" else "light")
