from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any

import yaml

logger = logging.getLogger(__name__)

_LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


class SettingsStore:
    """YAML-backed settings store.

    Responsibilities:
      - Load/save settings.yaml atomically
      - Provide typed helpers for the log level, the adapter keymap and
        extra jamo combinations

    Notes:
      - Reads never raise; a missing or malformed file behaves like {}.
    """

    def __init__(self, settings_path: str | None = None) -> None:
        if settings_path is None:
            # <project_root>/settings.yaml
            project_root = Path(__file__).resolve().parents[2]
            self._path = project_root / "settings.yaml"
        else:
            self._path = Path(settings_path)

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> dict[str, Any]:
        try:
            p = self._path
            if not p.exists():
                return {}
            with p.open("r", encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
                return data if isinstance(data, dict) else {}
        except (OSError, yaml.YAMLError) as e:
            logger.warning("Failed to read settings from %s: %s", self._path, e)
            return {}

    def save(self, data: dict[str, Any]) -> None:
        try:
            p = self._path
            p.parent.mkdir(parents=True, exist_ok=True)
            tmp = p.with_suffix(p.suffix + ".tmp")
            with tmp.open("w", encoding="utf-8") as f:
                yaml.safe_dump(data or {}, f, allow_unicode=True, sort_keys=True)
            os.replace(str(tmp), str(p))
        except (OSError, yaml.YAMLError) as e:
            # Best-effort persistence; callers should not crash on save failures.
            logger.warning("Failed to persist settings to %s: %s", self._path, e)

    def get_log_level(self) -> str:
        v = self.load().get("log_level", "INFO")
        level = str(v).strip().upper()
        if level not in _LOG_LEVELS:
            logger.warning("Unknown log_level %r; using INFO", v)
            return "INFO"
        return level

    def set_log_level(self, level: str) -> None:
        level = str(level).strip().upper()
        if level not in _LOG_LEVELS:
            raise ValueError("Unknown log level: %r" % (level,))
        s = self.load()
        s["log_level"] = level
        self.save(s)

    def get_keymap(self) -> dict[str, str]:
        """Return typed-character -> emitted-character remappings."""
        raw = self.load().get("keymap") or {}
        if not isinstance(raw, dict):
            logger.warning("Ignoring keymap: expected a mapping, got %s", type(raw).__name__)
            return {}
        keymap: dict[str, str] = {}
        for k, v in raw.items():
            if isinstance(k, str) and isinstance(v, str) and len(k) == 1 and len(v) == 1:
                keymap[k] = v
            else:
                logger.warning("Ignoring keymap entry %r -> %r", k, v)
        return keymap

    def set_keymap(self, keymap: dict[str, str]) -> None:
        s = self.load()
        s["keymap"] = dict(keymap)
        self.save(s)

    def get_extra_combinations(self) -> list[Any]:
        """Return raw combination entries; validation happens in the table."""
        raw = self.load().get("extra_combinations") or []
        if not isinstance(raw, list):
            logger.warning("Ignoring extra_combinations: expected a list")
            return []
        return list(raw)
