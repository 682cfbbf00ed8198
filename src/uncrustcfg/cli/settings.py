#!/usr/bin/env python3
"""
UNCRUSTCFG SETTINGS
-------------------
User preferences that shape the filtered view (sort toggle, language,
example directory). Stored as YAML and written back in round-trip mode
so hand-written comments in the file survive a save.

Author: UncrustCfg Team
Date: 2026-10-17
"""

import logging
from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Optional, Union

from ruamel.yaml import YAML, YAMLError
from ruamel.yaml.comments import CommentedMap

from uncrustcfg.core.errors import DecodeError, SaveError
from uncrustcfg.view.filters import FilterState, Language

logger = logging.getLogger("uncrustcfg.settings")

DEFAULT_SETTINGS_PATH = Path.home() / ".config" / "uncrustcfg" / "settings.yaml"


@dataclass
class Settings:
    sort_enabled: bool = False
    language: Optional[str] = None          # "c", "cpp" or "oc"
    examples_dir: Optional[str] = None
    search_sentinel: bool = False           # Match the edit marker in searches


def to_filter_state(settings: Settings, **overrides) -> FilterState:
    """Builds the view's FilterState from persisted preferences."""
    language = Language.parse(settings.language) if settings.language else None
    values = {"sort_enabled": settings.sort_enabled, "language": language}
    values.update(overrides)
    return FilterState(**values)


class SettingsStore:
    """Loads and saves Settings at a fixed path."""

    def __init__(self, path: Union[str, Path] = DEFAULT_SETTINGS_PATH):
        self.path = Path(path)
        self.yaml = YAML(typ='rt')
        self.yaml.indent(mapping=2, sequence=4, offset=2)

    def _read(self) -> CommentedMap:
        if not self.path.exists():
            return CommentedMap()
        try:
            with open(self.path, 'r', encoding='utf-8') as f:
                data = self.yaml.load(f)
        except (YAMLError, UnicodeDecodeError) as e:
            logger.error(f"Unable to parse settings at {self.path}: {e}")
            raise DecodeError(f"Invalid settings file: {e}", path=str(self.path)) from e
        return data if isinstance(data, CommentedMap) else CommentedMap()

    def load(self) -> Settings:
        data = self._read()
        known = {f.name for f in fields(Settings)}
        settings = Settings(**{k: v for k, v in data.items() if k in known})

        if settings.language is not None:
            try:
                Language.parse(str(settings.language))
            except ValueError as e:
                logger.error(f"Invalid language in {self.path}: {e}")
                raise DecodeError(f"Invalid settings file: {e}", path=str(self.path)) from e
        return settings

    def save(self, settings: Settings):
        data = self._read()
        for key, value in asdict(settings).items():
            data[key] = value

        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.path, 'w', encoding='utf-8') as f:
                self.yaml.dump(data, f)
        except OSError as e:
            logger.error(f"Unable to write settings to {self.path}: {e}")
            raise SaveError(f"Unable to write settings: {e}", path=str(self.path)) from e
