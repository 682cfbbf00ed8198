#!/usr/bin/env python3
"""
UNCRUSTCFG EXAMPLE STORE
------------------------
Looks up a sample code snippet for an option name. A missing or blank
resource is not an error: it resolves to None.

Author: UncrustCfg Team
Date: 2026-10-17
"""

import logging
from pathlib import Path
from typing import Callable, Dict, Iterable, List, Optional, Union

from uncrustcfg.core.models import Entry, Value

logger = logging.getLogger("uncrustcfg.snippets")


def _clean(text: Optional[str]) -> Optional[str]:
    if text is None:
        return None
    text = text.strip()
    return text or None


class ExampleStore:
    """
    Directory-backed store: the example for `name` lives in
    `<root>/<name><suffix>` as plain UTF-8 text.
    """

    def __init__(self, root: Union[str, Path], suffix: str = ".txt"):
        self.root = Path(root)
        self.suffix = suffix

    def lookup(self, name: str) -> Optional[str]:
        # Names are option identifiers, never paths
        if not name or '/' in name or '\\' in name or name in ('.', '..'):
            return None

        candidate = self.root / f"{name}{self.suffix}"
        try:
            if not candidate.is_file():
                return None
            return _clean(candidate.read_text(encoding='utf-8'))
        except (OSError, UnicodeDecodeError) as e:
            logger.warning(f"Unable to read example {candidate}: {e}")
            return None


class MappingExampleStore:
    """In-memory store with the same lookup contract."""

    def __init__(self, mapping: Dict[str, str]):
        self.mapping = dict(mapping)

    def lookup(self, name: str) -> Optional[str]:
        return _clean(self.mapping.get(name))


class ExampleLoader:
    """
    Populates `Value.example` from a store and notifies observers for
    every entry it touched.
    """

    def __init__(self, store):
        self.store = store
        self._observers: List[Callable[[Value], None]] = []

    def subscribe(self, callback: Callable[[Value], None]) -> Callable[[], None]:
        self._observers.append(callback)

        def unsubscribe():
            if callback in self._observers:
                self._observers.remove(callback)

        return unsubscribe

    def load(self, entries: Iterable[Entry]) -> int:
        """
        Runs the lookup for every Value entry and overwrites its example,
        including with None. Returns the number of examples found.
        """
        found = 0
        for entry in entries:
            if not isinstance(entry, Value):
                continue
            entry.example = self.store.lookup(entry.name)
            if entry.example is not None:
                found += 1
            for callback in list(self._observers):
                callback(entry)

        logger.info(f"Loaded {found} example(s)")
        return found

    def reload(self, entries: Iterable[Entry]) -> int:
        """Explicit reload request; same semantics as `load`."""
        return self.load(entries)
