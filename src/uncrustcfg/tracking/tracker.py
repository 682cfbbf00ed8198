#!/usr/bin/env python3
"""
UNCRUSTCFG EDIT TRACKER
-----------------------
Mutates Value entries in place and keeps the `edited` flag and the
`# Edited: YES` sentinel comment in lockstep. Registered observers are
notified synchronously after every change.

Author: UncrustCfg Team
Date: 2026-10-17
"""

import logging
from dataclasses import dataclass
from typing import Callable, List

from uncrustcfg.core.models import EDITED_SENTINEL, Value

logger = logging.getLogger("uncrustcfg.tracker")

VALUE_CHANGED = "value"
EDITED_CHANGED = "edited"


@dataclass
class ChangeEvent:
    entry: Value
    field: str              # VALUE_CHANGED or EDITED_CHANGED


Observer = Callable[[ChangeEvent], None]


def is_edited(comments: List[str]) -> bool:
    return EDITED_SENTINEL in comments


class EditTracker:
    """
    Single entry point for user edits. Observers are plain callables
    registered with `subscribe`; exceptions they raise reach the caller.
    """

    def __init__(self):
        self._observers: List[Observer] = []

    def subscribe(self, callback: Observer) -> Callable[[], None]:
        """Registers an observer and returns a function that removes it."""
        self._observers.append(callback)

        def unsubscribe():
            if callback in self._observers:
                self._observers.remove(callback)

        return unsubscribe

    def _emit(self, entry: Value, field: str):
        for callback in list(self._observers):
            callback(ChangeEvent(entry=entry, field=field))

    def _mark(self, entry: Value, flag: bool) -> bool:
        """Applies the flag and returns True if the entry changed."""
        if flag:
            if entry.edited and EDITED_SENTINEL in entry.comments:
                return False
            if EDITED_SENTINEL not in entry.comments:
                entry.comments.append(EDITED_SENTINEL)
            entry.edited = True
            return True

        if not entry.edited and EDITED_SENTINEL not in entry.comments:
            return False
        entry.comments[:] = [c for c in entry.comments if c != EDITED_SENTINEL]
        entry.edited = False
        return True

    def set_value(self, entry: Value, new_value: str):
        """
        Sets the value, marks the entry as edited on first change and
        emits a value-changed notification.
        """
        logger.debug(f"{entry.name}: {entry.value!r} -> {new_value!r}")
        entry.value = new_value
        self._mark(entry, True)
        self._emit(entry, VALUE_CHANGED)

    def set_edited(self, entry: Value, flag: bool):
        """Sets or clears the edited marker without touching the value."""
        if self._mark(entry, flag):
            logger.debug(f"{entry.name}: edited={flag}")
            self._emit(entry, EDITED_CHANGED)
