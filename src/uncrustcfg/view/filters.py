#!/usr/bin/env python3
"""
UNCRUSTCFG FILTER ENGINE
------------------------
Derives a display-ordered view of Value entries from the search text,
tag, language and edited-state filters plus an optional name sort.
The underlying document is never mutated or reordered.

Author: UncrustCfg Team
Date: 2026-10-17
"""

import logging
from dataclasses import dataclass, replace
from enum import Enum
from typing import Callable, Iterable, List, Optional, Union

from uncrustcfg.core.models import ConfigDocument, Entry, Value, tag_for
from uncrustcfg.tracking.tracker import ChangeEvent, EditTracker
from uncrustcfg.view.comments import render_comments

logger = logging.getLogger("uncrustcfg.filters")


class Language(Enum):
    """Substring markers identifying language-specific option names."""
    C = "_c_"
    CPP = "_cpp_"
    OC = "_oc_"

    @classmethod
    def parse(cls, text: str) -> "Language":
        try:
            return cls[text.strip().upper()]
        except KeyError:
            raise ValueError(f"Unknown language '{text}' (expected one of: c, cpp, oc)")


class EditedFilter(Enum):
    ONLY_EDITED = "edited"
    ONLY_UNEDITED = "unedited"


@dataclass(frozen=True)
class FilterState:
    search_text: str = ""
    tag: Optional[str] = None
    language: Optional[Union[Language, str]] = None
    edited_filter: Optional[EditedFilter] = None
    sort_enabled: bool = False


def tokenize(search_text: str) -> List[str]:
    return [word.lower() for word in search_text.split(' ') if word.strip()]


def available_tags(entries: Iterable[Entry]) -> List[str]:
    """Distinct tags across all Value entries, sorted."""
    return sorted({tag_for(e.name) for e in entries if isinstance(e, Value)})


class FilterEngine:
    """
    Applies the predicates in a fixed order: search, tag, language,
    edited state, then the optional sort.
    """

    def __init__(self, include_sentinel: bool = False):
        # Whether the edit marker is part of the searchable comment text
        self.include_sentinel = include_sentinel

    def _matches_search(self, entry: Value, words: List[str]) -> bool:
        if not words:
            return True
        name = entry.name.lower()
        comment = render_comments(entry.comments, include_sentinel=self.include_sentinel).lower()
        return all(word in name or word in comment for word in words)

    def _matches_language(self, entry: Value, language: Union[Language, str]) -> bool:
        marker = language.value if isinstance(language, Language) else language
        return marker in entry.name

    def _matches_edited(self, entry: Value, edited_filter: Optional[EditedFilter]) -> bool:
        if edited_filter is EditedFilter.ONLY_EDITED:
            return entry.edited
        if edited_filter is EditedFilter.ONLY_UNEDITED:
            return not entry.edited
        return True

    def apply(self, entries: Iterable[Entry], state: FilterState) -> List[Value]:
        words = tokenize(state.search_text)
        result = []

        for entry in entries:
            if not isinstance(entry, Value):
                continue
            if not self._matches_search(entry, words):
                continue
            if state.tag and not entry.name.startswith(state.tag):
                continue
            if state.language and not self._matches_language(entry, state.language):
                continue
            if not self._matches_edited(entry, state.edited_filter):
                continue
            result.append(entry)

        if state.sort_enabled:
            result.sort(key=lambda v: v.name)

        return result


class ConfigView:
    """
    A read-only projection of a document that re-evaluates itself when the
    filter state changes, the document is replaced, or an entry's edited
    flag flips.
    """

    def __init__(self, document: Optional[ConfigDocument] = None,
                 tracker: Optional[EditTracker] = None,
                 engine: Optional[FilterEngine] = None,
                 state: Optional[FilterState] = None):
        self.document = document if document is not None else ConfigDocument()
        self.engine = engine or FilterEngine()
        self.state = state or FilterState()
        self.entries: List[Value] = []
        self.tags: List[str] = []
        self._observers: List[Callable[[List[Value]], None]] = []
        self._unsubscribe = tracker.subscribe(self._on_change) if tracker else None
        self.refresh()

    def subscribe(self, callback: Callable[[List[Value]], None]):
        self._observers.append(callback)

    def close(self):
        """Detaches the view from its tracker."""
        if self._unsubscribe:
            self._unsubscribe()
            self._unsubscribe = None

    def _on_change(self, event: ChangeEvent):
        # A first set_value flips `edited` along with the value
        self.refresh()

    def refresh(self) -> List[Value]:
        self.entries = self.engine.apply(self.document, self.state)
        self.tags = available_tags(self.document)
        logger.debug(f"View refreshed: {len(self.entries)} of {len(self.document.values())} values")
        for callback in list(self._observers):
            callback(self.entries)
        return self.entries

    def set_state(self, **changes) -> List[Value]:
        self.state = replace(self.state, **changes)
        return self.refresh()

    def replace_document(self, document: ConfigDocument) -> List[Value]:
        self.document = document
        return self.refresh()
