#!/usr/bin/env python3
"""
UNCRUSTCFG CORE MODELS
----------------------
Defines the fundamental data structures used across the uncrustcfg engine.
A parsed configuration is an ordered list of entries, each of which is
either a raw Comment line or a named Value assignment.

Author: UncrustCfg Team
Date: 2026-10-17
"""

from dataclasses import dataclass, field
from typing import Iterator, List, Optional, Union

# Bookkeeping line appended to a Value's comments once the user edits it
EDITED_SENTINEL = "# Edited: YES"


def tag_for(name: str) -> str:
    """
    Derives the grouping tag of an option name.
    Example: "align_with_tabs" -> "align_", "noprefix" -> "noprefix"
    """
    idx = name.find('_')
    return name if idx == -1 else name[:idx + 1]


@dataclass
class Comment:
    """
    A raw line kept verbatim: a '#' comment, a blank line, or any line
    that could not be read as an assignment.
    """
    text: str               # The trimmed line, without its newline


@dataclass
class Value:
    """
    A single `name = value [# hint]` assignment together with the comment
    block that preceded it in the source.
    """
    name: str                                           # Left side of the first '='
    value: str                                          # Right side up to the hint delimiter
    hint: Optional[str] = None                          # Text after the last '#', if any
    comments: List[str] = field(default_factory=list)   # Preceding '#' lines, in order
    edited: bool = False                                # Mirrors EDITED_SENTINEL in comments
    example: Optional[str] = None                       # Filled by the example loader only

    @property
    def tag(self) -> str:
        return tag_for(self.name)

    def render_line(self) -> str:
        """Returns the assignment line as it is written back to disk."""
        if self.hint is None:
            return f"{self.name} = {self.value}"
        return f"{self.name} = {self.value} # {self.hint}"


Entry = Union[Comment, Value]


@dataclass
class ConfigDocument:
    """
    An ordered sequence of entries. Order is the only relationship between
    entries; the document owns them exclusively.
    """
    entries: List[Entry] = field(default_factory=list)

    def __iter__(self) -> Iterator[Entry]:
        return iter(self.entries)

    def __len__(self) -> int:
        return len(self.entries)

    def values(self) -> List[Value]:
        """Value entries in document order."""
        return [e for e in self.entries if isinstance(e, Value)]

    def find(self, name: str) -> Optional[Value]:
        for entry in self.entries:
            if isinstance(entry, Value) and entry.name == name:
                return entry
        return None

    def tags(self) -> List[str]:
        """Distinct tags across all Value entries, sorted."""
        return sorted({v.tag for v in self.values()})
