#!/usr/bin/env python3
"""
UNCRUSTCFG EXPORTER - Round-Trip Writer
---------------------------------------
Converts an entry sequence back into configuration text. The output
re-parses into the same entries it was produced from.

Author: UncrustCfg Team
Date: 2026-10-17
"""

import io
from typing import Iterable, Union

from uncrustcfg.core.models import Comment, ConfigDocument, Entry, Value


class ConfigExporter:
    """
    The Reconstructor: writes each entry in document order.
    """

    def __init__(self, newline: str = "\n"):
        self.newline = newline

    def _write_entry(self, stream: io.StringIO, entry: Entry):
        if isinstance(entry, Comment):
            stream.write(entry.text + self.newline)
        elif isinstance(entry, Value):
            for comment in entry.comments:
                stream.write(comment + self.newline)
            # Blank separators are their own Comment("") entries
            stream.write(entry.render_line() + self.newline)
        else:
            raise TypeError(f"Unsupported entry type: {type(entry).__name__}")

    def export(self, document: Union[ConfigDocument, Iterable[Entry]]) -> str:
        """Exports a document or any iterable of entries into a single string."""
        stream = io.StringIO()
        for entry in document:
            self._write_entry(stream, entry)
        return stream.getvalue()


def serialize(document: Union[ConfigDocument, Iterable[Entry]]) -> str:
    return ConfigExporter().export(document)
