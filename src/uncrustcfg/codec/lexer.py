#!/usr/bin/env python3
"""
UNCRUSTCFG LEXER - Entry Sharder
--------------------------------
Decomposes raw configuration text into Comment and Value entries.
Parsing is total: every line lands in exactly one entry, either on its
own or as part of the comment block of the assignment that follows it.

Author: UncrustCfg Team
Date: 2026-10-17
"""

import logging
from typing import List, Optional, Tuple

from uncrustcfg.core.models import EDITED_SENTINEL, Comment, ConfigDocument, Entry, Value

logger = logging.getLogger("uncrustcfg.lexer")


class ConfigLexer:
    """
    Single-pass, line-oriented reader. Comment lines are buffered until the
    next entry decides whether they belong to an assignment or stand alone.
    """

    def __init__(self, drop_trailing_comments: bool = False):
        # When True, comments left pending at end of input are discarded
        self.drop_trailing_comments = drop_trailing_comments
        self.pending: List[str] = []

    def _clean_artifacts(self, text: str) -> str:
        """Removes a leading UTF-8 BOM marker."""
        return text.lstrip('\ufeff')

    def _split_hint(self, right: str) -> Tuple[str, Optional[str]]:
        """
        Separates the value from its trailing hint.
        Example: "1 # a # b" -> ("1", "b")
        """
        last = right.rfind('#')
        if last == -1:
            return right.strip(), None
        # Text between the first and last "#" is not kept
        first = right.find('#')
        return right[:first].strip(), right[last + 1:].strip()

    def _extract_assignment(self, line: str) -> Optional[Value]:
        """Splits `name = value [# hint]` on the first '='."""
        name, sep, right = line.partition('=')
        name = name.strip()
        if not sep or not name:
            return None

        value, hint = self._split_hint(right.strip())
        return Value(
            name=name,
            value=value,
            hint=hint,
            comments=self.pending,
            edited=EDITED_SENTINEL in self.pending,
        )

    def _flush(self, entries: List[Entry]):
        entries.extend(Comment(text) for text in self.pending)
        self.pending = []

    def parse(self, text: str) -> List[Entry]:
        """
        Converts configuration text into an ordered list of entries.
        This is the primary interface for the workspace engine.
        """
        self.pending = []
        entries: List[Entry] = []

        for raw_line in self._clean_artifacts(text).splitlines():
            line = raw_line.strip()

            # 1. Blank line: stands alone and releases buffered comments
            if not line:
                self._flush(entries)
                entries.append(Comment(""))
                continue

            # 2. Comment line: held until the next entry claims it
            if line.startswith('#'):
                self.pending.append(line)
                continue

            # 3. Assignment or unparsed line
            value = self._extract_assignment(line)
            if value is None:
                self._flush(entries)
                entries.append(Comment(line))
                continue

            entries.append(value)
            self.pending = []

        if self.pending:
            if self.drop_trailing_comments:
                logger.debug(f"Dropping {len(self.pending)} trailing comment line(s)")
                self.pending = []
            else:
                self._flush(entries)

        logger.debug(f"Parsed {len(entries)} entries")
        return entries


def parse(text: str, drop_trailing_comments: bool = False) -> List[Entry]:
    """Parses text with a fresh lexer."""
    return ConfigLexer(drop_trailing_comments=drop_trailing_comments).parse(text)


def parse_document(text: str, drop_trailing_comments: bool = False) -> ConfigDocument:
    return ConfigDocument(parse(text, drop_trailing_comments=drop_trailing_comments))
