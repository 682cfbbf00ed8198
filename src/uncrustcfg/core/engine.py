#!/usr/bin/env python3
"""
UNCRUSTCFG ENGINE - The Workspace
---------------------------------
ConfigWorkspace manages the lifecycle of one configuration document:
loading it from disk or bytes, routing edits through the tracker,
keeping the filtered view and examples current, and persisting it back
with atomic writes and backups.

Author: UncrustCfg Team
Date: 2026-10-17
"""

import os
import logging
from pathlib import Path
from typing import List, Optional, Union

from uncrustcfg.codec.exporter import ConfigExporter
from uncrustcfg.codec.lexer import ConfigLexer
from uncrustcfg.core.errors import DecodeError, NotFoundError, SaveError
from uncrustcfg.core.models import ConfigDocument, Value
from uncrustcfg.snippets.store import ExampleLoader
from uncrustcfg.tracking.tracker import EditTracker
from uncrustcfg.view.filters import ConfigView, FilterEngine, FilterState

logger = logging.getLogger("uncrustcfg.engine")


class ConfigWorkspace:
    """
    Principal orchestrator. Owns the active document and coordinates the
    lexer, exporter, tracker, example loader and view around it.
    """

    def __init__(self, example_store=None, state: Optional[FilterState] = None,
                 include_sentinel: bool = False, drop_trailing_comments: bool = False):
        self.lexer = ConfigLexer(drop_trailing_comments=drop_trailing_comments)
        self.exporter = ConfigExporter()
        self.tracker = EditTracker()
        self.loader = ExampleLoader(example_store) if example_store is not None else None
        self.document = ConfigDocument()
        self.view = ConfigView(
            self.document,
            tracker=self.tracker,
            engine=FilterEngine(include_sentinel=include_sentinel),
            state=state,
        )
        self.source_path: Optional[Path] = None
        self.original_text = ""

    # --- Loading ---

    def load_text(self, text: str) -> ConfigDocument:
        """Replaces the active document with the parse of `text`."""
        self.document = ConfigDocument(self.lexer.parse(text))
        self.original_text = self.exporter.export(self.document)
        if self.loader is not None:
            self.loader.load(self.document)
        self.view.replace_document(self.document)
        return self.document

    def load_bytes(self, data: bytes, source: str = "<bytes>") -> ConfigDocument:
        try:
            text = data.decode('utf-8-sig')
        except UnicodeDecodeError as e:
            logger.error(f"Unable to decode {source}: {e}")
            raise DecodeError(f"{source} is not valid UTF-8 text", path=source) from e
        return self.load_text(text)

    def load(self, path: Union[str, Path]) -> ConfigDocument:
        full_path = Path(path).resolve()
        try:
            data = full_path.read_bytes()
        except OSError as e:
            logger.error(f"Unable to read {full_path}: {e}")
            raise NotFoundError(f"Cannot read configuration file at {full_path}", path=str(full_path)) from e

        document = self.load_bytes(data, source=str(full_path))
        self.source_path = full_path
        logger.info(f"Loaded {len(document.values())} values from {full_path}")
        return document

    # --- Editing ---

    def _require(self, name: str) -> Value:
        entry = self.document.find(name)
        if entry is None:
            raise KeyError(name)
        return entry

    def set_value(self, name: str, value: str) -> Value:
        entry = self._require(name)
        self.tracker.set_value(entry, value)
        return entry

    def set_edited(self, name: str, flag: bool) -> Value:
        entry = self._require(name)
        self.tracker.set_edited(entry, flag)
        return entry

    def reload_examples(self) -> int:
        if self.loader is None:
            return 0
        found = self.loader.reload(self.document)
        self.view.refresh()
        return found

    def filtered(self) -> List[Value]:
        return self.view.entries

    # --- Persistence ---

    def export(self) -> str:
        return self.exporter.export(self.document)

    def is_modified(self) -> bool:
        return self.export() != self.original_text

    def save(self, path: Optional[Union[str, Path]] = None, backup: bool = True) -> Optional[Path]:
        """
        Writes the serialized document atomically. Returns the backup path
        when an existing file was preserved first.
        """
        target = Path(path).resolve() if path is not None else self.source_path
        if target is None:
            raise SaveError("No target path for an unsaved document")

        content = self.export()
        backup_path = None

        if backup and target.exists():
            backup_path = self._create_unique_backup(target)
            try:
                backup_path.write_bytes(target.read_bytes())
            except OSError as e:
                logger.error(f"Backup failed for {target}: {e}")
                raise SaveError(f"Backup failed: {e}", path=str(target)) from e

        self._atomic_write(target, content)
        self.original_text = content
        self.source_path = target
        logger.info(f"Saved {target}")
        return backup_path

    def _atomic_write(self, target_path: Path, content: str):
        if not os.access(target_path.parent, os.W_OK):
            raise SaveError(f"No write access to {target_path.parent}", path=str(target_path))
        temp_file = target_path.with_name(target_path.name + '.uncrustcfg.tmp')
        try:
            temp_file.write_text(content, encoding='utf-8')
            os.replace(temp_file, target_path)
        except OSError as e:
            if temp_file.exists():
                temp_file.unlink()
            logger.error(f"Atomic write failed for {target_path}: {e}")
            raise SaveError(f"Atomic write failed: {e}", path=str(target_path)) from e

    def _create_unique_backup(self, target_path: Path) -> Path:
        backup_path = target_path.with_name(target_path.name + '.bak')
        counter = 1
        while backup_path.exists():
            backup_path = target_path.with_name(f"{target_path.name}-{counter}.bak")
            counter += 1
        return backup_path
