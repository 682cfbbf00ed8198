#!/usr/bin/env python3
"""
UNCRUSTCFG ERRORS
-----------------
Failures surfaced when reading or writing configuration sources.
Parsing, serialization and filtering never raise; only I/O does.

Author: UncrustCfg Team
Date: 2026-10-17
"""

from typing import Optional


class ConfigError(Exception):
    """Base class for every error raised by the workspace engine."""

    def __init__(self, message: str, path: Optional[str] = None):
        super().__init__(message)
        self.path = path


class NotFoundError(ConfigError):
    """The source is absent or cannot be read."""


class DecodeError(ConfigError):
    """The source bytes are not valid UTF-8 text."""


class SaveError(ConfigError):
    """The serialized document could not be written to disk."""
