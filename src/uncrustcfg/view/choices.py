#!/usr/bin/env python3
"""
UNCRUSTCFG VALUE CHOICES
------------------------
Derives the finite set of values an option accepts from its current
value or from the `a/b/c` list in its hint.

Author: UncrustCfg Team
Date: 2026-10-17
"""

from typing import List

from uncrustcfg.core.models import Value

BOOLEAN_VALUES = ["true", "false"]
IARF_VALUES = ["ignore", "add", "remove", "force", "not_defined"]


def is_boolean(entry: Value) -> bool:
    return entry.value in BOOLEAN_VALUES


def value_choices(entry: Value) -> List[str]:
    """
    Returns the sorted choices for `entry`, or an empty list when the
    option takes free-form input.
    """
    if is_boolean(entry):
        return sorted(BOOLEAN_VALUES)

    if entry.value in IARF_VALUES:
        return sorted(IARF_VALUES)

    if entry.hint and '/' in entry.hint:
        parts = [p.strip() for p in entry.hint.split('/')]
        parts = [p for p in parts if p]
        # The hint only lists choices if the current value is one of them
        if parts and entry.value in parts:
            return sorted(parts)

    return []
