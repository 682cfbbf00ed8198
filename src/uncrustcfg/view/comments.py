#!/usr/bin/env python3
"""
UNCRUSTCFG COMMENT RENDERER
---------------------------
Turns the raw '#' block above an option into a readable paragraph.
The same text is what the search filter matches against.

Author: UncrustCfg Team
Date: 2026-10-17
"""

from typing import Iterable

from uncrustcfg.core.models import EDITED_SENTINEL


def _strip_marker(line: str) -> str:
    line = line.strip()
    if line.startswith('#'):
        line = line[1:]
    return line.strip()


def render_comments(comments: Iterable[str], include_sentinel: bool = False) -> str:
    """
    Folds comment lines left to right. Two lines are joined with a space
    when the text so far ends with a letter and the next line starts with
    one (a wrapped sentence); otherwise they are joined with a newline.
    """
    result = ""
    for raw in comments:
        if not include_sentinel and raw.strip() == EDITED_SENTINEL:
            continue

        line = _strip_marker(raw)
        if not result:
            result = line
        elif result[-1].isalpha() and line[:1].isalpha():
            result = f"{result} {line}"
        else:
            result = f"{result}\n{line}"

    return result
