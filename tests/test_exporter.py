#!/usr/bin/env python3
"""
UNCRUSTCFG EXPORTER SUITE
-------------------------
Round-trip stability: text -> entries -> text -> entries must not
change the entry sequence.

Author: UncrustCfg Team
Date: 2026-10-17
"""

import pytest

from uncrustcfg.codec.exporter import ConfigExporter, serialize
from uncrustcfg.codec.lexer import parse, parse_document
from uncrustcfg.core.models import EDITED_SENTINEL, Comment, ConfigDocument, Value

SAMPLES = [
    "",
    "# Align variables\nalign_var = true # yes/no\n\nunrelated_line_without_equals\n",
    "newlines = auto # lf/crlf/cr/auto\n\n# Indent\n# across lines\nindent_columns = 8 # unsigned number\n\n",
    "\n\n\n",
    "# header only\n# still header\n",
    f"# Doc\n{EDITED_SENTINEL}\nsp_arith = add # ignore/add/remove/force/not_defined\n",
    "a = 1 # x # y\nb=2\n  garbage  \n# c\n\nd =\n",
    "a = 1\r\n\r\nb = 2\r\n",
]


@pytest.mark.parametrize("text", SAMPLES)
def test_round_trip_is_stable(text):
    """
    STABILITY TEST: parse(serialize(parse(text))) == parse(text)
    """
    entries = parse(text)
    assert parse(serialize(entries)) == entries


def test_comment_and_value_rendering():
    entries = [
        Comment("# standalone"),
        Comment(""),
        Value(name="a", value="1", comments=["# about a"]),
        Value(name="b", value="x", hint="x/y"),
    ]
    assert serialize(entries) == "# standalone\n\n# about a\na = 1\nb = x # x/y\n"


def test_normalizes_spacing_around_equals():
    assert serialize(parse("a=1#h\n")) == "a = 1 # h\n"


def test_accepts_document_and_plain_iterables():
    document = parse_document("a = 1\n")
    assert serialize(document) == serialize(iter(document.entries)) == "a = 1\n"
    assert serialize(ConfigDocument()) == ""


def test_custom_line_terminator():
    assert ConfigExporter(newline="\r\n").export(parse("# c\na = 1")) == "# c\r\na = 1\r\n"


def test_rejects_unknown_entry_types():
    with pytest.raises(TypeError):
        serialize(["not an entry"])


def test_edited_sentinel_written_back_verbatim():
    text = serialize([Value(name="a", value="2", comments=[EDITED_SENTINEL], edited=True)])
    assert text == f"{EDITED_SENTINEL}\na = 2\n"
