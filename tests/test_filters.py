#!/usr/bin/env python3
"""
UNCRUSTCFG FILTER SUITE
-----------------------
Search, tag, language, edited-state and sort predicates, plus the
self-refreshing ConfigView.

Author: UncrustCfg Team
Date: 2026-10-17
"""

import pytest

from uncrustcfg.codec.lexer import parse, parse_document
from uncrustcfg.core.models import EDITED_SENTINEL, Comment, Value, tag_for
from uncrustcfg.tracking.tracker import EditTracker
from uncrustcfg.view.comments import render_comments
from uncrustcfg.view.filters import (
    ConfigView,
    EditedFilter,
    FilterEngine,
    FilterState,
    Language,
    available_tags,
    tokenize,
)

CONFIG = """\
# Whether to use tabs for alignment
align_with_tabs = false # true/false

# Spaces around arithmetic operators
sp_arith = add # ignore/add/remove/force/not_defined

# Indent braces in C
indent_c_brace = 2 # number
# Objective-C block indent
indent_oc_block = 0 # number
# Namespace handling for C++
nl_cpp_namespace = ignore # ignore/add/remove/force/not_defined
# Edited by hand
# Edited: YES
cmt_width = 80 # unsigned number
noprefix = 1
"""


@pytest.fixture
def entries():
    return parse(CONFIG)


def _names(values):
    return [v.name for v in values]


def test_comments_are_never_part_of_the_view(entries):
    result = FilterEngine().apply(entries, FilterState())
    assert all(isinstance(v, Value) for v in result)
    assert any(isinstance(e, Comment) for e in entries)
    assert _names(result) == [
        "align_with_tabs", "sp_arith", "indent_c_brace", "indent_oc_block",
        "nl_cpp_namespace", "cmt_width", "noprefix",
    ]


def test_search_is_conjunctive():
    """
    SEARCH TEST: every word must hit the name or the comment text.
    """
    entries = [Value(name="foo_bar", value="1", comments=["# enable baz"])]
    engine = FilterEngine()
    assert _names(engine.apply(entries, FilterState(search_text="foo baz"))) == ["foo_bar"]
    assert engine.apply(entries, FilterState(search_text="foo qux")) == []


def test_search_is_case_insensitive_and_ignores_extra_spaces(entries):
    result = FilterEngine().apply(entries, FilterState(search_text="  ALIGN   Tabs "))
    assert _names(result) == ["align_with_tabs"]


def test_search_matches_comment_text(entries):
    result = FilterEngine().apply(entries, FilterState(search_text="arithmetic"))
    assert _names(result) == ["sp_arith"]


def test_tokenize_drops_empty_words():
    assert tokenize("  Foo  bar ") == ["foo", "bar"]
    assert tokenize("") == []


@pytest.mark.parametrize("include_sentinel, expected", [
    (False, []),
    (True, ["cmt_width"]),
])
def test_sentinel_searchability_is_configurable(entries, include_sentinel, expected):
    engine = FilterEngine(include_sentinel=include_sentinel)
    assert _names(engine.apply(entries, FilterState(search_text="yes"))) == expected


def test_tag_filter(entries):
    result = FilterEngine().apply(entries, FilterState(tag="indent_"))
    assert _names(result) == ["indent_c_brace", "indent_oc_block"]


@pytest.mark.parametrize("language, expected", [
    (Language.C, ["indent_c_brace"]),
    (Language.CPP, ["nl_cpp_namespace"]),
    (Language.OC, ["indent_oc_block"]),
    ("_oc_", ["indent_oc_block"]),
])
def test_language_filter(entries, language, expected):
    assert _names(FilterEngine().apply(entries, FilterState(language=language))) == expected


def test_language_parse():
    assert Language.parse("cpp") is Language.CPP
    assert Language.parse(" OC ") is Language.OC
    with pytest.raises(ValueError):
        Language.parse("java")


def test_edited_filter(entries):
    engine = FilterEngine()
    assert _names(engine.apply(entries, FilterState(edited_filter=EditedFilter.ONLY_EDITED))) == ["cmt_width"]
    unedited = engine.apply(entries, FilterState(edited_filter=EditedFilter.ONLY_UNEDITED))
    assert "cmt_width" not in _names(unedited)
    assert len(unedited) == 6


def test_sort_stability(entries):
    """
    ORDER TEST: sort off keeps document order, sort on is by name.
    """
    engine = FilterEngine()
    unsorted = engine.apply(entries, FilterState(sort_enabled=False))
    assert _names(unsorted) == [v.name for v in entries if isinstance(v, Value)]
    assert _names(unsorted) != sorted(_names(unsorted))

    ordered = engine.apply(entries, FilterState(sort_enabled=True))
    assert _names(ordered) == sorted(_names(ordered))


def test_filters_combine(entries):
    state = FilterState(search_text="indent", tag="indent_", language=Language.OC)
    assert _names(FilterEngine().apply(entries, state)) == ["indent_oc_block"]


def test_unmatched_filter_yields_empty_view(entries):
    assert FilterEngine().apply(entries, FilterState(tag="zzz_")) == []


def test_engine_never_reorders_source(entries):
    before = list(entries)
    FilterEngine().apply(entries, FilterState(sort_enabled=True))
    assert entries == before


@pytest.mark.parametrize("name, tag", [
    ("align_with_tabs", "align_"),
    ("noprefix", "noprefix"),
    ("_leading", "_"),
])
def test_tag_derivation(name, tag):
    assert tag_for(name) == tag


def test_available_tags_are_distinct_and_sorted(entries):
    assert available_tags(entries) == ["align_", "cmt_", "indent_", "nl_", "noprefix", "sp_"]


def test_render_comments_folds_wrapped_sentences():
    comments = ["# Add or remove space", "# around arithmetic operators.", "#", "# - first", "# - second"]
    assert render_comments(comments) == (
        "Add or remove space around arithmetic operators.\n\n- first\n- second"
    )


def test_render_comments_sentinel_toggle():
    comments = ["# Doc line", EDITED_SENTINEL]
    assert render_comments(comments) == "Doc line"
    assert render_comments(comments, include_sentinel=True) == "Doc line Edited: YES"
    assert render_comments([]) == ""


def test_view_refreshes_on_state_and_document_changes():
    view = ConfigView(parse_document(CONFIG))
    assert len(view.entries) == 7

    view.set_state(tag="sp_")
    assert _names(view.entries) == ["sp_arith"]

    view.replace_document(parse_document("sp_x = 1\nother = 2\n"))
    assert _names(view.entries) == ["sp_x"]
    assert view.tags == ["other", "sp_"]


def test_view_follows_edited_changes():
    tracker = EditTracker()
    document = parse_document(CONFIG)
    view = ConfigView(document, tracker=tracker, state=FilterState(edited_filter=EditedFilter.ONLY_EDITED))
    refreshed = []
    view.subscribe(refreshed.append)

    tracker.set_value(document.find("sp_arith"), "remove")
    assert _names(view.entries) == ["sp_arith", "cmt_width"]

    tracker.set_edited(document.find("cmt_width"), False)
    assert _names(view.entries) == ["sp_arith"]
    assert len(refreshed) == 2

    view.close()
    tracker.set_edited(document.find("sp_arith"), False)
    assert _names(view.entries) == ["sp_arith"]


def test_view_refreshes_when_first_edit_adds_marker():
    tracker = EditTracker()
    document = parse_document("# Align things\nalign_x = 1\n")
    view = ConfigView(
        document,
        tracker=tracker,
        engine=FilterEngine(include_sentinel=True),
        state=FilterState(search_text="edited"),
    )
    assert view.entries == []

    tracker.set_value(document.find("align_x"), "2")
    assert _names(view.entries) == ["align_x"]
