from __future__ import annotations

from battlesearch.logging_utils import LogBlockBuilder, render_fields_block


def test_render_fields_block_aligns_labels() -> None:
    block = render_fields_block("Log Parse Failed", {"Path": "/logs/a.log.json", "Reason": "No p1 value"}, pad_top=False)
    assert block.splitlines() == [
        "Log Parse Failed",
        "----------------",
        "    Path  : /logs/a.log.json",
        "    Reason: No p1 value",
    ]


def test_pad_top_adds_leading_blank_line() -> None:
    assert render_fields_block("Title", {"A": 1}).startswith("\nTitle\n-----")


def test_values_are_stringified() -> None:
    block = render_fields_block("T", [("Roots", ["a", "b"]), ("Missing", None), ("Flag", True)], pad_top=False)
    assert "Roots  : a, b" in block
    assert "Flag   : True" in block
    assert block.splitlines()[3].rstrip() == "    Missing:"


def test_long_values_wrap_under_value_column() -> None:
    builder = LogBlockBuilder("T", pad_top=False, width=60)
    builder.add_fields({"Reason": "word " * 30})
    lines = builder.render().splitlines()[2:]
    assert len(lines) > 1
    assert all(len(line) <= 60 for line in lines)
    assert lines[1].startswith(" " * 12)
    assert not lines[1].startswith(" " * 13)


def test_add_section_lists_entries_or_placeholder() -> None:
    builder = LogBlockBuilder("Summary", pad_top=False)
    builder.add_fields({"Matches": 2})
    builder.add_section("Errors", ["first", "second"])
    builder.add_section("Warnings", [])
    assert builder.render().splitlines()[3:] == [
        "",
        "Errors:",
        "    - first",
        "    - second",
        "",
        "Warnings:",
        "    (none)",
    ]
