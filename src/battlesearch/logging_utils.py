"""Titled, label-aligned text blocks for multi-field log messages."""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from textwrap import wrap
from typing import Union

WRAP_WIDTH = 100
MAX_LABEL_WIDTH = 18
INDENT = "    "

FieldMapping = Union[Mapping[str, object], Sequence[tuple[str, object]]]


def _items(fields: FieldMapping) -> list[tuple[str, object]]:
    if isinstance(fields, Mapping):
        return list(fields.items())
    return list(fields)


def _text(value: object) -> str:
    if value is None:
        return ""
    if isinstance(value, (list, tuple)):
        return ", ".join(_text(item) for item in value)
    return str(value).strip()


def _wrapped(text: str, width: int) -> list[str]:
    lines: list[str] = []
    for raw_line in text.splitlines() or [""]:
        lines.extend(wrap(raw_line, width=width) or [""])
    return lines


class LogBlockBuilder:
    def __init__(self, title: str, *, pad_top: bool = True, width: int = WRAP_WIDTH) -> None:
        self.title = title
        self.width = width
        self.lines: list[str] = [""] if pad_top else []
        self.lines.extend([title, "-" * len(title)])

    def add_fields(self, fields: FieldMapping | None) -> None:
        items = _items(fields) if fields else []
        if not items:
            return
        label_width = max(min(max(len(str(key)) for key, _ in items), MAX_LABEL_WIDTH), 6)
        value_width = max(self.width - len(INDENT) - label_width - 2, 30)
        for key, value in items:
            first, *rest = _wrapped(_text(value), value_width)
            self.lines.append(f"{INDENT}{str(key):<{label_width}}: {first}")
            self.lines.extend(f"{INDENT}{'':<{label_width}}  {line}" for line in rest)

    def add_section(self, heading: str, entries: Iterable[str], *, empty_label: str = "(none)") -> None:
        if self.lines and self.lines[-1] != "":
            self.lines.append("")
        self.lines.append(f"{heading}:")
        entries = [entry for entry in entries if entry]
        if not entries:
            self.lines.append(f"{INDENT}{empty_label}")
            return
        for entry in entries:
            first, *rest = _wrapped(entry, self.width - len(INDENT) - 2)
            self.lines.append(f"{INDENT}- {first}")
            self.lines.extend(f"{INDENT}  {line}" for line in rest)

    def render(self) -> str:
        return "\n".join(self.lines).rstrip()


def render_fields_block(title: str, fields: FieldMapping, *, pad_top: bool = True) -> str:
    builder = LogBlockBuilder(title, pad_top=pad_top)
    builder.add_fields(fields)
    return builder.render()
