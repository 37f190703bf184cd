"""
Nested-lines layout used by the printer.

A ``Lines`` value is either a string or a list of ``Lines``; every level of list
nesting below the top adds one indent level. ``BLANK`` marks a separator line.
"""

from __future__ import annotations

from typing import Iterator, List, Union

INDENT = "    "


class _Blank:
    def __repr__(self) -> str:
        return "BLANK"


BLANK = _Blank()

Lines = Union[str, _Blank, List["Lines"]]


def format_lines(*lines: Lines, indent: str = INDENT) -> str:
    """
    Render nested lines to text terminated by exactly one newline.

    Consecutive blank lines collapse into one, and blank lines at the start or
    end of the output are dropped.
    """
    rendered: List[str] = []
    for line in _indent_each(0, list(lines), indent):
        if line == "" and (not rendered or rendered[-1] == ""):
            continue
        rendered.append(line)
    while rendered and rendered[-1] == "":
        rendered.pop()
    return "\n".join(rendered) + "\n"


def _indent_each(level: int, lines: List[Lines], indent: str) -> Iterator[str]:
    for line in lines:
        if isinstance(line, _Blank):
            yield ""
        elif isinstance(line, list):
            yield from _indent_each(level + 1, line, indent)
        elif line == "":
            yield ""
        else:
            yield indent * level + line


def space_between(*groups: List[Lines]) -> List[Lines]:
    """Join non-empty groups with a single blank separator between them."""
    result: List[Lines] = []
    for group in groups:
        if not group:
            continue
        if result:
            result.append(BLANK)
        result.extend(group)
    return result
