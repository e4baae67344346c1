"""
Marker splicer — remove and insert text at marker comments in project files.

Generated files expose named needles (``// jhipster-needle-…``) where
code may be added.  Everything this plugin adds is wrapped in its own
start/end marker pair so it can be found and removed again:

    // jhipster-needle-postgis-field-start - don't remove
    @Column(columnDefinition = "geometry(Point,4326)")
    private Point locationPoint;
    // jhipster-needle-postgis-field-end
    // jhipster-needle-entity-add-field - JHipster will add fields here

The operations below are pure ``str -> str`` functions; callers stage the
results and write them only once every edit has succeeded.

Regeneration is "remove every region, then insert one per field", so a
second run with the same fields reproduces the first run byte for byte.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass

logger = logging.getLogger(__name__)

Edit = Callable[[str], str]


class MarkerNotFoundError(Exception):
    """Raised when an anchor needle is missing from a target file.

    The file layout belongs to the host generator; a missing needle means
    the file was hand-edited or produced by an incompatible version.
    """

    def __init__(self, anchor: str, target: str = "") -> None:
        self.anchor = anchor
        self.target = target
        where = f" in {target}" if target else ""
        super().__init__(f"Marker '{anchor}' not found{where}")


@dataclass(frozen=True)
class MarkerRegion:
    """A block bounded by a start-marker line and the next end-marker line.

    Attributes:
        identifier: Stable name shared by both markers.
        start:      Substring identifying the start line.
        end:        Substring identifying the end line.
    """

    identifier: str
    start: str
    end: str

    @classmethod
    def named(cls, identifier: str) -> MarkerRegion:
        """Region whose markers are ``<identifier>-start`` / ``<identifier>-end``."""
        return cls(identifier, f"{identifier}-start", f"{identifier}-end")


def _indent_of(line: str) -> str:
    return line[: len(line) - len(line.lstrip(" \t"))]


def remove_regions(text: str, region: MarkerRegion) -> str:
    """Delete every block of ``region`` from ``text``.

    A start line without a following end line is left as is.
    """
    lines = text.splitlines(keepends=True)
    out: list[str] = []
    i = 0
    removed = 0
    while i < len(lines):
        if region.start in lines[i]:
            end = next(
                (j for j in range(i + 1, len(lines)) if region.end in lines[j]),
                None,
            )
            if end is not None:
                i = end + 1
                removed += 1
                continue
        out.append(lines[i])
        i += 1

    if removed:
        logger.debug("Removed %d '%s' region(s)", removed, region.identifier)
    return "".join(out)


def remove_lines(text: str, owned: Iterable[str]) -> str:
    """Drop every line whose stripped content equals one of ``owned``."""
    wanted = {line.strip() for line in owned}
    return "".join(
        line for line in text.splitlines(keepends=True)
        if line.strip() not in wanted
    )


def insert_at(text: str, anchor: str, snippet: str, *, after: bool = False) -> str:
    """Insert ``snippet`` next to the line containing ``anchor``.

    Each snippet line is prefixed with the anchor line's indentation.  When
    several lines contain the anchor, the last one is used.  If the exact
    indented snippet already sits at that position, the text is returned
    unchanged.

    Raises:
        MarkerNotFoundError: If no line contains ``anchor``.
    """
    lines = text.splitlines(keepends=True)
    index = next(
        (i for i in range(len(lines) - 1, -1, -1) if anchor in lines[i]),
        None,
    )
    if index is None:
        raise MarkerNotFoundError(anchor)

    anchor_line = lines[index]
    newline = "\r\n" if anchor_line.endswith("\r\n") else "\n"
    indent = _indent_of(anchor_line)
    block = [
        (indent + line if line else line) + newline
        for line in snippet.rstrip("\n").split("\n")
    ]

    if after:
        if not anchor_line.endswith(("\n", "\r")):
            lines[index] = anchor_line + newline
        position = index + 1
        existing = lines[position:position + len(block)]
    else:
        position = index
        existing = lines[max(0, position - len(block)):position]

    if existing == block:
        return text

    lines[position:position] = block
    return "".join(lines)


def collapse_blank_lines(text: str) -> str:
    """Collapse every run of blank-only lines into a single empty line."""
    out: list[str] = []
    previous_blank = False
    for line in text.splitlines(keepends=True):
        blank = line.strip() == ""
        if blank and previous_blank:
            continue
        if blank:
            line = "\r\n" if line.endswith("\r\n") else "\n"
        out.append(line)
        previous_blank = blank
    return "".join(out)


def replace_literal(text: str, old: str, new: str) -> str:
    """Replace every occurrence of ``old`` (no-op when absent)."""
    return text.replace(old, new)


def apply_edits(text: str, edits: Iterable[Edit], *, target: str = "") -> str:
    """Run ``edits`` in order, tagging marker errors with ``target``."""
    for edit in edits:
        try:
            text = edit(text)
        except MarkerNotFoundError as e:
            raise MarkerNotFoundError(e.anchor, target) from e
    return text
