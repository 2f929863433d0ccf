"""Strip ``<!-- HIDE -->`` ... ``<!-- /HIDE -->`` regions from project text.

A HIDE marker opens a region and an UNHIDE marker closes the most recent
open one.  Regions stack: two HIDE markers need two UNHIDE markers.  An
UNHIDE with nothing open does nothing, and a HIDE that is never closed
hides the rest of the text.  Marker lines never reach the output.
"""

from __future__ import annotations

from collections.abc import Iterable

HIDE_MARKER = "<!-- HIDE -->"
UNHIDE_MARKER = "<!-- /HIDE -->"


def remove_hidden_content(lines: Iterable[str]) -> list[str]:
    """Return ``lines`` without hidden regions or marker lines."""
    kept: list[str] = []
    depth = 0
    for line in lines:
        marker = line.strip()
        if marker == HIDE_MARKER:
            depth += 1
        elif marker == UNHIDE_MARKER:
            depth = max(depth - 1, 0)
        elif depth == 0:
            kept.append(line)
    return kept
