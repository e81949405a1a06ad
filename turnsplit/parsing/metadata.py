"""Best-effort conversation metadata inferred from a segmentation."""

from __future__ import annotations

import re
from collections.abc import Sequence

from turnsplit.domain import Turn

DEFAULT_SOURCE = "AI Assistant"
DEFAULT_TITLE = "Conversation Log"
MAX_TITLE_LENGTH = 60
_GENERIC_COUNTERPART_NAMES = frozenset({"ai", "assistant"})
_HEADING_MARKER_RE = re.compile(r"^#+\s*")


def detect_source(turns: Sequence[Turn]) -> str:
    """Names the automated party, preferring a specific name over "AI"."""
    counterparts = [turn for turn in turns if turn.kind == "counterpart"]
    if not counterparts:
        return DEFAULT_SOURCE
    for turn in counterparts:
        if turn.display_name.lower() not in _GENERIC_COUNTERPART_NAMES:
            return turn.display_name
    return counterparts[0].display_name


def detect_title(text: str, turns: Sequence[Turn]) -> str:
    """Picks a title: a leading markdown heading, else the first user line."""
    first_line = next(
        (line.strip() for line in text.strip().split("\n") if line.strip()), ""
    )
    if first_line.startswith("#"):
        title = _HEADING_MARKER_RE.sub("", first_line).strip()
        return title or DEFAULT_TITLE

    for turn in turns:
        if turn.kind == "primary" and turn.content.strip():
            title = turn.content.strip().split("\n")[0].strip()
            if len(title) > MAX_TITLE_LENGTH:
                title = title[: MAX_TITLE_LENGTH - 3] + "..."
            if title.strip() not in ("", "..."):
                return title
            break
    return DEFAULT_TITLE
