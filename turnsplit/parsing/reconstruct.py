"""Rebuilding source text from segmented turns."""

from __future__ import annotations

from collections.abc import Collection, Sequence

from turnsplit.domain import Turn


def reconstruct_text(turns: Sequence[Turn], drop: Collection[int] = ()) -> str:
    """Joins turns back into transcript text.

    Each kept turn contributes its label prefix, its trimmed content, and a
    blank line. Turns whose index is in ``drop`` are left out.
    """
    parts = [
        f"{turn.label_prefix}{turn.content.strip()}\n\n"
        for index, turn in enumerate(turns)
        if index not in drop
    ]
    return "".join(parts).strip()
