"""Content-blind splitting on blank lines with strict speaker alternation."""

from __future__ import annotations

import re

from turnsplit.domain import Turn, TurnKind, default_display_name

_BLANK_LINE_RE = re.compile(r"\n\s*\n+")


def split_blocks(text: str) -> list[str]:
    """Splits text on runs of blank lines into trimmed, non-empty blocks."""
    return [
        block.strip()
        for block in _BLANK_LINE_RE.split(text.strip())
        if block.strip()
    ]


def alternate_turns(blocks: list[str]) -> list[Turn]:
    """Labels blocks primary, counterpart, primary, ... in order."""
    turns: list[Turn] = []
    for index, block in enumerate(blocks):
        kind: TurnKind = "primary" if index % 2 == 0 else "counterpart"
        turns.append(Turn(kind=kind, display_name=default_display_name(kind), content=block))
    return turns


def split_alternating(text: str) -> list[Turn]:
    """Alternates over blank-line blocks, or returns nothing for a single block."""
    blocks = split_blocks(text)
    if len(blocks) < 2:
        return []
    return alternate_turns(blocks)


def split_alternating_ungated(text: str) -> list[Turn]:
    """Alternates over whatever blocks exist, including just one."""
    return alternate_turns(split_blocks(text))
