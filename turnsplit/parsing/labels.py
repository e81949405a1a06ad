"""Splitting transcripts on explicit speaker-label lines."""

from __future__ import annotations

import logging
import re
from collections.abc import Sequence
from dataclasses import replace

from turnsplit.config import ParserSettings, get_settings
from turnsplit.domain import (
    UNKNOWN_DISPLAY_NAME,
    Turn,
    TurnKind,
    default_display_name,
    opposite_kind,
)
from turnsplit.utils.logger import get_logger

logger: logging.Logger = get_logger(__name__)


def _alternation(keywords: Sequence[str]) -> str:
    return "|".join(re.escape(keyword) for keyword in keywords)


def capitalize_name(name: str) -> str:
    """Uppercases the first character and leaves the rest untouched."""
    return name[:1].upper() + name[1:]


def infer_leading_kind(turns: list[Turn]) -> list[Turn]:
    """Resolves an ``unknown`` first turn as the opposite of the second turn."""
    if len(turns) < 2 or turns[0].kind != "unknown":
        return turns
    inferred = opposite_kind(turns[1].kind)
    if inferred == "unknown":
        return turns
    first = replace(turns[0], kind=inferred, display_name=default_display_name(inferred))
    return [first, *turns[1:]]


class _TurnBuffer:
    """Accumulates lines for the turn currently being read."""

    def __init__(self, kind: TurnKind, display_name: str, label_prefix: str = "") -> None:
        self.kind = kind
        self.display_name = display_name
        self.label_prefix = label_prefix
        self.lines: list[str] = []

    def content(self) -> str:
        return "\n".join(self.lines).strip()

    def to_turn(self) -> Turn:
        return Turn(
            kind=self.kind,
            display_name=self.display_name,
            content=self.content(),
            label_prefix=self.label_prefix,
        )


class LabelParser:
    """Splits text into turns wherever a line starts with a speaker label.

    Two label shapes are recognised, in order:

    * a generic ``Name: `` prefix whose name is at most ``max_label_length``
      characters and contains no colon;
    * a known keyword, optionally wrapped in ``**`` or preceded by ``## ``,
      optionally followed by ``**``, ``:`` or `` said``. Without a marker or
      terminator the keyword must stand alone on its line.

    A label with nothing after it on its line takes the rest of the line and
    the line break into ``label_prefix``.
    """

    def __init__(self, settings: ParserSettings | None = None) -> None:
        settings = settings or get_settings().parser
        self.user_keywords = tuple(keyword.lower() for keyword in settings.user_keywords)
        self.ai_keywords = tuple(keyword.lower() for keyword in settings.ai_keywords)
        # The bounded quantifier keeps matching linear on long colon-free lines.
        self._generic_label_re = re.compile(
            rf"([^:\n]{{1,{settings.max_label_length}}}):\s+"
        )
        self._keyword_label_re = re.compile(
            rf"(\*\*|##\s)?\s*({_alternation(self.user_keywords + self.ai_keywords)})\b"
            r"(\*\*:?|:|\s+said:?)?",
            re.IGNORECASE,
        )
        self._user_keyword_re = re.compile(
            rf"\b({_alternation(self.user_keywords)})\b", re.IGNORECASE
        )

    def _match_label(self, line: str) -> tuple[str, TurnKind, str] | None:
        """Returns ``(speaker name, kind, matched prefix)`` for a label line."""
        match = self._generic_label_re.match(line)
        if match:
            name = match.group(1).strip()
            if name:
                is_user = self._user_keyword_re.search(name) is not None
                return name, "primary" if is_user else "counterpart", match.group(0)

        match = self._keyword_label_re.match(line)
        # A bare keyword opening a sentence ("You can...") is prose, not a label.
        if match and (
            match.group(1) or match.group(3) or not line[match.end():].strip()
        ):
            name = match.group(2)
            is_user = name.lower() in self.user_keywords
            return name, "primary" if is_user else "counterpart", match.group(0)
        return None

    def parse(self, text: str) -> list[Turn]:
        """Splits ``text`` into labelled turns in reading order."""
        turns: list[Turn] = []
        current = _TurnBuffer("unknown", UNKNOWN_DISPLAY_NAME)

        for raw_line in text.split("\n"):
            line = raw_line.rstrip("\r")
            label = self._match_label(line)
            if label is None:
                current.lines.append(line)
                continue

            if current.content():
                turns.append(current.to_turn())
            name, kind, prefix = label
            remainder = line[len(prefix):].strip()
            if not remainder:
                # Content starts on the next line; keep the break in the prefix
                # so prefix + content rebuilds the original layout.
                prefix = line + "\n"
            current = _TurnBuffer(kind, capitalize_name(name), prefix)
            current.lines.append(remainder)

        if current.content():
            turns.append(current.to_turn())

        logger.debug("Label parser produced %d turns.", len(turns))
        return infer_leading_kind(turns)
