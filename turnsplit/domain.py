"""Domain data structures for turns and speaker classifications."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal, TypeAlias

TurnKind: TypeAlias = Literal["primary", "counterpart", "unknown"]
Speaker: TypeAlias = Literal["counterpart", "primary", "uncertain"]
FeatureValue: TypeAlias = int | str

PRIMARY_DISPLAY_NAME = "User"
COUNTERPART_DISPLAY_NAME = "Assistant"
UNKNOWN_DISPLAY_NAME = "Unknown"


@dataclass(frozen=True)
class Turn:
    """One contiguous span of text attributed to a single speaker."""

    kind: TurnKind
    display_name: str
    content: str
    label_prefix: str = ""


@dataclass
class ClassificationResult:
    """Speaker decision for one turn, with the evidence behind it.

    ``scores`` holds ``(counterpart_score, primary_score)``. ``features`` maps
    each fired feature to the points it contributed; the context nudge is
    stored as a categorical tag. ``corrected_by`` names the sequence rule that
    overrode the original decision, if any.
    """

    speaker: Speaker
    confidence: float
    scores: tuple[int, int]
    features: dict[str, FeatureValue] = field(default_factory=dict)
    corrected_by: str | None = None

    @property
    def counterpart_score(self) -> int:
        return self.scores[0]

    @property
    def primary_score(self) -> int:
        return self.scores[1]


def default_display_name(kind: TurnKind) -> str:
    """Returns the generic display name for a turn kind."""
    if kind == "primary":
        return PRIMARY_DISPLAY_NAME
    if kind == "counterpart":
        return COUNTERPART_DISPLAY_NAME
    return UNKNOWN_DISPLAY_NAME


def opposite_kind(kind: TurnKind) -> TurnKind:
    """Returns the other party of a two-party exchange."""
    if kind == "primary":
        return "counterpart"
    if kind == "counterpart":
        return "primary"
    return "unknown"


def kind_for_speaker(speaker: Speaker) -> TurnKind:
    """Maps a classifier decision onto a turn kind."""
    if speaker == "uncertain":
        return "unknown"
    return speaker
