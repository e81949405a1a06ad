"""Per-feature score breakdown for explaining a classification."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, TypeAlias

from turnsplit.classifier.features import (
    CONTEXT_BONUS,
    CONTEXT_BONUS_POINTS,
    describe_feature,
    feature_target,
)
from turnsplit.classifier.turn_classifier import FOLLOWS_COUNTERPART
from turnsplit.domain import ClassificationResult

HeatSide: TypeAlias = Literal["counterpart", "primary", "summary"]

TOTAL_COUNTERPART = "TOTAL_COUNTERPART"
TOTAL_PRIMARY = "TOTAL_PRIMARY"


@dataclass(frozen=True)
class HeatItem:
    """One row of the breakdown."""

    feature: str
    weight: int
    side: HeatSide
    description: str


def heat_score(result: ClassificationResult) -> list[HeatItem]:
    """Lists fired features plus both totals, heaviest first.

    The context nudge is reported with its point value; its tag decides which
    side it counted for.
    """
    items: list[HeatItem] = []
    for feature, value in result.features.items():
        if feature == CONTEXT_BONUS:
            side: HeatSide = "primary" if value == FOLLOWS_COUNTERPART else "counterpart"
            items.append(
                HeatItem(feature, CONTEXT_BONUS_POINTS, side, describe_feature(feature))
            )
            continue
        items.append(
            HeatItem(
                feature=feature,
                weight=int(value),
                side=feature_target(feature) or "summary",
                description=describe_feature(feature),
            )
        )

    counterpart_score, primary_score = result.scores
    items.append(
        HeatItem(TOTAL_COUNTERPART, counterpart_score, "summary", "Cumulative AI score")
    )
    items.append(
        HeatItem(TOTAL_PRIMARY, primary_score, "summary", "Cumulative User score")
    )
    items.sort(key=lambda item: item.weight, reverse=True)
    return items
