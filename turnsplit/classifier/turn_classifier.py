"""Zero-shot speaker classification for conversation turns."""

from __future__ import annotations

import logging
from collections.abc import Sequence

from turnsplit.classifier.features import (
    CONTEXT_BONUS,
    CONTEXT_BONUS_POINTS,
    EXPLICIT_AI_MARKER,
    EXPLICIT_USER_MARKER,
    FeatureScorer,
    is_acknowledgement,
)
from turnsplit.classifier.sequence import SequenceValidator
from turnsplit.domain import ClassificationResult, Speaker
from turnsplit.utils.logger import get_logger

logger: logging.Logger = get_logger(__name__)

COUNTERPART_THRESHOLD = 4
PRIMARY_THRESHOLD = 3
BASE_CONFIDENCE = 0.7
MAX_CONFIDENCE = 0.95
UNCERTAIN_CONFIDENCE = 0.5
MARKER_OVERRIDE_CONFIDENCE = 0.7
FOLLOWS_COUNTERPART = "followsCounterpart"
FOLLOWS_PRIMARY = "followsPrimary"


def decide(counterpart_score: int, primary_score: int) -> tuple[Speaker, float]:
    """Maps the two raw scores to a speaker and a rounded confidence.

    The thresholds are asymmetric: the counterpart needs a lead of four
    points, the primary party a lead of three.
    """
    diff = counterpart_score - primary_score
    if diff >= COUNTERPART_THRESHOLD:
        return "counterpart", round(min(MAX_CONFIDENCE, BASE_CONFIDENCE + diff / 20), 2)
    if diff <= -PRIMARY_THRESHOLD:
        return "primary", round(min(MAX_CONFIDENCE, BASE_CONFIDENCE + abs(diff) / 20), 2)
    return "uncertain", UNCERTAIN_CONFIDENCE


class TurnClassifier:
    """Classifies turns as counterpart, primary, or uncertain."""

    def __init__(
        self,
        scorer: FeatureScorer | None = None,
        validator: SequenceValidator | None = None,
    ) -> None:
        self.scorer = scorer or FeatureScorer()
        self.validator = validator or SequenceValidator()

    def classify(
        self, text: str, previous_speaker: Speaker | None = None
    ) -> ClassificationResult:
        """Classifies one turn, nudged by the previous turn's speaker.

        Args:
            text: Raw turn text. Leading and trailing whitespace is ignored.
            previous_speaker: Decision for the preceding turn, if any.

        Returns:
            The decision, its confidence, raw scores, and fired features.
        """
        if not isinstance(text, str):
            raise TypeError(f"text must be a str, got {type(text).__name__}.")
        trimmed = text.strip()
        if is_acknowledgement(trimmed):
            return ClassificationResult(
                speaker="uncertain",
                confidence=UNCERTAIN_CONFIDENCE,
                scores=(0, 0),
            )

        score = self.scorer.score(trimmed)
        if previous_speaker == "counterpart":
            score.primary += CONTEXT_BONUS_POINTS
            score.features[CONTEXT_BONUS] = FOLLOWS_COUNTERPART
        elif previous_speaker == "primary":
            score.counterpart += CONTEXT_BONUS_POINTS
            score.features[CONTEXT_BONUS] = FOLLOWS_PRIMARY

        speaker, confidence = decide(score.counterpart, score.primary)
        marker_side = _explicit_marker_side(score.features)
        if marker_side is not None and speaker != marker_side:
            logger.debug(
                "Explicit %s marker overrides score decision %s (scores=%s/%s).",
                marker_side,
                speaker,
                score.counterpart,
                score.primary,
            )
            speaker, confidence = marker_side, MARKER_OVERRIDE_CONFIDENCE

        return ClassificationResult(
            speaker=speaker,
            confidence=confidence,
            scores=(score.counterpart, score.primary),
            features=score.features,
        )

    def classify_conversation(self, texts: Sequence[str]) -> list[ClassificationResult]:
        """Classifies turns left to right, then repairs the sequence.

        Each decision is fed to the next turn as its previous speaker, so the
        order of ``texts`` matters.
        """
        results: list[ClassificationResult] = []
        previous_speaker: Speaker | None = None
        for text in texts:
            result = self.classify(text, previous_speaker)
            results.append(result)
            previous_speaker = result.speaker

        self.validator.validate(results, texts)
        return results


def _explicit_marker_side(features: dict[str, object]) -> Speaker | None:
    if EXPLICIT_AI_MARKER in features:
        return "counterpart"
    if EXPLICIT_USER_MARKER in features:
        return "primary"
    return None


_DEFAULT_CLASSIFIER = TurnClassifier()


def classify_turn(
    text: str, previous_speaker: Speaker | None = None
) -> ClassificationResult:
    """Classifies one turn with the default feature catalogue."""
    return _DEFAULT_CLASSIFIER.classify(text, previous_speaker)
