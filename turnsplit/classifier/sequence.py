"""Single-pass repair of implausible speaker sequences."""

from __future__ import annotations

import logging
from collections.abc import Sequence

from turnsplit.domain import ClassificationResult
from turnsplit.utils.logger import get_logger

logger: logging.Logger = get_logger(__name__)

SEQUENCE_VALIDATION = "sequenceValidation"
ALTERNATION_PATTERN = "alternationPattern"
RUN_BREAK_CONFIDENCE = 0.65
ALTERNATION_CONFIDENCE = 0.6
SHORT_INTERJECTION_LENGTH = 100


class SequenceValidator:
    """Repairs a conversation's classifications in one forward pass.

    Rules, checked at every index ``i`` in ascending order:

    1. Three counterpart turns in a row whose middle turn is a short question
       turn that middle turn into a primary turn.
    2. An uncertain turn after a definite one takes the opposite speaker.

    Rule 2 reads the current value at ``i - 1``, including any correction
    rule 1 applied there. Indices are never revisited.
    """

    def validate(
        self, results: list[ClassificationResult], texts: Sequence[str]
    ) -> None:
        if len(results) != len(texts):
            raise ValueError("results and texts must have identical length.")

        for index, result in enumerate(results):
            if index >= 2 and all(
                results[position].speaker == "counterpart"
                for position in (index, index - 1, index - 2)
            ):
                middle_text = texts[index - 1]
                if len(middle_text) < SHORT_INTERJECTION_LENGTH and "?" in middle_text:
                    middle = results[index - 1]
                    middle.speaker = "primary"
                    middle.confidence = RUN_BREAK_CONFIDENCE
                    middle.corrected_by = SEQUENCE_VALIDATION
                    logger.debug("Turn %d reclassified as primary by run-break.", index - 1)

            if result.speaker == "uncertain" and index > 0:
                previous = results[index - 1].speaker
                if previous in ("counterpart", "primary"):
                    result.speaker = "primary" if previous == "counterpart" else "counterpart"
                    result.confidence = ALTERNATION_CONFIDENCE
                    result.corrected_by = ALTERNATION_PATTERN
                    logger.debug(
                        "Uncertain turn %d resolved to %s by alternation.",
                        index,
                        result.speaker,
                    )
