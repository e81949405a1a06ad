"""Append-only log of manual speaker corrections.

Corrections are recorded for later review only; nothing here feeds back into
scoring.
"""

from __future__ import annotations

import logging
import threading
from collections import Counter
from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime, timezone

from turnsplit.domain import FeatureValue, Speaker
from turnsplit.utils.logger import get_logger

logger: logging.Logger = get_logger(__name__)


@dataclass(frozen=True)
class CorrectionRecord:
    """A single manual override of a classifier decision."""

    text: str
    predicted: Speaker
    actual: Speaker
    features: Mapping[str, FeatureValue]
    timestamp: str


@dataclass(frozen=True)
class CorrectionAnalysis:
    """Aggregate view over recorded corrections."""

    total_corrections: int
    counterpart_misclassified: int
    primary_misclassified: int
    problematic_features: dict[str, int] = field(default_factory=dict)


class CorrectionLog:
    """Thread-safe, append-only store of corrections."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._records: list[CorrectionRecord] = []

    def record(
        self,
        text: str,
        predicted: Speaker,
        actual: Speaker,
        features: Mapping[str, FeatureValue],
    ) -> CorrectionRecord:
        """Appends one correction and returns the stored record."""
        entry = CorrectionRecord(
            text=text,
            predicted=predicted,
            actual=actual,
            features=dict(features),
            timestamp=datetime.now(timezone.utc).isoformat(),
        )
        with self._lock:
            self._records.append(entry)
        logger.debug("Recorded correction %s -> %s.", predicted, actual)
        return entry

    def records(self) -> tuple[CorrectionRecord, ...]:
        """Returns a snapshot of every record in insertion order."""
        with self._lock:
            return tuple(self._records)

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)

    def analyze(self) -> CorrectionAnalysis | None:
        """Counts misclassifications per side and per fired feature.

        Returns:
            ``None`` when no corrections have been recorded yet.
        """
        snapshot = self.records()
        if not snapshot:
            return None

        feature_counts: Counter[str] = Counter()
        counterpart_misclassified = 0
        for entry in snapshot:
            if entry.actual == "counterpart":
                counterpart_misclassified += 1
            feature_counts.update(entry.features.keys())

        return CorrectionAnalysis(
            total_corrections=len(snapshot),
            counterpart_misclassified=counterpart_misclassified,
            primary_misclassified=len(snapshot) - counterpart_misclassified,
            problematic_features=dict(feature_counts),
        )

    def stats(self) -> dict[str, int | bool]:
        count = len(self)
        return {
            "corrections_recorded": count,
            "learning_data_available": count > 0,
        }
