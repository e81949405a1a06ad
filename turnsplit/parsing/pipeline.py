"""Strategy cascade that turns raw transcript text into attributed turns."""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from functools import cached_property

from turnsplit.classifier.turn_classifier import TurnClassifier
from turnsplit.config import AppConfig, get_settings
from turnsplit.domain import Turn, default_display_name, kind_for_speaker
from turnsplit.parsing.labels import LabelParser, infer_leading_kind
from turnsplit.parsing.structural import alternate_turns, split_blocks
from turnsplit.utils.logger import get_logger

logger: logging.Logger = get_logger(__name__)


class SegmentationContext:
    """Per-call cache so each strategy reuses the same label parse and blocks."""

    def __init__(self, text: str, parser: LabelParser, classifier: TurnClassifier) -> None:
        self.text = text
        self._parser = parser
        self._classifier = classifier

    @cached_property
    def labelled_turns(self) -> list[Turn]:
        return self._parser.parse(self.text)

    @cached_property
    def blocks(self) -> list[str]:
        return split_blocks(self.text)

    def classified_turns(self) -> list[Turn]:
        if len(self.blocks) < 2:
            return []
        results = self._classifier.classify_conversation(self.blocks)
        turns = [
            Turn(
                kind=kind_for_speaker(result.speaker),
                display_name=default_display_name(kind_for_speaker(result.speaker)),
                content=block,
            )
            for block, result in zip(self.blocks, results)
        ]
        return infer_leading_kind(turns)

    def alternating_turns(self) -> list[Turn]:
        return alternate_turns(self.blocks)


def has_known_kind(turns: list[Turn]) -> bool:
    return any(turn.kind != "unknown" for turn in turns)


@dataclass(frozen=True)
class SegmentationStrategy:
    """A named way of splitting text plus the gate its output must pass."""

    name: str
    run: Callable[[SegmentationContext], list[Turn]]
    accept: Callable[[list[Turn]], bool]


LABELS = SegmentationStrategy(
    name="labels",
    run=lambda context: context.labelled_turns,
    accept=lambda turns: len(turns) >= 2 and has_known_kind(turns),
)
CLASSIFIER = SegmentationStrategy(
    name="classifier",
    run=SegmentationContext.classified_turns,
    accept=lambda turns: len(turns) >= 2,
)
ALTERNATING = SegmentationStrategy(
    name="alternating",
    run=SegmentationContext.alternating_turns,
    accept=lambda turns: len(turns) >= 2,
)
SINGLE_LABEL = SegmentationStrategy(
    name="single_label",
    run=lambda context: context.labelled_turns,
    accept=lambda turns: len(turns) == 1 and has_known_kind(turns),
)
ALTERNATING_UNGATED = SegmentationStrategy(
    name="alternating_ungated",
    run=SegmentationContext.alternating_turns,
    accept=lambda turns: True,
)


def default_strategies(*, use_classifier: bool = True) -> tuple[SegmentationStrategy, ...]:
    """Returns the cascade in evaluation order."""
    if use_classifier:
        return (LABELS, CLASSIFIER, ALTERNATING, SINGLE_LABEL, ALTERNATING_UNGATED)
    return (LABELS, ALTERNATING, SINGLE_LABEL, ALTERNATING_UNGATED)


class SegmentationPipeline:
    """Runs strategies in order and keeps the first output its gate accepts."""

    def __init__(
        self,
        *,
        parser: LabelParser | None = None,
        classifier: TurnClassifier | None = None,
        strategies: tuple[SegmentationStrategy, ...] | None = None,
    ) -> None:
        self.parser = parser or LabelParser()
        self.classifier = classifier or TurnClassifier()
        self.strategies = strategies or default_strategies()

    @classmethod
    def from_settings(cls, settings: AppConfig) -> SegmentationPipeline:
        return cls(
            parser=LabelParser(settings.parser),
            strategies=default_strategies(
                use_classifier=settings.pipeline.use_classifier
            ),
        )

    def segment(self, text: str) -> list[Turn]:
        """Splits ``text`` into attributed turns.

        Never raises for string input; empty or blank text yields no turns.
        Turns whose content is blank are always dropped.
        """
        turns, _ = self.segment_with_strategy(text)
        return turns

    def segment_with_strategy(self, text: str) -> tuple[list[Turn], str | None]:
        """Splits ``text`` and names the strategy whose output was accepted.

        The name is ``None`` when no strategy accepted its output.
        """
        if not isinstance(text, str):
            raise TypeError(f"text must be a str, got {type(text).__name__}.")

        context = SegmentationContext(text, self.parser, self.classifier)
        for strategy in self.strategies:
            candidate = strategy.run(context)
            if strategy.accept(candidate):
                logger.debug(
                    "Strategy %s accepted with %d turns.", strategy.name, len(candidate)
                )
                return [turn for turn in candidate if turn.content.strip()], strategy.name
        return [], None


_DEFAULT_PIPELINE: tuple[AppConfig, SegmentationPipeline] | None = None


def _default_pipeline() -> SegmentationPipeline:
    global _DEFAULT_PIPELINE
    settings = get_settings()
    if _DEFAULT_PIPELINE is None or _DEFAULT_PIPELINE[0] is not settings:
        _DEFAULT_PIPELINE = (settings, SegmentationPipeline.from_settings(settings))
    return _DEFAULT_PIPELINE[1]


def segment(text: str) -> list[Turn]:
    """Segments text with a pipeline built from the current settings."""
    return _default_pipeline().segment(text)
