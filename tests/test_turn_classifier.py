"""Tests for turn-level speaker decisions and confidence scoring."""

from __future__ import annotations

import pytest

from turnsplit.classifier import TurnClassifier, classify_turn, decide


@pytest.mark.parametrize(
    ("counterpart", "primary", "speaker", "confidence"),
    [
        (4, 0, "counterpart", 0.9),
        (7, 4, "uncertain", 0.5),
        (3, 0, "uncertain", 0.5),
        (0, 3, "primary", 0.85),
        (0, 2, "uncertain", 0.5),
        (12, 0, "counterpart", 0.95),
        (0, 20, "primary", 0.95),
        (0, 0, "uncertain", 0.5),
    ],
)
def test_decide_applies_asymmetric_thresholds(
    counterpart: int, primary: int, speaker: str, confidence: float
) -> None:
    """Counterpart needs a four-point lead, primary a three-point lead."""
    assert decide(counterpart, primary) == (speaker, confidence)


def test_diff_of_four_from_real_text_is_counterpart() -> None:
    """A turn after the user scoring exactly four points ahead is counterpart."""
    result = classify_turn("Here is the fix. I'll explain it below.", "primary")

    assert result.scores == (6, 2)
    assert result.speaker == "counterpart"
    assert result.confidence == 0.9
    assert result.features["contextBonus"] == "followsPrimary"


def test_diff_of_three_from_real_text_is_uncertain() -> None:
    """Three points of counterpart lead are not enough to decide."""
    result = classify_turn("Here is the fix. I'll explain it below.")

    assert result.scores == (5, 2)
    assert result.speaker == "uncertain"
    assert result.confidence == 0.5


def test_primary_threshold_from_real_text() -> None:
    """Minus two stays uncertain, minus three after the counterpart is primary."""
    text = "The build finished without errors on the second attempt"

    without_context = classify_turn(text)
    after_counterpart = classify_turn(text, "counterpart")

    assert without_context.scores == (0, 2)
    assert without_context.speaker == "uncertain"
    assert after_counterpart.scores == (0, 3)
    assert after_counterpart.speaker == "primary"
    assert after_counterpart.confidence == 0.85
    assert after_counterpart.features["contextBonus"] == "followsCounterpart"


def test_acknowledgement_short_circuits_with_zero_scores() -> None:
    """Bare acknowledgements are uncertain without any feature evaluation."""
    result = classify_turn("  OK  ", "counterpart")

    assert result.speaker == "uncertain"
    assert result.confidence == 0.5
    assert result.scores == (0, 0)
    assert result.features == {}


def test_explicit_ai_marker_beats_every_primary_feature() -> None:
    """A leading assistant marker wins even when primary features outweigh it."""
    result = classify_turn("assistant: PLEASE YEAH THANKS \U0001F600?")

    assert result.scores == (10, 16)
    assert result.speaker == "counterpart"
    assert result.confidence == 0.7


def test_explicit_user_marker_beats_counterpart_features() -> None:
    """A leading user marker wins over heavy counterpart structure."""
    text = (
        "user: Here is what I tried.\n```js\nconst x = 1;\n```\n"
        + "Additionally, I'll paste the full log. " * 14
    )

    result = classify_turn(text)

    assert result.speaker == "primary"


def test_marker_override_keeps_score_confidence_when_scores_agree() -> None:
    """When scores already pick the marker's side, confidence follows the scores."""
    result = classify_turn("assistant: here you go")

    assert result.speaker == "counterpart"
    assert result.scores == (10, 2)
    assert result.confidence == 0.95


def test_classify_rejects_non_string_input() -> None:
    """Non-string input is rejected at the boundary."""
    with pytest.raises(TypeError):
        classify_turn(None)  # type: ignore[arg-type]


def test_classify_conversation_feeds_previous_speaker_forward() -> None:
    """Each turn is classified with the previous decision as context."""
    texts = [
        "can you write a python function that reverses a string?",
        (
            "Here is a simple solution. I'll use slicing, which is the most "
            "idiomatic approach in Python.\n```python\ndef reverse(text):\n"
            "    return text[::-1]\n```\nAdditionally, you can use reversed() "
            "with join if you prefer."
        ),
        "thanks, that works great",
    ]

    results = TurnClassifier().classify_conversation(texts)

    assert [result.speaker for result in results] == ["primary", "counterpart", "primary"]
    assert "contextBonus" not in results[0].features
    assert results[1].features["contextBonus"] == "followsPrimary"
    assert results[2].features["contextBonus"] == "followsCounterpart"
    assert all(result.corrected_by is None for result in results)


def test_classify_conversation_resolves_uncertain_turns() -> None:
    """An acknowledgement after a user question becomes the counterpart's turn."""
    results = TurnClassifier().classify_conversation(
        ["Please explain how decorators work in Python?", "Sure"]
    )

    assert [result.speaker for result in results] == ["primary", "counterpart"]
    assert results[1].corrected_by == "alternationPattern"
    assert results[1].confidence == 0.6


def test_confidence_stays_within_bounds() -> None:
    """Confidence is always between 0.5 and 0.95."""
    samples = [
        "",
        "ok",
        "x" * 700,
        "Can you PLEASE help me?? \U0001F62D",
        "## Title\n```py\nprint(1)\n```\n" * 30,
    ]

    for text in samples:
        result = classify_turn(text)
        assert 0.5 <= result.confidence <= 0.95
