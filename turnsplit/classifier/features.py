"""Surface-feature catalogue used to score a single conversation turn.

Each feature is a named predicate over the trimmed turn text. A feature that
fires adds a fixed number of points to exactly one side: the counterpart
(automated assistant) or the primary party (the human user).
"""

from __future__ import annotations

import re
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Literal, TypeAlias

from turnsplit.domain import FeatureValue

FeatureTarget: TypeAlias = Literal["counterpart", "primary"]

CONTEXT_BONUS = "contextBonus"
CONTEXT_BONUS_POINTS = 1
EXPLICIT_USER_MARKER = "explicitUserMarker"
EXPLICIT_AI_MARKER = "explicitAIMarker"

_HEADING_RE = re.compile(r"^#{1,3}\s", re.MULTILINE)
_PARAGRAPH_SPLIT_RE = re.compile(r"\n\n+")
_POLITE_RE = re.compile(
    r"\b(please|could you|can you|would you|will you|may I)\b", re.IGNORECASE
)
_PRESENTATION_RE = re.compile(r"\b(here is|here are|here's a|here's an)\b", re.IGNORECASE)
_OFFER_HELP_RE = re.compile(r"\b(I'll|I will|let me|I can)\b", re.IGNORECASE)
_CASUAL_RE = re.compile(r"\b(yeah|nah|gonna|wanna|kinda|sorta|dunno)\b", re.IGNORECASE)
_FORMAL_RE = re.compile(
    r"\b(additionally|furthermore|therefore|however|moreover|consequently)\b",
    re.IGNORECASE,
)
_META_RE = re.compile(r"\b(as mentioned|as I said|as noted|as discussed)\b", re.IGNORECASE)
_APOLOGY_RE = re.compile(r"\b(sorry|apologies|apologize|my mistake)\b", re.IGNORECASE)
_IMPERATIVE_RE = re.compile(
    r"(make|create|write|fix|explain|generate|show|give me|help|build|design)\b",
    re.IGNORECASE,
)
# Tag attributes must follow whitespace, so the tag name and the attribute run
# never compete for the same characters and the scan stays linear.
_CODE_RE = re.compile(
    r"function\s+\w+|const\s+\w+|let\s+\w+|var\s+\w+|<\w+(?:\s[^<>]*)?>|class\s+\w+"
)
_EXPLANATION_RE = re.compile(r"\b(this|the|here|will|should|can)\b", re.IGNORECASE)
_NUMBERED_ITEM_RE = re.compile(r"^\d+\.\s.{20,}", re.MULTILINE)
_BULLET_ITEM_RE = re.compile(r"^[-*]\s.{20,}", re.MULTILINE)
_GRATITUDE_RE = re.compile(r"\b(thanks|thank you|thx|appreciate)\b", re.IGNORECASE)
_EMOJI_RE = re.compile(
    "["
    "\U0001F1E6-\U0001F1FF"  # regional indicators
    "\U0001F300-\U0001F5FF"  # symbols and pictographs
    "\U0001F600-\U0001F64F"  # emoticons
    "\U0001F680-\U0001F6FF"  # transport and map
    "\U0001F900-\U0001F9FF"  # supplemental symbols
    "\U0001FA70-\U0001FAFF"  # extended pictographs
    "\u2600-\u26FF"  # miscellaneous symbols
    "\u2700-\u27BF"  # dingbats
    "]"
)
_UPPERCASE_RE = re.compile(r"[A-Z]")
_USER_MARKER_RE = re.compile(r"(user|human|me):", re.IGNORECASE)
_AI_MARKER_RE = re.compile(r"(assistant|ai|claude|gpt|bot):", re.IGNORECASE)
_ACKNOWLEDGEMENT_RE = re.compile(
    r"(ok|okay|yes|yeah|no|nope|sure|thanks?|thx)", re.IGNORECASE
)
ACKNOWLEDGEMENT_MAX_LENGTH = 15


def _has_multiple_paragraphs(text: str) -> bool:
    paragraphs = [p for p in _PARAGRAPH_SPLIT_RE.split(text) if p.strip()]
    return len(paragraphs) > 2


def _has_explained_code(text: str) -> bool:
    return (
        len(text) > 100
        and _CODE_RE.search(text) is not None
        and _EXPLANATION_RE.search(text) is not None
    )


def _has_detailed_list(text: str) -> bool:
    return bool(_NUMBERED_ITEM_RE.search(text) or _BULLET_ITEM_RE.search(text))


def _has_caps_intensity(text: str) -> bool:
    if len(text) <= 10:
        return False
    return len(_UPPERCASE_RE.findall(text)) / len(text) > 0.3


@dataclass(frozen=True)
class Feature:
    """One catalogue entry: a predicate, its weight, and the side it favours."""

    name: str
    weight: int
    target: FeatureTarget
    predicate: Callable[[str], bool]
    description: str


FEATURE_CATALOGUE: tuple[Feature, ...] = (
    Feature("codeBlock", 4, "counterpart", lambda t: "```" in t,
            "Contains code block ```"),
    Feature("markdownHeading", 2, "counterpart",
            lambda t: _HEADING_RE.search(t) is not None,
            "Markdown heading (#, ##, ###)"),
    Feature("longText", 3, "counterpart", lambda t: len(t) > 500,
            "Text length > 500 (AI-like)"),
    Feature("shortText", 2, "primary", lambda t: len(t) < 80,
            "Text length < 80 (User-like)"),
    Feature("multiParagraph", 2, "counterpart", _has_multiple_paragraphs,
            "Multiple paragraphs"),
    Feature("endsWithQuestion", 3, "primary", lambda t: t.endswith("?"),
            "Ends with a question (?)"),
    Feature("politeRequest", 3, "primary",
            lambda t: _POLITE_RE.search(t) is not None,
            "Request phrase (please / can you...)"),
    Feature("presentationPhrase", 3, "counterpart",
            lambda t: _PRESENTATION_RE.search(t) is not None,
            "AI phrasing (here is / here are...)"),
    Feature("offerHelp", 2, "counterpart",
            lambda t: _OFFER_HELP_RE.search(t) is not None,
            "AI helper tone (I can / let me...)"),
    Feature("casualSpeech", 2, "primary",
            lambda t: _CASUAL_RE.search(t) is not None,
            "Casual slang (gonna, kinda, dunno...)"),
    Feature("formalConnectors", 2, "counterpart",
            lambda t: _FORMAL_RE.search(t) is not None,
            "Formal AI connector (furthermore, additionally...)"),
    Feature("metaReference", 2, "counterpart",
            lambda t: _META_RE.search(t) is not None,
            "Meta-reference (as mentioned...)"),
    Feature("apologetic", 2, "counterpart",
            lambda t: _APOLOGY_RE.search(t) is not None,
            "Apology (sorry / apologies)"),
    Feature("imperativeCommand", 3, "primary",
            lambda t: _IMPERATIVE_RE.match(t) is not None,
            "User command (make, create, generate...)"),
    Feature("explainedCode", 2, "counterpart", _has_explained_code,
            "Code explained in context"),
    Feature("detailedList", 2, "counterpart", _has_detailed_list,
            "Detailed list (AI-style)"),
    Feature("gratitude", 2, "primary",
            lambda t: _GRATITUDE_RE.search(t) is not None,
            "Thanks or appreciation"),
    Feature("hasEmoji", 2, "primary", lambda t: _EMOJI_RE.search(t) is not None,
            "Emoji present (user signal)"),
    Feature("capsIntensity", 2, "primary", _has_caps_intensity,
            "High ALL-CAPS ratio"),
    Feature(EXPLICIT_USER_MARKER, 10, "primary",
            lambda t: _USER_MARKER_RE.match(t) is not None,
            "Explicit user: marker"),
    Feature(EXPLICIT_AI_MARKER, 10, "counterpart",
            lambda t: _AI_MARKER_RE.match(t) is not None,
            "Explicit AI: marker"),
)

FEATURE_DESCRIPTIONS: dict[str, str] = {
    **{feature.name: feature.description for feature in FEATURE_CATALOGUE},
    CONTEXT_BONUS: "Contextual continuity bonus",
}

UNKNOWN_FEATURE_DESCRIPTION = "Unknown feature"


def describe_feature(key: str) -> str:
    """Returns a one-sentence, human-readable description of a feature key."""
    return FEATURE_DESCRIPTIONS.get(key, UNKNOWN_FEATURE_DESCRIPTION)


def feature_target(key: str) -> FeatureTarget | None:
    """Returns the side a catalogue feature contributes to."""
    for feature in FEATURE_CATALOGUE:
        if feature.name == key:
            return feature.target
    return None


def is_acknowledgement(text: str) -> bool:
    """Whether trimmed text is a bare acknowledgement such as "ok" or "thanks"."""
    return (
        len(text) < ACKNOWLEDGEMENT_MAX_LENGTH
        and _ACKNOWLEDGEMENT_RE.fullmatch(text) is not None
    )


@dataclass
class FeatureScore:
    """Running totals produced by folding the catalogue over one text."""

    counterpart: int = 0
    primary: int = 0
    features: dict[str, FeatureValue] = field(default_factory=dict)

    def add(self, name: str, weight: int, target: FeatureTarget) -> None:
        if target == "counterpart":
            self.counterpart += weight
        else:
            self.primary += weight
        self.features[name] = weight


class FeatureScorer:
    """Folds a feature catalogue over trimmed turn text."""

    def __init__(self, catalogue: tuple[Feature, ...] = FEATURE_CATALOGUE) -> None:
        self.catalogue = catalogue

    def score(self, text: str) -> FeatureScore:
        """Evaluates every catalogue feature against already-trimmed text."""
        result = FeatureScore()
        for feature in self.catalogue:
            if feature.predicate(text):
                result.add(feature.name, feature.weight, feature.target)
        return result
