from .classifier import (
    CorrectionLog,
    TurnClassifier,
    classify_turn,
    describe_feature,
    heat_score,
)
from .domain import ClassificationResult, Turn
from .parsing import (
    LabelParser,
    SegmentationPipeline,
    detect_source,
    detect_title,
    reconstruct_text,
    segment,
)

__all__ = [
    "ClassificationResult",
    "CorrectionLog",
    "LabelParser",
    "SegmentationPipeline",
    "Turn",
    "TurnClassifier",
    "classify_turn",
    "describe_feature",
    "detect_source",
    "detect_title",
    "heat_score",
    "reconstruct_text",
    "segment",
]
