from .corrections import CorrectionAnalysis, CorrectionLog, CorrectionRecord
from .explain import HeatItem, heat_score
from .features import FEATURE_CATALOGUE, Feature, FeatureScorer, describe_feature
from .sequence import SequenceValidator
from .turn_classifier import TurnClassifier, classify_turn, decide

__all__ = [
    "CorrectionAnalysis",
    "CorrectionLog",
    "CorrectionRecord",
    "FEATURE_CATALOGUE",
    "Feature",
    "FeatureScorer",
    "HeatItem",
    "SequenceValidator",
    "TurnClassifier",
    "classify_turn",
    "decide",
    "describe_feature",
    "heat_score",
]
