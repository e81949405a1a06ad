from .labels import LabelParser
from .metadata import detect_source, detect_title
from .pipeline import SegmentationPipeline, SegmentationStrategy, segment
from .reconstruct import reconstruct_text
from .structural import split_alternating, split_alternating_ungated, split_blocks

__all__ = [
    "LabelParser",
    "SegmentationPipeline",
    "SegmentationStrategy",
    "detect_source",
    "detect_title",
    "reconstruct_text",
    "segment",
    "split_alternating",
    "split_alternating_ungated",
    "split_blocks",
]
