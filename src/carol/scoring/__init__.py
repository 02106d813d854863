"""CAROL score combination: normalisation, weighting, Z-space combination and classification."""

from .combiner import (
    Prediction,
    ScoreRangeError,
    classify,
    combine,
    combine_normalized,
    evidence_weight,
    normalize_scores,
)
from .batch import combine_frame

__all__ = [
    "Prediction",
    "ScoreRangeError",
    "classify",
    "combine",
    "combine_frame",
    "combine_normalized",
    "evidence_weight",
    "normalize_scores",
]
