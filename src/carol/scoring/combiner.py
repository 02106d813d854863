"""
CAROL score combiner.

Combines a PolyPhen-2 damage probability and a SIFT tolerance probability into
a single Combined Annotation scoRing toOL (CAROL) score using a weighted
Z-score meta-analysis:

1. Normalise inputs (invert SIFT, clamp exact 0/1 away from the boundaries)
2. Derive an evidence weight ln(1 / (1 - p)) per input
3. Combine -qnorm(p) Z-scores weighted by evidence, map back with 1 - pnorm
4. Classify against a cutoff (default 0.98)

Every function here is pure: no I/O, no logging, no shared state.

Usage:
  from carol.scoring import combine
  combine(0.9, 0.1)      # ('Neutral', 0.9650...)
  combine(None, 0.01)    # ('Deleterious', 0.99)
  combine(None, None)    # None
"""

import math
from typing import Literal, Optional, Tuple

import pandas as pd
from scipy.stats import norm

from .constants import CAROL_CUTOFF, DELETERIOUS, LOWER_CLAMP, NEUTRAL, UPPER_CLAMP

Prediction = Literal["Neutral", "Deleterious"]


class ScoreRangeError(ValueError):
    """Raised when a predictor probability lies outside [0, 1]."""


def _is_absent(value: Optional[float]) -> bool:
    # None, float/numpy NaN of any width, and pd.NA
    return value is None or bool(pd.isna(value))


def _check_range(value: float, name: str) -> float:
    value = float(value)
    if not 0.0 <= value <= 1.0:
        raise ScoreRangeError(f"{name} must lie in [0, 1], got {value}")
    return value


def _clamp(p: float) -> float:
    if p == 1:
        return UPPER_CLAMP
    if p == 0:
        return LOWER_CLAMP
    return p


def normalize_scores(
    structural: Optional[float],
    conservation: Optional[float],
) -> Tuple[Optional[float], Optional[float]]:
    """
    Convert raw predictor outputs into damage probabilities strictly inside (0, 1).

    Args:
        structural: PolyPhen damage probability, or None if absent
        conservation: SIFT tolerance probability, or None if absent

    Returns:
        (structural, conservation) normalised; absent inputs stay None

    Raises:
        ScoreRangeError: If a defined input lies outside [0, 1]
    """
    if _is_absent(structural):
        structural = None
    else:
        structural = _clamp(_check_range(structural, "structural score"))

    if _is_absent(conservation):
        conservation = None
    else:
        # SIFT reports probability of tolerance; flip to probability of damage
        conservation = _clamp(1 - _check_range(conservation, "conservation score"))

    return structural, conservation


def evidence_weight(p: float) -> float:
    """Weight ln(1 / (1 - p)) for a normalised probability p."""
    return math.log(1 / (1 - p))


def combine_normalized(
    structural: Optional[float],
    conservation: Optional[float],
) -> Optional[float]:
    """
    Combine normalised damage probabilities in standard-normal space.

    With both inputs, each probability becomes an upper-tail Z-score
    (-qnorm(p)); the Z-scores are weighted by evidence_weight, renormalised by
    the root of the summed squared weights and mapped back with 1 - pnorm.
    A single input passes through unchanged.

    Returns:
        Combined probability in [0, 1], or None when both inputs are absent
    """
    if structural is not None and conservation is not None:
        structural_weight = evidence_weight(structural)
        conservation_weight = evidence_weight(conservation)

        # -qnorm(p) == qnorm(p, lower.tail = FALSE) in the R script
        structural_z = -norm.ppf(structural)
        conservation_z = -norm.ppf(conservation)

        numerator = structural_weight * structural_z + conservation_weight * conservation_z
        denominator = math.sqrt(structural_weight ** 2 + conservation_weight ** 2)

        return float(1 - norm.cdf(numerator / denominator))

    if structural is not None:
        return structural

    return conservation


def classify(score: float, cutoff: float = CAROL_CUTOFF) -> Prediction:
    """Label a combined score; the cutoff itself counts as deleterious."""
    return NEUTRAL if score < cutoff else DELETERIOUS


def combine(
    structural: Optional[float],
    conservation: Optional[float],
    cutoff: float = CAROL_CUTOFF,
) -> Optional[Tuple[Prediction, float]]:
    """
    Compute the CAROL prediction and score for one variant.

    Args:
        structural: PolyPhen damage probability in [0, 1], or None
        conservation: SIFT tolerance probability in [0, 1], or None
        cutoff: Scores at or above this value are Deleterious

    Returns:
        (prediction, score) at full precision, or None if both inputs are absent

    Raises:
        ScoreRangeError: If a defined input lies outside [0, 1]
    """
    structural, conservation = normalize_scores(structural, conservation)
    score = combine_normalized(structural, conservation)

    if score is None:
        return None

    return classify(score, cutoff), score
