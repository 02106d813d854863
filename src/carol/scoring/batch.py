"""
Vectorised CAROL scoring over pandas columns.

Applies the same normalise -> weight -> Z-space combine -> classify stages as
``combiner.combine`` to whole columns at once. NaN marks an absent score.
"""

import logging

import numpy as np
import pandas as pd
from scipy.stats import norm

from .combiner import ScoreRangeError
from .constants import CAROL_CUTOFF, DELETERIOUS, LOWER_CLAMP, NEUTRAL, UPPER_CLAMP

logger = logging.getLogger(__name__)


def _as_probabilities(values: pd.Series, name: str) -> np.ndarray:
    """Coerce a column to float and fail fast on values outside [0, 1]."""
    arr = pd.to_numeric(values, errors="raise").astype(float).to_numpy(copy=True)
    defined = arr[~np.isnan(arr)]
    out_of_range = (defined < 0) | (defined > 1)
    if out_of_range.any():
        raise ScoreRangeError(
            f"{name} has {int(out_of_range.sum())} values outside [0, 1] "
            f"(min={defined.min():.4f}, max={defined.max():.4f})"
        )
    return arr


def _clamp(arr: np.ndarray) -> np.ndarray:
    arr = np.where(arr == 1, UPPER_CLAMP, arr)
    return np.where(arr == 0, LOWER_CLAMP, arr)


def combine_frame(
    structural: pd.Series,
    conservation: pd.Series,
    cutoff: float = CAROL_CUTOFF,
) -> pd.DataFrame:
    """
    Score every row of two aligned predictor columns.

    Args:
        structural: PolyPhen damage probabilities (NaN/None = absent)
        conservation: SIFT tolerance probabilities (NaN/None = absent)
        cutoff: Scores at or above this value are Deleterious

    Returns:
        DataFrame indexed like ``structural`` with columns
        ``carol_score`` (NaN when unscored) and ``carol_prediction`` (None when unscored)

    Raises:
        ScoreRangeError: If any defined value lies outside [0, 1]
    """
    conservation = conservation.reindex(structural.index)

    s = _clamp(_as_probabilities(structural, "structural score"))
    c = _clamp(1 - _as_probabilities(conservation, "conservation score"))

    both = ~np.isnan(s) & ~np.isnan(c)

    # Single-input passthrough; NaN where neither is defined
    score = np.where(np.isnan(s), c, s)

    if both.any():
        s_both = s[both]
        c_both = c[both]
        s_weight = np.log(1 / (1 - s_both))
        c_weight = np.log(1 / (1 - c_both))
        numerator = s_weight * -norm.ppf(s_both) + c_weight * -norm.ppf(c_both)
        denominator = np.sqrt(s_weight ** 2 + c_weight ** 2)
        score[both] = 1 - norm.cdf(numerator / denominator)

    unscored = np.isnan(score)
    labels = np.where(score < cutoff, NEUTRAL, DELETERIOUS).astype(object)
    labels[unscored] = None

    logger.info(
        f"Scored {int((~unscored).sum())}/{len(score)} variants "
        f"({int(both.sum())} combined, {int((~unscored & ~both).sum())} single-predictor)"
    )
    if unscored.any():
        logger.warning(f"{int(unscored.sum())} variants have neither PolyPhen nor SIFT score")

    return pd.DataFrame(
        {"carol_score": score, "carol_prediction": labels},
        index=structural.index,
    )
