"""Render CAROL results into annotation field values."""

from typing import Optional, Sequence

from .constants import SCORE_DECIMALS


def parse_display_mode(params: Optional[Sequence[str]]) -> str:
    """
    Map plugin parameters to a display mode.

    The first parameter selects the mode by its leading letter:
    'p...' shows the prediction only, 's...' the score only. Anything else
    (or no parameters) shows both.
    """
    if not params:
        return "full"

    first = str(params[0]).lower()
    if first.startswith("p"):
        return "prediction"
    if first.startswith("s"):
        return "score"
    return "full"


def format_score(score: float) -> str:
    return f"{score:.{SCORE_DECIMALS}f}"


def format_result(prediction: str, score: float, display_mode: str = "full") -> str:
    """Format as 'Deleterious (0.990)', 'Deleterious' or '0.990'."""
    if display_mode == "prediction":
        return prediction
    if display_mode == "score":
        return format_score(score)
    return f"{prediction} ({format_score(score)})"
