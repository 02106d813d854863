"""CAROL: Combined Annotation scoRing toOL.

Combines PolyPhen-2 and SIFT predictions for a missense variant into a single
pathogenicity score by weighted Z-score meta-analysis.
"""

from .scoring import ScoreRangeError, classify, combine, combine_frame

__version__ = "2.3.0"

__all__ = ["ScoreRangeError", "classify", "combine", "combine_frame", "__version__"]
