"""
CAROL plugin for VEP-style annotation pipelines.

Adds one output field, CAROL, holding the Combined Annotation scoRing toOL
prediction computed from the PolyPhen-2 and SIFT calls of a transcript allele.

References:
  Lopes MC, Joyce C, Ritchie GRS, et al. A combined functional annotation
  score for non-synonymous variants. Human Heredity (2012).
"""

from __future__ import annotations

from typing import Dict, Optional, Sequence, Set, Tuple

from ..reporting.format import format_result, parse_display_mode
from ..scoring.combiner import Prediction, combine
from ..scoring.constants import CAROL_CUTOFF
from .base import AnnotationPlugin, FeatureKind, PluginMetadata, TranscriptVariantAllele

PLUGIN_NAME = "Carol"
PLUGIN_VERSION = "2.3"
OUTPUT_FIELD = "CAROL"
OUTPUT_DESCRIPTION = "Combined Annotation scoRing toOL prediction"
UNKNOWN_PREDICTION = "unknown"


def polyphen_structural_score(prediction: Optional[str], score: Optional[float]) -> Optional[float]:
    """PolyPhen score, or None when PolyPhen made no call or called 'unknown'."""
    if not isinstance(prediction, str) or not prediction:
        return None
    if prediction == UNKNOWN_PREDICTION:
        return None
    return score


class CarolPlugin(AnnotationPlugin):
    """Compute the CAROL score for each transcript allele."""

    def __init__(self, params: Optional[Sequence[str]] = None, cutoff: float = CAROL_CUTOFF):
        self.params = list(params or [])
        self.cutoff = cutoff
        self.display_mode = parse_display_mode(self.params)

    def identify(self) -> PluginMetadata:
        return PluginMetadata(name=PLUGIN_NAME, version=PLUGIN_VERSION, description=OUTPUT_DESCRIPTION)

    def supported_feature_kinds(self) -> Set[FeatureKind]:
        return {"Transcript"}

    def declared_outputs(self) -> Dict[str, str]:
        return {OUTPUT_FIELD: OUTPUT_DESCRIPTION}

    def extract_scores(self, context: TranscriptVariantAllele) -> Tuple[Optional[float], Optional[float]]:
        """(structural, conservation) inputs for the combiner."""
        structural = polyphen_structural_score(context.polyphen_prediction, context.polyphen_score)
        return structural, context.sift_score

    def evaluate(self, context: TranscriptVariantAllele) -> Optional[Tuple[Prediction, float]]:
        structural, conservation = self.extract_scores(context)
        return combine(structural, conservation, cutoff=self.cutoff)

    def run(self, context: TranscriptVariantAllele) -> Dict[str, str]:
        result = self.evaluate(context)
        if result is None:
            return {}

        prediction, score = result
        return {OUTPUT_FIELD: format_result(prediction, score, self.display_mode)}
