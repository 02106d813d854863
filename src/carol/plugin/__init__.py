"""Host pipeline integration for CAROL."""

from .base import AnnotationPlugin, FeatureKind, PluginMetadata, TranscriptVariantAllele
from .carol_plugin import CarolPlugin, polyphen_structural_score

__all__ = [
    "AnnotationPlugin",
    "CarolPlugin",
    "FeatureKind",
    "PluginMetadata",
    "TranscriptVariantAllele",
    "polyphen_structural_score",
]
