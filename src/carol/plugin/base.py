"""Host annotation plugin contract.

A host pipeline calls a plugin once per feature (e.g. a transcript allele).
Plugins describe themselves through identify(), supported_feature_kinds() and
declared_outputs(), and compute their value in evaluate().
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Dict, Literal, Optional, Set, Tuple

FeatureKind = Literal["Transcript", "RegulatoryFeature", "MotifFeature", "Intergenic"]


@dataclass(frozen=True)
class PluginMetadata:
    """Name and version a plugin registers with."""
    name: str
    version: str
    description: str = ""


@dataclass(frozen=True)
class TranscriptVariantAllele:
    """Per-transcript predictor calls for one variant allele."""
    polyphen_prediction: Optional[str] = None
    polyphen_score: Optional[float] = None
    sift_prediction: Optional[str] = None
    sift_score: Optional[float] = None


class AnnotationPlugin(ABC):
    """Base class for plugins invoked by the host annotation pipeline."""

    @abstractmethod
    def identify(self) -> PluginMetadata:
        ...

    @abstractmethod
    def supported_feature_kinds(self) -> Set[FeatureKind]:
        ...

    @abstractmethod
    def declared_outputs(self) -> Dict[str, str]:
        """Output field name -> header description."""

    @abstractmethod
    def evaluate(self, context: TranscriptVariantAllele) -> Optional[Tuple[str, float]]:
        ...

    @abstractmethod
    def run(self, context: TranscriptVariantAllele) -> Dict[str, str]:
        """Formatted output fields for one feature; empty when nothing applies."""
