"""
Pytest configuration and shared fixtures.
"""

import pytest
import numpy as np
import pandas as pd
from pathlib import Path
from typing import Dict, Any


@pytest.fixture
def scoring_config() -> Dict[str, Any]:
    """Default scoring config as load_scoring_config() would return it."""
    return {
        "cutoff": 0.98,
        "display_mode": "full",
        "columns": {
            "polyphen_prediction": "polyphen_prediction",
            "polyphen_score": "polyphen_score",
            "sift_score": "sift_score",
        },
    }


@pytest.fixture
def sample_variants_df() -> pd.DataFrame:
    """VEP-style transcript allele rows covering every input state."""
    return pd.DataFrame({
        "variant_id": ["1:94112975:T/A", "1:94113001:G/C", "1:94113120:C/T",
                       "1:94113200:A/G", "1:94113350:G/A"],
        "feature": ["ENST00000370225"] * 5,
        # combined / polyphen only / sift only / unknown call with no sift / nothing
        "polyphen_prediction": ["probably_damaging", "possibly_damaging", None, "unknown", None],
        "polyphen_score": [0.9, 0.95, np.nan, 0.8, np.nan],
        "sift_score": [0.1, np.nan, 0.01, np.nan, np.nan],
    })


@pytest.fixture
def sample_variants_tsv(tmp_path, sample_variants_df) -> Path:
    """Sample variants written as a tab-separated table."""
    path = tmp_path / "variants.tsv"
    sample_variants_df.to_csv(path, sep="\t", index=False)
    return path


@pytest.fixture
def write_config(tmp_path):
    """Write YAML text to a temporary config file and return its path."""
    def _write(text: str) -> Path:
        path = tmp_path / "carol.yaml"
        path.write_text(text)
        return path
    return _write
