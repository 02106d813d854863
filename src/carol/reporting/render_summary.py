#!/usr/bin/env python3
"""
Render a Markdown summary of a CAROL-annotated variant table.

The summary counts predictions per label and reports the score distribution.
"""

from __future__ import annotations

from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Optional

import pandas as pd
from jinja2 import Environment, FileSystemLoader

from ..config import logger
from ..scoring.constants import CAROL_CUTOFF, DELETERIOUS, NEUTRAL
from .constants import SUMMARY_TEMPLATE, TEMPLATES_DIR_NAME

TEMPLATES_DIR = Path(__file__).resolve().parent / TEMPLATES_DIR_NAME

QUANTILE_LABELS = {0.0: "min", 0.25: "25%", 0.5: "median", 0.75: "75%", 1.0: "max"}


def summarize_predictions(
    scored: pd.DataFrame,
    cutoff: float = CAROL_CUTOFF,
    source: str = "",
    version: str = "",
) -> Dict[str, Any]:
    """
    Summarize CAROL predictions from a scored table.

    Args:
        scored: DataFrame with 'carol_score' and 'carol_prediction' columns
        cutoff: Cutoff the predictions were made with
        source: Input file name shown in the report
        version: Plugin version shown in the report

    Returns:
        Summary dict consumed by render_summary_report()
    """
    missing = {"carol_score", "carol_prediction"} - set(scored.columns)
    if missing:
        raise ValueError(f"Scored table missing columns: {sorted(missing)}")

    counts = scored["carol_prediction"].value_counts()
    scores = scored["carol_score"].dropna()

    quantiles: Dict[str, float] = {}
    if not scores.empty:
        for q, value in scores.quantile(list(QUANTILE_LABELS)).items():
            quantiles[QUANTILE_LABELS[q]] = float(value)

    return {
        "generated_at": datetime.now().isoformat(timespec="seconds"),
        "source": source,
        "version": version,
        "cutoff": float(cutoff),
        "total": int(len(scored)),
        "unscored": int(scored["carol_score"].isna().sum()),
        "counts": {label: int(counts.get(label, 0)) for label in (NEUTRAL, DELETERIOUS)},
        "quantiles": quantiles,
    }


def render_summary_report(summary: Dict[str, Any], output_path: Optional[Path] = None) -> str:
    """Render the summary through the Jinja template, optionally writing it to disk."""
    env = Environment(loader=FileSystemLoader(str(TEMPLATES_DIR)))
    template = env.get_template(SUMMARY_TEMPLATE)

    text = template.render(summary=summary)

    if output_path is not None:
        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(text, encoding="utf-8")
        logger.info("Wrote CAROL summary to %s", output_path)

    return text
