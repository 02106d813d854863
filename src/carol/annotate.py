#!/usr/bin/env python3
"""
Annotate a table of variants with CAROL scores.

Reads a VEP-style annotation table (TSV, CSV or parquet) carrying PolyPhen and
SIFT calls per transcript allele, computes the CAROL score for every row and
writes the table back out with three new columns:

  carol_score       full-precision combined score (NaN when unscored)
  carol_prediction  Neutral / Deleterious (empty when unscored)
  CAROL             formatted field, e.g. "Deleterious (0.990)"

Usage:
  carol-annotate --input variants.tsv --output variants_carol.tsv
  carol-annotate --input variants.parquet --output out.parquet --display score
  carol-annotate --input variants.tsv --output out.tsv --summary reports/summary.md
  carol-annotate --input variants.tsv --output out.tsv --summary   # data_processed/reports/carol_summary.md
"""

import argparse
import logging
from pathlib import Path
from typing import Any, Dict, Optional

import numpy as np
import pandas as pd

from .config import (
    DISPLAY_MODES,
    OUTPUT_COLUMN,
    REPORTS_DIR,
    load_scoring_config,
    logger,
    validate_dataframe,
    validate_file_exists,
)
from .plugin.carol_plugin import PLUGIN_VERSION, UNKNOWN_PREDICTION
from .reporting.constants import SUMMARY_OUTPUT
from .reporting.format import format_result
from .reporting.render_summary import render_summary_report, summarize_predictions
from .scoring.batch import combine_frame

SUPPORTED_SUFFIXES = (".tsv", ".txt", ".csv", ".parquet")
DEFAULT_SUMMARY_PATH = REPORTS_DIR / SUMMARY_OUTPUT


def read_table(path: Path) -> pd.DataFrame:
    """Read a variant table, choosing the parser from the file suffix."""
    suffix = path.suffix.lower()
    if suffix == ".parquet":
        return pd.read_parquet(path)
    if suffix == ".csv":
        return pd.read_csv(path)
    if suffix in (".tsv", ".txt"):
        return pd.read_csv(path, sep="\t")
    raise ValueError(f"Unsupported table format '{suffix}' for {path} (expected one of {SUPPORTED_SUFFIXES})")


def write_table(df: pd.DataFrame, path: Path) -> None:
    suffix = path.suffix.lower()
    path.parent.mkdir(parents=True, exist_ok=True)
    if suffix == ".parquet":
        df.to_parquet(path, index=False)
    elif suffix == ".csv":
        df.to_csv(path, index=False)
    elif suffix in (".tsv", ".txt"):
        df.to_csv(path, sep="\t", index=False)
    else:
        raise ValueError(f"Unsupported table format '{suffix}' for {path} (expected one of {SUPPORTED_SUFFIXES})")


def structural_scores(predictions: pd.Series, scores: pd.Series) -> pd.Series:
    """PolyPhen scores with rows masked out where PolyPhen made no call or called 'unknown'."""
    no_call = predictions.isna() | predictions.astype(str).isin(["", UNKNOWN_PREDICTION])
    return pd.to_numeric(scores, errors="raise").astype(float).mask(no_call, np.nan)


class VariantAnnotator:
    """Add CAROL scores to a variant annotation table."""

    def __init__(self, input_path: Path, output_path: Path,
                 config: Optional[Dict[str, Any]] = None):
        self.input_path = Path(input_path)
        self.output_path = Path(output_path)
        self.config = config or load_scoring_config()
        self.columns = self.config["columns"]
        self.cutoff = self.config["cutoff"]
        self.display_mode = self.config["display_mode"]

    def load_variants(self) -> pd.DataFrame:
        """Load and validate the input table."""
        validate_file_exists(self.input_path, "variant annotation table")
        logger.info(f"Loading variants from {self.input_path}")
        df = read_table(self.input_path)
        validate_dataframe(df, self.input_path.name, list(self.columns.values()))
        return df

    def score_variants(self, variants_df: pd.DataFrame) -> pd.DataFrame:
        """Return a copy of variants_df with CAROL columns appended."""
        df = variants_df.copy()

        structural = structural_scores(
            df[self.columns["polyphen_prediction"]],
            df[self.columns["polyphen_score"]],
        )
        scored = combine_frame(structural, df[self.columns["sift_score"]], cutoff=self.cutoff)

        df["carol_score"] = scored["carol_score"]
        df["carol_prediction"] = scored["carol_prediction"]
        df[OUTPUT_COLUMN] = [
            format_result(pred, score, self.display_mode) if pred is not None else None
            for pred, score in zip(scored["carol_prediction"], scored["carol_score"])
        ]
        return df

    def run(self, summary_path: Optional[Path] = None) -> bool:
        """Run load -> score -> save, optionally writing a Markdown summary."""
        logger.info("Starting CAROL annotation...")

        try:
            variants_df = self.load_variants()
            scored_df = self.score_variants(variants_df)
        except (FileNotFoundError, ValueError) as e:
            logger.error(f"CAROL annotation failed: {e}")
            return False

        try:
            write_table(scored_df, self.output_path)
        except (OSError, ValueError) as e:
            logger.error(f"Failed to save annotated variants: {e}")
            return False
        logger.info(f"Saved {len(scored_df)} annotated variants to {self.output_path}")

        if summary_path is not None:
            summary = summarize_predictions(
                scored_df, cutoff=self.cutoff,
                source=self.input_path.name, version=PLUGIN_VERSION,
            )
            try:
                render_summary_report(summary, summary_path)
            except (OSError, ValueError) as e:
                logger.error(f"Failed to write CAROL summary: {e}")
                return False

        logger.info("CAROL annotation completed successfully!")
        return True


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Annotate variants with the CAROL combined PolyPhen/SIFT score")
    parser.add_argument("--input", type=Path, required=True,
                        help="Variant table (.tsv, .csv or .parquet) with PolyPhen and SIFT columns")
    parser.add_argument("--output", type=Path, required=True,
                        help="Output table; format follows the suffix")
    parser.add_argument("--config", type=Path, default=None,
                        help="YAML scoring config (default: config/carol.yaml or $CAROL_CONFIG)")
    parser.add_argument("--cutoff", type=float, default=None,
                        help="Override the Deleterious cutoff (default 0.98)")
    parser.add_argument("--display", choices=DISPLAY_MODES, default=None,
                        help="Format of the CAROL column")
    parser.add_argument("--summary", type=Path, nargs="?", default=None, const=DEFAULT_SUMMARY_PATH,
                        help="Write a Markdown summary report to this path "
                             "(bare flag: data_processed/reports/carol_summary.md)")
    parser.add_argument("--log-level", default=None,
                        help="Logging level (default: $CAROL_LOG_LEVEL or INFO)")
    return parser


def main(argv: Optional[list] = None) -> int:
    """CLI entry point."""
    args = build_parser().parse_args(argv)

    if args.log_level:
        try:
            logging.getLogger().setLevel(args.log_level.upper())
        except ValueError as e:
            logger.error(f"Configuration error: {e}")
            return 1

    try:
        config = load_scoring_config(args.config)
    except (FileNotFoundError, ValueError) as e:
        logger.error(f"Configuration error: {e}")
        return 1

    if args.cutoff is not None:
        if not (0 < args.cutoff <= 1):
            logger.error(f"Configuration error: cutoff must be in (0, 1], got {args.cutoff}")
            return 1
        config["cutoff"] = args.cutoff
    if args.display is not None:
        config["display_mode"] = args.display

    annotator = VariantAnnotator(args.input, args.output, config=config)
    success = annotator.run(summary_path=args.summary)
    return 0 if success else 1


if __name__ == "__main__":
    raise SystemExit(main())
