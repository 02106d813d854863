"""
Tests for table annotation and the carol-annotate CLI.
"""

import numpy as np
import pandas as pd
import pytest
from carol import annotate
from carol.annotate import VariantAnnotator, main, read_table, structural_scores


class TestStructuralScores:
    """Column-wise PolyPhen masking."""

    def test_masks_unknown_and_missing_calls(self):
        predictions = pd.Series(["probably_damaging", "unknown", None, ""])
        scores = pd.Series([0.9, 0.8, 0.7, 0.6])
        result = structural_scores(predictions, scores)
        assert result.iloc[0] == 0.9
        assert result.iloc[1:].isna().all()


class TestVariantAnnotator:
    """Load -> score -> save."""

    def test_score_variants(self, sample_variants_df, scoring_config, tmp_path):
        annotator = VariantAnnotator(tmp_path / "in.tsv", tmp_path / "out.tsv", config=scoring_config)
        scored = annotator.score_variants(sample_variants_df)

        assert list(scored["CAROL"]) == [
            "Neutral (0.965)",
            "Neutral (0.950)",
            "Deleterious (0.990)",
            None,
            None,
        ]
        assert scored["carol_score"].iloc[0] == pytest.approx(0.965, abs=5e-4)
        assert np.isnan(scored["carol_score"].iloc[3])
        # input frame is untouched
        assert "carol_score" not in sample_variants_df.columns

    def test_run_writes_tsv(self, sample_variants_tsv, scoring_config, tmp_path):
        output = tmp_path / "out" / "variants_carol.tsv"
        summary = tmp_path / "out" / "summary.md"
        annotator = VariantAnnotator(sample_variants_tsv, output, config=scoring_config)

        assert annotator.run(summary_path=summary) is True

        result = read_table(output)
        assert len(result) == 5
        assert result["carol_prediction"].tolist()[:3] == ["Neutral", "Neutral", "Deleterious"]
        assert result["carol_prediction"].iloc[3:].isna().all()
        assert "| Deleterious | 1 |" in summary.read_text(encoding="utf-8")

    def test_run_writes_csv_with_display_mode(self, sample_variants_tsv, scoring_config, tmp_path):
        scoring_config["display_mode"] = "prediction"
        output = tmp_path / "variants_carol.csv"
        assert VariantAnnotator(sample_variants_tsv, output, config=scoring_config).run() is True
        result = pd.read_csv(output)
        assert result["CAROL"].tolist()[:3] == ["Neutral", "Neutral", "Deleterious"]

    def test_custom_column_names(self, sample_variants_df, scoring_config, tmp_path):
        renamed = sample_variants_df.rename(columns={"sift_score": "SIFT_score"})
        path = tmp_path / "renamed.tsv"
        renamed.to_csv(path, sep="\t", index=False)
        scoring_config["columns"]["sift_score"] = "SIFT_score"

        output = tmp_path / "out.tsv"
        assert VariantAnnotator(path, output, config=scoring_config).run() is True
        assert read_table(output)["CAROL"].iloc[2] == "Deleterious (0.990)"

    def test_missing_input(self, scoring_config, tmp_path):
        annotator = VariantAnnotator(tmp_path / "missing.tsv", tmp_path / "out.tsv", config=scoring_config)
        assert annotator.run() is False

    def test_missing_columns(self, sample_variants_df, scoring_config, tmp_path):
        path = tmp_path / "bad.tsv"
        sample_variants_df.drop(columns=["sift_score"]).to_csv(path, sep="\t", index=False)
        assert VariantAnnotator(path, tmp_path / "out.tsv", config=scoring_config).run() is False

    def test_out_of_range_scores(self, sample_variants_df, scoring_config, tmp_path):
        sample_variants_df.loc[0, "sift_score"] = 1.7
        path = tmp_path / "bad.tsv"
        sample_variants_df.to_csv(path, sep="\t", index=False)
        assert VariantAnnotator(path, tmp_path / "out.tsv", config=scoring_config).run() is False

    def test_unsupported_format(self, scoring_config, tmp_path):
        path = tmp_path / "variants.xlsx"
        path.write_text("")
        assert VariantAnnotator(path, tmp_path / "out.tsv", config=scoring_config).run() is False


class TestMain:
    """CLI entry point."""

    def test_success(self, sample_variants_tsv, tmp_path):
        output = tmp_path / "out.tsv"
        assert main(["--input", str(sample_variants_tsv), "--output", str(output),
                     "--display", "score"]) == 0
        assert read_table(output)["CAROL"].iloc[2] == pytest.approx(0.99)

    def test_cutoff_override(self, sample_variants_tsv, tmp_path):
        output = tmp_path / "out.tsv"
        assert main(["--input", str(sample_variants_tsv), "--output", str(output),
                     "--cutoff", "0.9"]) == 0
        assert read_table(output)["carol_prediction"].tolist()[:3] == ["Deleterious"] * 3

    def test_invalid_cutoff(self, sample_variants_tsv, tmp_path):
        assert main(["--input", str(sample_variants_tsv), "--output", str(tmp_path / "o.tsv"),
                     "--cutoff", "2"]) == 1

    def test_config_file(self, sample_variants_tsv, write_config, tmp_path):
        config = write_config("display_mode: prediction\n")
        output = tmp_path / "out.tsv"
        assert main(["--input", str(sample_variants_tsv), "--output", str(output),
                     "--config", str(config)]) == 0
        assert read_table(output)["CAROL"].iloc[0] == "Neutral"

    def test_missing_config(self, sample_variants_tsv, tmp_path):
        assert main(["--input", str(sample_variants_tsv), "--output", str(tmp_path / "o.tsv"),
                     "--config", str(tmp_path / "missing.yaml")]) == 1

    def test_missing_input(self, tmp_path):
        assert main(["--input", str(tmp_path / "missing.tsv"), "--output", str(tmp_path / "o.tsv")]) == 1

    def test_invalid_log_level(self, sample_variants_tsv, tmp_path):
        """Unknown logging level is a configuration error, not a crash."""
        assert main(["--input", str(sample_variants_tsv), "--output", str(tmp_path / "o.tsv"),
                     "--log-level", "verbose"]) == 1

    def test_log_level_is_case_insensitive(self, sample_variants_tsv, tmp_path):
        assert main(["--input", str(sample_variants_tsv), "--output", str(tmp_path / "o.tsv"),
                     "--log-level", "warning"]) == 0

    def test_unwritable_summary(self, sample_variants_tsv, tmp_path):
        """Summary under a path whose parent is a file fails cleanly after the table is saved."""
        blocker = tmp_path / "blocker"
        blocker.write_text("")
        output = tmp_path / "out.tsv"
        assert main(["--input", str(sample_variants_tsv), "--output", str(output),
                     "--summary", str(blocker / "summary.md")]) == 1
        assert output.exists()

    def test_bare_summary_flag_uses_reports_dir(self, sample_variants_tsv, tmp_path, monkeypatch):
        default_summary = tmp_path / "reports" / "carol_summary.md"
        monkeypatch.setattr(annotate, "DEFAULT_SUMMARY_PATH", default_summary)
        assert main(["--input", str(sample_variants_tsv), "--output", str(tmp_path / "o.tsv"),
                     "--summary"]) == 0
        assert "# CAROL Scoring Summary" in default_summary.read_text(encoding="utf-8")


class TestRunSummaryFailure:
    """VariantAnnotator.run() reports summary write errors as failure."""

    def test_run_returns_false(self, sample_variants_tsv, scoring_config, tmp_path):
        blocker = tmp_path / "blocker"
        blocker.write_text("")
        annotator = VariantAnnotator(sample_variants_tsv, tmp_path / "out.tsv", config=scoring_config)
        assert annotator.run(summary_path=blocker / "nested" / "summary.md") is False
