"""
Shared configuration for CAROL scoring.
Centralizes paths, column names, logging and config validation.
"""

from pathlib import Path
import pandas as pd
import logging
from typing import Optional, Dict, Any
import os

import yaml

from .scoring.constants import CAROL_CUTOFF

# Initialize logging once when module is imported
LOGGER_NAME = "carol"
LOG_LEVEL = os.getenv("CAROL_LOG_LEVEL", "INFO").upper()
_root_logger = logging.getLogger()
if not _root_logger.handlers:
    logging.basicConfig(
        level=LOG_LEVEL,
        format='%(asctime)s - %(levelname)s - %(message)s',
    )
logger = logging.getLogger(LOGGER_NAME)


def get_project_root() -> Path:
    """Get the repository root directory."""
    return Path(__file__).resolve().parents[2]


PROJECT_ROOT = get_project_root()
CONFIG_DIR = PROJECT_ROOT / "config"
DATA_PROCESSED_DIR = PROJECT_ROOT / "data_processed"
REPORTS_DIR = DATA_PROCESSED_DIR / "reports"

DEFAULT_CONFIG_PATH = Path(os.getenv("CAROL_CONFIG", CONFIG_DIR / "carol.yaml"))

# Plugin output column and display modes
OUTPUT_COLUMN = "CAROL"
DISPLAY_MODES = ("full", "prediction", "score")

# Input column mapping (VEP-style annotation tables)
DEFAULT_COLUMNS = {
    "polyphen_prediction": "polyphen_prediction",
    "polyphen_score": "polyphen_score",
    "sift_score": "sift_score",
}

DEFAULT_SCORING_CONFIG: Dict[str, Any] = {
    "cutoff": CAROL_CUTOFF,
    "display_mode": "full",
    "columns": dict(DEFAULT_COLUMNS),
}


def validate_file_exists(path: Path, context: str = "") -> None:
    """Validate that a file exists, raise informative error if not."""
    if not path.exists():
        context_msg = f" ({context})" if context else ""
        raise FileNotFoundError(
            f"Required file missing: {path}{context_msg}\n"
            f"Please ensure upstream annotation has completed."
        )


def validate_dataframe(df: pd.DataFrame, name: str, required_columns: Optional[list] = None) -> None:
    """Validate dataframe is not empty and has required columns."""
    if df.empty:
        raise ValueError(f"DataFrame '{name}' is empty")

    if required_columns:
        missing_cols = set(required_columns) - set(df.columns)
        if missing_cols:
            raise ValueError(f"DataFrame '{name}' missing required columns: {sorted(missing_cols)}")


def validate_scoring_config(config: Dict[str, Any]) -> None:
    """Fail fast on a cutoff or display mode the scorer cannot use."""
    cutoff = config.get("cutoff")
    if isinstance(cutoff, bool) or not isinstance(cutoff, (int, float)):
        raise ValueError(f"cutoff must be a number, got {cutoff!r}")
    if not (0 < cutoff <= 1):
        raise ValueError(f"cutoff must be in (0, 1], got {cutoff}")

    display_mode = config.get("display_mode")
    if display_mode not in DISPLAY_MODES:
        raise ValueError(f"display_mode must be one of {DISPLAY_MODES}, got {display_mode!r}")

    columns = config.get("columns")
    if not isinstance(columns, dict):
        raise ValueError(f"columns must be a mapping, got {type(columns)}")
    missing = [key for key in DEFAULT_COLUMNS if key not in columns]
    if missing:
        raise ValueError(f"columns mapping missing keys: {missing}")


def load_scoring_config(config_path: Optional[Path] = None) -> Dict[str, Any]:
    """
    Load scoring configuration from YAML, layered over the defaults.

    Args:
        config_path: Explicit YAML path. When None, DEFAULT_CONFIG_PATH is used
            if it exists, otherwise the built-in defaults.

    Returns:
        Dictionary with 'cutoff', 'display_mode' and 'columns'

    Raises:
        FileNotFoundError: If an explicit config_path does not exist
        ValueError: If the config file is invalid
    """
    config = {
        "cutoff": DEFAULT_SCORING_CONFIG["cutoff"],
        "display_mode": DEFAULT_SCORING_CONFIG["display_mode"],
        "columns": dict(DEFAULT_COLUMNS),
    }

    if config_path is None:
        if not DEFAULT_CONFIG_PATH.exists():
            logger.info("No scoring config found, using defaults")
            return config
        config_path = DEFAULT_CONFIG_PATH
    else:
        config_path = Path(config_path)
        validate_file_exists(config_path, "scoring config")

    try:
        with open(config_path, 'r') as f:
            loaded = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ValueError(
            f"Failed to parse YAML scoring config: {e}\n"
            f"Config file: {config_path}"
        ) from e

    if loaded is None:
        loaded = {}
    if not isinstance(loaded, dict):
        raise ValueError(
            f"Invalid scoring config format: expected dict, got {type(loaded)}\n"
            f"Config file: {config_path}"
        )

    for key in ("cutoff", "display_mode"):
        if key in loaded:
            config[key] = loaded[key]
    if "columns" in loaded:
        if not isinstance(loaded["columns"], dict):
            raise ValueError(f"columns must be a mapping in {config_path}")
        config["columns"].update(loaded["columns"])

    validate_scoring_config(config)
    logger.info(f"Loaded scoring config from {config_path}: cutoff={config['cutoff']}, display={config['display_mode']}")
    return config
