"""Constants for reporting slice."""

# Template Files
TEMPLATES_DIR_NAME = "templates"
SUMMARY_TEMPLATE = "carol_summary.md.j2"

# Output Files
SUMMARY_OUTPUT = "carol_summary.md"

# Score display precision (decimal places)
SCORE_DECIMALS = 3
