"""Formatting and summary reports for CAROL results."""
