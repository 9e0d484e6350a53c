"""Command-line preview tool for gender diversity verdicts."""
