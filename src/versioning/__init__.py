"""Semantic version parsing and latest-per-minor-line selection."""
