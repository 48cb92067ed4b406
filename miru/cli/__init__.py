"""Command-line interface for miru."""
