"""Batch import feature."""
