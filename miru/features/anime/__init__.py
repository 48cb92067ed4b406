"""Anime feature."""
