"""Collection feature."""
