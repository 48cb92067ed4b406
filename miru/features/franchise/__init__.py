"""Franchise discovery call sites."""
