"""Backend command declarations."""

from .registry import COMMAND_DEFINITIONS, get_command_schema

__all__ = ["COMMAND_DEFINITIONS", "get_command_schema"]
