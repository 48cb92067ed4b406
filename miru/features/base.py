"""Shared plumbing for feature-level command call sites."""

from __future__ import annotations

from typing import Any

from loguru import logger

from miru.bridge.dispatch import CommandBridge
from miru.bridge.errors import BridgeError
from miru.utils.exceptions import sanitize_error_message


class FeatureApi:
    """Base for call sites: one method per business operation, fixed command names."""

    def __init__(self, bridge: CommandBridge):
        self.bridge = bridge

    async def _call(self, command: str, *args: Any) -> Any:
        try:
            return await self.bridge.call(command, *args)
        except BridgeError as exc:
            logger.warning("Command {} failed [{}]: {}", command, exc.code, sanitize_error_message(exc.message))
            raise
