"""In-process backend: procedures registered as Python callables."""

from __future__ import annotations

import inspect
from typing import Any, Callable

from loguru import logger

from miru.bridge.errors import BridgeTransportError
from miru.utils.exceptions import classify_exception, sanitize_error_message

Procedure = Callable[..., Any]


class InProcessBackend:
    """Dispatch commands to registered callables in the same event loop.

    Procedures may be sync or async and return either bare values or tagged
    result mappings, exactly as a remote backend would.
    """

    def __init__(self, procedures: dict[str, Procedure] | None = None):
        self._procedures: dict[str, Procedure] = dict(procedures or {})

    def register(self, name: str, fn: Procedure) -> None:
        if name in self._procedures:
            raise ValueError(f"procedure already registered: {name}")
        self._procedures[name] = fn

    def procedure(self, name: str) -> Callable[[Procedure], Procedure]:
        """Decorator form of register()."""

        def decorator(fn: Procedure) -> Procedure:
            self.register(name, fn)
            return fn

        return decorator

    def names(self) -> list[str]:
        return sorted(self._procedures)

    async def invoke(self, command: str, args: list[Any]) -> Any:
        fn = self._procedures.get(command)
        if fn is None:
            raise BridgeTransportError(command, f"no backend procedure registered for {command}")
        try:
            outcome = fn(*args)
            return await outcome if inspect.isawaitable(outcome) else outcome
        except Exception as exc:
            code, category, _ = classify_exception(exc)
            message = sanitize_error_message(str(exc))
            logger.debug("Backend procedure {} raised [{}]: {}", command, code, message)
            raise BridgeTransportError(
                command, message or code, data={"error_code": code, "category": category.value}
            ) from exc
