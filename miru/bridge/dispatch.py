"""Typed command dispatch: the one path from UI code to the backend."""

from __future__ import annotations

from typing import Any

from pydantic import ValidationError

from miru.backend.contracts import BackendTransport

from .errors import BridgeError, BridgeTransportError, MalformedResponseError
from .invocation import CommandInvocation
from .result import Failure, MalformedResult, is_tagged, parse_tagged_result
from .schema import CommandSchema, CommandSignature


class CommandBridge:
    """Validate, forward, await, unwrap.

    Holds only its schema and transport; every call is independent, so
    concurrent calls (same command included) never share state.
    """

    def __init__(self, schema: CommandSchema, backend: BackendTransport, *, check_results: bool = True):
        self.schema = schema
        self.backend = backend
        self.check_results = check_results

    async def call(self, command: str, *args: Any, **kwargs: Any) -> Any:
        """Invoke command and return its success payload unchanged.

        Raises SchemaMismatchError before dispatch when the command or
        arguments do not match the registry, and BridgeError when the backend
        reports a failure or no valid result can be obtained.
        """
        signature = self.schema.resolve(command)
        invocation = CommandInvocation(command=command, args=tuple(signature.bind(args, kwargs)))
        try:
            raw = await self.backend.invoke(command, list(invocation.args))
        except BridgeError as exc:
            raise invocation.fail(exc)
        except Exception as exc:
            raise invocation.fail(BridgeTransportError(command, str(exc) or type(exc).__name__)) from exc
        try:
            payload = self._unwrap(signature, raw)
        except BridgeError as exc:
            raise invocation.fail(exc)
        return invocation.resolve(payload)

    def _unwrap(self, signature: CommandSignature, raw: Any) -> Any:
        if not is_tagged(raw):
            payload = raw
        else:
            try:
                result = parse_tagged_result(raw)
            except MalformedResult as exc:
                raise MalformedResponseError(signature.name, str(exc)) from exc
            if isinstance(result, Failure):
                raise BridgeError(signature.name, result.detail)
            payload = result.payload
        if self.check_results:
            try:
                signature.check_result(payload)
            except ValidationError as exc:
                raise MalformedResponseError(
                    signature.name, f"result does not match declared type: {exc.error_count()} error(s)"
                ) from exc
        return payload
