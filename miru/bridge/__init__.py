"""Typed command-dispatch bridge between UI code and the backend."""

from .dispatch import CommandBridge
from .errors import (
    BridgeError,
    BridgeTransportError,
    InvalidArgumentsError,
    MalformedResponseError,
    SchemaMismatchError,
    UnknownCommandError,
)
from .invocation import CommandInvocation, InvocationState
from .result import Failure, Success, TaggedResult, is_tagged, parse_tagged_result
from .schema import CommandParam, CommandSchema, CommandSignature

__all__ = [
    "BridgeError",
    "BridgeTransportError",
    "CommandBridge",
    "CommandInvocation",
    "CommandParam",
    "CommandSchema",
    "CommandSignature",
    "Failure",
    "InvalidArgumentsError",
    "InvocationState",
    "MalformedResponseError",
    "SchemaMismatchError",
    "Success",
    "TaggedResult",
    "UnknownCommandError",
    "is_tagged",
    "parse_tagged_result",
]
