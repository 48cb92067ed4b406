"""Command schema registry: command name -> declared signature."""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

from pydantic import TypeAdapter, ValidationError

from .errors import InvalidArgumentsError, UnknownCommandError

REQUIRED: Any = object()


def type_label(annotation: Any) -> str:
    """Human-readable name for a declared type."""
    if isinstance(annotation, type):
        return annotation.__name__
    return str(annotation).replace("typing.", "")


@dataclass(frozen=True)
class CommandParam:
    """One positional parameter of a command."""

    name: str
    annotation: Any
    default: Any = REQUIRED
    adapter: TypeAdapter[Any] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "adapter", TypeAdapter(self.annotation))

    @property
    def required(self) -> bool:
        return self.default is REQUIRED


@dataclass(frozen=True)
class CommandSignature:
    """Declared shape of a backend command: ordered params, success and error types."""

    name: str
    params: tuple[CommandParam, ...] = ()
    returns: Any = Any
    error: Any = str
    description: str = ""
    result_adapter: TypeAdapter[Any] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "params", tuple(self.params))
        object.__setattr__(self, "result_adapter", TypeAdapter(self.returns))
        seen: set[str] = set()
        optional_started = False
        for param in self.params:
            if param.name in seen:
                raise ValueError(f"duplicate parameter {param.name!r} in command {self.name!r}")
            seen.add(param.name)
            if param.required and optional_started:
                raise ValueError(f"required parameter {param.name!r} follows an optional one in {self.name!r}")
            optional_started = optional_started or not param.required

    def bind(self, args: tuple[Any, ...], kwargs: Mapping[str, Any] | None = None) -> list[Any]:
        """Validate call arguments and return them in declared order, JSON-ready.

        Raises InvalidArgumentsError on arity, name, or type mismatch.
        """
        kwargs = kwargs or {}
        if len(args) > len(self.params):
            raise InvalidArgumentsError(
                self.name, f"expected at most {len(self.params)} argument(s), got {len(args)}"
            )
        supplied: dict[str, Any] = {param.name: value for param, value in zip(self.params, args)}
        names = {param.name for param in self.params}
        for key, value in kwargs.items():
            if key not in names:
                raise InvalidArgumentsError(self.name, f"unexpected argument {key!r}")
            if key in supplied:
                raise InvalidArgumentsError(self.name, f"multiple values for argument {key!r}")
            supplied[key] = value

        bound: list[Any] = []
        errors: list[dict[str, Any]] = []
        for param in self.params:
            if param.name in supplied:
                value = supplied[param.name]
            elif param.required:
                raise InvalidArgumentsError(self.name, f"missing required argument {param.name!r}")
            else:
                value = param.default
            try:
                validated = param.adapter.validate_python(value)
            except ValidationError as exc:
                errors.append({"param": param.name, "errors": exc.errors(include_url=False, include_context=False, include_input=False)})
                continue
            bound.append(param.adapter.dump_python(validated, mode="json", by_alias=True))
        if errors:
            failed = ", ".join(str(row["param"]) for row in errors)
            raise InvalidArgumentsError(self.name, f"type mismatch for {failed}", errors)
        return bound

    def check_result(self, payload: Any) -> None:
        """Raise pydantic ValidationError when payload does not match the success type."""
        self.result_adapter.validate_python(payload)


class CommandSchema(Mapping[str, CommandSignature]):
    """Immutable registry of command signatures keyed by command name."""

    def __init__(self, signatures: Iterable[CommandSignature]):
        table: dict[str, CommandSignature] = {}
        for signature in signatures:
            if signature.name in table:
                raise ValueError(f"duplicate command: {signature.name}")
            table[signature.name] = signature
        self._table = MappingProxyType(table)

    def __getitem__(self, name: str) -> CommandSignature:
        return self._table[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._table)

    def __len__(self) -> int:
        return len(self._table)

    def resolve(self, name: str) -> CommandSignature:
        """Return the signature for name or raise UnknownCommandError."""
        signature = self._table.get(name)
        if signature is None:
            raise UnknownCommandError(name)
        return signature
