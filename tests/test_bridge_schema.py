from typing import Any

import pytest
from pydantic import BaseModel, ValidationError

from miru.bridge.errors import InvalidArgumentsError, UnknownCommandError
from miru.bridge.schema import CommandParam, CommandSchema, CommandSignature, type_label


class _Req(BaseModel):
    collection_id: str
    user_score: float | None = None


def test_registry_is_read_only_mapping():
    schema = CommandSchema([CommandSignature("a"), CommandSignature("b")])
    assert list(schema) == ["a", "b"]
    assert len(schema) == 2
    assert schema["a"].name == "a"
    with pytest.raises(TypeError):
        schema["c"] = CommandSignature("c")  # type: ignore[index]
    with pytest.raises(TypeError):
        schema._table["c"] = CommandSignature("c")  # type: ignore[index]


def test_registry_rejects_duplicate_names():
    with pytest.raises(ValueError, match="duplicate command: a"):
        CommandSchema([CommandSignature("a"), CommandSignature("a")])


def test_resolve_unknown_raises():
    schema = CommandSchema([CommandSignature("a")])
    with pytest.raises(UnknownCommandError, match="command not found: b"):
        schema.resolve("b")


def test_signature_rejects_duplicate_and_misordered_params():
    with pytest.raises(ValueError, match="duplicate parameter"):
        CommandSignature("x", params=(CommandParam("a", int), CommandParam("a", int)))
    with pytest.raises(ValueError, match="follows an optional one"):
        CommandSignature("x", params=(CommandParam("a", int, default=1), CommandParam("b", int)))


def test_bind_validates_models_and_dumps_json_ready_values():
    signature = CommandSignature("add", params=(CommandParam("request", _Req),))
    assert signature.bind(({"collection_id": "c1"},)) == [{"collection_id": "c1", "user_score": None}]
    assert signature.bind((_Req(collection_id="c2", user_score=7.5),)) == [
        {"collection_id": "c2", "user_score": 7.5}
    ]


def test_bind_collects_type_errors_per_param():
    signature = CommandSignature("x", params=(CommandParam("a", int), CommandParam("b", list[str])))
    with pytest.raises(InvalidArgumentsError) as excinfo:
        signature.bind(("nope", "also-nope"))
    assert [row["param"] for row in excinfo.value.errors] == ["a", "b"]
    assert excinfo.value.details["command"] == "x"
    assert excinfo.value.code == "INVALID_ARGUMENTS"


def test_bind_zero_arg_command():
    signature = CommandSignature("getAll")
    assert signature.bind(()) == []
    with pytest.raises(InvalidArgumentsError, match="at most 0"):
        signature.bind(({},))


def test_optional_param_may_be_omitted():
    signature = CommandSignature("x", params=(CommandParam("q", str), CommandParam("n", int | None, default=None)))
    assert signature.bind(("a",)) == ["a", None]
    assert signature.bind(("a",), {"n": 4}) == ["a", 4]


def test_check_result_uses_declared_type():
    signature = CommandSignature("x", returns=list[int])
    signature.check_result([1, 2])
    with pytest.raises(ValidationError):
        signature.check_result(["a"])
    CommandSignature("y", returns=Any).check_result(object())


def test_type_label():
    assert type_label(int) == "int"
    assert type_label(_Req) == "_Req"
    assert "None" in type_label(_Req | None)
