import pytest

from miru.backend.contracts import BackendTransport
from miru.backend.local import InProcessBackend
from miru.bridge.errors import BridgeTransportError


@pytest.mark.asyncio
async def test_invokes_sync_and_async_procedures():
    backend = InProcessBackend({"sync": lambda a, b: a + b})

    @backend.procedure("async")
    async def _async(value):
        return {"status": "ok", "data": value}

    assert await backend.invoke("sync", [1, 2]) == 3
    assert await backend.invoke("async", ["x"]) == {"status": "ok", "data": "x"}
    assert backend.names() == ["async", "sync"]


def test_satisfies_transport_protocol():
    assert isinstance(InProcessBackend(), BackendTransport)


def test_register_rejects_duplicates():
    backend = InProcessBackend()
    backend.register("a", lambda: None)
    with pytest.raises(ValueError, match="already registered"):
        backend.register("a", lambda: None)


@pytest.mark.asyncio
async def test_unknown_procedure_is_transport_error():
    with pytest.raises(BridgeTransportError) as excinfo:
        await InProcessBackend().invoke("missing", [])
    assert excinfo.value.command == "missing"
    assert "no backend procedure" in excinfo.value.reason


@pytest.mark.asyncio
async def test_procedure_exception_is_wrapped_and_sanitized():
    def _boom():
        raise RuntimeError("db down token=supersecret")

    backend = InProcessBackend({"boom": _boom})
    with pytest.raises(BridgeTransportError) as excinfo:
        await backend.invoke("boom", [])
    assert "supersecret" not in excinfo.value.reason
    assert excinfo.value.detail["data"] == {"error_code": "INTERNAL_ERROR", "category": "fatal"}
    assert isinstance(excinfo.value.__cause__, RuntimeError)
