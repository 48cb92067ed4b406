"""RPC client for a backend process speaking line-delimited JSON over stdio."""

from __future__ import annotations

import asyncio
import contextlib
import os
import uuid
from typing import Any

from loguru import logger

from miru.bridge.errors import BridgeTransportError

from .protocol import RpcRequest, RpcResponse
from .serialization import connection_lost, decode_response_frame, encode_request_frame, to_transport_error

_STREAM_LIMIT = 16 * 1024 * 1024


class StdioBackendClient:
    """Spawn the backend and multiplex concurrent requests over its stdio.

    Requests are correlated by id, so responses may arrive in any order.
    A response whose waiter is gone (cancelled caller) is dropped.
    """

    def __init__(
        self,
        command: list[str],
        *,
        cwd: str | None = None,
        env: dict[str, str] | None = None,
        shutdown_timeout_s: float = 5.0,
    ):
        self.command = list(command)
        self.cwd = cwd
        self.env = dict(env or {})
        self.shutdown_timeout_s = shutdown_timeout_s
        self._proc: asyncio.subprocess.Process | None = None
        self._reader_task: asyncio.Task[None] | None = None
        self._stderr_task: asyncio.Task[None] | None = None
        self._pending: dict[str, asyncio.Future[RpcResponse]] = {}
        self._start_lock = asyncio.Lock()
        self._write_lock = asyncio.Lock()

    @property
    def running(self) -> bool:
        return (
            self._proc is not None
            and self._proc.returncode is None
            and self._reader_task is not None
            and not self._reader_task.done()
        )

    @property
    def pid(self) -> int | None:
        return self._proc.pid if self._proc else None

    async def start(self) -> None:
        async with self._start_lock:
            if self.running:
                return
            if self._proc is not None:
                # Exited, or alive with a dead reader (stream error): never leave it behind.
                await self._shutdown(graceful=False)
            if not self.command:
                raise BridgeTransportError("<spawn>", "backend command is not configured")
            env = os.environ.copy()
            env.update(self.env)
            try:
                proc = await asyncio.create_subprocess_exec(
                    *self.command,
                    stdin=asyncio.subprocess.PIPE,
                    stdout=asyncio.subprocess.PIPE,
                    stderr=asyncio.subprocess.PIPE,
                    cwd=self.cwd,
                    env=env,
                    limit=_STREAM_LIMIT,
                )
            except OSError as exc:
                raise BridgeTransportError(
                    "<spawn>", f"failed to start backend: {exc}", data={"command": self.command}
                ) from exc
            self._proc = proc
            self._reader_task = asyncio.create_task(self._reader_loop(proc))
            self._stderr_task = asyncio.create_task(self._stderr_loop(proc))
            logger.info("Backend started pid={} command={}", proc.pid, " ".join(self.command))

    async def close(self) -> None:
        async with self._start_lock:
            await self._shutdown(graceful=self.running)

    async def _shutdown(self, *, graceful: bool) -> None:
        proc = self._proc
        if proc is None:
            return
        self._proc = None
        if graceful and proc.stdin is not None and not proc.stdin.is_closing():
            proc.stdin.close()
            try:
                await asyncio.wait_for(proc.wait(), timeout=self.shutdown_timeout_s)
            except asyncio.TimeoutError:
                logger.warning("Backend pid={} did not exit in {}s, killing", proc.pid, self.shutdown_timeout_s)
        if proc.returncode is None:
            if not graceful:
                logger.warning("Backend pid={} lost its output stream, killing", proc.pid)
            with contextlib.suppress(ProcessLookupError):
                proc.kill()
        if not graceful and proc.stdout is not None:
            # Nothing reads stdout any more; a paused pipe never reaches EOF.
            while await proc.stdout.read(_STREAM_LIMIT):
                pass
        await proc.wait()
        tasks = [task for task in (self._reader_task, self._stderr_task) if task is not None]
        await asyncio.gather(*tasks, return_exceptions=True)
        self._reader_task = None
        self._stderr_task = None
        logger.info("Backend stopped pid={} returncode={}", proc.pid, proc.returncode)

    async def __aenter__(self) -> "StdioBackendClient":
        await self.start()
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.close()

    async def invoke(self, command: str, args: list[Any]) -> Any:
        try:
            await self.start()
        except BridgeTransportError as exc:
            raise BridgeTransportError(command, exc.reason, data=exc.detail.get("data")) from exc
        proc = self._proc
        if proc is None or proc.stdin is None:
            raise BridgeTransportError(command, "backend process is not running")
        req_id = f"req_{uuid.uuid4().hex[:12]}"
        waiter: asyncio.Future[RpcResponse] = asyncio.get_running_loop().create_future()
        self._pending[req_id] = waiter
        try:
            frame = encode_request_frame(RpcRequest(id=req_id, method=command, params=args))
            async with self._write_lock:
                proc.stdin.write(frame)
                await proc.stdin.drain()
            response = await waiter
        except (TypeError, ValueError) as exc:
            raise BridgeTransportError(command, f"request could not be encoded: {exc}") from exc
        except (BrokenPipeError, ConnectionResetError) as exc:
            raise BridgeTransportError(command, "backend connection lost") from exc
        finally:
            self._pending.pop(req_id, None)
        if not response.ok:
            raise to_transport_error(command, response)
        return response.result

    async def _stderr_loop(self, proc: asyncio.subprocess.Process) -> None:
        if proc.stderr is None:
            return
        while True:
            raw = await proc.stderr.readline()
            if not raw:
                return
            text = raw.decode("utf-8", errors="replace").strip()
            if text:
                logger.debug("[backend] {}", text)

    async def _reader_loop(self, proc: asyncio.subprocess.Process) -> None:
        reason = "backend process exited"
        try:
            if proc.stdout is None:
                return
            while True:
                raw = await proc.stdout.readline()
                if not raw:
                    break
                try:
                    response = decode_response_frame(raw)
                except ValueError as exc:
                    logger.warning("Backend sent an invalid frame ({}): {!r}", exc, raw[:200])
                    continue
                if response is None:
                    continue
                waiter = self._pending.get(response.id)
                if waiter is None or waiter.done():
                    logger.debug("Dropping backend response for unknown request id={}", response.id)
                    continue
                waiter.set_result(response)
        except (ValueError, asyncio.LimitOverrunError) as exc:
            reason = f"backend stream error: {exc}"
            logger.warning("Backend pid={} stream failed: {}", proc.pid, exc)
        finally:
            self._fail_pending(reason)

    def _fail_pending(self, reason: str) -> None:
        for req_id, waiter in list(self._pending.items()):
            if not waiter.done():
                waiter.set_result(connection_lost(req_id, reason))
