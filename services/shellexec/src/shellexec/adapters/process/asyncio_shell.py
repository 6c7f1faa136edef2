from __future__ import annotations

import asyncio
import logging
import os
import signal
import sys

from shellexec.domain.options import ExecutionOptions
from shellexec.domain.outcome import ExecutionOutcome, FailureReason

logger = logging.getLogger(__name__)

_READ_CHUNK = 64 * 1024
_IS_WINDOWS = sys.platform == "win32"


class OutputLimitExceeded(Exception):
    pass


async def _drain(stream: asyncio.StreamReader | None, buf: bytearray, limit: int) -> None:
    if stream is None:
        return
    while True:
        chunk = await stream.read(_READ_CHUNK)
        if not chunk:
            return
        buf.extend(chunk)
        if len(buf) > limit:
            raise OutputLimitExceeded(f"output exceeded {limit} bytes")


async def _collect(
    proc: asyncio.subprocess.Process,
    stdout: bytearray,
    stderr: bytearray,
    limit: int,
) -> None:
    readers = [
        asyncio.ensure_future(_drain(proc.stdout, stdout, limit)),
        asyncio.ensure_future(_drain(proc.stderr, stderr, limit)),
    ]
    try:
        await asyncio.gather(*readers)
    finally:
        for reader in readers:
            reader.cancel()
    await proc.wait()


async def _kill(proc: asyncio.subprocess.Process) -> None:
    if proc.returncode is None:
        try:
            if _IS_WINDOWS:
                proc.kill()
            else:
                # The shell runs in its own session; take its children down too.
                os.killpg(proc.pid, signal.SIGKILL)
        except ProcessLookupError:
            pass
    await proc.wait()


class AsyncioShellSubprocess:
    """Runs a command line through the platform shell and buffers its output."""

    async def execute(
        self, command: str, options: ExecutionOptions
    ) -> ExecutionOutcome:
        if options.cancel is not None and options.cancel.cancelled:
            return ExecutionOutcome.failed(
                FailureReason.CANCELLED, f"Command cancelled before start: {command}"
            )
        logger.debug("Spawning: %s", command)
        try:
            proc = await asyncio.create_subprocess_shell(
                command,
                stdin=asyncio.subprocess.DEVNULL,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
                cwd=str(options.cwd) if options.cwd is not None else None,
                start_new_session=not _IS_WINDOWS,
            )
        except OSError as e:
            return ExecutionOutcome.failed(
                FailureReason.SPAWN, f"Command could not be started: {command}: {e}"
            )

        stdout = bytearray()
        stderr = bytearray()
        work = asyncio.ensure_future(
            _collect(proc, stdout, stderr, options.max_output_bytes)
        )
        waiters: set[asyncio.Future[None]] = {work}
        cancel_waiter: asyncio.Future[None] | None = None
        if options.cancel is not None:
            cancel_waiter = asyncio.ensure_future(options.cancel.wait())
            waiters.add(cancel_waiter)
        timeout = options.timeout_ms / 1000 if options.timeout_ms > 0 else None

        try:
            done, _ = await asyncio.wait(
                waiters, timeout=timeout, return_when=asyncio.FIRST_COMPLETED
            )
        except asyncio.CancelledError:
            work.cancel()
            await _kill(proc)
            raise
        finally:
            if cancel_waiter is not None:
                cancel_waiter.cancel()

        if work not in done:
            work.cancel()
            await _kill(proc)
            if cancel_waiter is not None and cancel_waiter in done:
                reason, message = FailureReason.CANCELLED, f"Command cancelled: {command}"
            else:
                reason = FailureReason.TIMEOUT
                message = f"Command timed out after {options.timeout_ms}ms: {command}"
            logger.debug("%s", message)
            return ExecutionOutcome.failed(
                reason, message, stdout=bytes(stdout), stderr=bytes(stderr)
            )

        error = work.exception()
        if isinstance(error, OutputLimitExceeded):
            await _kill(proc)
            return ExecutionOutcome.failed(
                FailureReason.OUTPUT_LIMIT,
                f"Command failed: {command}: {error}",
                stdout=bytes(stdout),
                stderr=bytes(stderr),
            )
        if error is not None:
            await _kill(proc)
            raise error

        returncode = proc.returncode
        logger.debug("Exited with %s: %s", returncode, command)
        if returncode is not None and returncode < 0:
            return ExecutionOutcome.failed(
                FailureReason.SIGNAL,
                f"Command terminated by signal {-returncode}: {command}",
                stdout=bytes(stdout),
                stderr=bytes(stderr),
                signal=-returncode,
            )
        if returncode:
            return ExecutionOutcome.failed(
                FailureReason.EXIT,
                f"Command failed with exit code {returncode}: {command}",
                stdout=bytes(stdout),
                stderr=bytes(stderr),
                exit_code=returncode,
            )
        return ExecutionOutcome.success(bytes(stdout), bytes(stderr))
