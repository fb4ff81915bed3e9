"""Subprocess execution: captured runs, pass-through runs, and hand-off."""

from __future__ import annotations

import asyncio
import logging
import os
import signal

from evm.errors import LaunchError

logger = logging.getLogger(__name__)

_OUTPUT_LIMIT = 2000

# Windows has os.execv but it starts a new process instead of replacing this one.
_CAN_EXEC = os.name == "posix"


async def run_command(
    cmd: list[str],
    env: dict[str, str] | None = None,
    timeout: float = 60.0,
) -> tuple[int, str, str]:
    """Run a subprocess with timeout, return (returncode, stdout, stderr).

    Uses asyncio.create_subprocess_exec -- never shell=True.
    Output is truncated to keep error messages readable.
    Uses start_new_session=True so child processes can be killed as a group.
    """
    logger.debug("Running %s", cmd)
    proc = await asyncio.create_subprocess_exec(
        *cmd,
        stdout=asyncio.subprocess.PIPE,
        stderr=asyncio.subprocess.PIPE,
        env=env,
        start_new_session=True,
    )
    try:
        stdout_bytes, stderr_bytes = await asyncio.wait_for(proc.communicate(), timeout=timeout)
    except TimeoutError:
        try:
            os.killpg(os.getpgid(proc.pid), signal.SIGKILL)
        except (ProcessLookupError, OSError):
            proc.kill()
        await proc.wait()
        return (-1, "", f"Command timed out after {timeout}s")

    return (
        proc.returncode or 0,
        stdout_bytes.decode(errors="replace")[:_OUTPUT_LIMIT],
        stderr_bytes.decode(errors="replace")[:_OUTPUT_LIMIT],
    )


async def run_passthrough(cmd: list[str]) -> int:
    """Run a subprocess attached to our stdin/stdout/stderr and return its exit status.

    The child stays in our session so terminal signals (Ctrl-C) reach it too.
    """
    logger.debug("Forwarding to %s", cmd)
    try:
        proc = await asyncio.create_subprocess_exec(*cmd)
    except OSError as exc:
        raise LaunchError(f"Cannot run {cmd[0]}: {exc.strerror or exc}") from exc
    return await proc.wait()


def hand_off(cmd: list[str]) -> int:
    """Replace the current process with *cmd*.

    On POSIX this never returns. Where exec does not replace the process
    image, the command is spawned and waited for instead and its exit
    status is returned for the caller to exit with.
    """
    if not _CAN_EXEC:
        return asyncio.run(run_passthrough(cmd))
    logger.debug("Exec %s", cmd)
    try:
        os.execv(cmd[0], cmd)
    except OSError as exc:
        raise LaunchError(f"Cannot start {cmd[0]}: {exc.strerror or exc}") from exc
