"""Run ffmpeg/ffprobe as an awaited subprocess."""

from __future__ import annotations

import asyncio
import contextlib
import logging
import os
import subprocess
import time
from typing import List, Optional

from .logger import logger


def _env_timeout() -> Optional[float]:
    try:
        value = float(os.getenv("FFMPEG_RUN_TIMEOUT_SEC", "0") or 0)
    except ValueError:
        return None
    return value if value > 0 else None


async def _terminate(process: asyncio.subprocess.Process, grace: float) -> None:
    with contextlib.suppress(ProcessLookupError):
        process.terminate()
    try:
        await asyncio.wait_for(process.wait(), timeout=max(0.1, grace))
    except asyncio.TimeoutError:
        logger.error(f"Process did not terminate in {grace:.1f}s; killing PID={process.pid}...")
        with contextlib.suppress(ProcessLookupError):
            process.kill()
        await process.wait()


async def run_ffmpeg_async(
    args: List[str], *, timeout: Optional[float] = None, error_log_level: int | None = logging.ERROR
) -> subprocess.CompletedProcess:
    """
    Spawn ffmpeg or ffprobe and wait for it to exit.

    :param timeout: seconds before the process is terminated. Defaults to
        ``FFMPEG_RUN_TIMEOUT_SEC`` for ffmpeg invocations.
    :param error_log_level: level used to log a non-zero exit. ``None``
        disables that logging.
    :raises subprocess.CalledProcessError: on a non-zero exit, with the raw
        stderr attached.
    """
    exe = str(args[0]) if args else "ffmpeg"
    base = os.path.basename(exe)
    if timeout is None and base.startswith("ffmpeg"):
        timeout = _env_timeout()

    cmd_str = " ".join(map(str, args))
    if os.getenv("FFMPEG_LOG_CMD", "0") == "1":
        logger.info(f"Running command: {cmd_str}")
    else:
        logger.debug(f"Running command: {cmd_str}")

    t0 = time.monotonic()
    try:
        process = await asyncio.create_subprocess_exec(
            *args,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
        )
    except FileNotFoundError:
        logger.error(
            f"{base} command not found. Please ensure FFmpeg is installed and in your PATH."
        )
        raise
    logger.debug(f"Spawned PID={process.pid} for {base}")

    try:
        if timeout is not None and timeout > 0:
            stdout, stderr = await asyncio.wait_for(process.communicate(), timeout=timeout)
        else:
            stdout, stderr = await process.communicate()
    except asyncio.TimeoutError:
        try:
            grace = float(os.getenv("FFMPEG_KILL_GRACE_SEC", "5"))
        except ValueError:
            grace = 5.0
        logger.error(
            f"Command timed out after {timeout:.1f}s (PID={process.pid}). Sending terminate..."
        )
        await _terminate(process, grace)
        raise subprocess.TimeoutExpired(args, timeout)
    except asyncio.CancelledError:
        logger.warning(f"Task cancelled while running {base} (PID={process.pid}); terminating...")
        await _terminate(process, 3.0)
        raise

    stdout_str = stdout.decode(errors="ignore")
    stderr_str = stderr.decode(errors="ignore")

    rc = process.returncode if process.returncode is not None else 0
    logger.debug(f"Command finished rc={rc} in {time.monotonic() - t0:.2f}s (PID={process.pid})")

    if rc != 0:
        if error_log_level is not None:
            logger.log(error_log_level, f"FFmpeg command failed rc={rc}. Command: {cmd_str}")
            if stderr_str:
                logger.log(error_log_level, f"stderr:\n{stderr_str}")
        elif stderr_str:
            logger.debug(f"stderr:\n{stderr_str}")
        raise subprocess.CalledProcessError(rc, args, output=stdout_str, stderr=stderr_str)

    if stderr_str:
        logger.debug(f"FFmpeg stderr (on success):\n{stderr_str}")

    return subprocess.CompletedProcess(args, rc, stdout_str, stderr_str)
