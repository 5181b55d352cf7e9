"""Environment checks for the ffmpeg toolchain."""

from __future__ import annotations

import logging
import re
import subprocess
from typing import Optional, Tuple

from ..exceptions import DependencyError
from .ffmpeg_runner import run_ffmpeg_async
from .logger import KVLogger

_VERSION_PATTERN = re.compile(r"version\s+n?(\d+(?:\.\d+)*)")


def parse_version(output: str) -> Optional[str]:
    """Extract ``7.0.1`` from ``ffmpeg version 7.0.1 Copyright ...``."""
    match = _VERSION_PATTERN.search(output or "")
    return match.group(1) if match else None


async def get_tool_version(executable: str) -> Optional[str]:
    """Version reported by ``<executable> -version``, or None when unavailable."""
    try:
        result = await run_ffmpeg_async([executable, "-version"], error_log_level=logging.DEBUG)
    except (FileNotFoundError, subprocess.CalledProcessError):
        return None
    return parse_version(result.stdout)


async def ensure_ffmpeg_available(
    logger: KVLogger,
    *,
    ffmpeg_path: str = "ffmpeg",
    ffprobe_path: str = "ffprobe",
) -> Tuple[str, str]:
    """Check that ffmpeg and ffprobe run and report a version."""
    versions = []
    for tool in (ffmpeg_path, ffprobe_path):
        version = await get_tool_version(tool)
        if not version:
            logger.kv_error(
                f"{tool} is not installed or not found in PATH. "
                "Please install FFmpeg from https://ffmpeg.org/download.html",
                kv_pairs={"Event": "DependencyCheck", "Tool": tool, "Status": "NotDetected"},
            )
            raise DependencyError(f"{tool} is missing or its version could not be determined.")
        versions.append(version)

    logger.kv_debug(
        "FFmpeg toolchain detected.",
        kv_pairs={
            "Event": "DependencyCheck",
            "FFmpegVersion": versions[0],
            "FFprobeVersion": versions[1],
        },
    )
    return versions[0], versions[1]
