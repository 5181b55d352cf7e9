"""Video dimension probing via ffprobe."""

from __future__ import annotations

import json
import re
import subprocess
from typing import Any, Dict, Optional

from ..exceptions import UnresolvableDimensionsError
from ..models import VideoDimensions
from .ffmpeg_runner import run_ffmpeg_async
from .logger import logger

_DIMENSIONS_PATTERN = re.compile(r"(\d{3,5})x(\d{3,5})")


def parse_dimensions(text: str) -> Optional[VideoDimensions]:
    """Find the first ``WIDTHxHEIGHT`` token in ffmpeg/ffprobe diagnostic text."""
    match = _DIMENSIONS_PATTERN.search(text or "")
    if not match:
        return None
    return VideoDimensions(width=int(match.group(1)), height=int(match.group(2)))


def _dimensions_from_streams(info: Dict[str, Any]) -> Optional[VideoDimensions]:
    for stream in info.get("streams", []):
        try:
            width = int(stream.get("width", 0))
            height = int(stream.get("height", 0))
        except (TypeError, ValueError):
            continue
        if width > 0 and height > 0:
            return VideoDimensions(width=width, height=height)
    return None


async def probe_video_dimensions(file_path: str) -> VideoDimensions:
    """Return the pixel size of the first video stream of ``file_path``."""
    cmd = [
        "ffprobe",
        "-v",
        "error",
        "-select_streams",
        "v:0",
        "-show_entries",
        "stream=width,height",
        "-of",
        "json",
        str(file_path),
    ]
    try:
        result = await run_ffmpeg_async(cmd)
    except subprocess.CalledProcessError as e:
        logger.error(f"Error running ffprobe for {file_path}: {e.stderr}")
        raise UnresolvableDimensionsError(
            f"Could not parse video dimensions for {file_path}: {(e.stderr or '').strip()}"
        ) from e

    dimensions: Optional[VideoDimensions] = None
    try:
        dimensions = _dimensions_from_streams(json.loads(result.stdout or "{}"))
    except json.JSONDecodeError as e:
        logger.warning(f"Error parsing ffprobe output for {file_path}: {e}")
    if dimensions is None:
        dimensions = parse_dimensions(f"{result.stdout}\n{result.stderr}")
    if dimensions is None:
        raise UnresolvableDimensionsError(
            f"Could not parse video dimensions from ffprobe output for {file_path}"
        )

    logger.kv_info(
        f"Video resolution: {dimensions.width}x{dimensions.height}",
        kv_pairs={"Event": "Probe", "Width": dimensions.width, "Height": dimensions.height},
    )
    return dimensions
