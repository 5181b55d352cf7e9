"""Hand a compiled filter to ffmpeg."""

from __future__ import annotations

import subprocess
from typing import Optional

from ..exceptions import RenderingEngineError
from ..utils.ffmpeg_params import OutputParams, build_render_args
from ..utils.ffmpeg_runner import run_ffmpeg_async
from ..utils.logger import logger


class FFmpegRenderer:
    """Runs one ffmpeg process per render; no retries."""

    def __init__(self, ffmpeg_path: str = "ffmpeg", timeout: Optional[float] = None):
        self.ffmpeg_path = ffmpeg_path
        self.timeout = timeout

    async def render(
        self,
        input_path: str,
        filter_expression: str,
        output_path: str,
        params: Optional[OutputParams] = None,
    ) -> None:
        args = build_render_args(
            input_path, filter_expression, output_path, params, ffmpeg_path=self.ffmpeg_path
        )
        logger.kv_info(
            "Rendering overlays with ffmpeg.",
            kv_pairs={"Event": "RenderStart", "Input": input_path, "Output": output_path},
        )
        try:
            await run_ffmpeg_async(args, timeout=self.timeout)
        except subprocess.CalledProcessError as e:
            raise RenderingEngineError(
                f"FFmpeg exited with code {e.returncode}",
                returncode=e.returncode,
                stderr=e.stderr or "",
            ) from e
