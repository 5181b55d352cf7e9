"""Encoding parameters for the overlay render."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional


@dataclass
class OutputParams:
    """Video re-encode settings; audio is copied unless ``audio_codec`` is set."""

    codec: str = "libx264"
    preset: str = "medium"
    crf: Optional[int] = 23
    bitrate_kbps: Optional[int] = None
    audio_codec: str = "copy"
    overwrite: bool = True

    def to_ffmpeg_opts(self) -> List[str]:
        opts: List[str] = ["-c:v", self.codec, "-preset", self.preset]
        if self.crf is not None:
            opts.extend(["-crf", str(self.crf)])
        elif self.bitrate_kbps is not None:
            opts.extend(["-b:v", f"{self.bitrate_kbps}k"])
        opts.extend(["-c:a", self.audio_codec])
        if self.overwrite:
            opts.append("-y")
        return opts


def build_render_args(
    input_path: str,
    filter_expression: str,
    output_path: str,
    params: Optional[OutputParams] = None,
    ffmpeg_path: str = "ffmpeg",
) -> List[str]:
    """Ordered ffmpeg argument list: input, filter, output params, output."""
    params = params or OutputParams()
    return [
        ffmpeg_path,
        "-i",
        str(input_path),
        "-vf",
        filter_expression,
        *params.to_ffmpeg_opts(),
        str(output_path),
    ]
