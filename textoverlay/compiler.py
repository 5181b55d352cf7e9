"""Compile text overlays into one ffmpeg ``-vf`` expression and render it."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Awaitable, Callable, Dict, List, Optional, Sequence

from .components.config.validate import validate_overlays
from .components.fonts import FontResolver
from .components.layout.multiline import layout_overlays
from .components.renderer import FFmpegRenderer
from .components.report import log_overlay_summary
from .components.styles import StyleContext, build_drawtext_filter
from .models import AtomicOverlay, ResolvedFont, TextOverlay, VideoDimensions
from .utils.ffmpeg_params import OutputParams
from .utils.ffmpeg_probe import probe_video_dimensions
from .utils.logger import logger, time_log

FILTER_SEPARATOR = ","

VideoProbe = Callable[[str], Awaitable[VideoDimensions]]


@dataclass
class CompiledFilter:
    expression: str
    overlays: List[AtomicOverlay]
    dimensions: VideoDimensions
    warnings: List[str] = field(default_factory=list)


class OverlayCompiler:
    """Validate, lay out and style overlays, then hand the result to ffmpeg.

    The font resolver, probe and renderer are supplied by the caller; the
    compiler keeps no state between calls.
    """

    def __init__(
        self,
        font_resolver: FontResolver,
        *,
        probe: VideoProbe = probe_video_dimensions,
        renderer: Optional[FFmpegRenderer] = None,
    ):
        self.font_resolver = font_resolver
        self.probe = probe
        self.renderer = renderer or FFmpegRenderer()

    def _attach_fonts(self, overlays: Sequence[AtomicOverlay]) -> List[AtomicOverlay]:
        resolved: Dict[str, ResolvedFont] = {}
        result = []
        for overlay in overlays:
            font = resolved.get(overlay.font_family)
            if font is None:
                font = resolved[overlay.font_family] = self.font_resolver.resolve(
                    overlay.font_family
                )
            result.append(replace(overlay, font_path=font.path, font_name=font.name))
        return result

    @time_log(logger)
    def compile(
        self, overlays: Sequence[TextOverlay], dimensions: VideoDimensions
    ) -> CompiledFilter:
        """Build the combined drawtext expression for ``overlays``.

        Raises a ``ValidationError`` subclass for the first invalid overlay;
        nothing is built in that case.
        """
        validate_overlays(overlays, self.font_resolver)
        atomic = self._attach_fonts(layout_overlays(overlays, dimensions))

        ctx = StyleContext(video_width=dimensions.width, video_height=dimensions.height)
        filters = [build_drawtext_filter(overlay, ctx) for overlay in atomic]

        logger.kv_info(
            "Compiled overlay filter.",
            kv_pairs={
                "Event": "Compile",
                "Overlays": len(overlays),
                "Drawtext": len(filters),
                "Warnings": len(ctx.warnings),
            },
        )
        return CompiledFilter(
            expression=FILTER_SEPARATOR.join(filters),
            overlays=atomic,
            dimensions=dimensions,
            warnings=list(ctx.warnings),
        )

    async def render(
        self,
        input_path: str,
        output_path: str,
        overlays: Sequence[TextOverlay],
        params: Optional[OutputParams] = None,
    ) -> CompiledFilter:
        """Probe ``input_path``, compile ``overlays`` and render to ``output_path``.

        Renderer failures propagate unchanged as ``RenderingEngineError``.
        """
        dimensions = await self.probe(input_path)
        compiled = self.compile(overlays, dimensions)
        log_overlay_summary(logger, compiled.overlays, dimensions)
        await self.renderer.render(input_path, compiled.expression, output_path, params)
        logger.kv_info(
            "Multi-text overlay completed successfully!",
            kv_pairs={"Event": "RenderSuccess", "Output": output_path},
        )
        return compiled
