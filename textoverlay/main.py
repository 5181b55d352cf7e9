"""Command line entry point: burn timed text overlays into a video."""

import argparse
import asyncio
import sys
import time
import traceback
from pathlib import Path
from typing import List, Optional

from textoverlay import __version__
from textoverlay.compiler import OverlayCompiler
from textoverlay.components.config import default_config, load_config, parse_overlays
from textoverlay.components.effects import list_effects
from textoverlay.components.fonts import DEFAULT_FONTS_DIR, FontResolver
from textoverlay.exceptions import DependencyError, PipelineError, ValidationError
from textoverlay.utils.dependency_checks import ensure_ffmpeg_available
from textoverlay.utils.ffmpeg_params import OutputParams
from textoverlay.utils.ffmpeg_probe import probe_video_dimensions
from textoverlay.utils.logger import (
    KVLogger,
    get_logger,
    reconfigure_logging,
    shutdown_logging,
)


def default_output_path(input_path: str) -> str:
    """``clips/in.mp4`` -> ``clips/in_with_multi_text.mp4``."""
    path = Path(input_path)
    return str(path.with_name(f"{path.stem}_with_multi_text{path.suffix}"))


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="textoverlay",
        description="Render timed, styled and animated text overlays onto a video with FFmpeg.",
        epilog=(
            "font_size 1-20 (decimals allowed) is a percentage of the video height; "
            "values above 20 are fixed pixels. Use \\n or text_elements for multi-line text."
        ),
    )
    parser.add_argument("input", nargs="?", help="Path to the input video file.")
    parser.add_argument(
        "output",
        nargs="?",
        default=None,
        help="Path for the output video. Defaults to '<input>_with_multi_text.<ext>'.",
    )
    parser.add_argument(
        "-c",
        "--config",
        type=str,
        default=None,
        help="YAML or JSON file with 'text_overlays'. The built-in sample is used when omitted.",
    )
    parser.add_argument(
        "--fonts-dir",
        type=str,
        default=str(DEFAULT_FONTS_DIR),
        help="Directory containing the .ttf/.otf font files.",
    )
    parser.add_argument("--preset", type=str, default="medium", help="x264 encoder preset.")
    parser.add_argument("--crf", type=int, default=23, help="x264 constant rate factor.")
    parser.add_argument(
        "--bitrate",
        type=int,
        default=None,
        help="Target video bitrate in kbps. Replaces --crf when given.",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Print the compiled filter expression without running FFmpeg.",
    )
    parser.add_argument("--list-fonts", action="store_true", help="List known fonts and exit.")
    parser.add_argument("--list-effects", action="store_true", help="List animation effects and exit.")
    parser.add_argument("--log-json", action="store_true", help="Output logs as JSON.")
    parser.add_argument("--log-kv", action="store_true", help="Output logs as Key-Value pairs.")
    parser.add_argument("--log-dir", type=str, default=None, help="Also write logs to this directory.")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging.")
    parser.add_argument("-v", "--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def _list_fonts(resolver: FontResolver) -> None:
    print("Available fonts:")
    for font_id in resolver.available_ids():
        spec = resolver.get_spec(font_id)
        status = "found" if resolver.exists(font_id) else "missing"
        print(f"  {spec.name}:")
        print(f"    Key: {font_id}")
        print(f"    File: {spec.filename} ({status})")
        family = resolver.family_name(font_id)
        if family:
            print(f"    Family: {family}")
        print(f"    Recommended size: {spec.recommended_size}%")
        print(f"    Description: {spec.description}")

    files = resolver.available_files()
    print(f"Font files in {resolver.fonts_dir}: {', '.join(files) if files else 'none'}")


def _list_effects() -> None:
    print("Available effects:")
    for spec in list_effects():
        print(f"  {spec.name} ({spec.effect_type.value}):")
        print(f"    Default duration: {spec.default_duration}s")
        print(f"    Description: {spec.description}")


def _output_params(args: argparse.Namespace) -> OutputParams:
    if args.bitrate:
        return OutputParams(preset=args.preset, crf=None, bitrate_kbps=args.bitrate)
    return OutputParams(preset=args.preset, crf=args.crf)


async def run(args: argparse.Namespace, logger: KVLogger) -> int:
    resolver = FontResolver(args.fonts_dir)
    compiler = OverlayCompiler(resolver)

    config = load_config(args.config) if args.config else default_config()
    overlays = parse_overlays(config)

    if args.dry_run:
        dimensions = await probe_video_dimensions(args.input)
        compiled = compiler.compile(overlays, dimensions)
        print(compiled.expression)
        return 0

    await ensure_ffmpeg_available(logger)
    output = args.output or default_output_path(args.input)
    Path(output).parent.mkdir(parents=True, exist_ok=True)
    await compiler.render(args.input, output, overlays, _output_params(args))
    return 0


async def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    reconfigure_logging(
        log_json=args.log_json, log_kv=args.log_kv, debug_mode=args.debug, log_dir=args.log_dir
    )
    logger: KVLogger = get_logger()

    if args.list_fonts:
        _list_fonts(FontResolver(args.fonts_dir))
        return 0
    if args.list_effects:
        _list_effects()
        return 0
    if not args.input:
        parser.print_help()
        return 0
    if not Path(args.input).is_file():
        logger.kv_error(
            f'Input file "{args.input}" does not exist',
            kv_pairs={"Event": "InputMissing", "Input": args.input},
        )
        return 1

    start_time = time.time()
    try:
        return await run(args, logger)
    except ValidationError as e:
        logger.kv_error(
            str(e),
            kv_pairs={
                "Event": "ValidationError",
                "Message": e.message,
                "Overlay": e.overlay_index + 1 if e.overlay_index is not None else None,
                "Line": e.line_number,
                "Column": e.column_number,
            },
        )
        available = getattr(e, "available", None)
        if available:
            logger.error(f"Available fonts: {', '.join(available)}")
        return 1
    except (PipelineError, DependencyError) as e:
        logger.kv_error(str(e), kv_pairs={"Event": type(e).__name__})
        stderr = getattr(e, "stderr", "")
        if stderr:
            logger.error(f"ffmpeg stderr:\n{stderr}")
        return 1
    except Exception as e:
        logger.kv_error(
            f"An unexpected error occurred: {e}",
            kv_pairs={
                "Event": "UnexpectedError",
                "Message": str(e),
                "Traceback": traceback.format_exc(),
            },
        )
        return 1
    finally:
        elapsed_time = time.time() - start_time
        logger.kv_info(
            f"Total execution time: {elapsed_time:.2f} seconds.",
            kv_pairs={"Event": "TotalExecutionTime", "Duration": f"{elapsed_time:.2f}s"},
        )


def cli() -> None:
    try:
        code = asyncio.run(main())
    finally:
        shutdown_logging()
    sys.exit(code)


if __name__ == "__main__":
    cli()
