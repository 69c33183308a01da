"""
Entry point and facade for the image tools.

This module exposes a stable API and the command-line front end (also installed
as the `imagetools` console script).

Packages:
- imagetools.files: Input files, ordered selection, session buffer for results
- imagetools.bgremove: Background removal (rembg)
- imagetools.palette: Colour palette extraction (KMeans) and colour formats
- imagetools.compress: Compression and resizing (Pillow, OpenCV)
- imagetools.image: Shared pixel helpers (16-bit to 8-bit)
- imagetools.batch / imagetools.state: Concurrent batches and their state
"""

from __future__ import annotations

from typing import List

from imagetools.config import Settings, load_settings
from imagetools.files import BufferManager, FileSelection, InputFile, InvalidImageError, ObjectRef
from imagetools.state import BatchInProgressError, Failed, Idle, Running, Succeeded
from imagetools.batch import run_all_or_nothing, run_best_effort
from imagetools.bgremove import BackgroundRemovalSession, removed_background_filename
from imagetools.palette import (
    Clipboard,
    KMeansQuantizer,
    MemoryClipboard,
    PaletteEntry,
    PaletteSession,
    rgb_to_hex,
    rgb_to_hsl,
    TkClipboard,
)
from imagetools.compress.options import DEFAULT_MAX_SIZE_KB
from imagetools.compress import (
    RESOLUTION_PRESETS,
    CompressionOptions,
    CompressionParams,
    CompressionSession,
    compress_image,
)

__all__ = [
    # config
    "Settings",
    "load_settings",
    # files
    "BufferManager",
    "FileSelection",
    "InputFile",
    "InvalidImageError",
    "ObjectRef",
    # state / batches
    "BatchInProgressError",
    "Failed",
    "Idle",
    "Running",
    "Succeeded",
    "run_all_or_nothing",
    "run_best_effort",
    # tools
    "BackgroundRemovalSession",
    "removed_background_filename",
    "KMeansQuantizer",
    "PaletteEntry",
    "PaletteSession",
    "rgb_to_hex",
    "rgb_to_hsl",
    "RESOLUTION_PRESETS",
    "CompressionOptions",
    "CompressionParams",
    "CompressionSession",
    "compress_image",
]


def _load_files(paths: List[str]) -> List[InputFile]:
    return [InputFile.from_path(p) for p in paths]


def _run_bg_remove(args, settings: Settings) -> int:
    from imagetools.bgremove.remover import RembgRemover

    session = BackgroundRemovalSession(
        remover=RembgRemover(args.model or settings.rembg_model),
        buffer=BufferManager(debug=settings.debug_buffer),
        max_workers=settings.max_workers,
    )
    try:
        session.selection.add(_load_files(args.files))
        session.process()
        if session.error:
            print(session.error)
            return 1
        for path in session.download_all(args.out or settings.output_dir):
            print(f"Saved: {path}")
        return 0
    finally:
        session.close()


def _system_clipboard() -> Clipboard:
    try:
        return TkClipboard()
    except RuntimeError as e:
        print(f"Warning: {e}; the copied value is only printed.")
        return MemoryClipboard()


def _run_palette(args, settings: Settings) -> int:
    count = settings.default_color_count if args.colors is None else args.colors
    session = PaletteSession(color_count=count)
    try:
        session.load(InputFile.from_path(args.file))
    except InvalidImageError as e:
        print(str(e))
        return 2
    for entry in session.palette:
        print(entry.describe())

    if args.copy:
        if not 0 <= args.index < len(session.palette):
            print(f"Colour index must be within 0..{len(session.palette) - 1}, got {args.index}")
            return 2
        session.clipboard = _system_clipboard()
        copiers = {"rgb": session.copy_rgb, "hex": session.copy_hex, "hsl": session.copy_hsl}
        print(f"Copied: {copiers[args.copy](args.index)}")
    return 0


def _run_compress(args, settings: Settings) -> int:
    params = CompressionParams(
        output_format=args.format or settings.default_format,
        quality=settings.default_quality if args.quality is None else args.quality,
        max_size_kb=DEFAULT_MAX_SIZE_KB if args.max_size_kb is None else args.max_size_kb,
    )
    if args.preset:
        params.apply_preset(args.preset)
    elif args.width:
        params.resize_enabled = True
        params.set_width(args.width)

    session = CompressionSession(
        params=params,
        buffer=BufferManager(debug=settings.debug_buffer),
        max_workers=settings.max_workers,
    )
    try:
        session.selection.add(_load_files(args.files))
        session.process()
        out_dir = args.out or settings.output_dir
        for i, result in enumerate(session.results):
            path = session.download(i, out_dir)
            print(f"{result.describe()} -> {path}")
        print(f"Images processed: {len(session.results)}/{len(session.selection)}")
        return 0
    finally:
        session.close()


def _cli() -> None:
    """CLI for the three image tools.

    bg-remove FILES...: remove backgrounds; the whole batch fails if any file fails
    --out / -o: Output directory (default: settings output_dir)
    --model: rembg model name (default: settings rembg_model)

    palette FILE: print the colour palette of one image
    --colors / -k: Number of colours 1..10 (default: settings default_color_count)
    --copy: Copy one colour as rgb|hex|hsl to the system clipboard
    --index: Palette position for --copy (default: 0)

    compress FILES...: re-encode and optionally resize; failing files are skipped
    --format: jpg|jpeg|png|webp (default: settings default_format)
    --quality / -q: Compression level 0..100 (default: settings default_quality)
    --max-size-kb: Target maximum file size in KB, 100..10240 (default: 102400)
    --preset: original|720|1080|1440|2160
    --width: Manual max width or height, 50..3840
    --out / -o: Output directory (default: settings output_dir)
    """
    import argparse

    parser = argparse.ArgumentParser(description="Background removal, palette extraction and compression for images.")
    parser.add_argument("--settings", type=str, help="Path to settings.json (default: config/settings.json)")
    sub = parser.add_subparsers(dest="command", required=True)

    bg = sub.add_parser("bg-remove", help="Remove the background of one or more images")
    bg.add_argument("files", nargs="+", help="Input images")
    bg.add_argument("--out", "-o", type=str, help="Output directory")
    bg.add_argument("--model", type=str, help="rembg model name")

    pal = sub.add_parser("palette", help="Extract a colour palette from an image")
    pal.add_argument("file", help="Input image")
    pal.add_argument("--colors", "-k", type=int, help="Number of colours (1..10)")
    pal.add_argument("--copy", type=str, choices=["rgb", "hex", "hsl"], help="Copy one colour to the clipboard in this format")
    pal.add_argument("--index", type=int, default=0, help="Palette position to copy (default: 0, the most common colour)")

    comp = sub.add_parser("compress", help="Compress and optionally resize images")
    comp.add_argument("files", nargs="+", help="Input images")
    comp.add_argument("--format", type=str, choices=["jpg", "jpeg", "png", "webp"], help="Output format")
    comp.add_argument("--quality", "-q", type=int, help="Compression level 0..100")
    comp.add_argument("--max-size-kb", type=int, help="Target maximum file size in KB (100..10240)")
    resize = comp.add_mutually_exclusive_group()
    resize.add_argument("--preset", type=str, choices=["original", "720", "1080", "1440", "2160"], help="Resolution preset")
    resize.add_argument("--width", type=int, help="Manual max width or height")
    comp.add_argument("--out", "-o", type=str, help="Output directory")

    args = parser.parse_args()
    settings = load_settings(args.settings)

    runners = {"bg-remove": _run_bg_remove, "palette": _run_palette, "compress": _run_compress}
    try:
        code = runners[args.command](args, settings)
    except (ValueError, FileNotFoundError) as e:
        print(str(e))
        raise SystemExit(2)
    if code:
        raise SystemExit(code)


if __name__ == "__main__":
    _cli()
