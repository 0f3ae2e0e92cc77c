#!/usr/bin/env python3
"""G-code toolpath preview tool.

Imports a G-code program, prints a summary of the normalized path and,
optionally, plots it with the aspect ratio restored.

Usage:
    # Summary only
    python scripts/preview_gcode.py part.nc

    # With config and plot
    python scripts/preview_gcode.py part.nc --config configs/preview.v1.yaml --plot outputs/part.png

    # Machine-readable logs
    python scripts/preview_gcode.py part.nc --log-level DEBUG --json-logs

Exit codes:
    0 - success
    1 - program has no XY motion (empty path) or could not be decoded
    2 - file or config not found / invalid
"""

import argparse
import sys
from pathlib import Path
from typing import List, Optional

import matplotlib

matplotlib.use("Agg")
import matplotlib.pyplot as plt  # noqa: E402

from gcode_preview.importer import GCodeImporter, ImportResult  # noqa: E402
from gcode_preview.motion.reader import GCodeParseError  # noqa: E402
from gcode_preview.toolpath.normalize import EmptyPathError  # noqa: E402
from gcode_preview.utils import logging_config, validators  # noqa: E402

logger = logging_config.get_logger(__name__)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="Preview a G-code toolpath",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__
    )
    parser.add_argument('gcode_file', type=str, help='Path to G-code program')
    parser.add_argument(
        '--config',
        type=str,
        default=None,
        help='Preview config YAML (preview.v1); built-in defaults if omitted'
    )
    parser.add_argument(
        '--plot',
        type=str,
        default=None,
        help='Write an aspect-corrected plot of the path to this image file'
    )
    parser.add_argument(
        '--log-level',
        type=str,
        default=None,
        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'],
        help='Override the config log level'
    )
    parser.add_argument('--json-logs', action='store_true', help='Emit JSON log lines')
    return parser.parse_args(argv)


def plot_result(result: ImportResult, output_path: Path) -> None:
    """Plot normalized vertices, stretching x back by the aspect ratio.

    ``original_aspect_ratio`` is ``scale_x / scale_y``; dividing x by it
    puts both axes in the y scale.
    """
    xs = [v.x / result.original_aspect_ratio for v in result.vertices]
    ys = [v.y for v in result.vertices]

    fig, ax = plt.subplots(figsize=(6, 6))
    ax.plot(xs, ys, linewidth=0.8)
    ax.set_aspect('equal')
    ax.set_title(f"{result.file_name} ({len(result.vertices)} vertices)")
    output_path.parent.mkdir(parents=True, exist_ok=True)
    fig.savefig(output_path, dpi=150)
    plt.close(fig)


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    args = parse_args(argv)

    try:
        config = (
            validators.load_preview_config(args.config)
            if args.config else validators.PreviewConfigV1()
        )
    except (FileNotFoundError, validators.ConfigError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 2

    log_cfg = config.logging
    logging_config.setup_logging(
        log_level=args.log_level or log_cfg.log_level,
        log_file=log_cfg.log_file,
        json=args.json_logs or log_cfg.json_format,
        color=log_cfg.color,
        quiet_libs=['matplotlib', 'PIL'],
        context={'app': 'preview'},
    )

    try:
        result = GCodeImporter.from_file(args.gcode_file, config).load()
    except FileNotFoundError as e:
        logger.error(str(e))
        return 2
    except (EmptyPathError, GCodeParseError) as e:
        logger.error(f"Cannot preview {args.gcode_file}: {e}")
        return 1

    b = result.bounds
    print(f"file:         {result.file_name}")
    print(f"comments:     {len(result.comments)}")
    print(f"events:       {result.event_count}")
    print(f"vertices:     {len(result.vertices)}")
    print(f"bounds (mm):  X[{b.min_x:.3f}, {b.max_x:.3f}] Y[{b.min_y:.3f}, {b.max_y:.3f}]")
    print(f"aspect ratio: {result.original_aspect_ratio:.6f}")

    if args.plot:
        plot_result(result, Path(args.plot))
        logger.info(f"Plot written to {args.plot}")

    return 0


if __name__ == '__main__':
    sys.exit(main())
