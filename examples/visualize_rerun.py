"""Replay recorded hand-pose detector output as an overlay in rerun.

Example:
    uv run --with rerun-sdk python examples/visualize_rerun.py \\
        --path runs/observations.jsonl --view-size 1080,1920
"""

from __future__ import annotations

import argparse
from collections.abc import Iterator
from pathlib import Path

from hand_pose_gestures import (
    ErrorPolicy,
    FrameProcessor,
    FrameProcessorConfig,
    RerunVisualizer,
    RerunVisualizerConfig,
    parse_line,
)


def _parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Visualize hand-pose overlays in rerun.")
    parser.add_argument("--path", required=True, help="JSONL recording of detector output.")
    parser.add_argument(
        "--view-size",
        default="1080,1920",
        help="View WIDTH,HEIGHT that normalized joints are scaled into.",
    )
    parser.add_argument(
        "--error-policy",
        choices=[value.value for value in ErrorPolicy],
        default=ErrorPolicy.TOLERANT.value,
        help="Behavior when a recorded frame cannot be parsed.",
    )
    parser.add_argument(
        "--application-id",
        default="hand-pose-gestures",
        help="Rerun application id.",
    )
    parser.add_argument(
        "--no-spawn",
        action="store_true",
        help="Do not auto-spawn rerun viewer.",
    )
    parser.add_argument(
        "--background-color",
        default="18,22,30",
        help=(
            "Rerun 2D background RGB as comma-separated values "
            "(e.g. 18,22,30). Use 'none' to disable."
        ),
    )
    return parser.parse_args()


def _main() -> int:
    args = _parse_args()

    processor = FrameProcessor(
        FrameProcessorConfig(
            error_policy=ErrorPolicy(args.error_policy),
            view_size=_parse_view_size(args.view_size),
        ),
        detector=parse_line,
    )
    visualizer = RerunVisualizer(
        RerunVisualizerConfig(
            application_id=args.application_id,
            spawn=not args.no_spawn,
            background_color=_parse_rgb_or_none(args.background_color),
        )
    )

    processor.run(_iter_lines(Path(args.path)), visualizer.log_result)
    return 0


def _iter_lines(path: Path) -> Iterator[str]:
    with path.open("r", encoding="utf-8") as handle:
        for line in handle:
            if line.strip():
                yield line


def _parse_view_size(value: str) -> tuple[float, float]:
    chunks = [chunk.strip() for chunk in value.split(",")]
    if len(chunks) != 2:
        raise ValueError("--view-size expects WIDTH,HEIGHT.")
    width, height = (float(chunk) for chunk in chunks)
    return width, height


def _parse_rgb_or_none(value: str) -> tuple[int, int, int] | None:
    if value.lower() == "none":
        return None

    chunks = [chunk.strip() for chunk in value.split(",")]
    if len(chunks) != 3:
        msg = "--background-color expects 3 comma-separated integers or 'none'."
        raise ValueError(msg)

    red, green, blue = (int(chunk) for chunk in chunks)
    if any(channel < 0 or channel > 255 for channel in (red, green, blue)):
        raise ValueError("--background-color values must be in range [0, 255].")
    return red, green, blue


if __name__ == "__main__":
    raise SystemExit(_main())
