"""Replay recorded hand-pose detector output and print one gesture per frame.

Each line of the recording is a JSON object such as
``{"joints": {"wrist": [0.5, 0.2, 0.9], ...}}``; ``{"joints": null}`` marks a
frame without a hand.

Example:
    uv run python examples/classify_recording.py --path runs/observations.jsonl
"""

from __future__ import annotations

import argparse
from collections.abc import Iterator
from pathlib import Path

from hand_pose_gestures import (
    ErrorPolicy,
    FrameProcessor,
    FrameProcessorConfig,
    FrameStatus,
    parse_line,
)


def _parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Classify recorded hand-pose frames.")
    parser.add_argument("--path", required=True, help="JSONL recording of detector output.")
    parser.add_argument(
        "--error-policy",
        choices=[value.value for value in ErrorPolicy],
        default=ErrorPolicy.TOLERANT.value,
        help="Behavior when a recorded frame cannot be parsed.",
    )
    parser.add_argument(
        "--max-frames",
        type=int,
        default=0,
        help="Stop after N frames. Use 0 to replay the whole recording.",
    )
    return parser.parse_args()


def _iter_lines(path: Path) -> Iterator[str]:
    with path.open("r", encoding="utf-8") as handle:
        for line in handle:
            if line.strip():
                yield line


def _main() -> int:
    args = _parse_args()
    max_frames = args.max_frames if args.max_frames > 0 else None

    processor = FrameProcessor(
        FrameProcessorConfig(error_policy=ErrorPolicy(args.error_policy)),
        detector=parse_line,
    )

    emitted = 0
    for result in processor.iter_results(_iter_lines(Path(args.path))):
        emitted += 1
        if result.status is FrameStatus.HAND:
            print(
                "frame"
                f" index={emitted - 1}"
                f" label={result.label.value}"
                f" angle={result.bend_angle:.1f}"
            )
        else:
            print(f"frame index={emitted - 1} status={result.status.value}")
        if max_frames is not None and emitted >= max_frames:
            break

    stats = processor.get_stats()
    print(
        "done"
        f" frames_processed={stats.frames_processed}"
        f" thumbs_up={stats.thumbs_up}"
        f" thumbs_down={stats.thumbs_down}"
        f" no_hand_frames={stats.no_hand_frames}"
        f" detection_failures={stats.detection_failures}"
    )
    return 0


if __name__ == "__main__":
    raise SystemExit(_main())
