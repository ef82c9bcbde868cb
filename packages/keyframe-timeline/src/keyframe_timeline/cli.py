# SPDX-License-Identifier: MIT
"""Command-line interface for baking a keyframe file into dense frames."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from keyframe_timeline.persistence import save_frames
from keyframe_timeline.playback import MIN_KEYFRAMES, Playback, PlaybackParams
from keyframe_timeline.timeline import Timeline


def main(argv: list[str] | None = None) -> int:
    """Interpolate a keyframe file at a fixed frame rate."""
    parser = argparse.ArgumentParser(
        description="Bake keyframes into interpolated frames at a fixed frame rate"
    )
    parser.add_argument(
        "input",
        type=Path,
        help="Keyframe file, one serialized frame per line",
    )
    parser.add_argument(
        "-o",
        "--output",
        type=Path,
        default=Path("baked.txt"),
        help="Output file for the interpolated frames (default: %(default)s)",
    )
    parser.add_argument(
        "--fps",
        type=float,
        default=60.0,
        help="Frames per second of the baked animation (default: %(default)s)",
    )
    parser.add_argument(
        "--ms-between-keyframes",
        type=int,
        default=2000,
        help="Milliseconds spent between consecutive keyframes "
        "(default: %(default)s)",
    )
    args = parser.parse_args(argv)

    if not args.input.exists():
        print(f"Error: Input file not found: {args.input}", file=sys.stderr)
        return 1

    try:
        params = PlaybackParams(
            frames_per_second=args.fps,
            ms_between_keyframes=args.ms_between_keyframes,
        )
        timeline = Timeline.load(args.input)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    sizes = sorted({len(frame) for frame in timeline.frames})
    if len(sizes) > 1:
        print(
            f"Error: Keyframes hold different numbers of transforms: {sizes}",
            file=sys.stderr,
        )
        return 1

    if timeline.count() < MIN_KEYFRAMES:
        print(
            f"Error: Need at least {MIN_KEYFRAMES} keyframes to bake, "
            f"got {timeline.count()}",
            file=sys.stderr,
        )
        return 1

    print(f"Baking {timeline.count()} keyframes at {params.frames_per_second} fps...")
    frames = list(Playback(timeline, params).frames())

    print(f"Saving {len(frames)} frames to {args.output}...")
    save_frames(args.output, frames)

    print("Done!")
    return 0


if __name__ == "__main__":
    sys.exit(main())
