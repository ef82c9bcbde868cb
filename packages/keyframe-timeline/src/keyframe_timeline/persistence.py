# SPDX-License-Identifier: MIT
"""Plain-text keyframe files: one serialized frame per line."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable

from keyframe_timeline.errors import DecodeError
from keyframe_timeline.frame import Frame


def load_frames(path: Path, expected_size: int | None = None) -> list[Frame]:
    """Read keyframes from a file.

    A missing or unreadable file is not an error: a notice is printed and no
    frames are returned. Malformed lines raise.

    Args:
        path: Keyframe file
        expected_size: Number of transforms each frame must hold, if known

    Returns:
        Frames in file order

    Raises:
        DecodeError: If a line is not valid UTF-8 or not a serialized frame
    """
    path = Path(path)
    try:
        with open(path, "rb") as f:
            data = f.read()
    except OSError as e:
        print(
            f"No script file found. Ensure that there is a file named {path} "
            f"to load keyframes from. ({e.strerror})"
        )
        return []

    frames = []
    for number, raw in enumerate(data.splitlines(), start=1):
        try:
            line = raw.decode("utf-8")
        except UnicodeDecodeError as e:
            raise DecodeError(
                f"Invalid UTF-8 ({e.reason})",
                line=raw.decode("utf-8", errors="replace"),
                line_number=number,
            ) from e
        frames.append(
            Frame.deserialize(line, expected_size=expected_size, line_number=number)
        )
    return frames


def save_frames(path: Path, frames: Iterable[Frame]) -> None:
    """Write keyframes to a file, each line terminated by a newline."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    serialized = "".join(frame.serialize() + "\n" for frame in frames)
    with open(path, "w", encoding="utf-8") as f:
        f.write(serialized)
