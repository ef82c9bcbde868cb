# SPDX-License-Identifier: MIT
"""Command-line interface for the Keyframe Timeline Server."""

from __future__ import annotations

import argparse
from pathlib import Path

from timeline_server.server import run_server


def main() -> None:
    """Run the Keyframe Timeline Server from the command line."""
    parser = argparse.ArgumentParser(
        description="Edit and preview a keyframe timeline over HTTP"
    )
    parser.add_argument(
        "--host",
        type=str,
        default="127.0.0.1",
        help="URL to host on (default: %(default)s)",
    )
    parser.add_argument(
        "--port",
        type=int,
        default=8000,
        help="Port to host on (default: %(default)s)",
    )
    parser.add_argument(
        "--script",
        required=True,
        type=Path,
        metavar="FILE",
        help="Keyframe file to load from and save to (.txt)",
    )
    parser.add_argument(
        "--nodes",
        required=True,
        type=str,
        help="Comma separated scene node paths, e.g. /robot/base,/robot/arm",
    )
    args = parser.parse_args()

    if args.script.suffix != ".txt":
        raise ValueError(
            f"Expected script to have '.txt' suffix, got '{args.script.suffix}'"
        )
    nodes = [path.strip() for path in args.nodes.split(",") if path.strip()]
    if not nodes:
        raise ValueError("Expected at least one scene node path")

    run_server(
        host=args.host,
        port=args.port,
        script=args.script,
        nodes=nodes,
    )


if __name__ == "__main__":
    main()
