# SPDX-License-Identifier: MIT
"""Keyframe Timeline Server - Edit keyframe timelines over HTTP."""

from timeline_server.server import TimelineApp, run_server

__version__ = "0.1.0"
__all__ = ["TimelineApp", "run_server"]
