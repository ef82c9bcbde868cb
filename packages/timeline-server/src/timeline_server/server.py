# SPDX-License-Identifier: MIT
"""Flask server exposing keyframe timeline editing over HTTP."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import flask

from keyframe_timeline.errors import PreconditionViolation, TimelineError
from keyframe_timeline.scene.scene_graph import SceneGraph
from keyframe_timeline.scene.transforms import (
    IDENTITY_QUATERNION,
    RigidTransform,
    quaternion_normalize,
)
from keyframe_timeline.timeline import Timeline


def _transform_to_json(transform: RigidTransform) -> dict[str, list[float]]:
    return {
        "translation": list(transform.translation),
        "rotation": list(transform.rotation),
    }


def _json_object() -> dict[str, Any]:
    data = flask.request.get_json(force=True)
    if not isinstance(data, dict):
        raise ValueError(f"Expected a JSON object, got {type(data).__name__}")
    return data


def _transform_from_json(data: dict[str, Any]) -> RigidTransform:
    translation = data.get("translation", [0.0, 0.0, 0.0])
    rotation = data.get("rotation", list(IDENTITY_QUATERNION))
    if not isinstance(translation, list) or len(translation) != 3:
        raise ValueError(f"Expected 3 translation values, got {translation!r}")
    if not isinstance(rotation, list) or len(rotation) != 4:
        raise ValueError(f"Expected 4 rotation values, got {rotation!r}")
    return RigidTransform(
        translation=tuple(float(v) for v in translation),
        rotation=quaternion_normalize(tuple(float(v) for v in rotation)),
    )


def _error_body(message: str, code: int):
    return (
        {
            "error": True,
            "message": message,
            "code": code,
        },
        code,
    )


class TimelineApp(flask.Flask):
    """Flask application editing a keyframe timeline over an in-memory scene.

    Every mutating endpoint answers with the timeline state, so a client can
    follow the cursor without a second request.
    """

    def __init__(self, *, script: Path, nodes: list[str]):
        super().__init__("keyframe_timeline_server")

        self._script = Path(script)
        self.scene = SceneGraph(nodes)
        self.timeline = Timeline.load(self._script, scene=self.scene)
        self.timeline.show_current_frame()

        self.add_url_rule("/", view_func=self._root_endpoint)
        self.add_url_rule("/timeline", view_func=self._timeline_endpoint)
        self.add_url_rule("/scene", view_func=self._scene_endpoint)
        self.add_url_rule(
            "/scene/<path:node_path>",
            view_func=self._set_node_endpoint,
            methods=["PUT"],
        )
        self.add_url_rule("/frames", view_func=self._insert_endpoint, methods=["POST"])
        self.add_url_rule(
            "/frames/current",
            view_func=self._replace_endpoint,
            methods=["PUT"],
        )
        self.add_url_rule(
            "/frames/current",
            view_func=self._delete_endpoint,
            methods=["DELETE"],
        )
        self.add_url_rule(
            "/cursor/<action>", view_func=self._cursor_endpoint, methods=["POST"]
        )
        self.add_url_rule(
            "/interpolate", view_func=self._interpolate_endpoint, methods=["POST"]
        )
        self.add_url_rule("/save", view_func=self._save_endpoint, methods=["POST"])

        self.register_error_handler(TimelineError, self._handle_error)
        self.register_error_handler(ValueError, self._handle_error)
        self.register_error_handler(KeyError, self._handle_error)
        self.register_error_handler(500, self._handle_internal_error)

    def _root_endpoint(self) -> str:
        """Display a banner page at the server root."""
        return """\
        <!doctype html>
        <html><body><h1>Keyframe Timeline Server</h1></body></html>
        """

    def _state(self) -> dict[str, Any]:
        return {
            "count": self.timeline.count(),
            "defined": self.timeline.is_defined(),
            "index": self.timeline.current_index,
            "can_animate": self.timeline.can_animate(),
        }

    def _timeline_endpoint(self):
        return self._state()

    def _scene_endpoint(self):
        return {
            "nodes": {
                node.path: _transform_to_json(node.transform)
                for node in self.scene.iter_nodes()
            }
        }

    def _set_node_endpoint(self, node_path: str):
        """Edit one node of the live scene."""
        node = self.scene.get_node(node_path)
        node.transform = _transform_from_json(_json_object())
        return {"path": node.path, **_transform_to_json(node.transform)}

    def _insert_endpoint(self):
        self.timeline.insert_after_current()
        return self._state(), 201

    def _replace_endpoint(self):
        self.timeline.replace_current_frame()
        return self._state()

    def _delete_endpoint(self):
        self.timeline.delete_current_frame()
        return self._state()

    def _cursor_endpoint(self, action: str):
        """Move the cursor: ``advance``, ``regress`` or ``beginning``."""
        if action == "advance":
            self.timeline.advance_current_frame()
        elif action == "regress":
            self.timeline.regress_current_frame()
        elif action == "beginning":
            self.timeline.go_to_beginning()
        else:
            flask.abort(404)
        return self._state()

    def _interpolate_endpoint(self):
        data = _json_object()
        if "alpha" not in data:
            raise ValueError("Missing 'alpha'")
        alpha = data["alpha"]
        if isinstance(alpha, bool) or not isinstance(alpha, (int, float)):
            raise ValueError(f"'alpha' must be a number, got {alpha!r}")
        frame = self.timeline.interpolate(float(alpha))
        return {"frame": frame.serialize(), **self._state()}

    def _save_endpoint(self):
        self.timeline.save(self._script)
        print(f"Saved {self.timeline.count()} keyframes to {self._script}")
        return {"path": str(self._script), **self._state()}

    def _handle_error(self, e: Exception):
        """Report a rejected request as a JSON error body."""
        if isinstance(e, PreconditionViolation):
            code = 409
        elif isinstance(e, KeyError):
            code = 404
        else:
            code = 400
        return _error_body(str(e), code)

    def _handle_internal_error(self, e):
        original = getattr(e, "original_exception", None) or e
        return _error_body(f"Internal server error: {repr(original)}", 500)


def run_server(
    *,
    host: str = "127.0.0.1",
    port: int = 8000,
    script: Path,
    nodes: list[str],
) -> None:
    """Run the timeline server."""
    app = TimelineApp(script=script, nodes=nodes)
    app.run(host=host, port=port, threaded=False)
