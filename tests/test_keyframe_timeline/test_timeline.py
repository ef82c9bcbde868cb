# SPDX-License-Identifier: MIT
"""Tests for the keyframe timeline state machine."""

import pytest


def make_frame(x):
    """Single-node frame translated along x."""
    from keyframe_timeline.frame import Frame
    from keyframe_timeline.scene.transforms import RigidTransform

    return Frame(
        transforms=(
            RigidTransform(translation=(float(x), 0.0, 0.0), rotation=(0, 0, 0, 1)),
        )
    )


def make_timeline(xs, index=0):
    """Timeline over a one-node scene with the cursor at ``index``."""
    from keyframe_timeline.scene.scene_graph import SceneGraph
    from keyframe_timeline.timeline import Timeline

    timeline = Timeline([make_frame(x) for x in xs], scene=SceneGraph(["/body"]))
    for _ in range(index):
        timeline.advance()
    return timeline


def xs_of(timeline):
    return [frame.transforms[0].translation[0] for frame in timeline.frames]


def scene_x(timeline):
    return timeline.scene.get_node("/body").transform.translation[0]


class TestTimelineState:
    """Tests for state queries."""

    def test_empty_timeline(self):
        """Test a freshly constructed timeline is undefined."""
        from keyframe_timeline.timeline import Timeline

        timeline = Timeline()

        assert timeline.count() == 0
        assert len(timeline) == 0
        assert not timeline.is_defined()
        assert not timeline.can_animate()
        assert timeline.current_index is None
        assert timeline.current_frame is None

    def test_preloaded_timeline_starts_at_first_frame(self):
        """Test cursor starts on frame 0 of a loaded sequence."""
        timeline = make_timeline([1, 2, 3])

        assert timeline.is_defined()
        assert timeline.current_index == 0
        assert timeline.current_frame == make_frame(1)

    @pytest.mark.parametrize(
        "count, index, expected",
        [
            (3, 0, True),
            (3, 1, False),
            (3, 2, False),
            (2, 0, False),
            (1, 0, False),
            (5, 2, True),
            (5, 3, False),
        ],
    )
    def test_can_animate_boundary(self, count, index, expected):
        """Test can_animate needs two frames after the cursor."""
        timeline = make_timeline(range(count), index=index)

        assert timeline.can_animate() is expected


class TestTimelineNavigation:
    """Tests for cursor movement."""

    def test_advance_current_frame_renders(self):
        """Test advancing moves the cursor and shows the new frame."""
        timeline = make_timeline([1, 2, 3])

        timeline.advance_current_frame()

        assert timeline.current_index == 1
        assert scene_x(timeline) == 2.0

    def test_advance_at_last_frame_is_noop(self):
        """Test advancing on the last frame changes nothing."""
        timeline = make_timeline([1, 2, 3], index=2)

        timeline.advance_current_frame()

        assert timeline.current_index == 2
        assert xs_of(timeline) == [1.0, 2.0, 3.0]

    def test_regress_at_first_frame_is_noop(self):
        """Test regressing on the first frame changes nothing."""
        timeline = make_timeline([1, 2, 3])

        timeline.regress_current_frame()

        assert timeline.current_index == 0
        assert xs_of(timeline) == [1.0, 2.0, 3.0]

    def test_regress_current_frame_renders(self):
        """Test regressing moves the cursor back and shows the frame."""
        timeline = make_timeline([1, 2, 3], index=2)

        timeline.regress_current_frame()

        assert timeline.current_index == 1
        assert scene_x(timeline) == 2.0

    def test_navigation_on_empty_timeline_is_noop(self):
        """Test guarded navigation does nothing when undefined."""
        from keyframe_timeline.timeline import Timeline

        timeline = Timeline()
        timeline.advance_current_frame()
        timeline.regress_current_frame()
        timeline.show_current_frame()

        assert not timeline.is_defined()

    def test_raw_advance_past_end_raises(self):
        """Test the unguarded primitive rejects moving past the end."""
        from keyframe_timeline.errors import PreconditionViolation

        timeline = make_timeline([1, 2], index=1)

        with pytest.raises(PreconditionViolation):
            timeline.advance()
        assert timeline.current_index == 1

    def test_raw_regress_before_start_raises(self):
        """Test the unguarded primitive rejects moving before the start."""
        from keyframe_timeline.errors import PreconditionViolation

        timeline = make_timeline([1, 2])

        with pytest.raises(PreconditionViolation):
            timeline.regress()

    def test_go_to_beginning(self):
        """Test go_to_beginning resets the cursor and renders frame 0."""
        timeline = make_timeline([1, 2, 3], index=2)

        timeline.go_to_beginning()

        assert timeline.current_index == 0
        assert scene_x(timeline) == 1.0

    def test_go_to_beginning_on_empty_timeline(self):
        """Test go_to_beginning is safe when empty."""
        from keyframe_timeline.timeline import Timeline

        timeline = Timeline()
        timeline.go_to_beginning()

        assert not timeline.is_defined()


class TestTimelineMutation:
    """Tests for inserting, replacing and deleting frames."""

    def test_insert_into_empty(self):
        """Test inserting into an empty timeline creates the sole frame."""
        from keyframe_timeline.scene.scene_graph import SceneGraph
        from keyframe_timeline.timeline import Timeline

        timeline = Timeline(scene=SceneGraph(["/body"]))
        timeline.insert_after_current(make_frame(7))

        assert timeline.count() == 1
        assert timeline.is_defined()
        assert timeline.current_index == 0
        assert scene_x(timeline) == 7.0

    def test_insert_after_current(self):
        """Test inserting after B in [A, B, C] gives [A, B, X, C] at X."""
        timeline = make_timeline([1, 2, 3], index=1)

        timeline.insert_after_current(make_frame(9))

        assert xs_of(timeline) == [1.0, 2.0, 9.0, 3.0]
        assert timeline.current_index == 2
        assert scene_x(timeline) == 9.0

    def test_insert_captures_from_scene(self):
        """Test inserting without a frame captures the live scene."""
        from keyframe_timeline.scene.transforms import RigidTransform

        timeline = make_timeline([1])
        timeline.scene.set_transform(
            "/body", RigidTransform(translation=(4.0, 5.0, 6.0), rotation=(0, 0, 0, 1))
        )

        timeline.insert_after_current()

        assert timeline.count() == 2
        assert timeline.current_frame.transforms[0].translation == (4.0, 5.0, 6.0)

    def test_insert_without_frame_or_scene_raises(self):
        """Test capturing needs a scene."""
        from keyframe_timeline.errors import PreconditionViolation
        from keyframe_timeline.timeline import Timeline

        with pytest.raises(PreconditionViolation):
            Timeline().insert_after_current()

    def test_replace_current_frame(self):
        """Test replacing overwrites only the current frame."""
        timeline = make_timeline([1, 2, 3], index=1)

        timeline.replace_current_frame(make_frame(8))

        assert xs_of(timeline) == [1.0, 8.0, 3.0]
        assert timeline.current_index == 1
        assert scene_x(timeline) == 8.0

    def test_replace_on_empty_creates_first_frame(self):
        """Test replacing into an empty timeline inserts."""
        from keyframe_timeline.timeline import Timeline

        timeline = Timeline()
        timeline.replace_current_frame(make_frame(5))

        assert timeline.count() == 1
        assert timeline.current_index == 0

    def test_delete_first_frame(self):
        """Test deleting A in [A, B, C] leaves the cursor on B."""
        timeline = make_timeline([1, 2, 3])

        timeline.delete_current_frame()

        assert xs_of(timeline) == [2.0, 3.0]
        assert timeline.current_index == 0
        assert scene_x(timeline) == 2.0

    def test_delete_last_frame(self):
        """Test deleting C in [A, B, C] leaves the cursor on B."""
        timeline = make_timeline([1, 2, 3], index=2)

        timeline.delete_current_frame()

        assert xs_of(timeline) == [1.0, 2.0]
        assert timeline.current_index == 1
        assert scene_x(timeline) == 2.0

    def test_delete_middle_frame_falls_back_to_previous(self):
        """Test deleting B in [A, B, C] leaves the cursor on A."""
        timeline = make_timeline([1, 2, 3], index=1)

        timeline.delete_current_frame()

        assert xs_of(timeline) == [1.0, 3.0]
        assert timeline.current_index == 0

    def test_delete_sole_frame(self):
        """Test deleting the only frame empties the timeline."""
        timeline = make_timeline([1])

        timeline.delete_current_frame()

        assert timeline.count() == 0
        assert not timeline.is_defined()
        assert timeline.current_index is None

    def test_delete_on_empty_is_noop(self):
        """Test deleting from an empty timeline does nothing."""
        from keyframe_timeline.timeline import Timeline

        timeline = Timeline()
        timeline.delete_current_frame()

        assert timeline.count() == 0

    def test_frames_is_a_snapshot(self):
        """Test the frames property cannot mutate the timeline."""
        timeline = make_timeline([1, 2])

        frames = timeline.frames

        assert isinstance(frames, tuple)
        assert len(frames) == 2


class TestTimelineInterpolation:
    """Tests for interpolation between keyframes."""

    def test_interpolate_endpoints(self):
        """Test alpha 0 and 1 give the current and next frames."""
        timeline = make_timeline([0, 1, 2, 3], index=1)

        start = timeline.interpolate(0.0)
        end = timeline.interpolate(1.0)

        assert start.transforms[0].translation[0] == pytest.approx(1.0)
        assert end.transforms[0].translation[0] == pytest.approx(2.0)

    def test_interpolate_renders_without_moving_cursor(self):
        """Test interpolation renders to the scene and keeps the cursor."""
        timeline = make_timeline([0, 1, 2, 3], index=1)

        frame = timeline.interpolate(0.5)

        assert timeline.current_index == 1
        assert xs_of(timeline) == [0.0, 1.0, 2.0, 3.0]
        assert scene_x(timeline) == frame.transforms[0].translation[0]
        # Evenly spaced keyframes make the spline linear
        assert scene_x(timeline) == pytest.approx(1.5)

    def test_interpolate_without_previous_frame_raises(self):
        """Test interpolation at frame 0 has no predecessor."""
        from keyframe_timeline.errors import PreconditionViolation

        timeline = make_timeline([0, 1, 2, 3])

        assert timeline.can_animate()
        with pytest.raises(PreconditionViolation):
            timeline.interpolate(0.5)

    def test_interpolate_without_following_frames_raises(self):
        """Test interpolation needs two frames after the cursor."""
        from keyframe_timeline.errors import PreconditionViolation

        timeline = make_timeline([0, 1, 2, 3], index=2)

        with pytest.raises(PreconditionViolation):
            timeline.interpolate(0.5)

    def test_interpolate_on_empty_raises(self):
        """Test interpolation on an empty timeline."""
        from keyframe_timeline.errors import PreconditionViolation
        from keyframe_timeline.timeline import Timeline

        with pytest.raises(PreconditionViolation):
            Timeline().interpolate(0.5)

    @pytest.mark.parametrize("alpha", [-0.1, 1.5])
    def test_interpolate_alpha_out_of_range_raises(self, alpha):
        """Test alpha must lie in [0, 1]."""
        from keyframe_timeline.errors import PreconditionViolation

        timeline = make_timeline([0, 1, 2, 3], index=1)

        with pytest.raises(PreconditionViolation):
            timeline.interpolate(alpha)
