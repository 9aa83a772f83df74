import math

import numpy as np
import pytest

from leverlog.config import DEFAULT_POSE, SEGMENT_CLAMPS, SEGMENT_LENGTHS
from leverlog.geometry.chain import Chain, normalize_deg, raw_drag_angle

CENTER = (250.0, 250.0)


def _expected_position(angles, i, center):
    x, y, theta = center[0], center[1], 0.0
    for k in range(i + 1):
        theta += angles[k]
        x += SEGMENT_LENGTHS[k] * math.sin(math.radians(theta))
        y -= SEGMENT_LENGTHS[k] * math.cos(math.radians(theta))
    return x, y


def _cursor_grid():
    xs = np.linspace(-400, 400, 17)
    return [(float(x), float(y)) for x in xs for y in xs]


# --- orientation / positions ---

def test_absolute_orientation_is_cumulative():
    c = Chain(DEFAULT_POSE)
    assert c.absolute_orientation(0) == 235.0
    assert c.absolute_orientation(1) == pytest.approx(90.0)
    assert c.absolute_orientation(2) == pytest.approx(55.0)
    assert c.absolute_orientation(3) == pytest.approx(125.0)


def test_joint_positions_follow_running_sum():
    c = Chain(DEFAULT_POSE)
    for i in range(4):
        assert c.joint_position(i, CENTER) == pytest.approx(_expected_position(DEFAULT_POSE, i, CENTER))


def test_zero_angle_points_up_and_clockwise_is_positive():
    c = Chain([0.0, 90.0, 0.0, 0.0])
    assert c.joint_position(0, (0.0, 0.0)) == pytest.approx((0.0, -80.0))
    # green turns 90° clockwise from "up" -> points right on screen
    assert c.joint_position(1, (0.0, 0.0)) == pytest.approx((100.0, -80.0))


def test_segments_connect_end_to_start():
    c = Chain(DEFAULT_POSE)
    segs = list(c.segments(CENTER))
    assert [color for _, _, color in segs] == ["blue", "green", "purple", "yellow"]
    assert segs[0][0] == CENTER
    for (_, end, _), (start, _, _) in zip(segs, segs[1:]):
        assert end == pytest.approx(start)


def test_chain_requires_four_angles():
    with pytest.raises(ValueError):
        Chain([1.0, 2.0, 3.0])


# --- drag updates ---

@pytest.mark.parametrize("joint", range(4))
def test_drag_result_always_within_clamp(joint):
    lo, hi = SEGMENT_CLAMPS[joint]
    for cursor in _cursor_grid():
        c = Chain(DEFAULT_POSE)
        angle = c.update_joint_from_drag(joint, cursor, (0.0, 0.0))
        assert lo <= angle <= hi
        assert c.angles()[joint] == angle


@pytest.mark.parametrize("joint", range(4))
def test_drag_onto_anchor_is_clamped_not_rejected(joint):
    c = Chain(DEFAULT_POSE)
    anchor = CENTER if joint == 0 else c.joint_position(joint - 1, CENTER)
    angle = c.update_joint_from_drag(joint, anchor, CENTER)
    lo, hi = SEGMENT_CLAMPS[joint]
    assert lo <= angle <= hi


def test_root_scenario_clamps_to_nearest_bound():
    c = Chain(DEFAULT_POSE)
    angle = c.update_joint_from_drag(0, (0.0, -100.0), (0.0, 0.0))
    assert angle == 190.0
    x, y = c.joint_position(0, (0.0, 0.0))
    assert x == pytest.approx(-13.89, abs=0.01)
    assert y == pytest.approx(78.78, abs=0.01)


def test_root_drag_inside_range_is_stored_normalized():
    c = Chain(DEFAULT_POSE)
    direction = math.radians(215.0)
    cursor = (100 * math.sin(direction), -100 * math.cos(direction))
    assert c.update_joint_from_drag(0, cursor, (0.0, 0.0)) == pytest.approx(215.0)


def test_child_drag_stores_angle_relative_to_parent():
    c = Chain(DEFAULT_POSE)
    anchor = c.joint_position(0, CENTER)
    direction = math.radians(100.0)   # absolute target for green
    cursor = (anchor[0] + 50 * math.sin(direction), anchor[1] - 50 * math.cos(direction))
    assert c.update_joint_from_drag(1, cursor, CENTER) == pytest.approx(100.0 - 235.0)


def test_drag_changes_only_the_target_segment():
    c = Chain(DEFAULT_POSE)
    c.update_joint_from_drag(1, (0.0, 0.0), CENTER)
    after = c.angles()
    assert after[0] == DEFAULT_POSE[0]
    assert after[2:] == list(DEFAULT_POSE[2:])


def test_seam_crossing_snaps_to_numerically_closer_bound():
    # Parent orientation 0 so purple's relative angle equals its raw screen angle.
    c = Chain([0.0, 0.0, 0.0, 0.0])
    anchor = c.joint_position(1, CENTER)
    above_left = (anchor[0] - 50.0, anchor[1] - 1.0)
    below_left = (anchor[0] - 50.0, anchor[1] + 1.0)

    assert c.update_joint_from_drag(2, above_left, CENTER) == pytest.approx(-88.85, abs=0.01)
    # geometrically -91° would fit the [-165, 25] range, but atan2 wrapped to +268.85
    assert c.update_joint_from_drag(2, below_left, CENTER) == 25.0


def test_descendant_edits_never_move_ancestor_joints():
    c = Chain(DEFAULT_POSE)
    for i in range(3):
        before = c.joint_position(i, CENTER)
        for j in range(i + 1, 4):
            c.update_joint_from_drag(j, (10.0 * j, 400.0 - 30.0 * j), CENTER)
        assert c.joint_position(i, CENTER) == pytest.approx(before)


def test_root_rotation_moves_every_joint_rigidly():
    c = Chain(DEFAULT_POSE)
    before = c.joint_positions(CENTER)
    relative_before = c.angles()[1:]
    c.update_joint_from_drag(0, (CENTER[0] - 100.0, CENTER[1] + 10.0), CENTER)
    after = c.joint_positions(CENTER)
    for b, a in zip(before, after):
        assert a != pytest.approx(b)
    assert c.angles()[1:] == relative_before


# --- drag state / hit-testing / read-only ---

def test_drag_state_machine():
    c = Chain(DEFAULT_POSE)
    assert c.dragging is None
    assert c.drag_to((0.0, 0.0), CENTER) is None
    c.begin_drag(3)
    assert c.dragging == 3
    c.drag_to((CENTER[0], CENTER[1] + 300.0), CENTER)
    c.end_drag()
    assert c.dragging is None
    assert c.angles()[:3] == list(DEFAULT_POSE[:3])


def test_begin_drag_rejects_unknown_joint():
    with pytest.raises(IndexError):
        Chain().begin_drag(4)


def test_hit_test_finds_marker_within_radius():
    c = Chain(DEFAULT_POSE)
    x, y = c.joint_position(2, CENTER)
    assert c.hit_test((x + 3.0, y - 3.0), CENTER, radius=10.0) == 2
    assert c.hit_test((0.0, 0.0), CENTER, radius=10.0) is None


def test_hit_test_prefers_deeper_joint_on_tie():
    c = Chain([0.0, 0.0, 0.0, 0.0], lengths=(10.0, 0.0, 10.0, 10.0))
    x, y = c.joint_position(0, CENTER)   # joints 0 and 1 coincide
    assert c.hit_test((x, y), CENTER, radius=5.0) == 1


def test_read_only_chain_ignores_drags():
    c = Chain(DEFAULT_POSE, read_only=True)
    assert c.update_joint_from_drag(0, (0.0, -100.0), (0.0, 0.0)) == DEFAULT_POSE[0]
    c.begin_drag(1)
    assert c.dragging is None
    assert c.angles() == list(DEFAULT_POSE)


# --- helpers / display ---

def test_raw_drag_angle_convention():
    assert raw_drag_angle((0.0, -1.0), (0.0, 0.0)) == pytest.approx(0.0)    # up
    assert raw_drag_angle((1.0, 0.0), (0.0, 0.0)) == pytest.approx(90.0)    # right
    assert raw_drag_angle((0.0, 1.0), (0.0, 0.0)) == pytest.approx(180.0)   # down


def test_normalize_deg_range():
    assert normalize_deg(-90.0) == 270.0
    assert normalize_deg(360.0) == 0.0
    assert 0.0 <= normalize_deg(-1e-20) < 360.0


def test_angle_labels_format():
    labels = Chain([595.0, -145.0, -35.5, 70.0]).angle_labels()
    assert labels == [
        "Blue (Absolute): 235.00°",
        "Green (Relative): -145.00°",
        "Purple (Relative): -35.50°",
        "Yellow (Relative): 70.00°",
    ]
