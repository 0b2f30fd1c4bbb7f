import math

import pytest

from wayfinding import (
    InstructionKind,
    InvalidPathError,
    NavigationInstruction,
    Path,
    Waypoint,
    build,
)
from wayfinding.reducer import classify_path, reduce_instructions, should_merge

W = Waypoint
K = InstructionKind


def _summary(sequence):
    return [(i.kind, round(i.distance_span, 6), round(i.distance_left, 6)) for i in sequence]


def _node(kind, span, distance_left=0.0, anchor=W(0, 0, 0)):
    return NavigationInstruction(kind, distance_left, span, anchor)


# ---------------------------------------------------------------------------
# Invalid input
# ---------------------------------------------------------------------------

@pytest.mark.parametrize("points", [[], [(0.0, 0.0, 0.0)]])
def test_too_short_path_is_rejected(points):
    with pytest.raises(InvalidPathError):
        build(points)


# ---------------------------------------------------------------------------
# Scenarios
# ---------------------------------------------------------------------------

def test_two_point_path_is_a_single_destination():
    sequence = build([(0, 0, 0), (0, 0, 1)])
    assert len(sequence) == 1
    assert sequence[0].kind is K.DESTINATION_SHORT
    assert sequence[0].text == "Destination ahead"


def test_three_collinear_points_keep_destination_hint():
    sequence = build([(0, 0, 0), (0, 0, 5), (0, 0, 10)])
    assert _summary(sequence) == [
        (K.STRAIGHT_LONG, 5.0, 10.0),
        (K.DESTINATION_LONG, 5.0, 5.0),
    ]
    assert [i.text for i in sequence] == ["Go straight for 5 meters", "Destination in 5 meters"]


def test_collinear_spans_merge_into_one_straight():
    sequence = build([(0, 0, 0), (0, 0, 5), (0, 0, 10), (0, 0, 15)])
    assert _summary(sequence) == [
        (K.STRAIGHT_LONG, 10.0, 15.0),
        (K.DESTINATION_LONG, 5.0, 5.0),
    ]
    assert sequence[0].text == "Go straight for 10 meters"
    assert sequence[0].anchor == W(0, 0, 0)
    assert sequence[1].text == "Destination in 5 meters"


def test_short_straights_grow_into_a_long_straight():
    sequence = build([(0, 0, 0), (0, 0, 2.5), (0, 0, 5), (0, 0, 6)])
    assert sequence[0].kind is K.STRAIGHT_LONG
    assert sequence[0].distance_span == pytest.approx(5.0)


def test_left_turn_then_short_destination(corner_path):
    sequence = build(corner_path)
    assert _summary(sequence) == [
        (K.STRAIGHT_LONG, 10.0, 16.0),
        (K.TURN_LEFT, 5.0, 6.0),
        (K.DESTINATION_SHORT, 1.0, 1.0),
    ]
    assert sequence[1].anchor == W(0, 0, 10)
    assert sequence[-1].anchor == W(-6, 0, 10)


def test_turn_before_destination_keeps_destination_hint():
    sequence = build([(0, 0, 0), (0, 0, 10), (-10, 0, 10), (-10, 0, 0)])
    # The final turn keeps a 2 m window; both left turns fold into one.
    assert _summary(sequence) == [
        (K.STRAIGHT_LONG, 10.0, 30.0),
        (K.TURN_LEFT, 12.0, 20.0),
        (K.DESTINATION_LONG, 8.0, 8.0),
    ]
    assert sequence[-1].anchor == W(-10, 0, 0)
    assert [sequence.instruction_for_distance_left(d) for d in (9.0, 5.0, 1.0)] == [
        "Destination in 9 meters",
        "Destination in 5 meters",
        "Destination in 1 meter",
    ]


def test_turn_on_three_point_path_splits_last_segment():
    sequence = build([(0, 0, 0), (0, 0, 5), (-5, 0, 5)])
    assert _summary(sequence) == [
        (K.STRAIGHT_LONG, 5.0, 10.0),
        (K.TURN_LEFT, 2.0, 5.0),
        (K.DESTINATION_SHORT, 3.0, 3.0),
    ]
    assert sequence[1].anchor == W(0, 0, 5)


def test_stairs_on_last_key_point_are_kept():
    sequence = build([(0, 0, 0), (2, 0, 0), (3, 0.6, 0)])
    assert [i.kind for i in sequence] == [K.STRAIGHT_SHORT, K.STAIRS_UP, K.DESTINATION_SHORT]
    assert sequence[1].distance_span == pytest.approx(math.sqrt(1.36) / 2)
    assert sequence[2].distance_left == pytest.approx(math.sqrt(1.36) / 2)


def test_very_short_start_is_absorbed_by_stairs():
    sequence = build([(0, 0, 0), (1, 0, 0), (2, 0.6, 0)])
    assert [i.kind for i in sequence] == [K.STAIRS_UP, K.DESTINATION_SHORT]
    assert sequence[0].distance_span == pytest.approx(1.0 + math.sqrt(1.36) / 2)
    assert sequence[0].distance_left == pytest.approx(1.0 + math.sqrt(1.36))


def test_short_straight_is_absorbed_by_following_turn():
    sequence = build([(0, 0, 0), (0, 0, 10), (0, 0, 11), (-5, 0, 11), (-15, 0, 11)])
    assert _summary(sequence) == [
        (K.STRAIGHT_LONG, 10.0, 26.0),
        (K.TURN_LEFT, 6.0, 16.0),
        (K.DESTINATION_LONG, 10.0, 10.0),
    ]
    assert sequence[1].anchor == W(0, 0, 10)


def test_consecutive_stair_flights_merge():
    step = math.sqrt(1.36)
    sequence = build([
        (0, 0, 0), (2, 0, 0), (3, 0.6, 0), (4, 1.2, 0), (5, 1.8, 0), (9, 1.8, 0), (12, 1.8, 0),
    ])
    assert [i.kind for i in sequence] == [
        K.STRAIGHT_SHORT, K.STAIRS_UP, K.STRAIGHT_LONG, K.DESTINATION_SHORT,
    ]
    assert sequence[1].distance_span == pytest.approx(3 * step)
    assert sequence[1].anchor == W(2, 0, 0)


def test_sample_path(sample_path):
    sequence = build(sample_path)
    assert _summary(sequence) == [
        (K.STRAIGHT_LONG, 8.0, 28.5),
        (K.TURN_LEFT, 6.0, 20.5),
        (K.TURN_RIGHT, 1.0, 14.5),
        (K.STAIRS_UP, 2.5, 13.5),
        (K.STRAIGHT_LONG, 4.0, 11.0),
        (K.TURN_RIGHT, 4.0, 7.0),
        (K.DESTINATION_SHORT, 3.0, 3.0),
    ]


# ---------------------------------------------------------------------------
# Degenerate segments
# ---------------------------------------------------------------------------

def test_repeated_waypoint_is_folded():
    sequence = build([(0, 0, 0), (0, 0, 5), (0, 0, 5), (-5, 0, 5)])
    assert [i.kind for i in sequence] == [K.STRAIGHT_LONG, K.TURN_LEFT, K.DESTINATION_SHORT]
    assert all(i.distance_span > 0 for i in sequence)
    assert sum(i.distance_span for i in sequence) == pytest.approx(10.0)


def test_all_points_coinciding():
    sequence = build([(1, 1, 1)] * 3)
    assert len(sequence) == 1
    assert sequence[0].kind is K.DESTINATION_SHORT
    assert sequence.total_length == 0.0


# ---------------------------------------------------------------------------
# Properties
# ---------------------------------------------------------------------------

PATHS = [
    [(0, 0, 0), (0, 0, 1)],
    [(0, 0, 0), (0, 0, 5), (0, 0, 10)],
    [(0, 0, 0), (3, 0, 4), (3, 0, 9), (-2, 0, 9), (-2, 1.2, 10.5), (-2, 1.2, 20), (4, 1.2, 26)],
    [(0, 0, 0), (0.5, 0, 0.2), (1.1, 0, -0.3), (1.2, 0, 4), (6, 0, 4.5), (6.2, 0, 0), (0, 0, 0.5)],
]


@pytest.mark.parametrize("points", PATHS)
def test_sequence_properties(points):
    path = Path(points)
    sequence = build(path)

    # One extra node when a manoeuvre precedes the destination.
    assert 1 <= len(sequence) <= len(path)
    assert sum(i.distance_span for i in sequence) == pytest.approx(path.total_length, abs=1e-4)
    lefts = [i.distance_left for i in sequence]
    assert lefts == sorted(lefts, reverse=True)
    assert len(set(lefts)) == len(lefts)
    assert lefts[0] == pytest.approx(path.total_length)


@pytest.mark.parametrize("points", PATHS)
def test_build_is_idempotent(points):
    assert _summary(build(points)) == _summary(build(points))

    candidates = classify_path(Path(points))
    assert reduce_instructions(candidates) == reduce_instructions(candidates)


def test_mirrored_path_swaps_sides(sample_path):
    mirrored = Path([W(-p.x, p.y, p.z) for p in sample_path])
    kinds_before = [i.kind for i in classify_path(sample_path)]
    mirrored_kinds = [i.kind for i in classify_path(mirrored)]
    assert mirrored_kinds == [k.mirrored for k in kinds_before]


def test_candidates_run_from_destination_to_origin(corner_path):
    candidates = classify_path(corner_path)
    assert len(candidates) == 3
    assert [round(c.distance_left, 6) for c in candidates] == [1.0, 6.0, 16.0]


# ---------------------------------------------------------------------------
# Merge rule
# ---------------------------------------------------------------------------

def test_straights_merge():
    assert should_merge(_node(K.STRAIGHT_SHORT, 1.0), _node(K.STRAIGHT_LONG, 8.0))


def test_short_straight_merges_into_anything():
    assert should_merge(_node(K.TURN_LEFT, 5.0), _node(K.STRAIGHT_SHORT, 1.9))
    assert not should_merge(_node(K.TURN_LEFT, 5.0), _node(K.STRAIGHT_SHORT, 2.0))


def test_destinations_merge():
    assert should_merge(_node(K.DESTINATION_SHORT, 1.0), _node(K.DESTINATION_LONG, 4.0))


def test_identical_kinds_merge():
    assert should_merge(_node(K.TURN_RIGHT, 4.0), _node(K.TURN_RIGHT, 3.0))
    assert not should_merge(_node(K.TURN_RIGHT, 4.0), _node(K.TURN_LEFT, 3.0))


def test_turn_never_folds_into_straight():
    assert not should_merge(_node(K.STRAIGHT_LONG, 8.0), _node(K.TURN_LEFT, 1.0))


def test_reduce_keeps_later_kind_and_earlier_start():
    kept = _node(K.TURN_LEFT, 5.0, distance_left=6.0, anchor=W(0, 0, 10))
    earlier = _node(K.STRAIGHT_SHORT, 1.0, distance_left=7.0, anchor=W(0, 0, 9))
    (merged,) = reduce_instructions([kept, earlier])
    assert merged.kind is K.TURN_LEFT
    assert merged.distance_span == pytest.approx(6.0)
    assert merged.distance_left == 7.0
    assert merged.anchor == W(0, 0, 9)
