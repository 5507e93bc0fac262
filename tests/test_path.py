import pytest

from navpath.core import MapTransform, IdentityTransform, PathState, PointKind, kind_for_index

SIX = [(0.0, 0.0), (0.0, 50.0), (50.0, 50.0), (50.0, 0.0), (100.0, -50.0), (100.0, 0.0)]


def make_path(points, loop=False) -> PathState:
    path = PathState()
    for p in points:
        assert path.append_point(p)
    path.loop_finished = loop
    return path


def test_roles_follow_insertion_index():
    kinds = [kind_for_index(i) for i in range(8)]
    A, H = PointKind.ANCHOR, PointKind.HANDLE
    assert kinds == [A, H, H, A, H, A, H, A]

    path = make_path(SIX)
    assert [e.kind for e in path.entries] == kinds[:6]
    assert [path.is_anchor(i) for i in range(6)] == [True, False, False, True, False, True]


def test_kind_for_negative_index():
    with pytest.raises(IndexError):
        kind_for_index(-1)


@pytest.mark.parametrize("n", [0, 1, 2, 3])
@pytest.mark.parametrize("loop", [False, True])
def test_no_segments_below_four_points(n, loop):
    path = make_path(SIX[:n], loop=loop)
    assert path.segments() == []
    assert path.path_ops() == []


@pytest.mark.parametrize("k", [0, 1, 2, 3])
def test_segment_count(k):
    pts = [(float(i * 10), float((i % 3) * 7)) for i in range(4 + 2 * k)]
    assert len(make_path(pts).segments()) == 1 + k


def test_trailing_handle_does_not_make_a_segment():
    path = make_path(SIX[:5])
    assert len(path.segments()) == 1


def test_first_segment_is_verbatim():
    seg = make_path(SIX).segments()[0]
    assert tuple(seg) == tuple(SIX[:4])


def test_continuity_at_joins():
    pts = [(0, 0), (10, 30), (40, 35), (60, 10), (90, -20), (120, 5), (130, 60), (100, 90)]
    segs = make_path(pts).segments()
    assert len(segs) == 3
    for a, b in zip(segs, segs[1:]):
        assert b.p0 == a.p3
        assert b.p1[0] == pytest.approx(2 * a.p3[0] - a.p2[0])
        assert b.p1[1] == pytest.approx(2 * a.p3[1] - a.p2[1])


def test_second_segment_mirrors_stored_handle():
    segs = make_path(SIX).segments()
    assert segs[1].p0 == (50.0, 0.0)
    assert segs[1].p1 == (50.0, -50.0)
    assert segs[1].p2 == (100.0, -50.0)
    assert segs[1].p3 == (100.0, 0.0)


def test_closing_segment():
    path = make_path(SIX)
    assert len(path.segments()) == 2
    assert path.toggle_loop()
    segs = path.segments()
    assert len(segs) == 3
    closing = segs[-1]
    assert closing.p0 == (100.0, 0.0)
    assert closing.p1 == (100.0, 50.0)
    assert closing.p2 == (0.0, -50.0)
    assert closing.p3 == SIX[0]


def test_loop_needs_four_points():
    path = make_path(SIX[:3])
    assert not path.toggle_loop()
    assert not path.loop_finished


def test_loop_can_always_be_reopened():
    path = make_path(SIX[:3], loop=True)
    assert path.toggle_loop()
    assert not path.loop_finished


def test_append_and_pop_refused_when_looped():
    path = make_path(SIX)
    path.toggle_loop()
    assert not path.append_point((1.0, 1.0))
    assert not path.pop_last()
    assert len(path) == 6


def test_pop_last():
    path = make_path(SIX)
    assert path.pop_last()
    assert path.points == SIX[:5]
    empty = PathState()
    assert not empty.pop_last()


def test_move_start_anchor_drags_first_handle():
    path = make_path(SIX)
    assert path.move_point(0, (5.0, -5.0))
    assert path.points[0] == (5.0, -5.0)
    assert path.points[1] == (5.0, 45.0)
    assert path.points[2:] == SIX[2:]


def test_move_interior_anchor_drags_incoming_handle():
    path = make_path(SIX)
    path.move_point(3, (60.0, 10.0))
    assert path.points[3] == (60.0, 10.0)
    assert path.points[2] == (60.0, 60.0)
    assert path.points[4] == SIX[4]
    assert path.points[:2] == SIX[:2]

    path.move_point(5, (110.0, 0.0))
    assert path.points[4] == (110.0, -50.0)
    assert path.points[5] == (110.0, 0.0)


def test_move_anchor_keeps_tangent_at_join():
    path = make_path(SIX)
    before = path.segments()[1]
    path.move_point(3, (70.0, 20.0))
    after = path.segments()[1]
    # outgoing control keeps its offset from the anchor
    assert (after.p1[0] - after.p0[0], after.p1[1] - after.p0[1]) == pytest.approx(
        (before.p1[0] - before.p0[0], before.p1[1] - before.p0[1]))


def test_move_handle_moves_only_itself():
    path = make_path(SIX)
    path.move_point(4, (0.0, 0.0))
    assert path.points[4] == (0.0, 0.0)
    assert path.points[:4] == SIX[:4]
    assert path.points[5] == SIX[5]


def test_move_out_of_range_is_ignored():
    path = make_path(SIX)
    assert not path.move_point(6, (1.0, 1.0))
    assert not path.move_point(-1, (1.0, 1.0))
    assert path.points == SIX


def test_index_at_first_match_wins():
    path = make_path([(0.0, 0.0), (3.0, 0.0), (100.0, 0.0)])
    assert path.index_at((2.0, 0.0), 6.0) == 0
    assert path.index_at((100.0, 5.0), 6.0) == 2
    assert path.index_at((50.0, 50.0), 6.0) is None


def test_path_ops():
    path = make_path(SIX)
    ops = path.path_ops()
    assert ops[0] == ("M", SIX[0])
    assert [op for op, _ in ops] == ["M", "C", "C"]
    path.toggle_loop()
    assert [op for op, _ in path.path_ops()] == ["M", "C", "C", "C", "Z"]


def test_copy_is_independent():
    path = make_path(SIX)
    other = path.copy()
    other.move_point(0, (9.0, 9.0))
    other.toggle_loop()
    assert path.points == SIX
    assert not path.loop_finished


def test_record_roundtrip():
    transform = MapTransform(scale=1.5, resolution=0.05, origin=(12.0, -4.0), image_size=(400, 300))
    path = make_path(SIX)
    path.toggle_loop()
    record = path.to_dict(transform)
    assert record["loopFinished"] is True
    assert record["editor"] == "mirrored-bezier"
    assert set(record["points"][0]) == {"x", "y"}

    restored = PathState.from_dict(record, transform)
    assert restored.loop_finished
    for a, b in zip(restored.points, SIX):
        assert a == pytest.approx(b)
    assert [e.kind for e in restored.entries] == [e.kind for e in path.entries]


def test_record_accepts_pairs():
    record = {"loopFinished": False, "points": [[1, 2], [3, 4]]}
    path = PathState.from_dict(record, IdentityTransform())
    assert path.points == [(1.0, 2.0), (3.0, 4.0)]


def test_record_unknown_editor():
    with pytest.raises(ValueError):
        PathState.from_dict({"loopFinished": False, "points": [], "editor": "nope"}, IdentityTransform())


def test_record_bad_point():
    with pytest.raises(TypeError):
        PathState.from_dict({"loopFinished": False, "points": [5]}, IdentityTransform())
