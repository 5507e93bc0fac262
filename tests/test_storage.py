import json

import pytest

from navpath.core import IdentityTransform, PathState, as_path
from navpath.core.storage import (
    export_sampled_path,
    load_path_file,
    read_map_yaml,
    save_path_file,
    validate_record,
)


def make_record():
    path = PathState()
    for p in [(0.0, 0.0), (0.0, 50.0), (50.0, 50.0), (50.0, 0.0)]:
        path.append_point(p)
    return path.to_dict(IdentityTransform())


def test_save_and_load(tmp_path):
    filename = str(tmp_path / "path.json")
    record = make_record()
    save_path_file(filename, record)
    assert load_path_file(filename) == record


def test_list_points_are_accepted():
    record = {"loopFinished": False, "points": [[1.0, 2.0], [3, 4]]}
    assert validate_record(record) is record
    path = PathState.from_dict(record, IdentityTransform())
    assert path.points == [(1.0, 2.0), (3.0, 4.0)]


@pytest.mark.parametrize("data", [
    [],
    {"points": []},
    {"loopFinished": "yes", "points": []},
    {"loopFinished": False},
    {"loopFinished": False, "points": [{"x": 1}]},
    {"loopFinished": False, "points": [[1, 2, 3]]},
    {"loopFinished": False, "points": [{"x": True, "y": 0}]},
    {"loopFinished": False, "points": ["1,2"]},
    {"loopFinished": False, "points": [], "editor": "nope"},
    {"loopFinished": False, "points": [], "editor": ["mirrored-bezier"]},
])
def test_invalid_records(data):
    with pytest.raises(ValueError):
        validate_record(data)


def test_load_rejects_bad_file(tmp_path):
    filename = tmp_path / "path.json"
    filename.write_text(json.dumps({"points": []}))
    with pytest.raises(ValueError):
        load_path_file(str(filename))


def test_export_samples(tmp_path):
    path = PathState.from_dict(make_record(), IdentityTransform())
    sampled = as_path(path, IdentityTransform(), 50.0)

    plain = tmp_path / "samples.json"
    export_sampled_path(str(plain), sampled)
    data = json.loads(plain.read_text())
    assert len(data) == 3
    assert set(data[0]) == {"x", "y", "curvature"}

    nav = tmp_path / "nav.json"
    export_sampled_path(str(nav), sampled, nav_path=True, frame_id="odom")
    msg = json.loads(nav.read_text())
    assert msg["header"]["frame_id"] == "odom"
    assert len(msg["poses"]) == 3


def test_load_rejects_unknown_editor(tmp_path):
    filename = tmp_path / "path.json"
    filename.write_text(json.dumps({"loopFinished": False, "points": [], "editor": "nope"}))
    with pytest.raises(ValueError):
        load_path_file(str(filename))


MAP_YAML = """\
image: maps/office.pgm
resolution: 0.05
origin: [-10.0, -7.5, 0.0]
negate: 0
occupied_thresh: 0.65
free_thresh: 0.196
"""


def test_read_map_yaml(tmp_path):
    filename = tmp_path / "office.yaml"
    filename.write_text(MAP_YAML)
    meta = read_map_yaml(str(filename))
    assert meta.resolution == 0.05
    assert meta.origin == (-10.0, -7.5)
    assert meta.image == str(tmp_path / "maps" / "office.pgm")


def test_read_map_yaml_keeps_absolute_image(tmp_path):
    filename = tmp_path / "map.yaml"
    filename.write_text("image: /srv/maps/map.png\nresolution: 0.1\n")
    meta = read_map_yaml(str(filename))
    assert meta.image == "/srv/maps/map.png"
    assert meta.origin == (0.0, 0.0)


@pytest.mark.parametrize("text", [
    "- just\n- a list\n",
    "resolution: 0.05\n",
    "image: map.pgm\nresolution: 0\n",
    "image: map.pgm\nresolution: fine\n",
    "image: map.pgm\nresolution: 0.05\norigin: [1.0]\n",
    "image: map.pgm\nresolution: [0.05\n",
])
def test_read_map_yaml_rejects_bad_files(tmp_path, text):
    filename = tmp_path / "map.yaml"
    filename.write_text(text)
    with pytest.raises(ValueError):
        read_map_yaml(str(filename))
