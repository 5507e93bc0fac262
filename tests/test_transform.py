import pytest

from navpath.core import IdentityTransform, MapTransform


@pytest.fixture
def transform():
    return MapTransform(scale=2.0, resolution=0.05, origin=(10.0, -5.0), image_size=(100, 200))


def test_to_world(transform):
    # (40/2 - 50 + 10) * 0.05, (60/2 - 100 - 5) * 0.05
    assert transform.to_world((40.0, 60.0)) == pytest.approx((-1.0, -3.75))


def test_to_display_inverts_to_world(transform):
    for p in [(0.0, 0.0), (40.0, 60.0), (-12.5, 300.0)]:
        assert transform.to_display(transform.to_world(p)) == pytest.approx(p)


def test_scalars(transform):
    assert transform.to_world_scalar(10.0) == pytest.approx(0.25)
    assert transform.to_display_scalar(0.25) == pytest.approx(10.0)


def test_batch_conversion(transform):
    pts = [(40.0, 60.0), (0.0, 0.0)]
    assert transform.points_to_world(pts) == [transform.to_world(p) for p in pts]
    assert transform.points_to_world([]) == []


def test_origin_display(transform):
    assert transform.to_world(transform.origin_display()) == pytest.approx((0.0, 0.0))


def test_fit():
    t = MapTransform.fit((100, 50), (400, 400), resolution=0.1, origin=(1.0, 2.0))
    assert t.scale == 4.0
    assert t.display_size == (400, 200)
    assert t.resolution == 0.1
    assert t.origin == (1.0, 2.0)


@pytest.mark.parametrize("image_size, view_size", [((0, 0), (400, 300)), ((100, 100), (0, 0))])
def test_fit_without_sizes(image_size, view_size):
    assert MapTransform.fit(image_size, view_size).scale == 1.0


@pytest.mark.parametrize("kwargs", [{"scale": 0.0}, {"scale": -1.0}, {"resolution": 0.0}])
def test_rejects_non_positive_factors(kwargs):
    with pytest.raises(ValueError):
        MapTransform(**kwargs)


def test_transforms_are_immutable(transform):
    with pytest.raises(AttributeError):
        transform.scale = 3.0


def test_identity():
    t = IdentityTransform()
    assert t.to_world((1, 2)) == (1.0, 2.0)
    assert t.to_display((3.5, -1)) == (3.5, -1.0)
    assert t.to_world_scalar(7) == 7.0
