import pytest

from arctopo import quantize, normalize
from arctopo.errors import OptionError


@pytest.mark.parametrize("value, expected", [
    (None, 0),
    (0, 0),
    (2, 2),
    (1e4, 10000),
    (1e6, 1000000),
])
def test_quantization_level(value, expected):
    assert quantize.quantization_level(value) == expected


@pytest.mark.parametrize("value", [1, -5, 2.5, True, "100", [10]])
def test_invalid_quantization_raises(value):
    with pytest.raises(OptionError):
        quantize.quantization_level(value)


def test_bounds_cover_all_positions():
    objects = normalize.normalize_objects({
        "a": {"type": "LineString", "coordinates": [[-1, 2], [3, 4]]},
        "b": {"type": "GeometryCollection", "geometries": [
            {"type": "Point", "coordinates": [0, -7]},
            # degenerate rings still count towards the bounds
            {"type": "Polygon", "coordinates": [[[10, 0], [10, 0]]]},
        ]},
    })
    assert quantize.bounds(objects) == (-1, -7, 10, 4)


def test_bounds_of_nothing():
    assert quantize.bounds({}) is None
    assert quantize.bounds(normalize.normalize_objects({"a": {"type": "MultiPolygon", "coordinates": []}})) is None


def test_transform_spans_the_bounds():
    transform = quantize.compute_transform((1/8, 1/16, 1/2, 1/4), 2)
    assert transform == {"scale": [3/8, 3/16], "translate": [1/8, 1/16]}
    sx, sy = transform["scale"]
    tx, ty = transform["translate"]
    assert tx + sx * 1 == 1/2
    assert ty + sy * 1 == 1/4


def test_quantizer_rounds_halves_up():
    q = quantize.Quantizer({"scale": [1, 1], "translate": [0, 0]})
    assert q((0.5, 1.5)) == (1, 2)
    assert q((2.5, -0.5)) == (3, 0)
    assert q((0.49, 0.51)) == (0, 1)


def test_quantizer_zero_scale_axis():
    q = quantize.Quantizer({"scale": [0, 2], "translate": [3, 0]})
    assert q((3, 4)) == (0, 2)


def test_quantize_objects_keeps_structure_and_members():
    objects = normalize.normalize_objects({
        "f": {"type": "Feature", "id": "x", "properties": {"k": 1},
              "geometry": {"type": "MultiLineString", "coordinates": [[[0, 0], [4, 4]], []]}},
        "p": {"type": "Point", "coordinates": []},
    }, property_filter=lambda key: key)
    transform = quantize.compute_transform(quantize.bounds(objects), 5)
    quantized = quantize.quantize_objects(objects, transform)
    assert quantized["f"] == {"type": "MultiLineString", "coordinates": [[(0, 0), (4, 4)], []],
                              "id": "x", "properties": {"k": 1}}
    assert quantized["p"] == {"type": "Point", "coordinates": []}
    # the normalized input is left alone
    assert objects["f"]["coordinates"][0] == [(0.0, 0.0), (4.0, 4.0)]
