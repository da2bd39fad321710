from arctopo import extract

A, B, C, D, E, F = (0, 0), (1, 0), (1, 1), (0, 1), (2, 0), (2, 1)


def test_collapse_removes_consecutive_duplicates_only():
    assert extract.collapse([A, A, B, B, A, C, C]) == [A, B, A, C]
    assert extract.collapse([]) == []


def test_clean_line():
    assert extract.clean_line([A, A, B]) == [A, B]
    assert extract.clean_line([A, A]) is None
    assert extract.clean_line([]) is None


def test_clean_ring_closes_and_drops_degenerate_rings():
    assert extract.clean_ring([A, B, C]) == [A, B, C, A]
    assert extract.clean_ring([A, B, B, C, A, A]) == [A, B, C, A]
    assert extract.clean_ring([A, B, A]) is None
    assert extract.clean_ring([A, B, A, B, A]) is None
    assert extract.clean_ring([A]) is None


def test_clean_polygon_needs_a_valid_exterior():
    hole = [(0.25, 0.25), (0.75, 0.25), (0.75, 0.75), (0.25, 0.25)]
    assert extract.clean_polygon([[A, B, A], hole]) == []
    assert extract.clean_polygon([[A, B, C, D, A], [A, A], hole]) == [[A, B, C, D, A], hole]
    assert extract.clean_polygon([]) == []


def test_clean_geometry_prunes_members():
    geom = {"type": "GeometryCollection", "geometries": [
        {"type": "MultiPolygon", "coordinates": [[[A, B, C, A]], [[A, A]], []]},
        {"type": "MultiPolygon", "coordinates": []},
        {"type": None},
        {"type": "Polygon", "coordinates": [[A, B]]},
    ]}
    cleaned = extract.clean_geometry(geom)
    assert cleaned["geometries"] == [
        {"type": "MultiPolygon", "coordinates": [[[A, B, C, A]]]},
        # not empty on input, so kept as an empty polygon
        {"type": "Polygon", "coordinates": []},
    ]


def test_junctions_of_lines_include_endpoints_and_forks():
    objects = {
        "acd": {"type": "LineString", "coordinates": [A, C, F]},
        "bcd": {"type": "LineString", "coordinates": [D, C, F]},
    }
    assert extract.find_junctions(objects) == {A, C, F, D}


def test_shared_boundary_in_opposite_directions_is_not_cut():
    # two squares sharing the edge B-C, which is walked B->C and C->B
    objects = {
        "left": {"type": "Polygon", "coordinates": [[A, B, C, D, A]]},
        "right": {"type": "Polygon", "coordinates": [[B, E, F, C, B]]},
    }
    assert extract.find_junctions(objects) == {B, C}


def test_repeated_visit_with_same_neighbours_is_not_a_junction():
    objects = {
        "a": {"type": "LineString", "coordinates": [A, B, C]},
        "b": {"type": "LineString", "coordinates": [C, B, A]},
    }
    assert extract.find_junctions(objects) == {A, C}


def test_cut_line():
    line = [A, B, C, D, E]
    assert extract.cut_line(line, {A, E}) == [line]
    assert extract.cut_line(line, {A, C, E}) == [[A, B, C], [C, D, E]]


def test_cut_ring_without_junctions():
    assert extract.cut_ring([A, B, C, D, A], set()) is None


def test_cut_ring_rotates_to_the_first_junction():
    assert extract.cut_ring([A, B, C, D, A], {B, C}) == [[B, C], [C, D, A, B]]


def test_cut_ring_starting_at_a_junction_walks_from_the_last_one():
    assert extract.cut_ring([B, E, F, C, B], {B, C}) == [[C, B], [B, E, F, C]]


def test_cut_ring_with_a_single_junction():
    assert extract.cut_ring([A, B, C, D, A], {C}) == [[C, D, A, B, C]]
    assert extract.cut_ring([A, B, C, D, A], {A}) == [[A, B, C, D, A]]
