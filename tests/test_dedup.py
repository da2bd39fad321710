from arctopo.dedup import ArcRegistry, arc_index, min_rotation

A, B, C, D = (0, 0), (1, 0), (1, 1), (0, 1)


def test_new_arcs_get_increasing_indices():
    registry = ArcRegistry()
    assert registry.add([A, B]) == 0
    assert registry.add([B, C]) == 1
    assert len(registry) == 2
    assert registry.arcs == [(A, B), (B, C)]


def test_repeated_arc_is_referenced_forward():
    registry = ArcRegistry()
    registry.add([A, B, C])
    assert registry.add([A, B, C]) == 0
    assert len(registry) == 1


def test_reversed_arc_is_referenced_by_complement():
    registry = ArcRegistry()
    registry.add([D, A])
    ref = registry.add([A, B, C])
    assert registry.add([C, B, A]) == ~ref == -2
    assert arc_index(~ref) == ref
    # the arc is kept in the orientation it was first seen in
    assert registry.arcs[ref] == (A, B, C)


def test_index_zero_and_its_reverse_are_distinct():
    registry = ArcRegistry()
    assert registry.add([A, B]) == 0
    assert registry.add([B, A]) == -1
    assert arc_index(-1) == 0


def test_palindromic_arc_is_referenced_forward():
    registry = ArcRegistry()
    assert registry.add([A, B, A]) == 0
    assert registry.add([A, B, A]) == 0


def test_min_rotation():
    assert min_rotation((C, D, A, B)) == (A, B, C, D)
    assert min_rotation((B, A, C, A, B)) == (A, B, B, A, C)


def test_rings_match_under_rotation_and_reversal():
    registry = ArcRegistry()
    assert registry.add_ring([A, B, C, D, A]) == 0
    assert registry.add_ring([C, D, A, B, C]) == 0
    assert registry.add_ring([B, A, D, C, B]) == ~0
    assert registry.add_ring([A, C, B, A]) == 1
    assert registry.arcs[0] == (A, B, C, D, A)


def test_rings_and_open_arcs_are_kept_apart():
    registry = ArcRegistry()
    assert registry.add([A, B, C, D, A]) == 0
    assert registry.add_ring([A, B, C, D, A]) == 1
