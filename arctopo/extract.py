"""
Finds the junctions shared between lines and rings, and cuts every line and
ring into elementary arcs that begin and end at junctions.

A position is a junction when it is the endpoint of an open line, or when it
is visited more than once with a different pair of neighbours, i.e. where two
boundaries meet or part ways. Positions that are visited several times along
the same run of shared boundary are not junctions, so a boundary shared by two
polygons becomes a single arc rather than one arc per segment.
"""

from .normalize import is_empty

def collapse(points):
    """Removes consecutive duplicate positions."""
    out = []
    for p in points:
        if not out or p != out[-1]:
            out.append(p)
    return out

def clean_line(points):
    """Returns the collapsed line, or None if fewer than two positions remain."""
    line = collapse(points)
    if len(line) < 2:
        return None
    return line

def clean_ring(points):
    """Returns the collapsed and closed ring, or None if it has fewer than three distinct vertices."""
    ring = collapse(points)
    if ring and ring[0] != ring[-1]:
        ring.append(ring[0])
    if len(set(ring)) < 3:
        return None
    return ring

def clean_polygon(rings):
    """Returns the cleaned rings, or [] if the exterior ring is degenerate so no hole takes its place."""
    if not rings:
        return []
    exterior = clean_ring(rings[0])
    if exterior is None:
        return []
    return [exterior] + [r for r in (clean_ring(ring) for ring in rings[1:]) if r]

def clean_geometry(geom):
    """
    Returns a copy of the geometry with degenerate lines and rings removed.
    Members of a multi-geometry that end up empty are dropped from the list,
    and so are collection members whose input held no coordinates at all.
    """
    typ = geom['type']
    out = dict(geom)
    if typ == 'GeometryCollection':
        out['geometries'] = [clean_geometry(g) for g in geom['geometries']
                             if g['type'] is not None and not is_empty(g)]
    elif typ == 'LineString':
        out['coordinates'] = clean_line(geom['coordinates']) or []
    elif typ == 'MultiLineString':
        out['coordinates'] = [l for l in (clean_line(line) for line in geom['coordinates']) if l]
    elif typ == 'Polygon':
        out['coordinates'] = clean_polygon(geom['coordinates'])
    elif typ == 'MultiPolygon':
        out['coordinates'] = [p for p in (clean_polygon(poly) for poly in geom['coordinates']) if p]
    return out

def clean_objects(objects):
    return {name: clean_geometry(geom) for name, geom in objects.items()}

def iter_parts(geom):
    """Yields (points, closed) for every line and ring of a cleaned geometry, in traversal order."""
    typ = geom['type']
    if typ == 'GeometryCollection':
        for g in geom['geometries']:
            yield from iter_parts(g)
    elif typ == 'LineString':
        if geom['coordinates']:
            yield geom['coordinates'], False
    elif typ == 'MultiLineString':
        for line in geom['coordinates']:
            yield line, False
    elif typ == 'Polygon':
        for ring in geom['coordinates']:
            yield ring, True
    elif typ == 'MultiPolygon':
        for poly in geom['coordinates']:
            for ring in poly:
                yield ring, True

def find_junctions(objects):
    """Returns the set of junction positions across all cleaned objects."""
    neighbors = {}
    junctions = set()

    def visit(point, previous, following):
        # neighbour pairs are unordered, so reversed traversals match
        if following < previous:
            previous, following = following, previous
        seen = neighbors.setdefault(point, (previous, following))
        if seen != (previous, following):
            junctions.add(point)

    for geom in objects.values():
        for points, closed in iter_parts(geom):
            if closed:
                # the closing position repeats the first one
                for i in range(len(points) - 1):
                    previous = points[i - 1] if i > 0 else points[-2]
                    visit(points[i], previous, points[i + 1])
            else:
                junctions.add(points[0])
                junctions.add(points[-1])
                for i in range(1, len(points) - 1):
                    visit(points[i], points[i - 1], points[i + 1])
    return junctions

def split(points, junctions):
    """Cuts a run of positions at every interior junction."""
    arcs = []
    start = 0
    for i in range(1, len(points) - 1):
        if points[i] in junctions:
            arcs.append(points[start:i + 1])
            start = i
    arcs.append(points[start:])
    return arcs

def cut_line(line, junctions):
    return split(line, junctions)

def cut_ring(ring, junctions):
    """
    Cuts a closed ring into arcs. Returns None if the ring has no junction,
    in which case it has to be treated as a single closed arc.

    The ring is first rotated to start at a junction: the first one if the
    ring does not already start at one, otherwise the last one before the
    closing position.
    """
    n = len(ring) - 1
    cuts = [i for i in range(n) if ring[i] in junctions]
    if not cuts:
        return None
    # a ring starting at a junction begins with the arc that closes it, so a
    # ring walking a shared edge backwards may reference it first (e.g. [~0, 2, 3])
    start = cuts[-1] if cuts[0] == 0 else cuts[0]
    if start:
        ring = ring[start:] + ring[1:start + 1]
    return split(ring, junctions)
