"""
Functions that extract GeoJSON-ish data structures from a topology built by
arctopo.encode.topology().
"""

from .dedup import arc_index
from .errors import InputError

def rel2abs(arc, scale=None, translate=None):
    """Yields absolute coordinate tuples from a delta-encoded arc.

    If either the scale or translate parameter evaluate to False, yield the
    arc coordinates with no transformation."""
    if scale and translate:
        a, b = 0, 0
        for ax, bx in arc:
            a += ax
            b += bx
            x, y = scale[0]*a + translate[0], scale[1]*b + translate[1]
            yield x, y
    else:
        for x, y in arc:
            yield x, y

def arc_coordinates(ref, topology_arcs, scale=None, translate=None):
    """Returns the absolute positions of one signed arc reference, in traversal order."""
    i = arc_index(ref)
    if i >= len(topology_arcs):
        raise InputError('Arc reference {} is out of range, topology has {} arcs'.format(ref, len(topology_arcs)))
    points = list(rel2abs(topology_arcs[i], scale, translate))
    if ref < 0:
        points.reverse()
    return points

def line_coordinates(refs, topology_arcs, scale=None, translate=None):
    """Stitches a sequence of arc references into one line or ring.

    Consecutive arcs share their junction position, which is only kept once."""
    points = []
    for ref in refs:
        arc = arc_coordinates(ref, topology_arcs, scale, translate)
        points.extend(arc[1:] if points else arc)
    return points

def coordinates(arcs, topology_arcs, scale=None, translate=None, depth=1):
    """Return GeoJSON coordinates for the sequence(s) of arcs.

    With depth 1 the arcs parameter is a sequence of arc references
    describing a single line string or ring; each additional depth level
    wraps that in one more list (a polygon, a multipolygon).

    The topology_arcs parameter is the list of shared, absolute or
    delta-encoded arcs in the dataset, and the scale and translate parameters
    are the topology's transform, if any.
    """
    if depth == 1:
        return line_coordinates(arcs, topology_arcs, scale, translate)
    return [coordinates(a, topology_arcs, scale, translate, depth - 1) for a in arcs]

ARC_DEPTHS = {
    'LineString': 1,
    'MultiLineString': 2,
    'Polygon': 2,
    'MultiPolygon': 3,
    }

def point_coordinates(point, scale=None, translate=None):
    if not point:
        return []
    if scale and translate:
        return [scale[0]*point[0] + translate[0], scale[1]*point[1] + translate[1]]
    return list(point)

def geometry(obj, topology):
    """Converts a topology object to a geometry object.

    The topology object is a dict with 'type' and 'arcs' items, such as
    {'type': "LineString", 'arcs': [0, 1, 2]}, 'coordinates' for points,
    or 'geometries' for collections.
    """
    transform = topology.get('transform') or {}
    scale, translate = transform.get('scale'), transform.get('translate')
    typ = obj.get('type')
    if typ == 'GeometryCollection':
        return {'type': typ,
                'geometries': [geometry(g, topology) for g in obj['geometries']]}
    elif typ == 'Point':
        return {'type': typ, 'coordinates': point_coordinates(obj['coordinates'], scale, translate)}
    elif typ == 'MultiPoint':
        return {'type': typ,
                'coordinates': [point_coordinates(p, scale, translate) for p in obj['coordinates']]}
    elif typ in ARC_DEPTHS:
        return {'type': typ,
                'coordinates': coordinates(obj['arcs'], topology['arcs'], scale, translate,
                                           depth=ARC_DEPTHS[typ])}
    elif typ is None:
        return None
    else:
        raise InputError('Unrecognized topology object type: {!r}'.format(typ))

def feature(obj, topology):
    feat = {'type': 'Feature',
            'properties': obj.get('properties', {}),
            'geometry': geometry(obj, topology)}
    if 'id' in obj:
        feat['id'] = obj['id']
    return feat

def geojson(topology, name=None):
    """Converts one object of a topology to GeoJSON.

    Geometry collections become a FeatureCollection, any other object a
    single Feature."""
    if not isinstance(topology, dict) or topology.get('type') != 'Topology':
        raise InputError('Not a topology: {!r}'.format(topology if not isinstance(topology, dict) else topology.get('type')))
    layers = topology['objects']
    layernames = list(layers.keys())
    if name is None:
        if len(layers) != 1:
            raise InputError('Topology contains more than one layer, please set the "name" arg to \
select which one to decode. The layers are: {}'.format(layernames))
        name = layernames[0]
    if name not in layers:
        raise InputError('Topology has no layer named {!r}, the layers are: {}'.format(name, layernames))

    data = layers[name]
    if data['type'] == 'GeometryCollection':
        return {'type': 'FeatureCollection',
                'features': [feature(obj, topology) for obj in data['geometries']]}
    return feature(data, topology)
