"""
Unwraps Features and FeatureCollections into plain geometries and validates
their coordinates.

The output is a new ordered dict of name -> geometry dict. Positions are
converted to (x, y) float tuples so that later stages can hash them.
"""

import math
from numbers import Real

from .errors import InputError, FilterError

# nesting depth of the coordinates member, a position counting as depth 1
COORDINATE_DEPTHS = {
    'Point': 1,
    'MultiPoint': 2,
    'LineString': 2,
    'MultiLineString': 3,
    'Polygon': 3,
    'MultiPolygon': 4,
    }

GEOMETRY_TYPES = tuple(COORDINATE_DEPTHS) + ('GeometryCollection',)

def position(value):
    if not isinstance(value, (list, tuple)) or len(value) < 2:
        raise InputError('Invalid position: {!r}'.format(value))
    x, y = value[0], value[1]
    for v in (x, y):
        if isinstance(v, bool) or not isinstance(v, Real):
            raise InputError('Position ordinates must be numbers, not {!r}'.format(v))
        if not math.isfinite(v):
            raise InputError('Position ordinates must be finite, not {!r}'.format(v))
    return float(x), float(y)

def coordinates(value, depth):
    """Validates and copies a coordinates member of the given nesting depth."""
    if depth == 1:
        return position(value)
    if not isinstance(value, (list, tuple)):
        raise InputError('Expected a list of coordinates, got {!r}'.format(value))
    return [coordinates(item, depth - 1) for item in value]

def member(obj, key):
    if key not in obj:
        raise InputError("{} object is missing its '{}' member".format(obj.get('type'), key))
    return obj[key]

def geometry(obj):
    """Validates and copies a geometry (never a Feature)."""
    if obj is None:
        # null geometry of a feature
        return {'type': None}
    if not isinstance(obj, dict):
        raise InputError('Geometry must be a mapping, not {!r}'.format(obj))
    typ = obj.get('type')
    if typ == 'GeometryCollection':
        return {'type': typ,
                'geometries': [geometry(g) for g in member(obj, 'geometries')]}
    elif typ in COORDINATE_DEPTHS:
        depth = COORDINATE_DEPTHS[typ]
        coords = member(obj, 'coordinates')
        if typ == 'Point' and isinstance(coords, (list, tuple)) and len(coords) == 0:
            # empty point
            return {'type': typ, 'coordinates': []}
        return {'type': typ, 'coordinates': coordinates(coords, depth)}
    else:
        raise InputError('Unrecognized geometry type: {!r}'.format(typ))

def filter_properties(properties, property_filter):
    """
    Returns the properties retained (and possibly renamed) by the filter,
    or None if no key survives. Without a filter no properties are kept.
    """
    if property_filter is None or not properties:
        return None
    kept = {}
    for key, value in properties.items():
        # whatever the filter raises propagates to the caller as-is
        newkey = property_filter(key)
        if newkey is None:
            continue
        if not isinstance(newkey, str):
            raise FilterError('Property filter must return a string or None, got {!r} for key {!r}'.format(newkey, key))
        kept[newkey] = value
    return kept or None

def feature(obj, property_filter=None):
    geom = geometry(member(obj, 'geometry'))
    if obj.get('id') is not None:
        geom['id'] = obj['id']
    properties = obj.get('properties')
    if properties is not None and not isinstance(properties, dict):
        raise InputError('Feature properties must be a mapping or null, not {!r}'.format(properties))
    props = filter_properties(properties, property_filter)
    if props is not None:
        geom['properties'] = props
    return geom

def normalize_object(obj, property_filter=None):
    """Converts a single input object to a geometry."""
    if not isinstance(obj, dict):
        raise InputError('Input object must be a mapping, not {!r}'.format(obj))
    typ = obj.get('type')
    if typ == 'Feature':
        return feature(obj, property_filter)
    elif typ == 'FeatureCollection':
        geoms = []
        for feat in member(obj, 'features'):
            if not isinstance(feat, dict) or feat.get('type') != 'Feature':
                raise InputError('FeatureCollection members must be Features, not {!r}'.format(feat))
            geoms.append(feature(feat, property_filter))
        return {'type': 'GeometryCollection', 'geometries': geoms}
    else:
        geom = geometry(obj)
        # a bare geometry may still carry an id
        if obj.get('id') is not None:
            geom['id'] = obj['id']
        return geom

def normalize_objects(objects, property_filter=None):
    """
    Given a mapping of name -> GeoJSON object, returns a new dict of
    name -> geometry, in the same order.
    """
    if property_filter is not None and not callable(property_filter):
        raise FilterError('Property filter must be callable, not {!r}'.format(property_filter))
    return {name: normalize_object(obj, property_filter)
            for name, obj in objects.items()}

def iter_positions(geom):
    """Yields every position of a normalized geometry."""
    typ = geom['type']
    if typ == 'GeometryCollection':
        for g in geom['geometries']:
            yield from iter_positions(g)
    elif typ in COORDINATE_DEPTHS:
        stack = [(geom['coordinates'], COORDINATE_DEPTHS[typ])]
        while stack:
            coords, depth = stack.pop()
            if depth == 1:
                if coords:
                    yield coords
            else:
                stack.extend((c, depth - 1) for c in reversed(coords))

def is_empty(geom):
    """True if the geometry holds no position at all."""
    for _ in iter_positions(geom):
        return False
    return True
