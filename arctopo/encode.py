"""
Convert GeoJSON-like objects to a TopoJSON topology.
"""

import logging

from . import normalize, quantize, extract
from .dedup import ArcRegistry
from .errors import InputError, OptionError

logger = logging.getLogger(__name__)

OPTION_NAMES = {
    'quantization': 'quantization',
    'property-filter': 'property_filter',
    'property_filter': 'property_filter',
    }

def delta_encode(arc):
    """Yields delta-encoded coordinate pairs from an arc of absolute grid positions.

    The first pair is absolute, every following pair is the difference
    from the previous position."""
    a, b = arc[0]
    yield [a, b]
    for x, y in arc[1:]:
        yield [x - a, y - b]
        a, b = x, y

def line_arcs(line, junctions, registry):
    return [registry.add(arc) for arc in extract.cut_line(line, junctions)]

def ring_arcs(ring, junctions, registry):
    arcs = extract.cut_ring(ring, junctions)
    if arcs is None:
        return [registry.add_ring(ring)]
    return [registry.add(arc) for arc in arcs]

def rewrite(geom, junctions, registry):
    """
    Given a cleaned geometry, registers its lines and rings as shared arcs
    and returns a topology object that references these arc indexes.
    """
    typ = geom['type']
    coords = geom.get('coordinates')
    if typ == 'GeometryCollection':
        obj = {'type': typ,
               'geometries': [rewrite(g, junctions, registry) for g in geom['geometries']]}
    elif typ == 'Point':
        obj = {'type': typ, 'coordinates': list(coords)}
    elif typ == 'MultiPoint':
        obj = {'type': typ, 'coordinates': [list(p) for p in coords]}
    elif typ == 'LineString':
        obj = {'type': typ,
               'arcs': line_arcs(coords, junctions, registry) if coords else []}
    elif typ == 'MultiLineString':
        obj = {'type': typ,
               'arcs': [line_arcs(line, junctions, registry) for line in coords]}
    elif typ == 'Polygon':
        obj = {'type': typ,
               'arcs': [ring_arcs(ring, junctions, registry) for ring in coords]}
    elif typ == 'MultiPolygon':
        obj = {'type': typ,
               'arcs': [[ring_arcs(ring, junctions, registry) for ring in poly]
                        for poly in coords]}
    else:
        # null geometry
        obj = {'type': None}

    if 'id' in geom:
        obj['id'] = geom['id']
    if 'properties' in geom:
        obj['properties'] = geom['properties']
    return obj

def parse_options(options, **kwargs):
    """Merges an options mapping with keyword arguments, keywords taking precedence."""
    opts = {'quantization': None, 'property_filter': None}
    for key, value in (options or {}).items():
        if key not in OPTION_NAMES:
            raise OptionError('Unknown topology option: {!r}'.format(key))
        opts[OPTION_NAMES[key]] = value
    for key, value in kwargs.items():
        if value is not None:
            opts[key] = value
    return opts

def topology(objects, options=None, quantization=None, property_filter=None):
    """
    Convert a mapping of named GeoJSON objects to TopoJSON.

    Lines and rings are cut wherever boundaries meet, and every resulting
    arc is stored once in the topology's 'arcs' list. Objects reference arcs
    by index, a negative index ~i meaning arc i traversed in reverse.

    Quantization divides the entire area covered by the topology into n
    discrete grid cells per axis. Each coordinate is snapped to the closest
    grid cell, arcs are delta-encoded, and the 'transform' needed to decode
    them is stored with the topology. When quantization is 0 or not given,
    coordinates are kept as they are and there is no transform.

    The property filter is called with each feature property key and
    returns the key to store it under, or None to drop it. Without a filter
    no properties are kept.

    Options may also be passed as a mapping using the names 'quantization'
    and 'property-filter'.
    """
    opts = parse_options(options, quantization=quantization, property_filter=property_filter)
    if not hasattr(objects, 'items'):
        raise InputError('Input objects must be a mapping of name to object, not {!r}'.format(type(objects).__name__))

    # unwrap features
    objects = normalize.normalize_objects(objects, opts['property_filter'])
    logger.debug('normalized %d objects', len(objects))

    # compute transform and snap to grid
    transform = None
    level = quantize.quantization_level(opts['quantization'])
    if level:
        transform = quantize.compute_transform(quantize.bounds(objects), level)
        objects = quantize.quantize_objects(objects, transform)
        logger.debug('quantized to %d cells per axis, transform %s', level, transform)

    # cut into arcs and register them
    objects = extract.clean_objects(objects)
    junctions = extract.find_junctions(objects)
    logger.debug('found %d junctions', len(junctions))
    registry = ArcRegistry()
    layers = {name: rewrite(geom, junctions, registry)
              for name, geom in objects.items()}
    logger.debug('extracted %d arcs', len(registry))

    topo = {'type': 'Topology'}
    if transform is not None:
        topo['transform'] = transform
        topo['arcs'] = [list(delta_encode(arc)) for arc in registry.arcs]
    else:
        topo['arcs'] = [[list(p) for p in arc] for arc in registry.arcs]
    topo['objects'] = layers
    return topo
