"""
Quantization onto an integer grid.

Quantization divides the area covered by the topology into n discrete grid
cells per axis. Each coordinate is snapped to the closest grid cell, and the
transform needed to get back to the original coordinates is stored with the
topology as {'scale': [sx, sy], 'translate': [tx, ty]}, such that
raw = translate + scale * quantized.
"""

import math

from .errors import OptionError
from .normalize import COORDINATE_DEPTHS, iter_positions

def quantization_level(quantization):
    """Returns the grid size as an int, or 0 if quantization is disabled."""
    if quantization is None or quantization is False:
        return 0
    if isinstance(quantization, bool) or not isinstance(quantization, (int, float)):
        raise OptionError('Quantization must be an integer, not {!r}'.format(quantization))
    if isinstance(quantization, float):
        if not quantization.is_integer():
            raise OptionError('Quantization must be a whole number, not {!r}'.format(quantization))
        quantization = int(quantization)
    if quantization == 0:
        return 0
    if quantization < 2:
        raise OptionError('Quantization must be 0 (disabled) or at least 2, not {}'.format(quantization))
    return quantization

def bounds(objects):
    """Returns the (xmin, ymin, xmax, ymax) of all geometries, or None if there are no coordinates."""
    xmin = ymin = math.inf
    xmax = ymax = -math.inf
    for geom in objects.values():
        for x, y in iter_positions(geom):
            if x < xmin: xmin = x
            if x > xmax: xmax = x
            if y < ymin: ymin = y
            if y > ymax: ymax = y
    if xmin > xmax:
        return None
    return xmin, ymin, xmax, ymax

def compute_transform(bbox, quantization):
    if bbox is None:
        return {'scale': [1, 1], 'translate': [0, 0]}
    xmin, ymin, xmax, ymax = bbox
    # zero extent along an axis collapses that axis onto 0
    kx = (xmax - xmin) / (quantization - 1)
    ky = (ymax - ymin) / (quantization - 1)
    return {'scale': [kx, ky],
            'translate': [xmin, ymin]}

class Quantizer(object):
    """Maps raw positions onto the grid described by a transform."""

    def __init__(self, transform):
        self.sx, self.sy = transform['scale']
        self.tx, self.ty = transform['translate']

    def __call__(self, point):
        x, y = point
        # halves round up, not to even; a zero scale means a degenerate axis
        a = int(math.floor((x - self.tx) / self.sx + 0.5)) if self.sx else 0
        b = int(math.floor((y - self.ty) / self.sy + 0.5)) if self.sy else 0
        return a, b

def quantize_coordinates(coords, depth, quantize):
    if depth == 1:
        return quantize(coords)
    return [quantize_coordinates(c, depth - 1, quantize) for c in coords]

def quantize_geometry(geom, quantize):
    typ = geom['type']
    out = dict(geom)
    if typ == 'GeometryCollection':
        out['geometries'] = [quantize_geometry(g, quantize) for g in geom['geometries']]
    elif typ in COORDINATE_DEPTHS:
        coords = geom['coordinates']
        if typ == 'Point' and not coords:
            return out
        out['coordinates'] = quantize_coordinates(coords, COORDINATE_DEPTHS[typ], quantize)
    return out

def quantize_objects(objects, transform):
    """Returns a copy of the normalized objects with every position on the integer grid."""
    quantize = Quantizer(transform)
    return {name: quantize_geometry(geom, quantize)
            for name, geom in objects.items()}
