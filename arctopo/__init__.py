"""
Encode GeoJSON-like geometries as a TopoJSON topology of shared arcs.
"""

from . import encode, decode
from .encode import topology
from .errors import TopologyError, InputError, FilterError, OptionError

__version__ = '0.1.0'
