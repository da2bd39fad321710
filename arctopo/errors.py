
class TopologyError(Exception):
    """Base class for everything raised while building or decoding a topology."""

class InputError(TopologyError, ValueError):
    """The input objects are not valid geometries."""

class FilterError(TopologyError):
    """The property filter returned something other than a key or None."""

class OptionError(TopologyError, ValueError):
    """An option passed to topology() is unknown or has an invalid value."""
