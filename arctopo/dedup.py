"""
Registry of the shared arcs of one topology.

Arcs are identified by their exact sequence of positions. An arc that was
already seen, in the same or the opposite direction, is referenced rather
than stored again: a non-negative reference i means arc i traversed forward,
and ~i (that is -i - 1) means arc i traversed backward.
"""

def arc_index(ref):
    """Returns the index of the arc a signed reference points to."""
    return ref if ref >= 0 else ~ref

def min_rotation(seq):
    """Returns the lexicographically smallest rotation of a sequence of positions."""
    low = min(seq)
    return min(seq[i:] + seq[:i] for i, p in enumerate(seq) if p == low)

class ArcRegistry(object):

    def __init__(self):
        self.arcs = []
        self._refs = {}
        self._rings = {}

    def __len__(self):
        return len(self.arcs)

    def _register(self, arc):
        self.arcs.append(tuple(arc))
        return len(self.arcs) - 1

    def add(self, arc):
        """Returns the reference for an arc cut at junctions, registering it if new."""
        key = tuple(arc)
        ref = self._refs.get(key)
        if ref is None:
            ref = self._register(key)
            self._refs[key] = ref
            # a palindromic arc keeps its forward reference
            self._refs.setdefault(key[::-1], ~ref)
        return ref

    def add_ring(self, ring):
        """
        Returns the reference for a closed ring without junctions. Such rings
        have no fixed start, so a ring equal to a registered one up to rotation
        references it.
        """
        vertices = tuple(ring[:-1])
        key = min_rotation(vertices)
        ref = self._rings.get(key)
        if ref is None:
            ref = self._register(ring)
            self._rings[key] = ref
            self._rings.setdefault(min_rotation(vertices[::-1]), ~ref)
        return ref
