import numpy

from .errors import InvalidArgumentError

def as_point(point):
    """Return a read-only float64 copy of a point given as any 1-d sequence."""
    point = numpy.array(point, dtype=float)
    if point.ndim != 1 or len(point) == 0:
        raise InvalidArgumentError('A point must be a non-empty 1-d sequence of coordinates.')
    point.flags.writeable = False
    return point


class ControlPath:
    """Ordered sequence of n-dimensional control points shared by one or more
    curves.

    Curves hold a reference to the path and read from it on every append_to()
    call, so the path must not be modified while a curve is being evaluated.
    All points in a path have the same dimension, which is fixed by the first
    point added."""

    def __init__(self, points=()):
        self._points = []
        for point in points:
            self.add_point(point)

    def _check(self, point):
        point = as_point(point)
        if self._points and len(point) != len(self._points[0]):
            raise InvalidArgumentError('Point of dimension {} does not match control path dimension {}.'.format(
                len(point), len(self._points[0])))
        return point

    def add_point(self, point):
        self._points.append(self._check(point))

    def insert_point(self, point, index):
        self._points.insert(index, self._check(point))

    def set_point(self, point, index):
        """Replace the point at index, returning the old point."""
        old = self._points[index]
        self._points[index] = self._check(point)
        return old

    def remove_point(self, index):
        return self._points.pop(index)

    def get_point(self, index):
        return self._points[index]

    def num_points(self):
        return len(self._points)

    def dimension(self):
        """Dimension of the points in the path, or 0 if the path is empty."""
        return len(self._points[0]) if self._points else 0

    @property
    def points(self):
        """Array of shape (num_points, dimension) holding a copy of all points."""
        if not self._points:
            return numpy.empty((0, 0), dtype=float)
        return numpy.array(self._points)

    def __len__(self):
        return len(self._points)

    def __iter__(self):
        return iter(self._points)

    def __repr__(self):
        return 'ControlPath({})'.format([list(p) for p in self._points])
