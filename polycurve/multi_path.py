import numbers

import numpy

from .errors import InvalidArgumentError

MOVE_TO = 'move_to'
LINE_TO = 'line_to'

DEFAULT_FLATNESS = 1e-3

class MultiPath:
    """Output sink for flattened curves: a sequence of polyline vertices of a
    fixed dimension, grouped into sub-paths.

    move_to() starts a new sub-path and line_to() extends the current one.
    Points passed in may be longer than the dimension (for example an
    evaluation buffer that carries extra values); only the first 'dimension'
    coordinates are stored.

    The flatness attribute is the tolerance used when curves are flattened
    into this path: a piece of curve is replaced by a straight line once its
    midpoint lies within 'flatness' of the chord."""

    def __init__(self, dimension, flatness=DEFAULT_FLATNESS):
        if not isinstance(dimension, numbers.Integral) or dimension < 1:
            raise InvalidArgumentError('Dimension must be a positive integer.')
        self._dimension = int(dimension)
        self._points = []
        self._types = []
        self.flatness = flatness

    @property
    def flatness(self):
        return self._flatness

    @flatness.setter
    def flatness(self, value):
        if not value > 0:
            raise InvalidArgumentError('Flatness must be > 0.')
        self._flatness = float(value)

    def get_dimension(self):
        return self._dimension

    def _append(self, point, kind):
        point = numpy.asarray(point, dtype=float)
        if point.ndim != 1 or len(point) < self._dimension:
            raise InvalidArgumentError('Point must have at least {} coordinates.'.format(self._dimension))
        self._points.append(numpy.array(point[:self._dimension]))
        self._types.append(kind)

    def move_to(self, point):
        self._append(point, MOVE_TO)

    def line_to(self, point):
        # a line with nowhere to start from begins the first sub-path
        self._append(point, LINE_TO if self._points else MOVE_TO)

    def num_points(self):
        return len(self._points)

    def __len__(self):
        return len(self._points)

    def get_point(self, index):
        return self._points[index]

    def get_type(self, index):
        return self._types[index]

    @property
    def points(self):
        """Array of shape (num_points, dimension) of all vertices, in order."""
        if not self._points:
            return numpy.empty((0, self._dimension), dtype=float)
        return numpy.array(self._points)

    def subpaths(self):
        """Return a list of arrays of shape (k, dimension), one per sub-path."""
        out = []
        start = 0
        for i, kind in enumerate(self._types):
            if kind == MOVE_TO and i > start:
                out.append(numpy.array(self._points[start:i]))
                start = i
        if self._points:
            out.append(numpy.array(self._points[start:]))
        return out

    def reset(self):
        """Remove all vertices, keeping the dimension and flatness."""
        self._points = []
        self._types = []
