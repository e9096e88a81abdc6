import logging

import numpy

logger = logging.getLogger(__name__)

class PascalsTriangle:
    """Cache of binomial coefficients C(n, r), computed in floating point by
    summing rows of Pascal's triangle.

    Rows are built on demand and kept. Double precision cannot hold the
    central coefficients beyond about n = 1030 (C(1031, 515) overflows), so
    for large n some entries are inf; callers must check with numpy.isfinite."""

    def __init__(self):
        self._rows = [numpy.ones(1)]

    def row(self, n):
        """Return the array [C(n, 0), ..., C(n, n)]. Do not modify it."""
        if n < 0:
            raise ValueError('n >= 0 required.')
        with numpy.errstate(over='ignore'):
            while len(self._rows) <= n:
                prev = self._rows[-1]
                row = numpy.empty(len(prev) + 1)
                row[0] = row[-1] = 1
                numpy.add(prev[:-1], prev[1:], out=row[1:-1])
                self._rows.append(row)
        return self._rows[n]

    def nCr(self, n, r):
        if not 0 <= r <= n:
            return 0.0
        return self.row(n)[r]

    def num_rows(self):
        return len(self._rows)


class ScratchCache:
    """Reusable numeric buffers for curve evaluation.

    Several curves can share one cache to avoid reallocating buffers, as long
    as they are evaluated one at a time: the buffers, and the segment counters
    stored here, are overwritten by every append_to() call. A cache must never
    be used from more than one thread; give each thread its own.

    Buffers grow (to twice the requested size) when too small and are never
    shrunk; reset_memory() releases all of them."""

    def __init__(self):
        self.pascals_triangle = PascalsTriangle()
        self._buffers = {}
        # natural cubic spline: index of the segment eval() uses
        self.segment = 0
        # cubic B-spline: basis class (point count) and section within it
        self.bspline_num_points = -1
        self.bspline_section = 2

    def buffer(self, name, shape):
        """Return a writable view of shape 'shape' on the named buffer,
        growing the underlying array if needed. Contents are not cleared."""
        shape = tuple(shape)
        current = self._buffers.get(name)
        if current is None or current.ndim != len(shape) or any(c < s for c, s in zip(current.shape, shape)):
            if current is None or current.ndim != len(shape):
                old_shape = (0,) * len(shape)
            else:
                old_shape = current.shape
            new_shape = tuple(o if o >= s else 2*s for o, s in zip(old_shape, shape))
            logger.debug('growing scratch buffer %s to %s', name, new_shape)
            current = numpy.zeros(new_shape)
            self._buffers[name] = current
        return current[tuple(slice(0, s) for s in shape)]

    def buffer_shape(self, name):
        """Allocated shape of the named buffer, or None if not allocated."""
        current = self._buffers.get(name)
        return None if current is None else current.shape

    def reset_memory(self, names=None):
        """Release the named buffers (all buffers if names is None). Only
        memory use is affected: released buffers are reallocated on demand."""
        if names is None:
            names = list(self._buffers)
            self.pascals_triangle = PascalsTriangle()
        for name in names:
            self._buffers.pop(name, None)
        logger.debug('released scratch buffers %s', names)

    def release_binomials(self):
        """Drop the cached rows of Pascal's triangle."""
        self.pascals_triangle = PascalsTriangle()
        logger.debug('released binomial coefficient cache')
