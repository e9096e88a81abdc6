import logging

import numpy

from . import parametric_curve

logger = logging.getLogger(__name__)

class NaturalCubicSpline(parametric_curve.ParametricCurve):
    """Piecewise cubic curve passing through every point the group iterator
    selects, with continuous first and second derivatives.

    Segment i runs from selected point i to point i+1 as its local parameter
    goes from 0 to 1. An open spline has zero second derivative at both ends
    (the "natural" end condition) and m-1 segments for m points. A closed
    spline has an extra segment from the last point back to the first, with
    derivatives continuous across that join.

    The solve computes, per dimension, the curve's derivative at each point
    from a tri-diagonal system (a cyclic one when closed), then the
    coefficients w, x, y, z of each segment's polynomial
        w + x*t + y*t**2 + z*t**3
    which are kept in the scratch cache. eval() evaluates the segment selected
    by set_segment(); append_to() does all of this for each segment in turn.
    """

    _scratch_buffers = ('spline_points', 'spline_tridiagonal', 'spline_rhs', 'spline_coefficients')

    def __init__(self, control_path, group_iterator, scratch=None):
        super().__init__(control_path, group_iterator, scratch)
        self._closed = False

    def get_closed(self):
        return self._closed

    def set_closed(self, closed):
        """Choose the closed (periodic) or open (natural end condition) spline.
        The default is open."""
        self._closed = bool(closed)

    def num_segments(self):
        m = self.group_iterator.get_group_size()
        return m if self._closed else m - 1

    def set_segment(self, index):
        """Select the segment that eval() uses. The selection lives in the
        scratch cache, so it must be made immediately before evaluating."""
        self.scratch.segment = index

    def precompute(self):
        """Stage the selected control points and solve for the segment
        coefficients. Requires a valid group iterator (see append_to)."""
        gi = self.group_iterator
        m = gi.get_group_size()
        dim = self.control_path.dimension()
        points = self.scratch.buffer('spline_points', (m, dim))
        gi.set(0, 0)
        for i in range(m):
            points[i] = self.control_path.get_point(gi.next())
        coefficients = self.scratch.buffer('spline_coefficients', (4, m, dim))
        if self._closed:
            derivatives = self._solve_closed(points)
        else:
            derivatives = self._solve_open(points)
        w, x, y, z = coefficients
        nxt = numpy.roll(numpy.arange(m), -1)
        w[:] = points
        x[:] = derivatives
        y[:] = 3*(points[nxt] - points) - 2*derivatives - derivatives[nxt]
        z[:] = 2*(points - points[nxt]) + derivatives + derivatives[nxt]
        if not self._closed:
            # there is no segment after the last point: hold it constant
            x[-1] = y[-1] = z[-1] = 0
        return coefficients

    def _solve_open(self, points):
        m, dim = points.shape
        n = m - 1
        a = self.scratch.buffer('spline_tridiagonal', (2, m))[0]
        b, c = self.scratch.buffer('spline_rhs', (2, m, dim))
        a[0] = 0.5
        for i in range(1, n):
            a[i] = 1 / (4 - a[i-1])
        a[n] = 1 / (2 - a[n-1])
        b[0] = a[0] * 3*(points[1] - points[0])
        for i in range(1, n):
            b[i] = a[i] * (3*(points[i+1] - points[i-1]) - b[i-1])
        b[n] = a[n] * (3*(points[n] - points[n-1]) - b[n-1])
        c[n] = b[n]
        for i in range(n-1, -1, -1):
            c[i] = b[i] - a[i]*c[i+1]
        return c

    def _solve_closed(self, points):
        m, dim = points.shape
        n = m - 1
        a, d = self.scratch.buffer('spline_tridiagonal', (2, m))
        b, c = self.scratch.buffer('spline_rhs', (2, m, dim))
        # d is the correction for the corner entries coupling the last
        # unknown with the first; h, f, g eliminate that coupling row.
        e = a[1] = d[1] = 0.25
        b[0] = e * 3*(points[1] - points[n])
        h = 4.0
        f = 3*(points[0] - points[n-1])
        g = 1.0
        for i in range(1, n):
            e = a[i+1] = 1 / (4 - a[i])
            d[i+1] = -e * d[i]
            b[i] = e * (3*(points[i+1] - points[i-1]) - b[i-1])
            h -= g * d[i]
            f = f - g*b[i-1]
            g = -a[i] * g
        h -= (g + 1) * (a[n] + d[n])
        b[n] = f - (g + 1)*b[n-1]
        c[n] = b[n] / h
        c[n-1] = b[n-1] - (a[n] + d[n])*c[n]
        for i in range(n-2, -1, -1):
            c[i] = b[i] - a[i+1]*c[i+1] - d[i+1]*c[n]
        return c

    def eval(self, t, dimension=None):
        dimension = self._dimension(dimension)
        m = self.group_iterator.get_group_size()
        coefficients = self.scratch.buffer('spline_coefficients', (4, m, self.control_path.dimension()))
        w, x, y, z = coefficients[:, self.scratch.segment, :dimension]
        return w + t*(x + t*(y + t*z))

    def append_to(self, multi_path):
        """Append the spline to multi_path.

        Raises InvalidConfigurationError, adding nothing, if the group iterator
        is not in range for the control path or selects fewer than 2 points.

        An open spline flattens its m-1 segments; the constant segment held
        after the last point is skipped, so the last vertex is not repeated."""
        self._check_range()
        self._check_group_size(2)
        dimension = self._dimension(multi_path.get_dimension())
        self.precompute()
        self.set_segment(0)
        self._start(multi_path, self.eval(0.0, dimension))
        segments = self.num_segments()
        for i in range(segments):
            # assign absolutely each time: eval reads the shared cursor
            self.set_segment(i)
            self._flatten(0.0, 1.0, multi_path)
        logger.debug('%s natural cubic spline: %d segments flattened',
            'closed' if self._closed else 'open', segments)
