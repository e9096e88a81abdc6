import logging

import numpy

from . import parametric_curve

logger = logging.getLogger(__name__)

class BezierCurve(parametric_curve.ParametricCurve):
    """General n-point Bezier curve over every point the group iterator selects.

    A point at parameter t is the Bernstein-weighted sum
        sum_i C(m-1, i) * (1-t)**(m-1-i) * t**i * P_i
    over the m selected points P_i, in iteration order. Evaluation is O(m):
    the powers of (1-t) and of t are built by repeated multiplication into a
    scratch buffer, and the binomial coefficients come from the scratch
    cache's Pascal's triangle.

    Precision limit: double precision cannot represent C(m-1, i) for central i
    once m exceeds about 1030. Terms whose coefficient is not finite are left
    out of the sum entirely, and no control point is consumed for them: the
    next finite weight is applied to the point the dropped term would have
    used, and the last points of the group go unused. Curves with that many
    points are therefore only approximate.

    Unlike the other curves, a group iterator that is out of range for the
    control path is not an error: append_to() simply adds nothing.
    """

    _scratch_buffers = ('bezier_powers',)

    def reset_memory(self):
        """Release the power buffer and the cached binomial coefficients."""
        super().reset_memory()
        self.scratch.release_binomials()

    def _weights(self, t, m):
        powers = self.scratch.buffer('bezier_powers', (2, m))
        one_minus_t, t_powers = powers
        one_minus_t[0] = 1
        one_minus_t[1:] = 1 - t
        numpy.multiply.accumulate(one_minus_t, out=one_minus_t)
        t_powers[0] = 1
        t_powers[1:] = t
        numpy.multiply.accumulate(t_powers, out=t_powers)
        coefficients = self.scratch.pascals_triangle.row(m - 1)
        finite = numpy.isfinite(coefficients)
        # one_minus_t holds ascending powers; reversed it gives (1-t)**(m-1-i)
        weights = one_minus_t[::-1] * t_powers * numpy.where(finite, coefficients, 0)
        return weights, finite

    def eval(self, t, dimension=None):
        dimension = self._dimension(dimension)
        gi = self.group_iterator
        m = gi.get_group_size()
        weights, finite = self._weights(t, m)
        point = numpy.zeros(dimension)
        gi.set(0, 0)
        for weight, use in zip(weights, finite):
            # a dropped term consumes no control point: the next finite
            # weight goes to the point that would have been used here
            if use:
                location = self.control_path.get_point(gi.next())
                point += location[:dimension] * weight
        return point

    def append_to(self, multi_path):
        """Append the curve over [t_min(), t_max()] to multi_path. If the group
        iterator is not in range for the control path, nothing is added."""
        if not self.group_iterator.is_in_range(0, self.control_path.num_points()):
            logger.debug('group iterator out of range: Bezier curve skipped')
            return
        dimension = self._dimension(multi_path.get_dimension())
        m = self.group_iterator.get_group_size()
        coefficients = self.scratch.pascals_triangle.row(m - 1)
        dropped = (~numpy.isfinite(coefficients)).sum()
        if dropped:
            logger.debug('%d of %d Bezier terms dropped: binomial coefficients overflow', dropped, m)
        start = multi_path.num_points()
        self._start(multi_path, self.eval(self._t_min, dimension))
        self._flatten(self._t_min, self._t_max, multi_path)
        logger.debug('Bezier curve of %d points added %d vertices', m, multi_path.num_points() - start)
