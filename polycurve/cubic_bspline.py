import logging

import numpy

from . import parametric_curve

logger = logging.getLogger(__name__)

def basis_weights(num_points, section, t):
    """Return the four cubic B-spline blending weights at local parameter t.

    Parameters:
        num_points: number of points in the whole curve when the endpoints are
            interpolated (4, 5, 6 or more; any value other than 4, 5 or 6 uses
            the table for 7 or more points). Use -1 for the uniform B-spline.
        section: which window of the curve is being evaluated. For 7 or more
            points the sections are 0 and 1 (start), 2 (every interior window),
            3 and 4 (end); fewer points have fewer sections.
        t: local parameter in [0, 1].

    The start and end sections are shaped so that the curve starts exactly at
    the first control point and ends exactly at the last. Section 2 of the
    7-or-more table is the uniform cubic B-spline basis.
    """
    t2 = t * t
    t3 = t2 * t
    u = 1 - t
    u2 = u * u
    u3 = u2 * u

    if num_points == 4:
        # a single cubic Bezier
        return u3, 3*u2*t, 3*u*t2, t3
    elif num_points == 5:
        if section == 0:
            return u3, 7*t3/4 - 9*t2/2 + 3*t, -t3 + 3*t2/2, t3/4
        else:
            return u3/4, -u3 + 3*u2/2, 7*u3/4 - 9*u2/2 + 3*u, t3
    elif num_points == 6:
        if section == 0:
            return u3, 7*t3/4 - 9*t2/2 + 3*t, -11*t3/12 + 3*t2/2, t3/6
        elif section == 1:
            return u3/4, 7*t3/12 - 5*t2/4 + t/4 + 7/12, -7*t3/12 + t2/2 + t/2 + 1/6, t3/4
        else:
            return u3/6, -11*u3/12 + 3*u2/2, 7*u3/4 - 9*u2/2 + 3*u, t3
    else:
        if section == 0:
            return u3, 7*t3/4 - 9*t2/2 + 3*t, -11*t3/12 + 3*t2/2, t3/6
        elif section == 1:
            return u3/4, 7*t3/12 - 5*t2/4 + t/4 + 7/12, -t3/2 + t2/2 + t/2 + 1/6, t3/6
        elif section == 2:
            return u3/6, t3/2 - t2 + 2/3, (-t3 + t2 + t)/2 + 1/6, t3/6
        elif section == 3:
            return u3/6, -u3/2 + u2/2 + u/2 + 1/6, 7*u3/12 - 5*u2/4 + u/4 + 7/12, t3/4
        else:
            return u3/6, -11*u3/12 + 3*u2/2, 7*u3/4 - 9*u2/2 + 3*u, t3


class CubicBSpline(parametric_curve.ParametricCurve):
    """Cubic B-spline built one segment at a time from a sliding window of 4
    control points, so no global solve is needed and each point on the curve
    depends on only 4 control points.

    By default the curve is the uniform cubic B-spline, which passes near but
    not through the control points. With set_interpolate_endpoints(True), the
    first and last segments use modified blending functions so the curve
    starts at the first control point and ends at the last. A closed curve
    results from a control string such as "0:n-1,0:2" with endpoint
    interpolation off.
    """

    _scratch_buffers = ('bspline_window', 'bspline_weights')

    def __init__(self, control_path, group_iterator, scratch=None):
        super().__init__(control_path, group_iterator, scratch)
        self._interpolate_endpoints = False

    def get_interpolate_endpoints(self):
        return self._interpolate_endpoints

    def set_interpolate_endpoints(self, interpolate):
        """If True, the curve starts at the first control point and ends at
        the last. The default is False."""
        self._interpolate_endpoints = bool(interpolate)

    def _window(self):
        return self.scratch.buffer('bspline_window', (4, self.control_path.dimension()))

    def _fill_window(self):
        window = self._window()
        for i in range(4):
            window[i] = self.control_path.get_point(self.group_iterator.next())

    def eval(self, t, dimension=None):
        dimension = self._dimension(dimension)
        weights = self.scratch.buffer('bspline_weights', (4,))
        weights[:] = basis_weights(self.scratch.bspline_num_points, self.scratch.bspline_section, t)
        return numpy.dot(weights, self._window()[:, :dimension])

    def append_to(self, multi_path):
        """Append the B-spline to multi_path, one flattened segment per
        4-point window.

        Raises InvalidConfigurationError, adding nothing, if the group iterator
        is not in range for the control path or selects fewer than 4 points."""
        self._check_range()
        self._check_group_size(4)
        dimension = self._dimension(multi_path.get_dimension())
        n = self.group_iterator.get_group_size()
        scratch = self.scratch
        if self._interpolate_endpoints:
            scratch.bspline_num_points = n
            scratch.bspline_section = 0
        else:
            # the uniform basis everywhere; section never changes
            scratch.bspline_num_points = -1
            scratch.bspline_section = 2

        gi = self.group_iterator
        gi.set(0, 0)
        cursor = gi.cursor
        self._fill_window()
        self._start(multi_path, self.eval(0.0, dimension))

        j = 3
        while True:
            self._flatten(0.0, 1.0, multi_path)
            j += 1
            if j == n:
                break
            # slide the window forward by one index
            gi.set(cursor)
            gi.next()
            cursor = gi.cursor
            self._fill_window()
            if self._interpolate_endpoints:
                if n < 7:
                    scratch.bspline_section += 1
                else:
                    if scratch.bspline_section != 2:
                        scratch.bspline_section += 1
                    if scratch.bspline_section == 2 and j == n - 2:
                        scratch.bspline_section += 1
        logger.debug('cubic B-spline of %d points: %d segments flattened', n, n - 3)
