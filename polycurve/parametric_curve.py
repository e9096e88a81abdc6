import abc
import numbers

from . import approximation
from .errors import InvalidArgumentError, InvalidConfigurationError
from .scratch import ScratchCache

DEFAULT_SAMPLE_LIMIT = 1

class ParametricCurve(abc.ABC):
    """Base class for curves defined by the points of a ControlPath selected
    by a GroupIterator.

    Subclasses implement eval(), which computes one point on the curve, and
    append_to(), which validates the configuration, adds the first point of
    the curve to a MultiPath and flattens the rest with
    approximation.generate_points().

    Parameters:
        control_path: ControlPath holding the points. It is read, never
            modified, and must not change during append_to().
        group_iterator: GroupIterator selecting which control points the curve
            uses and in what order.
        scratch: ScratchCache of reusable buffers. Curves evaluated on the same
            thread may share one; if None the curve gets its own.
    """

    def __init__(self, control_path, group_iterator, scratch=None):
        self.control_path = control_path
        self.group_iterator = group_iterator
        self.scratch = ScratchCache() if scratch is None else scratch
        self._t_min = 0.0
        self._t_max = 1.0
        self._sample_limit = DEFAULT_SAMPLE_LIMIT
        self._connect = False

    @abc.abstractmethod
    def eval(self, t, dimension=None):
        """Return the point on the curve at parameter t as a new array of
        length 'dimension' (the control path's dimension if None)."""

    @abc.abstractmethod
    def append_to(self, multi_path):
        """Append the flattened curve to multi_path."""

    def reset_memory(self):
        """Release the scratch buffers used by this type of curve."""
        self.scratch.reset_memory(self._scratch_buffers)

    _scratch_buffers = ()

    def get_sample_limit(self):
        return self._sample_limit

    def set_sample_limit(self, limit):
        """Set the maximum bisection depth used when flattening the curve;
        see approximation.generate_points(). The default is 1."""
        if not isinstance(limit, numbers.Integral) or limit < 0:
            raise InvalidArgumentError('Sample-limit must be an integer >= 0.')
        self._sample_limit = int(limit)

    def set_interval(self, t_min, t_max):
        """Set the parameter interval the curve is defined on. The default is [0, 1]."""
        if t_min > t_max:
            raise InvalidArgumentError('t_min <= t_max required.')
        self._t_min = float(t_min)
        self._t_max = float(t_max)

    def t_min(self):
        return self._t_min

    def t_max(self):
        return self._t_max

    def get_connect(self):
        return self._connect

    def set_connect(self, connect):
        """If True, the first point of the curve is joined by a line to the
        last point already in the output path; otherwise a new sub-path is
        started."""
        self._connect = bool(connect)

    def _dimension(self, dimension):
        available = self.control_path.dimension()
        if dimension is None:
            return available
        if dimension > available:
            raise InvalidConfigurationError('Control points of dimension {} cannot be evaluated in dimension {}.'.format(
                available, dimension))
        return dimension

    def _check_range(self):
        if not self.group_iterator.is_in_range(0, self.control_path.num_points()):
            raise InvalidConfigurationError('Group iterator not in range.')

    def _check_group_size(self, minimum):
        if self.group_iterator.get_group_size() < minimum:
            raise InvalidConfigurationError('{} requires a group size of at least {}.'.format(
                type(self).__name__, minimum))

    def _start(self, multi_path, point):
        if self._connect:
            multi_path.line_to(point)
        else:
            multi_path.move_to(point)

    def _flatten(self, t_min, t_max, multi_path):
        approximation.generate_points(self, t_min, t_max, multi_path)
