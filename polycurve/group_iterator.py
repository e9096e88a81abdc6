import collections
import re

from .errors import InvalidArgumentError

GroupCursor = collections.namedtuple('GroupCursor', ['index_i', 'count_j'])
GroupCursor.__doc__ = """Saved position of a GroupIterator.

index_i: which index range the iterator is in.
count_j: how many indices of that range have already been returned."""

_BOUND = re.compile(r'\s*(?:(n)\s*(?:([+-])\s*(\d+))?|([+-]?\d+))\s*')

def _parse_bound(text, n):
    match = _BOUND.fullmatch(text)
    if match is None:
        raise InvalidArgumentError('Cannot parse control-string index "{}".'.format(text.strip()))
    n_var, sign, offset, literal = match.groups()
    if literal is not None:
        return int(literal)
    if n is None:
        raise InvalidArgumentError('Control-string uses "n" but no point count was given.')
    if offset is None:
        return n
    return n + int(offset) if sign == '+' else n - int(offset)


class GroupIterator:
    """Produce the sequence of control-path indices that a curve uses.

    The sequence is the concatenation of a list of inclusive index ranges; a
    range whose end is less than its start counts down. For example the ranges
    [(0, 3), (5, 5), (2, 0)] produce 0 1 2 3 5 2 1 0.

    The iterator position is a GroupCursor. Curves that need to rewind save the
    cursor with index_i() / count_j() (or the cursor property) and restore it
    with set(). No other operation moves the cursor except next()."""

    def __init__(self, ranges):
        ranges = [tuple(r) for r in ranges]
        if not ranges:
            raise InvalidArgumentError('At least one index range is required.')
        for r in ranges:
            if len(r) != 2 or not all(isinstance(v, int) and not isinstance(v, bool) for v in r):
                raise InvalidArgumentError('Index ranges must be pairs of integers, not {!r}.'.format(r))
        self._ranges = ranges
        self._lengths = [abs(end - start) + 1 for start, end in ranges]
        self.group_size = sum(self._lengths)
        self._i = 0
        self._j = 0

    @classmethod
    def from_control_string(cls, control_string, n=None):
        """Build an iterator from a control-string such as "0:n-1" or "0:3,5,2:0".

        Parameters:
            control_string: comma-separated terms, each an index "a" or an
                inclusive range "a:b". Each index is an integer or one of
                "n", "n-k", "n+k" for integer k.
            n: value substituted for "n", normally the number of control points.
        """
        ranges = []
        for term in control_string.split(','):
            bounds = term.split(':')
            if len(bounds) == 1:
                start = end = _parse_bound(bounds[0], n)
            elif len(bounds) == 2:
                start, end = (_parse_bound(b, n) for b in bounds)
            else:
                raise InvalidArgumentError('Cannot parse control-string term "{}".'.format(term.strip()))
            ranges.append((start, end))
        return cls(ranges)

    @property
    def ranges(self):
        return list(self._ranges)

    def get_group_size(self):
        return self.group_size

    def index_i(self):
        return self._i

    def count_j(self):
        return self._j

    @property
    def cursor(self):
        return GroupCursor(self._i, self._j)

    def set(self, index_i, count_j=None):
        """Move the iterator to a previously saved position. Accepts either a
        GroupCursor or the index_i and count_j values separately."""
        if count_j is None:
            if not isinstance(index_i, tuple) or len(index_i) != 2:
                raise TypeError('set() requires a GroupCursor or both index_i and count_j.')
            index_i, count_j = index_i
        if not 0 <= index_i <= len(self._ranges):
            raise IndexError('index_i {} out of bounds'.format(index_i))
        if index_i < len(self._ranges) and not 0 <= count_j < self._lengths[index_i]:
            raise IndexError('count_j {} out of bounds for range {}'.format(count_j, index_i))
        self._i = index_i
        self._j = count_j

    def reset(self):
        self.set(0, 0)

    def has_next(self):
        return self._i < len(self._ranges)

    def next(self):
        """Return the next control-path index and advance the cursor."""
        if self._i >= len(self._ranges):
            raise IndexError('group iterator exhausted')
        start, end = self._ranges[self._i]
        step = 1 if end >= start else -1
        index = start + step * self._j
        self._j += 1
        if self._j == self._lengths[self._i]:
            self._i += 1
            self._j = 0
        return index

    def indices(self):
        """Return the whole index sequence as a list, leaving the cursor alone."""
        out = []
        for start, end in self._ranges:
            step = 1 if end >= start else -1
            out.extend(range(start, end + step, step))
        return out

    def is_in_range(self, lower, upper):
        """True if every index produced lies in [lower, upper)."""
        for start, end in self._ranges:
            if min(start, end) < lower or max(start, end) >= upper:
                return False
        return True

    def __repr__(self):
        return 'GroupIterator({!r})'.format(self._ranges)
