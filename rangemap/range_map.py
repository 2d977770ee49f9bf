import bisect
import itertools

import numpy as np
from sortedcontainers import SortedSet

from .bounds import domain_bounds


def as_column(values, count=None, dtype=None):
    """ Turns a sequence of domain values into a 1D numpy array.

    Non-numeric values are kept as Python objects, so that e.g. tuples or
    strings are compared the way Python compares them.
    """
    if isinstance(values, np.ndarray) and values.ndim == 1 and dtype is None:
        column = values if count is None else values[:count]
        assert count is None or len(column) == count
    else:
        values = list(values if count is None else itertools.islice(
            values, count))
        assert count is None or len(values) == count
        column = np.asarray(values, dtype=dtype) if values else np.empty(
            0, dtype=dtype or object)
        if column.ndim != 1:
            column = np.empty(len(values), dtype=object)
            for i, value in enumerate(values):
                column[i] = value
    if column.dtype.kind not in 'biufmMO':
        column = column.astype(object)
    return column


class RangeMap(object):
    """ Answers stabbing queries on a static set of half-open intervals.

    Given intervals [start_i, end_i), the map returns for a point p the ids
    {i : start_i <= p < end_i}. Building sweeps the interval endpoints once and
    stores a table of breakpoints v_0 < v_1 < ... < v_m, together with the set
    of ids covering every window [v_j, v_{j+1}). A query is then a binary
    search in the breakpoints.

    A build replaces both tables at once; queries only read them. Queries may
    run in parallel, a build may not overlap with anything. To rebuild while
    serving, build a new RangeMap and swap the reference.
    """
    def __init__(self,
                 starts=None,
                 ends=None,
                 count=None,
                 lower=None,
                 upper=None):
        """ Initialize the map, building it if interval columns are given.

        Args:
            starts, ends: interval start and end values, aligned by id.
            count: the number of intervals to use from the columns.
            lower, upper: sentinels below/above every value of the domain;
                by default derived from the values with `domain_bounds`.
        """
        self.lower = lower
        self.upper = upper
        self._tables = (np.empty(0), ())
        if starts is not None and ends is not None:
            self.build(starts, ends, count)

    @classmethod
    def from_intervals(cls, intervals, lower=None, upper=None):
        """ Builds a map from a sequence of (start, end) pairs. """
        intervals = list(intervals)
        result = cls(lower=lower, upper=upper)
        result.build([start for start, _ in intervals],
                     [end for _, end in intervals])
        return result

    @property
    def breakpoints(self):
        """ The (read-only) column of breakpoint values. """
        return self._tables[0]

    @property
    def active_sets(self):
        """ For every breakpoint, the ids covering the window it starts. """
        return self._tables[1]

    @property
    def is_built(self):
        return len(self._tables[1]) > 0

    def _bounds(self, column):
        if self.lower is not None and self.upper is not None:
            return self.lower, self.upper
        lower, upper = domain_bounds(column)
        if self.lower is not None: lower = self.lower
        if self.upper is not None: upper = self.upper
        return lower, upper

    def build(self, starts, ends, count=None):
        """ Builds the tables from interval columns, discarding old ones.

        Intervals with start >= end contain no point and are skipped, but ids
        still refer to positions in the given columns.

        Current complexity: O(N log N), for the sorts and the active set.
        """
        if starts is None or ends is None or count == 0:
            self._tables = (np.empty(0), ())
            return
        if count is None:
            assert len(starts) == len(ends)
        starts = as_column(starts, count)
        ends = as_column(ends, count)
        if starts.dtype != ends.dtype:
            dtype = np.result_type(starts.dtype, ends.dtype)
            starts = starts.astype(dtype)
            ends = ends.astype(dtype)

        # Unordered values like Decimal('NaN') may raise on `<`; skip them.
        if starts.dtype.kind == 'O':
            ids = np.flatnonzero(
                np.array([a == a and b == b for a, b in zip(starts, ends)],
                         dtype=bool))
        else:
            ids = np.arange(len(starts))

        # Argsort the non-empty intervals by start and by end.
        ids = ids[np.asarray(starts[ids] < ends[ids], dtype=bool)]
        num_intervals = len(ids)
        if num_intervals == 0:
            self._tables = (np.empty(0), ())
            return
        by_start = ids[np.argsort(starts[ids], kind='stable')]
        by_end = ids[np.argsort(ends[ids], kind='stable')]
        S = starts[by_start]
        E = ends[by_end]
        by_start = by_start.tolist()
        by_end = by_end.tolist()
        lower, upper = self._bounds(S)
        dtype = starts.dtype
        if dtype.kind != 'O':
            # Explicit sentinels may widen the column, e.g. inf for integers.
            dtype = np.result_type(dtype,
                                   np.asarray(lower).dtype,
                                   np.asarray(upper).dtype)

        breakpoints = []
        active_sets = []
        if S[0] > lower:
            breakpoints.append(lower)
            active_sets.append(())

        # Merge the sorted starts and ends, one distinct value at a time.
        i1 = i2 = 0
        active = SortedSet()
        while i1 < num_intervals or i2 < num_intervals:
            if i1 >= num_intervals or (i2 < num_intervals
                                       and S[i1] >= E[i2]):
                v = E[i2]
            else:
                v = S[i1]
            # Open before closing, so that an interval ending at v is not
            # active in the window starting at v.
            while i1 < num_intervals and S[i1] == v:
                active.add(by_start[i1])
                i1 += 1
            while i2 < num_intervals and E[i2] == v:
                active.discard(by_end[i2])
                i2 += 1

            snapshot = tuple(active)
            assert not breakpoints or breakpoints[-1] < v
            assert not active_sets or active_sets[-1] != snapshot
            breakpoints.append(v)
            active_sets.append(snapshot)

        assert not active
        # The last window is already empty; the closing sentinel repeats it
        # so that the table always ends at the top of the domain.
        if E[-1] < upper:
            breakpoints.append(upper)
            active_sets.append(())
        assert len(breakpoints) <= 2 * num_intervals + 2

        column = as_column(breakpoints, dtype=dtype)
        column.flags.writeable = False
        self._tables = (column, tuple(active_sets))

    def query(self, point):
        """ Returns the ids of all intervals containing `point`.

        The result is a tuple sorted by id.

        Current complexity: O(log N).
        """
        breakpoints, active_sets = self._tables
        # Unordered points (NaN, NaT) lie in no interval.
        if not active_sets or point != point:
            return ()
        i = bisect.bisect_left(breakpoints, point)
        if i < len(breakpoints) and breakpoints[i] == point:
            return active_sets[i]
        if i == 0:
            return ()
        return active_sets[i - 1]

    def query_many(self, points):
        """ Returns `[self.query(p) for p in points]`, vectorized if possible. """
        breakpoints, active_sets = self._tables
        if breakpoints.dtype.kind == 'O' or not active_sets:
            return [self.query(p) for p in points]
        points = np.asarray(points)
        indices = np.searchsorted(breakpoints, points, side='left')
        hits = indices < len(breakpoints)
        hits[hits] = breakpoints[indices[hits]] == points[hits]
        windows = np.where(hits, indices, indices - 1)
        return [active_sets[w] if w >= 0 else () for w in windows.tolist()]

    def __repr__(self):
        breakpoints, active_sets = self._tables
        return r"RangeMap(%s)" % ', '.join(
            '%s: %s' % (v, ids) for v, ids in zip(breakpoints, active_sets))
