from concurrent import futures

import numpy
import numpy.testing as npt
from scipy import special

from polycurve.control_path import ControlPath
from polycurve.group_iterator import GroupIterator
from polycurve.multi_path import MultiPath
from polycurve.natural_cubic import NaturalCubicSpline
from polycurve.scratch import PascalsTriangle, ScratchCache


def test_pascals_triangle_matches_binomials():
    triangle = PascalsTriangle()
    for n in range(40):
        npt.assert_allclose(triangle.row(n), special.comb(n, numpy.arange(n + 1)), rtol=1e-12)
    assert triangle.nCr(5, 2) == 10
    assert triangle.nCr(5, 6) == 0
    assert triangle.num_rows() == 40


def test_pascals_triangle_overflow():
    triangle = PascalsTriangle()
    # 1030 control points (n = 1029) is the largest curve with finite coefficients
    assert numpy.isfinite(triangle.row(1029)).all()
    row = triangle.row(1030)
    assert not numpy.isfinite(row).all()
    assert numpy.isinf(row[515])
    assert not numpy.isnan(row).any()
    assert row[0] == row[-1] == 1


def test_buffer_grows_and_never_shrinks():
    scratch = ScratchCache()
    assert scratch.buffer_shape('a') is None
    view = scratch.buffer('a', (3, 2))
    assert view.shape == (3, 2)
    assert scratch.buffer_shape('a') == (6, 4)
    view[:] = 7
    # a request that fits reuses the same memory
    again = scratch.buffer('a', (2, 2))
    assert (again == 7).all()
    assert scratch.buffer_shape('a') == (6, 4)
    scratch.buffer('a', (10, 1))
    assert scratch.buffer_shape('a') == (20, 4)


def test_reset_memory():
    scratch = ScratchCache()
    scratch.buffer('a', (3,))
    scratch.buffer('b', (3,))
    scratch.pascals_triangle.row(10)
    scratch.reset_memory(['a'])
    assert scratch.buffer_shape('a') is None
    assert scratch.buffer_shape('b') == (6,)
    assert scratch.pascals_triangle.num_rows() == 11
    scratch.reset_memory()
    assert scratch.buffer_shape('b') is None
    assert scratch.pascals_triangle.num_rows() == 1


def test_one_cache_per_thread():
    def flatten(seed):
        points = numpy.random.RandomState(seed).normal(size=(12, 2))
        path = ControlPath(points)
        spline = NaturalCubicSpline(path, GroupIterator([(0, 11)]), ScratchCache())
        spline.set_sample_limit(6)
        out = MultiPath(2, flatness=1e-6)
        for i in range(5):
            spline.append_to(out)
        return out.points

    serial = [flatten(seed) for seed in range(8)]
    with futures.ThreadPoolExecutor(4) as pool:
        threaded = list(pool.map(flatten, range(8)))
    for a, b in zip(serial, threaded):
        npt.assert_array_equal(a, b)
