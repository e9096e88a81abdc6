import numpy
import numpy.testing as npt
import pytest
from scipy import special

from polycurve import errors
from polycurve import multi_path
from polycurve.bezier import BezierCurve
from polycurve.control_path import ControlPath
from polycurve.group_iterator import GroupIterator
from polycurve.multi_path import MultiPath
from polycurve.scratch import ScratchCache


def make_curve(points, control_string='0:n-1', scratch=None):
    path = ControlPath(points)
    gi = GroupIterator.from_control_string(control_string, path.num_points())
    return BezierCurve(path, gi, scratch)


def bernstein(points, t):
    points = numpy.asarray(points, dtype=float)
    m = len(points)
    i = numpy.arange(m)
    weights = special.comb(m - 1, i) * (1 - t)**(m - 1 - i) * t**i
    return (weights[:, numpy.newaxis] * points).sum(axis=0)


def test_quadratic_flattening():
    curve = make_curve([(0, 0), (1, 2), (2, 0)])
    curve.set_sample_limit(1)
    out = MultiPath(2)
    curve.append_to(out)
    npt.assert_allclose(out.points, [[0, 0], [1, 1], [2, 0]])
    assert out.get_type(0) == multi_path.MOVE_TO
    assert out.get_type(1) == out.get_type(2) == multi_path.LINE_TO


@pytest.mark.parametrize('m', [1, 2, 3, 7, 20])
def test_endpoints(m):
    points = numpy.random.RandomState(m).uniform(-10, 10, size=(m, 3))
    curve = make_curve(points)
    npt.assert_allclose(curve.eval(0.0), points[0])
    npt.assert_allclose(curve.eval(1.0), points[-1])


@pytest.mark.parametrize('m', [4, 11])
def test_matches_bernstein_form(m):
    points = numpy.random.RandomState(0).normal(size=(m, 2))
    curve = make_curve(points)
    for t in numpy.linspace(0, 1, 9):
        npt.assert_allclose(curve.eval(t), bernstein(points, t), atol=1e-12)


def test_group_iterator_order_is_used():
    points = [(0, 0), (1, 2), (2, 0)]
    forward = make_curve(points)
    backward = make_curve(points, '2:0')
    npt.assert_allclose(backward.eval(0.25), forward.eval(0.75))
    npt.assert_allclose(backward.eval(0.0), [2, 0])


def test_out_of_range_is_a_no_op():
    path = ControlPath([(0, 0), (1, 2), (2, 0)])
    curve = BezierCurve(path, GroupIterator([(0, 3)]))
    out = MultiPath(2)
    curve.append_to(out)
    assert out.num_points() == 0


def test_interval():
    points = [(0, 0), (1, 2), (2, 0), (4, 4)]
    curve = make_curve(points)
    curve.set_interval(0.25, 0.75)
    curve.set_sample_limit(3)
    out = MultiPath(2)
    curve.append_to(out)
    npt.assert_allclose(out.points[0], bernstein(points, 0.25))
    npt.assert_allclose(out.points[-1], bernstein(points, 0.75))
    assert curve.t_min() == 0.25 and curve.t_max() == 0.75


def test_invalid_settings():
    curve = make_curve([(0, 0), (1, 1)])
    with pytest.raises(errors.InvalidArgumentError):
        curve.set_interval(1, 0)
    with pytest.raises(errors.InvalidArgumentError):
        curve.set_sample_limit(-1)
    with pytest.raises(errors.InvalidArgumentError):
        curve.set_sample_limit(1.5)
    curve.set_interval(0.5, 0.5)
    curve.set_sample_limit(numpy.int64(3))
    assert curve.get_sample_limit() == 3


def test_sample_limit_zero():
    curve = make_curve([(0, 0), (1, 2), (2, 0)])
    curve.set_sample_limit(0)
    out = MultiPath(2)
    curve.append_to(out)
    npt.assert_allclose(out.points, [[0, 0], [2, 0]])


def test_connect():
    curve = make_curve([(0, 0), (1, 2), (2, 0)])
    curve.set_connect(True)
    assert curve.get_connect()
    out = MultiPath(2)
    out.move_to((-1, -1))
    curve.append_to(out)
    assert out.get_type(1) == multi_path.LINE_TO
    assert len(out.subpaths()) == 1


def test_append_is_repeatable():
    curve = make_curve([(0, 0), (1, 5), (3, -2), (4, 1)])
    curve.set_sample_limit(5)
    first = MultiPath(2)
    second = MultiPath(2)
    curve.append_to(first)
    curve.append_to(second)
    npt.assert_array_equal(first.points, second.points)
    assert first.num_points() > 3


def test_lower_output_dimension():
    curve = make_curve([(0, 0, 7), (1, 2, 7), (2, 0, 7)])
    out = MultiPath(2)
    curve.append_to(out)
    npt.assert_allclose(out.points[0], [0, 0])
    with pytest.raises(errors.InvalidConfigurationError):
        curve.append_to(MultiPath(4))


def test_coefficient_overflow_drops_terms():
    # C(1099, i) is infinite for 324 central i; those terms are left out and
    # the finite weights that follow are applied to the next unused points
    m = 1100
    points = numpy.arange(m, dtype=float)[:, numpy.newaxis]
    curve = make_curve(points)
    row = curve.scratch.pascals_triangle.row(m - 1)
    finite = numpy.isfinite(row)
    assert (~finite).sum() == 324
    npt.assert_allclose(curve.eval(0.0), [0])
    # only the last weight is nonzero, and it falls on point 1099 - 324
    npt.assert_allclose(curve.eval(1.0), [775])

    t = 0.7
    i = numpy.arange(m)[finite]
    weights = (1 - t)**(m - 1 - i) * t**i * row[finite]
    expected = (weights * numpy.arange(len(i))).sum()
    middle = curve.eval(t)
    npt.assert_allclose(middle, [expected], rtol=1e-4)
    assert middle[0] == pytest.approx(445.27, rel=1e-3)


def test_no_overflow_for_small_curves():
    curve = make_curve(numpy.ones((20, 2)))
    npt.assert_allclose(curve.eval(0.3), [1, 1])


def test_shared_scratch_matches_private():
    scratch = ScratchCache()
    a = make_curve([(0, 0), (1, 3), (2, 0)], scratch=scratch)
    b = make_curve([(0, 0), (1, 1), (2, 2), (5, 1), (6, 0)], scratch=scratch)
    out_shared = MultiPath(2)
    a.append_to(out_shared)
    b.append_to(out_shared)
    out_private = MultiPath(2)
    make_curve([(0, 0), (1, 3), (2, 0)]).append_to(out_private)
    make_curve([(0, 0), (1, 1), (2, 2), (5, 1), (6, 0)]).append_to(out_private)
    npt.assert_array_equal(out_shared.points, out_private.points)


def test_reset_memory():
    curve = make_curve([(0, 0), (1, 3), (2, 0)])
    curve.eval(0.5)
    assert curve.scratch.buffer_shape('bezier_powers') is not None
    assert curve.scratch.pascals_triangle.num_rows() == 3
    curve.reset_memory()
    assert curve.scratch.buffer_shape('bezier_powers') is None
    assert curve.scratch.pascals_triangle.num_rows() == 1
    npt.assert_allclose(curve.eval(0.5), [1, 1.5])
