r'''
# polycurve

Evaluate parametric curves over a set of control points and flatten them into
polylines.

Input
-----
 - control\_path: ControlPath, an ordered list of n-dimensional control points.
 - group\_iterator: GroupIterator, which selects the control points (by index,
   from a list of index ranges or a control-string like "0:n-1") that a curve uses.

Curves
------
 - parametric\_curve: the ParametricCurve base class shared by all curve types.
 - bezier: n-point Bezier curve (Bernstein basis).
 - natural\_cubic: open or closed natural cubic spline through every control point.
 - cubic\_bspline: cubic B-spline evaluated over a sliding window of 4 control points.

Output
------
 - multi\_path: MultiPath, the polyline sink curves append to.
 - approximation: adaptive binary subdivision used to flatten curves.
 - geometry: point-to-segment distance used as the flatness measure.
 - scratch: ScratchCache of reusable numeric buffers (one per thread).
 - errors: InvalidArgumentError and InvalidConfigurationError.

Example:

    path = control_path.ControlPath([(0, 0), (1, 2), (2, 0)])
    gi = group_iterator.GroupIterator.from_control_string('0:n-1', path.num_points())
    curve = bezier.BezierCurve(path, gi)
    out = multi_path.MultiPath(2)
    curve.append_to(out)
    out.points
'''
