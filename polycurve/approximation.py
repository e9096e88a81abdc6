from . import geometry

def generate_points(curve, t_min, t_max, multi_path):
    """Flatten curve over [t_min, t_max] into multi_path by binary subdivision.

    The point at t_min is assumed to have been added to the path already; this
    adds line_to() vertices up to and including the point at t_max.

    Each interval is split at its parametric midpoint. The interval is
    considered flat, and replaced by a line to its end point, if either:
      - the distance from the curve's midpoint to the chord between the
        interval's end points is <= multi_path.flatness, or
      - the interval is already curve.get_sample_limit() bisections deep.
    Otherwise both halves are processed, left half first, so vertices are
    emitted in increasing parameter order. A sample limit of 0 therefore adds
    exactly one vertex (the point at t_max).

    Note that only the midpoint is tested: a piece of curve that crosses its
    chord at the midpoint (an S-shape) is treated as flat.

    Parameters:
        curve: a ParametricCurve, evaluated with curve.eval(t, dimension).
        t_min, t_max: parameter interval.
        multi_path: output MultiPath; its dimension sets the evaluation dimension.
    """
    dimension = multi_path.get_dimension()
    sample_limit = curve.get_sample_limit()
    flatness = multi_path.flatness
    p_min = curve.eval(t_min, dimension)
    p_max = curve.eval(t_max, dimension)
    # stack of (t0, p0, t1, p1, depth); popping the left half first keeps the output ordered
    stack = [(t_min, p_min, t_max, p_max, 0)]
    while stack:
        t0, p0, t1, p1, depth = stack.pop()
        if depth >= sample_limit:
            multi_path.line_to(p1)
            continue
        t_mid = (t0 + t1) / 2
        p_mid = curve.eval(t_mid, dimension)
        if geometry.point_segment_distance(p_mid, p0, p1) <= flatness:
            multi_path.line_to(p1)
        else:
            stack.append((t_mid, p_mid, t1, p1, depth + 1))
            stack.append((t0, p0, t_mid, p_mid, depth + 1))
