import numpy

def closest_point_on_segment(point, start, end):
    """Given a point and a line segment (specified by starting and ending
    points, all of the same dimension), return the point on the segment closest
    to the given point and the parametric position along the segment of that
    point, in [0, 1].

    A zero-length segment is treated as the single point 'start'."""
    v = end - start
    w = point - start
    c2 = numpy.dot(v, v)
    if c2 == 0:
        return start, 0.0
    fraction = min(max(numpy.dot(v, w) / c2, 0.0), 1.0)
    return start + fraction*v, fraction

def point_segment_distance(point, start, end):
    """Return the distance from point to the nearest position on segment
    start-end. For a point whose projection falls inside the segment this is
    the perpendicular distance to the chord."""
    closest, fraction = closest_point_on_segment(point, start, end)
    return numpy.sqrt(((point - closest)**2).sum())
