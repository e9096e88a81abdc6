class InvalidArgumentError(ValueError):
    """Raised by a setter or constructor when given a value it cannot accept
    (e.g. a negative sample limit or an interval with t_min > t_max)."""


class InvalidConfigurationError(ValueError):
    """Raised by a curve's append_to() when the curve cannot be evaluated with
    its current control path and group iterator. Nothing is appended to the
    output path when this is raised."""
