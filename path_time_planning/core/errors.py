"""Exception types raised by the path-time planning modules."""


class InvalidGeometryError(ValueError):
    """Raised when a collaborator hands back geometry that cannot be used.

    Examples are an inverted SL boundary or a reference heading that is not a
    finite number. Non-finite boundaries are skipped per sample instead.
    """
    pass
