"""Exceptions raised by ``keyed_reducers``."""


class InvalidArgument(ValueError):
    """A collection helper was built from an unusable reducer or key path."""
