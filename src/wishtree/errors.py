# src/wishtree/errors.py


class WishTreeError(Exception):
    """Base error for wishtree."""


class PatternError(WishTreeError, ValueError):
    """Raised when an include pattern cannot be parsed."""


class BuildError(WishTreeError):
    """Raised when a file set matcher cannot be assembled."""
