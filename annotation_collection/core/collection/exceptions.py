"""
Errors raised by the annotation collection.

Both kinds are raised synchronously and never retried internally.
"""


class AnnotationError(Exception):
    """Base class for every error raised by the collection."""


class DataError(AnnotationError):
    """Malformed input at the object construction boundary."""


class ArgumentError(AnnotationError):
    """Misuse of the collection API, e.g. merging unsaved objects."""
