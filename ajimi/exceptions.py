"""
Errors raised while rewriting or checking a book.

Callers decide how fatal each one is: a NotFoundError during marker
normalization is only a warning, while an InputFormatError aborts the file.

"""


class AjimiError(Exception):
    """Base class for every error raised by ajimi."""


class InputFormatError(AjimiError, ValueError):
    """A diff or commit patch does not have the shape we can render."""


class NotFoundError(AjimiError, LookupError):
    """A commit, change id or file could not be found in the history."""


class MalformedMetadataError(AjimiError, ValueError):
    """The commit exists but its message lacks a usable Change-Id trailer."""


class OutOfRangeError(AjimiError, IndexError):
    """A line lookup fell outside the file."""
