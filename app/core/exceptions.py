class SequenceError(Exception):
    """Base class for failures raised by the sequence generator."""


class InvalidName(SequenceError, ValueError):
    """The sequence name is missing or empty. Caller bug, never retried."""


class StorageUnavailable(SequenceError):
    """The counter store could not be reached. Safe to retry the whole operation."""


class IdentityAssignmentFailed(Exception):
    """
    Raised when ids could not be issued for a menu item or its addons.
    The wrapped SequenceError is available as __cause__; nothing was persisted.
    """


class NotFoundError(LookupError):
    """Requested record does not exist."""
