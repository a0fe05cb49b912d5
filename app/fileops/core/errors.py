"""Exception hierarchy for fileops.

I/O failures inside tree and hashing operations are converted into result
objects and never raised. The exceptions here cover precondition violations
and configuration problems that callers are expected to handle.
"""


class FileOpsError(Exception):
    """Base exception for all fileops errors."""


class StorageUnavailableError(FileOpsError):
    """Raised when no primary storage location can be determined."""
