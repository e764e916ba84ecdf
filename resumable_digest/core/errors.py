"""Exception hierarchy for the Resumable Digest SDK."""


class DigestError(Exception):
    """SDK base exception."""


class InvalidHashStateError(DigestError):
    """Saved hash state is malformed or does not fit the input."""


class ChannelClosedError(DigestError):
    """Send on a closed or already used one-shot channel."""


class RunAbortedError(DigestError):
    """Worker task was cancelled before it published a result."""


class CheckpointNotFoundError(DigestError):
    """No checkpoint stored for the job."""


class VersionConflictError(DigestError):
    """Optimistic-lock version mismatch on checkpoint write."""
