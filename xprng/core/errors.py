"""Exception hierarchy for the generator, golden files and stream service."""

from __future__ import annotations


class PRNGError(Exception):
    """Base class for every error raised by xprng."""


class InvalidSeedError(PRNGError, TypeError):
    """Seed is neither text, bytes nor an integer-like number."""


class InvalidRangeError(PRNGError, ValueError):
    """``rand_int`` called with ``max < min``."""


class InvalidLengthError(PRNGError, ValueError):
    """``rand_bytes`` called with a negative length."""


class ReplayError(PRNGError):
    """A golden file is malformed, tampered with, or cannot be replayed."""


class StreamNotFoundError(PRNGError, KeyError):
    def __init__(self, stream_id: str) -> None:
        super().__init__(stream_id)
        self.stream_id = stream_id

    def __str__(self) -> str:
        return f"Unknown stream '{self.stream_id}'"


class StreamExistsError(PRNGError):
    def __init__(self, stream_id: str) -> None:
        super().__init__(f"Stream '{stream_id}' already exists")
        self.stream_id = stream_id


class StreamLimitError(PRNGError):
    def __init__(self, limit: int) -> None:
        super().__init__(f"Stream limit reached ({limit})")
        self.limit = limit
