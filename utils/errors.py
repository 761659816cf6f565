# utils/errors.py


class RecruitingError(Exception):
    """Base exception for the recruiting backend."""

    pass


class SourceFetchError(RecruitingError):
    """Raised when an external academic API call or its response parsing fails."""

    def __init__(self, source: str, message: str):
        self.source = source
        super().__init__(f"[{source}] {message}")


class PersistenceError(RecruitingError):
    """Raised when the store rejects an insert."""

    pass
