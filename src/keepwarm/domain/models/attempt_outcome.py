"""AttemptOutcome model - represents the result of a single HTTP attempt"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class OutcomeKind(str, Enum):
    """Classification of a single attempt"""

    SUCCESS = "success"
    HTTP_ERROR = "http_error"
    TIMEOUT = "timeout"
    NETWORK_ERROR = "network_error"


@dataclass(frozen=True)
class AttemptOutcome:
    """Outcome of one GET against a target.

    Failures are carried as values instead of exceptions, so the retry loop
    only ever inspects `is_success`.
    """

    url: str
    attempt: int
    kind: OutcomeKind
    status_code: Optional[int] = None  # Set for SUCCESS and HTTP_ERROR
    error: Optional[str] = None  # Cause of a NETWORK_ERROR or TIMEOUT

    @classmethod
    def success(cls, url: str, attempt: int, status_code: int) -> "AttemptOutcome":
        return cls(url=url, attempt=attempt, kind=OutcomeKind.SUCCESS, status_code=status_code)

    @classmethod
    def http_error(cls, url: str, attempt: int, status_code: int) -> "AttemptOutcome":
        return cls(url=url, attempt=attempt, kind=OutcomeKind.HTTP_ERROR, status_code=status_code)

    @classmethod
    def timeout(cls, url: str, attempt: int, error: Optional[str] = None) -> "AttemptOutcome":
        return cls(url=url, attempt=attempt, kind=OutcomeKind.TIMEOUT, error=error)

    @classmethod
    def network_error(cls, url: str, attempt: int, error: str) -> "AttemptOutcome":
        return cls(url=url, attempt=attempt, kind=OutcomeKind.NETWORK_ERROR, error=error)

    @property
    def is_success(self) -> bool:
        """Check if the target answered with a 2xx status"""
        return self.kind is OutcomeKind.SUCCESS

    def describe(self) -> str:
        """Short human-readable description for logs"""
        if self.kind is OutcomeKind.SUCCESS:
            return f"responded with {self.status_code}"
        if self.kind is OutcomeKind.HTTP_ERROR:
            return f"returned status {self.status_code}"
        if self.kind is OutcomeKind.TIMEOUT:
            return "timed out"
        return f"failed: {self.error}"
