"""PingResult model - represents the result of pinging one target with retries"""

from dataclasses import dataclass, field
from typing import List, Optional

from keepwarm.domain.models.attempt_outcome import AttemptOutcome


@dataclass
class PingResult:
    """All attempts made against a single target"""

    url: str
    outcomes: List[AttemptOutcome] = field(default_factory=list)

    @property
    def succeeded(self) -> bool:
        """Check if any attempt succeeded (only the last one can)"""
        return bool(self.outcomes) and self.outcomes[-1].is_success

    @property
    def attempts(self) -> int:
        return len(self.outcomes)

    @property
    def last_outcome(self) -> Optional[AttemptOutcome]:
        return self.outcomes[-1] if self.outcomes else None
