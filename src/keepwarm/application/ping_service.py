"""Service for pinging a single target with retries"""

import logging
import time
from typing import Callable, Optional

from keepwarm.domain.config.retry import RetryConfig
from keepwarm.domain.models.attempt_outcome import AttemptOutcome
from keepwarm.domain.models.ping_result import PingResult
from keepwarm.infrastructure.http_client import get_once
from keepwarm.infrastructure.retry import Sleeper, create_retrying

logger = logging.getLogger(__name__)

# (url, timeout_ms, attempt) -> AttemptOutcome
AttemptCaller = Callable[[str, int, int], AttemptOutcome]


class PingService:
    """Pings one URL up to `max_attempts` times with a fixed pause between attempts"""

    def __init__(
        self,
        retry_config: Optional[RetryConfig] = None,
        caller: Optional[AttemptCaller] = None,
        sleep: Optional[Sleeper] = None,
    ):
        """Initialize ping service

        Args:
            retry_config: Retry configuration (uses defaults if None)
            caller: Single-attempt caller (HTTP GET if None)
            sleep: Sleeper between attempts (time.sleep if None)
        """
        self.retry_config = retry_config or RetryConfig()
        self.caller = caller or get_once
        self.sleep = sleep or time.sleep

    def ping(self, url: str) -> PingResult:
        """Ping a target until it succeeds or the attempt budget is spent

        Args:
            url: Target URL

        Returns:
            PingResult with every attempt outcome, in order
        """
        result = PingResult(url=url)

        def _attempt() -> AttemptOutcome:
            outcome = self.caller(url, self.retry_config.timeout_ms, result.attempts + 1)
            result.outcomes.append(outcome)
            return outcome

        retrying = create_retrying(self.retry_config, sleep=self.sleep)
        retrying(_attempt)

        if not result.succeeded:
            logger.error(f"Failed to reach {url} after {result.attempts} attempts.")
        return result

    def run(self, url: str) -> bool:
        """Ping a target and return True if any attempt succeeded"""
        return self.ping(url).succeeded
