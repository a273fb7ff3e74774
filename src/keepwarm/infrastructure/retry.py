"""Retry utilities using tenacity.

Attempts return AttemptOutcome values instead of raising, so retries are
driven by the result (`retry_if_result`) and an exhausted budget hands back
the last outcome rather than raising RetryError.
"""

from __future__ import annotations

import logging
import time
from typing import Callable

from tenacity import (
    RetryCallState,
    Retrying,
    retry_if_result,
    stop_after_attempt,
    wait_fixed,
)

from keepwarm.domain.config.retry import RetryConfig
from keepwarm.domain.models.attempt_outcome import AttemptOutcome

logger = logging.getLogger(__name__)

# Suspends execution for the given number of seconds
Sleeper = Callable[[float], None]


def _is_failed_outcome(outcome: AttemptOutcome) -> bool:
    return not outcome.is_success


def _last_outcome(retry_state: RetryCallState) -> AttemptOutcome:
    """Return the final outcome once the attempt budget is spent."""
    return retry_state.outcome.result()


def _log_before_sleep(retry_state: RetryCallState) -> None:
    if retry_state.outcome is None or retry_state.next_action is None:
        return
    outcome = retry_state.outcome.result()
    logger.debug(
        f"{outcome.url} {outcome.describe()}; "
        f"retrying in {retry_state.next_action.sleep}s "
        f"(attempt {retry_state.attempt_number} done)"
    )


def create_retrying(
    retry_config: RetryConfig,
    sleep: Sleeper = time.sleep,
    before_sleep: Callable[[RetryCallState], None] | None = None,
) -> Retrying:
    """Create a tenacity controller for outcome-returning attempts.

    Args:
        retry_config: Retry configuration
        sleep: Sleeper used between attempts (never after the last one)
        before_sleep: Optional callback before sleep (defaults to debug logging)

    Returns:
        Retrying instance; calling it returns the first successful outcome
        or the last failed one
    """
    if before_sleep is None:
        before_sleep = _log_before_sleep

    return Retrying(
        stop=stop_after_attempt(retry_config.max_attempts),
        wait=wait_fixed(retry_config.retry_interval_seconds),
        retry=retry_if_result(_is_failed_outcome),
        retry_error_callback=_last_outcome,
        before_sleep=before_sleep,
        sleep=sleep,
    )
