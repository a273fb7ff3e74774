"""Single-attempt HTTP GET used for liveness pings.

Every failure mode is converted to an AttemptOutcome, so nothing raised by
requests escapes this module.
"""

from __future__ import annotations

import logging

import requests

from keepwarm.domain.models.attempt_outcome import AttemptOutcome

logger = logging.getLogger(__name__)


def _is_success_status(status_code: int) -> bool:
    # Stricter than Response.ok, which accepts any status below 400
    return 200 <= status_code < 300


def get_once(url: str, timeout_ms: int, attempt: int = 1) -> AttemptOutcome:
    """Issue one GET to `url` and classify the result.

    Args:
        url: Target URL
        timeout_ms: Timeout for connecting and for receiving the response headers, in milliseconds
        attempt: Attempt number, used for logging only

    Returns:
        AttemptOutcome (success, HTTP error, timeout or network error)
    """
    timeout = timeout_ms / 1000
    logger.debug(f"HTTP GET {url} (timeout {timeout}s)")
    try:
        # Classify on the status line; the body is never read
        with requests.get(url, timeout=timeout, stream=True) as resp:
            status_code = resp.status_code
    except requests.exceptions.Timeout as e:
        logger.error(f"[Attempt {attempt}] {url} request timed out after {timeout_ms}ms.")
        return AttemptOutcome.timeout(url, attempt, error=str(e))
    except requests.exceptions.RequestException as e:
        logger.error(f"[Attempt {attempt}] {url} failed: {e}")
        return AttemptOutcome.network_error(url, attempt, error=str(e))
    except Exception as e:
        # requests can leak low-level errors (e.g. from URL/IDNA parsing)
        logger.error(f"[Attempt {attempt}] {url} failed: {e}", exc_info=True)
        return AttemptOutcome.network_error(url, attempt, error=f"{type(e).__name__}: {e}")

    if _is_success_status(status_code):
        logger.info(f"[Attempt {attempt}] {url} responded successfully.")
        return AttemptOutcome.success(url, attempt, status_code)

    logger.warning(f"[Attempt {attempt}] {url} returned status: {status_code}")
    return AttemptOutcome.http_error(url, attempt, status_code)
