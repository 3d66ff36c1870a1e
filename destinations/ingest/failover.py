"""Retry with exponential backoff across an ordered list of backend endpoints."""

import logging
import time
from collections.abc import Callable
from dataclasses import dataclass
from typing import TypeVar

import httpx

from destinations.errors import CollaboratorUnavailable

logger = logging.getLogger(__name__)

T = TypeVar("T")

RETRYABLE_STATUS_CODES = frozenset({429, 500, 502, 503, 504})


@dataclass(frozen=True)
class BackoffPolicy:
    max_attempts: int = 4
    base_delay_s: float = 1.0
    max_delay_s: float = 8.0

    def delay(self, attempt: int) -> float:
        """Delay before the retry following ``attempt`` (0-based)."""
        return min(self.max_delay_s, self.base_delay_s * (2**attempt))


class FailoverRequester:
    """Runs an operation against endpoints round-robin until one succeeds.

    Attempts are sequential. Transport errors, unparseable bodies and
    429/5xx responses are retried on the next endpoint after a backoff
    sleep; any other HTTP error status fails fast.
    """

    def __init__(
        self,
        endpoints: list[str],
        policy: BackoffPolicy | None = None,
        service: str = "Backend",
    ):
        if not endpoints:
            raise ValueError("at least one endpoint is required")
        self.endpoints = list(endpoints)
        self.policy = policy or BackoffPolicy()
        self.service = service

    def call(self, operation: Callable[[str], T]) -> T:
        errors: list[Exception] = []
        attempts = self.policy.max_attempts

        for attempt in range(attempts):
            endpoint = self.endpoints[attempt % len(self.endpoints)]
            try:
                return operation(endpoint)
            except httpx.HTTPStatusError as e:
                errors.append(e)
                status = e.response.status_code
                if status not in RETRYABLE_STATUS_CODES:
                    logger.error(
                        "%s %s returned %d, not retrying", self.service, endpoint, status
                    )
                    break
                logger.warning(
                    "%s %s returned %d (attempt %d/%d)",
                    self.service, endpoint, status, attempt + 1, attempts,
                )
            except (httpx.RequestError, ValueError) as e:
                errors.append(e)
                logger.warning(
                    "%s %s failed (attempt %d/%d): %s",
                    self.service, endpoint, attempt + 1, attempts, e,
                )

            if attempt < attempts - 1:
                delay = self.policy.delay(attempt)
                logger.info("Retrying %s in %.1fs", self.service, delay)
                time.sleep(delay)

        raise CollaboratorUnavailable(self.service, errors)
