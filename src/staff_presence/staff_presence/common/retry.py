from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, TypeVar

from tenacity import RetryError, Retrying, retry_if_exception_type, stop_after_attempt, wait_exponential

from ..core.constants import DEFAULT_RETRY_ATTEMPTS, DEFAULT_RETRY_WAIT_MAX, DEFAULT_RETRY_WAIT_MIN
from ..core.exceptions import ConflictError, RetryExhaustedError
from .logger import get_logger

logger = get_logger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class RetryPolicy:
    """Bounded retry for per-key write conflicts."""

    attempts: int = DEFAULT_RETRY_ATTEMPTS
    wait_min: float = DEFAULT_RETRY_WAIT_MIN
    wait_max: float = DEFAULT_RETRY_WAIT_MAX

    def _retrying(self) -> Retrying:
        return Retrying(
            stop=stop_after_attempt(max(int(self.attempts), 1)),
            wait=wait_exponential(multiplier=self.wait_min, min=self.wait_min, max=self.wait_max),
            retry=retry_if_exception_type(ConflictError),
            before_sleep=_log_retry,
        )

    def run(self, fn: Callable[[], T], *, operation: str) -> T:
        """Run ``fn`` retrying only on ConflictError.

        Anything else (validation, storage outage) propagates on the first failure.
        """
        try:
            return self._retrying()(fn)
        except RetryError as e:
            logger.error("%s gave up after %d attempts", operation, e.last_attempt.attempt_number)
            raise RetryExhaustedError(f"{operation} could not be completed, please try again") from e


def _log_retry(retry_state) -> None:
    exc = retry_state.outcome.exception() if retry_state.outcome else None
    logger.warning("Write conflict (attempt %d), retrying: %s", retry_state.attempt_number, exc)
