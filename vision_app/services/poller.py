from __future__ import annotations
import asyncio
import logging
from typing import Any, Awaitable, Callable, Optional, Tuple

from tenacity import (
    AsyncRetrying, RetryCallState, retry_if_exception_type, retry_if_result,
    stop_after_attempt, wait_fixed,
)

from vision_app.config import settings
from vision_app.models import Completed, Failed, FailureReason, JobOutcome
from vision_app.services.backend_client import BackendError
from vision_app.services.classifier import Classification, classify

log = logging.getLogger(__name__)

CheckFn = Callable[[], Awaitable[Any]]
SleepFn = Callable[[float], Awaitable[None]]


def _not_done(result: Optional[Tuple[Classification, Any]]) -> bool:
    return result is None or result[0] is not Classification.SUCCESS


class Poller:
    """Repeats a status check every ``interval_seconds`` until it classifies as
    success or ``max_attempts`` checks have been made.

    In-progress replies, unexpected replies and ``BackendError`` raised by the
    check all count as a miss. Anything else raised by the check propagates.
    ``sleep`` is the delay coroutine; tests pass a fake clock.

    There is no delay after the final check, so a timeout is reported after
    ``interval_seconds * (max_attempts - 1)`` seconds of waiting (55s with the
    defaults), inside the ``interval_seconds * max_attempts`` bound.
    """

    def __init__(self, interval_seconds: Optional[float] = None, max_attempts: Optional[int] = None,
                 sleep: SleepFn = asyncio.sleep):
        self.interval_seconds = settings.poll_interval_seconds if interval_seconds is None else interval_seconds
        self.max_attempts = settings.poll_max_attempts if max_attempts is None else max_attempts
        if self.max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        self._sleep = sleep

    async def poll(self, check: CheckFn) -> JobOutcome:
        retrying = AsyncRetrying(
            sleep=self._sleep,
            stop=stop_after_attempt(self.max_attempts),
            wait=wait_fixed(self.interval_seconds),
            retry=retry_if_exception_type(BackendError) | retry_if_result(_not_done),
            before=self._log_attempt,
            before_sleep=self._log_miss,
            retry_error_callback=lambda _state: None,
        )
        result = await retrying(self._attempt, check)
        if result is None:
            log.warning("Polling timeout after %d attempts - process not complete", self.max_attempts)
            return Failed(FailureReason.TIMEOUT, f"no result after {self.max_attempts} attempts")
        log.info("Response API success: %s", result[1])
        return Completed(result[1])

    @staticmethod
    async def _attempt(check: CheckFn) -> Tuple[Classification, Any]:
        response = await check()
        return classify(response), response

    def _log_attempt(self, state: RetryCallState) -> None:
        log.info("Polling response API (attempt %d/%d)", state.attempt_number, self.max_attempts)

    def _log_miss(self, state: RetryCallState) -> None:
        outcome = state.outcome
        if outcome is None:
            return
        if outcome.failed:
            log.warning("Poll error (continuing): %s", outcome.exception())
            return
        verdict, response = outcome.result()
        if verdict is Classification.IN_PROGRESS:
            log.info("Still in progress: %s", response)
        else:
            log.warning("Unexpected response: %s", response)
