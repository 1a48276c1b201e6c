from __future__ import annotations
import asyncio
import logging
import threading
import uuid
from concurrent.futures import CancelledError, Future
from dataclasses import dataclass, field
from typing import Coroutine, Optional

from vision_app.models import JobOutcome, JobRequest, Mode, UploadedFile
from vision_app.services.orchestrator import JobOrchestrator

log = logging.getLogger(__name__)


@dataclass
class JobHandle:
    request: JobRequest
    future: Future
    job_id: str = field(default_factory=lambda: uuid.uuid4().hex[:12])

    def done(self) -> bool:
        return self.future.done()

    def cancelled(self) -> bool:
        return self.future.cancelled()

    def cancel(self) -> bool:
        if self.future.done():
            return False
        log.info("Cancelling job %s (%s)", self.job_id, self.request.file_name)
        return self.future.cancel()

    def outcome(self) -> Optional[JobOutcome]:
        """The finished outcome, or None while running or once cancelled.

        Errors other than the ones the orchestrator turns into ``Failed`` are re-raised.
        """
        if not self.future.done():
            return None
        try:
            return self.future.result()
        except CancelledError:
            return None


class JobRunner:
    """Owns the single event loop every orchestrator run executes on."""

    def __init__(self) -> None:
        self._loop = asyncio.new_event_loop()
        self._thread: Optional[threading.Thread] = None
        self._lock = threading.Lock()

    def start_once(self) -> None:
        with self._lock:
            if self._thread is not None:
                return
            self._thread = threading.Thread(target=self._loop.run_forever, name="edge-vision-jobs", daemon=True)
            self._thread.start()

    def submit(self, coro: Coroutine) -> Future:
        self.start_once()
        return asyncio.run_coroutine_threadsafe(coro, self._loop)

    def shutdown(self) -> None:
        with self._lock:
            if self._thread is None:
                return
            self._loop.call_soon_threadsafe(self._loop.stop)
            self._thread.join(timeout=5)
            self._thread = None


_runner: Optional[JobRunner] = None


def get_runner() -> JobRunner:
    global _runner
    if _runner is None:
        _runner = JobRunner()
    return _runner


def launch(orchestrator: JobOrchestrator, mode: Mode, file: UploadedFile,
           runner: Optional[JobRunner] = None) -> JobHandle:
    runner = runner or get_runner()
    handle = JobHandle(request=JobRequest.for_upload(mode, file),
                       future=runner.submit(orchestrator.run(mode, file)))
    log.info("Launched job %s: %s", handle.job_id, handle.request)
    return handle
