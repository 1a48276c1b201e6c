"""Screen navigation for the console.

One ``NavigationStateMachine`` lives per browser session. It is driven by
user actions (mode selection, file choice, back) and by the outcome of the
job it started. Only one job is ever tracked; an outcome that arrives for
any other job is dropped so an abandoned poll cannot leak into a newer
session.
"""
from __future__ import annotations
import logging
from enum import Enum
from typing import Any, Callable, Dict, Optional

from vision_app.models import Completed, Failed, JobOutcome, Mode, UploadedFile
from vision_app.services.jobs import JobHandle

log = logging.getLogger(__name__)

StartJob = Callable[[Mode, UploadedFile], JobHandle]


class Screen(str, Enum):
    MENU = "menu"
    UPLOAD_SUMMARIZATION = "upload-summarization"
    UPLOAD_TRACKING = "upload-tracking"
    UPLOAD_ADVANCED = "upload-advanced"
    PROCESSING_SUMMARIZATION = "processing-summarization"
    PROCESSING_TRACKING = "processing-tracking"
    PROCESSING_ADVANCED = "processing-advanced"
    SUMMARIZATION = "summarization"
    TRACKING = "tracking"
    ADVANCED = "advanced"

    @classmethod
    def parse(cls, value: Any) -> "Screen":
        try:
            return cls(value)
        except ValueError:
            log.warning("Unknown screen %r, falling back to menu", value)
            return cls.MENU

    @classmethod
    def upload(cls, mode: Mode) -> "Screen":
        return cls(f"upload-{mode.value}")

    @classmethod
    def processing(cls, mode: Mode) -> "Screen":
        return cls(f"processing-{mode.value}")

    @classmethod
    def result(cls, mode: Mode) -> "Screen":
        return cls(mode.value)

    @property
    def mode(self) -> Optional[Mode]:
        if self is Screen.MENU:
            return None
        return Mode(self.value.rsplit("-", 1)[-1])

    @property
    def is_upload(self) -> bool:
        return self.value.startswith("upload-")

    @property
    def is_processing(self) -> bool:
        return self.value.startswith("processing-")

    @property
    def is_result(self) -> bool:
        return self is not Screen.MENU and not (self.is_upload or self.is_processing)


class NavigationStateMachine:
    def __init__(self, start_job: StartJob):
        self._start_job = start_job
        self.screen = Screen.MENU
        self.file: Optional[UploadedFile] = None
        self.job: Optional[JobHandle] = None
        self.outcome: Optional[Completed] = None
        self.alert: Optional[str] = None

    @property
    def mode(self) -> Optional[Mode]:
        return self.screen.mode

    def restore(self, value: Any) -> Screen:
        self.screen = Screen.parse(value)
        return self.screen

    def select_mode(self, mode: Mode) -> Screen:
        if self.screen is not Screen.MENU:
            log.debug("select_mode(%s) ignored on %s", mode, self.screen.value)
            return self.screen
        self.file = None
        self.screen = Screen.upload(Mode(mode))
        return self.screen

    def file_chosen(self, file: UploadedFile) -> Screen:
        if not self.screen.is_upload:
            log.debug("file_chosen(%s) ignored on %s", file.name, self.screen.value)
            return self.screen
        mode = self.screen.mode
        self.file = file
        self.alert = None
        self.screen = Screen.processing(mode)
        self.job = self._start_job(mode, file)
        return self.screen

    def orchestrator_outcome(self, job_id: str, outcome: JobOutcome) -> Screen:
        if self.job is None or self.job.job_id != job_id:
            log.info("Discarding outcome of abandoned job %s", job_id)
            return self.screen
        self.job = None
        if not self.screen.is_processing:
            log.info("Discarding outcome of job %s on %s", job_id, self.screen.value)
            return self.screen

        if isinstance(outcome, Completed):
            self.outcome = outcome
            self.screen = Screen.result(self.screen.mode)
        elif isinstance(outcome, Failed):
            self.alert = f"Failed: {outcome.message}"
            log.error("Job %s failed: %s", job_id, outcome.message)
        return self.screen

    def poll_job(self) -> Screen:
        """Hand a finished job's outcome to the machine; no-op while it runs."""
        job = self.job
        if job is None or not job.done():
            return self.screen
        if job.cancelled():
            self.job = None
            return self.screen
        try:
            outcome = job.outcome()
        except Exception:
            self.job = None
            raise
        return self.orchestrator_outcome(job.job_id, outcome)

    def cancel_job(self) -> Screen:
        if self.job is not None:
            self.job.cancel()
            self.job = None
            self.alert = "Processing cancelled"
        return self.screen

    def back(self) -> Screen:
        if self.job is not None:
            self.job.cancel()
        self.job = None
        self.file = None
        self.outcome = None
        self.alert = None
        self.screen = Screen.MENU
        return self.screen

    @property
    def busy(self) -> bool:
        return self.job is not None and not self.job.done()

    def result_view(self) -> Dict[str, Any]:
        return {
            "file_name": self.file.name if self.file else "video.mp4",
            "response": self.outcome.response if self.outcome else None,
        }
