from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Union

from vision_app.schemas import JobStatusResponse


class Mode(str, Enum):
    SUMMARIZATION = "summarization"
    TRACKING = "tracking"
    ADVANCED = "advanced"

    @property
    def project_name(self) -> str:
        return PROJECT_NAMES[self]


# backend-side pipeline identifiers
PROJECT_NAMES = {
    Mode.SUMMARIZATION: "vlm",
    Mode.TRACKING: "reid",
    Mode.ADVANCED: "advanced",
}


@dataclass(frozen=True)
class UploadedFile:
    name: str
    content: bytes = field(default=b"", repr=False)

    @property
    def size(self) -> int:
        return len(self.content)


@dataclass(frozen=True)
class JobRequest:
    project_name: str
    file_name: str

    @classmethod
    def for_upload(cls, mode: Mode, file: UploadedFile) -> "JobRequest":
        return cls(project_name=mode.project_name, file_name=file.name)


class FailureReason(str, Enum):
    REQUEST_REJECTED = "request_rejected"
    TIMEOUT = "timeout"
    TRANSPORT_ERROR = "transport_error"


_REASON_TEXT = {
    FailureReason.REQUEST_REJECTED: "Request API failed",
    FailureReason.TIMEOUT: "Response timeout - check backend logs",
    FailureReason.TRANSPORT_ERROR: "Backend unreachable",
}


@dataclass(frozen=True)
class Completed:
    response: JobStatusResponse


@dataclass(frozen=True)
class Failed:
    reason: FailureReason
    detail: str = ""

    @property
    def message(self) -> str:
        text = _REASON_TEXT[self.reason]
        return f"{text}: {self.detail}" if self.detail else text


JobOutcome = Union[Completed, Failed]
