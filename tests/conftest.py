"""Pytest configuration: make the project root importable and share fakes.

``vision_app`` is imported from the repository root, so tests work from a
plain checkout as well as after ``pip install -e .``.
"""

import os
import sys
from concurrent.futures import Future

import pytest

PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))

if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

from vision_app.schemas import JobStatusResponse, SubmitResponse  # noqa: E402
from vision_app.services.backend_client import BackendError  # noqa: E402

IN_PROGRESS = JobStatusResponse(status="false", message="inprogress")
ACCEPTED = SubmitResponse(status="true", message="success")


class FakeClock:
    """Stands in for asyncio.sleep; time only moves when something sleeps."""

    def __init__(self):
        self.now = 0.0
        self.sleeps = []

    async def sleep(self, seconds):
        self.sleeps.append(seconds)
        self.now += seconds

    def monotonic(self):
        return self.now


class ScriptedClient:
    """Fake EdgeVisionClient replaying scripted replies (or raising scripted errors)."""

    def __init__(self, submit_reply=ACCEPTED, status_replies=(), clock=None):
        self.submit_reply = submit_reply
        self.status_replies = list(status_replies)
        self.clock = clock
        self.submit_calls = []
        self.status_calls = []

    async def submit(self, project_name, file_name):
        self.submit_calls.append((project_name, file_name))
        if isinstance(self.submit_reply, Exception):
            raise self.submit_reply
        return self.submit_reply

    async def check_status(self, project_name, file_name):
        self.status_calls.append((project_name, file_name, self.clock.now if self.clock else None))
        reply = self.status_replies.pop(0) if self.status_replies else IN_PROGRESS
        if isinstance(reply, Exception):
            raise reply
        return reply


def done_future(value):
    f = Future()
    f.set_result(value)
    return f


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def transport_error():
    return BackendError("Response check failed: 502 - bad gateway", status_code=502, body="bad gateway")
