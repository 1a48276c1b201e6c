from __future__ import annotations

import asyncio

import pytest

from conftest import IN_PROGRESS, ScriptedClient
from vision_app.models import Completed, Failed, FailureReason, Mode, UploadedFile
from vision_app.schemas import JobStatusResponse, SubmitResponse
from vision_app.services.backend_client import BackendError
from vision_app.services.orchestrator import JobOrchestrator
from vision_app.services.poller import Poller

CLIP = UploadedFile(name="lobby_cam.mp4", content=b"\x00\x01")


def _run(client, clock, mode=Mode.SUMMARIZATION, attempts=12):
    orchestrator = JobOrchestrator(client, Poller(5, attempts, sleep=clock.sleep))
    return asyncio.run(orchestrator.run(mode, CLIP))


@pytest.mark.parametrize("mode,project", [(Mode.SUMMARIZATION, "vlm"), (Mode.TRACKING, "reid"),
                                          (Mode.ADVANCED, "advanced")])
def test_project_name_follows_mode(clock, mode, project):
    client = ScriptedClient(status_replies=[JobStatusResponse(status="true", message="success")])

    _run(client, clock, mode=mode)

    assert client.submit_calls == [(project, "lobby_cam.mp4")]
    assert [c[:2] for c in client.status_calls] == [(project, "lobby_cam.mp4")]


def test_summary_scenario(clock):
    done = JobStatusResponse(status="true", message="success", output_path="/out/summary.json")
    client = ScriptedClient(status_replies=[IN_PROGRESS, IN_PROGRESS, done], clock=clock)

    outcome = _run(client, clock)

    assert outcome == Completed(done)
    assert outcome.response.output_path == "/out/summary.json"
    assert len(client.submit_calls) == 1
    assert len(client.status_calls) == 3
    assert clock.now == pytest.approx(10)


def test_rejected_submission_never_polls(clock):
    client = ScriptedClient(submit_reply=SubmitResponse(status="false", message="anything"))

    outcome = _run(client, clock)

    assert outcome == Failed(FailureReason.REQUEST_REJECTED, "anything")
    assert outcome.message == "Request API failed: anything"
    assert client.status_calls == []
    assert clock.sleeps == []


def test_http_500_on_submit_fails_without_polling(clock):
    client = ScriptedClient(submit_reply=BackendError("Update failed: 500 - boom", status_code=500, body="boom"))

    outcome = _run(client, clock)

    assert isinstance(outcome, Failed)
    assert outcome.reason is FailureReason.TRANSPORT_ERROR
    assert "500" in outcome.message
    assert client.status_calls == []


def test_timeout_is_reported(clock):
    client = ScriptedClient(status_replies=[])

    outcome = _run(client, clock, attempts=3)

    assert outcome.reason is FailureReason.TIMEOUT
    assert outcome.message.startswith("Response timeout - check backend logs")
    assert len(client.submit_calls) == 1
    assert len(client.status_calls) == 3
