from __future__ import annotations

import pytest

from vision_app.schemas import JobStatusResponse
from vision_app.services.classifier import Classification, classify


def test_success_requires_true_and_success():
    assert classify(JobStatusResponse(status="true", message="success")) is Classification.SUCCESS
    assert classify({"status": "true", "message": "success", "output_path": "/x"}) is Classification.SUCCESS


def test_in_progress_requires_false_and_inprogress():
    assert classify(JobStatusResponse(status="false", message="inprogress")) is Classification.IN_PROGRESS
    assert classify({"status": "false", "message": "inprogress"}) is Classification.IN_PROGRESS


@pytest.mark.parametrize(
    "payload",
    [
        {"status": "true", "message": "inprogress"},
        {"status": "false", "message": "success"},
        {"status": "True", "message": "success"},
        {"status": True, "message": "success"},
        {"status": "true"},
        {"message": "inprogress"},
        {},
        None,
        [],
        "success",
        42,
    ],
)
def test_anything_else_is_unexpected(payload):
    assert classify(payload) is Classification.UNEXPECTED


def test_empty_model_is_unexpected():
    assert classify(JobStatusResponse()) is Classification.UNEXPECTED
