from __future__ import annotations
from enum import Enum
from typing import Any


class Classification(str, Enum):
    SUCCESS = "success"
    IN_PROGRESS = "inprogress"
    UNEXPECTED = "unexpected"


def _field(response: Any, name: str) -> Any:
    if isinstance(response, dict):
        return response.get(name)
    return getattr(response, name, None)


def classify(response: Any) -> Classification:
    """Map a raw backend reply (model, dict or junk) onto a Classification."""
    status, message = _field(response, "status"), _field(response, "message")
    if status == "true" and message == "success":
        return Classification.SUCCESS
    if status == "false" and message == "inprogress":
        return Classification.IN_PROGRESS
    return Classification.UNEXPECTED
