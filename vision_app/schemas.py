from __future__ import annotations
import logging
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError

log = logging.getLogger(__name__)


class EdgeVisionRequest(BaseModel):
    project_name: str = Field(..., min_length=1)
    file_name: str = Field(..., min_length=1)


class _BackendReply(BaseModel):
    model_config = ConfigDict(extra="allow")

    status: str = ""
    message: str = ""

    @classmethod
    def from_payload(cls, data: Any):
        """Build a reply from decoded JSON without ever raising.

        Anything that is not an object, or whose status/message do not
        validate, becomes an empty reply so that it classifies as unexpected.
        Any other field that fails validation is dropped.
        """
        if not isinstance(data, dict):
            log.warning("Non-object payload from backend: %r", data)
            return cls()
        try:
            return cls.model_validate(data)
        except ValidationError as exc:
            log.warning("Malformed payload from backend %r: %s", data, exc.errors())
            bad = {err["loc"][0] for err in exc.errors() if err["loc"]}
        if bad & {"status", "message"}:
            return cls()
        try:
            return cls.model_validate({k: v for k, v in data.items() if k not in bad})
        except ValidationError:
            return cls()


class SubmitResponse(_BackendReply):
    pass


class JobStatusResponse(_BackendReply):
    output_path: Optional[str] = None
