from __future__ import annotations
import logging
from typing import Any, Dict, Optional

import httpx

from vision_app.config import settings
from vision_app.schemas import EdgeVisionRequest, JobStatusResponse, SubmitResponse

log = logging.getLogger(__name__)

REQUEST_PATH = "/edge_vision_req"
RESPONSE_PATH = "/edge_vision_response"


class BackendError(Exception):
    def __init__(self, message: str, status_code: Optional[int] = None, body: Optional[str] = None):
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class EdgeVisionClient:
    """Talks to the two edge-vision endpoints. One request per call, no retries here."""

    def __init__(self, base_url: Optional[str] = None, timeout: Optional[float] = None,
                 transport: Optional[httpx.AsyncBaseTransport] = None):
        self.base_url = (base_url or settings.api_base_url).rstrip("/")
        self.timeout = timeout if timeout is not None else settings.request_timeout_seconds
        self._transport = transport

    async def submit(self, project_name: str, file_name: str) -> SubmitResponse:
        data = await self._post(REQUEST_PATH, EdgeVisionRequest(project_name=project_name, file_name=file_name),
                                label="Update")
        return SubmitResponse.from_payload(data)

    async def check_status(self, project_name: str, file_name: str) -> JobStatusResponse:
        data = await self._post(RESPONSE_PATH, EdgeVisionRequest(project_name=project_name, file_name=file_name),
                                label="Response check")
        return JobStatusResponse.from_payload(data)

    async def _post(self, path: str, body: EdgeVisionRequest, label: str) -> Any:
        url = f"{self.base_url}{path}"
        headers: Dict[str, str] = {"Content-Type": "application/json"}
        log.debug("POST %s %s", url, body.model_dump())
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                resp = await client.post(url, json=body.model_dump(), headers=headers)
        except httpx.HTTPError as exc:
            raise BackendError(f"{label} failed: {exc!r}") from exc

        log.debug("%s -> %s", url, resp.status_code)
        if not resp.is_success:
            raise BackendError(f"{label} failed: {resp.status_code} - {resp.text[:200]}",
                               status_code=resp.status_code, body=resp.text)
        try:
            return resp.json()
        except ValueError as exc:
            raise BackendError(f"{label} failed: response is not JSON ({resp.text[:200]!r})",
                               status_code=resp.status_code, body=resp.text) from exc
