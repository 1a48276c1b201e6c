from __future__ import annotations
import logging
from typing import Optional

from vision_app.models import Failed, FailureReason, JobOutcome, JobRequest, Mode, UploadedFile
from vision_app.services.backend_client import BackendError, EdgeVisionClient
from vision_app.services.classifier import Classification, classify
from vision_app.services.poller import Poller

log = logging.getLogger(__name__)


class JobOrchestrator:
    """Submit once, then poll until the job finishes or the attempt budget runs out."""

    def __init__(self, client: Optional[EdgeVisionClient] = None, poller: Optional[Poller] = None):
        self.client = client or EdgeVisionClient()
        self.poller = poller or Poller()

    async def run(self, mode: Mode, file: UploadedFile) -> JobOutcome:
        request = JobRequest.for_upload(mode, file)
        log.info("Starting %s job for %s", request.project_name, request.file_name)

        try:
            ack = await self.client.submit(request.project_name, request.file_name)
        except BackendError as exc:
            log.error("Request API call failed for %s: %s", request.file_name, exc)
            return Failed(FailureReason.TRANSPORT_ERROR, str(exc))

        if classify(ack) is not Classification.SUCCESS:
            log.error("Request API rejected %s: %s", request.file_name, ack)
            return Failed(FailureReason.REQUEST_REJECTED, ack.message or "no message")

        log.info("Request API success: %s", ack)
        return await self.poller.poll(lambda: self.client.check_status(request.project_name, request.file_name))
