"""
Stand-in edge-vision backend for local development.

Implements the two endpoints the console talks to with an in-memory job
table. A job reports "inprogress" until ``processing_seconds`` have passed
since it was submitted, then "success" with a fake output path.

Run locally:
    uvicorn vision_app.devserver:app --host 0.0.0.0 --port 8080
or
    python -m vision_app.devserver          # honours $PORT, default 8080
"""
from __future__ import annotations
import logging
import os
import threading
import time
from typing import Dict, Optional, Tuple

import uvicorn
from fastapi import FastAPI, HTTPException

from vision_app.models import PROJECT_NAMES
from vision_app.schemas import EdgeVisionRequest, JobStatusResponse, SubmitResponse

log = logging.getLogger(__name__)

OUTPUT_SUFFIX = {"vlm": "summary.json", "reid": "tracked.mp4", "advanced": "results.json"}


class JobTable:
    def __init__(self, processing_seconds: float, output_root: str = "/out", clock=time.monotonic):
        self.processing_seconds = processing_seconds
        self.output_root = output_root.rstrip("/")
        self._clock = clock
        self._started: Dict[Tuple[str, str], float] = {}
        self._lock = threading.Lock()

    def start(self, project_name: str, file_name: str) -> None:
        with self._lock:
            self._started[(project_name, file_name)] = self._clock()

    def elapsed(self, project_name: str, file_name: str) -> Optional[float]:
        with self._lock:
            started = self._started.get((project_name, file_name))
        return None if started is None else self._clock() - started

    def output_path(self, project_name: str, file_name: str) -> str:
        stem = os.path.splitext(os.path.basename(file_name))[0]
        return f"{self.output_root}/{project_name}/{stem}_{OUTPUT_SUFFIX[project_name]}"


def create_app(jobs: Optional[JobTable] = None) -> FastAPI:
    jobs = jobs or JobTable(float(os.getenv("EDGE_VISION_STUB_SECONDS", "12")))
    api = FastAPI(title="Edge Vision dev backend", version="1.0.0")
    projects = set(PROJECT_NAMES.values())

    @api.get("/health")
    def health():
        return {"status": "ok"}

    @api.post("/edge_vision_req", response_model=SubmitResponse)
    def edge_vision_req(body: EdgeVisionRequest):
        if body.project_name not in projects:
            return SubmitResponse(status="false", message="unknown project")
        jobs.start(body.project_name, body.file_name)
        log.info("Started %s for %s", body.project_name, body.file_name)
        return SubmitResponse(status="true", message="success")

    @api.post("/edge_vision_response", response_model=JobStatusResponse, response_model_exclude_none=True)
    def edge_vision_response(body: EdgeVisionRequest):
        elapsed = jobs.elapsed(body.project_name, body.file_name)
        if elapsed is None:
            raise HTTPException(status_code=404, detail="No such job")
        if elapsed < jobs.processing_seconds:
            return JobStatusResponse(status="false", message="inprogress")
        return JobStatusResponse(status="true", message="success",
                                 output_path=jobs.output_path(body.project_name, body.file_name))

    return api


app = create_app()


def main() -> None:
    logging.basicConfig(level=logging.INFO, format="%(asctime)s [%(levelname)s] %(name)s: %(message)s")
    uvicorn.run(app, host=os.getenv("HOST", "0.0.0.0"), port=int(os.getenv("PORT", "8080")))


if __name__ == "__main__":
    main()
