#!/usr/bin/env python3
"""
Edge Vision — headless job runner
=================================

Runs one submit-and-poll job without the browser UI.

Usage:
    edge-vision-run clip.mp4 --mode tracking
    edge-vision-run clip.mp4 --mode summarization --url http://edge-box:8080
    edge-vision-run clip.mp4 --mode advanced --interval 2 --attempts 30
"""
from __future__ import annotations
import argparse
import asyncio
import sys
from pathlib import Path
from typing import List, Optional

from vision_app.config import configure_logging, settings
from vision_app.models import Completed, Mode, UploadedFile
from vision_app.services.backend_client import EdgeVisionClient
from vision_app.services.orchestrator import JobOrchestrator
from vision_app.services.poller import Poller
from vision_app.services.storage import UploadError, save_upload


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Run one edge-vision job and wait for its result")
    p.add_argument("video", help="Path to input video (its file name is the job key)")
    p.add_argument("--mode", required=True, choices=[m.value for m in Mode])
    p.add_argument("--url", default=settings.api_base_url, help="Backend base URL")
    p.add_argument("--interval", type=float, default=settings.poll_interval_seconds,
                   help="Seconds between status checks")
    p.add_argument("--attempts", type=int, default=settings.poll_max_attempts,
                   help="Maximum number of status checks")
    p.add_argument("--upload-dir", default=settings.upload_dir,
                   help="Copy the video here before submitting")
    p.add_argument("--log-level", default=settings.log_level)
    return p


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.log_level)

    path = Path(args.video)
    if not path.is_file():
        print(f"File not found: {args.video}", file=sys.stderr)
        return 1
    file = UploadedFile(name=path.name, content=path.read_bytes())

    try:
        save_upload(file, args.upload_dir)
    except UploadError as exc:
        print(f"Failed: {exc}", file=sys.stderr)
        return 1

    orchestrator = JobOrchestrator(EdgeVisionClient(base_url=args.url),
                                   Poller(interval_seconds=args.interval, max_attempts=args.attempts))
    outcome = asyncio.run(orchestrator.run(Mode(args.mode), file))

    if isinstance(outcome, Completed):
        print(f"Done: {file.name} -> {outcome.response.output_path or '(no output path)'}")
        return 0
    print(f"Failed: {outcome.message}", file=sys.stderr)
    return 2


if __name__ == "__main__":
    sys.exit(main())
