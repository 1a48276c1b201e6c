from __future__ import annotations
import logging
import os
from pathlib import Path
from typing import Optional

from vision_app.models import UploadedFile

log = logging.getLogger(__name__)


class UploadError(Exception):
    pass


def save_upload(file: UploadedFile, upload_dir: Optional[str]) -> Optional[Path]:
    """Write the uploaded bytes under ``upload_dir`` using the job's file name.

    Returns None when no upload directory is configured. The backend looks the
    video up by name, so the name is kept as-is (only the basename is used).
    """
    if not upload_dir:
        return None
    name = os.path.basename(file.name)
    if not name:
        raise UploadError(f"Invalid file name: {file.name!r}")
    try:
        os.makedirs(upload_dir, exist_ok=True)
        path = Path(upload_dir) / name
        with open(path, "wb") as out:
            out.write(file.content)
    except OSError as exc:
        raise UploadError(f"Could not save {name} to {upload_dir}: {exc}") from exc
    log.info("Saved %s (%d bytes) to %s", name, file.size, path)
    return path
