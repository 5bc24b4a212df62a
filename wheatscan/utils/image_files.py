"""Temporary capture files in app-private storage.

Captures are named ``JPEG_<yyyyMMdd_HHmmss>_<random>.jpg`` and live until
the user cancels the preview or the OS cleans the directory up.
"""
from __future__ import annotations

import logging
import os
import tempfile
from datetime import datetime
from pathlib import Path

logger = logging.getLogger(__name__)


def create_image_file(directory: Path, *, now: datetime | None = None) -> Path:
    """Create an empty, uniquely named capture file in *directory*."""

    timestamp = (now or datetime.now()).strftime("%Y%m%d_%H%M%S")
    directory.mkdir(parents=True, exist_ok=True)
    fd, name = tempfile.mkstemp(prefix=f"JPEG_{timestamp}_", suffix=".jpg", dir=directory)
    os.close(fd)
    return Path(name)


def delete_temp_file(path: Path | None) -> bool:
    """Remove *path* if it exists. Returns True when a file was deleted."""

    if path is None:
        return False
    try:
        path.unlink()
    except FileNotFoundError:
        return False
    logger.debug("Temporary file deleted: %s", path)
    return True
