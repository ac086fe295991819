"""Saving downloaded document files to disk."""

from __future__ import annotations

import logging
import os
import tempfile
from pathlib import Path
from typing import Optional

from ..config.ui_config import get_download_dir

logger = logging.getLogger(__name__)

DEFAULT_FILE_NAME = "download"


class FileSaver:
    """Writes a downloaded blob under its display name.

    The bytes first land in a transient ``.part`` file in the target
    directory which is then renamed into place, so a failed write never
    leaves a half-written file under the real name. The transient file is
    always removed.
    """

    def __init__(self, directory: Optional[Path] = None) -> None:
        self.directory = directory

    def save(self, display_name: str, content: bytes) -> Path:
        """Save ``content`` as ``display_name`` and return the final path.

        Raises:
            OSError: If the directory or file cannot be written
        """
        directory = self.directory or get_download_dir()
        directory.mkdir(parents=True, exist_ok=True)
        target = _unique_path(directory / _safe_name(display_name))

        fd, transient = tempfile.mkstemp(dir=directory, prefix=".dokumentovac-", suffix=".part")
        try:
            with os.fdopen(fd, "wb") as fh:
                fh.write(content)
            os.replace(transient, target)
        finally:
            if os.path.exists(transient):
                os.unlink(transient)

        logger.info("Saved %d bytes to %s", len(content), target)
        return target


def _safe_name(display_name: str) -> str:
    """Strip any directory part the service may have sent."""
    name = Path(display_name.replace("\\", "/")).name.strip()
    return name if name not in ("", ".", "..") else DEFAULT_FILE_NAME


def _unique_path(path: Path) -> Path:
    """``report.pdf`` -> ``report (1).pdf`` when the name is taken."""
    if not path.exists():
        return path
    counter = 1
    while True:
        candidate = path.with_name(f"{path.stem} ({counter}){path.suffix}")
        if not candidate.exists():
            return candidate
        counter += 1
