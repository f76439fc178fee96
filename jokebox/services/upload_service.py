"""
Jokebox — Upload Storage Service
=================================

What:  Writes uploaded file content into the upload directory.
Why:   Centralizes all file system writes for POST /upload.
How:   Async file I/O via aiofiles; files are named after the client-supplied
       filename.
Who:   Called by the upload route.

Naming Rules:
    - The stored name is the basename of the client-supplied filename.
      Directory components ("../", "a/b/") are dropped so a write can never
      land outside the upload directory.
    - No collision handling: uploading the same name twice overwrites the
      first file.

Directory Structure:
    uploads/
    ├── notes.txt
    └── photo.png
"""

import logging
from pathlib import Path, PurePosixPath, PureWindowsPath
from typing import Optional

import aiofiles

from jokebox.config import settings
from jokebox.exceptions import FileStorageError, MissingFileError

logger = logging.getLogger(__name__)


def safe_filename(filename: Optional[str]) -> str:
    """
    Reduce a client-supplied filename to its final path component.

    Both separators are stripped since browsers on Windows may send
    backslash paths. Returns "" for names that reduce to nothing ("", ".", "..").
    """
    if not filename:
        return ""
    name = PureWindowsPath(PurePosixPath(filename).name).name
    if name in ("", ".", ".."):
        return ""
    return name


class UploadService:
    """
    Manages the upload directory.

    Lifecycle of an uploaded file:
        1. Route reads the multipart `file` part → UploadService.save()
        2. Filename reduced to a safe basename
        3. Content written to <upload_dir>/<name>, replacing any existing file
        4. Stored name returned to the client
    """

    def __init__(self, upload_dir: Optional[str] = None):
        """
        Args:
            upload_dir: Override the default upload path (used in tests).
                        If None, uses settings.upload_dir.
        """
        self.upload_dir = Path(upload_dir or settings.upload_dir).resolve()

    def ensure_directory(self) -> bool:
        """
        Create the upload directory if it is missing.

        Returns True when the directory was created by this call.
        """
        if self.upload_dir.is_dir():
            return False
        try:
            self.upload_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise FileStorageError(
                message="Could not create the upload directory",
                context={"path": str(self.upload_dir), "os_error": str(e)},
            ) from e
        logger.info("Created uploads directory: %s", self.upload_dir)
        return True

    async def save(self, filename: Optional[str], content: Optional[bytes]) -> str:
        """
        Persist uploaded bytes under the client-supplied name.

        Returns:
            The name the file was stored under.

        Raises:
            MissingFileError: no usable filename or no content object (→ 400)
            FileStorageError: the write failed (→ 500)
        """
        name = safe_filename(filename)
        if not name or content is None:
            raise MissingFileError(context={"filename": filename})

        self.ensure_directory()
        target = self.upload_dir / name

        try:
            async with aiofiles.open(target, "wb") as f:
                await f.write(content)
        except OSError as e:
            logger.error("Failed to store upload at %s: %s", target, str(e))
            raise FileStorageError(
                message="Failed to save uploaded file. Please try again.",
                context={"path": str(target), "os_error": str(e)},
            ) from e

        logger.info("File uploaded: %s (%d bytes)", name, len(content))
        return name
