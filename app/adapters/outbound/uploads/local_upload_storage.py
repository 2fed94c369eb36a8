"""Local filesystem upload storage adapter."""

import os
import secrets
import time
from pathlib import Path
from typing import BinaryIO, Optional

from app.application.ports.upload_storage import StoredFile, UploadRejectedError, UploadStorage
from app.infrastructure.config.settings import settings

ALLOWED_CONTENT_TYPES = frozenset(
    {"image/jpeg", "image/png", "image/gif", "image/webp", "application/pdf"}
)

_CHUNK_SIZE = 64 * 1024


class LocalUploadStorage(UploadStorage):
    """Stores uploads under a local directory served at /uploads."""

    def __init__(self, directory: Optional[str] = None, max_bytes: Optional[int] = None) -> None:
        """
        Initialize storage.

        Args:
            directory: Upload directory (defaults to settings.uploads_dir)
            max_bytes: Maximum file size (defaults to settings.max_upload_bytes)
        """
        self._directory = Path(directory or settings.uploads_dir)
        self._max_bytes = max_bytes or settings.max_upload_bytes

    @property
    def directory(self) -> Path:
        """Directory files are written to."""
        return self._directory

    def _unique_name(self, filename: str) -> str:
        extension = os.path.splitext(filename)[1].lower()
        suffix = f"{int(time.time() * 1000)}-{secrets.randbelow(10**9)}"
        return f"lead-{suffix}{extension}"

    async def save(
        self,
        filename: str,
        content_type: Optional[str],
        stream: BinaryIO,
        base_url: str,
    ) -> StoredFile:
        """
        Write an upload to disk.

        Args:
            filename: Original client file name
            content_type: Declared MIME type
            stream: File contents
            base_url: Public base URL used to build the file URL

        Returns:
            StoredFile descriptor

        Raises:
            UploadRejectedError: If the type is not allowed or the file is too large
        """
        if content_type not in ALLOWED_CONTENT_TYPES:
            raise UploadRejectedError(
                "Invalid file type. Only JPEG, PNG, GIF, WEBP, and PDF are allowed."
            )

        self._directory.mkdir(parents=True, exist_ok=True)
        stored_name = self._unique_name(filename)
        target = self._directory / stored_name

        written = 0
        with target.open("wb") as handle:
            while True:
                chunk = stream.read(_CHUNK_SIZE)
                if not chunk:
                    break
                written += len(chunk)
                if written > self._max_bytes:
                    break
                handle.write(chunk)

        if written > self._max_bytes:
            target.unlink(missing_ok=True)
            raise UploadRejectedError(
                f"File too large. Maximum size is {self._max_bytes // (1024 * 1024)}MB."
            )

        return StoredFile(
            name=filename,
            url=f"{base_url.rstrip('/')}/uploads/{stored_name}",
            path=str(target),
        )

    async def delete(self, stored: StoredFile) -> None:
        """
        Remove a stored upload.

        Args:
            stored: File previously returned by save
        """
        Path(stored.path).unlink(missing_ok=True)
