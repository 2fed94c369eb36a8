"""Upload storage port."""

from abc import ABC, abstractmethod
from typing import BinaryIO, Optional

from app.application.dtos.base import DTO


class StoredFile(DTO):
    """Uploaded file saved by the storage adapter."""

    name: str  # Original client file name
    url: str
    path: str


class UploadRejectedError(ValueError):
    """Raised when an uploaded file is not accepted."""


class UploadStorage(ABC):
    """Port interface for storing uploaded lead documents."""

    @abstractmethod
    async def save(
        self,
        filename: str,
        content_type: Optional[str],
        stream: BinaryIO,
        base_url: str,
    ) -> StoredFile:
        """
        Store an uploaded file.

        Args:
            filename: Original client file name
            content_type: Declared MIME type
            stream: File contents
            base_url: Public base URL used to build the file URL

        Returns:
            StoredFile descriptor

        Raises:
            UploadRejectedError: If the file type or size is not accepted
        """
        pass

    @abstractmethod
    async def delete(self, stored: StoredFile) -> None:
        """
        Remove a stored file. Missing files are ignored.

        Args:
            stored: File previously returned by save
        """
        pass
