# moodboard/domain/blobs.py
from abc import ABC, abstractmethod
from typing import BinaryIO


class ImageBlobStore(ABC):
    """Raw image bytes keyed by item id."""

    @abstractmethod
    def save(self, item_id: str, stream: BinaryIO) -> str:
        """Store the bytes read from ``stream`` and return their location."""

    @abstractmethod
    def load(self, item_id: str) -> BinaryIO:
        """Open the stored bytes. Raises ``BlobNotFound`` if nothing is stored."""

    @abstractmethod
    def delete(self, item_id: str) -> None:
        """Remove the bytes for ``item_id``; a no-op if none were written."""
