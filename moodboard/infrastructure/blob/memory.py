# moodboard/infrastructure/blob/memory.py
from io import BytesIO
from typing import BinaryIO, Dict

from moodboard.domain.blobs import ImageBlobStore
from moodboard.domain.errors import BlobNotFound


class MemoryBlobStore(ImageBlobStore):
    def __init__(self):
        self._blobs: Dict[str, bytes] = {}

    def save(self, item_id: str, stream: BinaryIO) -> str:
        # bytes are immutable, so readers can share the buffer.
        self._blobs[item_id] = bytes(stream.read())
        return f"memory://{item_id}"

    def load(self, item_id: str) -> BinaryIO:
        try:
            return BytesIO(self._blobs[item_id])
        except KeyError:
            raise BlobNotFound(item_id) from None

    def delete(self, item_id: str) -> None:
        self._blobs.pop(item_id, None)

    def __contains__(self, item_id: object) -> bool:
        return item_id in self._blobs
