# moodboard/infrastructure/blob/disk.py
import os
import shutil
from typing import BinaryIO

from moodboard.domain.blobs import ImageBlobStore
from moodboard.domain.errors import BlobNotFound

COPY_CHUNK_SIZE = 64 * 1024


class DirectoryBlobStore(ImageBlobStore):
    """One file per item id inside ``path``.

    The directory is only created on the first ``save``.
    """

    def __init__(self, path: str):
        self.path = path

    def _blob_path(self, item_id: str) -> str:
        # Ids are generated UUIDs; refuse anything that could escape the directory.
        if not item_id or os.path.basename(item_id) != item_id or item_id in (".", ".."):
            raise BlobNotFound(item_id)
        return os.path.join(self.path, item_id)

    def save(self, item_id: str, stream: BinaryIO) -> str:
        dest = self._blob_path(item_id)
        os.makedirs(self.path, exist_ok=True)

        tmp = dest + ".tmp"
        try:
            with open(tmp, "wb") as f:
                shutil.copyfileobj(stream, f, COPY_CHUNK_SIZE)
            os.replace(tmp, dest)
        except BaseException:
            if os.path.exists(tmp):
                os.remove(tmp)
            raise
        return dest

    def load(self, item_id: str) -> BinaryIO:
        try:
            return open(self._blob_path(item_id), "rb")
        except FileNotFoundError:
            raise BlobNotFound(item_id) from None

    def delete(self, item_id: str) -> None:
        try:
            os.remove(self._blob_path(item_id))
        except (FileNotFoundError, BlobNotFound):
            pass
