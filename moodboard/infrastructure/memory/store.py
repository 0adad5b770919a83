# moodboard/infrastructure/memory/store.py
import logging
from io import BytesIO
from typing import BinaryIO, Iterable, List, Optional

from moodboard.domain.blobs import ImageBlobStore
from moodboard.domain.errors import BlobNotFound, NoSuchItem, StorageFailure
from moodboard.domain.index import ItemIndex
from moodboard.domain.item import Item
from moodboard.domain.locking import ReadWriteLock
from moodboard.domain.store import Store
from moodboard.infrastructure.blob.memory import MemoryBlobStore

# --- Logger ---
logger = logging.getLogger(__name__)
if not logger.handlers:
    handler = logging.StreamHandler()
    formatter = logging.Formatter('%(asctime)s [%(levelname)s] [MemoryStore] %(message)s', '%Y-%m-%d %H:%M:%S')
    handler.setFormatter(formatter)
    logger.addHandler(handler)
    logger.setLevel(logging.INFO)
    logger.propagate = False


class MemoryStore(Store):
    """In-memory collection of moodboard items. Nothing survives a restart."""

    kind = "memory"

    def __init__(self, items: Optional[Iterable[Item]] = None, blobs: Optional[ImageBlobStore] = None):
        self._index = ItemIndex(items)
        self.blobs = blobs if blobs is not None else MemoryBlobStore()
        self._lock = ReadWriteLock()

    def create(self, image: BinaryIO) -> Item:
        # Read the whole upload before taking the lock.
        try:
            buf = image.read()
        except OSError as e:
            raise StorageFailure(f"failed to read image: {e}") from e

        item = Item.new()
        with self._lock.write():
            try:
                self.blobs.save(item.id, BytesIO(buf))
            except OSError as e:
                raise StorageFailure(f"failed to save image: {e}") from e
            self._index.append(item)
        return item

    def all(self) -> List[Item]:
        with self._lock.read():
            return self._index.items()

    def get_image(self, item_id: str) -> BinaryIO:
        with self._lock.read():
            if item_id not in self._index:
                raise NoSuchItem(item_id)
            try:
                return self.blobs.load(item_id)
            except BlobNotFound as e:
                raise StorageFailure(f"index references missing image {item_id!r}") from e

    def update(self, item: Item) -> None:
        with self._lock.write():
            self._index.replace(item)

    def move_before(self, item_id: str, before_id: str) -> None:
        with self._lock.write():
            self._index.move_before(item_id, before_id)

    def move_after(self, item_id: str, after_id: str) -> None:
        with self._lock.write():
            self._index.move_after(item_id, after_id)

    def delete(self, item_id: str) -> None:
        with self._lock.write():
            self._index.remove(item_id)
            try:
                self.blobs.delete(item_id)
            except OSError:
                logger.warning(f"Orphaned image left behind for {item_id}", exc_info=True)
