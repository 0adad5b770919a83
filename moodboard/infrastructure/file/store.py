# moodboard/infrastructure/file/store.py
import os
import logging
from typing import BinaryIO, Callable, List, Optional, TypeVar

from pydantic import TypeAdapter, ValidationError

from moodboard.domain.blobs import ImageBlobStore
from moodboard.domain.errors import BlobNotFound, NoSuchItem, StorageFailure, StoreFatal
from moodboard.domain.index import ItemIndex
from moodboard.domain.item import Item
from moodboard.domain.locking import ReadWriteLock
from moodboard.domain.store import Store
from moodboard.infrastructure.blob.disk import DirectoryBlobStore

INDEX_FILENAME = "index.json"

_ITEMS = TypeAdapter(List[Item])

T = TypeVar("T")

# --- Logger ---
logger = logging.getLogger(__name__)
if not logger.handlers:
    handler = logging.StreamHandler()
    formatter = logging.Formatter('%(asctime)s [%(levelname)s] [FileStore] %(message)s', '%Y-%m-%d %H:%M:%S')
    handler.setFormatter(formatter)
    logger.addHandler(handler)
    logger.setLevel(logging.INFO)
    logger.propagate = False


def _decode(data: bytes) -> ItemIndex:
    # An empty document is an empty board, not an error.
    if not data.strip():
        return ItemIndex()
    try:
        return ItemIndex(_ITEMS.validate_json(data))
    except ValidationError as e:
        raise StorageFailure(f"failed to read store: {e.error_count()} invalid entries") from e


def _encode(index: ItemIndex) -> bytes:
    try:
        return _ITEMS.dump_json(index.items()) + b"\n"
    except (TypeError, ValueError) as e:
        raise StorageFailure("failed to encode store") from e


class FileStore(Store):
    """On-disk collection of moodboard items.

    ``path`` is a directory holding the ``index.json`` document (a JSON array
    of item records, in display order) next to one image file per item id.
    Every mutation rewrites the whole document under the write lock, so the
    last writer wins and no reader ever sees a partial document.
    """

    kind = "file"

    def __init__(self, path: str, blobs: Optional[ImageBlobStore] = None):
        if os.path.exists(path) and not os.path.isdir(path):
            raise StoreFatal(f"store path {path!r} is not a directory")
        self.path = path
        self.index_path = os.path.join(path, INDEX_FILENAME)
        self.blobs = blobs if blobs is not None else DirectoryBlobStore(path)
        self._lock = ReadWriteLock()

    def _read(self) -> ItemIndex:
        try:
            with open(self.index_path, "rb") as f:
                data = f.read()
        except FileNotFoundError:
            return ItemIndex()
        except OSError as e:
            raise StorageFailure(f"failed to open store: {e}") from e
        return _decode(data)

    def _rewrite(self, mutate: Callable[[ItemIndex], T], create: bool = False) -> T:
        """Read-modify-write-truncate the index document.

        Must be called with the write lock held. ``mutate`` may raise
        ``NoSuchItem``; the document is then left untouched. When ``create``
        is false a missing document means there is nothing to modify.
        """
        try:
            if create:
                os.makedirs(self.path, exist_ok=True)
                fd = os.open(self.index_path, os.O_RDWR | os.O_CREAT, 0o666)
            else:
                fd = os.open(self.index_path, os.O_RDWR)
        except FileNotFoundError as e:
            if create:
                # The directory vanished under us; nothing was recorded.
                raise StorageFailure(f"failed to create store: {e}") from e
            return mutate(ItemIndex())
        except OSError as e:
            raise StorageFailure(f"failed to open store: {e}") from e

        with os.fdopen(fd, "r+b") as f:
            try:
                index = _decode(f.read())
                result = mutate(index)

                # Encode fully before touching the file.
                data = _encode(index)
                f.seek(0)
                f.write(data)
                f.truncate()
                f.flush()
                os.fsync(f.fileno())
            except OSError as e:
                raise StorageFailure(f"failed to write store: {e}") from e
        return result

    def create(self, image: BinaryIO) -> Item:
        item = Item.new()
        with self._lock.write():
            try:
                self.blobs.save(item.id, image)
            except OSError as e:
                raise StorageFailure(f"failed to save image: {e}") from e

            try:
                self._rewrite(lambda index: index.append(item), create=True)
            except StorageFailure:
                logger.warning(f"Index write failed, rolling back image for {item.id}")
                self.blobs.delete(item.id)
                raise
        return item

    def all(self) -> List[Item]:
        with self._lock.read():
            return self._read().items()

    def get_image(self, item_id: str) -> BinaryIO:
        with self._lock.read():
            if item_id not in self._read():
                raise NoSuchItem(item_id)
            try:
                return self.blobs.load(item_id)
            except BlobNotFound as e:
                raise StorageFailure(f"index references missing image {item_id!r}") from e
            except OSError as e:
                raise StorageFailure(f"failed to open image: {e}") from e

    def update(self, item: Item) -> None:
        with self._lock.write():
            self._rewrite(lambda index: index.replace(item))

    def move_before(self, item_id: str, before_id: str) -> None:
        with self._lock.write():
            self._rewrite(lambda index: index.move_before(item_id, before_id))

    def move_after(self, item_id: str, after_id: str) -> None:
        with self._lock.write():
            self._rewrite(lambda index: index.move_after(item_id, after_id))

    def delete(self, item_id: str) -> None:
        with self._lock.write():
            self._rewrite(lambda index: index.remove(item_id))
            try:
                self.blobs.delete(item_id)
            except OSError:
                # The record is already gone; the blob is an orphan now.
                logger.warning(f"Orphaned image left behind for {item_id}", exc_info=True)
