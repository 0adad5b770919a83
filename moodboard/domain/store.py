# moodboard/domain/store.py
from abc import ABC, abstractmethod
from typing import BinaryIO, List

from moodboard.domain.item import Item


class Store(ABC):
    """A collection of moodboard items and their images.

    Every method that names an item id raises ``NoSuchItem`` when that id is
    not in the collection. Anything else that goes wrong (I/O, encoding, a
    missing image for an indexed item) raises ``StorageFailure``.
    """

    kind: str = "abstract"

    @abstractmethod
    def create(self, image: BinaryIO) -> Item:
        """Append a new zero-positioned item carrying ``image``."""

    @abstractmethod
    def all(self) -> List[Item]:
        """Return every item in display order (empty list if none)."""

    @abstractmethod
    def get_image(self, item_id: str) -> BinaryIO:
        """Open the image stored for ``item_id``."""

    @abstractmethod
    def update(self, item: Item) -> None:
        """Replace the record with the same id as ``item``."""

    @abstractmethod
    def move_before(self, item_id: str, before_id: str) -> None:
        """Move ``item_id`` so it sits immediately before ``before_id``."""

    @abstractmethod
    def move_after(self, item_id: str, after_id: str) -> None:
        """Move ``item_id`` so it sits immediately after ``after_id``."""

    @abstractmethod
    def delete(self, item_id: str) -> None:
        """Remove the item and its image."""
