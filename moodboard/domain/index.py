# moodboard/domain/index.py
from typing import Iterable, Iterator, List, Optional

from moodboard.domain.errors import NoSuchItem
from moodboard.domain.item import Item


class ItemIndex:
    """Ordered collection of item records.

    The list order is the display order of the board. Every operation either
    applies completely or raises ``NoSuchItem`` without touching the list, so
    callers can persist the result only on success.
    """

    def __init__(self, items: Optional[Iterable[Item]] = None):
        self._items: List[Item] = list(items or [])

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[Item]:
        return iter(list(self._items))

    def __contains__(self, item_id: object) -> bool:
        return any(item.id == item_id for item in self._items)

    def items(self) -> List[Item]:
        return list(self._items)

    def position(self, item_id: str) -> int:
        for i, item in enumerate(self._items):
            if item.id == item_id:
                return i
        raise NoSuchItem(item_id)

    def append(self, item: Item) -> None:
        self._items.append(item)

    def replace(self, item: Item) -> None:
        self._items[self.position(item.id)] = item

    def remove(self, item_id: str) -> Item:
        return self._items.pop(self.position(item_id))

    def move_before(self, item_id: str, before_id: str) -> None:
        self._move(item_id, before_id, after=False)

    def move_after(self, item_id: str, after_id: str) -> None:
        self._move(item_id, after_id, after=True)

    def _move(self, item_id: str, ref_id: str, after: bool) -> None:
        # Resolve both ids before mutating anything.
        index = self.position(item_id)
        target = self.position(ref_id)

        if index < target:
            if not after:
                target -= 1
            moved = self._items[index]
            self._items[index:target] = self._items[index + 1:target + 1]
            self._items[target] = moved
        elif index > target:
            if after:
                target += 1
            moved = self._items[index]
            self._items[target + 1:index + 1] = self._items[target:index]
            self._items[target] = moved
