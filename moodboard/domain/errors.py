# moodboard/domain/errors.py


class MoodboardError(Exception):
    """Base class for every error raised by the moodboard stores."""


class NoSuchItem(MoodboardError):
    """The referenced item id is not present in the collection."""

    def __init__(self, item_id: str):
        super().__init__(f"no such item: {item_id!r}")
        self.item_id = item_id


class DuplicateKey(MoodboardError):
    """An item with the same natural key already exists.

    The id-keyed stores never raise this; it is kept so that stores keyed by
    a natural key (a URL, for example) share the same taxonomy.
    """


class InvalidPayload(MoodboardError):
    """A request payload was rejected before it reached the store.

    ``status_code`` is 400 for a malformed body and 415 for a wrong content
    type; ``accept`` names the media type the endpoint expects.
    """

    def __init__(self, message: str, status_code: int = 400, accept: str = "application/json"):
        super().__init__(message)
        self.status_code = status_code
        self.accept = accept


class StorageFailure(MoodboardError):
    """Disk, encoding or consistency failure inside a store."""


class BlobNotFound(MoodboardError):
    def __init__(self, item_id: str):
        super().__init__(f"no image stored for {item_id!r}")
        self.item_id = item_id


class StoreFatal(MoodboardError):
    """The storage medium cannot be used at all."""
