# moodboard/domain/item.py
import uuid
from pydantic import BaseModel, ConfigDict


class Item(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str

    # Normalized to [0, 1]; range is enforced at the HTTP boundary.
    x: float = 0.0
    y: float = 0.0
    width: float = 0.0

    @classmethod
    def new(cls) -> "Item":
        return cls(id=str(uuid.uuid4()))
