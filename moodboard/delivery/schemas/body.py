from pydantic import BaseModel, ConfigDict, Field, model_validator
from typing import Optional

from moodboard.domain.item import Item

class ItemBody(BaseModel):
    id: str = Field(min_length=1)

    # Normalized screen coordinates, all in [0, 1]
    x: float = Field(ge=0, le=1)
    y: float = Field(ge=0, le=1)
    width: float = Field(ge=0, le=1)

    def to_item(self) -> Item:
        return Item(id=self.id, x=self.x, y=self.y, width=self.width)

class DeleteBody(BaseModel):
    id: str = Field(min_length=1)

class MoveBody(BaseModel):
    model_config = ConfigDict(extra="ignore")

    before: Optional[str] = None
    after: Optional[str] = None

    @model_validator(mode="after")
    def exactly_one_target(self) -> "MoveBody":
        # Empty strings count as absent.
        if bool(self.before) == bool(self.after):
            raise ValueError("exactly one of 'before' or 'after' is required")
        return self
