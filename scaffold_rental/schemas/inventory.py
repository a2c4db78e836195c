from enum import Enum
from pydantic import Field
from scaffold_rental.schemas.base import Record

class ItemType(str, Enum):
    PIPE = "Pipe"
    BOARD = "Board"
    FRAME = "Frame"
    ACCESSORY = "Accessory"
    CLAMP = "Clamp"

class ConditionStatus(str, Enum):
    NEW = "New"
    GOOD = "Good"
    FAIR = "Fair"
    DAMAGED = "Damaged"

class InventoryItem(Record):
    key_field = "item_id"

    item_id: str = Field(min_length=1)
    item_type: ItemType = ItemType.FRAME
    quantity: int = Field(default=0, ge=0)
    location: str
    condition: ConditionStatus = ConditionStatus.NEW
    acquisition_cost: int = Field(default=0, ge=0)
