from enum import Enum
from pydantic import Field
from scaffold_rental.schemas.base import Record

class RentalOrderStatus(str, Enum):
    BOOKED = "Booked"
    QUOTATION_APPROVED = "QuotationApproved"
    DELIVERED = "Delivered"
    ACTIVE = "Active"
    RETURNED = "Returned"

class RentalOrder(Record):
    key_field = "order_id"

    order_id: str = Field(min_length=1)
    customer_id: str
    item_ids: list[str]
    # ISO dates (YYYY-MM-DD), as exchanged with the data service
    start_date: str
    end_date: str
    status: RentalOrderStatus = RentalOrderStatus.BOOKED
