from pydantic import Field
from scaffold_rental.schemas.base import Record

class Customer(Record):
    key_field = "npwp"

    name: str
    npwp: str = Field(min_length=1)
    contact_person: str
    phone: str
    email: str
    address: str
    credit_limit: int = Field(default=0, ge=0)
