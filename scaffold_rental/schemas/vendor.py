from pydantic import Field
from scaffold_rental.schemas.base import Record

class Vendor(Record):
    key_field = "npwp"

    company_name: str
    npwp: str = Field(min_length=1)
    contact_person: str
    phone: str
    email: str
    address: str
    bank_account: str
    payment_terms: int = Field(default=30, ge=0)
