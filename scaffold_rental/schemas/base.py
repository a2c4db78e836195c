from typing import ClassVar
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

class Record(BaseModel):
    """A record in one of the data service collections.

    Attributes are snake_case in Python and camelCase on the wire.
    """
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    key_field: ClassVar[str]

    @property
    def key(self) -> str:
        return getattr(self, self.key_field)

    def to_wire(self) -> dict:
        return self.model_dump(by_alias=True, mode="json")
