
from pydantic import BaseModel, ConfigDict, Field, model_validator
from typing import List, Union
from datetime import datetime

NUMBER_SERVICE = "Facebook/WhatsApp"
NUMBER_STATUS = "available"
MESSAGE_SERVICE = "SMS"
NO_CODE = "N/A"

class NumberRecord(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    sequence_id: int = Field(..., alias="id", ge=1, description="run-local, never a persistent key")
    range: str = ""
    prefix: str = ""
    phone: str
    payout: str = ""
    client: str = "Unassigned"
    country: str = "Unknown"
    service: str = NUMBER_SERVICE
    status: str = NUMBER_STATUS
    price: str = ""

class MessageRecord(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    sequence_id: int = Field(..., alias="id", ge=1, description="run-local, never a persistent key")
    phone: str
    code: str = NO_CODE
    service: str = MESSAGE_SERVICE
    message: str
    timestamp: str = Field(default_factory=lambda: datetime.now().isoformat())
    cli: str = ""
    range: str = ""
    client: str = ""

Record = Union[NumberRecord, MessageRecord]

class Snapshot(BaseModel):
    model_config = ConfigDict(frozen=True)

    success: bool
    records: List[Record] = []

    @model_validator(mode="after")
    def _failed_is_empty(self):
        if not self.success and self.records:
            raise ValueError("a failed snapshot cannot carry records")
        return self

    @classmethod
    def failed(cls) -> "Snapshot":
        return cls(success=False, records=[])
