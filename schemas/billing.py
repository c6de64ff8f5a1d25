from datetime import date, datetime

from pydantic import BaseModel, ConfigDict, Field

from core.enums import BillingStatus
from schemas.validators import NonBlankStr, RoomNumber


class BillingCreate(BaseModel):
    resident_name: NonBlankStr
    room_number: RoomNumber
    amount: float = Field(..., ge=0)
    month: NonBlankStr = Field(..., description="Billed period, e.g. 2026-10")
    status: BillingStatus = BillingStatus.PENDING
    method: str = "Cash"
    due_date: date | None = None
    paid_on: date | None = None
    notes: str = ""
    invoice_no: str | None = Field(None, description="Generated when omitted")


class BillingResponse(BaseModel):
    id: str
    invoice_no: str
    resident_name: str
    room_number: str
    amount: float
    month: str
    status: BillingStatus
    method: str
    due_date: date | None
    paid_on: date | None
    notes: str
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)
