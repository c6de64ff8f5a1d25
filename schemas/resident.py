from datetime import date, datetime

from pydantic import BaseModel, ConfigDict, Field, model_validator

from core.enums import ResidentStatus
from schemas.validators import NonBlankStr, RoomNumber


class ResidentCreate(BaseModel):
    """Schema for checking a resident in"""

    name: NonBlankStr
    room_number: RoomNumber = Field(..., description="Number of the room to place the resident in")
    phone: NonBlankStr
    status: ResidentStatus = ResidentStatus.ACTIVE
    expected_checkout: date | None = None


class ResidentUpdate(BaseModel):
    """
    Partial update. Omitted fields are left unchanged; an empty room_number
    takes the resident out of any room.
    """

    name: NonBlankStr | None = None
    room_number: str | None = Field(None, max_length=32)
    phone: NonBlankStr | None = None
    status: ResidentStatus | None = None
    expected_checkout: date | None = None

    @model_validator(mode="after")
    def strip_room_number(self) -> "ResidentUpdate":
        if self.room_number is not None:
            self.room_number = self.room_number.strip()
        return self


class ResidentResponse(BaseModel):
    id: str
    name: str
    room_number: str
    phone: str
    status: ResidentStatus
    check_in: date
    expected_checkout: date | None
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)
