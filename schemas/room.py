from datetime import date, datetime
from typing import Any, Sequence

from pydantic import BaseModel, ConfigDict, Field

from core.enums import RoomStatus, RoomType
from schemas.validators import RoomNumber


class RoomCreate(BaseModel):
    """
    Schema for creating a room. Only `maintenance` is honoured as an initial
    status; otherwise a new room starts `available`.
    """

    number: RoomNumber
    type: RoomType = RoomType.SINGLE
    price_per_month: float = Field(..., ge=0)
    status: RoomStatus = RoomStatus.AVAILABLE


class RoomUpdate(BaseModel):
    """
    Administrative room update. The occupant list is not part of this schema;
    it changes only through resident check-in, moves and check-out.
    """

    number: RoomNumber | None = None
    type: RoomType | None = None
    price_per_month: float | None = Field(None, ge=0)
    status: RoomStatus | None = Field(
        None,
        description="'maintenance' takes the room out of service; any other value "
        "clears maintenance and the status follows occupancy again",
    )


class OccupantResponse(BaseModel):
    """A resident currently placed in a room"""

    resident_id: str
    name: str
    check_in: date

    model_config = ConfigDict(from_attributes=True)


class RoomResponse(BaseModel):
    id: str
    number: str
    type: RoomType
    capacity: int
    price_per_month: float
    status: RoomStatus
    occupants: list[OccupantResponse]
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_orm_model(cls, room, occupants: Sequence[Any]) -> "RoomResponse":
        """Combine a Room with its occupant rows"""
        return cls(
            id=room.id,
            number=room.number,
            type=room.type,
            capacity=room.capacity,
            price_per_month=room.price_per_month,
            status=room.status,
            occupants=[
                OccupantResponse.model_validate(row, from_attributes=True)
                for row in occupants
            ],
            created_at=room.created_at,
            updated_at=room.updated_at,
        )
