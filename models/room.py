from sqlalchemy import CheckConstraint, Float, ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from core.database import Base
from core.enums import RoomStatus, RoomType, room_capacity
from models.mixins import HostelModel, VersionedMixin


class Room(HostelModel, VersionedMixin, Base):
    """
    A bookable room.

    `number` is the external identifier residents reference. The occupant list
    lives in `room_occupant` and is written only by OccupancySynchronizer;
    every such write bumps `version`.
    """

    __tablename__ = "room"

    number: Mapped[str] = mapped_column(String, unique=True, nullable=False, index=True)
    type: Mapped[str] = mapped_column(
        String, nullable=False, default=RoomType.SINGLE.value
    )
    price_per_month: Mapped[float] = mapped_column(Float, nullable=False)
    status: Mapped[str] = mapped_column(
        String, nullable=False, default=RoomStatus.AVAILABLE.value, index=True
    )

    __table_args__ = (
        CheckConstraint(
            f"status IN {tuple(RoomStatus.values())}", name="room_status_check"
        ),
        CheckConstraint(f"type IN {tuple(RoomType.values())}", name="room_type_check"),
        CheckConstraint("price_per_month >= 0", name="room_price_check"),
    )

    @property
    def capacity(self) -> int:
        return room_capacity(self.type)


class RoomOccupant(HostelModel, Base):
    """
    Membership of a resident in a room's occupant list.

    Only identifiers are stored; name and check-in date are joined from the
    resident when the list is read. `position` preserves insertion order.
    """

    __tablename__ = "room_occupant"

    room_id: Mapped[str] = mapped_column(
        String, ForeignKey("room.id", ondelete="CASCADE"), nullable=False, index=True
    )
    resident_id: Mapped[str] = mapped_column(
        String, ForeignKey("resident.id", ondelete="CASCADE"), nullable=False
    )
    position: Mapped[int] = mapped_column(Integer, nullable=False)

    __table_args__ = (
        # A resident occupies at most one room
        UniqueConstraint("resident_id", name="uq_room_occupant_resident"),
    )
