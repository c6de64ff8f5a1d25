from datetime import date

from sqlalchemy import CheckConstraint, Date, String
from sqlalchemy.orm import Mapped, mapped_column

from core.database import Base
from core.enums import ResidentStatus
from models.mixins import HostelModel


class Resident(HostelModel, Base):
    """
    A person staying at the hostel.

    Source of truth for who lives where: `room_number` joins to Room.number,
    and an active resident with a room number is kept in that room's occupant
    list by OccupancySynchronizer.
    """

    __tablename__ = "resident"

    name: Mapped[str] = mapped_column(String, nullable=False)
    room_number: Mapped[str] = mapped_column(String, nullable=False, index=True)
    phone: Mapped[str] = mapped_column(String, nullable=False)
    status: Mapped[str] = mapped_column(
        String, nullable=False, default=ResidentStatus.ACTIVE.value, index=True
    )
    check_in: Mapped[date] = mapped_column(Date, nullable=False, default=date.today)
    expected_checkout: Mapped[date | None] = mapped_column(Date, nullable=True)

    __table_args__ = (
        CheckConstraint(
            f"status IN {tuple(ResidentStatus.values())}", name="resident_status_check"
        ),
    )
