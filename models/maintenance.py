from datetime import date

from sqlalchemy import Date, String
from sqlalchemy.orm import Mapped, mapped_column

from core.database import Base
from core.enums import MaintenancePriority, MaintenanceStatus
from models.mixins import HostelModel


class MaintenanceRequest(HostelModel, Base):
    """Maintenance ticket raised against a room"""

    __tablename__ = "maintenance_request"

    room_number: Mapped[str] = mapped_column(String, nullable=False, index=True)
    issue: Mapped[str] = mapped_column(String, nullable=False)
    type: Mapped[str] = mapped_column(String, nullable=False, default="Others")
    priority: Mapped[str] = mapped_column(
        String, nullable=False, default=MaintenancePriority.MEDIUM.value
    )
    status: Mapped[str] = mapped_column(
        String, nullable=False, default=MaintenanceStatus.OPEN.value, index=True
    )
    reported_by: Mapped[str] = mapped_column(String, nullable=False, default="")
    reported_on: Mapped[date] = mapped_column(Date, nullable=False, default=date.today)
