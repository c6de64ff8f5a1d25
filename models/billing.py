from datetime import date

from sqlalchemy import CheckConstraint, Date, Float, String
from sqlalchemy.orm import Mapped, mapped_column

from core.database import Base
from core.enums import BillingStatus
from models.mixins import HostelModel


class Billing(HostelModel, Base):
    """Monthly charge for a resident's room"""

    __tablename__ = "billing"

    invoice_no: Mapped[str] = mapped_column(String, unique=True, nullable=False)
    resident_name: Mapped[str] = mapped_column(String, nullable=False)
    room_number: Mapped[str] = mapped_column(String, nullable=False, index=True)
    amount: Mapped[float] = mapped_column(Float, nullable=False)
    month: Mapped[str] = mapped_column(String, nullable=False)
    status: Mapped[str] = mapped_column(
        String, nullable=False, default=BillingStatus.PENDING.value, index=True
    )
    method: Mapped[str] = mapped_column(String, nullable=False, default="Cash")
    due_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    paid_on: Mapped[date | None] = mapped_column(Date, nullable=True)
    notes: Mapped[str] = mapped_column(String, nullable=False, default="")

    __table_args__ = (
        CheckConstraint("amount >= 0", name="billing_amount_check"),
    )
