from sqlalchemy import CheckConstraint, String
from sqlalchemy.orm import Mapped, mapped_column

from core.database import Base
from core.enums import UserRole, UserStatus
from models.mixins import HostelModel


class User(HostelModel, Base):
    """
    Staff / administrator account.

    Inherits from HostelModel:
        - id: CUID primary key
        - created_at: Creation timestamp
        - updated_at: Last update timestamp

    Emails are stored lower-cased; uniqueness is enforced by the database.
    """

    __tablename__ = "user"

    name: Mapped[str] = mapped_column(String, nullable=False)
    email: Mapped[str] = mapped_column(String, unique=True, nullable=False, index=True)
    hashed_password: Mapped[str] = mapped_column(String, nullable=False)
    # Free-form so legacy labels such as "Administrator" survive
    role: Mapped[str] = mapped_column(
        String, nullable=False, default=UserRole.STAFF.value
    )
    status: Mapped[str] = mapped_column(
        String, nullable=False, default=UserStatus.ACTIVE.value
    )

    __table_args__ = (
        CheckConstraint(
            f"status IN {tuple(UserStatus.values())}", name="user_status_check"
        ),
    )

    @property
    def is_active(self) -> bool:
        return self.status == UserStatus.ACTIVE.value
