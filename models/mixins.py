"""
SQLAlchemy mixins for common model patterns.

    - CuidMixin: CUID string primary key
    - TimestampMixin: created_at / updated_at
    - VersionedMixin: optimistic-locking counter
    - HostelModel: CuidMixin + TimestampMixin, the default for every table
"""
from datetime import datetime

from sqlalchemy import DateTime, Integer, String
from sqlalchemy.orm import Mapped, declared_attr, mapped_column
from sqlalchemy.sql import func

from utils.generators import generate_cuid


class CuidMixin:
    """Provides `id`: string primary key with automatic CUID generation"""

    @declared_attr
    def id(cls) -> Mapped[str]:
        return mapped_column(String, primary_key=True, default=generate_cuid)


class TimestampMixin:
    """
    Mixin for timestamp tracking.

    Provides:
        - created_at: Timestamp set on creation (server-side default)
        - updated_at: Timestamp updated on modification (server-side default + onupdate)
    """

    @declared_attr
    def created_at(cls) -> Mapped[datetime]:
        return mapped_column(
            DateTime(timezone=True), server_default=func.now(), nullable=False
        )

    @declared_attr
    def updated_at(cls) -> Mapped[datetime]:
        return mapped_column(
            DateTime(timezone=True),
            server_default=func.now(),
            onupdate=func.now(),
            nullable=False,
        )


class VersionedMixin:
    """
    Optimistic locking with version tracking.

    Provides:
        - version: Integer counter bumped by every conditional write

    Writers read the row, then write with
        update(Model).where(Model.id == id, Model.version == read_version)
                     .values(..., version=read_version + 1)
    and treat rowcount == 0 as a lost race (see OccupancySynchronizer).
    """

    @declared_attr
    def version(cls) -> Mapped[int]:
        return mapped_column(Integer, default=1, nullable=False)


class HostelModel(CuidMixin, TimestampMixin):
    """
    Standard model base: CUID primary key plus created/updated timestamps.

    Usage:
        class MyModel(HostelModel, Base):
            __tablename__ = "my_model"
    """

    __abstract__ = True
