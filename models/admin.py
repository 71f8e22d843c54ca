"""Admin model - division-scoped administrator accounts."""

from datetime import datetime, UTC
from uuid import UUID, uuid4

from sqlalchemy import Boolean, String, ForeignKey, DateTime, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from db import Base


class Admin(Base):
    """Admin ORM model - the authoritative record behind an admin token."""

    __tablename__ = "admins"

    id: Mapped[UUID] = mapped_column(
        Uuid(as_uuid=True),
        primary_key=True,
        default=uuid4,
        index=True,
    )
    # Identifier of the underlying user account (opaque)
    user_id: Mapped[str | None] = mapped_column(String(255), nullable=True, index=True)
    name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    division_id: Mapped[UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("divisions.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(UTC),
    )
