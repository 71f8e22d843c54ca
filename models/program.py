"""Program model - programs owned by a division."""

from datetime import datetime, UTC
from uuid import UUID, uuid4

from sqlalchemy import Boolean, String, ForeignKey, DateTime, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from db import Base


class Program(Base):
    """Program ORM model."""

    __tablename__ = "programs"

    id: Mapped[UUID] = mapped_column(
        Uuid(as_uuid=True),
        primary_key=True,
        default=uuid4,
        index=True,
    )
    division_id: Mapped[UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("divisions.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(UTC),
    )
