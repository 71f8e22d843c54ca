"""Panchayath model - geographic units that scope the agent hierarchy."""

from datetime import datetime, UTC
from uuid import UUID, uuid4

from pydantic import BaseModel
from sqlalchemy import Boolean, String, DateTime, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from db import Base


class Panchayath(Base):
    """Panchayath ORM model."""

    __tablename__ = "panchayaths"

    id: Mapped[UUID] = mapped_column(
        Uuid(as_uuid=True),
        primary_key=True,
        default=uuid4,
        index=True,
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    # Number of wards, stored as text
    ward: Mapped[str | None] = mapped_column(String(50), nullable=True)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(UTC),
    )


# Pydantic schemas
class PanchayathResponse(BaseModel):
    """Schema for panchayath response, including the derived ward choices."""

    id: UUID
    name: str
    ward: str | None = None
    ward_options: list[str]
