"""Program form question model - questions attached to a program's form."""

from datetime import datetime, UTC
from typing import Any
from uuid import UUID, uuid4

from pydantic import BaseModel, ConfigDict, field_validator
from sqlalchemy import Boolean, Integer, JSON, String, Text, ForeignKey, DateTime, Uuid
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column

from db import Base


class ProgramFormQuestion(Base):
    """ProgramFormQuestion ORM model."""

    __tablename__ = "program_form_questions"

    id: Mapped[UUID] = mapped_column(
        Uuid(as_uuid=True),
        primary_key=True,
        default=uuid4,
        index=True,
    )
    program_id: Mapped[UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("programs.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    question_text: Mapped[str] = mapped_column(Text, nullable=False)
    question_type: Mapped[str] = mapped_column(String(50), nullable=False, default="text")
    is_required: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    options: Mapped[Any | None] = mapped_column(
        JSON().with_variant(JSONB(), "postgresql"),
        nullable=True,
    )
    sort_order: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(UTC),
    )
    updated_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
    )


# Pydantic schemas
class FormQuestionCreate(BaseModel):
    """Schema for the `create` action.

    Missing or null optional fields fall back to their defaults.
    """

    program_id: str
    question_text: str = ""
    question_type: str = "text"
    is_required: bool = False
    options: Any | None = None
    sort_order: int = 0

    @field_validator("question_text", mode="after")
    @classmethod
    def strip_question_text(cls, value: str) -> str:
        return value.strip()

    @field_validator("question_text", "question_type", "sort_order", mode="before")
    @classmethod
    def null_to_default(cls, value, info):
        if value is None or value == "":
            return cls.model_fields[info.field_name].default
        return value

    @field_validator("is_required", mode="before")
    @classmethod
    def null_to_false(cls, value):
        return False if value is None else value


class FormQuestionUpdate(BaseModel):
    """Schema for the `update` action. Only fields present in the request are applied."""

    question_text: str | None = None
    question_type: str | None = None
    is_required: bool | None = None
    options: Any | None = None
    sort_order: int | None = None

    @field_validator("question_text", mode="after")
    @classmethod
    def strip_question_text(cls, value: str | None) -> str | None:
        return value.strip() if value is not None else None


class FormQuestionResponse(BaseModel):
    """Schema for form question response."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    program_id: UUID
    question_text: str
    question_type: str
    is_required: bool
    options: Any | None = None
    sort_order: int
    created_at: datetime
    updated_at: datetime | None = None
