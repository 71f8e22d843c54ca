"""Service layer for program form question business logic.

Every operation takes the raw ``data`` object of an admin action request,
checks that the program involved belongs to the caller's division and only
then touches the store.
"""

from datetime import datetime, UTC
from typing import Any

from pydantic import BaseModel, ValidationError
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from api.division import DivisionContext, parse_uuid, require_program_access
from api.errors import NotFoundError, StoreError, ValidationFailedError, describe_validation_error
from models.program_form_question import (
    FormQuestionCreate,
    FormQuestionUpdate,
    ProgramFormQuestion,
)
from repos import form_questions_repo


def _string_field(data: dict[str, Any], key: str) -> str:
    value = data.get(key)
    return str(value) if value else ""


def _parse(schema: type[BaseModel], data: dict[str, Any]) -> BaseModel:
    try:
        return schema.model_validate(data)
    except ValidationError as e:
        raise ValidationFailedError(describe_validation_error(e))


def _store_message(error: SQLAlchemyError) -> str:
    return str(getattr(error, "orig", None) or error)


async def _get_question_in_division(
    session: AsyncSession,
    division_ctx: DivisionContext,
    data: dict[str, Any],
) -> ProgramFormQuestion:
    question_id = _string_field(data, "id")
    if not question_id:
        raise ValidationFailedError("id is required")

    question_uuid = parse_uuid(question_id)
    question = (
        await form_questions_repo.get_by_id(session, question_id=question_uuid)
        if question_uuid
        else None
    )
    if question is None:
        raise NotFoundError("Question not found")

    await require_program_access(session, division_ctx, question.program_id)
    return question


async def list_questions(
    session: AsyncSession,
    *,
    division_ctx: DivisionContext,
    data: dict[str, Any],
) -> list[ProgramFormQuestion]:
    """
    List the questions of a program.

    Args:
        session: Database session
        division_ctx: Division context of the caller
        data: Request data with ``program_id``

    Returns:
        Questions ordered by sort_order

    Raises:
        ValidationFailedError: 400 if program_id is missing
        ScopeMismatchError: 403 if the program is not in the caller's division
        StoreError: 400 if the query fails
    """
    program_id = _string_field(data, "program_id")
    if not program_id:
        raise ValidationFailedError("program_id is required")

    program = await require_program_access(session, division_ctx, program_id)

    try:
        return await form_questions_repo.list_by_program(session, program_id=program.id)
    except SQLAlchemyError as e:
        raise StoreError(_store_message(e))


async def create_question(
    session: AsyncSession,
    *,
    division_ctx: DivisionContext,
    data: dict[str, Any],
) -> ProgramFormQuestion:
    """
    Create a question on a program.

    Args:
        session: Database session
        division_ctx: Division context of the caller
        data: Request data with ``program_id``, ``question_text`` and optional
            ``question_type``, ``is_required``, ``options``, ``sort_order``

    Returns:
        Created question

    Raises:
        ValidationFailedError: 400 if program_id or question_text is missing or a field is ill-typed
        ScopeMismatchError: 403 if the program is not in the caller's division
        StoreError: 400 if the insert fails
    """
    program_id = _string_field(data, "program_id")
    if not program_id:
        raise ValidationFailedError("program_id is required")

    program = await require_program_access(session, division_ctx, program_id)

    payload: FormQuestionCreate = _parse(FormQuestionCreate, {**data, "program_id": program_id})
    if not payload.question_text:
        raise ValidationFailedError("question_text is required")

    question = ProgramFormQuestion(
        program_id=program.id,
        question_text=payload.question_text,
        question_type=payload.question_type,
        is_required=payload.is_required,
        options=payload.options,
        sort_order=payload.sort_order,
    )

    try:
        question = await form_questions_repo.create(session, question)
        await session.commit()
    except SQLAlchemyError as e:
        await session.rollback()
        raise StoreError(_store_message(e))

    await session.refresh(question)
    return question


async def update_question(
    session: AsyncSession,
    *,
    division_ctx: DivisionContext,
    data: dict[str, Any],
) -> ProgramFormQuestion:
    """
    Update a question. Only fields present in ``data`` change; the program
    a question belongs to never changes.

    Raises:
        ValidationFailedError: 400 if id is missing or a field is invalid
        NotFoundError: 404 if the question does not exist
        ScopeMismatchError: 403 if the question's program is not in the caller's division
        StoreError: 400 if the update fails
    """
    question = await _get_question_in_division(session, division_ctx, data)

    payload: FormQuestionUpdate = _parse(FormQuestionUpdate, data)
    changes = payload.model_dump(include=payload.model_fields_set)

    if "question_text" in changes and not changes["question_text"]:
        raise ValidationFailedError("question_text cannot be empty")
    for field in ("question_type", "is_required", "sort_order"):
        if field in changes and changes[field] is None:
            raise ValidationFailedError(f"{field} cannot be null")

    if not changes:
        return question

    for field, value in changes.items():
        setattr(question, field, value)
    question.updated_at = datetime.now(UTC)

    try:
        question = await form_questions_repo.save(session, question)
        await session.commit()
    except SQLAlchemyError as e:
        await session.rollback()
        raise StoreError(_store_message(e))

    await session.refresh(question)
    return question


async def delete_question(
    session: AsyncSession,
    *,
    division_ctx: DivisionContext,
    data: dict[str, Any],
) -> None:
    """
    Delete a question.

    Raises:
        ValidationFailedError: 400 if id is missing
        NotFoundError: 404 if the question does not exist
        ScopeMismatchError: 403 if the question's program is not in the caller's division
        StoreError: 400 if the delete fails
    """
    question = await _get_question_in_division(session, division_ctx, data)

    try:
        await form_questions_repo.delete(session, question)
        await session.commit()
    except SQLAlchemyError as e:
        await session.rollback()
        raise StoreError(_store_message(e))
