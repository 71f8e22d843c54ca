"""Admin form questions endpoint - division-scoped management of program questions.

A single endpoint receives ``{"action": ..., "data": {...}}`` and dispatches
to list / create / update / delete.
"""

import logging
from typing import Any

from fastapi import APIRouter, Depends, HTTPException, Request, Response, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ValidationError
from sqlalchemy.ext.asyncio import AsyncSession

import config
from api.deps import get_db, get_division_context
from api.division import DivisionContext
from api.errors import InternalError, ValidationFailedError, describe_validation_error
from models.program_form_question import FormQuestionResponse
from services import form_questions_service

logger = logging.getLogger(__name__)

router = APIRouter()


class AdminActionRequest(BaseModel):
    """Body of an admin action request."""

    action: str | None = None
    data: dict[str, Any] | None = None


def _question_json(question) -> dict:
    return FormQuestionResponse.model_validate(question).model_dump(mode="json")


async def _read_action_request(request: Request) -> AdminActionRequest:
    """Parse the request body once the caller has been authenticated."""
    try:
        raw = await request.json()
    except (ValueError, RecursionError):
        raise ValidationFailedError("Invalid request body")
    if not isinstance(raw, dict):
        raise ValidationFailedError("Invalid request body")
    try:
        return AdminActionRequest.model_validate(raw)
    except ValidationError as e:
        raise ValidationFailedError(describe_validation_error(e))


async def _list(db: AsyncSession, division_ctx: DivisionContext, data: dict) -> dict:
    questions = await form_questions_service.list_questions(db, division_ctx=division_ctx, data=data)
    return {"questions": [_question_json(q) for q in questions]}


async def _create(db: AsyncSession, division_ctx: DivisionContext, data: dict) -> dict:
    question = await form_questions_service.create_question(db, division_ctx=division_ctx, data=data)
    return {"question": _question_json(question)}


async def _update(db: AsyncSession, division_ctx: DivisionContext, data: dict) -> dict:
    question = await form_questions_service.update_question(db, division_ctx=division_ctx, data=data)
    return {"question": _question_json(question)}


async def _delete(db: AsyncSession, division_ctx: DivisionContext, data: dict) -> dict:
    await form_questions_service.delete_question(db, division_ctx=division_ctx, data=data)
    return {}


ACTIONS = {
    "list": _list,
    "create": _create,
    "update": _update,
    "delete": _delete,
}


@router.options("/admin-form-questions")
async def admin_form_questions_preflight():
    """CORS pre-flight: the allowed headers and no body."""
    return Response(status_code=status.HTTP_200_OK, headers=config.CORS_HEADERS)


@router.post("/admin-form-questions")
async def admin_form_questions(
    request: Request,
    division_ctx: DivisionContext = Depends(get_division_context),
    db: AsyncSession = Depends(get_db),
):
    """
    Run an admin action on program form questions.

    Actions (``data`` fields):
    - list: program_id
    - create: program_id, question_text, question_type, is_required, options, sort_order
    - update: id plus any of the create fields except program_id
    - delete: id

    Returns:
        ``{"success": true, ...}`` with ``questions`` (list) or ``question`` (create/update)

    Raises:
        400 for a missing/unknown action or invalid data, 401 for token or
        account failures, 403 when the program is outside the admin's
        division, 404 for unknown questions, 500 for unexpected failures.
    """
    body = await _read_action_request(request)

    if not body.action:
        raise ValidationFailedError("Action is required")

    handler = ACTIONS.get(body.action)
    if handler is None:
        raise ValidationFailedError("Invalid action")

    try:
        result = await handler(db, division_ctx, body.data or {})
    except HTTPException:
        raise
    except Exception as e:
        await db.rollback()
        logger.error(
            f"Error in admin-form-questions action {body.action!r}: {type(e).__name__}: {str(e)}",
            exc_info=True,
        )
        raise InternalError("Internal server error")

    return JSONResponse(
        status_code=status.HTTP_200_OK,
        content={"success": True, **result},
        headers=config.CORS_HEADERS,
    )
