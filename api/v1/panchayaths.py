"""Panchayath endpoints - geographic units and their ward choices."""

from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from api.deps import get_db, get_division_context
from api.division import DivisionContext
from models.panchayath import PanchayathResponse
from services import agents_service

router = APIRouter()


@router.get("/panchayaths", response_model=List[PanchayathResponse])
async def list_panchayaths_endpoint(
    division_ctx: DivisionContext = Depends(get_division_context),
    db: AsyncSession = Depends(get_db),
):
    """List active panchayaths ordered by name, with their ward choices."""
    return await agents_service.list_panchayaths(db)


@router.get("/panchayaths/{panchayath_id}/ward-options", response_model=List[str])
async def ward_options_endpoint(
    panchayath_id: UUID,
    division_ctx: DivisionContext = Depends(get_division_context),
    db: AsyncSession = Depends(get_db),
):
    """
    Ward numbers ("1".."N") of a panchayath.

    Raises:
        404 if the panchayath is not found.
    """
    return await agents_service.get_ward_options(db, panchayath_id=panchayath_id)
