"""Health check endpoint."""

from fastapi import APIRouter

import config

router = APIRouter()


@router.get("/health")
async def health_check():
    """
    Health check endpoint. Does not require an admin token.

    Returns:
        dict: Status, service name and environment
    """
    return {
        "status": "ok",
        "service": "division-admin",
        "env": config.settings.ENV,
    }
