"""Division context and the authorization pipeline for admin requests.

Authorization runs as separate steps so each can be exercised on its own:

1. the admin token is verified (``api.deps.get_admin_identity``);
2. the admin record is re-read and must still be active
   (``require_active_admin``);
3. a program being touched must belong to the admin's division
   (``require_program_access``).
"""

from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from api.errors import AccountInactiveError, ScopeMismatchError
from auth.schemas import AdminTokenPayload
from models.admin import Admin
from models.program import Program
from repos import admins_repo, programs_repo


class DivisionContext:
    """Context for division-scoped operations."""

    def __init__(self, admin_id: UUID, user_id: str, division_id: UUID):
        """
        Initialize division context.

        Args:
            admin_id: Admin.id of the authenticated admin
            user_id: User account from the token
            division_id: Division of the admin, read from the admin record
        """
        self.admin_id = admin_id
        self.user_id = user_id
        self.division_id = division_id

    @classmethod
    def from_admin(cls, admin: Admin, identity: AdminTokenPayload) -> "DivisionContext":
        return cls(admin_id=admin.id, user_id=identity.user_id, division_id=admin.division_id)


def parse_uuid(value) -> UUID | None:
    """Parse an identifier supplied by a client; None if it is not a UUID."""
    if isinstance(value, UUID):
        return value
    try:
        return UUID(str(value))
    except (TypeError, ValueError):
        return None


async def require_active_admin(
    session: AsyncSession,
    identity: AdminTokenPayload,
) -> Admin:
    """
    Load the admin named by a verified token and check it is still active.

    The token alone does not prove the account is still enabled, so the
    record is read on every request.

    Args:
        session: Database session
        identity: Verified token payload

    Returns:
        Admin: The active admin record

    Raises:
        AccountInactiveError: 401 if the admin does not exist or is inactive
    """
    admin_id = parse_uuid(identity.admin_id)
    admin = await admins_repo.get_by_id(session, admin_id=admin_id) if admin_id else None

    if admin is None or not admin.is_active:
        raise AccountInactiveError("Admin account not found or inactive")

    return admin


async def require_program_access(
    session: AsyncSession,
    division_ctx: DivisionContext,
    program_id,
) -> Program:
    """
    Verify a program belongs to the admin's division.

    A missing program is reported the same way as a foreign one, so admins
    cannot probe other divisions for program IDs.

    Args:
        session: Database session
        division_ctx: Division context of the authenticated admin
        program_id: Program ID (UUID or string from the request)

    Returns:
        Program: The program record

    Raises:
        ScopeMismatchError: 403 if the program is missing or owned by another division
    """
    program_uuid = parse_uuid(program_id)
    program = await programs_repo.get_by_id(session, program_id=program_uuid) if program_uuid else None

    if program is None or program.division_id != division_ctx.division_id:
        raise ScopeMismatchError("You can only manage questions for programs in your division")

    return program
