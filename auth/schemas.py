"""Admin token payload schemas."""

from pydantic import BaseModel, ConfigDict


class AdminTokenPayload(BaseModel):
    """Admin token payload structure - the authenticated identity."""

    # Token payloads are produced by another service, so types are not coerced.
    model_config = ConfigDict(strict=True, frozen=True)

    admin_id: str  # admins.id of the issuing admin record
    user_id: str  # underlying user account
    division_id: str  # division of the admin at issuance time
    exp: int  # expiry, milliseconds since epoch
