"""Admin token creation and validation.

An admin token has the form ``<payload>.<signature>``:

* ``payload`` is the base64 encoding of a JSON object
  ``{"admin_id", "user_id", "division_id", "exp"}`` where ``exp`` is the
  expiry in milliseconds since the epoch;
* ``signature`` is the lowercase hex SHA-256 digest of the decoded payload
  text immediately followed by the server secret.

The scheme is kept byte-compatible with tokens already issued by the
existing issuer. It is a plain ``hash(payload || secret)`` rather than an
HMAC; moving to ``hmac.new(secret, payload, sha256)`` would invalidate every
outstanding token.
"""

import base64
import enum
import hashlib
import hmac
import json
import logging
import time

import config
from auth.schemas import AdminTokenPayload

logger = logging.getLogger(__name__)


class TokenRejection(str, enum.Enum):
    """Reasons an admin token can be rejected."""

    MALFORMED = "MALFORMED"
    EXPIRED = "EXPIRED"
    INVALID_SIGNATURE = "INVALID_SIGNATURE"


class AdminTokenError(Exception):
    """Raised when an admin token is rejected. The only error verification raises."""

    def __init__(self, reason: TokenRejection, message: str):
        super().__init__(message)
        self.reason = reason


def current_time_ms() -> int:
    """Current instant in milliseconds since the epoch."""
    return int(time.time() * 1000)


def compute_signature(payload_text: str, secret: str) -> str:
    """
    Compute the token signature for a decoded payload.

    Args:
        payload_text: Decoded JSON payload text
        secret: Server secret shared with the issuer

    Returns:
        Lowercase hex SHA-256 of ``payload_text + secret``
    """
    return hashlib.sha256((payload_text + secret).encode("utf-8")).hexdigest()


def signatures_match(provided: str, expected: str) -> bool:
    """Compare a presented signature with the expected one in constant time."""
    return hmac.compare_digest(provided.encode("utf-8"), expected.encode("utf-8"))


def _decode_payload(segment: str) -> str:
    # Issuers built on btoa/atob may drop the trailing padding
    padded = segment + "=" * (-len(segment) % 4)
    return base64.b64decode(padded, validate=True).decode("utf-8")


def issue_admin_token(
    admin_id: str,
    user_id: str,
    division_id: str,
    *,
    secret: str,
    expires_in_hours: int | None = None,
    now_ms: int | None = None,
) -> str:
    """
    Create an admin token for development and tests.

    Production tokens are issued by the login service; this mirrors its format.

    Args:
        admin_id: Admin record ID
        user_id: User account ID
        division_id: Division ID of the admin
        secret: Server secret
        expires_in_hours: Token lifetime (default: ADMIN_TOKEN_TTL_HOURS)
        now_ms: Issue instant in milliseconds (default: now)

    Returns:
        Encoded admin token string
    """
    if expires_in_hours is None:
        expires_in_hours = config.settings.ADMIN_TOKEN_TTL_HOURS
    if now_ms is None:
        now_ms = current_time_ms()

    payload_text = json.dumps(
        {
            "admin_id": str(admin_id),
            "user_id": str(user_id),
            "division_id": str(division_id),
            "exp": now_ms + expires_in_hours * 3_600_000,
        },
        separators=(",", ":"),
    )
    payload_segment = base64.b64encode(payload_text.encode("utf-8")).decode("ascii")
    return f"{payload_segment}.{compute_signature(payload_text, secret)}"


def verify_admin_token(
    token: str,
    secret: str,
    *,
    now_ms: int | None = None,
) -> AdminTokenPayload:
    """
    Decode and validate an admin token.

    Expiry is checked before the signature, so a lapsed token is reported as
    expired whatever its signature. A token whose ``exp`` equals ``now_ms``
    is still valid.

    Args:
        token: Admin token string
        secret: Server secret shared with the issuer
        now_ms: Current instant in milliseconds (default: now)

    Returns:
        AdminTokenPayload with the embedded claims

    Raises:
        AdminTokenError: If the token is malformed, expired or forged
    """
    payload_segment, _, signature = token.partition(".")
    if not payload_segment or not signature:
        raise AdminTokenError(TokenRejection.MALFORMED, "Token must contain a payload and a signature")

    try:
        payload_text = _decode_payload(payload_segment)
        payload = AdminTokenPayload.model_validate(json.loads(payload_text))
    except (ValueError, TypeError, RecursionError) as e:
        # binascii.Error, UnicodeDecodeError, JSONDecodeError and pydantic's
        # ValidationError are all ValueErrors; deeply nested JSON hits the
        # recursion limit
        raise AdminTokenError(TokenRejection.MALFORMED, f"Malformed token payload: {e}") from e

    if now_ms is None:
        now_ms = current_time_ms()
    if payload.exp < now_ms:
        logger.info("Admin token expired for admin %s", payload.admin_id)
        raise AdminTokenError(TokenRejection.EXPIRED, "Token expired")

    if not signatures_match(signature, compute_signature(payload_text, secret)):
        logger.warning("Invalid admin token signature for admin %s", payload.admin_id)
        raise AdminTokenError(TokenRejection.INVALID_SIGNATURE, "Invalid signature")

    return payload
