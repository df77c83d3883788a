"""One-click approval links sent to staff by email.

A token is base64 over ``"{visitor_id}:{staff_email}:{expiry_ticks}:{signature}"``.
Ticks count 100ns intervals since 0001-01-01 UTC so links issued by older
deployments still parse. The signature is a hex HMAC-SHA256 over the first
three fields.
"""
import base64
import binascii
import hashlib
import hmac
import logging
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Optional

from shared.core.config import settings
from shared.utils.datetime_utils import to_naive_utc, utcnow
from shared.utils.exceptions import InvalidTokenError, TokenExpiredError, TokenMismatchError

logger = logging.getLogger(__name__)

_TICK_EPOCH = datetime(1, 1, 1)


def datetime_to_ticks(value: datetime) -> int:
    return (to_naive_utc(value) - _TICK_EPOCH) // timedelta(microseconds=1) * 10


def ticks_to_datetime(ticks: int) -> datetime:
    return _TICK_EPOCH + timedelta(microseconds=ticks // 10)


@dataclass
class ApprovalClaims:
    visitor_id: int
    staff_email: str
    expiry_ticks: int
    signature: Optional[str] = None

    @property
    def expires_at(self) -> datetime:
        return ticks_to_datetime(self.expiry_ticks)


def _sign(visitor_id: int, staff_email: str, expiry_ticks: int) -> str:
    message = f"{visitor_id}:{staff_email}:{expiry_ticks}".encode("utf-8")
    return hmac.new(settings.approval_secret.encode("utf-8"), message, hashlib.sha256).hexdigest()


def generate_approval_token(visitor_id: int, staff_email: str, now: Optional[datetime] = None) -> str:
    issued = now or utcnow()
    expiry_ticks = datetime_to_ticks(
        issued + timedelta(days=settings.APPROVAL_TOKEN_EXPIRE_DAYS))
    signature = _sign(visitor_id, staff_email, expiry_ticks)
    raw = f"{visitor_id}:{staff_email}:{expiry_ticks}:{signature}"
    return base64.urlsafe_b64encode(raw.encode("utf-8")).decode("ascii")


def _b64decode(token: str) -> str:
    # accept standard or url-safe alphabet, with or without padding;
    # an unencoded "+" in a query string arrives as a space
    cleaned = token.strip().replace(" ", "+").replace("-", "+").replace("_", "/")
    cleaned += "=" * (-len(cleaned) % 4)
    try:
        return base64.b64decode(cleaned, validate=True).decode("utf-8")
    except (binascii.Error, UnicodeDecodeError, ValueError):
        raise InvalidTokenError()


def decode_approval_token(token: Optional[str]) -> ApprovalClaims:
    if not token:
        raise InvalidTokenError()

    parts = _b64decode(token).split(":")
    if len(parts) < 3:
        raise InvalidTokenError("Invalid token format")

    try:
        visitor_id = int(parts[0])
        expiry_ticks = int(parts[2])
    except ValueError:
        raise InvalidTokenError("Invalid token format")

    signature = parts[3] if len(parts) > 3 else None
    return ApprovalClaims(visitor_id, parts[1], expiry_ticks, signature)


def validate_approval_token(visitor_id: int, token: Optional[str], now: Optional[datetime] = None) -> ApprovalClaims:
    """Check id, expiry and signature, in that order. Staff lookup is the caller's job."""
    claims = decode_approval_token(token)

    if claims.visitor_id != visitor_id:
        raise TokenMismatchError()

    if datetime_to_ticks(now or utcnow()) > claims.expiry_ticks:
        raise TokenExpiredError()

    expected = _sign(claims.visitor_id, claims.staff_email, claims.expiry_ticks)
    if not claims.signature or not hmac.compare_digest(
            claims.signature.encode("utf-8"), expected.encode("ascii")):
        logger.warning(
            f"Approval token signature check failed for visitor {visitor_id}")
        raise InvalidTokenError()

    return claims
