import base64
from datetime import datetime, timedelta

import pytest

from shared.utils.exceptions import InvalidTokenError, TokenExpiredError, TokenMismatchError
from visitor_service.util.approval_token import (
    datetime_to_ticks,
    decode_approval_token,
    generate_approval_token,
    ticks_to_datetime,
    validate_approval_token,
)

ISSUED = datetime(2025, 1, 1, 9, 0)


def _raw(token: str) -> str:
    return base64.urlsafe_b64decode(token + "=" * (-len(token) % 4)).decode("utf-8")


def _encode(raw: str) -> str:
    return base64.b64encode(raw.encode("utf-8")).decode("ascii")


def test_ticks_round_trip_known_value():
    # 2025-01-01T00:00:00Z in 100ns ticks since 0001-01-01
    assert datetime_to_ticks(datetime(2025, 1, 1)) == 638712864000000000
    assert ticks_to_datetime(638712864000000000) == datetime(2025, 1, 1)


def test_token_carries_visitor_staff_and_expiry():
    token = generate_approval_token(17, "bob@company.com", now=ISSUED)

    claims = decode_approval_token(token)

    assert claims.visitor_id == 17
    assert claims.staff_email == "bob@company.com"
    assert claims.expires_at == ISSUED + timedelta(days=7)
    assert len(claims.signature) == 64


def test_valid_token_passes():
    token = generate_approval_token(17, "bob@company.com", now=ISSUED)

    claims = validate_approval_token(17, token, now=ISSUED + timedelta(days=1))

    assert claims.staff_email == "bob@company.com"


def test_standard_base64_and_missing_padding_are_accepted():
    token = generate_approval_token(17, "bob@company.com", now=ISSUED)
    standard = _encode(_raw(token)).rstrip("=")

    claims = validate_approval_token(17, standard, now=ISSUED)

    assert claims.visitor_id == 17


def test_token_for_other_visitor_is_refused():
    token = generate_approval_token(17, "bob@company.com", now=ISSUED)

    with pytest.raises(TokenMismatchError):
        validate_approval_token(18, token, now=ISSUED)


def test_expired_token_is_refused():
    token = generate_approval_token(17, "bob@company.com", now=ISSUED)

    with pytest.raises(TokenExpiredError):
        validate_approval_token(17, token, now=ISSUED + timedelta(days=8))


def test_mismatch_is_reported_before_expiry():
    token = generate_approval_token(17, "bob@company.com", now=ISSUED)

    with pytest.raises(TokenMismatchError):
        validate_approval_token(18, token, now=ISSUED + timedelta(days=30))


def test_forged_email_fails_signature():
    token = generate_approval_token(17, "bob@company.com", now=ISSUED)
    visitor_id, _, ticks, signature = _raw(token).split(":")
    forged = _encode(f"{visitor_id}:boss@company.com:{ticks}:{signature}")

    with pytest.raises(InvalidTokenError):
        validate_approval_token(17, forged, now=ISSUED)


def test_unsigned_token_is_refused():
    ticks = datetime_to_ticks(ISSUED + timedelta(days=7))
    unsigned = _encode(f"17:bob@company.com:{ticks}")

    with pytest.raises(InvalidTokenError):
        validate_approval_token(17, unsigned, now=ISSUED)


@pytest.mark.parametrize("token", [
    None,
    "",
    "!!!not-base64!!!",
    _encode("17:bob@company.com"),
    _encode("abc:bob@company.com:123:sig"),
    _encode("17:bob@company.com:later:sig"),
])
def test_malformed_tokens_are_invalid(token):
    with pytest.raises(InvalidTokenError):
        validate_approval_token(17, token, now=ISSUED)
