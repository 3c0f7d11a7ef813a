"""Claims validation.

Checks are done in a fixed order, so that the first failing check always determines the raised
exception: issuer, audience, subject, not-before date, then expiration date.

"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import TYPE_CHECKING

from .exceptions import InvalidAudience, InvalidIssuer, InvalidSubject, TokenExpired, TokenNotValidYet

if TYPE_CHECKING:
    from .token import Token


def _now(now: datetime | None) -> float:
    if now is None:
        now = datetime.now(tz=timezone.utc)
    return now.timestamp()


def is_valid(token: Token, now: datetime | None = None) -> bool:
    """Return `True` if the token `not_before` date is not in the future."""
    return token.not_before.timestamp() <= _now(now)


def is_expired(token: Token, now: datetime | None = None) -> bool:
    """Return `True` if the token `expires` date is in the past.

    A token whose `expires` is equal to its `issued_at` never expires.

    """
    if token.expires.timestamp() == token.issued_at.timestamp():
        return False
    return token.expires.timestamp() < _now(now)


def verify_claims(
    token: Token,
    issuer: str = "",
    subject: str = "",
    audience: str = "",
    now: datetime | None = None,
) -> None:
    """Verify a token issuer, audience and subject, then its validity dates.

    Empty expected values are not checked.

    Args:
        token: the token to verify
        issuer: the expected issuer
        subject: the expected subject
        audience: the expected audience
        now: the date to check validity against. Defaults to the current date.

    Raises:
        InvalidIssuer: if the issuer does not match
        InvalidAudience: if the audience does not match
        InvalidSubject: if the subject does not match
        TokenNotValidYet: if the token `not_before` date is in the future
        TokenExpired: if the token `expires` date is in the past

    """
    if issuer and issuer != token.issuer:
        raise InvalidIssuer(token.issuer, issuer)
    if audience and audience != token.audience:
        raise InvalidAudience(token.audience, audience)
    if subject and subject != token.subject:
        raise InvalidSubject(token.subject, subject)
    if not is_valid(token, now):
        raise TokenNotValidYet(token.not_before)
    if is_expired(token, now):
        raise TokenExpired(token.expires)
