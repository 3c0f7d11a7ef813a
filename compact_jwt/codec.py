"""Serialization of JWT headers and payloads.

This contains the building blocks used by `Token.sign()` and `decode_token()`: building the header
and payload JSON objects for a token, (de)serializing segments, and parsing decoded headers and
payloads with strict typing of the reserved members.

"""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING, Any

from attrs import frozen

from .enums import RESERVED_CLAIMS, Algorithm, ReservedClaims, TokenType
from .exceptions import ClaimTypeMismatch, InvalidClaims, InvalidToken, ReservedClaimError, UnsupportedTokenType
from .utils import b64u_decode, b64u_encode, from_timestamp, json_decode, json_encode, to_timestamp

if TYPE_CHECKING:
    from .token import Token

SUPPORTED_TYPES = frozenset(token_type.value for token_type in TokenType)


def enum_value(value: Any) -> Any:
    """Return the value of an `Enum` member, or `value` itself."""
    if isinstance(value, Enum):
        return value.value
    return value


def build_header(token: Token) -> dict[str, Any]:
    """Build the header of a token."""
    header = {
        "typ": enum_value(token.type),
        "alg": enum_value(token.algorithm),
    }
    if token.key_id:
        header["kid"] = token.key_id
    return header


def build_payload(token: Token) -> dict[str, Any]:
    """Build the payload of a token, from its standard fields and its custom claims.

    `nbf` is only included if it is before `iat`, and `exp` only if it is after `iat`.

    Raises:
        ReservedClaimError: if a custom claim uses a reserved name

    """
    payload: dict[str, Any] = {}
    for name, value in (
        (ReservedClaims.ISSUER, token.issuer),
        (ReservedClaims.SUBJECT, token.subject),
        (ReservedClaims.AUDIENCE, token.audience),
        (ReservedClaims.JWT_ID, token.token_id),
    ):
        if value:
            payload[name.value] = value

    iat = to_timestamp(token.issued_at)
    payload[ReservedClaims.ISSUED_AT.value] = iat
    nbf = to_timestamp(token.not_before)
    if nbf < iat:
        payload[ReservedClaims.NOT_BEFORE.value] = nbf
    exp = to_timestamp(token.expires)
    if exp > iat:
        payload[ReservedClaims.EXPIRES.value] = exp

    for name, value in token.claims.items():
        if name in RESERVED_CLAIMS:
            raise ReservedClaimError(name)
        payload[name] = value

    return payload


def encode_segment(obj: dict[str, Any]) -> str:
    """Serialize a JSON object into a Base64url segment.

    Raises:
        InvalidClaims: if the object is not JSON-serializable

    """
    try:
        return b64u_encode(json_encode(obj))
    except (TypeError, ValueError) as exc:
        msg = f"Unable to serialize to JSON: {exc}"
        raise InvalidClaims(msg) from exc


def split_token(value: str | bytes) -> tuple[str, str, str]:
    """Split a token into its header, payload and signature segments.

    Raises:
        InvalidToken: if the token does not contain exactly 3 segments

    """
    if isinstance(value, bytes):
        try:
            value = value.decode("ascii")
        except UnicodeDecodeError as exc:
            msg = "A JWT must only contain ASCII characters"
            raise InvalidToken(msg) from exc

    segments = value.split(".")
    if len(segments) != 3:  # noqa: PLR2004
        msg = "A JWT must contain a header, a payload and a signature, separated by dots"
        raise InvalidToken(msg)
    header, payload, signature = segments
    return header, payload, signature


def decode_segment(segment: str, part: str) -> dict[str, Any]:
    """Decode a Base64url segment containing a JSON object.

    Args:
        segment: the raw segment
        part: the name of the segment, for error messages

    Raises:
        InvalidToken: if the segment is not Base64url, or does not contain a JSON object

    """
    try:
        obj = json_decode(b64u_decode(segment))
    except ValueError as exc:
        msg = f"Invalid JWT {part}: it must be a Base64url-encoded JSON object"
        raise InvalidToken(msg) from exc
    if not isinstance(obj, dict):
        msg = f"Invalid JWT {part}: it must be a JSON object"
        raise InvalidToken(msg)
    return obj


def _string(obj: dict[str, Any], name: str) -> str | None:
    if name not in obj:
        return None
    value = obj[name]
    if not isinstance(value, str):
        raise ClaimTypeMismatch(name, "a string", value)
    return value


def _number(obj: dict[str, Any], name: str) -> float | None:
    if name not in obj:
        return None
    value = obj[name]
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ClaimTypeMismatch(name, "a number", value)
    return value


@frozen
class Header:
    """The meaningful parameters from a decoded header."""

    type: str
    alg: str
    kid: str | None


def parse_header(header: dict[str, Any]) -> Header:
    """Parse a decoded header.

    `typ` is optional and defaults to `JWT`. When `alg` is missing, the default algorithm is used.

    Raises:
        ClaimTypeMismatch: if `typ`, `alg` or `kid` is not a string
        UnsupportedTokenType: if `typ` is not a supported token type

    """
    typ = _string(header, "typ")
    if typ is None:
        typ = TokenType.JWT.value
    elif typ not in SUPPORTED_TYPES:
        raise UnsupportedTokenType(typ)

    alg = _string(header, "alg")
    if alg is None:
        alg = Algorithm.HS256.value

    return Header(type=typ, alg=alg, kid=_string(header, "kid"))


def parse_payload(payload: dict[str, Any]) -> dict[str, Any]:
    """Parse a decoded payload into `Token` attributes.

    Missing `nbf` and `exp` claims default to the value of `iat`, and a missing `iat` is left out
    so that the `Token` default applies.

    Raises:
        ClaimTypeMismatch: if a reserved claim has an unexpected type

    """
    fields: dict[str, Any] = {
        "issuer": _string(payload, ReservedClaims.ISSUER.value) or "",
        "subject": _string(payload, ReservedClaims.SUBJECT.value) or "",
        "audience": _string(payload, ReservedClaims.AUDIENCE.value) or "",
        "token_id": _string(payload, ReservedClaims.JWT_ID.value) or "",
    }

    for attribute, claim in (
        ("issued_at", ReservedClaims.ISSUED_AT),
        ("not_before", ReservedClaims.NOT_BEFORE),
        ("expires", ReservedClaims.EXPIRES),
    ):
        value = _number(payload, claim.value)
        if value is None:
            continue
        try:
            fields[attribute] = from_timestamp(value)
        except (OverflowError, OSError, ValueError) as exc:
            msg = f"Invalid JWT payload: '{claim.value}' is not a valid timestamp"
            raise InvalidToken(msg) from exc

    fields["claims"] = {name: value for name, value in payload.items() if name not in RESERVED_CLAIMS}
    return fields
