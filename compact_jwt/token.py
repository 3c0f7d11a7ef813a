"""This module contains the `Token` class, and the functions to create and decode tokens."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from attrs import Factory, define

from .codec import build_header, build_payload, decode_segment, encode_segment, parse_header, parse_payload, split_token
from .enums import Algorithm, TokenType
from .keys import KeyInput
from .registry import DEFAULT_REGISTRY, AlgorithmRegistry, algorithm_name
from .utils import utcnow
from .validation import is_expired, is_valid, verify_claims


def _to_algorithm(alg: str) -> str:
    """Return the matching `Algorithm` member, or `alg` itself for custom algorithms."""
    try:
        return Algorithm(alg)
    except ValueError:
        return alg


@define
class Token:
    """Represents a JSON Web Token, before signature or after decoding.

    Standard claims are exposed as attributes, and custom claims are in `claims`.
    All dates default to the current time, truncated to the second. A token whose
    `expires` is equal to its `issued_at` never expires, and a token whose `not_before` is
    equal to its `issued_at` is valid immediately: in both cases, the matching claim is not
    included in the signed token.

    Args:
        type: the token type, for the `typ` header
        algorithm: the signature algorithm, for the `alg` header
        key_id: a key identifier, for the `kid` header
        issuer: the `iss` claim
        subject: the `sub` claim
        audience: the `aud` claim
        token_id: the `jti` claim
        issued_at: the `iat` claim
        expires: the `exp` claim
        not_before: the `nbf` claim
        claims: custom claims. Those must not use a reserved claim name.

    """

    type: str = TokenType.JWT
    algorithm: str = Algorithm.HS256
    key_id: str | None = None
    issuer: str = ""
    subject: str = ""
    audience: str = ""
    token_id: str = ""
    issued_at: datetime = Factory(utcnow)
    expires: datetime = Factory(lambda self: self.issued_at, takes_self=True)
    not_before: datetime = Factory(lambda self: self.issued_at, takes_self=True)
    claims: dict[str, Any] = Factory(dict)

    def sign(self, key: KeyInput = None, registry: AlgorithmRegistry | None = None) -> str:
        """Sign this token and return its compact representation.

        This does not modify the token.

        Args:
            key: the signing key. It is ignored for the `none` algorithm.
            registry: the registry to get the signature algorithm from

        Returns:
            the signed token, as `header.payload.signature`

        Raises:
            ReservedClaimError: if a custom claim uses a reserved name
            InvalidClaims: if the claims are not JSON-serializable
            UnsupportedAlgorithm: if the algorithm is not supported
            InvalidKey: if the key is not suitable for the algorithm

        """
        registry = registry or DEFAULT_REGISTRY
        signed_part = ".".join((encode_segment(build_header(self)), encode_segment(build_payload(self))))
        signature = registry.get(self.algorithm).sign(signed_part, key)
        return ".".join((signed_part, signature))

    def verify(self, issuer: str = "", subject: str = "", audience: str = "") -> None:
        """Check this token claims.

        See `verify_claims()` for details.

        Raises:
            InvalidIssuer: if the issuer does not match
            InvalidAudience: if the audience does not match
            InvalidSubject: if the subject does not match
            TokenNotValidYet: if the token is not valid yet
            TokenExpired: if the token is expired

        """
        verify_claims(self, issuer=issuer, subject=subject, audience=audience)

    def is_valid(self, now: datetime | None = None) -> bool:
        """Return `True` if the token `not_before` date is reached."""
        return is_valid(self, now)

    def is_expired(self, now: datetime | None = None) -> bool:
        """Return `True` if the token is expired."""
        return is_expired(self, now)


def new_token() -> Token:
    """Create a new token, with the `HS256` algorithm and all dates set to now."""
    return Token()


def decode_token(
    value: str | bytes,
    key: KeyInput = None,
    algorithm: str | None = None,
    registry: AlgorithmRegistry | None = None,
) -> Token:
    """Decode a token and verify its signature.

    The algorithm used to verify the signature is, by order of precedence:

    - the `algorithm` parameter, if provided,
    - the algorithm returned by the registry key lookup, if configured,
    - the `alg` header from the token.

    When a key lookup is configured, the key it returns, if any, replaces `key`.

    This only checks the token format and signature. Use `Token.verify()` to check the claims.

    Args:
        value: the compact token representation
        key: the verification key. It must be empty for unsigned tokens (`"alg": "none"`).
        algorithm: the algorithm to use, instead of the `alg` header
        registry: the registry to get the signature algorithm from

    Returns:
        the decoded `Token`

    Raises:
        InvalidToken: if the token is malformed
        UnsupportedTokenType: if the `typ` header is not supported
        ClaimTypeMismatch: if a header or reserved claim has an unexpected type
        UnsupportedAlgorithm: if the algorithm is not supported
        MissingKeyId: if a key lookup is configured but the token has no `kid` header
        UnknownKeyId: if the key lookup does not know the token `kid`
        NoneAlgorithmWithSecret: if the token is unsigned and a key is provided
        InvalidKey: if the key is not suitable for the algorithm
        InvalidSignatureEncoding: if the signature cannot be decoded
        SignatureVerificationFailed: if the signature does not match

    """
    registry = registry or DEFAULT_REGISTRY
    header_segment, payload_segment, signature = split_token(value)
    header = parse_header(decode_segment(header_segment, "header"))
    fields = parse_payload(decode_segment(payload_segment, "payload"))

    alg = header.alg
    if registry.key_lookup is not None:
        alg, lookup_key = registry.resolve_key_id(header.kid)
        if lookup_key is not None:
            key = lookup_key
    if algorithm is not None:
        alg = algorithm_name(algorithm)

    registry.get(alg).verify(f"{header_segment}.{payload_segment}", signature, key)

    return Token(type=TokenType(header.type), algorithm=_to_algorithm(alg), key_id=header.kid, **fields)