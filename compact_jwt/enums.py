"""Contains enumerations of standardised JWT parameters and values."""

from __future__ import annotations

from enum import Enum


class TokenType(str, Enum):
    """An enum of supported `typ` header values."""

    JWT = "JWT"


class Algorithm(str, Enum):
    """All supported `alg` header values.

    `NONE` produces unsigned tokens. It is only accepted at decoding time when no key is
    provided.

    """

    NONE = "none"
    HS256 = "HS256"
    HS384 = "HS384"
    HS512 = "HS512"
    RS256 = "RS256"
    RS384 = "RS384"
    RS512 = "RS512"
    ES256 = "ES256"
    ES384 = "ES384"
    ES512 = "ES512"


SYMMETRIC_ALGORITHMS = frozenset({Algorithm.HS256, Algorithm.HS384, Algorithm.HS512})
RSA_ALGORITHMS = frozenset({Algorithm.RS256, Algorithm.RS384, Algorithm.RS512})
ECDSA_ALGORITHMS = frozenset({Algorithm.ES256, Algorithm.ES384, Algorithm.ES512})


class ReservedClaims(str, Enum):
    """Registered claim names, which cannot be used as custom claims."""

    ISSUER = "iss"
    SUBJECT = "sub"
    AUDIENCE = "aud"
    EXPIRES = "exp"
    NOT_BEFORE = "nbf"
    ISSUED_AT = "iat"
    JWT_ID = "jti"


RESERVED_CLAIMS = frozenset(claim.value for claim in ReservedClaims)
