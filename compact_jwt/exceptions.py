"""This module contains all exception classes from `compact_jwt`."""

from __future__ import annotations

from datetime import datetime
from typing import Any


class JwtError(ValueError):
    """Base class for all errors raised by `compact_jwt`."""


class InvalidToken(JwtError):
    """Raised when a token string is not a well-formed JWT.

    This happens when the value does not contain exactly 3 segments, or when a segment is not
    Base64url-encoded JSON.

    """


class UnsupportedTokenType(InvalidToken):
    """Raised when the `typ` header contains an unsupported token type."""

    def __init__(self, token_type: str) -> None:
        super().__init__(f"Unsupported token type: {token_type}")
        self.token_type = token_type


class ClaimTypeMismatch(InvalidToken):
    """Raised when a header or reserved claim has an unexpected JSON type.

    Args:
        name: the header or claim name
        expected: a description of the expected type
        value: the offending value

    """

    def __init__(self, name: str, expected: str, value: Any) -> None:
        super().__init__(f"'{name}' must be {expected}, got {type(value).__name__}")
        self.name = name
        self.expected = expected
        self.value = value


class UnsupportedAlgorithm(JwtError):
    """Raised when an algorithm is not known by the registry."""

    def __init__(self, alg: Any) -> None:
        super().__init__(f"Unsupported algorithm: {alg}")
        self.alg = alg


class InvalidKey(JwtError):
    """Raised when key material cannot be parsed into a usable key."""


class KeyTypeMismatch(InvalidKey):
    """Raised when a key of the wrong type is given to a signature provider.

    Args:
        expected: a description of the expected key type
        key: the key that was provided

    """

    def __init__(self, expected: str, key: Any) -> None:
        super().__init__(f"Expected {expected}, got {type(key).__name__}")
        self.expected = expected
        self.key = key


class InvalidSignatureEncoding(JwtError):
    """Raised when a signature segment is not decodable, or has an unexpected size."""


class SignatureVerificationFailed(JwtError):
    """Raised when a signature does not match the signed content."""

    def __init__(self, alg: str) -> None:
        super().__init__(f"Signature verification failed for alg {alg}")
        self.alg = alg


class InvalidClaims(JwtError):
    """Raised when the user-defined claims of a token cannot be serialized."""


class ReservedClaimError(InvalidClaims):
    """Raised when user-defined claims contain a reserved claim name.

    Reserved claims must be set through the dedicated `Token` attributes instead.

    """

    def __init__(self, name: str) -> None:
        super().__init__(f"'{name}' is a reserved claim and cannot be used as a custom claim")
        self.name = name


class InvalidClaimValue(JwtError):
    """Base class for errors raised when a claim does not have its expected value.

    Subclasses define the checked claim name in `claim`.

    Args:
        received: the value from the token
        expected: the value expected by the caller

    """

    claim: str

    def __init__(self, received: str, expected: str) -> None:
        super().__init__(f"`{self.claim}` from token '{received}' does not match expected value '{expected}'")
        self.received = received
        self.expected = expected


class InvalidIssuer(InvalidClaimValue):
    """Raised when the token issuer does not match the expected issuer."""

    claim = "iss"


class InvalidAudience(InvalidClaimValue):
    """Raised when the token audience does not match the expected audience."""

    claim = "aud"


class InvalidSubject(InvalidClaimValue):
    """Raised when the token subject does not match the expected subject."""

    claim = "sub"


class TokenNotValidYet(JwtError):
    """Raised when the token `nbf` date is still in the future."""

    def __init__(self, not_before: datetime) -> None:
        super().__init__(f"This token is not valid before {not_before}")
        self.not_before = not_before


class TokenExpired(JwtError):
    """Raised when the token `exp` date is in the past."""

    def __init__(self, expires: datetime) -> None:
        super().__init__(f"This token expired at {expires}")
        self.expires = expires


class MissingKeyId(JwtError):
    """Raised when a key lookup is configured but the token has no `kid` header."""

    def __init__(self) -> None:
        super().__init__("No key identifier (kid) provided in the token header")


class UnknownKeyId(JwtError):
    """Raised when the key lookup does not know the token `kid`."""

    def __init__(self, kid: str) -> None:
        super().__init__(f"Non-existent key: {kid}")
        self.kid = kid


class NoneAlgorithmWithSecret(JwtError):
    """Raised when a key is supplied to verify a token using the `none` algorithm.

    Accepting such a token would let an attacker downgrade a signed token to an unsigned one.

    """

    def __init__(self) -> None:
        super().__init__("The 'none' algorithm cannot be used with a secret")
