"""Main module for `compact_jwt`.

You can import any class from any submodule directly from this main module.
"""

import logging

from .algorithms import EcdsaSignature, HmacSignature, RsaSignature, SignatureAlgorithm, Unsigned
from .enums import (
    ECDSA_ALGORITHMS,
    RESERVED_CLAIMS,
    RSA_ALGORITHMS,
    SYMMETRIC_ALGORITHMS,
    Algorithm,
    ReservedClaims,
    TokenType,
)
from .exceptions import (
    ClaimTypeMismatch,
    InvalidAudience,
    InvalidClaims,
    InvalidClaimValue,
    InvalidIssuer,
    InvalidKey,
    InvalidSignatureEncoding,
    InvalidSubject,
    InvalidToken,
    JwtError,
    KeyTypeMismatch,
    MissingKeyId,
    NoneAlgorithmWithSecret,
    ReservedClaimError,
    SignatureVerificationFailed,
    TokenExpired,
    TokenNotValidYet,
    UnknownKeyId,
    UnsupportedAlgorithm,
    UnsupportedTokenType,
)
from .keys import KeyKind, KeyMaterial, load_private_key, load_public_key, secret_bytes
from .registry import DEFAULT_REGISTRY, AlgorithmRegistry, KeyLookup
from .token import Token, decode_token, new_token
from .validation import verify_claims

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "Algorithm",
    "AlgorithmRegistry",
    "ClaimTypeMismatch",
    "DEFAULT_REGISTRY",
    "ECDSA_ALGORITHMS",
    "EcdsaSignature",
    "HmacSignature",
    "InvalidAudience",
    "InvalidClaimValue",
    "InvalidClaims",
    "InvalidIssuer",
    "InvalidKey",
    "InvalidSignatureEncoding",
    "InvalidSubject",
    "InvalidToken",
    "JwtError",
    "KeyKind",
    "KeyLookup",
    "KeyMaterial",
    "KeyTypeMismatch",
    "MissingKeyId",
    "NoneAlgorithmWithSecret",
    "RESERVED_CLAIMS",
    "RSA_ALGORITHMS",
    "ReservedClaimError",
    "ReservedClaims",
    "RsaSignature",
    "SYMMETRIC_ALGORITHMS",
    "SignatureAlgorithm",
    "SignatureVerificationFailed",
    "Token",
    "TokenExpired",
    "TokenNotValidYet",
    "TokenType",
    "UnknownKeyId",
    "Unsigned",
    "UnsupportedAlgorithm",
    "UnsupportedTokenType",
    "decode_token",
    "load_private_key",
    "load_public_key",
    "new_token",
    "secret_bytes",
    "verify_claims",
]
