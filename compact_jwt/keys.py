"""Key material handling.

Callers may provide keys in several forms: raw secret bytes or text, PEM-encoded keys or
certificates, or keys that were already parsed with `cryptography`. Those are normalized into a
`KeyMaterial` once, at the boundary, then resolved into the concrete key object a signature
provider needs.

"""

from __future__ import annotations

from contextlib import suppress
from enum import Enum
from typing import Any

import cryptography.exceptions
from attrs import frozen
from cryptography import x509
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import dsa, ec, ed448, ed25519, rsa

from .exceptions import InvalidKey, KeyTypeMismatch

PRIVATE_KEY_TYPES = (
    rsa.RSAPrivateKey,
    ec.EllipticCurvePrivateKey,
    ed25519.Ed25519PrivateKey,
    ed448.Ed448PrivateKey,
    dsa.DSAPrivateKey,
)
PUBLIC_KEY_TYPES = (
    rsa.RSAPublicKey,
    ec.EllipticCurvePublicKey,
    ed25519.Ed25519PublicKey,
    ed448.Ed448PublicKey,
    dsa.DSAPublicKey,
)
NATIVE_KEY_TYPES = (*PRIVATE_KEY_TYPES, *PUBLIC_KEY_TYPES, x509.Certificate)

PEM_MARKER = b"-----BEGIN "


class KeyKind(str, Enum):
    """The form in which a key was provided."""

    RAW = "raw"
    PEM = "pem"
    NATIVE = "native"


@frozen
class KeyMaterial:
    """A key, as provided by a caller, tagged with its form.

    For `RAW` and `PEM` keys, `value` contains the key bytes. For `NATIVE` keys, it contains a
    `cryptography` key or certificate object.

    Use `KeyMaterial.from_input()` to build an instance from whatever a caller provided.

    """

    kind: KeyKind
    value: Any

    @classmethod
    def from_input(cls, key: KeyInput) -> KeyMaterial | None:
        """Normalize a caller-provided key.

        Args:
            key: a `str`, `bytes`, `cryptography` key or certificate, an existing `KeyMaterial`,
                or `None`.

        Returns:
            a `KeyMaterial`, or `None` if no key (or an empty key) was provided.

        Raises:
            InvalidKey: if the key is of an unsupported type.

        """
        if key is None or isinstance(key, KeyMaterial):
            return key
        if isinstance(key, NATIVE_KEY_TYPES):
            return cls(KeyKind.NATIVE, key)
        if isinstance(key, str):
            key = key.encode()
        if isinstance(key, (bytes, bytearray, memoryview)):
            data = bytes(key)
            if not data:
                return None
            if PEM_MARKER in data:
                return cls(KeyKind.PEM, data)
            return cls(KeyKind.RAW, data)
        msg = f"Unsupported key type: {type(key).__name__}"
        raise InvalidKey(msg)


KeyInput = Any
"""A key, as accepted by `KeyMaterial.from_input()`.

That is a `str` or `bytes` secret or PEM value, a `cryptography` key or certificate (one of
`NATIVE_KEY_TYPES`), a `KeyMaterial`, or `None`.
"""


def _require(key: KeyInput) -> KeyMaterial:
    material = KeyMaterial.from_input(key)
    if material is None:
        msg = "A key is required"
        raise InvalidKey(msg)
    return material


def secret_bytes(key: KeyInput) -> bytes:
    """Return the raw bytes of a symmetric secret.

    PEM-encoded keys and certificates are refused: an RSA or EC public key used as an HMAC secret
    would let anyone holding that public key forge tokens.

    Raises:
        InvalidKey: if no key is provided
        KeyTypeMismatch: if the key is an asymmetric key, either PEM-encoded or as an object

    """
    material = _require(key)
    if material.kind is not KeyKind.RAW:
        raise KeyTypeMismatch("a symmetric secret", material.value)
    return material.value  # type: ignore[no-any-return]


def load_private_key(key: KeyInput) -> Any:
    """Resolve a private key for signing.

    PEM data may use either the algorithm-specific encoding (PKCS#1 `RSA PRIVATE KEY`, SEC1
    `EC PRIVATE KEY`) or the generic PKCS#8 `PRIVATE KEY` encoding. Encrypted keys are not
    supported.

    Args:
        key: the key, in any form accepted by `KeyMaterial.from_input()`

    Returns:
        a `cryptography` private key

    Raises:
        InvalidKey: if the key cannot be loaded
        KeyTypeMismatch: if a native key is provided which is not a private key

    """
    material = _require(key)
    if material.kind is KeyKind.NATIVE:
        if isinstance(material.value, PRIVATE_KEY_TYPES):
            return material.value
        raise KeyTypeMismatch("a private key", material.value)
    if material.kind is KeyKind.RAW:
        msg = "Invalid key: no PEM block found"
        raise InvalidKey(msg)

    try:
        return serialization.load_pem_private_key(material.value, password=None)
    except (ValueError, TypeError, cryptography.exceptions.UnsupportedAlgorithm) as exc:
        msg = "Invalid key: unable to load a private key from PEM data"
        raise InvalidKey(msg) from exc


def load_public_key(key: KeyInput) -> Any:
    """Resolve a public key for signature verification.

    PEM data is first loaded as a PKIX `PUBLIC KEY`. If that fails, it is loaded as an X.509
    `CERTIFICATE` and the certificate public key is used.

    Native private keys are accepted as well, in which case their public key is returned.

    Args:
        key: the key, in any form accepted by `KeyMaterial.from_input()`

    Returns:
        a `cryptography` public key

    Raises:
        InvalidKey: if the key cannot be loaded

    """
    material = _require(key)
    if material.kind is KeyKind.NATIVE:
        value = material.value
        if isinstance(value, x509.Certificate):
            return value.public_key()
        if isinstance(value, PRIVATE_KEY_TYPES):
            return value.public_key()
        return value
    if material.kind is KeyKind.RAW:
        msg = "Invalid key: no PEM block found"
        raise InvalidKey(msg)

    with suppress(ValueError, cryptography.exceptions.UnsupportedAlgorithm):
        return serialization.load_pem_public_key(material.value)

    try:
        return x509.load_pem_x509_certificate(material.value).public_key()
    except ValueError as exc:
        msg = "Invalid key: unable to load a public key or certificate from PEM data"
        raise InvalidKey(msg) from exc
