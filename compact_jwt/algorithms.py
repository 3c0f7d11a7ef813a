"""Signature providers.

Each provider implements one family of signature algorithms. Providers work on the signed part of a
token (the `header.payload` string) and on Base64url-encoded signature segments.

"""

from __future__ import annotations

from typing import ClassVar

import cryptography.exceptions
from attrs import frozen
from cryptography.hazmat.primitives import hashes, hmac
from cryptography.hazmat.primitives.asymmetric import ec, padding, rsa
from cryptography.hazmat.primitives.asymmetric.utils import decode_dss_signature, encode_dss_signature

from .exceptions import (
    InvalidSignatureEncoding,
    KeyTypeMismatch,
    NoneAlgorithmWithSecret,
    SignatureVerificationFailed,
)
from .keys import KeyInput, KeyMaterial, load_private_key, load_public_key, secret_bytes
from .utils import b64u_decode, b64u_encode


def decode_signature(signature: str) -> bytes:
    """Decode a signature segment.

    Padding is optional, but any other deviation from the encoding produced by `b64u_encode()` is
    rejected, so that a signature segment has a single valid representation.

    Raises:
        InvalidSignatureEncoding: if the segment is not valid, canonical Base64url

    """
    try:
        raw_signature = b64u_decode(signature)
    except ValueError as exc:
        msg = "Invalid signature: it must be a Base64url-encoded value"
        raise InvalidSignatureEncoding(msg) from exc

    # the decoder ignores trailing bits and extra characters, so only the canonical encoding is accepted
    canonical = b64u_encode(raw_signature)
    if signature not in (canonical, canonical.rstrip("=")):
        msg = "Invalid signature: it is not a canonical Base64url value"
        raise InvalidSignatureEncoding(msg)
    return raw_signature


class SignatureAlgorithm:
    """Base class for signature providers.

    Subclasses implement `sign()` and `verify()` for a given algorithm. Custom algorithms can be
    added to an `AlgorithmRegistry` by subclassing this.

    """

    name: str

    def sign(self, message: str, key: KeyInput) -> str:
        """Sign a message and return the Base64url-encoded signature.

        Args:
            message: the signed part of a token
            key: the signing key

        Returns:
            the signature segment

        """
        raise NotImplementedError  # pragma: no cover

    def verify(self, message: str, signature: str, key: KeyInput) -> None:
        """Verify a Base64url-encoded signature.

        Args:
            message: the signed part of a token
            signature: the signature segment
            key: the verification key

        Raises:
            SignatureVerificationFailed: if the signature does not match

        """
        raise NotImplementedError  # pragma: no cover


@frozen
class Unsigned(SignatureAlgorithm):
    """The `none` algorithm, for unsecured tokens."""

    name: str = "none"

    def sign(self, message: str, key: KeyInput = None) -> str:
        """Return an empty signature. The key, if any, is ignored."""
        return ""

    def verify(self, message: str, signature: str, key: KeyInput = None) -> None:
        """Accept the token, as long as no key is provided and the signature is empty.

        Raises:
            NoneAlgorithmWithSecret: if a key is provided
            InvalidSignatureEncoding: if the signature segment is not empty

        """
        if KeyMaterial.from_input(key) is not None:
            raise NoneAlgorithmWithSecret()
        if signature:
            msg = "Invalid signature: unsigned tokens must have an empty signature"
            raise InvalidSignatureEncoding(msg)


@frozen
class HmacSignature(SignatureAlgorithm):
    """HMAC signatures, using a shared secret."""

    name: str
    hashing_alg: hashes.HashAlgorithm

    def _mac(self, message: str, key: KeyInput) -> hmac.HMAC:
        mac = hmac.HMAC(secret_bytes(key), self.hashing_alg)
        mac.update(message.encode())
        return mac

    def sign(self, message: str, key: KeyInput) -> str:
        return b64u_encode(self._mac(message, key).finalize())

    def verify(self, message: str, signature: str, key: KeyInput) -> None:
        raw_signature = decode_signature(signature)
        try:
            self._mac(message, key).verify(raw_signature)
        except cryptography.exceptions.InvalidSignature:
            raise SignatureVerificationFailed(self.name) from None


@frozen
class RsaSignature(SignatureAlgorithm):
    """RSASSA-PKCS1-v1_5 signatures."""

    name: str
    hashing_alg: hashes.HashAlgorithm

    def sign(self, message: str, key: KeyInput) -> str:
        private_key = load_private_key(key)
        if not isinstance(private_key, rsa.RSAPrivateKey):
            raise KeyTypeMismatch("an RSA private key", private_key)
        return b64u_encode(private_key.sign(message.encode(), padding.PKCS1v15(), self.hashing_alg))

    def verify(self, message: str, signature: str, key: KeyInput) -> None:
        public_key = load_public_key(key)
        if not isinstance(public_key, rsa.RSAPublicKey):
            raise KeyTypeMismatch("an RSA public key", public_key)
        raw_signature = decode_signature(signature)
        try:
            public_key.verify(raw_signature, message.encode(), padding.PKCS1v15(), self.hashing_alg)
        except cryptography.exceptions.InvalidSignature:
            raise SignatureVerificationFailed(self.name) from None


@frozen
class EcdsaSignature(SignatureAlgorithm):
    """ECDSA signatures.

    Signatures are the concatenation of `r` and `s`, each left-padded to 32 bytes, whatever the
    hashing algorithm. Only keys on 256-bit curves can produce such signatures.

    """

    SCALAR_SIZE: ClassVar[int] = 32

    name: str
    hashing_alg: hashes.HashAlgorithm

    def sign(self, message: str, key: KeyInput) -> str:
        private_key = load_private_key(key)
        if not isinstance(private_key, ec.EllipticCurvePrivateKey):
            raise KeyTypeMismatch("an ECDSA private key", private_key)
        if private_key.curve.key_size > self.SCALAR_SIZE * 8:
            raise KeyTypeMismatch("an ECDSA private key on a 256-bit curve", private_key)

        der_signature = private_key.sign(message.encode(), ec.ECDSA(self.hashing_alg))
        r, s = decode_dss_signature(der_signature)
        return b64u_encode(r.to_bytes(self.SCALAR_SIZE, "big") + s.to_bytes(self.SCALAR_SIZE, "big"))

    def verify(self, message: str, signature: str, key: KeyInput) -> None:
        public_key = load_public_key(key)
        if not isinstance(public_key, ec.EllipticCurvePublicKey):
            raise KeyTypeMismatch("an ECDSA public key", public_key)
        raw_signature = decode_signature(signature)
        if len(raw_signature) != 2 * self.SCALAR_SIZE:
            msg = f"Invalid ECDSA signature: expected {2 * self.SCALAR_SIZE} bytes, got {len(raw_signature)}"
            raise InvalidSignatureEncoding(msg)

        r = int.from_bytes(raw_signature[: self.SCALAR_SIZE], "big")
        s = int.from_bytes(raw_signature[self.SCALAR_SIZE :], "big")
        try:
            public_key.verify(encode_dss_signature(r, s), message.encode(), ec.ECDSA(self.hashing_alg))
        except cryptography.exceptions.InvalidSignature:
            raise SignatureVerificationFailed(self.name) from None
