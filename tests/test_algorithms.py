from __future__ import annotations

import pytest
from cryptography.hazmat.primitives.asymmetric import ec, rsa

from compact_jwt import (
    DEFAULT_REGISTRY,
    Algorithm,
    InvalidKey,
    InvalidSignatureEncoding,
    KeyTypeMismatch,
    NoneAlgorithmWithSecret,
    SignatureVerificationFailed,
    Unsigned,
)
from compact_jwt.utils import b64u_decode, b64u_encode

MESSAGE = "eyJhbGciOiJIUzI1NiIsInR5cCI6IkpXVCJ9.eyJpYXQiOjE0MjQ3NzYzMDcsImlzcyI6Ik15SXNzdWVyIiwic2NvcGVzIjpbIm15X3Njb3BlIl19"


def test_unsigned() -> None:
    unsigned = Unsigned()
    assert unsigned.sign(MESSAGE, b"secret") == ""
    unsigned.verify(MESSAGE, "", None)
    unsigned.verify(MESSAGE, "", b"")
    with pytest.raises(NoneAlgorithmWithSecret):
        unsigned.verify(MESSAGE, "", b"secret")
    with pytest.raises(InvalidSignatureEncoding):
        unsigned.verify(MESSAGE, "c2lnbmF0dXJl", None)


def test_hmac_known_signature() -> None:
    hs256 = DEFAULT_REGISTRY.get(Algorithm.HS256)
    assert hs256.sign(MESSAGE, b"secret") == "cMrSIdfeoGxOtgoZcNufWR2DGFP-qncUOdfrGCPJLZY="
    assert hs256.sign(MESSAGE, "secret") == "cMrSIdfeoGxOtgoZcNufWR2DGFP-qncUOdfrGCPJLZY="
    hs256.verify(MESSAGE, "cMrSIdfeoGxOtgoZcNufWR2DGFP-qncUOdfrGCPJLZY=", b"secret")
    # padding is optional
    hs256.verify(MESSAGE, "cMrSIdfeoGxOtgoZcNufWR2DGFP-qncUOdfrGCPJLZY", b"secret")


@pytest.mark.parametrize(
    ("alg", "size"),
    [(Algorithm.HS256, 32), (Algorithm.HS384, 48), (Algorithm.HS512, 64)],
)
def test_hmac(alg: Algorithm, size: int) -> None:
    provider = DEFAULT_REGISTRY.get(alg)
    signature = provider.sign(MESSAGE, b"secret")
    assert len(b64u_decode(signature)) == size
    provider.verify(MESSAGE, signature, b"secret")

    with pytest.raises(SignatureVerificationFailed) as exc:
        provider.verify(MESSAGE, signature, b"_secret")
    assert exc.value.alg == alg.value
    with pytest.raises(SignatureVerificationFailed):
        provider.verify(MESSAGE + "x", signature, b"secret")


def test_hmac_invalid_keys(rsa_public_pkix: bytes, rsa_key: rsa.RSAPrivateKey) -> None:
    hs256 = DEFAULT_REGISTRY.get(Algorithm.HS256)
    with pytest.raises(InvalidKey):
        hs256.sign(MESSAGE, None)
    with pytest.raises(InvalidKey):
        hs256.sign(MESSAGE, b"")
    with pytest.raises(KeyTypeMismatch):
        hs256.sign(MESSAGE, rsa_key)
    # an RSA public key must never be usable as an HMAC secret
    with pytest.raises(KeyTypeMismatch):
        hs256.verify(MESSAGE, hs256.sign(MESSAGE, b"secret"), rsa_public_pkix)


def test_invalid_signature_encoding() -> None:
    hs256 = DEFAULT_REGISTRY.get(Algorithm.HS256)
    with pytest.raises(InvalidSignatureEncoding):
        hs256.verify(MESSAGE, "abcde", b"secret")
    # unused trailing bits must be zero
    with pytest.raises(InvalidSignatureEncoding):
        hs256.verify(MESSAGE, "cMrSIdfeoGxOtgoZcNufWR2DGFP-qncUOdfrGCPJLZZ=", b"secret")
    with pytest.raises(InvalidSignatureEncoding):
        hs256.verify(MESSAGE, "cMrSIdfeoGxOtgoZcNufWR2DGFP-qncUOdfrGCPJLZY===", b"secret")


@pytest.mark.parametrize("alg", [Algorithm.RS256, Algorithm.RS384, Algorithm.RS512])
def test_rsa(alg: Algorithm, rsa_private_pkcs1: bytes, rsa_public_pkix: bytes) -> None:
    provider = DEFAULT_REGISTRY.get(alg)
    signature = provider.sign(MESSAGE, rsa_private_pkcs1)
    assert len(b64u_decode(signature)) == 256
    provider.verify(MESSAGE, signature, rsa_public_pkix)

    with pytest.raises(SignatureVerificationFailed):
        provider.verify(MESSAGE + "x", signature, rsa_public_pkix)


def test_rsa_key_mismatch(ec_private_sec1: bytes, ec_public_pkix: bytes, rsa_private_pkcs1: bytes) -> None:
    rs256 = DEFAULT_REGISTRY.get(Algorithm.RS256)
    with pytest.raises(KeyTypeMismatch):
        rs256.sign(MESSAGE, ec_private_sec1)
    signature = rs256.sign(MESSAGE, rsa_private_pkcs1)
    with pytest.raises(KeyTypeMismatch):
        rs256.verify(MESSAGE, signature, ec_public_pkix)
    with pytest.raises(InvalidKey):
        rs256.sign(MESSAGE, b"secret")


@pytest.mark.parametrize("alg", [Algorithm.ES256, Algorithm.ES384, Algorithm.ES512])
def test_ecdsa(alg: Algorithm, ec_private_sec1: bytes, ec_public_pkix: bytes) -> None:
    provider = DEFAULT_REGISTRY.get(alg)
    signature = provider.sign(MESSAGE, ec_private_sec1)
    # r and s are always 32 bytes each, whatever the hash algorithm
    assert len(b64u_decode(signature)) == 64
    provider.verify(MESSAGE, signature, ec_public_pkix)

    with pytest.raises(SignatureVerificationFailed):
        provider.verify(MESSAGE + "x", signature, ec_public_pkix)


def test_ecdsa_signature_size(ec_private_sec1: bytes, ec_public_pkix: bytes) -> None:
    es256 = DEFAULT_REGISTRY.get(Algorithm.ES256)
    signature = b64u_decode(es256.sign(MESSAGE, ec_private_sec1))

    with pytest.raises(InvalidSignatureEncoding):
        es256.verify(MESSAGE, b64u_encode(signature[:63]), ec_public_pkix)
    with pytest.raises(InvalidSignatureEncoding):
        es256.verify(MESSAGE, b64u_encode(signature + b"\x00"), ec_public_pkix)
    with pytest.raises(SignatureVerificationFailed):
        es256.verify(MESSAGE, b64u_encode(bytes(64)), ec_public_pkix)


def test_ecdsa_key_mismatch(rsa_private_pkcs1: bytes, rsa_public_pkix: bytes, ec_private_sec1: bytes) -> None:
    es256 = DEFAULT_REGISTRY.get(Algorithm.ES256)
    with pytest.raises(KeyTypeMismatch):
        es256.sign(MESSAGE, rsa_private_pkcs1)
    signature = es256.sign(MESSAGE, ec_private_sec1)
    with pytest.raises(KeyTypeMismatch):
        es256.verify(MESSAGE, signature, rsa_public_pkix)

    # scalars from larger curves do not fit in 32 bytes
    with pytest.raises(KeyTypeMismatch):
        es256.sign(MESSAGE, ec.generate_private_key(ec.SECP384R1()))
