from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest
from cryptography import x509
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import ec, rsa
from cryptography.x509.oid import NameOID


def private_pem(key: rsa.RSAPrivateKey | ec.EllipticCurvePrivateKey, fmt: serialization.PrivateFormat) -> bytes:
    return key.private_bytes(serialization.Encoding.PEM, fmt, serialization.NoEncryption())


def public_pem(key: rsa.RSAPrivateKey | ec.EllipticCurvePrivateKey) -> bytes:
    return key.public_key().public_bytes(serialization.Encoding.PEM, serialization.PublicFormat.SubjectPublicKeyInfo)


def certificate_pem(key: rsa.RSAPrivateKey | ec.EllipticCurvePrivateKey) -> bytes:
    name = x509.Name([x509.NameAttribute(NameOID.COMMON_NAME, "compact-jwt.local")])
    now = datetime.now(tz=timezone.utc)
    certificate = (
        x509.CertificateBuilder()
        .subject_name(name)
        .issuer_name(name)
        .public_key(key.public_key())
        .serial_number(x509.random_serial_number())
        .not_valid_before(now - timedelta(days=1))
        .not_valid_after(now + timedelta(days=1))
        .sign(key, hashes.SHA256())
    )
    return certificate.public_bytes(serialization.Encoding.PEM)


@pytest.fixture(scope="session")
def rsa_key() -> rsa.RSAPrivateKey:
    return rsa.generate_private_key(public_exponent=65537, key_size=2048)


@pytest.fixture(scope="session")
def ec_key() -> ec.EllipticCurvePrivateKey:
    return ec.generate_private_key(ec.SECP256R1())


@pytest.fixture(scope="session")
def rsa_private_pkcs1(rsa_key: rsa.RSAPrivateKey) -> bytes:
    return private_pem(rsa_key, serialization.PrivateFormat.TraditionalOpenSSL)


@pytest.fixture(scope="session")
def rsa_private_pkcs8(rsa_key: rsa.RSAPrivateKey) -> bytes:
    return private_pem(rsa_key, serialization.PrivateFormat.PKCS8)


@pytest.fixture(scope="session")
def rsa_public_pkix(rsa_key: rsa.RSAPrivateKey) -> bytes:
    return public_pem(rsa_key)


@pytest.fixture(scope="session")
def rsa_certificate(rsa_key: rsa.RSAPrivateKey) -> bytes:
    return certificate_pem(rsa_key)


@pytest.fixture(scope="session")
def ec_private_sec1(ec_key: ec.EllipticCurvePrivateKey) -> bytes:
    return private_pem(ec_key, serialization.PrivateFormat.TraditionalOpenSSL)


@pytest.fixture(scope="session")
def ec_private_pkcs8(ec_key: ec.EllipticCurvePrivateKey) -> bytes:
    return private_pem(ec_key, serialization.PrivateFormat.PKCS8)


@pytest.fixture(scope="session")
def ec_public_pkix(ec_key: ec.EllipticCurvePrivateKey) -> bytes:
    return public_pem(ec_key)


@pytest.fixture(scope="session")
def ec_certificate(ec_key: ec.EllipticCurvePrivateKey) -> bytes:
    return certificate_pem(ec_key)


@pytest.fixture(scope="session")
def signing_keys(
    rsa_private_pkcs1: bytes, rsa_public_pkix: bytes, ec_private_sec1: bytes, ec_public_pkix: bytes
) -> dict[str, tuple[bytes, bytes]]:
    """Return a `(signing key, verification key)` tuple for each algorithm family."""
    return {
        "HS": (b"secret", b"secret"),
        "RS": (rsa_private_pkcs1, rsa_public_pkix),
        "ES": (ec_private_sec1, ec_public_pkix),
    }
