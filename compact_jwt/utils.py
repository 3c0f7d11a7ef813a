"""Various utilities used in multiple places.

This module contains the Base64url, JSON and timestamp helpers shared by the codec, the signature
providers and the claims validator.

"""

from __future__ import annotations

import json
from datetime import datetime, timezone
from typing import Any

from binapy import BinaPy

_B64_TO_B64U = bytes.maketrans(b"+/", b"-_")


def b64u_encode(data: bytes | str) -> str:
    """Encode some data with the padded Base64url alphabet.

    Unlike most JOSE implementations, the trailing `=` padding is kept.

    Args:
        data: the data to encode. A `str` is encoded to UTF-8 first.

    Returns:
        the Base64url representation, with padding

    """
    return BinaPy(data).to("b64").translate(_B64_TO_B64U).decode()


def b64u_decode(value: bytes | str) -> bytes:
    """Decode a Base64url value, with or without padding.

    Args:
        value: the value to decode

    Returns:
        the decoded bytes

    Raises:
        ValueError: if the value is not valid Base64url

    """
    return bytes(BinaPy(value).decode_from("b64u"))


def json_encode(obj: Any) -> str:
    """Serialize an object to compact JSON, with sorted keys.

    Keys are sorted so that the same claims always produce the same token.

    """
    return json.dumps(obj, separators=(",", ":"), sort_keys=True)


def json_decode(data: bytes) -> Any:
    """Parse JSON from raw bytes."""
    return json.loads(data)


def utcnow() -> datetime:
    """Return the current UTC datetime, truncated to the second."""
    return datetime.now(tz=timezone.utc).replace(microsecond=0)


def to_timestamp(dt: datetime) -> int:
    """Convert a datetime to a number of seconds since the epoch."""
    return int(dt.timestamp())


def from_timestamp(value: float) -> datetime:
    """Convert a number of seconds since the epoch to an aware UTC datetime.

    Fractional seconds are dropped.

    """
    return datetime.fromtimestamp(int(value), tz=timezone.utc)
