"""The algorithm registry.

An `AlgorithmRegistry` maps `alg` identifiers to signature providers. It is immutable: methods that
add an algorithm or a key lookup return a new registry, so a registry can be built once at startup
and shared between threads.

"""

from __future__ import annotations

import logging
from enum import Enum
from types import MappingProxyType
from typing import Any, Callable, Mapping, Optional, Tuple

from attrs import evolve, field, frozen
from cryptography.hazmat.primitives import hashes

from .algorithms import EcdsaSignature, HmacSignature, RsaSignature, SignatureAlgorithm, Unsigned
from .enums import Algorithm
from .exceptions import MissingKeyId, UnknownKeyId, UnsupportedAlgorithm
from .keys import KeyInput

logger = logging.getLogger(__name__)

KeyLookup = Callable[[str], Optional[Tuple[Any, KeyInput]]]
"""A callable returning the `(alg, key)` to use for a given `kid`.

The returned key may be `None`, in which case the key provided by the caller is used.
"""


def algorithm_name(alg: Any) -> str:
    """Return the identifier of an algorithm, as used in the `alg` header.

    Raises:
        UnsupportedAlgorithm: if `alg` is neither a `str` nor an `Algorithm`

    """
    if isinstance(alg, Enum):
        alg = alg.value
    if not isinstance(alg, str):
        raise UnsupportedAlgorithm(alg)
    return alg


def _freeze(algorithms: Mapping[Any, SignatureAlgorithm]) -> Mapping[str, SignatureAlgorithm]:
    return MappingProxyType({algorithm_name(alg): provider for alg, provider in algorithms.items()})


@frozen
class AlgorithmRegistry:
    """An immutable mapping of algorithm identifiers to signature providers.

    Args:
        algorithms: a mapping of `alg` identifiers to `SignatureAlgorithm` instances
        key_lookup: an optional callable to resolve the algorithm and key from the `kid` header
            of decoded tokens. It may be called concurrently, so it must be thread-safe.

    """

    algorithms: Mapping[str, SignatureAlgorithm] = field(converter=_freeze)
    key_lookup: KeyLookup | None = field(default=None, eq=False)

    def get(self, alg: Any) -> SignatureAlgorithm:
        """Return the signature provider for a given algorithm.

        Raises:
            UnsupportedAlgorithm: if the algorithm is not registered

        """
        provider = self.algorithms.get(algorithm_name(alg))
        if provider is None:
            raise UnsupportedAlgorithm(alg)
        return provider

    def __contains__(self, alg: Any) -> bool:
        return isinstance(alg, (str, Enum)) and algorithm_name(alg) in self.algorithms

    def with_algorithm(self, alg: Any, provider: SignatureAlgorithm) -> AlgorithmRegistry:
        """Return a new registry including an additional, or replaced, algorithm."""
        return evolve(self, algorithms={**self.algorithms, algorithm_name(alg): provider})

    def with_key_lookup(self, key_lookup: KeyLookup | None) -> AlgorithmRegistry:
        """Return a new registry using the given `kid` lookup.

        Pass `None` to remove an existing lookup.

        """
        return evolve(self, key_lookup=key_lookup)

    def resolve_key_id(self, kid: str | None) -> tuple[str, KeyInput]:
        """Resolve the algorithm and key to use for a given `kid`.

        Args:
            kid: the `kid` header from a token, if any

        Returns:
            a tuple `(alg, key)`. `key` is `None` when the lookup did not return a key.

        Raises:
            MissingKeyId: if `kid` is `None`
            UnknownKeyId: if the lookup does not know this `kid`
            ValueError: if no key lookup is configured in this registry

        """
        if self.key_lookup is None:
            msg = "This registry has no key lookup."
            raise ValueError(msg)
        if kid is None:
            raise MissingKeyId()

        try:
            resolved = self.key_lookup(kid)
        except KeyError:
            raise UnknownKeyId(kid) from None
        if resolved is None:
            raise UnknownKeyId(kid)

        alg, key = resolved
        if not alg:
            raise UnknownKeyId(kid)
        logger.debug("resolved kid %r to alg %s", kid, alg)
        return algorithm_name(alg), key


DEFAULT_REGISTRY = AlgorithmRegistry(
    {
        Algorithm.NONE: Unsigned(),
        Algorithm.HS256: HmacSignature(Algorithm.HS256.value, hashes.SHA256()),
        Algorithm.HS384: HmacSignature(Algorithm.HS384.value, hashes.SHA384()),
        Algorithm.HS512: HmacSignature(Algorithm.HS512.value, hashes.SHA512()),
        Algorithm.RS256: RsaSignature(Algorithm.RS256.value, hashes.SHA256()),
        Algorithm.RS384: RsaSignature(Algorithm.RS384.value, hashes.SHA384()),
        Algorithm.RS512: RsaSignature(Algorithm.RS512.value, hashes.SHA512()),
        Algorithm.ES256: EcdsaSignature(Algorithm.ES256.value, hashes.SHA256()),
        Algorithm.ES384: EcdsaSignature(Algorithm.ES384.value, hashes.SHA384()),
        Algorithm.ES512: EcdsaSignature(Algorithm.ES512.value, hashes.SHA512()),
    }
)
"""The registry used when none is specified. It contains all algorithms from `Algorithm`."""
