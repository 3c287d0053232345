"""
Security provider implementations.

A SecurityProvider is a named bundle of cryptographic services that can
be installed in the process-wide provider catalog. The built-in
providers cover what the SDK needs: message digests, keyed MACs and TLS
contexts.
"""

from __future__ import annotations

import hashlib
import hmac
import ssl
from abc import ABC, abstractmethod
from typing import FrozenSet, Optional


class SecurityProvider(ABC):
    """
    Capability interface for security providers.

    Attributes:
        name: Unique provider name; the catalog de-duplicates on it.
        version: Provider version.
        info: Short description.
    """

    name: str = ""
    version: str = "1.0"
    info: str = ""

    @abstractmethod
    def algorithms(self) -> FrozenSet[str]:
        """Return the upper-cased algorithm names this provider offers."""

    def supports(self, algorithm: str) -> bool:
        """Return True if the provider offers ``algorithm``."""
        return algorithm.upper() in self.algorithms()

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(name={self.name!r}, version={self.version!r})"


class HashlibProvider(SecurityProvider):
    """Message digests backed by hashlib."""

    name = "HASHLIB"
    info = "Message digests (MD5, SHA-1, SHA-2, SHA-3, BLAKE2)"

    def algorithms(self) -> FrozenSet[str]:
        return frozenset(a.upper() for a in hashlib.algorithms_guaranteed)

    def digest(self, data: bytes, algorithm: str = "sha256") -> str:
        """
        Calculate the hex digest of bytes.

        Args:
            data: Bytes to hash.
            algorithm: Hash algorithm.

        Returns:
            Hexadecimal hash string.

        Raises:
            ValueError: If the algorithm is unsupported.
        """
        if not self.supports(algorithm):
            raise ValueError(f"Unsupported algorithm: {algorithm}")

        hasher = hashlib.new(algorithm.lower())
        hasher.update(data)
        return hasher.hexdigest()


class HmacProvider(SecurityProvider):
    """Keyed message authentication codes."""

    name = "HMAC"
    info = "HMAC over SHA-1 and SHA-2 digests"

    _DIGESTS = {
        "HMACSHA1": "sha1",
        "HMACSHA256": "sha256",
        "HMACSHA384": "sha384",
        "HMACSHA512": "sha512",
    }

    def algorithms(self) -> FrozenSet[str]:
        return frozenset(self._DIGESTS)

    def sign(self, data: bytes, key: bytes, algorithm: str = "HmacSHA256") -> bytes:
        """
        Create an HMAC signature.

        Args:
            data: Data to sign.
            key: Secret key.
            algorithm: MAC algorithm name.

        Returns:
            Signature bytes.
        """
        digest = self._DIGESTS.get(algorithm.upper())
        if digest is None:
            raise ValueError(f"Unsupported algorithm: {algorithm}")
        return hmac.new(key, data, digest).digest()

    def verify(
        self, data: bytes, signature: bytes, key: bytes, algorithm: str = "HmacSHA256"
    ) -> bool:
        """Verify an HMAC signature in constant time."""
        return hmac.compare_digest(self.sign(data, key, algorithm), signature)


class TLSProvider(SecurityProvider):
    """TLS client contexts backed by the ssl module."""

    name = "TLS"
    info = "TLS client contexts"

    def algorithms(self) -> FrozenSet[str]:
        return frozenset({"TLS", "TLSV1.2", "TLSV1.3"})

    def create_context(
        self,
        cafile: Optional[str] = None,
        minimum_version: ssl.TLSVersion = ssl.TLSVersion.TLSv1_2,
    ) -> ssl.SSLContext:
        """
        Create a verifying client SSL context.

        Args:
            cafile: Optional CA bundle path.
            minimum_version: Lowest TLS version to negotiate.

        Returns:
            Configured SSLContext.
        """
        context = ssl.create_default_context(cafile=cafile)
        context.minimum_version = minimum_version
        return context
