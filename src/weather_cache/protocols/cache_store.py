"""Cache storage protocol.

Defines the interface for the key-value backend that holds serialized
provider responses with a fixed expiry.
"""

from typing import Protocol, runtime_checkable


@runtime_checkable
class CacheStore(Protocol):
    """Protocol for key-value cache backends.

    Any type that implements these methods satisfies the protocol,
    no explicit inheritance needed.

    Implementations must raise ``CacheBackendError`` when the backend is
    unreachable or an operation fails, never return a silent miss.
    """

    async def get(self, key: str) -> str | None:
        """Fetch a cached value.

        Args:
            key: The cache key

        Returns:
            The stored string, or None if the key is absent or expired
        """
        ...

    async def set(self, key: str, value: str, ttl: int) -> None:
        """Store a value, replacing any previous one.

        Args:
            key: The cache key
            value: Serialized payload
            ttl: Time-to-live in seconds
        """
        ...

    async def health_check(self) -> bool:
        """Check if the backend is reachable.

        Returns:
            True if healthy, False otherwise
        """
        ...
