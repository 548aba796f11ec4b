"""Base cache store interface for docucache."""

from abc import ABC, abstractmethod

Payload = str | bytes


class CacheStore(ABC):
    """Abstract base class for cache stores.

    Entries are addressed by a (partition, key) pair. A partition groups
    every entry cached for one scope so it can be dropped in one operation.
    All implementations should inherit from this class and implement the
    required methods.
    """

    @abstractmethod
    async def get(self, partition: str, key: str) -> Payload | None:
        """Get a payload from the cache.

        Args:
            partition: The partition name
            key: The composite key within the partition

        Returns:
            The cached payload or None if not found
        """
        pass

    @abstractmethod
    async def set(self, partition: str, key: str, payload: Payload) -> None:
        """Store a payload in the cache.

        Args:
            partition: The partition name
            key: The composite key within the partition
            payload: Serialized JSON payload
        """
        pass

    @abstractmethod
    async def delete_partition(self, partition: str) -> bool:
        """Atomically delete every entry in a partition.

        Args:
            partition: The partition name

        Returns:
            True if the partition existed and was deleted
        """
        pass

    @abstractmethod
    async def keys(self, partition: str) -> list[str]:
        """List the composite keys stored in a partition.

        Args:
            partition: The partition name

        Returns:
            The keys, in no particular order
        """
        pass

    async def exists(self, partition: str, key: str) -> bool:
        """Check if an entry exists.

        Args:
            partition: The partition name
            key: The composite key

        Returns:
            True if the entry exists
        """
        return await self.get(partition, key) is not None

    async def close(self) -> None:
        """Release any resources held by the store."""
        pass
