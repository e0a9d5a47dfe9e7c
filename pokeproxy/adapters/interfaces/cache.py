from abc import ABC, abstractmethod
from typing import Any, Dict, Optional, TypeVar, Generic

# Type variables for generics
K = TypeVar('K')  # Generic type for cache keys
V = TypeVar('V')  # Generic type for cache values


class CacheStrategy(Generic[K, V], ABC):
    """
    Abstract base interface for caching strategies.

    This interface defines the standard contract for components that cache
    upstream responses to reduce load on external APIs. Every operation is
    total: a missing or expired key is reported as absent, never as an error.

    Implementations must make ``has``, ``get`` and ``set`` atomic with respect
    to each other, since a single instance is shared by all requests.

    Type Parameters:
        K: The type of keys used for cache entries
        V: The type of values stored in the cache
    """

    @abstractmethod
    def has(self, key: K) -> bool:
        """
        Checks if a live (non-expired) entry exists for the key.

        Args:
            key: The key to check

        Returns:
            bool: True if the key exists and has not expired
        """
        pass

    @abstractmethod
    def get(self, key: K) -> Optional[V]:
        """
        Retrieves a cached item by key.

        Args:
            key: The key of the item to retrieve

        Returns:
            Optional[V]: The cached value if found and live, None otherwise
        """
        pass

    @abstractmethod
    def set(self, key: K, value: V) -> None:
        """
        Stores an item in the cache, resetting its expiry clock.

        Args:
            key: The key to store the value under
            value: The value to store
        """
        pass

    @abstractmethod
    def delete(self, key: K) -> bool:
        """
        Removes an item from the cache.

        Args:
            key: The key of the item to remove

        Returns:
            bool: True if the key was present
        """
        pass

    @abstractmethod
    def clear(self) -> int:
        """
        Clears the whole cache.

        Returns:
            int: Number of entries removed
        """
        pass

    @abstractmethod
    def size(self) -> int:
        """Returns the number of live entries."""
        pass

    @abstractmethod
    def capacity(self) -> int:
        """Returns the maximum number of entries the cache holds."""
        pass

    @abstractmethod
    def get_stats(self) -> Dict[str, Any]:
        """
        Returns statistics about the cache.

        Returns:
            Dict[str, Any]: Statistics including size, capacity, hit rate, etc.
        """
        pass
