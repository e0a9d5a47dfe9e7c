from abc import ABC, abstractmethod
from typing import TypeVar, Generic

# Type variables for generics
T = TypeVar('T')  # Generic type for raw data
R = TypeVar('R')  # Generic type for the normalized primary entity
E = TypeVar('E')  # Generic type for the normalized enrichment


class DataNormalizer(Generic[T, R, E], ABC):
    """
    Abstract base interface for data normalizers.

    Normalizers are pure transforms from raw upstream documents to the
    stable public schema. They perform no I/O and keep no state, so applying
    one twice to the same input yields equal output.

    Type Parameters:
        T: The type of raw data from the external API
        R: The normalized primary entity
        E: The normalized enrichment data
    """

    @abstractmethod
    def normalize_primary(self, raw_data: T) -> R:
        """
        Normalizes the primary entity document.

        Args:
            raw_data: Raw document from the external API

        Returns:
            R: Normalized entity

        Raises:
            MalformedUpstreamError: If a required field is missing or malformed
        """
        pass

    @abstractmethod
    def normalize_enrichment(self, raw_data: T) -> E:
        """
        Normalizes a secondary enrichment document.

        Args:
            raw_data: Raw document from the external API

        Returns:
            E: Normalized enrichment data

        Raises:
            MalformedUpstreamError: If the document cannot be normalized
        """
        pass
