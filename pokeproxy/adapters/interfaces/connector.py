from abc import ABC, abstractmethod
from typing import Any, Dict


class APIConnector(ABC):
    """
    Abstract base interface for API connectors.

    A connector performs exactly one outbound retrieval per call and maps the
    outcome onto a uniform contract: the decoded JSON document on success,
    otherwise one of the integration exceptions. Connectors do not cache and
    do not retry; both concerns belong to the caller.
    """

    @abstractmethod
    def primary_url(self, name: str) -> str:
        """
        Builds the URL of the primary resource for a normalized lookup key.

        Args:
            name: Lookup key, already trimmed and lowercased

        Returns:
            str: Absolute URL of the resource
        """
        pass

    @abstractmethod
    async def retrieve(self, url: str) -> Dict[str, Any]:
        """
        Issues a single GET request and returns the decoded JSON object.

        Args:
            url: Absolute URL of the resource

        Returns:
            Dict[str, Any]: The decoded response body

        Raises:
            UpstreamError: If the API answers with a non-success status
            TransportError: If the API cannot be reached or times out
            MalformedUpstreamError: If the body is not a JSON object
        """
        pass

    @abstractmethod
    async def aclose(self) -> None:
        """Releases any pooled connections held by the connector."""
        pass

    def build_url(self, base_url: str, path: str) -> str:
        """
        Builds a complete URL from components.

        Args:
            base_url: The base URL of the API
            path: The path to the specific resource

        Returns:
            str: The complete URL
        """
        return f"{base_url.rstrip('/')}/{path.lstrip('/')}"
