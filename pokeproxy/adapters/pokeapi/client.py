import json
import time
from typing import Any, Dict, Optional
from urllib.parse import quote

import httpx

from pokeproxy.adapters.interfaces.connector import APIConnector
from pokeproxy.core.exceptions import (
    MalformedUpstreamError,
    TransportError,
    UpstreamError,
)
from pokeproxy.core.logging import get_logger

logger = get_logger(__name__)


class PokeAPIClient(APIConnector):
    """
    Client for the PokeAPI REST service.

    Each call to ``retrieve`` issues exactly one GET request. Outcomes are
    mapped as follows:

    - 2xx with a JSON object body: the decoded object
    - any other status: ``UpstreamError`` carrying the status and body text
    - DNS, connection or timeout failures: ``TransportError``
    - 2xx whose body is not a JSON object: ``MalformedUpstreamError``
    - a URL that is not a string or cannot be parsed: ``MalformedUpstreamError``
    """

    DEFAULT_BASE_URL = "https://pokeapi.co/api/v2"
    DEFAULT_TIMEOUT = 10.0

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = DEFAULT_TIMEOUT,
        http_client: Optional[httpx.AsyncClient] = None
    ):
        """
        Initialize the PokeAPI client.

        Args:
            base_url: Base URL of the API, without trailing slash
            timeout: Request timeout in seconds
            http_client: Optional pre-built client, mainly for tests
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._owns_client = http_client is None
        self.http_client = http_client or httpx.AsyncClient(
            timeout=timeout,
            headers={"Accept": "application/json"},
            follow_redirects=True,
        )

        logger.info(f"PokeAPI client initialized for {self.base_url}")

    def primary_url(self, name: str) -> str:
        """URL of the Pokemon resource for an already-normalized name."""
        return self.build_url(self.base_url, f"pokemon/{quote(name, safe='')}")

    async def retrieve(self, url: str) -> Dict[str, Any]:
        if not isinstance(url, str):
            raise MalformedUpstreamError(
                f"Upstream URL is a {type(url).__name__}, not a string",
                context={"url": repr(url)}
            )

        start_time = time.time()

        try:
            response = await self.http_client.get(url, timeout=self.timeout)
        except httpx.InvalidURL as e:
            raise MalformedUpstreamError(
                f"Upstream URL is invalid: {str(e)}",
                context={"url": url}
            ) from e
        except httpx.TimeoutException as e:
            logger.warning(f"Timeout after {self.timeout}s fetching {url}")
            raise TransportError(
                f"Upstream request timed out after {self.timeout}s",
                url=url,
                original_exception=e
            ) from e
        except httpx.RequestError as e:
            logger.warning(f"Connection to upstream failed for {url}: {str(e)}")
            raise TransportError(
                f"Upstream request failed: {str(e) or e.__class__.__name__}",
                url=url,
                original_exception=e
            ) from e

        duration = time.time() - start_time
        logger.debug(
            f"PokeAPI request completed in {duration:.2f}s",
            extra={"url": url, "status_code": response.status_code}
        )

        if not response.is_success:
            raise UpstreamError(response.status_code, response.text, url=url)

        try:
            data = response.json()
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise MalformedUpstreamError(
                "Upstream returned a body that is not valid JSON",
                context={"url": url}
            ) from e

        if not isinstance(data, dict):
            raise MalformedUpstreamError(
                f"Upstream returned {type(data).__name__} instead of a JSON object",
                context={"url": url}
            )

        return data

    async def aclose(self) -> None:
        if self._owns_client and not self.http_client.is_closed:
            await self.http_client.aclose()
