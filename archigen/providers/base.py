"""Shared HTTP plumbing for remote model providers."""

from abc import ABC, abstractmethod
import httpx
from typing import Optional

from ..utils.logger import get_logger
from ..utils.errors import (
    ConfigurationError,
    ProviderError,
    AuthenticationError,
    RateLimitError,
)

logger = get_logger(__name__)


class BaseProvider(ABC):
    """
    Base class for providers reached over httpx.

    Owns the AsyncClient lifecycle, the per-call credential check and the
    mapping of HTTP error statuses onto the ProviderError hierarchy.
    """

    provider_name = "provider"
    missing_key_message = "API key is missing."

    def __init__(
        self,
        api_key: Optional[str],
        base_url: str,
        timeout: float = 60.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize provider.

        Args:
            api_key: API key; a missing key fails each call, not construction
            base_url: Base URL for API endpoints
            timeout: Request timeout in seconds
            transport: Optional httpx transport (tests pass a MockTransport)
        """
        self.api_key = api_key.strip() if api_key else None
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.transport = transport
        self.client: Optional[httpx.AsyncClient] = None

    @property
    def has_credential(self) -> bool:
        return bool(self.api_key)

    async def __aenter__(self):
        await self.initialize()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    async def initialize(self):
        """Open the HTTP client."""
        if self.client is None:
            self.client = httpx.AsyncClient(
                timeout=self.timeout,
                headers=self._get_default_headers(),
                transport=self.transport,
            )
            logger.info(
                f"{self.provider_name} client opened",
                extra={"provider": self.provider_name, "has_credential": self.has_credential}
            )

    async def close(self):
        """Close the HTTP client."""
        if self.client:
            await self.client.aclose()
            self.client = None
            logger.info(
                f"{self.provider_name} client closed",
                extra={"provider": self.provider_name}
            )

    @abstractmethod
    def _get_default_headers(self) -> dict:
        """Headers sent with every request."""

    def _require_credential(self):
        """
        Raises:
            ConfigurationError: If no API key is configured
        """
        if not self.has_credential:
            raise ConfigurationError(self.missing_key_message)

    def _ensure_client(self):
        """
        Raises:
            ConfigurationError: If initialize() was never awaited
        """
        if self.client is None:
            raise ConfigurationError(
                f"{self.provider_name} client is not open. "
                "Call initialize() or use it as an async context manager."
            )

    @staticmethod
    def _error_message(response: httpx.Response) -> str:
        """Remote error text, preferring the JSON ``error.message`` field."""
        try:
            body = response.json()
        except ValueError:
            return response.text
        if isinstance(body, dict) and isinstance(body.get("error"), dict):
            return body["error"].get("message") or response.text
        return response.text

    def _handle_response_errors(self, response: httpx.Response):
        """
        Raise for HTTP error statuses.

        Raises:
            AuthenticationError: 401/403
            RateLimitError: 429
            ProviderError: Any other status >= 400
        """
        if response.status_code < 400:
            return

        error_message = self._error_message(response)
        logger.error(
            f"{self.provider_name} returned {response.status_code}",
            extra={"status": response.status_code, "error": error_message}
        )

        if response.status_code in (401, 403):
            raise AuthenticationError(self.provider_name, error_message or "Authentication failed")
        if response.status_code == 429:
            retry_after = response.headers.get("Retry-After")
            raise RateLimitError(
                self.provider_name,
                int(retry_after) if retry_after and retry_after.isdigit() else None,
                message=error_message,
            )
        raise ProviderError(self.provider_name, error_message, response.status_code)
