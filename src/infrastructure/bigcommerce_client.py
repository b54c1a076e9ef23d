import math
from datetime import UTC, datetime, timedelta
from typing import Any, TypeVar

import httpx
from loguru import logger
from pydantic import BaseModel, ValidationError

from src.domain.client_config import ClientConfig, StorefrontTokenResponse
from src.shared.decorators import log_errors

DEFAULT_API_URL = "https://api.bigcommerce.com"
DEFAULT_STOREFRONT_DOMAIN = "mybigcommerce.com"
DEFAULT_CHANNEL_ID = 1

TOKEN_ENDPOINT = "/v3/storefront/api-token-customer-impersonation"
# Storefront tokens only need to outlive the single query they are minted for
TOKEN_TTL_SECONDS = 300

M = TypeVar("M", bound=BaseModel)


class BigCommerceClientError(Exception):
    """Base class for errors raised by the BigCommerce API client."""


class ClientConfigError(BigCommerceClientError):
    """Raised when the client is constructed with missing or malformed settings."""


class TransportError(BigCommerceClientError):
    """Raised when a request fails on the wire or the body is not JSON."""


class ResponseValidationError(BigCommerceClientError):
    """Raised when a JSON body does not match the expected response model."""


def get_expires_at_utc_time(expires_in: int) -> int:
    """Return the unix timestamp (seconds) ``expires_in`` seconds from now."""
    expires_at = datetime.now(UTC) + timedelta(seconds=expires_in)
    return math.floor(expires_at.timestamp())


class BigCommerceApiClient:
    """httpx wrapper for the BigCommerce REST API and the storefront GraphQL API.

    ``fetch`` talks to the store's REST API with the static access token.
    ``query`` first exchanges that token for a short-lived storefront token,
    then POSTs the GraphQL document to the channel's storefront endpoint.
    """

    def __init__(
        self,
        store_hash: str | None = None,
        access_token: str | None = None,
        channel_id: int | None = None,
        *,
        api_url: str = DEFAULT_API_URL,
        storefront_domain: str = DEFAULT_STOREFRONT_DOMAIN,
        http_client: httpx.Client | None = None,
    ) -> None:
        try:
            self._config = ClientConfig.model_validate(
                {
                    "store_hash": store_hash,
                    "access_token": access_token,
                    "channel_id": channel_id,
                }
            )
        except ValidationError as exc:
            raise ClientConfigError(str(exc)) from exc

        self._api_url = api_url.rstrip("/")
        self._storefront_domain = storefront_domain
        # Module-level httpx calls open and close a connection per request
        self._client = http_client

    @property
    def config(self) -> ClientConfig:
        return self._config

    @property
    def log_context(self) -> str:
        return f"store={self._config.store_hash} channel={self._config.channel_id}"

    @property
    def api_url(self) -> str:
        return f"{self._api_url}/stores/{self._config.store_hash}"

    @property
    def storefront_api_url(self) -> str:
        channel_id = self._config.channel_id
        channel_segment = f"-{channel_id}" if channel_id != DEFAULT_CHANNEL_ID else ""
        return (
            f"https://store-{self._config.store_hash}{channel_segment}"
            f".{self._storefront_domain}/graphql"
        )

    @log_errors
    def fetch(
        self,
        endpoint: str,
        method: str = "GET",
        headers: dict[str, str] | None = None,
        **kwargs: Any,
    ) -> httpx.Response:
        """Send one request to ``<api_url><endpoint>`` and return the raw response.

        The status code is not checked and the body is not parsed.
        Caller headers override the defaults.

        Raises:
            TransportError: if httpx fails to complete the request.
        """
        request_headers = {
            "Accept": "application/json",
            "Content-Type": "application/json",
            "X-Auth-Token": self._config.access_token,
            **(headers or {}),
        }
        url = f"{self.api_url}{endpoint}"
        logger.debug(f"[BigCommerce] {method} {url}")

        try:
            return (self._client or httpx).request(
                method, url, headers=request_headers, **kwargs
            )
        except httpx.HTTPError as exc:
            raise TransportError(f"{method} {url} failed: {exc}") from exc

    @log_errors
    def query(self, query: str, response_model: type[M]) -> M:
        """Run a GraphQL ``query`` against the storefront and validate the body.

        A new storefront token is generated for every call.

        Raises:
            TransportError: if either request fails or returns a non-JSON body.
            ResponseValidationError: if a body does not fit its model.
        """
        token = self.generate_storefront_token().data.token

        try:
            response = (self._client or httpx).post(
                self.storefront_api_url,
                headers={
                    "Authorization": f"Bearer {token}",
                    "Accept": "application/json",
                    "Content-Type": "application/json",
                },
                json={"query": query},
            )
        except httpx.HTTPError as exc:
            raise TransportError(
                f"POST {self.storefront_api_url} failed: {exc}"
            ) from exc

        return self._parse(response, response_model)

    @log_errors
    def generate_storefront_token(self) -> StorefrontTokenResponse:
        """Exchange the access token for a storefront token on this channel."""
        response = self.fetch(
            TOKEN_ENDPOINT,
            method="POST",
            headers={"x-bc-customer-id": ""},
            json={
                "channel_id": self._config.channel_id,
                "expires_at": get_expires_at_utc_time(TOKEN_TTL_SECONDS),
            },
        )
        token_response = self._parse(response, StorefrontTokenResponse)
        logger.info(
            f"[BigCommerce] Storefront token issued for channel {self._config.channel_id}"
        )
        return token_response

    @staticmethod
    def _parse(response: httpx.Response, model: type[M]) -> M:
        try:
            body = response.json()
        except ValueError as exc:
            raise TransportError(
                f"Non-JSON response from {response.request.url} "
                f"({response.status_code}): {response.text[:200]}"
            ) from exc

        try:
            return model.model_validate(body)
        except ValidationError as exc:
            raise ResponseValidationError(
                f"Unexpected response shape for {model.__name__}: {exc}"
            ) from exc
