import httpx

from src.domain.interfaces import CacheMode
from src.shared.decorators import log_errors


class StorefrontGraphQLError(Exception):
    """Raised when the storefront API returns top-level GraphQL errors."""


class CustomerGraphQLClient:
    """Thin httpx wrapper for customer-scoped storefront GraphQL calls.

    Authenticates with a customer impersonation token, so requests can act on
    behalf of any customer named in ``X-Bc-Customer-Id``.
    """

    def __init__(
        self,
        storefront_api_url: str,
        customer_impersonation_token: str,
        http_client: httpx.Client | None = None,
    ) -> None:
        self._endpoint = storefront_api_url
        # Module-level httpx calls open and close a connection per request
        self._client = http_client
        self._headers = {
            "Authorization": f"Bearer {customer_impersonation_token}",
            "Accept": "application/json",
            "Content-Type": "application/json",
        }

    @property
    def log_context(self) -> str:
        return f"endpoint={self._endpoint}"

    @log_errors
    def execute(
        self,
        document: str,
        variables: dict | None = None,
        customer_id: int | None = None,
        cache: CacheMode = "default",
    ) -> dict:
        """POST a GraphQL document and return the full response body.

        Raises:
            StorefrontGraphQLError: if the response contains a top-level ``errors`` key.
            httpx.HTTPStatusError: on non-2xx HTTP responses.
        """
        payload: dict = {"query": document}
        if variables:
            payload["variables"] = variables

        headers = dict(self._headers)
        if customer_id is not None:
            headers["X-Bc-Customer-Id"] = str(customer_id)
        if cache == "no-store":
            headers["Cache-Control"] = "no-store"

        response = (self._client or httpx).post(
            self._endpoint, headers=headers, json=payload
        )
        response.raise_for_status()

        body: dict = response.json()

        if errors := body.get("errors"):
            raise StorefrontGraphQLError(errors)

        return body
