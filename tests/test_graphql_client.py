"""Tests for CustomerGraphQLClient and PageCache."""

import json
from unittest.mock import patch

import httpx
import pytest

from src.infrastructure.graphql_client import CustomerGraphQLClient, StorefrontGraphQLError
from src.infrastructure.page_cache import PageCache

STOREFRONT_URL = "https://store-abc123.mybigcommerce.com/graphql"


def _client(handler, requests: list[httpx.Request]) -> CustomerGraphQLClient:
    def _recording(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        return handler(request)

    return CustomerGraphQLClient(
        storefront_api_url=STOREFRONT_URL,
        customer_impersonation_token="imp-token",
        http_client=httpx.Client(transport=httpx.MockTransport(_recording)),
    )


def test_execute_sends_customer_and_cache_headers() -> None:
    requests: list[httpx.Request] = []
    client = _client(lambda request: httpx.Response(200, json={"data": {"ok": True}}), requests)

    body = client.execute("mutation { x }", {"input": {"a": 1}}, customer_id=42, cache="no-store")

    assert body == {"data": {"ok": True}}
    request = requests[0]
    assert str(request.url) == STOREFRONT_URL
    assert request.headers["Authorization"] == "Bearer imp-token"
    assert request.headers["X-Bc-Customer-Id"] == "42"
    assert request.headers["Cache-Control"] == "no-store"
    assert json.loads(request.content) == {"query": "mutation { x }", "variables": {"input": {"a": 1}}}


def test_execute_guest_omits_customer_header() -> None:
    requests: list[httpx.Request] = []
    client = _client(lambda request: httpx.Response(200, json={"data": {}}), requests)

    client.execute("query { x }")

    assert "X-Bc-Customer-Id" not in requests[0].headers
    assert "Cache-Control" not in requests[0].headers
    assert "variables" not in json.loads(requests[0].content)


def test_execute_raises_on_graphql_errors() -> None:
    requests: list[httpx.Request] = []
    client = _client(
        lambda request: httpx.Response(200, json={"errors": [{"message": "Syntax error"}]}),
        requests,
    )

    with pytest.raises(StorefrontGraphQLError):
        client.execute("query {")


def test_execute_raises_on_http_status() -> None:
    requests: list[httpx.Request] = []
    client = _client(lambda request: httpx.Response(500, text="oops"), requests)

    with pytest.raises(httpx.HTTPStatusError):
        client.execute("query { x }")


def test_page_cache_page_scope_marks_only_path() -> None:
    cache = PageCache()
    cache.mark_fresh("/account/addresses")
    cache.mark_fresh("/account/addresses/edit")

    cache.revalidate("/account/addresses", "page")

    assert cache.is_stale("/account/addresses")
    assert not cache.is_stale("/account/addresses/edit")


def test_page_cache_layout_scope_marks_subtree() -> None:
    cache = PageCache()
    cache.mark_fresh("/account/addresses/edit")
    cache.mark_fresh("/account/settings")

    cache.revalidate("/account/addresses", "layout")

    assert cache.is_stale("/account/addresses")
    assert cache.is_stale("/account/addresses/edit")
    assert not cache.is_stale("/account/settings")

    cache.mark_fresh("/account/addresses")
    assert not cache.is_stale("/account/addresses")


def test_execute_without_http_client_uses_module_level_post() -> None:
    client = CustomerGraphQLClient(
        storefront_api_url=STOREFRONT_URL, customer_impersonation_token="imp-token"
    )
    response = httpx.Response(
        200, json={"data": {"ok": True}}, request=httpx.Request("POST", STOREFRONT_URL)
    )

    with patch.object(httpx, "post", return_value=response) as mock_post:
        body = client.execute("query { x }", customer_id=3)

    assert body == {"data": {"ok": True}}
    assert mock_post.call_args[0][0] == STOREFRONT_URL
    assert mock_post.call_args.kwargs["headers"]["X-Bc-Customer-Id"] == "3"
