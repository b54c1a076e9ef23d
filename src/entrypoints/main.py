import argparse

import httpx
from loguru import logger
from pydantic import BaseModel

from src.application.address_service import AddressService
from src.domain.state import ErrorState, SuccessState
from src.entrypoints.settings import Config, load_config
from src.infrastructure.bigcommerce_client import BigCommerceApiClient
from src.infrastructure.graphql_client import CustomerGraphQLClient
from src.infrastructure.page_cache import PageCache
from src.infrastructure.session import StaticSession

STORE_NAME_QUERY = """
  query StoreName {
    site {
      settings {
        storeName
      }
    }
  }
"""


class _Settings(BaseModel):
    storeName: str  # noqa: N815


class _Site(BaseModel):
    settings: _Settings


class _StoreNameData(BaseModel):
    site: _Site


class StoreNameResponse(BaseModel):
    data: _StoreNameData


def build_api_client(config: Config, http_client: httpx.Client) -> BigCommerceApiClient:
    return BigCommerceApiClient(
        store_hash=config.BIGCOMMERCE_STORE_HASH,
        access_token=config.BIGCOMMERCE_ACCESS_TOKEN,
        channel_id=config.BIGCOMMERCE_CHANNEL_ID,
        api_url=config.BIGCOMMERCE_API_URL,
        storefront_domain=config.BIGCOMMERCE_PERMANENT_STORE_DOMAIN,
        http_client=http_client,
    )


def _parse_args(argv: list[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="storefront")
    commands = parser.add_subparsers(dest="command", required=True)

    delete = commands.add_parser("delete-address", help="Delete a customer address")
    delete.add_argument("address_id", type=int)
    delete.add_argument("--customer-id", type=int, default=None)
    delete.add_argument("--recaptcha-token", default=None)

    commands.add_parser("store-name", help="Print the storefront's store name")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(argv)
    config = load_config()

    with httpx.Client() as http_client:
        api_client = build_api_client(config, http_client)

        if args.command == "store-name":
            result = api_client.query(STORE_NAME_QUERY, StoreNameResponse)
            logger.info(f"Store name: {result.data.site.settings.storeName}")
            return 0

        if not config.BIGCOMMERCE_CUSTOMER_IMPERSONATION_TOKEN:
            logger.error("BIGCOMMERCE_CUSTOMER_IMPERSONATION_TOKEN is required to delete addresses")
            return 2

        address_service = AddressService(
            client=CustomerGraphQLClient(
                storefront_api_url=api_client.storefront_api_url,
                customer_impersonation_token=config.BIGCOMMERCE_CUSTOMER_IMPERSONATION_TOKEN,
                http_client=http_client,
            ),
            session=StaticSession(args.customer_id),
            page_cache=PageCache(),
        )
        state = address_service.delete_address(args.address_id, args.recaptcha_token)

    match state:
        case SuccessState(message=message):
            logger.info(message)
            return 0
        case ErrorState(message=message):
            logger.error(message)
            return 1


if __name__ == "__main__":
    raise SystemExit(main())
