from loguru import logger

from src.domain.interfaces import IGraphQLClient, IPageCache, ISessionProvider
from src.domain.state import ErrorState, State, SuccessState

ADDRESSES_PATH = "/account/addresses"
DELETED_MESSAGE = "Address deleted from your account."
UNKNOWN_ERROR_MESSAGE = "Unknown error."

DELETE_CUSTOMER_ADDRESS_MUTATION = """
  mutation DeleteCustomerAddressMutation(
    $reCaptcha: ReCaptchaV2Input
    $input: DeleteCustomerAddressInput!
  ) {
    customer {
      deleteCustomerAddress(reCaptchaV2: $reCaptcha, input: $input) {
        errors {
          __typename
          ... on CustomerAddressDeletionError {
            __typename
            message
          }
          ... on CustomerNotLoggedInError {
            __typename
            message
          }
        }
      }
    }
  }
"""


class AddressService:
    """Customer address actions, returning a uniform ``State`` to the caller."""

    def __init__(
        self,
        client: IGraphQLClient,
        session: ISessionProvider,
        page_cache: IPageCache,
    ) -> None:
        self._client = client
        self._session = session
        self._page_cache = page_cache

    def delete_address(self, address_id: int, recaptcha_token: str | None = None) -> State:
        """Delete ``address_id`` from the session customer's account.

        Platform-reported errors are joined into one message; exceptions are
        folded into an ``ErrorState`` and never raised. The addresses page is
        revalidated whenever the mutation returns, even with errors.
        """
        customer_id = self._session.get_customer_id()

        variables: dict = {"input": {"addressEntityId": address_id}}
        if recaptcha_token:
            variables["reCaptcha"] = {"token": recaptcha_token}

        try:
            response = self._client.execute(
                DELETE_CUSTOMER_ADDRESS_MUTATION,
                variables,
                customer_id=customer_id,
                cache="no-store",
            )
            errors: list[dict] = response["data"]["customer"]["deleteCustomerAddress"]["errors"]

            self._page_cache.revalidate(ADDRESSES_PATH, "page")

            if not errors:
                logger.info(f"Address {address_id} deleted for customer {customer_id}")
                return SuccessState(message=DELETED_MESSAGE)

            logger.warning(
                f"Address {address_id} not deleted: "
                f"{[error.get('__typename') for error in errors]}"
            )
            return ErrorState(message="\n".join(error["message"] for error in errors))
        except Exception as exc:
            logger.error(f"Deleting address {address_id} failed: {type(exc).__name__}: {exc}")
            return ErrorState(message=str(exc) or UNKNOWN_ERROR_MESSAGE)
