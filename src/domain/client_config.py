from typing import Any

from pydantic import BaseModel, ConfigDict, Field, StrictInt


class ClientConfig(BaseModel):
    """Credentials and channel the BigCommerce API client is bound to."""

    model_config = ConfigDict(frozen=True)

    store_hash: str = Field(..., min_length=1)
    access_token: str = Field(..., min_length=1)
    channel_id: StrictInt  # 1 is the store's default channel


class StorefrontToken(BaseModel):
    token: str


class StorefrontTokenResponse(BaseModel):
    """Body of the customer-impersonation token endpoint."""

    data: StorefrontToken
    meta: Any = None
