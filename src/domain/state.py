"""Uniform result returned by storefront actions to the UI layer."""

from typing import Annotated, Literal

from pydantic import BaseModel, Field


class SuccessState(BaseModel):
    status: Literal["success"] = "success"
    message: str


class ErrorState(BaseModel):
    status: Literal["error"] = "error"
    message: str


State = Annotated[SuccessState | ErrorState, Field(discriminator="status")]
