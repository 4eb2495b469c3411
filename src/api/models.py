"""Pydantic models for API request/response."""

from typing import Any
from pydantic import BaseModel, ConfigDict, Field

from domain.model.tokens import Tokens


class CredentialsRequest(BaseModel):
    """Request body for local register/login.

    Fields are deliberately loose; services.credentials_validation
    checks them so that every problem is reported in one 400 response.
    """
    email: Any = None
    password: Any = None


class TokensResponse(BaseModel):
    """Access/refresh token pair."""
    model_config = ConfigDict(populate_by_name=True)

    access_token: str = Field(..., alias="accessToken", description="Short-lived access token")
    refresh_token: str = Field(..., alias="refreshToken", description="Long-lived refresh token")

    @classmethod
    def from_domain(cls, tokens: Tokens) -> "TokensResponse":
        return cls(access_token=tokens.access_token, refresh_token=tokens.refresh_token)
