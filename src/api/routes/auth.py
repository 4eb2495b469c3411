"""Authentication routes (local register/login, logout, refresh)."""

import logging

from fastapi import APIRouter, Depends, HTTPException, Response, status

from api.dependencies import get_auth_service
from api.models import CredentialsRequest, TokensResponse
from api.security import RefreshTokenPrincipal, get_current_user_id, get_refresh_principal
from domain.model.errors import (
    AccessDeniedError,
    CreationFailedError,
    DuplicateEmailError,
    StoreUnavailableError,
)
from services.auth_service import AuthService
from services.credentials_validation import validate_credentials

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])


def _validated(request: CredentialsRequest) -> tuple[str, str]:
    result = validate_credentials(request.email, request.password)
    if not result.is_valid:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=result.errors)
    return request.email, request.password


def _store_unavailable(e: StoreUnavailableError) -> HTTPException:
    return HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(e))


@router.post(
    "/local/register",
    response_model=TokensResponse,
    response_model_by_alias=True,
    status_code=status.HTTP_201_CREATED,
)
def local_register(request: CredentialsRequest, service: AuthService = Depends(get_auth_service)):
    """Register a new user with email and password.

    Raises:
        HTTPException: 400 if input is invalid, the email is taken, or the
            account could not be created
    """
    email, password = _validated(request)
    try:
        tokens = service.register(email, password)
    except (DuplicateEmailError, CreationFailedError) as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    return TokensResponse.from_domain(tokens)


@router.post("/local/login", response_model=TokensResponse, response_model_by_alias=True)
def local_login(request: CredentialsRequest, service: AuthService = Depends(get_auth_service)):
    """Log in with email and password.

    Raises:
        HTTPException: 400 if input is invalid, 403 if credentials are wrong,
            503 if the user store is down
    """
    email, password = _validated(request)
    try:
        tokens = service.login(email, password)
    except AccessDeniedError as e:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(e))
    except StoreUnavailableError as e:
        raise _store_unavailable(e)
    return TokensResponse.from_domain(tokens)


@router.post("/logout", status_code=status.HTTP_204_NO_CONTENT)
def logout(
    user_id: str = Depends(get_current_user_id),
    service: AuthService = Depends(get_auth_service),
):
    """Delete the caller's refresh token. Requires an access token."""
    try:
        service.logout(user_id)
    except StoreUnavailableError as e:
        raise _store_unavailable(e)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/refresh", response_model=TokensResponse, response_model_by_alias=True)
def refresh(
    principal: RefreshTokenPrincipal = Depends(get_refresh_principal),
    service: AuthService = Depends(get_auth_service),
):
    """Exchange a refresh token for a new token pair. Requires a refresh token.

    Raises:
        HTTPException: 403 if the refresh token is not the user's current one,
            503 if the user store is down
    """
    try:
        tokens = service.refresh_tokens(principal.claims.sub, principal.refresh_token)
    except AccessDeniedError as e:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(e))
    except StoreUnavailableError as e:
        raise _store_unavailable(e)
    return TokensResponse.from_domain(tokens)
