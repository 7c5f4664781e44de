"""WebApp Auth Router - demo login for the shop session."""
from typing import Optional

from fastapi import APIRouter, Depends, Header

from storefront.errors import ERROR_NOT_AUTHENTICATED
from storefront.exceptions import AppException, SessionInvalidException
from storefront.routers.deps import get_shop, raise_http_error
from storefront.session import ShopSession
from .models import LoginRequest

router = APIRouter(tags=["webapp-auth"])


def _bearer_token(authorization: Optional[str]) -> Optional[str]:
    if authorization and authorization.lower().startswith("bearer "):
        return authorization[7:].strip()
    return None


@router.post("/auth/login")
async def login(request: LoginRequest, shop: ShopSession = Depends(get_shop)):
    try:
        session = shop.login(request.username, request.password)
    except AppException as e:
        raise_http_error(shop, e)
    return {"session_token": session.token, **session.to_dict()}


@router.post("/auth/logout")
async def logout(shop: ShopSession = Depends(get_shop)):
    shop.logout()
    return {"success": True}


@router.get("/auth/me")
async def me(
    authorization: Optional[str] = Header(default=None),
    shop: ShopSession = Depends(get_shop),
):
    token = _bearer_token(authorization)
    try:
        if not token:
            raise SessionInvalidException(ERROR_NOT_AUTHENTICATED)
        session = shop.auth.require_session(token)
    except AppException as e:
        raise_http_error(shop, e)
    return {**session.to_dict(), "badges": shop.badges()}
