from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.responses import RedirectResponse
from loguru import logger

from steemconnect.api.deps import get_return_code, get_return_state
from steemconnect.errors import IdentityProviderError
from steemconnect.provider import Provider

STATE_SESSION_KEY = "steemconnect_state"


def build_router(
    provider: Provider, success_url: str = "/", prefix: str = "/steemconnect"
) -> APIRouter:
    """
    Login and callback routes for a configured provider.

    Requires ``SessionMiddleware`` on the app: the OAuth state and the
    logged in user are kept in ``request.session``.
    """
    router = APIRouter(prefix=prefix)

    @router.get("/login")
    def steemconnect_login(request: Request):
        url, state = provider.get_authorization_url()
        request.session[STATE_SESSION_KEY] = state
        return RedirectResponse(url=url)

    # sync handlers, the token exchange blocks on requests
    @router.get("/callback")
    def steemconnect_callback(
        request: Request,
        code: Optional[str] = Depends(get_return_code),
        state: Optional[str] = Depends(get_return_state),
    ):
        expected_state = request.session.pop(STATE_SESSION_KEY, None)
        if not expected_state or state != expected_state:
            raise HTTPException(status_code=400, detail="Invalid OAuth state")

        try:
            token = provider.parse_return(code)
            if token is None:
                raise HTTPException(
                    status_code=400, detail="Missing authorization code"
                )
            account = provider.get_resource_owner(token)
        except IdentityProviderError as e:
            logger.warning(f"SteemConnect login failed: {e.message}")
            raise HTTPException(status_code=400, detail=e.message)

        request.session["user"] = {
            "name": account.get_id(),
            "provider": "steemconnect",
        }
        return RedirectResponse(url=success_url)

    return router
