from typing import Any, Callable, List, Optional, Protocol, Tuple

from authlib.integrations.requests_client import OAuth2Session
from authlib.oauth2.rfc6749 import OAuth2Token
from loguru import logger

# SteemConnect expects scopes as "login,vote" rather than the RFC's space separated form
SCOPE_SEPARATOR = ","

TOKEN_ENDPOINT_AUTH_METHOD = "client_secret_post"


class ProviderHooks(Protocol):
    """Provider specific pieces the engine asks for while running a grant."""

    def get_base_authorization_url(self) -> str: ...

    def get_base_access_token_url(self, params: dict) -> str: ...

    def get_resource_owner_details_url(self, token: OAuth2Token) -> str: ...

    def get_default_scopes(self) -> List[str]: ...

    def check_response(self, response, data: dict) -> None: ...

    def create_resource_owner(self, data: dict, token: OAuth2Token) -> Any: ...


def parse_response_body(response) -> dict:
    try:
        data = response.json()
    except ValueError:
        return {}
    return data if isinstance(data, dict) else {}


class OAuth2Engine:
    """
    Authorization-code and refresh-token grants on top of Authlib.

    A new ``OAuth2Session`` is opened for every call, so the engine never
    keeps a token around. Each token response is handed to
    ``hooks.check_response`` before Authlib parses it.
    """

    def __init__(
        self,
        hooks: ProviderHooks,
        client_id: str,
        client_secret: str,
        redirect_uri: Optional[str] = None,
        session_factory: Optional[Callable[..., OAuth2Session]] = None,
    ):
        self.hooks = hooks
        self.client_id = client_id
        self.client_secret = client_secret
        self.redirect_uri = redirect_uri
        self.session_factory = session_factory or OAuth2Session

    def _session(self, token=None) -> OAuth2Session:
        session = self.session_factory(
            client_id=self.client_id,
            client_secret=self.client_secret,
            redirect_uri=self.redirect_uri,
            token=token,
            token_endpoint_auth_method=TOKEN_ENDPOINT_AUTH_METHOD,
            revocation_endpoint_auth_method=TOKEN_ENDPOINT_AUTH_METHOD,
        )
        session.register_compliance_hook("access_token_response", self._check_response)
        session.register_compliance_hook("refresh_token_response", self._check_response)
        return session

    def _check_response(self, response):
        self.hooks.check_response(response, parse_response_body(response))
        return response

    def create_authorization_url(
        self, state: Optional[str] = None, scopes: Optional[List[str]] = None, **params
    ) -> Tuple[str, str]:
        if scopes is None:
            scopes = self.hooks.get_default_scopes()
        return self._session().create_authorization_url(
            self.hooks.get_base_authorization_url(),
            state=state,
            scope=SCOPE_SEPARATOR.join(scopes),
            **params,
        )

    def request_authorization_code_grant(self, code: str, **params) -> OAuth2Token:
        url = self.hooks.get_base_access_token_url(params)
        logger.debug(f"Requesting authorization_code grant at {url}")
        return self._session().fetch_token(
            url, grant_type="authorization_code", code=code, **params
        )

    def request_refresh_token_grant(self, refresh_token: str, **params) -> OAuth2Token:
        url = self.hooks.get_base_access_token_url(params)
        logger.debug(f"Requesting refresh_token grant at {url}")
        return self._session().refresh_token(url, refresh_token=refresh_token, **params)

    def fetch_resource_owner(self, token: OAuth2Token):
        url = self.hooks.get_resource_owner_details_url(token)
        logger.debug(f"Fetching resource owner from {url}")
        # without expiry fields Authlib sends the bearer token as is
        bearer = {
            k: v for k, v in token.items() if k not in ("expires_at", "expires_in")
        }
        response = self._session(token=bearer).get(
            url, headers={"Accept": "application/json"}
        )
        data = parse_response_body(response)
        self.hooks.check_response(response, data)
        return self.hooks.create_resource_owner(data, token)

    def revoke(self, access_token: str, url: str):
        logger.debug(f"Revoking token at {url}")
        response = self._session().revoke_token(
            url, token=access_token, token_type_hint="access_token"
        )
        self.hooks.check_response(response, parse_response_body(response))
        return response
