from typing import List, Mapping, Optional, Tuple

from authlib.oauth2.rfc6749 import OAuth2Token
from loguru import logger

from steemconnect.config import EndpointConfig
from steemconnect.errors import IdentityProviderError
from steemconnect.oauth import OAuth2Engine
from steemconnect.resource_owner import ResourceOwner


class Provider:
    """
    SteemConnect v2 OAuth2 client.

    Usage:
        config = EndpointConfig("my.app", "secret").set_return_url(
            "https://my.app/callback"
        )
        provider = Provider(config)

        url, state = provider.get_authorization_url()
        # ... user comes back on the return URL with ?code=...
        token = provider.parse_return(query_params=request.query_params)
        account = provider.get_resource_owner(token)
    """

    # Key of a token response which names the account that granted it
    ACCESS_TOKEN_RESOURCE_OWNER_ID = "username"

    def __init__(
        self,
        config: EndpointConfig,
        response_code: Optional[str] = None,
        session_factory=None,
    ):
        self.config = config
        self.response_error = "error"
        # Body key holding a numeric error code, SteemConnect does not send one
        self.response_code = response_code
        self.engine = OAuth2Engine(
            self, **self._parse_provider_options(), session_factory=session_factory
        )

    def _parse_provider_options(self) -> dict:
        return {
            "redirect_uri": self.config.return_url,
            "client_id": self.config.client_id,
            "client_secret": self.config.client_secret,
        }

    # ------------------ Engine hooks ------------------

    def get_base_authorization_url(self) -> str:
        return self.config.build_url("authorization")

    def get_base_access_token_url(self, params: Optional[dict] = None) -> str:
        return self.config.build_url("access_token")

    def get_resource_owner_details_url(self, token: OAuth2Token) -> str:
        return self.config.build_url("account")

    def get_default_scopes(self) -> List[str]:
        return self.config.scopes

    def check_response(self, response, data: dict) -> None:
        error = data.get(self.response_error) if data else None
        if not error:
            return

        code = 0
        if self.response_code and data.get(self.response_code):
            try:
                code = int(data[self.response_code])
            except (TypeError, ValueError):
                code = 0

        logger.warning(f"SteemConnect returned an error: {error} (code {code})")
        raise IdentityProviderError(error, code, data)

    def create_resource_owner(self, data: dict, token: OAuth2Token) -> ResourceOwner:
        return ResourceOwner(data)

    # ------------------ Public API ------------------

    def get_authorization_url(
        self, state: Optional[str] = None, scopes: Optional[List[str]] = None
    ) -> Tuple[str, str]:
        """Return the URL to send the user to, and the ``state`` it carries."""
        return self.engine.create_authorization_url(state=state, scopes=scopes)

    def parse_return(
        self,
        code: Optional[str] = None,
        query_params: Optional[Mapping[str, str]] = None,
    ) -> Optional[OAuth2Token]:
        """
        Exchange the code SteemConnect sent back for an access token.

        When ``code`` is not given it is looked up in ``query_params``, which
        the caller takes from the inbound request. Returns ``None`` when there
        is no code at all.
        """
        if not code and query_params is not None:
            code = query_params.get("code")

        if not code:
            logger.debug("No authorization code to exchange")
            return None

        return self.engine.request_authorization_code_grant(code)

    def refresh_token(self, current_token: Mapping) -> Optional[OAuth2Token]:
        """
        Issue a new access token from the refresh token of ``current_token``.

        Not every token is refreshable: tokens issued without the ``offline``
        scope carry no refresh token, and ``None`` is returned for those.
        """
        refresh_token = current_token.get("refresh_token")
        if not refresh_token:
            logger.debug("Token has no refresh_token, skipping refresh")
            return None

        return self.refresh_token_string(refresh_token)

    def refresh_token_string(self, refresh_token: str) -> Optional[OAuth2Token]:
        if not refresh_token:
            logger.debug("Empty refresh_token, skipping refresh")
            return None

        return self.engine.request_refresh_token_grant(refresh_token)

    def get_resource_owner(self, token: Mapping) -> ResourceOwner:
        # Expiry is left to SteemConnect, a stale token still gets sent and the
        # error body comes back as IdentityProviderError.
        return self.engine.fetch_resource_owner(token)

    def revoke_token(self, token: Mapping) -> None:
        self.engine.revoke(token["access_token"], self.config.build_url("revoke"))

    def get_token_username(self, token: Mapping) -> Optional[str]:
        return token.get(self.ACCESS_TOKEN_RESOURCE_OWNER_ID)


IdentityProvider = Provider
