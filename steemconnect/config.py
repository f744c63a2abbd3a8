import os
from typing import List, Mapping, Optional

from loguru import logger

from steemconnect.errors import ConfigurationError

DEFAULT_BASE_URL = "https://v2.steemconnect.com"

# login: verify the Steem identity
# vote: upvote, downvote or unvote a post or comment
# comment: publish or edit a post or a comment
# Others accepted by SteemConnect: offline, comment_delete, comment_options,
# custom_json (follows, reblogs, transfers), claim_reward_balance.
DEFAULT_SCOPES = ["login", "vote", "comment"]

DEFAULT_ENDPOINTS = {
    # OAuth2 endpoints, authorization is a browser URL so it has no api/ prefix
    "authorization": "oauth2/authorize",
    "access_token": "api/oauth2/token",
    "revoke": "oauth2/token/revoke",
    # SteemConnect API
    "account": "api/me",
}


class EndpointConfig:
    """
    Client credentials and URLs used to talk to SteemConnect.

    Only ``client_id`` and ``client_secret`` are required; the rest defaults
    to the public SteemConnect install and can be changed through the
    chainable ``set_*`` methods:

        config = (
            EndpointConfig("my.app", "secret")
            .set_return_url("https://my.app/callback")
            .set_scopes(["login", "custom_json"])
        )
    """

    def __init__(self, client_id: str, client_secret: str):
        self._client_id = client_id
        self._client_secret = client_secret
        self._return_url: Optional[str] = None
        self._scopes: List[str] = list(DEFAULT_SCOPES)
        self._base_url = DEFAULT_BASE_URL
        self._endpoints = dict(DEFAULT_ENDPOINTS)

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "EndpointConfig":
        """Build a config from ``STEEMCONNECT_*`` environment variables."""
        env = os.environ if environ is None else environ

        client_id = env.get("STEEMCONNECT_CLIENT_ID")
        client_secret = env.get("STEEMCONNECT_CLIENT_SECRET")
        if not client_id or not client_secret:
            raise ConfigurationError(
                "STEEMCONNECT_CLIENT_ID and STEEMCONNECT_CLIENT_SECRET must be set"
            )

        config = cls(client_id, client_secret)
        if env.get("STEEMCONNECT_RETURN_URL"):
            config.set_return_url(env["STEEMCONNECT_RETURN_URL"])
        if env.get("STEEMCONNECT_SCOPES"):
            scopes = [s.strip() for s in env["STEEMCONNECT_SCOPES"].split(",")]
            config.set_scopes([s for s in scopes if s])
        if env.get("STEEMCONNECT_BASE_URL"):
            config.set_base_url(env["STEEMCONNECT_BASE_URL"])

        logger.debug(f"Loaded SteemConnect config for client {client_id}")
        return config

    # ------------------ Credentials ------------------

    @property
    def client_id(self) -> str:
        return self._client_id

    def set_client_id(self, client_id: str) -> "EndpointConfig":
        self._client_id = client_id
        return self

    @property
    def client_secret(self) -> str:
        return self._client_secret

    def set_client_secret(self, client_secret: str) -> "EndpointConfig":
        self._client_secret = client_secret
        return self

    @property
    def return_url(self) -> Optional[str]:
        """Callback URL, must match the one registered on the SteemConnect dashboard."""
        return self._return_url

    def set_return_url(self, return_url: str) -> "EndpointConfig":
        self._return_url = return_url
        return self

    @property
    def scopes(self) -> List[str]:
        return list(self._scopes)

    def set_scopes(self, scopes: Optional[List[str]] = None) -> "EndpointConfig":
        self._scopes = list(scopes or [])
        return self

    @property
    def base_url(self) -> str:
        return self._base_url

    def set_base_url(self, base_url: str) -> "EndpointConfig":
        self._base_url = base_url
        return self

    # ------------------ Endpoints ------------------
    # Overrides are only needed when running against a custom SteemConnect install.

    @property
    def endpoints(self) -> dict:
        return dict(self._endpoints)

    @property
    def authorization_endpoint(self) -> str:
        return self._get_endpoint("authorization")

    def set_authorization_endpoint(self, uri: str) -> "EndpointConfig":
        return self._set_endpoint("authorization", uri)

    @property
    def access_token_endpoint(self) -> str:
        return self._get_endpoint("access_token")

    def set_access_token_endpoint(self, uri: str) -> "EndpointConfig":
        return self._set_endpoint("access_token", uri)

    @property
    def revoke_endpoint(self) -> str:
        return self._get_endpoint("revoke")

    def set_revoke_endpoint(self, uri: str) -> "EndpointConfig":
        return self._set_endpoint("revoke", uri)

    @property
    def account_endpoint(self) -> str:
        return self._get_endpoint("account")

    def set_account_endpoint(self, uri: str) -> "EndpointConfig":
        return self._set_endpoint("account", uri)

    def build_url(self, endpoint: str = "") -> str:
        """
        Join the base URL with an endpoint.

        ``endpoint`` is either one of the endpoint names (``authorization``,
        ``access_token``, ``revoke``, ``account``) or a literal path, which is
        used as is.
        """
        endpoint = endpoint or ""
        if endpoint in self._endpoints:
            endpoint = self._get_endpoint(endpoint)
        return self._base_url.strip("/") + "/" + endpoint.strip("/")

    def _get_endpoint(self, key: str) -> str:
        return self._endpoints.get(key, "")

    def _set_endpoint(self, key: str, uri: str) -> "EndpointConfig":
        self._endpoints[key] = uri
        return self

    def __repr__(self):
        return f"EndpointConfig(client_id={self._client_id!r}, base_url={self._base_url!r})"
