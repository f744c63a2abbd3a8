from .config import EndpointConfig
from .errors import ConfigurationError, IdentityProviderError, SteemConnectError
from .provider import IdentityProvider, Provider
from .resource_owner import ResourceOwner

__all__ = [
    "EndpointConfig",
    "Provider",
    "IdentityProvider",
    "ResourceOwner",
    "SteemConnectError",
    "ConfigurationError",
    "IdentityProviderError",
]
