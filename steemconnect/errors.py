class SteemConnectError(Exception):
    """Base class for errors raised by this package."""


class ConfigurationError(SteemConnectError):
    """Required client settings are missing."""


class IdentityProviderError(SteemConnectError):
    """
    SteemConnect answered with an error body.

    :param message: value of the ``error`` field
    :param code: numeric code taken from the response, ``0`` when absent
    :param response_body: the parsed body as returned by SteemConnect
    """

    def __init__(self, message, code: int = 0, response_body=None):
        super().__init__(message)
        self.message = message
        self.code = code
        self.response_body = response_body if response_body is not None else {}

    def __repr__(self):
        return f"IdentityProviderError(message={self.message!r}, code={self.code})"
