from typing import Any, Optional


class ResourceOwner:
    """
    Steem account which granted permissions to the application.

    SteemConnect wraps the account under an ``account`` key on ``/api/me``;
    payloads without that envelope are taken as the account itself.
    """

    def __init__(self, account_data: Optional[dict] = None):
        account_data = account_data or {}
        account = account_data.get("account", account_data)
        self._account_data = dict(account) if isinstance(account, dict) else {}

    def get_id(self) -> Optional[str]:
        # The account name (without the @ sign) is the identity on Steem.
        return self._account_data.get("name")

    def get(self, attribute: str, default: Any = None) -> Any:
        return self._account_data.get(attribute, default)

    def to_dict(self) -> dict:
        return dict(self._account_data)

    def __contains__(self, attribute):
        return attribute in self._account_data

    def __repr__(self):
        return f"ResourceOwner(name={self.get_id()!r})"
