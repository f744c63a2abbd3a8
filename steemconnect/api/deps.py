from typing import Optional

from fastapi import Request


def get_return_code(request: Request) -> Optional[str]:
    """Authorization code SteemConnect appended to the return URL, if any."""
    return request.query_params.get("code") or None


def get_return_state(request: Request) -> Optional[str]:
    return request.query_params.get("state") or None
