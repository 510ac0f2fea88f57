"""Shared-secret guard for internal routes.

Every internal router depends on ``require_internal_key``. The secret comes
from the ``INTERNAL_API_KEY`` environment variable; when it is unset, all
internal calls are rejected.
"""

import hmac
import os

from fastapi import Header

from shared.exceptions import UnauthorizedInternalError

INTERNAL_KEY_HEADER = "x-internal-key"


def internal_api_key() -> str | None:
    return os.environ.get("INTERNAL_API_KEY") or None


def require_internal_key(x_internal_key: str = Header(default="")) -> None:
    expected = internal_api_key()
    if expected is None or not hmac.compare_digest(x_internal_key.encode(), expected.encode()):
        raise UnauthorizedInternalError()
