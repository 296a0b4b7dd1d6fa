"""
Credential gate for mutating catalog routes.

The application stores a credential check on ``app.state`` and the
``require_api_key`` dependency consults it before any create, update
or delete runs. The bundled :class:`SharedSecretCheck` compares the
``x-api-key`` header with one static value, which is a convenience
switch rather than real authentication. Any callable taking the
presented header value and returning a bool can replace it.
"""

from __future__ import annotations

import hmac
from typing import Callable, Optional

from fastapi import Header, Request

from ..errors import AuthError

API_KEY_HEADER = "x-api-key"

CredentialCheck = Callable[[Optional[str]], bool]


class SharedSecretCheck:
    """Accept requests whose header value equals ``secret``."""

    def __init__(self, secret: str):
        if not secret:
            raise ValueError("A shared secret must not be empty")
        self._secret = secret

    def __call__(self, presented: Optional[str]) -> bool:
        if presented is None:
            return False
        return hmac.compare_digest(presented.encode("utf-8"), self._secret.encode("utf-8"))


# FastAPI parses the JSON body before it resolves route dependencies, so
# a request with an undecodable body gets 400 even without a valid key.
# Nothing is written in that case; the service never runs.
def require_api_key(
    request: Request,
    x_api_key: Optional[str] = Header(default=None),
) -> None:
    check: Optional[CredentialCheck] = getattr(request.app.state, "credential_check", None)
    if check is None:
        return
    if not check(x_api_key):
        raise AuthError(f"Forbidden: You must provide a valid {API_KEY_HEADER} header.")
