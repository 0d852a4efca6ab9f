# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Session token management for the FileMaker Data API.

Provides :class:`~fmdata.core._auth._TokenManager`, which owns the access token
used for every Data API call. Under Otto API-key auth the token is the key
itself. Under username/password auth it is a session token obtained by logging
in, cached until it is refreshed or the session is ended.
"""

from __future__ import annotations

import base64
import logging
import threading
from typing import TYPE_CHECKING, Optional

from ._error_codes import AUTH_LOGIN_FAILED, AUTH_TOKEN_MISSING, DEFAULT_ERROR_CODE
from .config import ApiKeyAuth, AuthMode, UserPasswordAuth
from .errors import AuthError

if TYPE_CHECKING:
    from ._http import _HttpClient

logger = logging.getLogger(__name__)

TOKEN_HEADER = "X-FM-Data-Access-Token"


def _basic_credentials(auth: UserPasswordAuth) -> str:
    raw = f"{auth.username}:{auth.password}".encode("utf-8")
    return "Basic " + base64.b64encode(raw).decode("ascii")


class _TokenManager:
    """
    Token cache and login logic for one client.

    Token acquisition is single-flight: concurrent callers that find no cached
    token, or that saw the same token rejected, wait on one login instead of
    each opening a session.

    :param auth: Active authentication mode.
    :type auth: ~fmdata.core.config.ApiKeyAuth | ~fmdata.core.config.UserPasswordAuth
    :param sessions_url: Absolute URL of the ``/sessions`` resource.
    :type sessions_url: :class:`str`
    """

    def __init__(self, auth: AuthMode, sessions_url: str) -> None:
        self._auth = auth
        self.sessions_url = sessions_url
        self._token: Optional[str] = auth.api_key if isinstance(auth, ApiKeyAuth) else None
        self._lock = threading.Lock()

    @property
    def uses_api_key(self) -> bool:
        return isinstance(self._auth, ApiKeyAuth)

    @property
    def token(self) -> Optional[str]:
        """The cached token, or ``None`` if no session is open."""
        return self._token

    def clear(self) -> None:
        """Forget the cached session token. No-op under API-key auth."""
        if isinstance(self._auth, UserPasswordAuth):
            with self._lock:
                self._token = None

    def get_token(
        self, http: "_HttpClient", force_refresh: bool = False, stale: Optional[str] = None
    ) -> str:
        """
        Return a token usable as a bearer credential.

        :param http: Transport used for the login call.
        :type http: ~fmdata.core._http._HttpClient
        :param force_refresh: Discard any cached session token and log in again.
        :type force_refresh: :class:`bool`
        :param stale: The token the server rejected. With ``force_refresh``, the cache is
            only discarded while it still holds this token, so a login done by another
            caller in the meantime is reused.
        :type stale: :class:`str` | None
        :return: Access token.
        :rtype: :class:`str`
        :raises ~fmdata.core.errors.AuthError: If the login call fails or returns no token.
        """
        auth = self._auth
        if isinstance(auth, ApiKeyAuth):
            return auth.api_key

        with self._lock:
            if force_refresh and (stale is None or self._token == stale):
                self._token = None
            if self._token is None:
                self._token = self._login(http, auth)
            return self._token

    def _login(self, http: "_HttpClient", auth: UserPasswordAuth) -> str:
        logger.debug("Opening Data API session as %s", auth.username)
        r = http._request(
            "post",
            self.sessions_url,
            headers={
                "Content-Type": "application/json",
                "Authorization": _basic_credentials(auth),
            },
            json={},
        )
        status = r.status_code
        if not (200 <= status < 300):
            try:
                body = r.json()
            except ValueError:
                body = None
            messages = body.get("messages") if isinstance(body, dict) else None
            if isinstance(messages, list) and messages and isinstance(messages[0], dict):
                first = messages[0]
                raise AuthError(
                    str(first.get("code", DEFAULT_ERROR_CODE)),
                    str(first.get("message", "")),
                    status_code=status,
                    subcode=AUTH_LOGIN_FAILED,
                    details={"body": body},
                )
            raise AuthError(
                DEFAULT_ERROR_CODE,
                f"FileMaker Data API login failed with ({status}): {getattr(r, 'text', '')}",
                status_code=status,
                subcode=AUTH_LOGIN_FAILED,
            )

        token = r.headers.get(TOKEN_HEADER)
        if not token:
            raise AuthError(
                DEFAULT_ERROR_CODE,
                "Could not get token",
                status_code=status,
                subcode=AUTH_TOKEN_MISSING,
            )
        return token


__all__ = ["_TokenManager", "TOKEN_HEADER"]
