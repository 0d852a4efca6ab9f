# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Single-shot HTTP transport for Data API calls.

Each call is sent exactly once. The only repeat the client ever makes is the
session-token refresh done by the dispatcher, so network errors propagate to
the caller unchanged.
"""

from __future__ import annotations

from typing import Any, Optional

import requests

# Login, find, create, delete and logout can run long scripts server-side.
_SLOW_METHODS = ("post", "delete")
_SLOW_TIMEOUT = 120
_FAST_TIMEOUT = 10


def _default_timeout(method: str) -> int:
    return _SLOW_TIMEOUT if (method or "").lower() in _SLOW_METHODS else _FAST_TIMEOUT


class _HttpClient:
    """
    Thin wrapper over :mod:`requests` applying a timeout to every call.

    :param timeout: Timeout in seconds for every request. If None, POST and DELETE
        get 120 seconds and other methods 10.
    :type timeout: :class:`float` | None
    :param session: Optional session reused for connection pooling.
    :type session: :class:`requests.Session` | None
    """

    def __init__(self, timeout: Optional[float] = None, session: Optional[requests.Session] = None) -> None:
        self.default_timeout: Optional[float] = timeout
        self._session = session

    def _request(self, method: str, url: str, **kwargs: Any) -> requests.Response:
        """
        Send one request and return the response, whatever its status.

        :raises requests.exceptions.RequestException: On connection or timeout failures.
        """
        if "timeout" not in kwargs:
            kwargs["timeout"] = self.default_timeout if self.default_timeout is not None else _default_timeout(method)
        send = self._session.request if self._session is not None else requests.request
        return send(method, url, **kwargs)

    def close(self) -> None:
        """Close the pooled session, if any. Safe to call more than once."""
        if self._session is None:
            return
        session, self._session = self._session, None
        session.close()
