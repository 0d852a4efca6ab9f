# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Low-level FileMaker Data API client: request dispatch, error normalization and
per-endpoint request shaping.
"""

from __future__ import annotations

import json
import logging
import time
from typing import Any, Dict, List, Mapping, Optional, Tuple
from urllib.parse import quote

import requests

from ..core._auth import _TokenManager
from ..core._error_codes import DEFAULT_ERROR_CODE, INVALID_TOKEN, _http_subcode
from ..core._http import _HttpClient
from ..core.config import FileMakerConfig
from ..core.errors import FileMakerError

logger = logging.getLogger(__name__)


def _serialize_query_value(value: Any) -> str:
    """Render one query parameter value the way the Data API expects it."""
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (list, tuple, dict)):
        return json.dumps(list(value) if isinstance(value, tuple) else value, separators=(",", ":"))
    return str(value)


def _serialize_query(query: Optional[Mapping[str, Any]]) -> Optional[Dict[str, str]]:
    if not query:
        return None
    return {k: _serialize_query_value(v) for k, v in query.items() if v is not None}


def _parse_body(r: requests.Response) -> Any:
    """Parse a response body as JSON; an empty or invalid body becomes ``{}``."""
    try:
        return r.json()
    except ValueError:
        return {}


def _first_message(data: Any) -> Optional[Dict[str, Any]]:
    if not isinstance(data, dict):
        return None
    messages = data.get("messages")
    if isinstance(messages, list) and messages and isinstance(messages[0], dict):
        return messages[0]
    return None


def _is_success(status: int) -> bool:
    return 200 <= status < 300


def _is_invalid_token(data: Any) -> bool:
    first = _first_message(data)
    return first is not None and str(first.get("code")) == INVALID_TOKEN


def _layout_path(layout: str) -> str:
    return f"/layouts/{quote(layout, safe='')}"


def _record_path(layout: str, record_id: Any) -> str:
    return f"{_layout_path(layout)}/records/{quote(str(record_id), safe='')}"


def _shape_list_params(params: Mapping[str, Any]) -> Dict[str, Any]:
    """Rename ``limit``/``offset``/``sort`` to their underscored query names.

    Only keys that are present (and not ``None``) are renamed; ``sort`` is
    wrapped in a list when a single sort spec is given.
    """
    shaped = dict(params)
    if shaped.get("limit") is not None:
        shaped["_limit"] = shaped.pop("limit")
    if shaped.get("offset") is not None:
        shaped["_offset"] = shaped.pop("offset")
    if shaped.get("sort") is not None:
        sort = shaped.pop("sort")
        shaped["_sort"] = list(sort) if isinstance(sort, (list, tuple)) else [sort]
    return shaped


class _DataApiClient:
    """FileMaker Data API client: record CRUD, find, layout metadata and session teardown."""

    def __init__(
        self,
        auth: _TokenManager,
        base_url: str,
        config: Optional[FileMakerConfig] = None,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.auth = auth
        self.base_url = (base_url or "").rstrip("/")
        if not self.base_url:
            raise ValueError("base_url is required.")
        self.config = config or FileMakerConfig.from_env()
        self._http = _HttpClient(
            timeout=self.config.http_timeout,
            session=session,
        )

    def close(self) -> None:
        self._http.close()

    @staticmethod
    def _headers(token: str) -> Dict[str, str]:
        return {
            "Authorization": f"Bearer {token}",
            "Content-Type": "application/json",
        }

    def _send(
        self,
        method: str,
        url: str,
        *,
        params: Optional[Dict[str, str]] = None,
        body: Optional[Any] = None,
        stale: Optional[str] = None,
    ) -> Tuple[requests.Response, Any, str]:
        token = self.auth.get_token(self._http, force_refresh=stale is not None, stale=stale)
        kwargs: Dict[str, Any] = {"headers": self._headers(token)}
        if params:
            kwargs["params"] = params
        if body is not None:
            kwargs["data"] = json.dumps(body)
        start = time.perf_counter()
        r = self._http._request(method, url, **kwargs)
        elapsed_ms = (time.perf_counter() - start) * 1000
        level = logging.DEBUG if _is_success(r.status_code) else logging.WARNING
        logger.log(level, "%s %s %s %.1fms", method.upper(), url, r.status_code, elapsed_ms)
        return r, _parse_body(r), token

    def _needs_refresh(self, r: requests.Response, data: Any) -> bool:
        if self.auth.uses_api_key:
            return False
        return r.status_code == 401 or _is_invalid_token(data)

    @staticmethod
    def _raise_for_response(r: requests.Response, data: Any) -> None:
        status = r.status_code
        if _is_success(status):
            return
        first = _first_message(data)
        code = str(first.get("code", DEFAULT_ERROR_CODE)) if first is not None else DEFAULT_ERROR_CODE
        raise FileMakerError(
            code,
            f"FileMaker Data API failed with ({status}): {json.dumps(data, indent=2)}",
            status_code=status,
            subcode=_http_subcode(status),
            details={"body": data},
        )

    def _request(
        self,
        method: str,
        path: str,
        *,
        query: Optional[Mapping[str, Any]] = None,
        body: Optional[Any] = None,
    ) -> Any:
        """
        Dispatch one logical request and return the ``response`` payload.

        An expired or invalid session token (HTTP 401 or FileMaker code 952) is
        refreshed once and the request repeated.

        :raises ~fmdata.core.errors.FileMakerError: On any non-2xx response.
        """
        url = f"{self.base_url}{path}"
        params = _serialize_query(query)
        r, data, token = self._send(method, url, params=params, body=body)
        if not _is_success(r.status_code) and self._needs_refresh(r, data):
            logger.info("Data API session token rejected; logging in again")
            r, data, _ = self._send(method, url, params=params, body=body, stale=token)
        self._raise_for_response(r, data)
        if isinstance(data, dict):
            return data.get("response")
        return None

    # ----------------------------- Records ------------------------------
    def _list(self, layout: str, params: Mapping[str, Any]) -> Dict[str, Any]:
        return self._request("get", f"{_layout_path(layout)}/records", query=_shape_list_params(params))

    def _create(self, layout: str, field_data: Mapping[str, Any], params: Mapping[str, Any]) -> Dict[str, Any]:
        body = {"fieldData": dict(field_data), **params}
        return self._request("post", f"{_layout_path(layout)}/records", body=body)

    def _get(self, layout: str, record_id: Any, params: Mapping[str, Any]) -> Dict[str, Any]:
        return self._request("get", _record_path(layout, record_id), query=params)

    def _update(
        self, layout: str, record_id: Any, field_data: Mapping[str, Any], params: Mapping[str, Any]
    ) -> Dict[str, Any]:
        body = {"fieldData": dict(field_data), **params}
        return self._request("patch", _record_path(layout, record_id), body=body)

    def _delete(self, layout: str, record_id: Any, params: Mapping[str, Any]) -> Dict[str, Any]:
        return self._request("delete", _record_path(layout, record_id), query=params)

    # ------------------------------ Find --------------------------------
    def _find(self, layout: str, query: List[Dict[str, Any]], params: Mapping[str, Any]) -> Dict[str, Any]:
        body = {"query": query, **params}
        return self._request("post", f"{_layout_path(layout)}/_find", body=body)

    # ----------------------------- Layouts ------------------------------
    def _metadata(self, layout: str) -> Dict[str, Any]:
        return self._request("get", _layout_path(layout))

    # ----------------------------- Sessions -----------------------------
    def _logout(self) -> Any:
        """End the current Data API session, logging in first if none is open."""
        token = self.auth.get_token(self._http)
        url = f"{self.auth.sessions_url}/{quote(token, safe='')}"
        r = self._http._request("delete", url, headers=self._headers(token))
        data = _parse_body(r)
        if _is_invalid_token(data):
            # Session already gone server-side
            self.auth.clear()
        self._raise_for_response(r, data)
        self.auth.clear()
        logger.debug("Closed Data API session")
        return data.get("response") if isinstance(data, dict) else None


__all__ = ["_DataApiClient"]
