# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

from __future__ import annotations

from typing import Any, Dict, Mapping, Optional, Sequence, Union, TYPE_CHECKING
from urllib.parse import quote, urlsplit, urlunsplit

import requests

from .core._auth import _TokenManager
from .core._error_codes import CONTRACT_DISCONNECT_API_KEY, CONTRACT_LAYOUT_REQUIRED
from .core.config import ApiKeyAuth, AuthMode, ClientOptions, FileMakerConfig
from .core.errors import ContractViolationError, LayoutRequiredError
from .data._dataapi import _DataApiClient
from .models.responses import (
    CreateResponse,
    DeleteResponse,
    GetResponse,
    GetResponseOne,
    MetadataResponse,
    Query,
    UpdateResponse,
)
from .operations.layouts import LayoutOperations
from .operations.query import QueryOperations
from .operations.records import RecordId, RecordOperations

if TYPE_CHECKING:
    import pandas as pd


def _build_base_url(options: ClientOptions, config: FileMakerConfig) -> str:
    url = f"{options.server}/fmi/data/{config.api_version}/databases/{quote(options.db, safe='')}"
    auth = options.auth
    if isinstance(auth, ApiKeyAuth):
        port = auth.otto_port if auth.otto_port is not None else config.default_otto_port
        parts = urlsplit(url)
        host = parts.hostname or ""
        if ":" in host:
            host = f"[{host}]"
        url = urlunsplit(parts._replace(netloc=f"{host}:{port}"))
    return url


class FileMakerClient:
    """
    High-level client for the FileMaker Data API.

    The client validates its construction input, owns the session token and
    delegates HTTP calls to an internal
    :class:`~fmdata.data._dataapi._DataApiClient`.

    Two authentication modes are supported and exactly one is active:

    - Otto API key: ``auth={"apiKey": "KEY_...", "ottoPort": 3030}``. The key is
      sent as the bearer token and no Data API session is opened.
    - FileMaker account: ``auth={"username": "admin", "password": "..."}``. A
      session token is obtained on first use, cached, and refreshed once if the
      server rejects it.

    Operations are grouped in namespaces and also available as flat methods:

    - ``client.records``: list, create, get, update, delete
    - ``client.query``: find, find_one, find_first
    - ``client.layouts``: metadata

    :param server: Server root URL, e.g. ``"https://fm.example.com"``.
    :type server: :class:`str`
    :param db: Database (file) name.
    :type db: :class:`str`
    :param auth: Authentication mode, as a mapping or an auth model.
    :type auth: dict | ~fmdata.core.config.ApiKeyAuth | ~fmdata.core.config.UserPasswordAuth
    :param layout: Default layout for operations that are not given one.
    :type layout: :class:`str` | None
    :param config: Optional transport configuration.
    :type config: ~fmdata.core.config.FileMakerConfig | None

    :raises ~fmdata.core.errors.ConfigurationError: If the input fails validation.

    Example::

        with FileMakerClient("https://fm.example.com", "Contacts",
                             {"username": "api", "password": "secret"},
                             layout="Customers") as client:
            created = client.create({"Name": "Contoso"})
            record = client.get(created["recordId"])
            client.disconnect()
    """

    def __init__(
        self,
        server: str,
        db: str,
        auth: Union[AuthMode, Mapping[str, Any]],
        layout: Optional[str] = None,
        config: Optional[FileMakerConfig] = None,
    ) -> None:
        self._options = ClientOptions.from_input({"server": server, "db": db, "auth": auth, "layout": layout})
        self._config = config or FileMakerConfig.from_env()
        self._base_url = _build_base_url(self._options, self._config)
        self.auth = _TokenManager(self._options.auth, f"{self._base_url}/sessions")
        self._dataapi: Optional[_DataApiClient] = None
        self._session: Optional[requests.Session] = None
        self._owns_session: bool = False

        self.records = RecordOperations(self)
        self.query = QueryOperations(self)
        self.layouts = LayoutOperations(self)

    @classmethod
    def from_options(
        cls, options: Union[ClientOptions, Mapping[str, Any]], config: Optional[FileMakerConfig] = None
    ) -> "FileMakerClient":
        """Build a client from a ``{server, db, auth, layout}`` mapping or a :class:`ClientOptions`."""
        opts = ClientOptions.from_input(options)
        return cls(opts.server, opts.db, opts.auth, layout=opts.layout, config=config)

    @property
    def base_url(self) -> str:
        """Database URL all Data API paths are appended to."""
        return self._base_url

    @property
    def layout(self) -> Optional[str]:
        """The default layout, if one was configured."""
        return self._options.layout

    def __enter__(self) -> "FileMakerClient":
        """
        Enter the context manager.

        Creates an HTTP session so all operations within the context reuse
        connections.
        """
        if self._session is None:
            self._session = requests.Session()
            self._owns_session = True
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def close(self) -> None:
        """
        Release HTTP resources. Safe to call multiple times.

        This does not end the Data API session on the server; call
        :meth:`disconnect` for that.
        """
        if self._dataapi is not None:
            self._dataapi.close()
            self._dataapi = None
        if self._session is not None and self._owns_session:
            self._session.close()
            self._session = None
            self._owns_session = False

    def _get_dataapi(self) -> _DataApiClient:
        """
        Get or create the internal Data API client instance.

        :return: The lazily-initialized low-level client used to perform HTTP requests.
        :rtype: ~fmdata.data._dataapi._DataApiClient
        """
        if self._dataapi is None:
            self._dataapi = _DataApiClient(
                self.auth,
                self._base_url,
                self._config,
                session=self._session,
            )
        return self._dataapi

    def _resolve_layout(self, layout: Optional[str]) -> str:
        resolved = layout or self._options.layout
        if not resolved:
            raise LayoutRequiredError(
                "A layout is required: pass layout=... or configure a default layout on the client.",
                subcode=CONTRACT_LAYOUT_REQUIRED,
            )
        return resolved

    # ---------------- Records ----------------
    def list(self, layout: Optional[str] = None, **params: Any) -> GetResponse:
        """List records from a layout. See :meth:`RecordOperations.list`."""
        return self.records.list(layout, **params)

    def create(self, field_data: Dict[str, Any], layout: Optional[str] = None, **params: Any) -> CreateResponse:
        """Create a record. See :meth:`RecordOperations.create`."""
        return self.records.create(field_data, layout, **params)

    def get(self, record_id: RecordId, layout: Optional[str] = None, **params: Any) -> GetResponse:
        """Get a record by internal record id. See :meth:`RecordOperations.get`."""
        return self.records.get(record_id, layout, **params)

    def update(
        self, record_id: RecordId, field_data: Dict[str, Any], layout: Optional[str] = None, **params: Any
    ) -> UpdateResponse:
        """Update a record by internal record id. See :meth:`RecordOperations.update`."""
        return self.records.update(record_id, field_data, layout, **params)

    def delete(self, record_id: RecordId, layout: Optional[str] = None, **params: Any) -> DeleteResponse:
        """Delete a record by internal record id. See :meth:`RecordOperations.delete`."""
        return self.records.delete(record_id, layout, **params)

    # ---------------- Layouts ----------------
    def metadata(self, layout: Optional[str] = None) -> MetadataResponse:
        """Get layout metadata. See :meth:`LayoutOperations.metadata`."""
        return self.layouts.metadata(layout)

    # ---------------- Find ----------------
    def find(
        self,
        query: Union[Query, Sequence[Query]],
        layout: Optional[str] = None,
        *,
        ignore_empty_result: bool = False,
        **params: Any,
    ) -> GetResponse:
        """Find records. See :meth:`QueryOperations.find`."""
        return self.query.find(query, layout, ignore_empty_result=ignore_empty_result, **params)

    def find_one(
        self,
        query: Union[Query, Sequence[Query]],
        layout: Optional[str] = None,
        *,
        ignore_empty_result: bool = False,
        **params: Any,
    ) -> GetResponseOne:
        """Find exactly one record. See :meth:`QueryOperations.find_one`."""
        return self.query.find_one(query, layout, ignore_empty_result=ignore_empty_result, **params)

    def find_first(
        self,
        query: Union[Query, Sequence[Query]],
        layout: Optional[str] = None,
        *,
        ignore_empty_result: bool = False,
        **params: Any,
    ) -> GetResponseOne:
        """Find records, keeping only the first. See :meth:`QueryOperations.find_first`."""
        return self.query.find_first(query, layout, ignore_empty_result=ignore_empty_result, **params)

    # ---------------- DataFrame ----------------
    def get_dataframe(
        self,
        layout: Optional[str] = None,
        query: Optional[Union[Query, Sequence[Query]]] = None,
        **params: Any,
    ) -> "pd.DataFrame":
        """
        Fetch records as a pandas DataFrame, one column per field.

        Runs a find when ``query`` is given (no matches yields an empty frame),
        otherwise lists the layout. Requires the ``pandas`` extra.

        :param layout: Layout name; defaults to the client's layout.
        :param query: Optional find request(s).
        :param params: Passed to :meth:`find` or :meth:`list`.
        :rtype: pandas.DataFrame
        """
        from .utils._pandas import records_to_dataframe

        if query is not None:
            res = self.find(query, layout, ignore_empty_result=True, **params)
        else:
            res = self.list(layout, **params)
        return records_to_dataframe((res or {}).get("data") or [])

    # ---------------- Sessions ----------------
    def disconnect(self) -> Any:
        """
        End the Data API session on the server and forget the cached token.

        A session is opened first if none exists yet.

        :raises ~fmdata.core.errors.ContractViolationError: When using Otto API-key auth,
            which has no session to end. Raised before any network call.
        :raises ~fmdata.core.errors.FileMakerError: If the server rejects the logout.
        """
        if self.auth.uses_api_key:
            raise ContractViolationError(
                "Cannot disconnect when using Otto API key.",
                subcode=CONTRACT_DISCONNECT_API_KEY,
            )
        return self._get_dataapi()._logout()


__all__ = ["FileMakerClient"]
