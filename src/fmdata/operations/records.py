# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""Record CRUD operations namespace."""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Union, TYPE_CHECKING

from ..models.responses import CreateResponse, DeleteResponse, GetResponse, UpdateResponse

if TYPE_CHECKING:
    from ..client import FileMakerClient

RecordId = Union[int, str]


class RecordOperations:
    """
    Record CRUD operations on a layout.

    Accessed via ``client.records``. Every method takes an optional ``layout``;
    when omitted the client's default layout is used.

    Example::

        created = client.records.create({"Name": "Contoso"}, layout="Customers")
        record = client.records.get(created["recordId"], layout="Customers")
        client.records.update(created["recordId"], {"Name": "Contoso Ltd"}, layout="Customers")
        client.records.delete(created["recordId"], layout="Customers")

        page = client.records.list(layout="Customers", limit=50, sort={"fieldName": "Name"})
    """

    def __init__(self, client: "FileMakerClient") -> None:
        """
        Initialize RecordOperations.

        :param client: Parent FileMakerClient instance.
        :type client: FileMakerClient
        """
        self._client = client

    def list(
        self,
        layout: Optional[str] = None,
        *,
        limit: Optional[int] = None,
        offset: Optional[int] = None,
        sort: Optional[Union[Dict[str, Any], str, List[Any]]] = None,
        **params: Any,
    ) -> GetResponse:
        """
        List records from a layout with no find criteria applied.

        :param layout: Layout name; defaults to the client's layout.
        :type layout: str or None
        :param limit: Maximum number of records to return (sent as ``_limit``).
        :type limit: int or None
        :param offset: 1-based index of the first record (sent as ``_offset``).
        :type offset: int or None
        :param sort: A sort spec or list of sort specs (sent as ``_sort``).
        :param params: Other query parameters passed through, e.g. ``portal``.
        :return: ``{"data": [...], "dataInfo": {...}}``.
        :rtype: GetResponse

        :raises ~fmdata.core.errors.LayoutRequiredError: If no layout can be resolved.
        :raises ~fmdata.core.errors.FileMakerError: If the request fails.
        """
        resolved = self._client._resolve_layout(layout)
        query = dict(params)
        if limit is not None:
            query["limit"] = limit
        if offset is not None:
            query["offset"] = offset
        if sort is not None:
            query["sort"] = sort
        return self._client._get_dataapi()._list(resolved, query)

    def create(self, field_data: Dict[str, Any], layout: Optional[str] = None, **params: Any) -> CreateResponse:
        """
        Create a record.

        :param field_data: Field values of the new record.
        :type field_data: dict
        :param layout: Layout name; defaults to the client's layout.
        :type layout: str or None
        :param params: Extra body keys such as ``portalData`` or ``script``.
        :return: ``{"recordId": ..., "modId": ...}``.
        :rtype: CreateResponse
        """
        resolved = self._client._resolve_layout(layout)
        return self._client._get_dataapi()._create(resolved, field_data, params)

    def get(self, record_id: RecordId, layout: Optional[str] = None, **params: Any) -> GetResponse:
        """
        Get a single record by its internal record id.

        :param record_id: FileMaker internal record id.
        :param layout: Layout name; defaults to the client's layout.
        :param params: Query parameters passed through, e.g. ``portal``.
        :rtype: GetResponse
        """
        resolved = self._client._resolve_layout(layout)
        return self._client._get_dataapi()._get(resolved, record_id, params)

    def update(
        self,
        record_id: RecordId,
        field_data: Dict[str, Any],
        layout: Optional[str] = None,
        **params: Any,
    ) -> UpdateResponse:
        """
        Update a single record by its internal record id.

        :param record_id: FileMaker internal record id.
        :param field_data: Fields to change.
        :param layout: Layout name; defaults to the client's layout.
        :param params: Extra body keys such as ``modId`` or ``portalData``.
        :return: ``{"modId": ...}``.
        :rtype: UpdateResponse
        """
        resolved = self._client._resolve_layout(layout)
        return self._client._get_dataapi()._update(resolved, record_id, field_data, params)

    def delete(self, record_id: RecordId, layout: Optional[str] = None, **params: Any) -> DeleteResponse:
        """Delete a single record by its internal record id."""
        resolved = self._client._resolve_layout(layout)
        return self._client._get_dataapi()._delete(resolved, record_id, params)


__all__ = ["RecordOperations"]
