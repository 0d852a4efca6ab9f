# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""Find operations namespace."""

from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional, Sequence, Union, TYPE_CHECKING

from ..core._error_codes import CONTRACT_RECORD_COUNT, NO_RECORDS_MATCH
from ..core.errors import FileMakerError, RecordCountError
from ..models.responses import GetResponse, GetResponseOne, Query

if TYPE_CHECKING:
    from ..client import FileMakerClient


def _as_query_list(query: Union[Query, Sequence[Query]]) -> List[Dict[str, Any]]:
    if isinstance(query, Mapping):
        return [dict(query)]
    return [dict(q) for q in query]


class QueryOperations:
    """
    Find operations.

    Accessed via ``client.query``. A query is a dict of field criteria, or a
    list of them; FileMaker combines multiple requests as an OR search unless a
    request carries ``"omit": "true"``.

    Example::

        result = client.query.find({"City": "Paris"}, layout="Customers", limit=10)
        for record in result["data"]:
            print(record["fieldData"]["Name"])

        # No matches resolves to an empty result instead of an error
        result = client.query.find({"City": "Atlantis"}, ignore_empty_result=True)

        only = client.query.find_one({"Email": "jane@example.com"})
        print(only["data"]["recordId"])
    """

    def __init__(self, client: "FileMakerClient") -> None:
        self._client = client

    def find(
        self,
        query: Union[Query, Sequence[Query]],
        layout: Optional[str] = None,
        *,
        ignore_empty_result: bool = False,
        **params: Any,
    ) -> GetResponse:
        """
        Find records matching one or more query requests.

        :param query: A single find request dict or a list of them.
        :type query: dict or list[dict]
        :param layout: Layout name; defaults to the client's layout.
        :type layout: str or None
        :param ignore_empty_result: When True, "no records match" (FileMaker code 401)
            returns ``{"data": []}`` instead of raising.
        :type ignore_empty_result: bool
        :param params: Extra body keys such as ``limit``, ``offset``, ``sort`` or ``portal``.
        :return: ``{"data": [...], "dataInfo": {...}}``.
        :rtype: GetResponse

        :raises ~fmdata.core.errors.FileMakerError: If the request fails, including
            code ``"401"`` when nothing matches and ``ignore_empty_result`` is False.
        """
        resolved = self._client._resolve_layout(layout)
        queries = _as_query_list(query)
        try:
            return self._client._get_dataapi()._find(resolved, queries, params)
        except FileMakerError as exc:
            if ignore_empty_result and exc.code == NO_RECORDS_MATCH:
                return {"data": []}
            raise

    def find_one(
        self,
        query: Union[Query, Sequence[Query]],
        layout: Optional[str] = None,
        *,
        ignore_empty_result: bool = False,
        **params: Any,
    ) -> GetResponseOne:
        """
        Find exactly one record.

        :return: The find response with ``data`` replaced by the single record.
        :rtype: GetResponseOne
        :raises ~fmdata.core.errors.RecordCountError: If zero or more than one record is found.
        """
        res = self.find(query, layout, ignore_empty_result=ignore_empty_result, **params) or {}
        data = res.get("data") or []
        if len(data) != 1:
            raise RecordCountError(
                f"{len(data)} records found; expecting exactly 1",
                subcode=CONTRACT_RECORD_COUNT,
                details={"count": len(data)},
            )
        return {**res, "data": data[0]}

    def find_first(
        self,
        query: Union[Query, Sequence[Query]],
        layout: Optional[str] = None,
        *,
        ignore_empty_result: bool = False,
        **params: Any,
    ) -> GetResponseOne:
        """Find records and return only the first one (``data`` is ``None`` when empty)."""
        res = self.find(query, layout, ignore_empty_result=ignore_empty_result, **params) or {}
        data = res.get("data") or []
        return {**res, "data": data[0] if data else None}


__all__ = ["QueryOperations"]
