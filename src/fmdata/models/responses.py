# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Shapes of the ``response`` payloads returned by the FileMaker Data API.

Records are plain dictionaries; these types only document which keys the
server sends so that editors and type checkers can follow them.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional, TypedDict

FieldData = Dict[str, Any]
PortalData = Dict[str, List[Dict[str, Any]]]
Query = Dict[str, Any]


class RecordData(TypedDict, total=False):
    """One record as returned by get/list/find."""

    fieldData: FieldData
    portalData: PortalData
    recordId: str
    modId: str
    portalDataInfo: List[Dict[str, Any]]


class DataInfo(TypedDict, total=False):
    database: str
    layout: str
    table: str
    totalRecordCount: int
    foundCount: int
    returnedCount: int


class GetResponse(TypedDict, total=False):
    """Payload of list/get/find: a list of records plus result-set information."""

    data: List[RecordData]
    dataInfo: DataInfo


class GetResponseOne(TypedDict, total=False):
    """Payload of find_one/find_first: ``data`` holds a single record (or ``None``)."""

    data: Optional[RecordData]
    dataInfo: DataInfo


class CreateResponse(TypedDict, total=False):
    recordId: str
    modId: str


class UpdateResponse(TypedDict, total=False):
    modId: str


DeleteResponse = Dict[str, Any]


class MetadataResponse(TypedDict, total=False):
    fieldMetaData: List[Dict[str, Any]]
    portalMetaData: Dict[str, List[Dict[str, Any]]]
    valueLists: List[Dict[str, Any]]


__all__ = [
    "FieldData",
    "PortalData",
    "Query",
    "RecordData",
    "DataInfo",
    "GetResponse",
    "GetResponseOne",
    "CreateResponse",
    "UpdateResponse",
    "DeleteResponse",
    "MetadataResponse",
]
