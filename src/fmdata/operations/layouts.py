# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""Layout metadata operations namespace."""

from __future__ import annotations

from typing import Optional, TYPE_CHECKING

from ..models.responses import MetadataResponse

if TYPE_CHECKING:
    from ..client import FileMakerClient


class LayoutOperations:
    """
    Layout metadata operations.

    Accessed via ``client.layouts``.

    Example::

        meta = client.layouts.metadata("Customers")
        names = [f["name"] for f in meta["fieldMetaData"]]
    """

    def __init__(self, client: "FileMakerClient") -> None:
        self._client = client

    def metadata(self, layout: Optional[str] = None) -> MetadataResponse:
        """
        Get field, portal and value list metadata for a layout.

        :param layout: Layout name; defaults to the client's layout.
        :type layout: str or None
        :rtype: MetadataResponse
        """
        resolved = self._client._resolve_layout(layout)
        return self._client._get_dataapi()._metadata(resolved)


__all__ = ["LayoutOperations"]
