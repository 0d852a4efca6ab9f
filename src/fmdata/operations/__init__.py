# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Operation namespace classes for the FileMaker Data API client.

- RecordOperations: record CRUD (``client.records``)
- QueryOperations: find operations (``client.query``)
- LayoutOperations: layout metadata (``client.layouts``)
"""

__all__ = []
