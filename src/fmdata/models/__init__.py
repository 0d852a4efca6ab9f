# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Type definitions for Data API response payloads.

Import directly from :mod:`fmdata.models.responses`.
"""

__all__ = []
