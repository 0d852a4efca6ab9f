# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Data access layer: request dispatch and per-endpoint request shaping.
"""

__all__ = []
