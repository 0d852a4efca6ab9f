# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Optional helpers, such as pandas conversion of result sets.
"""

__all__ = []
