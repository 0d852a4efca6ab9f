# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Python client for the FileMaker Data API.

Example::

    from fmdata import FileMakerClient

    client = FileMakerClient(
        "https://fm.example.com",
        "Contacts",
        {"username": "api", "password": "secret"},
        layout="Customers",
    )
    result = client.find({"City": "Paris"}, ignore_empty_result=True)
"""

from .client import FileMakerClient
from .core.errors import FileMakerError

__all__ = ["FileMakerClient", "FileMakerError"]
