# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Core infrastructure components for the FileMaker Data API client.

This module contains the foundational components including authentication,
configuration, HTTP transport, and error handling.
"""

from .config import ApiKeyAuth, ClientOptions, FileMakerConfig, UserPasswordAuth
from .errors import (
    AuthError,
    ConfigurationError,
    ContractViolationError,
    FileMakerClientError,
    FileMakerError,
    LayoutRequiredError,
    RecordCountError,
)

__all__ = [
    "ApiKeyAuth",
    "ClientOptions",
    "FileMakerConfig",
    "UserPasswordAuth",
    "AuthError",
    "ConfigurationError",
    "ContractViolationError",
    "FileMakerClientError",
    "FileMakerError",
    "LayoutRequiredError",
    "RecordCountError",
]
