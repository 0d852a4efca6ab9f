# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Structured exceptions raised by the FileMaker Data API client.

All errors derive from :class:`FileMakerClientError` so callers can catch the
whole family with one ``except`` clause, while still distinguishing server
failures (:class:`FileMakerError`) from local contract checks
(:class:`ContractViolationError`) and bad construction input
(:class:`ConfigurationError`).
"""

from __future__ import annotations

import datetime as _dt
from typing import Any, Dict, Optional

from ._error_codes import DEFAULT_ERROR_CODE


class FileMakerClientError(Exception):
    """Base structured error for the FileMaker Data API client."""

    def __init__(
        self,
        message: str,
        *,
        code: str,
        subcode: Optional[str] = None,
        status_code: Optional[int] = None,
        details: Optional[Dict[str, Any]] = None,
        source: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code
        self.subcode = subcode
        self.status_code = status_code
        self.details = details or {}
        self.source = source or "client"
        self.timestamp = _dt.datetime.now(_dt.timezone.utc).isoformat()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "message": self.message,
            "code": self.code,
            "subcode": self.subcode,
            "status_code": self.status_code,
            "details": self.details,
            "source": self.source,
            "timestamp": self.timestamp,
        }

    def __repr__(self) -> str:  # pragma: no cover
        return f"{self.__class__.__name__}(code={self.code!r}, subcode={self.subcode!r}, message={self.message!r})"


class ConfigurationError(FileMakerClientError):
    """Raised when client construction input fails validation."""

    def __init__(self, message: str, *, subcode: Optional[str] = None, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, code="configuration_error", subcode=subcode, details=details, source="client")


class FileMakerError(FileMakerClientError):
    """
    A failed FileMaker Data API call.

    ``code`` is the FileMaker message code of the first entry in the response
    ``messages`` array (for example ``"401"`` for "No records match the
    request"), or ``"500"`` when the server did not report one.

    :param code: FileMaker message code or the ``"500"`` sentinel.
    :type code: :class:`str`
    :param message: Human readable description.
    :type message: :class:`str`
    :param status_code: HTTP status of the failed response, if any.
    :type status_code: :class:`int` | None
    """

    def __init__(
        self,
        code: str,
        message: str,
        *,
        status_code: Optional[int] = None,
        subcode: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(
            message,
            code=str(code) if code is not None else DEFAULT_ERROR_CODE,
            subcode=subcode,
            status_code=status_code,
            details=details,
            source="server",
        )


class AuthError(FileMakerError):
    """Raised when a Data API session token cannot be obtained."""


class ContractViolationError(FileMakerClientError):
    """Raised for local precondition failures; never wraps a server response."""

    def __init__(self, message: str, *, subcode: Optional[str] = None, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, code="contract_violation", subcode=subcode, details=details, source="client")


class LayoutRequiredError(ContractViolationError):
    """No layout was passed and the client has no default layout."""


class RecordCountError(ContractViolationError):
    """A find expected exactly one record but the server returned another count."""


__all__ = [
    "FileMakerClientError",
    "ConfigurationError",
    "FileMakerError",
    "AuthError",
    "ContractViolationError",
    "LayoutRequiredError",
    "RecordCountError",
]
