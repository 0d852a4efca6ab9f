# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Client configuration: validated connection options and HTTP tuning settings.

:class:`ClientOptions` is the validation boundary for everything a caller
passes when constructing a client (server, database, authentication and the
default layout). :class:`FileMakerConfig` holds transport settings that have
sensible defaults and rarely need changing.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Literal, Mapping, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError as PydanticValidationError, field_validator

from ._error_codes import CONFIG_INVALID_OPTIONS
from .errors import ConfigurationError


@dataclass(frozen=True)
class FileMakerConfig:
    """
    Transport settings for FileMaker Data API client operations.

    :param api_version: Data API version path segment (default: ``"vLatest"``).
    :type api_version: str
    :param default_otto_port: Port used with Otto API keys when none is given (default: 3030).
    :type default_otto_port: int
    :param http_timeout: Request timeout in seconds (default: method-dependent).
    :type http_timeout: float or None
    """

    api_version: str = "vLatest"
    default_otto_port: int = 3030

    http_timeout: Optional[float] = None

    @classmethod
    def from_env(cls) -> "FileMakerConfig":
        """
        Create a configuration instance with default settings.

        :return: Configuration instance with default values.
        :rtype: ~fmdata.core.config.FileMakerConfig
        """
        return cls(
            api_version="vLatest",
            default_otto_port=3030,
            http_timeout=None,  # Will use method-dependent defaults in _HttpClient
        )


class ApiKeyAuth(BaseModel):
    """Otto proxy API key authentication. The key is used as the bearer token as-is."""

    model_config = ConfigDict(extra="forbid", frozen=True, populate_by_name=True)

    kind: Literal["api_key"] = "api_key"
    api_key: str = Field(alias="apiKey", min_length=1)
    otto_port: Optional[int] = Field(default=None, alias="ottoPort")


class UserPasswordAuth(BaseModel):
    """FileMaker account authentication. A session token is obtained by logging in."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    kind: Literal["credentials"] = "credentials"
    username: str = Field(min_length=1)
    password: str = Field(min_length=1, repr=False)


AuthMode = Union[ApiKeyAuth, UserPasswordAuth]


class ClientOptions(BaseModel):
    """
    Validated construction input for :class:`~fmdata.client.FileMakerClient`.

    :param server: Server root URL, e.g. ``"https://fm.example.com"``. Must start with ``http``.
    :param db: Database (file) name.
    :param auth: Either ``{"apiKey": ..., "ottoPort": ...}`` or ``{"username": ..., "password": ...}``.
    :param layout: Default layout used when an operation is not given one.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    server: str
    db: str = Field(min_length=1)
    auth: AuthMode
    layout: Optional[str] = None

    @field_validator("server")
    @classmethod
    def server_must_include_http(cls, v: str) -> str:
        if not v.startswith("http"):
            raise ValueError("must include http")
        return v.rstrip("/")

    @classmethod
    def from_input(cls, data: Union["ClientOptions", Mapping[str, Any]]) -> "ClientOptions":
        """Validate raw input, raising :class:`ConfigurationError` on any violation."""
        if isinstance(data, cls):
            return data
        try:
            return cls.model_validate(dict(data))
        except PydanticValidationError as exc:
            # Exclude input values; they can hold passwords and API keys
            errors = exc.errors(include_url=False, include_context=False, include_input=False)
            summary = "; ".join(f"{'.'.join(str(p) for p in e['loc'])}: {e['msg']}" for e in errors)
            raise ConfigurationError(
                f"Invalid client options: {summary}",
                subcode=CONFIG_INVALID_OPTIONS,
                details={"errors": errors},
            ) from exc


__all__ = ["FileMakerConfig", "ApiKeyAuth", "UserPasswordAuth", "AuthMode", "ClientOptions"]
