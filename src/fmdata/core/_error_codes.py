# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

# FileMaker message codes
DEFAULT_ERROR_CODE = "500"
NO_RECORDS_MATCH = "401"
INVALID_TOKEN = "952"


def _http_subcode(status: int) -> str:
    return f"http_{status}"


# Auth subcodes
AUTH_LOGIN_FAILED = "auth_login_failed"
AUTH_TOKEN_MISSING = "auth_token_missing"

# Contract subcodes
CONTRACT_LAYOUT_REQUIRED = "contract_layout_required"
CONTRACT_RECORD_COUNT = "contract_record_count"
CONTRACT_DISCONNECT_API_KEY = "contract_disconnect_api_key"

# Configuration subcodes
CONFIG_INVALID_OPTIONS = "config_invalid_options"
