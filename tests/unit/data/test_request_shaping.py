# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

import json

import pytest

from fmdata.core.errors import FileMakerError
from fmdata.data._dataapi import _shape_list_params
from tests.unit.test_helpers import BASE_URL, api_key_auth, fm_error, login_response, make_dataapi, ok


def _client(responses):
    return make_dataapi(responses, auth=api_key_auth())


def test_list_params_renamed():
    shaped = _shape_list_params({"limit": 10, "offset": 5, "sort": "Name"})
    assert shaped == {"_limit": 10, "_offset": 5, "_sort": ["Name"]}


def test_list_params_absent_keys_not_injected():
    assert _shape_list_params({}) == {}
    assert _shape_list_params({"portal": ["Orders"]}) == {"portal": ["Orders"]}
    assert _shape_list_params({"sort": [{"fieldName": "Name"}]}) == {"_sort": [{"fieldName": "Name"}]}


def test_list_request_query_strings():
    c, http = _client([ok({"data": []})])
    c._list("Customers", {"limit": 10, "offset": 5, "sort": "Name"})
    method, url, kwargs = http.calls[0]
    assert method == "get"
    assert url == f"{BASE_URL}/layouts/Customers/records"
    assert kwargs["params"] == {"_limit": "10", "_offset": "5", "_sort": '["Name"]'}


def test_create_body():
    c, http = _client([ok({"recordId": "7", "modId": "0"})])
    result = c._create("Customers", {"Name": "A"}, {"script": "Audit"})
    method, url, kwargs = http.calls[0]
    assert method == "post"
    assert url == f"{BASE_URL}/layouts/Customers/records"
    assert json.loads(kwargs["data"]) == {"fieldData": {"Name": "A"}, "script": "Audit"}
    assert result == {"recordId": "7", "modId": "0"}


def test_get_passes_params_through():
    c, http = _client([ok({"data": []})])
    c._get("Customers", 12, {"portal": ["Orders"], "layout.response": "Detail"})
    method, url, kwargs = http.calls[0]
    assert method == "get"
    assert url == f"{BASE_URL}/layouts/Customers/records/12"
    assert kwargs["params"] == {"portal": '["Orders"]', "layout.response": "Detail"}


def test_update_uses_patch():
    c, http = _client([ok({"modId": "3"})])
    c._update("Customers", "12", {"Name": "B"}, {"modId": "2"})
    method, url, kwargs = http.calls[0]
    assert method == "patch"
    assert url == f"{BASE_URL}/layouts/Customers/records/12"
    assert json.loads(kwargs["data"]) == {"fieldData": {"Name": "B"}, "modId": "2"}


def test_delete_uses_query():
    c, http = _client([ok({})])
    c._delete("Customers", 12, {"script": "Cleanup"})
    method, url, kwargs = http.calls[0]
    assert method == "delete"
    assert url == f"{BASE_URL}/layouts/Customers/records/12"
    assert kwargs["params"] == {"script": "Cleanup"}
    assert "data" not in kwargs


def test_find_body():
    c, http = _client([ok({"data": []})])
    c._find("Customers", [{"City": "Paris"}], {"limit": 5})
    method, url, kwargs = http.calls[0]
    assert method == "post"
    assert url == f"{BASE_URL}/layouts/Customers/_find"
    assert json.loads(kwargs["data"]) == {"query": [{"City": "Paris"}], "limit": 5}


def test_metadata_path():
    c, http = _client([ok({"fieldMetaData": []})])
    assert c._metadata("Customers") == {"fieldMetaData": []}
    method, url, kwargs = http.calls[0]
    assert method == "get"
    assert url == f"{BASE_URL}/layouts/Customers"
    assert "params" not in kwargs and "data" not in kwargs


def test_layout_names_are_quoted():
    c, http = _client([ok({})])
    c._metadata("Sales Report/2024")
    assert http.calls[0][1] == f"{BASE_URL}/layouts/Sales%20Report%2F2024"


def test_logout_deletes_session_and_clears_token():
    c, http = make_dataapi([login_response("tok-1"), ok({})])
    c._logout()
    assert [call[0] for call in http.calls] == ["post", "delete"]
    method, url, kwargs = http.calls[1]
    assert url == f"{BASE_URL}/sessions/tok-1"
    assert kwargs["headers"]["Authorization"] == "Bearer tok-1"
    assert c.auth.token is None


def test_logout_with_invalid_token_still_clears_token():
    c, http = make_dataapi([login_response("tok-1"), fm_error(401, "952", "Invalid FileMaker Data API token (*)")])

    with pytest.raises(FileMakerError) as ei:
        c._logout()
    assert ei.value.code == "952"
    assert c.auth.token is None


def test_logout_other_failure_keeps_token():
    c, http = make_dataapi([login_response("tok-1"), fm_error(500, "500", "Unknown error")])

    with pytest.raises(FileMakerError):
        c._logout()
    assert c.auth.token == "tok-1"


def test_create_then_get_round_trip(sample_field_data, sample_record):
    c, http = _client([ok({"recordId": "42", "modId": "0"}), ok({"data": [sample_record]})])

    created = c._create("Customers", sample_field_data, {})
    fetched = c._get("Customers", created["recordId"], {})

    assert json.loads(http.calls[0][2]["data"]) == {"fieldData": sample_field_data}
    assert http.calls[1][1] == f"{BASE_URL}/layouts/Customers/records/42"
    assert fetched["data"][0]["fieldData"] == sample_field_data
