# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Shared pytest fixtures for FileMaker Data API client tests.
"""

import pytest


@pytest.fixture
def sample_field_data():
    """Sample field data for testing."""
    return {"Name": "Contoso", "City": "Paris", "Phone": "555-0100"}


@pytest.fixture
def sample_record(sample_field_data):
    """A record as the Data API returns it in ``response["data"]``."""
    return {
        "fieldData": dict(sample_field_data),
        "portalData": {},
        "recordId": "42",
        "modId": "0",
    }
