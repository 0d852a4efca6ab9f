# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

import logging
import os
import sys
from pathlib import Path

# Add src to PYTHONPATH for local runs
sys.path.append(str(Path(__file__).resolve().parents[1] / "src"))

from fmdata import FileMakerClient, FileMakerError

logging.basicConfig(level=logging.DEBUG if os.environ.get("FM_DEBUG") else logging.INFO)

server = os.environ.get("FM_SERVER") or input("FileMaker server URL (e.g. https://fm.example.com): ").strip()
db = os.environ.get("FM_DATABASE") or input("Database name: ").strip()
layout = os.environ.get("FM_LAYOUT") or input("Layout name: ").strip()

api_key = os.environ.get("OTTO_API_KEY")
if api_key:
    auth = {"apiKey": api_key}
else:
    auth = {
        "username": os.environ.get("FM_USERNAME") or input("Username: ").strip(),
        "password": os.environ.get("FM_PASSWORD") or input("Password: ").strip(),
    }

with FileMakerClient(server, db, auth, layout=layout) as client:
    meta = client.metadata()
    fields = [f["name"] for f in meta.get("fieldMetaData", [])]
    print({"layout": layout, "fields": fields})

    page = client.list(limit=5)
    for record in page.get("data", []):
        print(record["recordId"], record["fieldData"])

    try:
        first = client.find_first({fields[0]: "*"}, ignore_empty_result=True) if fields else None
        if first and first["data"]:
            print({"first_match": first["data"]["recordId"]})
    except FileMakerError as ex:
        print(f"Find failed: code={ex.code} {ex.message}")

    if not api_key:
        client.disconnect()
