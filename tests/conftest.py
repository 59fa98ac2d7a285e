from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Any
from unittest.mock import MagicMock

import pytest
import requests

REPO_ROOT = Path(__file__).resolve().parents[1]
SRC_PATH = REPO_ROOT / "src"
if str(SRC_PATH) not in sys.path:
    sys.path.insert(0, str(SRC_PATH))

TEST_BASE_URL = "https://api.test/v1"


def make_response(status_code: int = 200, body: Any = None, url: str = TEST_BASE_URL) -> requests.Response:
    """Build a real requests.Response with the given status and body."""
    resp = requests.Response()
    resp.status_code = status_code
    resp.url = url
    if body is None:
        content = b""
    elif isinstance(body, bytes):
        content = body
    elif isinstance(body, str):
        content = body.encode()
    else:
        content = json.dumps(body).encode()
    resp._content = content
    resp.encoding = "utf-8"
    return resp


def success_envelope(data: Any) -> dict[str, Any]:
    return {"status": "success", "message": "Address verification processed.", "data": data}


# Trimmed from a real response for "251 e 13th st frnt a, New York, NY 10003"
VERIFIED_NYC = {
    "city": "NEW YORK",
    "country": "us",
    "countryName": "UNITED STATES",
    "details": {
        "streetName": "13TH",
        "streetType": "ST",
        "streetDirection": "E",
        "preDirection": "E",
        "streetNumber": "251",
        "suiteID": "A",
        "suiteKey": "FRNT",
        "county": "NEW YORK",
    },
    "errors": {},
    "firmName": "MILK BAR",
    "geocodeResult": {
        "location": {"lat": 40.731862, "lng": -73.985679},
        "accuracy": 1,
        "accuracyType": "rooftop",
    },
    "line1": "251 E 13TH ST FRNT A",
    "postalOrZip": "10003",
    "provinceOrState": "NY",
    "status": "corrected",
    "zipPlus4": "5646",
}


@pytest.fixture
def session():
    """A stand-in requests.Session; set ``session.request`` behaviour per test."""
    return MagicMock(spec=requests.Session)
