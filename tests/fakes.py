"""
Fake upstream responses for the geocoding tests.

Builds requests.Response stand-ins shaped like positionstack answers.
"""
from unittest.mock import Mock

import requests


def make_response(status_code=200, payload=None, text=None):
    """Fake response whose .json() returns `payload`, or fails when `text` is given."""
    response = Mock(spec=requests.Response)
    response.status_code = status_code
    if text is not None:
        response.text = text
        response.json.side_effect = ValueError("Expecting value: line 1 column 1 (char 0)")
    else:
        response.text = str(payload)
        response.json.return_value = payload
    return response


def forward_payload(latitude=15.4909, longitude=73.8278, label="Panaji, Goa, India"):
    return {"data": [{"latitude": latitude, "longitude": longitude, "label": label}]}


def reverse_payload(label="Panaji, Goa, India"):
    return {"data": [{"latitude": 15.4909, "longitude": 73.8278, "label": label}]}
