"""Shared test fixtures for the NGP VAN action handler."""

import json
import os
import sys
from pathlib import Path
from unittest.mock import MagicMock

import pytest
import requests

# Ensure the package is importable
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from ngpvan_action.common.config import HttpSettings
from ngpvan_action.common.models import Organization
from ngpvan_action.van.client import VanClient
from ngpvan_action.van.http_client import HTTPClient


@pytest.fixture(autouse=True)
def clean_van_env(monkeypatch):
    """Keep developer NGP_VAN_* / HTTP_* variables out of tests."""
    for key in list(os.environ):
        if key.startswith("NGP_VAN_") or key.startswith("HTTP_REQUEST_"):
            monkeypatch.delenv(key, raising=False)


@pytest.fixture
def organization() -> Organization:
    """Organization with VAN credentials in its features."""
    return Organization(
        id=7,
        name="Test Campaign Org",
        features={
            "NGP_VAN_APP_NAME": "spoke-app",
            "NGP_VAN_API_KEY": "secret-key",
        },
    )


@pytest.fixture
def bare_organization() -> Organization:
    """Organization without any VAN config."""
    return Organization(id=8, name="No VAN")


def make_response(status: int = 200, json_data=None, url: str = "https://api.securevan.com/x"):
    """Build a requests.Response with a JSON body."""
    resp = requests.Response()
    resp.status_code = status
    resp.url = url
    if json_data is not None:
        resp._content = json.dumps(json_data).encode()
        resp.headers["Content-Type"] = "application/json"
    else:
        resp._content = b""
    return resp


@pytest.fixture
def sample_contact_types() -> list[dict]:
    return [
        {"contactTypeId": 1, "name": "Phone"},
        {"contactTypeId": 37, "name": "SMS Text"},
    ]


@pytest.fixture
def sample_input_types() -> list[dict]:
    return [
        {"inputTypeId": 11, "name": "API"},
        {"inputTypeId": 4, "name": "Bulk"},
    ]


@pytest.fixture
def sample_survey_questions() -> dict:
    return {
        "items": [
            {
                "surveyQuestionId": 501,
                "name": "Support",
                "type": "Candidate",
                "responses": [
                    {"surveyResponseId": 1, "name": "Strong", "mediumName": "Str"},
                    {"surveyResponseId": 2, "name": "Lean"},
                ],
            }
        ],
        "count": 1,
    }


@pytest.fixture
def sample_activist_codes() -> dict:
    return {"items": [{"activistCodeId": 900, "name": "Volunteer", "status": "Active"}]}


@pytest.fixture
def sample_result_codes() -> list[dict]:
    return [{"resultCodeId": 18, "name": "Wrong Number", "shortName": "WN"}]


@pytest.fixture
def van_responses(
    sample_contact_types,
    sample_input_types,
    sample_survey_questions,
    sample_activist_codes,
    sample_result_codes,
) -> dict:
    """JSON bodies keyed by VAN path."""
    return {
        "v4/canvassResponses/contactTypes": sample_contact_types,
        "v4/canvassResponses/inputTypes": sample_input_types,
        "v4/surveyQuestions": sample_survey_questions,
        "v4/activistCodes": sample_activist_codes,
        "v4/canvassResponses/resultCodes": sample_result_codes,
    }


@pytest.fixture
def fake_session(van_responses) -> MagicMock:
    """requests.Session stand-in answering from `van_responses` by path.

    Paths mapped to an int answer with that status and no body.
    """
    session = MagicMock(spec=requests.Session)

    def respond(method, url, **kwargs):
        if method == "POST":
            return make_response(204, url=url)
        for path, body in van_responses.items():
            if url.endswith(path):
                if isinstance(body, int):
                    return make_response(body, url=url)
                return make_response(200, body, url=url)
        return make_response(404, url=url)

    session.request.side_effect = respond
    return session


@pytest.fixture
def http_client(fake_session) -> HTTPClient:
    return HTTPClient(settings=HttpSettings(), session=fake_session)


@pytest.fixture
def van_client(organization, http_client) -> VanClient:
    return VanClient(organization, http=http_client)


@pytest.fixture
def response_factory():
    """Expose make_response to tests."""
    return make_response
