"""NGP VAN API client.

Builds VAN URLs and Basic auth headers from per-organization config and
wraps the handful of endpoints the action handler needs.

Usage:
    client = VanClient(organization)
    contact_types = client.get_contact_types()
    client.post_canvass_response("123456", {"resultCodeId": 18})
"""

from __future__ import annotations

import base64
import logging
from typing import Any, TypeVar

import requests
from pydantic import BaseModel, ValidationError

from ..common.config import get_config
from .http_client import HTTPClient
from .models import ActivistCode, ContactType, InputType, ResultCode, SurveyQuestion

logger = logging.getLogger(__name__)

DEFAULT_NGP_VAN_API_BASE_URL = "https://api.securevan.com"
DEFAULT_NGP_VAN_DATABASE_MODE = "0"

# Reporting a canvass response never retries and gives up after 5 seconds
CANVASS_RESPONSE_RETRIES = 0
CANVASS_RESPONSE_TIMEOUT = 5.0

T = TypeVar("T", bound=BaseModel)


class VanConfigError(ValueError):
    """VAN credentials are missing for the organization."""


class VanApiError(RuntimeError):
    """A VAN API call failed or returned an unusable body."""


def make_url(path_and_query: str, organization: Any = None) -> str:
    """Join a VAN API path onto the configured base URL."""
    base_url = get_config(
        "NGP_VAN_API_BASE_URL", organization, DEFAULT_NGP_VAN_API_BASE_URL
    )
    return f"{str(base_url).rstrip('/')}/{path_and_query.lstrip('/')}"


def get_auth(organization: Any = None) -> str:
    """Build the Basic auth header value for VAN.

    VAN expects `<application name>:<api key>|<database mode>` where the
    database mode is 0 (VoterFile) or 1 (MyCampaign).

    Raises:
        VanConfigError: NGP_VAN_APP_NAME or NGP_VAN_API_KEY is not set.
    """
    app_name = get_config("NGP_VAN_APP_NAME", organization)
    api_key = get_config("NGP_VAN_API_KEY", organization)
    if not app_name or not api_key:
        raise VanConfigError("Environment missing NGP_VAN_APP_NAME or NGP_VAN_API_KEY")

    database_mode = get_config(
        "NGP_VAN_DATABASE_MODE", organization, DEFAULT_NGP_VAN_DATABASE_MODE
    )
    token = base64.b64encode(f"{app_name}:{api_key}|{database_mode}".encode()).decode()
    return f"Basic {token}"


class VanClient:
    """Client for the VAN endpoints used by the action handler."""

    def __init__(self, organization: Any, http: HTTPClient | None = None) -> None:
        self.organization = organization
        self.http = http or HTTPClient()

    # --- Canvass context ---

    def get_contact_types(self) -> list[ContactType]:
        data = self._get("v4/canvassResponses/contactTypes", "contact types")
        return self._parse(data, ContactType, "contact types")

    def get_input_types(self) -> list[InputType]:
        data = self._get("v4/canvassResponses/inputTypes", "input types")
        return self._parse(data, InputType, "input types")

    # --- Action catalog ---

    def get_survey_questions(self, cycle: str | int | None = None) -> list[SurveyQuestion]:
        """Fetch active survey questions, optionally for one election cycle."""
        params: dict[str, Any] = {"statuses": "Active"}
        if cycle:
            params["cycle"] = cycle
        data = self._get("v4/surveyQuestions", "survey questions", params=params)
        return self._parse(self._items(data, "survey questions"), SurveyQuestion, "survey questions")

    def get_activist_codes(self) -> list[ActivistCode]:
        data = self._get(
            "v4/activistCodes", "activist codes", params={"statuses": "Active"}
        )
        return self._parse(self._items(data, "activist codes"), ActivistCode, "activist codes")

    def get_result_codes(self) -> list[ResultCode]:
        data = self._get("v4/canvassResponses/resultCodes", "canvass result codes")
        return self._parse(data, ResultCode, "canvass result codes")

    # --- Reporting ---

    def post_canvass_response(
        self,
        van_id: str,
        body: Any,
        *,
        retries: int = CANVASS_RESPONSE_RETRIES,
        timeout: float = CANVASS_RESPONSE_TIMEOUT,
    ) -> requests.Response:
        """Record a canvass response for a person. VAN answers 204 on success.

        Raises:
            VanConfigError: Credentials missing.
            requests.RequestException: Transport failure or non-204 status.
        """
        url = make_url(f"v4/people/{van_id}/canvassResponses", self.organization)
        return self.http.request(
            "POST",
            url,
            headers={
                "Authorization": get_auth(self.organization),
                "Content-Type": "application/json",
            },
            json_body=body,
            retries=retries,
            timeout=timeout,
            valid_statuses=[204],
        )

    # --- Internals ---

    def _get(self, path: str, what: str, params: dict[str, Any] | None = None) -> Any:
        try:
            return self.http.get_json(
                make_url(path, self.organization),
                params=params,
                headers={"Authorization": get_auth(self.organization)},
            )
        except (requests.RequestException, ValueError) as e:
            message = f"Error retrieving {what} from VAN {e}"
            logger.error(message)
            raise VanApiError(message) from e

    @staticmethod
    def _items(data: Any, what: str) -> Any:
        if not isinstance(data, dict) or "items" not in data:
            message = f"Error retrieving {what} from VAN: response has no items"
            logger.error(message)
            raise VanApiError(message)
        return data["items"]

    @staticmethod
    def _parse(data: Any, model: type[T], what: str) -> list[T]:
        try:
            return [model.model_validate(entry) for entry in data]
        except (TypeError, ValidationError) as e:
            message = f"Error retrieving {what} from VAN {e}"
            logger.error(message)
            raise VanApiError(message) from e

    def close(self) -> None:
        """Close the underlying HTTP session."""
        self.http.close()

    def __enter__(self) -> VanClient:
        return self

    def __exit__(self, *args: object) -> None:
        self.close()
