# VAN client: NGP VAN API access
"""
HTTP transport and endpoint wrappers for the NGP VAN API.
"""

from .client import (
    DEFAULT_NGP_VAN_API_BASE_URL,
    VanApiError,
    VanClient,
    VanConfigError,
    get_auth,
    make_url,
)
from .http_client import HTTPClient, HTTPStatusError
from .models import (
    ActivistCode,
    CanvassContext,
    ContactType,
    InputType,
    ResultCode,
    SurveyQuestion,
    SurveyResponse,
)

__all__ = [
    "DEFAULT_NGP_VAN_API_BASE_URL",
    "VanApiError",
    "VanClient",
    "VanConfigError",
    "get_auth",
    "make_url",
    "HTTPClient",
    "HTTPStatusError",
    "ActivistCode",
    "CanvassContext",
    "ContactType",
    "InputType",
    "ResultCode",
    "SurveyQuestion",
    "SurveyResponse",
]
