"""NGP VAN action handler.

Reports the result of a texting interaction to NGP VAN as a canvass
response, and offers the UI a catalog of VAN actions (survey responses,
activist codes, canvass result codes) fetched live from VAN.

Usage:
    if available(organization).result:
        catalog = get_client_choice_data(organization)
        process_action(question_response, step, contact_id, contact, campaign, organization)
"""

from __future__ import annotations

import json
import logging
from collections.abc import Iterator
from concurrent.futures import ThreadPoolExecutor
from contextlib import contextmanager
from typing import Any, Optional

from ..common.config import get_config
from ..common.models import Campaign, Contact, InteractionStep, Organization, QuestionResponse
from ..van.client import VanApiError, VanClient
from ..van.models import CanvassContext, ContactType, InputType
from .choices import build_van_actions, to_json
from .models import AvailabilityResult, ClientChoiceData

logger = logging.getLogger(__name__)

name = "ngpvan-action"

DEFAULT_NGP_VAN_CONTACT_TYPE = "SMS Text"
DEFAULT_NGP_VAN_INPUT_TYPE = "API"
DEFAULT_NGP_VAN_ACTION_HANDLER_CACHE_TTL = 600
AVAILABILITY_EXPIRES_SECONDS = 86400

CANVASS_CONTEXT_ERROR = (
    "Failed to load canvass/contactTypes or canvass/inputTypes from VAN"
)
ACTION_CATALOG_ERROR = (
    "Failed to load surveyQuestions, activistCodes or canvass/resultCodes from VAN"
)


class CanvassContextError(LookupError):
    """VAN did not return the configured contact type or input type."""


def display_name() -> str:
    """What the user sees as the option."""
    return "NGPVAN action"


def instructions() -> str:
    """Help text for the user after selecting the action."""
    return "This action is for reporting the results of interactions with contacts to NGPVAN"


def server_administrator_instructions() -> dict[str, Any]:
    return {
        "description": (
            "This action is for reporting the results of interactions with contacts to NGPVAN"
        ),
        "setupInstructions": (
            "Get an APP name and API key for your VAN account. Add them to your config, "
            "along with NGP_VAN_WEBHOOK_BASE_URL. In most cases the defaults for the "
            "other environment variables will work"
        ),
        "environmentVariables": [
            "NGP_VAN_API_KEY",
            "NGP_VAN_API_BASE_URL",
            "NGP_VAN_APP_NAME",
            "NGP_VAN_ACTION_HANDLER_CACHE_TTL",
        ],
    }


def client_choice_data_cache_key(organization: Organization) -> str:
    """Catalog data is cached per organization."""
    return str(organization.id)


def available(organization: Organization) -> AvailabilityResult:
    """The handler is usable once VAN credentials are configured."""
    result = bool(get_config("NGP_VAN_API_KEY", organization)) and bool(
        get_config("NGP_VAN_APP_NAME", organization)
    )

    if not result:
        logger.info(
            "ngpvan action handler unavailable. "
            "Missing one or more required environment variables."
        )

    return AvailabilityResult(result=result, expires_seconds=AVAILABILITY_EXPIRES_SECONDS)


def process_action(
    question_response: Optional[QuestionResponse],
    interaction_step: Optional[InteractionStep],
    campaign_contact_id: Any,
    contact: Contact,
    campaign: Optional[Campaign],
    organization: Organization,
    *,
    client: VanClient | None = None,
) -> None:
    """Post the canvass response stored on the interaction step to VAN.

    The step's `answer_actions_data` is a JSON object whose `value` is the
    `details` string of the action picked from the catalog.

    Raises:
        ValueError: The step carries no action body or the contact no VAN id.
        requests.RequestException: VAN rejected the request or was unreachable.
    """
    try:
        raw = (interaction_step.answer_actions_data if interaction_step else None) or "{}"
        answer_actions_data = json.loads(raw)
        if not isinstance(answer_actions_data, dict) or not answer_actions_data.get("value"):
            raise ValueError("Interaction step has no answer action data")

        value = answer_actions_data["value"]
        if not isinstance(value, str):
            raise ValueError("Answer action value must be a JSON string")
        body = json.loads(value)

        van_id = contact.external_id
        if not van_id:
            raise ValueError(f"Contact {contact.id} has no VAN id")

        logger.info("Sending contact update to VAN: vanId=%s body=%s", van_id, to_json(body))

        with _van_client(organization, client) as van:
            van.post_canvass_response(van_id, body)
    except Exception:
        logger.exception("Encountered exception in ngpvan.processAction")
        raise


def get_client_choice_data(
    organization: Organization, *, client: VanClient | None = None
) -> ClientChoiceData:
    """Fetch the VAN action catalog for an organization.

    Failures never raise: they come back as an error payload without expiry.
    """
    with _van_client(organization, client) as van:
        return _load_client_choice_data(organization, van)


def _load_client_choice_data(organization: Organization, client: VanClient) -> ClientChoiceData:
    try:
        with ThreadPoolExecutor(max_workers=2) as pool:
            contact_types = pool.submit(client.get_contact_types)
            input_types = pool.submit(client.get_input_types)
            context = resolve_canvass_context(
                contact_types.result(), input_types.result(), organization
            )
    except (VanApiError, CanvassContextError) as e:
        logger.error("Error loading canvass/contactTypes or canvass/inputTypes from VAN %s", e)
        return ClientChoiceData(data=to_json({"error": CANVASS_CONTEXT_ERROR}))

    cycle = get_config("NGP_VAN_ELECTION_CYCLE_FILTER", organization)

    try:
        with ThreadPoolExecutor(max_workers=3) as pool:
            survey_questions = pool.submit(client.get_survey_questions, cycle)
            activist_codes = pool.submit(client.get_activist_codes)
            result_codes = pool.submit(client.get_result_codes)
            actions = build_van_actions(
                context,
                survey_questions.result(),
                activist_codes.result(),
                result_codes.result(),
            )
    except VanApiError as e:
        logger.error(
            "Error loading surveyQuestions, activistCodes or canvass/resultCodes from VAN %s", e
        )
        return ClientChoiceData(data=to_json({"error": ACTION_CATALOG_ERROR}))

    logger.info("Loaded %d VAN actions for organization %s", len(actions), organization.id)

    return ClientChoiceData(
        data=to_json({"items": [action.model_dump() for action in actions]}),
        expires_seconds=cache_ttl(organization),
    )


def resolve_canvass_context(
    contact_types: list[ContactType],
    input_types: list[InputType],
    organization: Organization,
) -> CanvassContext:
    """Pick the configured contact type and input type by name.

    Raises:
        CanvassContextError: Either name is not in VAN's list.
    """
    contact_type = get_config(
        "NGP_VAN_CONTACT_TYPE", organization, DEFAULT_NGP_VAN_CONTACT_TYPE
    )
    contact_type_id = next(
        (ct.contact_type_id for ct in contact_types if ct.name == contact_type), None
    )
    if contact_type_id is None:
        logger.error("Contact type %s not returned by VAN", contact_type)

    input_type = get_config("NGP_VAN_INPUT_TYPE", organization, DEFAULT_NGP_VAN_INPUT_TYPE)
    input_type_id = next(
        (it.input_type_id for it in input_types if it.name == input_type), None
    )
    if input_type_id is None:
        logger.error("Input type %s not returned by VAN", input_type)

    if contact_type_id is None or input_type_id is None:
        raise CanvassContextError(
            "VAN did not return the configured input type or contact type. Check the log"
        )

    return CanvassContext(contact_type_id=contact_type_id, input_type_id=input_type_id)


def cache_ttl(organization: Organization) -> int:
    """Seconds the host may cache the catalog, truncated. Unset, invalid or 0 means default."""
    value = get_config("NGP_VAN_ACTION_HANDLER_CACHE_TTL", organization)
    try:
        ttl = int(float(value)) if value is not None else 0
    except (TypeError, ValueError, OverflowError):
        logger.warning("Ignoring invalid NGP_VAN_ACTION_HANDLER_CACHE_TTL %r", value)
        ttl = 0
    return ttl or DEFAULT_NGP_VAN_ACTION_HANDLER_CACHE_TTL


@contextmanager
def _van_client(organization: Organization, client: VanClient | None) -> Iterator[VanClient]:
    """Use the caller's client as-is, or own (and close) a fresh one."""
    if client is not None:
        yield client
        return
    with VanClient(organization) as owned:
        yield owned
