# Action Handler: report texting results to NGP VAN
"""
The NGP VAN action handler as seen by the texting host:
availability check, canvass response reporting and the action catalog.
"""

from .handler import (
    DEFAULT_NGP_VAN_ACTION_HANDLER_CACHE_TTL,
    DEFAULT_NGP_VAN_CONTACT_TYPE,
    DEFAULT_NGP_VAN_INPUT_TYPE,
    available,
    client_choice_data_cache_key,
    display_name,
    get_client_choice_data,
    instructions,
    name,
    process_action,
    server_administrator_instructions,
)
from .models import AvailabilityResult, ClientChoiceData, VanAction

__all__ = [
    "DEFAULT_NGP_VAN_ACTION_HANDLER_CACHE_TTL",
    "DEFAULT_NGP_VAN_CONTACT_TYPE",
    "DEFAULT_NGP_VAN_INPUT_TYPE",
    "available",
    "client_choice_data_cache_key",
    "display_name",
    "get_client_choice_data",
    "instructions",
    "name",
    "process_action",
    "server_administrator_instructions",
    "AvailabilityResult",
    "ClientChoiceData",
    "VanAction",
]
