# Common utilities and shared modules
"""
Shared components used by the VAN client and the action handler:
- Host entity models (Pydantic schemas)
- Project configuration and per-organization config lookup
"""

from .config import settings, get_config, PROJECT_ROOT, CONFIG_DIR
from .models import Campaign, Contact, InteractionStep, Organization, QuestionResponse

__all__ = [
    "settings",
    "get_config",
    "PROJECT_ROOT",
    "CONFIG_DIR",
    "Campaign",
    "Contact",
    "InteractionStep",
    "Organization",
    "QuestionResponse",
]
