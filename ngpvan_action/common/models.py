"""Pydantic models for the host entities an action handler receives.

The texting host passes organizations, contacts, campaigns and interaction
steps to every handler call. Only the fields the handler reads are modeled;
anything else is ignored.
"""

from __future__ import annotations

import json
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Organization(BaseModel):
    """Texting organization. `features` carries per-org config overrides."""
    model_config = ConfigDict(extra="ignore")

    id: int | str
    name: str = ""
    features: dict[str, Any] = Field(default_factory=dict)

    @field_validator("features", mode="before")
    @classmethod
    def _parse_features(cls, value: Any) -> Any:
        # The host stores features as a JSON text column
        if value is None or value == "":
            return {}
        if isinstance(value, str):
            try:
                return json.loads(value)
            except json.JSONDecodeError as e:
                raise ValueError(f"features is not valid JSON: {e}") from e
        return value


class Contact(BaseModel):
    """Campaign contact. `external_id` is the VAN id."""
    model_config = ConfigDict(extra="ignore")

    id: Optional[int | str] = None
    external_id: Optional[str] = None
    first_name: str = ""
    last_name: str = ""
    cell: str = ""

    @field_validator("external_id", mode="before")
    @classmethod
    def _coerce_external_id(cls, value: Any) -> Any:
        if isinstance(value, int):
            return str(value)
        return value


class InteractionStep(BaseModel):
    """Script step whose answer triggered the action."""
    model_config = ConfigDict(extra="ignore")

    id: Optional[int | str] = None
    question: str = ""
    answer_option: str = ""
    answer_actions: str = ""
    answer_actions_data: Optional[str] = None


class Campaign(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: Optional[int | str] = None
    title: str = ""
    organization_id: Optional[int | str] = None


class QuestionResponse(BaseModel):
    model_config = ConfigDict(extra="ignore")

    value: str = ""
    interaction_step_id: Optional[int | str] = None
    campaign_contact_id: Optional[int | str] = None
