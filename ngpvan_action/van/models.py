"""Data models for NGP VAN API payloads.

Field names follow VAN's camelCase JSON. Unknown fields are ignored so new
API attributes do not break parsing.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class VanModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class ContactType(VanModel):
    """Canvass contact type, e.g. "SMS Text"."""
    contact_type_id: int = Field(alias="contactTypeId")
    name: str


class InputType(VanModel):
    """Canvass input type, e.g. "API"."""
    input_type_id: int = Field(alias="inputTypeId")
    name: str


class SurveyResponse(VanModel):
    survey_response_id: int = Field(alias="surveyResponseId")
    name: str


class SurveyQuestion(VanModel):
    survey_question_id: int = Field(alias="surveyQuestionId")
    name: str
    responses: list[SurveyResponse] = Field(default_factory=list)


class ActivistCode(VanModel):
    activist_code_id: int = Field(alias="activistCodeId")
    name: str


class ResultCode(VanModel):
    """Canvass result code, e.g. "Wrong Number"."""
    result_code_id: int = Field(alias="resultCodeId")
    name: str


class CanvassContext(VanModel):
    """Context attached to every canvass response posted to VAN."""
    contact_type_id: int = Field(alias="contactTypeId")
    input_type_id: int = Field(alias="inputTypeId")

    def to_dict(self) -> dict:
        """Serialize with VAN field names."""
        return self.model_dump(by_alias=True)
