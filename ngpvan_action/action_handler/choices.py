"""Build the VAN action catalog shown to texters.

Every action carries a `details` JSON string: the canvass response body
VAN expects, prefixed with the organization's canvass context.
"""

from __future__ import annotations

import json
from typing import Any

from ..van.models import ActivistCode, CanvassContext, ResultCode, SurveyQuestion
from .models import VanAction


def to_json(value: Any) -> str:
    """Compact JSON, no spaces after separators."""
    return json.dumps(value, separators=(",", ":"), ensure_ascii=False)


def build_payload(context: CanvassContext, body: dict[str, Any]) -> str:
    """Serialize a canvass response body with its canvass context first."""
    return to_json({"canvassContext": context.to_dict(), **body})


def survey_response_actions(
    questions: list[SurveyQuestion], context: CanvassContext
) -> list[VanAction]:
    """One action per (question, response) pair, named "<question> - <response>"."""
    actions: list[VanAction] = []
    for question in questions:
        for response in question.responses:
            actions.append(
                VanAction(
                    name=f"{question.name} - {response.name}",
                    details=build_payload(
                        context,
                        {
                            "responses": [
                                {
                                    "type": "SurveyResponse",
                                    "surveyQuestionId": question.survey_question_id,
                                    "surveyResponseId": response.survey_response_id,
                                }
                            ]
                        },
                    ),
                )
            )
    return actions


def activist_code_actions(
    codes: list[ActivistCode], context: CanvassContext
) -> list[VanAction]:
    return [
        VanAction(
            name=code.name,
            details=build_payload(
                context,
                {
                    "responses": [
                        {
                            "type": "ActivistCode",
                            "action": "Apply",
                            "activistCodeId": code.activist_code_id,
                        }
                    ]
                },
            ),
        )
        for code in codes
    ]


def canvass_result_actions(
    codes: list[ResultCode], context: CanvassContext
) -> list[VanAction]:
    return [
        VanAction(
            name=code.name,
            details=build_payload(context, {"resultCodeId": code.result_code_id}),
        )
        for code in codes
    ]


def build_van_actions(
    context: CanvassContext,
    survey_questions: list[SurveyQuestion],
    activist_codes: list[ActivistCode],
    result_codes: list[ResultCode],
) -> list[VanAction]:
    """Full catalog: survey responses, then activist codes, then result codes."""
    return [
        *survey_response_actions(survey_questions, context),
        *activist_code_actions(activist_codes, context),
        *canvass_result_actions(result_codes, context),
    ]
