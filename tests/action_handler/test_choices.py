"""Tests for the action catalog builder."""

import json

import pytest

from ngpvan_action.action_handler.choices import (
    activist_code_actions,
    build_payload,
    build_van_actions,
    canvass_result_actions,
    survey_response_actions,
    to_json,
)
from ngpvan_action.van.models import ActivistCode, CanvassContext, ResultCode, SurveyQuestion


@pytest.fixture
def context() -> CanvassContext:
    return CanvassContext(contactTypeId=37, inputTypeId=11)


@pytest.fixture
def questions(sample_survey_questions) -> list[SurveyQuestion]:
    return [SurveyQuestion.model_validate(q) for q in sample_survey_questions["items"]]


class TestBuildPayload:
    def test_context_first_and_compact(self, context):
        payload = build_payload(context, {"resultCodeId": 18})
        assert payload == (
            '{"canvassContext":{"contactTypeId":37,"inputTypeId":11},"resultCodeId":18}'
        )

    def test_non_ascii_kept(self):
        assert to_json({"name": "Sí"}) == '{"name":"Sí"}'


class TestSurveyResponseActions:
    def test_one_action_per_response(self, questions, context):
        actions = survey_response_actions(questions, context)

        assert [a.name for a in actions] == ["Support - Strong", "Support - Lean"]
        details = json.loads(actions[1].details)
        assert details["responses"] == [
            {"type": "SurveyResponse", "surveyQuestionId": 501, "surveyResponseId": 2}
        ]
        assert details["canvassContext"] == {"contactTypeId": 37, "inputTypeId": 11}

    def test_question_without_responses(self, context):
        question = SurveyQuestion(surveyQuestionId=1, name="Empty")
        assert survey_response_actions([question], context) == []


class TestActivistCodeActions:
    def test_apply_action(self, context):
        actions = activist_code_actions(
            [ActivistCode(activistCodeId=900, name="Volunteer")], context
        )
        assert actions[0].name == "Volunteer"
        assert json.loads(actions[0].details)["responses"] == [
            {"type": "ActivistCode", "action": "Apply", "activistCodeId": 900}
        ]


class TestCanvassResultActions:
    def test_result_code(self, context):
        actions = canvass_result_actions([ResultCode(resultCodeId=18, name="Wrong Number")], context)
        details = json.loads(actions[0].details)
        assert details["resultCodeId"] == 18
        assert "responses" not in details


class TestBuildVanActions:
    def test_order(self, questions, context):
        actions = build_van_actions(
            context,
            questions,
            [ActivistCode(activistCodeId=900, name="Volunteer")],
            [ResultCode(resultCodeId=18, name="Wrong Number")],
        )
        assert [a.name for a in actions] == [
            "Support - Strong",
            "Support - Lean",
            "Volunteer",
            "Wrong Number",
        ]

    def test_empty_catalog(self, context):
        assert build_van_actions(context, [], [], []) == []
