"""Tests for the OpenAI integration (SDK mocked, no network)."""

import json
import pytest
from datetime import datetime

import httpx
from openai import APIConnectionError, APIStatusError

from taskwise.errors import MalformedModelOutputError, UpstreamModelError
from taskwise.integrations.openai_client import OpenAIClient, _strip_code_fences

VALID_SUGGESTION = {
    "title": "Fix Login Bug",
    "description": "Investigate and resolve the login bug.",
    "priority": "HIGH",
    "timeEstimate": 120,
    "dueDate": "2024-01-02T00:00:00.000Z",
}

VALID_REPORT = {
    "summaryText": "You completed most of your tasks.",
    "keyMetrics": {"totalCreated": 2, "totalCompleted": 1, "completionRate": 50.0,
                   "averageOverallCompletionTime": 30.0},
    "chartData": {"tasksByPriority": {"HIGH": {"created": 1, "completed": 1}}},
    "categorizedTasksGrid": [{"category": "General", "created": 2, "completed": 1,
                              "completionRate": 50.0, "avgTime": 30.0}],
    "insights": ["a", "b", "c", "d", "e"],
}


def _status_error(status_code, body):
    request = httpx.Request("POST", "https://api.openai.com/v1/chat/completions")
    response = httpx.Response(status_code, request=request)
    return APIStatusError("error", response=response, body=body)


class TestStripCodeFences:
    def test_plain_json_unchanged(self):
        assert _strip_code_fences('{"a": 1}') == '{"a": 1}'

    def test_json_fence_removed(self):
        assert _strip_code_fences('```json\n{"a": 1}\n```') == '{"a": 1}'

    def test_bare_fence_removed(self):
        assert _strip_code_fences('```\n{"a": 1}\n```') == '{"a": 1}'


class TestSuggestTask:
    """Test task suggestion parsing."""

    def test_valid_suggestion(self, ai_client, mock_openai_sdk, make_completion):
        mock_openai_sdk.chat.completions.create.return_value = make_completion(json.dumps(VALID_SUGGESTION))

        suggestion = ai_client.suggest_task("fix bug in login by tomorrow")

        assert suggestion.model_dump(by_alias=True) == VALID_SUGGESTION
        kwargs = mock_openai_sdk.chat.completions.create.call_args.kwargs
        assert kwargs["model"] == "test-model"
        assert kwargs["temperature"] == 0.7
        assert kwargs["response_format"] == {"type": "json_object"}
        assert kwargs["messages"][1]["content"] == "User input: fix bug in login by tomorrow"

    def test_fenced_json_is_accepted(self, ai_client, mock_openai_sdk, make_completion):
        content = "```json\n" + json.dumps(VALID_SUGGESTION) + "\n```"
        mock_openai_sdk.chat.completions.create.return_value = make_completion(content)

        assert ai_client.suggest_task("idea").title == "Fix Login Bug"

    def test_missing_due_date_is_null(self, ai_client, mock_openai_sdk, make_completion):
        result = {k: v for k, v in VALID_SUGGESTION.items() if k != "dueDate"}
        mock_openai_sdk.chat.completions.create.return_value = make_completion(json.dumps(result))

        assert ai_client.suggest_task("idea").due_date is None

    @pytest.mark.parametrize("override", [
        {"priority": "CRITICAL"},
        {"timeEstimate": "two hours"},
        {"title": None},
        {"dueDate": 12345},
    ])
    def test_wrong_shape_is_malformed(self, ai_client, mock_openai_sdk, make_completion, override):
        content = json.dumps({**VALID_SUGGESTION, **override})
        mock_openai_sdk.chat.completions.create.return_value = make_completion(content)

        with pytest.raises(MalformedModelOutputError, match="did not match expected structure"):
            ai_client.suggest_task("idea")

    def test_invalid_json_is_malformed(self, ai_client, mock_openai_sdk, make_completion):
        mock_openai_sdk.chat.completions.create.return_value = make_completion("Sure! Here is your task.")

        with pytest.raises(MalformedModelOutputError):
            ai_client.suggest_task("idea")

    def test_empty_content_is_malformed(self, ai_client, mock_openai_sdk, make_completion):
        mock_openai_sdk.chat.completions.create.return_value = make_completion("")

        with pytest.raises(MalformedModelOutputError, match="did not return any content"):
            ai_client.suggest_task("idea")


class TestGenerateReport:
    """Test report parsing."""

    def test_valid_report(self, ai_client, mock_openai_sdk, make_completion):
        mock_openai_sdk.chat.completions.create.return_value = make_completion(json.dumps(VALID_REPORT))

        report = ai_client.generate_report('{"event": "TASK_CREATED"}\n')

        assert report.model_dump(by_alias=True) == VALID_REPORT
        user_message = mock_openai_sdk.chat.completions.create.call_args.kwargs["messages"][1]["content"]
        assert user_message.startswith("Log entries (JSONL format):\n")

    def test_prompt_names_categories(self, ai_client, mock_openai_sdk, make_completion):
        mock_openai_sdk.chat.completions.create.return_value = make_completion(json.dumps(VALID_REPORT))

        ai_client.generate_report("{}")

        system_prompt = mock_openai_sdk.chat.completions.create.call_args.kwargs["messages"][0]["content"]
        assert "Health & Fitness" in system_prompt
        assert "at least 5" in system_prompt.lower()

    def test_extra_fields_pass_through(self, ai_client, mock_openai_sdk, make_completion):
        content = json.dumps({**VALID_REPORT, "streak": 3})
        mock_openai_sdk.chat.completions.create.return_value = make_completion(content)

        assert ai_client.generate_report("{}").model_dump(by_alias=True)["streak"] == 3

    def test_few_insights_logs_warning(self, ai_client, mock_openai_sdk, make_completion, caplog):
        content = json.dumps({**VALID_REPORT, "insights": ["only one"]})
        mock_openai_sdk.chat.completions.create.return_value = make_completion(content)

        report = ai_client.generate_report("{}")
        assert report.insights == ["only one"]
        assert "insights" in caplog.text

    @pytest.mark.parametrize("missing", ["summaryText", "chartData", "insights"])
    def test_missing_top_level_field_is_malformed(self, ai_client, mock_openai_sdk, make_completion, missing):
        content = json.dumps({k: v for k, v in VALID_REPORT.items() if k != missing})
        mock_openai_sdk.chat.completions.create.return_value = make_completion(content)

        with pytest.raises(MalformedModelOutputError, match="report response did not match"):
            ai_client.generate_report("{}")

    def test_non_object_json_is_malformed(self, ai_client, mock_openai_sdk, make_completion):
        mock_openai_sdk.chat.completions.create.return_value = make_completion("[1, 2, 3]")

        with pytest.raises(MalformedModelOutputError):
            ai_client.generate_report("{}")


class TestAnswerQuestion:
    """Test chat answers."""

    def test_answer_is_returned_verbatim(self, ai_client, mock_openai_sdk, make_completion):
        mock_openai_sdk.chat.completions.create.return_value = make_completion("  You completed 2 tasks.\n")

        answer = ai_client.answer_question(
            "How many tasks did I complete?",
            tasks=[{"id": "t1", "title": "Task 1"}],
            log_entries=[{"event": "TASK_COMPLETED", "taskId": "t1"}],
            now=datetime(2024, 1, 1, 12, 0),
        )

        assert answer == "  You completed 2 tasks.\n"
        kwargs = mock_openai_sdk.chat.completions.create.call_args.kwargs
        assert kwargs["temperature"] == 0.5
        assert "response_format" not in kwargs
        system_prompt = kwargs["messages"][0]["content"]
        assert "Monday, January 01, 2024" in system_prompt
        assert '"title": "Task 1"' in system_prompt
        assert '"event": "TASK_COMPLETED"' in system_prompt
        assert kwargs["messages"][1] == {"role": "user", "content": "How many tasks did I complete?"}


class TestUpstreamErrors:
    """Provider failures surface as UpstreamModelError."""

    def test_status_error_carries_provider_detail(self, ai_client, mock_openai_sdk):
        body = {"message": "Rate limit reached", "code": "rate_limit_exceeded"}
        mock_openai_sdk.chat.completions.create.side_effect = _status_error(429, body)

        with pytest.raises(UpstreamModelError) as exc_info:
            ai_client.suggest_task("idea")

        assert exc_info.value.message == "OpenAI API Error"
        assert exc_info.value.upstream_status == 429
        assert exc_info.value.details["status"] == 429
        assert exc_info.value.details["body"] == body

    def test_connection_error(self, ai_client, mock_openai_sdk):
        request = httpx.Request("POST", "https://api.openai.com/v1/chat/completions")
        mock_openai_sdk.chat.completions.create.side_effect = APIConnectionError(request=request)

        with pytest.raises(UpstreamModelError):
            ai_client.answer_question("q", [], [])

    def test_single_attempt(self, ai_client, mock_openai_sdk):
        mock_openai_sdk.chat.completions.create.side_effect = _status_error(500, None)

        with pytest.raises(UpstreamModelError):
            ai_client.generate_report("{}")
        assert mock_openai_sdk.chat.completions.create.call_count == 1

    def test_missing_api_key_fails_at_request_time(self, monkeypatch):
        monkeypatch.delenv("OPENAI_API_KEY", raising=False)
        client = OpenAIClient()

        with pytest.raises(UpstreamModelError) as exc_info:
            client.suggest_task("idea")
        assert "OPENAI_API_KEY" in exc_info.value.details
