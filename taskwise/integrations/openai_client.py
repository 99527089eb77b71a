"""OpenAI API integration for TaskWise.

This module owns every prompt sent to the model and every parse of what comes
back: task suggestions from free text, productivity reports from the event log,
and answers to questions about stored tasks.

Failures are raised, never swallowed: ``UpstreamModelError`` when the call
itself fails, ``MalformedModelOutputError`` when the model answers with
something unusable. Each call is a single attempt.
"""

import os
import json
import logging
from datetime import datetime, timedelta
from typing import Any, Dict, List, Optional

from openai import OpenAI, APIError, APIStatusError
from pydantic import ValidationError as PydanticValidationError
from dotenv import load_dotenv

from taskwise.engine.categorizer import describe_categories
from taskwise.errors import MalformedModelOutputError, UpstreamModelError
from taskwise.models.assistant import ProductivityReport, TaskSuggestion
from taskwise.models.constants import MIN_REPORT_INSIGHTS
from taskwise.models.task import TaskPriority

# Load environment variables
load_dotenv()

logger = logging.getLogger(__name__)

OPENAI_MODEL = os.getenv("OPENAI_MODEL", "gpt-4o-mini")
OPENAI_TIMEOUT_SEC = float(os.getenv("OPENAI_TIMEOUT_SEC", "60"))

SUGGESTION_SYSTEM_PROMPT = """You are a highly intelligent and helpful AI assistant specialized in task management. Your goal is to take a user's raw task idea and transform it into a well-defined task with a clear title, detailed description, appropriate priority, a reasonable time estimate, and a suggested due date.

Respond ONLY with a JSON object. Do not include any other text or markdown outside the JSON.

The JSON object should have the following structure:
{{
  "title": "string", // A concise, improved title for the task. Correct spelling and grammar.
  "description": "string", // A detailed and actionable description for the task.
  "priority": "LOW" | "MEDIUM" | "HIGH" | "URGENT", // The estimated priority of the task.
  "timeEstimate": number, // The estimated time to complete the task in minutes (integer).
  "dueDate": "string" | null // The suggested due date and time in ISO 8601 format (e.g., 2025-12-31T23:59:59.000Z). null if not specified.
}}

Example:
User input: "fix bug in login by tomorrow"
Response:
{{
  "title": "Fix Login Bug",
  "description": "Investigate and resolve the bug affecting the user login functionality. This includes identifying the root cause, implementing a fix, testing thoroughly, and deploying the solution.",
  "priority": "HIGH",
  "timeEstimate": 120,
  "dueDate": "{example_due_date}"
}}"""

REPORT_SYSTEM_PROMPT = """You are an expert productivity analyst. Your task is to analyze a log of user task events (creation, updates and completion) and generate a comprehensive, detailed, and actionable report. The report should provide deep insights into the user's task management habits, productivity patterns, and areas for improvement.

Your response MUST be a JSON object with the following structure. Ensure all data is derived SOLELY from the provided log entries. Do not invent data.

{{
  "summaryText": "string", // A detailed, markdown-formatted textual summary of the user's productivity (min 300 words). Cover overall trends, task breakdowns, time analysis, strengths, weaknesses, and actionable recommendations.
  "keyMetrics": {{
    "totalCreated": number,
    "totalCompleted": number,
    "completionRate": number, // Percentage, e.g., 75.5
    "averageOverallCompletionTime": number // In minutes, e.g., 60.5
  }},
  "chartData": {{
    "tasksByPriority": {{
      "LOW": {{"created": number, "completed": number}},
      "MEDIUM": {{"created": number, "completed": number}},
      "HIGH": {{"created": number, "completed": number}},
      "URGENT": {{"created": number, "completed": number}}
    }},
    "tasksByCategory": {{
      "CategoryName": {{"created": number, "completed": number}}
    }},
    "avgCompletionTimes": {{
      "Category-Priority": "string" // Average time in minutes, as a string with one decimal place.
    }}
  }},
  "categorizedTasksGrid": [
    {{
      "category": "string",
      "created": number,
      "completed": number,
      "completionRate": number, // Percentage
      "avgTime": number // Average time in minutes for completed tasks in this category
    }}
  ],
  "insights": ["string"] // At least {min_insights} distinct, detailed, and actionable points based on the data.
}}

Analyze the provided log entries (JSONL format) and generate the report.
For categories, classify tasks by keywords in their title/description: {category_rules}.
Ensure all numerical values are actual numbers, not strings, unless specified (like avgCompletionTimes).
Calculate completion rates and average times accurately.
Provide at least {min_insights} distinct, detailed, and actionable insights in the "insights" array."""

CHAT_SYSTEM_PROMPT = """You are a helpful AI assistant specialized in analyzing user task data.
The user will ask questions about their tasks. You have access to their task list (from a database) and a log of task events.
Answer the user's questions based SOLELY on the provided data. If the data is insufficient to answer a question, state that clearly.
Be concise and direct. Format your answers clearly.

The current date and time is: {now}. Use this information to answer any questions about dates and times.

Here is the user's task data:

--- Tasks (from database) ---
{tasks_json}

--- Task Events Log ---
{log_json}

--- End of Data ---"""

VALID_PRIORITIES = {p.value for p in TaskPriority}


def _strip_code_fences(content: str) -> str:
    """Remove a surrounding markdown code block, if any."""
    content = content.strip()
    if content.startswith("```json"):
        content = content[7:]
    if content.startswith("```"):
        content = content[3:]
    if content.endswith("```"):
        content = content[:-3]
    return content.strip()


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


class OpenAIClient:
    """Client for OpenAI API integration."""

    def __init__(self, api_key: Optional[str] = None, model: Optional[str] = None, client: Any = None):
        """Initialize OpenAI client.

        Args:
            api_key: OpenAI API key. If None, reads from OPENAI_API_KEY environment variable.
            model: Chat model name. If None, uses OPENAI_MODEL.
            client: Pre-built SDK client (tests inject a mock here).

        Note:
            A missing API key does not fail construction; each call then raises
            UpstreamModelError at request time.
        """
        self.api_key = api_key or os.getenv("OPENAI_API_KEY")
        self.model = model or OPENAI_MODEL
        self.client = client

        if self.client is None:
            if self.api_key:
                self.client = OpenAI(api_key=self.api_key, timeout=OPENAI_TIMEOUT_SEC, max_retries=0)
            else:
                logger.warning("OPENAI_API_KEY not found in environment. AI features will not be available.")

    def _complete(self, messages: List[Dict[str, str]], temperature: float, json_mode: bool = False) -> str:
        """Run one chat completion and return the message content."""
        if not self.client:
            raise UpstreamModelError("OpenAI API Error", details="OPENAI_API_KEY is not configured")

        kwargs: Dict[str, Any] = {
            "model": self.model,
            "messages": messages,
            "temperature": temperature,
        }
        if json_mode:
            kwargs["response_format"] = {"type": "json_object"}

        try:
            response = self.client.chat.completions.create(**kwargs)
        except APIStatusError as e:
            error_code = getattr(e, 'code', None)
            status_code = getattr(e, 'status_code', None)

            if error_code == 'insufficient_quota':
                logger.warning("OpenAI API quota insufficient. Please check billing/payment method in OpenAI dashboard.")
            elif status_code == 429:
                logger.warning("OpenAI API rate limit exceeded.")
            else:
                logger.error(f"OpenAI API error: {status_code or 'unknown'} ({error_code or 'unknown'})")

            # Don't log the provider body; it is returned to the caller only.
            raise UpstreamModelError(
                "OpenAI API Error",
                details={"status": status_code, "code": error_code, "body": getattr(e, 'body', None)},
                upstream_status=status_code,
            ) from e
        except APIError as e:
            logger.error(f"Error calling OpenAI API: {type(e).__name__}")
            raise UpstreamModelError("OpenAI API Error", details=type(e).__name__) from e

        try:
            content = response.choices[0].message.content
        except (AttributeError, IndexError) as e:
            raise MalformedModelOutputError("OpenAI did not return any content.") from e
        if not content or not content.strip():
            raise MalformedModelOutputError("OpenAI did not return any content.")
        return content

    def _complete_json(self, messages: List[Dict[str, str]], temperature: float) -> Dict[str, Any]:
        content = self._complete(messages, temperature, json_mode=True)
        try:
            result = json.loads(_strip_code_fences(content))
        except json.JSONDecodeError as e:
            logger.warning(f"Failed to parse OpenAI JSON response: {e}. Response: {content[:100]}")
            raise MalformedModelOutputError("OpenAI response was not valid JSON.") from e
        if not isinstance(result, dict):
            raise MalformedModelOutputError("OpenAI response was not a JSON object.")
        return result

    def suggest_task(self, user_input: str) -> TaskSuggestion:
        """Turn a free-text idea into a structured task draft.

        Args:
            user_input: The user's raw task idea

        Returns:
            TaskSuggestion with title, description, priority, timeEstimate and dueDate

        Raises:
            UpstreamModelError: If the API call fails
            MalformedModelOutputError: If the response does not have the expected shape
        """
        example_due = (datetime.utcnow() + timedelta(days=1)).isoformat(timespec="milliseconds") + "Z"
        system_prompt = SUGGESTION_SYSTEM_PROMPT.format(example_due_date=example_due)

        result = self._complete_json(
            [
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": f"User input: {user_input}"},
            ],
            temperature=0.7,
        )

        due_date = result.get("dueDate")
        if (
            not isinstance(result.get("title"), str)
            or not isinstance(result.get("description"), str)
            or result.get("priority") not in VALID_PRIORITIES
            or not _is_number(result.get("timeEstimate"))
            or (due_date is not None and not isinstance(due_date, str))
        ):
            logger.warning(f"OpenAI suggestion did not match expected structure: keys={sorted(result)}")
            raise MalformedModelOutputError("OpenAI response did not match expected structure.")

        suggestion = TaskSuggestion(
            title=result["title"],
            description=result["description"],
            priority=result["priority"],
            time_estimate=result["timeEstimate"],
            due_date=due_date,
        )
        logger.debug(f"OpenAI suggested task: {suggestion.title[:50]}")
        return suggestion

    def generate_report(self, log_content: str) -> ProductivityReport:
        """Generate a productivity report from raw JSONL log content.

        Only the top-level shape is validated: summaryText (string),
        chartData (object) and insights (array).
        """
        system_prompt = REPORT_SYSTEM_PROMPT.format(
            min_insights=MIN_REPORT_INSIGHTS,
            category_rules=describe_categories(),
        )
        result = self._complete_json(
            [
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": f"Log entries (JSONL format):\n{log_content}"},
            ],
            temperature=0.7,
        )

        try:
            report = ProductivityReport.model_validate(result)
        except PydanticValidationError as e:
            logger.warning(f"OpenAI report did not match expected structure: {e.error_count()} errors")
            raise MalformedModelOutputError("OpenAI report response did not match expected structure.") from e

        if len(report.insights) < MIN_REPORT_INSIGHTS:
            logger.warning(f"OpenAI report returned {len(report.insights)} insights (asked for {MIN_REPORT_INSIGHTS})")
        return report

    def answer_question(
        self,
        question: str,
        tasks: List[Dict[str, Any]],
        log_entries: List[Dict[str, Any]],
        now: Optional[datetime] = None,
    ) -> str:
        """Answer a question using only the supplied tasks and log entries.

        Returns:
            The model's answer, verbatim
        """
        now = now or datetime.utcnow()
        system_prompt = CHAT_SYSTEM_PROMPT.format(
            now=now.strftime("%A, %B %d, %Y %H:%M:%S UTC"),
            tasks_json=json.dumps(tasks, indent=2, default=str),
            log_json=json.dumps(log_entries, indent=2, default=str),
        )
        return self._complete(
            [
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": question},
            ],
            temperature=0.5,
        )
