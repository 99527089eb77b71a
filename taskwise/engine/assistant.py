"""AI assistant operations for TaskWise.

Input checks happen here, before the model is called: an empty suggestion
idea or chat question never reaches the provider. Each function takes its
client, event log and tasks as arguments.
"""

import logging
from datetime import datetime
from typing import Any, Dict, List, Optional, Union

from taskwise.errors import ValidationError
from taskwise.eventlog.event_log import EventLog
from taskwise.integrations.openai_client import OpenAIClient
from taskwise.models.constants import EMPTY_LOG_REPORT_MESSAGE
from taskwise.models.task import Task

logger = logging.getLogger(__name__)


def _require_text(value: Any, message: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(message)
    return value


def suggest_task(client: OpenAIClient, user_input: Any) -> Dict[str, Any]:
    """Turn free text into a task draft (wire shape)."""
    user_input = _require_text(user_input, "User input is required")
    suggestion = client.suggest_task(user_input)
    return suggestion.model_dump(by_alias=True)


def generate_report(client: OpenAIClient, event_log: EventLog) -> Union[str, Dict[str, Any]]:
    """Generate a productivity report from the full event log.

    Returns:
        The report object, or an informational string when nothing is logged yet
    """
    log_content = event_log.read_text()
    if not log_content.strip():
        logger.debug("Event log is empty; returning informational report message")
        return EMPTY_LOG_REPORT_MESSAGE

    report = client.generate_report(log_content)
    return report.model_dump(by_alias=True)


def answer_question(
    client: OpenAIClient,
    tasks: List[Task],
    event_log: EventLog,
    question: Any,
    now: Optional[datetime] = None,
) -> str:
    """Answer a free-text question about the stored tasks and their history."""
    question = _require_text(question, "Question is required")
    records = [task.to_record() for task in tasks]
    log_entries = event_log.read_entries()
    logger.debug(f"Answering question with {len(records)} tasks and {len(log_entries)} log entries")
    return client.answer_question(question, records, log_entries, now=now)
