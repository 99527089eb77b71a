"""Models for AI-generated content: task suggestions and productivity reports."""

from typing import Any, Dict, List, Optional, Union
from pydantic import BaseModel, Field

from taskwise.models.task import TaskPriority


class TaskSuggestion(BaseModel):
    """Structured task draft produced from free text."""

    title: str = Field(..., description="Concise, improved task title")
    description: str = Field(..., description="Detailed, actionable description")
    priority: TaskPriority = Field(..., description="Estimated priority")
    time_estimate: Union[int, float] = Field(..., alias="timeEstimate", description="Estimated minutes")
    due_date: Optional[str] = Field(None, alias="dueDate", description="Suggested ISO 8601 due date")

    class Config:
        """Pydantic configuration."""
        use_enum_values = True
        populate_by_name = True


class ProductivityReport(BaseModel):
    """Top-level shape of an AI productivity report.

    Nested values are passed through as returned by the model.
    """

    summary_text: str = Field(..., alias="summaryText")
    key_metrics: Dict[str, Any] = Field(default_factory=dict, alias="keyMetrics")
    chart_data: Dict[str, Any] = Field(..., alias="chartData")
    categorized_tasks_grid: List[Dict[str, Any]] = Field(default_factory=list, alias="categorizedTasksGrid")
    insights: List[Any] = Field(...)

    class Config:
        """Pydantic configuration."""
        populate_by_name = True
        extra = "allow"
