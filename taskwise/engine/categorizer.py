"""Keyword-based task categorization used by productivity reports.

The same table is rendered into the report prompt, so category names in
AI reports and in ``classify_category`` stay identical.
"""

from typing import Optional, Sequence, Tuple

GENERAL_CATEGORY = "General"

# Checked in order; the first category with a matching keyword wins.
CATEGORY_KEYWORDS: Sequence[Tuple[str, Sequence[str]]] = (
    ("Reporting & Analysis", ("report", "analysis")),
    ("Development", ("code", "develop")),
    ("Meetings & Coordination", ("meeting", "schedule")),
    ("Cooking & Meals", ("grill", "cook", "food")),
    ("Maintenance & Repair", ("fix", "repair")),
    ("Housekeeping", ("clean", "organize")),
    ("Health & Fitness", ("exercise", "workout")),
)


def classify_category(title: str, description: Optional[str] = None) -> str:
    """Return the report category for a task's title and description."""
    text = f"{title or ''} {description or ''}".lower()

    for category, keywords in CATEGORY_KEYWORDS:
        if any(k in text for k in keywords):
            return category

    return GENERAL_CATEGORY


def describe_categories() -> str:
    """Render the keyword table as prompt text."""
    rules = []
    for category, keywords in CATEGORY_KEYWORDS:
        quoted = ", ".join('"' + k + '"' for k in keywords)
        rules.append(f'{quoted} -> "{category}"')
    rules.append(f'otherwise "{GENERAL_CATEGORY}"')
    return "; ".join(rules)
