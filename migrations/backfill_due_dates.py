"""Maintenance script to backfill missing task due dates.

Every task without a due date gets one a fixed number of days from now
(see BACKFILL_DUE_DATE_DAYS), so it shows up on the calendar on a date
the user chose rather than on its creation day.
"""

import sys
import os
from datetime import datetime, timedelta

# Add parent directory to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from taskwise.database.database import SessionLocal, init_db
from taskwise.database.repository import TaskRepository
from taskwise.models.constants import BACKFILL_DUE_DATE_DAYS


def backfill_due_dates(db=None, now=None) -> int:
    """Set dueDate = now + BACKFILL_DUE_DATE_DAYS on tasks that have none.

    Returns the number of tasks updated.
    """
    owns_session = db is None
    if owns_session:
        db = SessionLocal()

    try:
        repo = TaskRepository(db)
        tasks = repo.get_without_due_date()
        if not tasks:
            print("No tasks need a due date.")
            return 0

        now = now or datetime.utcnow()
        due_date = now + timedelta(days=BACKFILL_DUE_DATE_DAYS)
        print(f"Found {len(tasks)} tasks without a due date; setting {due_date.isoformat()}Z")

        for task in tasks:
            repo.update(task.model_copy(update={"due_date": due_date, "updated_at": now}))

        print(f"Successfully updated {len(tasks)} tasks.")
        return len(tasks)
    except Exception as e:
        print(f"Error during backfill: {e}")
        raise
    finally:
        if owns_session:
            db.close()


if __name__ == "__main__":
    print("=" * 60)
    print("Task Due Date Backfill Script")
    print("=" * 60)
    print()
    print(f"This script will set a due date {BACKFILL_DUE_DATE_DAYS} days from now")
    print("on every task that has none.")
    print()

    response = input("Do you want to proceed? (yes/no): ")
    if response.lower() in ['yes', 'y']:
        init_db()
        backfill_due_dates()
        print()
        print("Backfill complete!")
    else:
        print("Backfill cancelled.")
