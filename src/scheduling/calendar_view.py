from __future__ import annotations

from datetime import date, timedelta
from typing import Iterable, List, Optional

from care_assistant.models import Task

SAME_DAY_PHRASES = ("today", "this morning", "this afternoon", "tonight")
WEEKDAYS = ("monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday")


def task_falls_on(task: Task, day: date, today: date) -> bool:
    """Whether a task's time context places it on `day`.

    Relative phrases are resolved against `today`; weekday names refer to the
    next occurrence within the coming week (today included).
    """
    if not task.time_context:
        return False
    context = task.time_context.lower()

    if day == today and any(p in context for p in SAME_DAY_PHRASES):
        return True
    if day == today + timedelta(days=1) and "tomorrow" in context:
        return True

    offset = (day - today).days
    if 0 <= offset < 7 and WEEKDAYS[day.weekday()] in context:
        return True
    return False


def tasks_for_date(tasks: Iterable[Task], day: date, today: Optional[date] = None) -> List[Task]:
    today = today or date.today()
    return [t for t in tasks if task_falls_on(t, day, today)]
