from datetime import date

from care_assistant.models import Task
from scheduling.calendar_view import tasks_for_date

TODAY = date(2026, 1, 5)  # a Monday


def _task(text: str, time_context=None) -> Task:
    return Task(text=text, time_context=time_context, extracted_from="input")


TASKS = [
    _task("Pills.", "this morning"),
    _task("Call Anna.", "Tomorrow"),
    _task("Hairdresser.", "Friday"),
    _task("Read.", None),
    _task("Doctor.", "at 2 PM"),
]


def _texts(day: date):
    return [t.text for t in tasks_for_date(TASKS, day, today=TODAY)]


def test_same_day_phrases_land_on_today():
    assert _texts(TODAY) == ["Pills."]


def test_tomorrow():
    assert _texts(date(2026, 1, 6)) == ["Call Anna."]


def test_weekday_within_the_coming_week():
    assert _texts(date(2026, 1, 9)) == ["Hairdresser."]
    assert _texts(date(2026, 1, 16)) == []


def test_tasks_without_dates_never_show():
    assert _texts(date(2026, 1, 7)) == []
