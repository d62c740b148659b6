from __future__ import annotations

from typing import Optional, Sequence, Tuple

from care_assistant.models import Category, Priority


# (category, keywords), first match wins. "visit" is listed under both
# appointment and social; appointment comes first and therefore takes it.
CATEGORY_RULES: Sequence[Tuple[Category, Tuple[str, ...]]] = (
    ("medication", ("medication", "pill", "medicine", "doctor")),
    ("appointment", ("appointment", "visit", "meeting")),
    ("social", ("call", "phone", "visit", "family")),
    ("household", ("clean", "wash", "cook", "grocery")),
    ("personal", ("exercise", "walk", "shower", "eat")),
)

URGENT_KEYWORDS = ("urgent", "important", "asap", "immediately", "emergency")
MEDICATION_KEYWORDS = ("medication", "pill", "medicine")
SAME_DAY_KEYWORDS = ("today", "this morning", "this afternoon", "tonight")
SOON_KEYWORDS = ("tomorrow", "this week", "next week", "soon")

# (priority, keywords, also match "today" in the time context), first match wins.
PRIORITY_RULES: Sequence[Tuple[Priority, Tuple[str, ...], bool]] = (
    ("high", URGENT_KEYWORDS, False),
    ("high", MEDICATION_KEYWORDS, False),
    ("high", SAME_DAY_KEYWORDS, True),
    ("medium", SOON_KEYWORDS, False),
)


def _contains_any(text: str, keywords: Sequence[str]) -> bool:
    return any(k in text for k in keywords)


class TaskClassifier:
    """Keyword heuristics assigning a category and a priority to task text."""

    def __init__(
        self,
        category_rules: Sequence[Tuple[Category, Tuple[str, ...]]] = CATEGORY_RULES,
        priority_rules: Sequence[Tuple[Priority, Tuple[str, ...], bool]] = PRIORITY_RULES,
    ):
        self.category_rules = category_rules
        self.priority_rules = priority_rules

    def categorize(self, text: str) -> Category:
        lowered = text.lower()
        for category, keywords in self.category_rules:
            if _contains_any(lowered, keywords):
                return category
        return "other"

    def prioritize(self, text: str, time_context: Optional[str] = None) -> Priority:
        lowered = text.lower()
        context = (time_context or "").lower()
        for priority, keywords, check_context in self.priority_rules:
            if _contains_any(lowered, keywords):
                return priority
            if check_context and "today" in context:
                return priority
        return "low"

    def classify(self, text: str, time_context: Optional[str] = None) -> Tuple[Priority, Category]:
        return self.prioritize(text, time_context), self.categorize(text)


default_classifier = TaskClassifier()


def categorize_task(text: str) -> Category:
    return default_classifier.categorize(text)


def determine_priority(text: str, time_context: Optional[str] = None) -> Priority:
    return default_classifier.prioritize(text, time_context)
