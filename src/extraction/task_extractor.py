from __future__ import annotations

import logging
import re
from typing import List, Optional, Sequence, Tuple

from care_assistant.errors import LocalPipelineFailure
from care_assistant.models import CATEGORIES, PRIORITIES, CandidateTask, ExtractionResult, Task
from classification.task_classifier import TaskClassifier, default_classifier
from extraction.text_normalizer import clean_task_text, extract_time_context, split_sentences
from llm.llm_client import LLMClient, RemoteFailure, RemoteResult, RemoteSuccess
from llm.response_adapter import AdapterResult, adapt_response

logger = logging.getLogger(__name__)

MAX_TASKS = 10
MIN_SENTENCE_CHARS = 10
FALLBACK_WORDS = 15
FALLBACK_MAX_CHARS = 100
GENERAL_REMINDER = "General reminder."

LOCAL_NOTE = " (Note: Using local processing due to API unavailability)"
CLOSING_SENTENCE = "Your caregiver can review and modify these tasks as needed."

# Phrases that mark a sentence as something the patient has to do.
ACTION_KEYWORDS = (
    "need to", "have to", "should", "must", "remember to", "don't forget",
    "call", "visit", "take", "go to", "buy", "pick up", "clean", "wash",
    "cook", "eat", "drink", "exercise", "walk", "shower", "brush",
    "appointment", "meeting", "medication", "pill", "medicine",
)

_CLAUSE_BREAK = re.compile(r"\s*;\s*|\s*,?\s+\b(?:and then|and|then|also|plus)\b\s+", re.IGNORECASE)


def is_actionable(text: str) -> bool:
    lowered = text.lower().replace("’", "'")
    return any(k in lowered for k in ACTION_KEYWORDS)


def split_clauses(sentence: str) -> List[str]:
    """Split "take my pills and call my son" into separate actions.

    Only splits when every part is actionable on its own; otherwise the
    sentence stays whole ("buy bread and butter").
    """
    parts = [p.strip() for p in _CLAUSE_BREAK.split(sentence) if p.strip()]
    if len(parts) > 1 and all(is_actionable(p) for p in parts):
        return parts
    return [sentence]


def extract_general_task(raw_input: str) -> str:
    task = " ".join(raw_input.split()[:FALLBACK_WORDS])
    if not task:
        return GENERAL_REMINDER
    if len(task) > FALLBACK_MAX_CHARS:
        task = task[: FALLBACK_MAX_CHARS - 3] + "..."
    return clean_task_text(task)


def generate_summary(tasks: Sequence[Task]) -> str:
    if not tasks:
        return (
            "I couldn't identify specific tasks from your input, "
            "but I've created a general reminder for you."
        )

    count = len(tasks)
    high = sum(1 for t in tasks if t.priority == "high")
    categories = list(dict.fromkeys(t.category for t in tasks))

    summary = f"I found {count} task{'s' if count > 1 else ''} from your input. "
    if high > 0:
        summary += f"{high} {'are' if high > 1 else 'is'} high priority. "
    if len(categories) > 1:
        summary += f"These include {', '.join(categories)} activities. "
    return summary + CLOSING_SENTENCE


def remote_confidence(task_count: int) -> float:
    return min(0.95, 0.8 + 0.05 * task_count)


def local_confidence(task_count: int) -> float:
    # local heuristics are trusted less than the remote service
    return min(0.95, 0.6 + 0.10 * task_count) * 0.8


class TaskExtractor:
    """Turns a free-text description of the patient's day into tasks.

    One remote attempt is made per call. If it fails in any way (network,
    status, decoding, unreadable payload) the rule-based local pipeline runs
    instead and the result is marked with lower confidence.
    """

    def __init__(self, llm_client: Optional[LLMClient] = None, classifier: Optional[TaskClassifier] = None):
        self.llm_client = llm_client or LLMClient()
        self.classifier = classifier or default_classifier

    async def extract(self, raw_input: str) -> ExtractionResult:
        message = raw_input.strip()
        if not message:
            remote: RemoteResult = RemoteFailure("empty", "nothing to send")
        else:
            remote = await self.llm_client.request(message)
        return self.dispatch(remote, raw_input)

    def dispatch(self, remote: RemoteResult, raw_input: str) -> ExtractionResult:
        if isinstance(remote, RemoteSuccess):
            adapted = adapt_response(remote.payload)
            if not adapted.failed:
                return self._remote_result(adapted, raw_input)
            remote = RemoteFailure("adapter", "unreadable response payload")

        logger.warning("Remote extraction unavailable (%s: %s), using local processing",
                       remote.reason, remote.detail)
        try:
            result = self.extract_locally(raw_input)
        except Exception as e:
            logger.exception("Local extraction failed")
            raise LocalPipelineFailure("Unable to process your input. Please try again later.") from e
        return result.model_copy(update={"fallback_reason": remote.reason})

    def _build_task(self, candidate: CandidateTask, extracted_from: str) -> Optional[Task]:
        source = candidate.text.strip()
        if not source:
            return None

        time_context = candidate.time_context or extract_time_context(source)

        priority = (candidate.priority or "").strip().lower()
        if priority not in PRIORITIES:
            priority = self.classifier.prioritize(source, time_context)

        category = (candidate.category or "").strip().lower()
        if category not in CATEGORIES:
            category = self.classifier.categorize(source)

        return Task(
            text=clean_task_text(source),
            priority=priority,
            category=category,
            time_context=time_context,
            completed=False,
            extracted_from=extracted_from,
        )

    def _fallback_task(self, raw_input: str) -> Task:
        return Task(
            text=extract_general_task(raw_input),
            priority="medium",
            category="other",
            extracted_from=raw_input,
        )

    def _finalize(self, pairs: Sequence[Tuple[CandidateTask, str]], raw_input: str) -> List[Task]:
        tasks = []
        for candidate, extracted_from in pairs:
            task = self._build_task(candidate, extracted_from)
            if task is not None:
                tasks.append(task)
        if not tasks:
            tasks.append(self._fallback_task(raw_input))
        # summaries and confidence are computed over this capped list
        return tasks[:MAX_TASKS]

    def _remote_result(self, adapted: AdapterResult, raw_input: str) -> ExtractionResult:
        tasks = self._finalize([(c, raw_input) for c in adapted.candidates], raw_input)
        logger.info("Remote extraction produced %d task(s)", len(tasks))
        return ExtractionResult(
            tasks=tasks,
            summary=adapted.summary or generate_summary(tasks),
            confidence=remote_confidence(len(tasks)),
            path="remote",
        )

    def local_candidates(self, raw_input: str) -> List[Tuple[CandidateTask, str]]:
        pairs = []
        for sentence in split_sentences(raw_input):
            if len(sentence) < MIN_SENTENCE_CHARS or not is_actionable(sentence):
                continue
            for clause in split_clauses(sentence):
                pairs.append((CandidateTask(text=clause), sentence))
        return pairs

    def extract_locally(self, raw_input: str) -> ExtractionResult:
        """Rule-based extraction that needs no network."""
        tasks = self._finalize(self.local_candidates(raw_input), raw_input)
        logger.info("Local extraction produced %d task(s)", len(tasks))
        return ExtractionResult(
            tasks=tasks,
            summary=generate_summary(tasks) + LOCAL_NOTE,
            confidence=local_confidence(len(tasks)),
            path="local",
        )
