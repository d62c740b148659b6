from __future__ import annotations

import json
import logging
import re
from dataclasses import dataclass, field
from typing import Any, List

from care_assistant.errors import AdapterParseFailure
from care_assistant.models import CandidateTask

logger = logging.getLogger(__name__)

SUCCESS_SUMMARY = "AI successfully processed your input."

_FENCED_JSON = re.compile(r"```json[ \t]*\n(.*?)\n?[ \t]*```", re.DOTALL)
# "1. first 2. second" or one item per line; "9.30" is not a list marker.
_NUMBERED_ITEM = re.compile(r"\d+\.(?!\d)\s*(.+?)(?=\s*\d+\.(?!\d)|\Z)", re.DOTALL)


@dataclass
class AdapterResult:
    candidates: List[CandidateTask] = field(default_factory=list)
    summary: str = ""
    failed: bool = False


def _item_text(item: Any) -> str:
    if isinstance(item, dict):
        for key in ("text", "task", "description"):
            value = item.get(key)
            if value:
                return str(value)
    return str(item)


def _optional_str(value: Any):
    return str(value) if value else None


def _candidate_from_item(item: Any) -> CandidateTask:
    if isinstance(item, (str, int, float)) and not isinstance(item, bool):
        return CandidateTask(text=_item_text(item))
    if not isinstance(item, dict):
        raise AdapterParseFailure(f"unsupported task item: {item!r}")
    return CandidateTask(
        text=_item_text(item),
        priority=_optional_str(item.get("priority")),
        category=_optional_str(item.get("category")),
        time_context=_optional_str(item.get("timeContext") or item.get("time_context")),
    )


def parse_numbered_list(text: str) -> List[CandidateTask]:
    """Read "N. text" items out of prose; the first two count as high priority."""
    candidates = []
    for match in _NUMBERED_ITEM.finditer(text):
        item = match.group(1).strip()
        if not item:
            continue
        priority = "high" if len(candidates) < 2 else "medium"
        candidates.append(CandidateTask(text=item, priority=priority, category="other"))
    return candidates


def _parse_fenced_output(output: str) -> AdapterResult:
    match = _FENCED_JSON.search(output)
    if not match:
        return AdapterResult(summary=output)
    try:
        parsed = json.loads(match.group(1))
    except ValueError:
        return AdapterResult(summary=output)
    if not isinstance(parsed, list):
        return AdapterResult()
    return AdapterResult(
        candidates=[_candidate_from_item(item) for item in parsed],
        summary=SUCCESS_SUMMARY,
    )


def _parse(payload: Any) -> AdapterResult:
    if payload is None:
        raise AdapterParseFailure("empty response body")
    if isinstance(payload, list) and payload:
        first = payload[0]
        if first is None:
            raise AdapterParseFailure("first response item is null")
        if isinstance(first, dict) and first.get("output"):
            return _parse_fenced_output(str(first["output"]))

    if isinstance(payload, dict):
        tasks = payload.get("tasks")
        if isinstance(tasks, list):
            return AdapterResult(
                candidates=[_candidate_from_item(item) for item in tasks],
                summary=str(payload.get("summary") or SUCCESS_SUMMARY),
            )
        response = payload.get("response")
        if isinstance(response, str):
            return AdapterResult(candidates=parse_numbered_list(response), summary=response)

    if isinstance(payload, str):
        return AdapterResult(candidates=parse_numbered_list(payload), summary=payload)

    return AdapterResult()


def adapt_response(payload: Any) -> AdapterResult:
    """Normalize a remote extraction payload into candidate tasks and a summary.

    Understood shapes, checked in this order:
      - ``[{"output": "```json\\n[...]\\n```"}]``
      - ``{"tasks": [...], "summary": "..."}``
      - ``{"response": "1. ... 2. ..."}``
      - a bare string with a numbered list

    A payload that cannot be read yields ``failed=True`` with no candidates
    and an empty summary; the caller then falls back to local extraction.
    """
    try:
        return _parse(payload)
    except Exception as e:
        logger.warning("Could not adapt remote response: %s", e)
        return AdapterResult(failed=True)
