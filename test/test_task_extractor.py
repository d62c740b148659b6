import asyncio

import httpx
import pytest

from care_assistant.errors import LocalPipelineFailure
from extraction.task_extractor import (
    LOCAL_NOTE,
    MAX_TASKS,
    TaskExtractor,
    extract_general_task,
    generate_summary,
    split_clauses,
)
from llm.llm_client import LLMClient, RemoteFailure, RemoteSuccess

NOTE = "(Note: Using local processing due to API unavailability)"


def _extract(extractor: TaskExtractor, text: str):
    return asyncio.run(extractor.extract(text))


def test_remote_tasks_are_resolved(extractor_factory):
    raw = "This morning was busy. Pills at nine, then grandma."
    extractor, provider = extractor_factory({
        "tasks": [
            {"text": "take my pills at 9 AM"},
            {"text": "visit grandma", "category": "social"},
        ],
        "summary": "Two things.",
    })
    result = _extract(extractor, raw)

    assert provider.messages == [raw]
    assert result.path == "remote"
    assert result.summary == "Two things."
    assert result.confidence == pytest.approx(0.9)

    pills, grandma = result.tasks
    assert pills.text == "Take my pills at 9 AM."
    assert (pills.priority, pills.category, pills.time_context) == ("high", "medication", "at 9 AM")
    assert pills.completed is False
    assert pills.extracted_from == raw
    assert (grandma.priority, grandma.category, grandma.time_context) == ("low", "social", None)
    assert pills.id != grandma.id


def test_remote_values_outside_the_enumerations_are_replaced(extractor_factory):
    extractor, _ = extractor_factory({"tasks": [{"text": "Call mom", "priority": "URGENT", "category": "Social"}]})
    task = _extract(extractor, "Please remind me to call mom").tasks[0]
    assert task.priority == "low"
    assert task.category == "social"


def test_remote_time_context_is_kept(extractor_factory):
    extractor, _ = extractor_factory({"tasks": [{"text": "Buy bread", "timeContext": "today"}]})
    task = _extract(extractor, "I ran out of bread this week").tasks[0]
    assert task.time_context == "today"
    assert task.priority == "high"


def test_remote_without_candidates_synthesizes_one_task(extractor_factory):
    extractor, _ = extractor_factory({"response": "I'm not sure what you mean."})
    raw = "My garden looks lovely in the spring sunshine"
    result = _extract(extractor, raw)

    assert result.path == "remote"
    assert result.summary == "I'm not sure what you mean."
    assert result.confidence == pytest.approx(0.85)
    [task] = result.tasks
    assert task.text == "My garden looks lovely in the spring sunshine."
    assert (task.priority, task.category) == ("medium", "other")
    assert task.extracted_from == raw


def test_remote_without_summary_gets_generated_one(extractor_factory):
    extractor, _ = extractor_factory([{"output": '```json\n{"a": 1}\n```'}])
    result = _extract(extractor, "My garden looks lovely in the spring sunshine")
    assert result.summary == (
        "I found 1 task from your input. "
        "Your caregiver can review and modify these tasks as needed."
    )


def test_remote_result_is_truncated(extractor_factory):
    extractor, _ = extractor_factory({"tasks": [f"Call friend number {i}" for i in range(12)]})
    result = _extract(extractor, "I want to call all my friends today")
    assert len(result.tasks) == MAX_TASKS
    assert result.tasks[0].text == "Call friend number 0."
    assert result.tasks[-1].text == "Call friend number 9."
    assert result.confidence == pytest.approx(0.95)


def test_local_fallback_scenario(offline_extractor):
    raw = "I need to take my medication at 9 AM and call my daughter later today."
    result = _extract(offline_extractor, raw)

    assert result.path == "local"
    assert result.fallback_reason == "network"
    medication, call = result.tasks
    assert medication.text == "Take my medication at 9 AM."
    assert (medication.category, medication.priority, medication.time_context) == ("medication", "high", "at 9 AM")
    assert call.text == "Call my daughter later today."
    assert (call.category, call.priority, call.time_context) == ("social", "high", "today")
    assert medication.extracted_from == raw.rstrip(".")

    assert result.summary == (
        "I found 2 tasks from your input. 2 are high priority. "
        "These include medication, social activities. "
        "Your caregiver can review and modify these tasks as needed." + LOCAL_NOTE
    )
    assert result.confidence == pytest.approx(0.64)


def test_local_pipeline_skips_short_and_non_actionable_sentences(offline_extractor):
    raw = "Call Bo. The sun was nice. Remember to buy bread and butter for breakfast!"
    result = _extract(offline_extractor, raw)
    [task] = result.tasks
    assert task.text == "Buy bread and butter for breakfast."
    assert task.extracted_from == "Remember to buy bread and butter for breakfast"


def test_local_pipeline_without_matches_synthesizes_one_task(offline_extractor):
    raw = "My garden looks lovely in the spring sunshine"
    result = _extract(offline_extractor, raw)
    [task] = result.tasks
    assert task.text == "My garden looks lovely in the spring sunshine."
    assert (task.priority, task.category) == ("medium", "other")
    assert result.summary.endswith(NOTE)
    assert result.confidence == pytest.approx(0.56)


def test_local_pipeline_is_capped(offline_extractor):
    raw = " ".join(f"I need to call person number {i}." for i in range(12))
    result = _extract(offline_extractor, raw)
    assert len(result.tasks) == MAX_TASKS
    assert result.confidence == pytest.approx(0.76)
    assert result.summary.startswith(f"I found {MAX_TASKS} tasks from your input.")


def test_blank_input_does_not_reach_remote(extractor_factory):
    extractor, provider = extractor_factory({"tasks": ["Call mom"]})
    result = _extract(extractor, "   ")
    assert provider.messages == []
    assert result.path == "local"
    assert [t.text for t in result.tasks] == ["General reminder."]


def test_unreadable_payload_falls_back_to_local(extractor_factory):
    extractor, _ = extractor_factory({"tasks": [None]})
    result = _extract(extractor, "Remember to clean the bathroom this afternoon.")
    assert result.path == "local"
    assert result.fallback_reason == "adapter"
    assert result.summary.endswith(NOTE)
    assert result.tasks[0].category == "household"


@pytest.mark.parametrize("payload", [None, [None], [None, {"output": "x"}]])
def test_null_payload_falls_back_to_local(extractor_factory, payload):
    extractor, _ = extractor_factory(payload)
    result = _extract(extractor, "I need to take my medication at 9 AM.")
    assert result.path == "local"
    assert result.fallback_reason == "adapter"
    assert NOTE in result.summary
    assert result.tasks[0].category == "medication"
    assert result.tasks[0].priority == "high"


@pytest.mark.parametrize(
    "raw",
    [
        "I need to take my medication at 9 AM and call my daughter later today.",
        "Nothing much happened.",
        "x",
        "Walk. Eat. Sleep.",
    ],
)
def test_failed_remote_always_yields_tasks_and_note(offline_extractor, raw):
    result = _extract(offline_extractor, raw)
    assert 1 <= len(result.tasks) <= MAX_TASKS
    assert NOTE in result.summary


def test_local_pipeline_failure_is_raised(offline_extractor, monkeypatch):
    def broken(raw_input):
        raise RuntimeError("boom")

    monkeypatch.setattr(offline_extractor, "extract_locally", broken)
    with pytest.raises(LocalPipelineFailure):
        _extract(offline_extractor, "I need to call my son")


def test_dispatch_takes_tagged_results():
    extractor = TaskExtractor(llm_client=LLMClient(provider=None))
    remote = extractor.dispatch(RemoteSuccess({"tasks": ["Call mom"]}), "Call mom please")
    local = extractor.dispatch(RemoteFailure("status", "HTTP 502"), "Call mom please")
    assert remote.path == "remote"
    assert local.path == "local"
    assert local.fallback_reason == "status"


def test_concurrent_extractions(extractor_factory):
    extractor, _ = extractor_factory({"tasks": ["Call mom"]})

    async def run():
        return await asyncio.gather(*(extractor.extract(f"Call mom, take {i}") for i in range(5)))

    results = asyncio.run(run())
    ids = {r.tasks[0].id for r in results}
    assert len(ids) == 5


def test_split_clauses():
    assert split_clauses("take my pills and call my son") == ["take my pills", "call my son"]
    assert split_clauses("I should walk; then I must eat") == ["I should walk", "then I must eat"]
    assert split_clauses("buy bread and butter") == ["buy bread and butter"]


def test_extract_general_task_limits():
    words = " ".join(f"word{i}" for i in range(20))
    assert extract_general_task(words) == "Word0 " + " ".join(f"word{i}" for i in range(1, 15)) + "."

    long_words = " ".join(["abcdefghij"] * 15)
    text = extract_general_task(long_words)
    assert len(text) == 100
    assert text.endswith("...")

    assert extract_general_task("") == "General reminder."


def test_generate_summary_with_no_tasks():
    assert "general reminder" in generate_summary([])
