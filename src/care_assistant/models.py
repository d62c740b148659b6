from __future__ import annotations

import uuid
from typing import Literal, Optional, List, get_args

from pydantic import BaseModel, ConfigDict, Field, field_validator


Priority = Literal["high", "medium", "low"]
Category = Literal["medication", "appointment", "personal", "social", "household", "other"]

PRIORITIES = get_args(Priority)
CATEGORIES = get_args(Category)

CAREGIVER_MARKER = "Added by caregiver"


def new_task_id() -> str:
    return uuid.uuid4().hex


class Task(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    id: str = Field(default_factory=new_task_id)
    text: str = Field(..., min_length=1)
    priority: Priority = "medium"
    category: Category = "other"
    time_context: Optional[str] = Field(default=None, alias="timeContext")
    completed: bool = False
    extracted_from: str = Field(..., alias="extractedFrom")

    @field_validator("text")
    @classmethod
    def text_not_blank(cls, v: str) -> str:
        v2 = v.strip()
        if not v2:
            raise ValueError("text must not be blank")
        return v2

    def to_json(self) -> dict:
        return self.model_dump(by_alias=True)


class CandidateTask(BaseModel):
    """Task description before time/priority/category resolution.

    Remote services may send any of the optional fields; whatever is missing
    (or is not a known enumeration value) is filled in by the heuristics.
    """
    model_config = ConfigDict(populate_by_name=True)

    text: str
    priority: Optional[str] = None
    category: Optional[str] = None
    time_context: Optional[str] = Field(default=None, alias="timeContext")


class TaskUpdate(BaseModel):
    """Whole-field partial update. `id` and `extractedFrom` cannot be changed."""
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    text: Optional[str] = Field(default=None, min_length=1)
    priority: Optional[Priority] = None
    category: Optional[Category] = None
    time_context: Optional[str] = Field(default=None, alias="timeContext")
    completed: Optional[bool] = None

    @field_validator("text")
    @classmethod
    def text_not_blank(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return v
        v2 = v.strip()
        if not v2:
            raise ValueError("text must not be blank")
        return v2


ExtractionPath = Literal["remote", "local"]


class ExtractionResult(BaseModel):
    tasks: List[Task] = Field(default_factory=list)
    summary: str = ""
    confidence: float = Field(0.0, ge=0.0, le=1.0)
    path: ExtractionPath = "remote"
    # why the local pipeline ran; None on the remote path
    fallback_reason: Optional[str] = None

    def to_json(self) -> dict:
        return {
            "tasks": [t.to_json() for t in self.tasks],
            "summary": self.summary,
            "confidence": self.confidence,
            "path": self.path,
        }
