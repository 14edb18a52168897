"""Schemas for study suggestions produced by the plan generator."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from app.config import settings
from app.schemas.study_plan import StudyPlan


def _as_text(value: Any) -> str:
    if value is None:
        return ""
    return str(value)


class SuggestedMethod(BaseModel):
    """One study method as the generator returns it.

    ``application`` is a numbered-sentence string ("1. Do X 2. Do Y").
    """

    method: str = ""
    application: str = ""
    rationale: str = ""

    @field_validator("method", "application", "rationale", mode="before")
    @classmethod
    def _coerce_text(cls, value: Any) -> str:
        return _as_text(value)


class StudySuggestion(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    title: str = ""
    description: str = ""
    suggested_duration: int = Field(default=0, alias="suggestedDuration", validate_default=True)
    study_methods: list[SuggestedMethod] = Field(default_factory=list, alias="studyMethods")

    @field_validator("title", "description", mode="before")
    @classmethod
    def _coerce_text(cls, value: Any) -> str:
        return _as_text(value)

    @field_validator("suggested_duration", mode="before")
    @classmethod
    def _coerce_duration(cls, value: Any) -> int:
        try:
            duration = int(float(value))
        except (TypeError, ValueError, OverflowError):
            return settings.default_suggested_duration
        if duration <= 0:
            return settings.default_suggested_duration
        return duration

    @field_validator("study_methods", mode="before")
    @classmethod
    def _coerce_methods(cls, value: Any) -> list[Any]:
        if not isinstance(value, list):
            return []
        return [item for item in value if isinstance(item, (dict, SuggestedMethod))]


class SuggestionsPayload(BaseModel):
    suggestions: list[StudySuggestion]

    @model_validator(mode="before")
    @classmethod
    def _wrap_bare_list(cls, data: Any) -> Any:
        # Generators sometimes reply with the array alone.
        if isinstance(data, list):
            return {"suggestions": data}
        return data


class SuggestionsRequest(BaseModel):
    """Either structured suggestions or the generator's raw JSON text."""

    suggestions: list[StudySuggestion] | None = None
    raw: str | None = None


class SuggestionDescription(BaseModel):
    title: str
    suggested_duration: int
    description: str
    plan: StudyPlan


class SuggestionsResponse(BaseModel):
    items: list[SuggestionDescription] = Field(default_factory=list)
