"""Schemas for structured study plans and their stored description text."""

from __future__ import annotations

from pydantic import BaseModel, Field


class StudyMethod(BaseModel):
    name: str
    steps: list[str] = Field(default_factory=list)
    rationale: str = ""


class StudyPlan(BaseModel):
    """A study plan as shown on a calendar event.

    ``title`` is stored beside the description, not inside it.
    """

    title: str = ""
    learning_objectives: list[str] = Field(default_factory=list)
    overview: str = ""
    study_methods: list[StudyMethod] = Field(default_factory=list)


class DescriptionResponse(BaseModel):
    description: str


class DecodeRequest(BaseModel):
    description: str
    title: str | None = None


class DecodedPlanResponse(BaseModel):
    plan: StudyPlan
    is_study_event: bool
    overview_sentences: list[str] = Field(default_factory=list)
    markdown: str
