"""Turn generated study suggestions into plans and stored descriptions.

The HTTP layer parses generator replies without a retry. ``parse_suggestions``
takes an optional ``retry_fn`` for library callers that hold a model client and
can ask it to repair a malformed reply once.
"""

from __future__ import annotations

import logging
from typing import Callable

from app.schemas.study_plan import StudyMethod, StudyPlan
from app.schemas.suggestion import (
    SuggestedMethod,
    SuggestionDescription,
    SuggestionsPayload,
    StudySuggestion,
)
from app.study.plan_codec import decode, encode
from app.utils.constants import APPLICATION_STEP_RE
from app.utils.llm_parse import parse_with_retry

logger = logging.getLogger(__name__)


def split_application(application: str) -> list[str]:
    """Split "1. Do X 2. Do Y" into ``["Do X", "Do Y"]``."""
    return [step.strip() for step in APPLICATION_STEP_RE.split(application or "") if step.strip()]


def _to_study_method(method: SuggestedMethod) -> StudyMethod:
    return StudyMethod(
        name=method.method.strip(),
        steps=split_application(method.application),
        rationale=method.rationale.strip(),
    )


def suggestion_to_plan(suggestion: StudySuggestion) -> StudyPlan:
    """Build a plan from a suggestion.

    Objectives and overview come from the suggestion description, which the
    generator writes in the "Learning objectives:" format. Methods without a
    name or without any step are dropped since they would not survive decoding.
    """
    base = decode(suggestion.description, title=suggestion.title)
    methods = []
    for method in suggestion.study_methods:
        study_method = _to_study_method(method)
        if not study_method.name or not study_method.steps:
            logger.info("Skipping study method without name or steps: %r", method.method)
            continue
        methods.append(study_method)
    return base.model_copy(update={"study_methods": methods})


def suggestion_to_description(suggestion: StudySuggestion) -> str:
    return encode(suggestion_to_plan(suggestion))


def describe_suggestions(suggestions: list[StudySuggestion]) -> list[SuggestionDescription]:
    items = []
    for suggestion in suggestions:
        plan = suggestion_to_plan(suggestion)
        items.append(
            SuggestionDescription(
                title=suggestion.title,
                suggested_duration=suggestion.suggested_duration,
                description=encode(plan),
                plan=plan,
            )
        )
    return items


def parse_suggestions(
    raw: str,
    retry_fn: Callable[[str], str] | None = None,
) -> list[StudySuggestion]:
    """Parse the generator's raw JSON reply into suggestions.

    Raises
    ------
    ValueError
        If the reply cannot be read as ``{"suggestions": [...]}``.
    """
    payload = parse_with_retry(raw, SuggestionsPayload, retry_fn)
    logger.info("Parsed %d study suggestions", len(payload.suggestions))
    return payload.suggestions
