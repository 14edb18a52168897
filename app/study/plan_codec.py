"""Encode/decode study plans to and from the stored event description text.

The description is a single text field. A study plan is packed into it as::

    Learning objectives:
    (1) First objective
    (2) Second objective

    Overview prose.

    Study Methods:
    Retrieval Practice
    Step-by-Step Application:
    • First step
    • Second step

    Why This Method Works:
    Rationale prose.
    ---
    Next Method
    ...

``decode`` never raises: text missing any of the markers degrades to empty
objectives / methods with the remaining text kept as the overview.
"""

from __future__ import annotations

import logging

from pydantic import ValidationError

from app.schemas.study_plan import StudyMethod, StudyPlan
from app.utils.constants import (
    APPLICATION_MARKER,
    METHOD_SEPARATOR,
    METHOD_SEPARATOR_RE,
    METHODS_MARKER,
    OBJECTIVE_INDEX_RE,
    OBJECTIVES_MARKER,
    RATIONALE_MARKER,
    SECTION_BREAK,
    STEP_BULLET,
)

logger = logging.getLogger(__name__)


def encode(plan: StudyPlan) -> str:
    """Render ``plan`` (minus its title) into description text."""
    parts = [OBJECTIVES_MARKER + "\n"]
    for index, objective in enumerate(plan.learning_objectives, start=1):
        parts.append(f"({index}) {objective}\n")
    parts.append("\n")
    parts.append(plan.overview)

    if plan.study_methods:
        parts.append(SECTION_BREAK + METHODS_MARKER + "\n")
        parts.append(
            (METHOD_SEPARATOR + "\n").join(_encode_method(method) for method in plan.study_methods)
        )
    return "".join(parts)


def _encode_method(method: StudyMethod) -> str:
    lines = [method.name, APPLICATION_MARKER]
    lines.extend(f"{STEP_BULLET} {step}" for step in method.steps)
    lines.append("")
    lines.append(RATIONALE_MARKER)
    lines.append(method.rationale)
    return "\n".join(lines) + "\n"


def decode(text: str | None, title: str | None = None) -> StudyPlan:
    """Recover the structured plan from description text.

    Parameters
    ----------
    text : str | None
        Stored description; any string is accepted.
    title : str | None
        Event title stored beside the description, reattached as-is.

    Returns
    -------
    StudyPlan
    """
    text = (text or "").replace("\r\n", "\n")
    head, has_methods, methods_text = text.partition(METHODS_MARKER)

    objectives: list[str] = []
    if OBJECTIVES_MARKER in head:
        after = head.partition(OBJECTIVES_MARKER)[2]
        block, _, rest = after.partition(SECTION_BREAK)
        objectives = _split_objectives(block)
        overview = rest.strip()
    else:
        overview = head.strip()

    methods = _decode_methods(methods_text) if has_methods else []
    if not objectives and not methods and text.strip():
        logger.debug("Description has no study-plan sections; kept as overview")

    return StudyPlan(
        title=title or "",
        learning_objectives=objectives,
        overview=overview,
        study_methods=methods,
    )


def _split_objectives(block: str) -> list[str]:
    return [part.strip() for part in OBJECTIVE_INDEX_RE.split(block) if part.strip()]


def _decode_methods(methods_text: str) -> list[StudyMethod]:
    methods = []
    for chunk in METHOD_SEPARATOR_RE.split(methods_text):
        method = _decode_method(chunk)
        if method is not None:
            methods.append(method)
    return methods


def _find_line(lines: list[str], marker: str) -> int:
    for idx, line in enumerate(lines):
        if line.strip() == marker:
            return idx
    return -1


def _strip_bullet(line: str) -> str:
    return line.strip()[len(STEP_BULLET):].strip()


def _decode_method(chunk: str) -> StudyMethod | None:
    name, _, body = chunk.strip().partition("\n")
    name = name.strip()
    details = body.split("\n") if body else []

    application_start = _find_line(details, APPLICATION_MARKER)
    rationale_start = _find_line(details, RATIONALE_MARKER)
    steps_end = rationale_start if rationale_start != -1 else len(details)

    steps = []
    for line in details[application_start + 1 : steps_end]:
        if not line.strip().startswith(STEP_BULLET):
            continue
        step = _strip_bullet(line)
        if step:
            steps.append(step)

    rationale = ""
    if rationale_start != -1:
        rationale = "\n".join(details[rationale_start + 1 :]).strip()

    if not name or not steps:
        return None
    return StudyMethod(name=name, steps=steps, rationale=rationale)


def is_study_description(text: str | None) -> bool:
    """Return True when ``text`` carries the learning-objectives section."""
    return bool(text) and OBJECTIVES_MARKER in text


def split_overview_sentences(overview: str) -> list[str]:
    """Split overview prose on ". " into display sentences ending with a period."""
    sentences = []
    for sentence in overview.split(". "):
        sentence = sentence.strip().rstrip(".").strip()
        if sentence:
            sentences.append(sentence + ".")
    return sentences


def dump_plan_json(plan: StudyPlan) -> str:
    """Serialize ``plan`` (minus its title) as JSON for marker-free storage."""
    return plan.model_dump_json(exclude={"title"})


def load_plan_json(text: str, title: str | None = None) -> StudyPlan:
    """Load a plan stored by ``dump_plan_json``.

    Raises
    ------
    ValueError
        If ``text`` is not a JSON study plan.
    """
    try:
        plan = StudyPlan.model_validate_json(text)
    except ValidationError as exc:
        raise ValueError("Description is not a JSON study plan.") from exc
    if title is not None:
        plan = plan.model_copy(update={"title": title})
    return plan
