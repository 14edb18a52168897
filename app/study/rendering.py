"""Markdown rendering of decoded study plans for display."""

from app.schemas.study_plan import StudyPlan
from app.study.plan_codec import split_overview_sentences


def render_markdown(plan: StudyPlan) -> str:
    title = plan.title or "Study Session"
    lines = [f"### {title}"]

    if plan.learning_objectives:
        lines.append("")
        lines.append("**Learning Objectives**")
        for index, objective in enumerate(plan.learning_objectives, start=1):
            lines.append(f"{index}. {objective}")

    sentences = split_overview_sentences(plan.overview)
    if sentences:
        lines.append("")
        lines.append("**Overview**")
        lines.extend(sentences)

    if plan.study_methods:
        lines.append("")
        lines.append("**Study Methods**")
        for method in plan.study_methods:
            lines.append("")
            lines.append(f"#### {method.name}")
            lines.append("Step-by-Step Application")
            lines.extend(f"- {step}" for step in method.steps)
            if method.rationale:
                lines.append("")
                lines.append(f"_Why this method works:_ {method.rationale}")

    return "\n".join(lines)
