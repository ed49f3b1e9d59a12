"""Markdown rendering of the guide page."""

from __future__ import annotations

import re
from collections.abc import Collection, Sequence
from dataclasses import dataclass

from codebase_guide.guide import FileCandidate, NextSuggestion, WalkthroughStep
from codebase_guide.guide.protocols import LabelFn
from codebase_guide.session import ActiveContext

NOT_ASKED_TEXT = "Ask a question to get evidence from the current file."
NO_MATCHES_TEXT = "No direct matches found in the current file."
NO_ENTRY_POINTS_TEXT = "No common entry points found. Use guide.list_files to browse all files."

_BACKTICK_RUN = re.compile(r"`+")


@dataclass(slots=True, frozen=True)
class GuideCard:
    """Suggested file shown on the page."""

    label: str
    reason: str
    path: str
    learned: bool

    @property
    def action(self) -> str:
        return "Review" if self.learned else "Learn"


def inline_code(text: str) -> str:
    """Wrap text in a code span whose fence is longer than any backtick run inside it."""
    longest = max((len(run) for run in _BACKTICK_RUN.findall(text)), default=0)
    fence = "`" * (longest + 1)
    if longest:
        return f"{fence} {text} {fence}"
    return f"{fence}{text}{fence}"


def build_cards(
    suggestions: Sequence[FileCandidate],
    walkthrough: Sequence[WalkthroughStep],
    learned: Collection[str],
    label_for: LabelFn,
) -> list[GuideCard]:
    """Suggestions first, then walkthrough targets not already shown."""
    cards: list[GuideCard] = []
    seen: set[str] = set()
    for suggestion in suggestions:
        if suggestion.path in seen:
            continue
        seen.add(suggestion.path)
        cards.append(
            GuideCard(
                label=suggestion.label,
                reason=suggestion.reason,
                path=suggestion.path,
                learned=suggestion.path in learned,
            )
        )
    for step in walkthrough:
        if step.target is None or step.target in seen:
            continue
        seen.add(step.target)
        cards.append(
            GuideCard(
                label=label_for(step.target),
                reason=f"{step.title}: {step.details}",
                path=step.target,
                learned=step.target in learned,
            )
        )
    return cards


def render_guide_markdown(
    *,
    frameworks: Sequence[str],
    cards: Sequence[GuideCard],
    context: ActiveContext,
    next_suggestions: Sequence[NextSuggestion],
) -> str:
    lines = ["# Codebase Guide", ""]
    lines.append("Select a file to start learning. The guide never modifies your files.")
    lines.append("")
    lines.append(f"Detected: {', '.join(frameworks)}" if frameworks else "Detected: none")
    lines.append("")

    summary = context.summary
    if summary is not None:
        lines.append(f"## File Summary: {summary.display_path}")
        lines.append(f"- lines: `{summary.line_count}`")
        if summary.headings:
            lines.append(f"- headings: {', '.join(summary.headings)}")
        if summary.exported_names:
            lines.append(f"- exports: {', '.join(summary.exported_names)}")
        if summary.declarations:
            lines.append("- key declarations:")
            for declaration in summary.declarations:
                lines.append(f"  - {declaration.name} (L{declaration.line})")
        lines.append("")

        lines.append("## Ask a Question")
        answer = context.answer
        if answer is None:
            lines.append(NOT_ASKED_TEXT)
        else:
            lines.append(f"**Q:** {answer.question}")
            lines.append("")
            lines.append(answer.message)
            if answer.evidence:
                lines.append("")
                lines.append("Highlighted lines:")
                for item in answer.evidence:
                    lines.append(f"- L{item.line}: {inline_code(item.text)}")
            else:
                lines.append("")
                lines.append(NO_MATCHES_TEXT)
        lines.append("")

        if next_suggestions:
            lines.append("## Explore Next")
            for suggestion in next_suggestions:
                lines.append(f"- {inline_code(suggestion.label)}: {suggestion.reason}")
            lines.append("")

    lines.append("## Select a File")
    if not cards:
        lines.append(NO_ENTRY_POINTS_TEXT)
    for card in cards:
        lines.append(f"- [{card.action}] {inline_code(card.label)}: {card.reason}")
    return "\n".join(lines).rstrip() + "\n"
