"""Verdict parser — turns the raw model response into a :class:`Verdict`.

Two ordered rules:

1. The decision line ``DECISION: STAR|SKIP: <reason>`` gives the action and
   reason directly.
2. Only if no decision line matches, the literal ``STAR:`` anywhere in the text
   means STAR with no reason.  Nothing else is inferred, so the fallback can
   never produce SKIP; an unmatched response is UNKNOWN and leads to no action.
"""

from __future__ import annotations

import re

from repo_star_advisor.domain.entities import Verdict, VerdictAction

_ANALYSIS_RE = re.compile(r"ANALYSIS:\s*(.*?)(?=DECISION:|$)", re.DOTALL)
_DECISION_RE = re.compile(r"DECISION:\s*(STAR|SKIP):\s*(.*)")
_FALLBACK_MARKER = "STAR:"


def extract_analysis(text: str) -> str | None:
    """Return the text between ``ANALYSIS:`` and ``DECISION:`` (or the end)."""
    match = _ANALYSIS_RE.search(text)
    if not match:
        return None
    return match.group(1).strip()


def parse_verdict(raw: str) -> Verdict:
    """Parse a model response into a verdict.  Pure function of *raw*."""
    text = raw.strip()
    analysis = extract_analysis(text)

    decision = _DECISION_RE.search(text)
    if decision:
        return Verdict(
            action=VerdictAction(decision.group(1)),
            reason=decision.group(2).strip(),
            analysis=analysis,
        )

    if _FALLBACK_MARKER in text:
        return Verdict(action=VerdictAction.STAR, analysis=analysis, used_fallback=True)

    return Verdict(action=VerdictAction.UNKNOWN, analysis=analysis, used_fallback=True)
