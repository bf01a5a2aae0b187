"""ScoreCalculator — maps a response set to a bounded 0-100 profile score.

The calculation, for the scored questions only (q1, q2, q3, q4, q7, q8,
q10, q14; every other key is ignored):

  1. Each answered question adds its points to a raw total and bumps the
     answered-question counter.
  2. ``max_possible = answered * 10`` — a flat ceiling per question, even
     for questions whose own cap is lower.
  3. ``normalized = round_half_up(raw_total / max_possible * 100)``.
  4. A completion bonus (0/2/5/10) is added for 4/6/8+ answered questions.
  5. The result is clamped to 100.

The calculator is total: malformed answers fall back to the "unknown
value" branch of their question or count as unanswered, never raising.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Mapping
from typing import Any

from devprofile_scoring.answers import extract
from devprofile_scoring.constants import (
    COMPLETION_BONUS_TIERS,
    EXPERIENCE_DEFAULT,
    EXPERIENCE_SCORES,
    MAX_SCORE_PER_QUESTION,
    MAX_TOTAL_SCORE,
    NAME_ANSWER_SCORE,
    PROJECT_DEFAULT,
    PROJECT_SCORES,
    SPECIALIZATION_DEFAULT,
    SPECIALIZATION_SCORES,
    TECH_BREADTH_BONUS,
    TECH_BREADTH_THRESHOLD,
    TECH_POINTS_PER_ITEM,
    TECH_STACK_CAPS,
)
from devprofile_scoring.models.score import ScoreBreakdown

logger = logging.getLogger(__name__)

# Scalar enum questions: qid -> (lookup table, score for unknown values)
_ENUM_QUESTIONS: dict[str, tuple[dict[str, int], int]] = {
    "q2": (EXPERIENCE_SCORES, EXPERIENCE_DEFAULT),
    "q3": (SPECIALIZATION_SCORES, SPECIALIZATION_DEFAULT),
    "q14": (PROJECT_SCORES, PROJECT_DEFAULT),
}


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero for positives."""
    return math.floor(value + 0.5)


def calculate_tech_stack_score(techs: Any, cap: int) -> int:
    """Score a list of selected technologies against the question's cap.

    ``min(min(n * 2, cap) + (2 if n >= 3 else 0), cap)`` where ``n`` is
    ``len(techs)``.  A string is scored by its length, like any other
    sized answer.  Empty or unsized selections score 0.
    """
    if not isinstance(techs, (list, str)) or not techs:
        return 0
    count = len(techs)
    base = min(count * TECH_POINTS_PER_ITEM, cap)
    bonus = TECH_BREADTH_BONUS if count >= TECH_BREADTH_THRESHOLD else 0
    return min(base + bonus, cap)


def completion_bonus(answered_questions: int) -> int:
    """Additive bonus for the number of answered questions."""
    for threshold, bonus in COMPLETION_BONUS_TIERS:
        if answered_questions >= threshold:
            return bonus
    return 0


def _lookup(table: dict[str, int], value: Any, default: int) -> int:
    # Lists and dicts are unhashable; only strings can hit the table
    if isinstance(value, str):
        return table.get(value, default)
    return default


def _as_selection(value: Any) -> list | str:
    # Lists and strings are both counted by length
    if isinstance(value, (list, str)):
        return value
    return []


class ScoreCalculator:
    """Stateless calculator; one instance can be shared across requests."""

    def score_breakdown(self, responses: Any) -> ScoreBreakdown:
        """Compute every intermediate value of the score for *responses*."""
        if not isinstance(responses, Mapping):
            responses = {}

        scores: dict[str, int] = {}

        # --- q1: name, fixed points when present ---
        if extract(responses.get("q1")):
            scores["q1"] = NAME_ANSWER_SCORE

        # --- q2 / q3 / q14: enum lookups ---
        for qid, (table, default) in _ENUM_QUESTIONS.items():
            value = extract(responses.get(qid))
            if value:
                scores[qid] = _lookup(table, value, default)

        # --- q4 / q7 / q8 / q10: tech stacks ---
        for qid, cap in TECH_STACK_CAPS.items():
            selection = _as_selection(extract(responses.get(qid), expect_array=True))
            if selection:
                scores[qid] = calculate_tech_stack_score(selection, cap)

        answered = len(scores)
        raw_total = sum(scores.values())
        max_possible = answered * MAX_SCORE_PER_QUESTION
        normalized = (
            round_half_up(raw_total / max_possible * 100) if max_possible > 0 else 0
        )
        bonus = completion_bonus(answered)
        final = min(normalized + bonus, MAX_TOTAL_SCORE)

        return ScoreBreakdown(
            question_scores=scores,
            answered_questions=answered,
            raw_total=raw_total,
            max_possible=max_possible,
            normalized=normalized,
            completion_bonus=bonus,
            final_score=final,
        )

    def calculate_total_score(self, responses: Any) -> int:
        """Return the 0-100 score for *responses*.  Never raises."""
        breakdown = self.score_breakdown(responses)
        logger.debug(
            "Score calculated: answered=%d raw=%d final=%d",
            breakdown.answered_questions,
            breakdown.raw_total,
            breakdown.final_score,
        )
        if breakdown.final_score == 0 and isinstance(responses, Mapping) and responses:
            # Usually a payload-shape problem on the client side
            logger.warning("Non-empty responses scored 0 (keys=%s)", list(responses))
        return breakdown.final_score


_default_calculator = ScoreCalculator()


def calculate_total_score(responses: Any) -> int:
    """Module-level shortcut using a shared :class:`ScoreCalculator`."""
    return _default_calculator.calculate_total_score(responses)
