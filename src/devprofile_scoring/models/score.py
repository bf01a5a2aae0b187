"""Score breakdown model — explains how a final score was reached."""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class ScoreBreakdown(BaseModel):
    """Intermediate values of a score calculation.

    ``question_scores`` only lists the questions that counted as answered.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    question_scores: dict[str, int]
    answered_questions: int
    raw_total: int
    max_possible: int
    normalized: int
    completion_bonus: int
    final_score: int
