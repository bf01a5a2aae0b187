"""Scoring constants shared across the SDK.

These values encode the weighting of the developer-profile questionnaire.
They are referenced by the score calculator and the session service.

The questionnaire identifier can be overridden via environment variable so
that deployments can tag sessions with a new questionnaire version without
code changes.
"""

import os

# Identifier stamped on every session at insert time.
QUESTIONNAIRE_ID = os.getenv("QUESTIONNAIRE_ID", "dev-profile-2024")

# Flat per-question ceiling used for normalisation, whatever the question's
# own cap is.
MAX_SCORE_PER_QUESTION = 10

# Upper bound of the final score.
MAX_TOTAL_SCORE = 100

# Fixed points for answering q1 (name).
NAME_ANSWER_SCORE = 2

# q2: experience level.  Unknown answered values score EXPERIENCE_DEFAULT.
EXPERIENCE_SCORES: dict[str, int] = {
    "junior": 4,
    "intermediate": 7,
    "senior": 9,
    "expert": 10,
}
EXPERIENCE_DEFAULT = 5

# q3: main specialization.
SPECIALIZATION_SCORES: dict[str, int] = {
    "frontend": 8,
    "backend": 8,
    "fullstack": 10,
    "mobile": 7,
    "devops": 9,
}
SPECIALIZATION_DEFAULT = 6

# q14: preferred project type.
PROJECT_SCORES: dict[str, int] = {
    "startup": 3,
    "product": 4,
    "agency": 2,
    "open-source": 5,
    "enterprise": 3,
}
PROJECT_DEFAULT = 2

# Tech-stack questions and their caps: qid -> cap.
TECH_STACK_CAPS: dict[str, int] = {
    "q4": 8,   # frontend frameworks
    "q7": 8,   # backend languages
    "q8": 6,   # databases
    "q10": 4,  # daily tools
}

# Tech-stack rule: points per selection, and the bonus for broad stacks.
TECH_POINTS_PER_ITEM = 2
TECH_BREADTH_THRESHOLD = 3
TECH_BREADTH_BONUS = 2

# Completion bonus tiers, checked in order: (min answered questions, bonus).
COMPLETION_BONUS_TIERS: list[tuple[int, int]] = [
    (8, 10),
    (6, 5),
    (4, 2),
]

# Keys of a wrapped answer object that never carry the answer itself.
ANSWER_METADATA_KEYS: frozenset[str] = frozenset(
    {"timestamp", "id", "questionId", "type"}
)
