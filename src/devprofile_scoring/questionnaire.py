"""QuestionnaireStore — loads the questionnaire definition from YAML.

The definition ships as package data (``data/questionnaire.yaml``) and is
loaded once at startup.  A different file can be supplied for tests or for
deployments that run a newer questionnaire version.

Usage::

    store = QuestionnaireStore()      # packaged definition
    store.load()

    q = store.get_question("q4")
    store.total_steps                 # 5
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml

from devprofile_scoring.models.questionnaire import Question, Questionnaire

logger = logging.getLogger(__name__)

DEFAULT_QUESTIONNAIRE_FILE = Path(__file__).resolve().parent / "data" / "questionnaire.yaml"


def load_yaml(path: Path | str) -> Any:
    """Load a single YAML file and return the parsed contents."""
    if isinstance(path, str):
        path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Missing YAML file: {path}")
    with path.open("r", encoding="utf-8") as f:
        return yaml.safe_load(f)


class QuestionnaireStore:
    """Holds the parsed questionnaire and provides lookup by question id."""

    def __init__(self, path: str | Path | None = None) -> None:
        self._path = Path(path) if path is not None else DEFAULT_QUESTIONNAIRE_FILE
        self._questionnaire: Questionnaire | None = None
        self._questions: dict[str, Question] = {}

    def load(self) -> None:
        """Parse the YAML file.  Raises ``FileNotFoundError`` if it is missing."""
        questionnaire = Questionnaire.model_validate(load_yaml(self._path))
        questions: dict[str, Question] = {}
        for step in questionnaire.steps:
            for question in step.questions:
                if question.id in questions:
                    raise ValueError(f"Duplicate question id in questionnaire: {question.id}")
                questions[question.id] = question

        self._questionnaire = questionnaire
        self._questions = questions
        logger.info(
            "Questionnaire %s loaded: %d steps, %d questions",
            questionnaire.id,
            questionnaire.total_steps,
            len(questions),
        )

    @property
    def questionnaire(self) -> Questionnaire:
        if self._questionnaire is None:
            raise RuntimeError("QuestionnaireStore.load() has not been called")
        return self._questionnaire

    @property
    def total_steps(self) -> int:
        return self.questionnaire.total_steps

    @property
    def question_ids(self) -> list[str]:
        """Question ids in form order."""
        return list(self._questions)

    def get_question(self, qid: str) -> Question:
        """Return the question with id *qid*.  Raises ``KeyError`` if unknown."""
        try:
            return self._questions[qid]
        except KeyError:
            raise KeyError(f"Unknown question id: {qid}") from None
