"""Questionnaire definition models.

A questionnaire is an ordered list of steps, each holding a few questions.
Question types map to UI components:

    - text / textarea: free text (``validation`` carries length limits)
    - radio: pick one option
    - checkbox: pick one or more options (``min_selections`` / ``max_selections``)
"""

from __future__ import annotations

from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class QuestionOption(_CamelModel):
    """A selectable option."""

    value: str
    label: str


class TextValidation(_CamelModel):
    """Length limits for free-text questions."""

    min_length: Optional[int] = None
    max_length: Optional[int] = None


class Question(_CamelModel):
    """A single question of the form."""

    id: str
    text: str
    type: Literal["text", "textarea", "radio", "checkbox"]
    required: bool = False
    placeholder: Optional[str] = None
    options: list[QuestionOption] = Field(default_factory=list)
    min_selections: Optional[int] = None
    max_selections: Optional[int] = None
    validation: Optional[TextValidation] = None

    @model_validator(mode="after")
    def _choices_have_options(self) -> Question:
        if self.type in ("radio", "checkbox") and not self.options:
            raise ValueError(f"question {self.id} of type {self.type} has no options")
        return self

    @property
    def expects_array(self) -> bool:
        """True for multi-select questions."""
        return self.type == "checkbox"


class Step(_CamelModel):
    """A page of the multi-step form."""

    id: str
    title: str
    description: Optional[str] = None
    questions: list[Question]


class Questionnaire(_CamelModel):
    """The full questionnaire definition served to the client."""

    id: str
    title: str
    version: str
    steps: list[Step]

    @property
    def total_steps(self) -> int:
        return len(self.steps)
