"""Session models — the contract between the session service and API callers.

Wire format is camelCase (``sessionId``, ``currentStep``) to match the
browser client; Python attribute names are snake_case.  Every model accepts
either spelling on input.

These models are intentionally decoupled from the ORM model in
``devprofile_db`` so API consumers never see database internals.
"""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Progress(_CamelModel):
    """Position of the user in the multi-step form."""

    current_step: int = Field(ge=1)
    total_steps: int = Field(ge=1)

    @model_validator(mode="after")
    def _step_within_total(self) -> "Progress":
        if self.current_step > self.total_steps:
            raise ValueError("currentStep must not exceed totalSteps")
        return self

    @property
    def is_final(self) -> bool:
        """True when the user is on the last step."""
        return self.current_step == self.total_steps


class SaveSessionRequest(_CamelModel):
    """Input of ``SessionService.save_session`` (and body of POST /responses).

    ``total_score`` left unset means "let the server compute it".
    """

    session_id: str = Field(min_length=1)
    responses: dict[str, Any]
    progress: Progress
    total_score: int | None = Field(default=None, ge=0, le=100)
    user_id: str | None = None


class SaveSessionResult(_CamelModel):
    """Outcome of an upsert."""

    success: bool = True
    session_id: str
    created: bool
    modified: bool
    calculated_score: int


class ScoreUpdateResult(_CamelModel):
    """Outcome of a manual score correction."""

    success: bool = True
    session_id: str
    modified: bool


class SessionDocument(_CamelModel):
    """Public view of a persisted session."""

    session_id: str
    responses: dict[str, Any] = Field(default_factory=dict)
    progress: Progress | None = None
    total_score: int = 0
    user_id: str | None = None
    is_completed: bool = False
    questionnaire_id: str | None = None
    created_at: datetime | None = None
    started_at: datetime | None = None
    updated_at: datetime | None = None
    completed_at: datetime | None = None


class SessionPage(_CamelModel):
    """One page of the completed-session history."""

    items: list[SessionDocument]
    total: int
    page: int
    limit: int
