"""Answer normalisation — turns raw client answer payloads into canonical values.

Clients have sent answers in several shapes over time::

    "senior"                                   # raw scalar
    ["react", "vue"]                           # raw list
    {"answer": "senior", "questionId": "q2"}   # wrapped under "answer"
    {"value": ["react"], "timestamp": "..."}   # wrapped under "value"
    {"choice": "senior", "type": "radio"}      # first non-metadata key

``classify()`` maps a raw payload onto one of four variants (``Absent``,
``Scalar``, ``Listing``, ``Wrapped``) and ``extract()`` unwraps the variant
into the canonical value the score calculator consumes.  Neither function
raises: anything unrecognised is ``Absent``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Union

from devprofile_scoring.constants import ANSWER_METADATA_KEYS


@dataclass(frozen=True)
class Absent:
    """No usable answer (missing, empty, or an unsupported shape)."""


@dataclass(frozen=True)
class Scalar:
    """A bare string answer."""

    value: str


@dataclass(frozen=True)
class Listing:
    """A bare list answer (multi-select questions)."""

    values: list


@dataclass(frozen=True)
class Wrapped:
    """An answer object; ``key`` names the property that held the value."""

    key: str
    value: Any


Answer = Union[Absent, Scalar, Listing, Wrapped]

_ABSENT = Absent()


def classify(raw: Any) -> Answer:
    """Classify a raw answer payload into its variant."""
    if not raw:
        return _ABSENT
    if isinstance(raw, str):
        return Scalar(raw)
    if isinstance(raw, list):
        return Listing(raw)
    if isinstance(raw, dict):
        # A key present with a null value still counts as defined
        for key in ("answer", "value"):
            if key in raw:
                return Wrapped(key, raw[key])
        for key, value in raw.items():
            if key not in ANSWER_METADATA_KEYS:
                return Wrapped(key, value)
    return _ABSENT


def extract(raw: Any, expect_array: bool = False) -> Any:
    """Return the canonical value of a raw answer.

    Absence is ``[]`` when *expect_array* is set, otherwise ``None``.
    Wrapped values are returned as-is, without further normalisation.
    """
    answer = classify(raw)
    if isinstance(answer, Scalar):
        return answer.value
    if isinstance(answer, Listing):
        return answer.values
    if isinstance(answer, Wrapped):
        return answer.value
    return [] if expect_array else None
