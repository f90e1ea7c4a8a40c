"""Result type returned by the translation service.

Every call to ``TranslationService.translate`` yields exactly one of the
outcome classes below. Callers branch on the class (or on ``kind``) to
decide whether to fix their input, retry later, or alert an operator.
"""

from dataclasses import dataclass, field
from typing import Literal, Union

from translateswift.models import TranslationRecord


@dataclass(frozen=True)
class Translated:
    """Validation and provider call succeeded; the record was persisted."""

    record: TranslationRecord
    kind: Literal["ok"] = field(default="ok", init=False)


@dataclass(frozen=True)
class ValidationError:
    """Caller input is malformed. Not retryable without changing the input."""

    field: str
    message: str
    kind: Literal["validation"] = field(default="validation", init=False)


@dataclass(frozen=True)
class ProviderFailure:
    """The remote provider failed or timed out. Safe for the caller to retry.

    ``message`` is internal detail and must not be sent to callers.
    """

    message: str
    kind: Literal["provider"] = field(default="provider", init=False)


@dataclass(frozen=True)
class InternalFailure:
    """Unexpected defect (store or programming error)."""

    message: str
    kind: Literal["internal"] = field(default="internal", init=False)


TranslateOutcome = Union[Translated, ValidationError, ProviderFailure, InternalFailure]
