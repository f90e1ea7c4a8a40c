"""Transport-agnostic request handlers for the two public operations.

Maps service outcomes onto ``Response(status, body)`` pairs using HTTP
status semantics. Raw provider detail never reaches the response body.
"""

import logging
from dataclasses import dataclass
from typing import Any

from translateswift.outcomes import (
    InternalFailure,
    ProviderFailure,
    Translated,
    ValidationError,
)
from translateswift.service import TranslationService

logger = logging.getLogger(__name__)

PROVIDER_FAILURE_MESSAGE = "Failed to translate text. Please try again later."
INTERNAL_FAILURE_MESSAGE = "An unexpected error occurred"
RECENT_FAILURE_MESSAGE = "Failed to fetch recent translations"


@dataclass(frozen=True)
class Response:
    status: int
    body: Any

    def to_payload(self) -> dict[str, Any]:
        return {"status": self.status, "body": self.body}


async def translate_endpoint(service: TranslationService, body: Any) -> Response:
    """Handle a translate request."""
    outcome = await service.translate(body)

    if isinstance(outcome, Translated):
        return Response(200, outcome.record.to_payload())
    if isinstance(outcome, ValidationError):
        return Response(400, {"message": outcome.message, "field": outcome.field})
    if isinstance(outcome, ProviderFailure):
        return Response(500, {"message": PROVIDER_FAILURE_MESSAGE})
    if isinstance(outcome, InternalFailure):
        return Response(500, {"message": INTERNAL_FAILURE_MESSAGE})
    raise TypeError(f"Unhandled translate outcome: {outcome!r}")


def parse_limit(raw: Any, default: int) -> int:
    """Parse a history limit. Absent, non-integer or negative -> default."""
    if raw is None or isinstance(raw, bool):
        return default
    if isinstance(raw, int):
        limit = raw
    elif isinstance(raw, str):
        # Plain decimal digits only: no sign, underscores or non-ASCII digits
        stripped = raw.strip()
        if not (stripped.isascii() and stripped.isdigit()):
            return default
        limit = int(stripped)
    else:
        return default
    return limit if limit >= 0 else default


def recent_endpoint(service: TranslationService, limit: Any = None) -> Response:
    """Handle a recent-history request."""
    try:
        records = service.recent_history(parse_limit(limit, service.default_limit))
    except Exception:
        logger.exception("Failed to fetch recent translations")
        return Response(500, {"message": RECENT_FAILURE_MESSAGE})
    return Response(200, [record.to_payload() for record in records])
