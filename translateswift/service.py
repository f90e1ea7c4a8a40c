"""Translation service orchestrator.

Routes a translation request through validation -> provider -> store and
returns a typed outcome. Nothing is persisted unless both validation and
the provider call succeed.
"""

import asyncio
import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from translateswift.models import TranslationRecord
from translateswift.outcomes import (
    InternalFailure,
    ProviderFailure,
    Translated,
    TranslateOutcome,
    ValidationError,
)
from translateswift.providers.base import ProviderError, TranslationProvider
from translateswift.store import RecordStore

logger = logging.getLogger(__name__)

MIN_LANGUAGE_CODE_LENGTH = 2


@dataclass
class ServiceStats:
    """Periodic stats for INFO-level logging."""

    requests: int = 0
    translated: int = 0
    validation_errors: int = 0
    provider_failures: int = 0
    internal_failures: int = 0

    def reset(self) -> None:
        self.requests = 0
        self.translated = 0
        self.validation_errors = 0
        self.provider_failures = 0
        self.internal_failures = 0


def validate_request(request: Any) -> ValidationError | None:
    """Return the first violated constraint of a translate request, if any."""
    if not isinstance(request, Mapping):
        return ValidationError("body", "Request body must be an object")

    text = request.get("text")
    if not isinstance(text, str):
        return ValidationError("text", "Text must be a string")
    if len(text) < 1:
        return ValidationError("text", "Text is required")

    target_language = request.get("targetLanguage")
    if not isinstance(target_language, str):
        return ValidationError("targetLanguage", "Language code must be a string")
    if len(target_language) < MIN_LANGUAGE_CODE_LENGTH:
        return ValidationError("targetLanguage", "Language code is required")

    return None


class TranslationService:
    """Validates requests, invokes the provider and persists results.

    Args:
        store: Record store owning all persisted translations.
        provider: Translation provider instance.
        timeout: Optional deadline in seconds around each provider call.
        default_limit: History size used when no limit is given.
    """

    def __init__(
        self,
        store: RecordStore,
        provider: TranslationProvider,
        timeout: float | None = None,
        default_limit: int = 10,
    ) -> None:
        self.store = store
        self.provider = provider
        # Zero or negative means no deadline
        self.timeout = timeout if timeout is not None and timeout > 0 else None
        self.default_limit = default_limit

        self._stats = ServiceStats()
        self._stats_task: asyncio.Task[None] | None = None

    async def start_stats_logger(self) -> None:
        """Start periodic stats logging (every 60s at INFO level).

        No-op while a previously started logger is still running, so the
        transport can call this on every reconnect.
        """
        if self._stats_task and not self._stats_task.done():
            return
        self._stats_task = asyncio.create_task(self._stats_loop())

    async def _stats_loop(self) -> None:
        try:
            while True:
                await asyncio.sleep(60)
                s = self._stats
                logger.info(
                    "[stats] last 60s: requests=%d translated=%d "
                    "validation_errors=%d provider_failures=%d internal_failures=%d",
                    s.requests,
                    s.translated,
                    s.validation_errors,
                    s.provider_failures,
                    s.internal_failures,
                )
                s.reset()
        except asyncio.CancelledError:
            pass

    async def stop(self) -> None:
        """Stop the stats logger and close the provider."""
        if self._stats_task and not self._stats_task.done():
            self._stats_task.cancel()
            try:
                await self._stats_task
            except asyncio.CancelledError:
                pass
        await self.provider.close()

    async def translate(self, request: Any) -> TranslateOutcome:
        """Translate ``{"text", "targetLanguage"}`` and persist the result."""
        self._stats.requests += 1

        invalid = validate_request(request)
        if invalid is not None:
            logger.debug(
                "[service] action=REJECT field=%s reason=\"%s\"",
                invalid.field, invalid.message,
            )
            self._stats.validation_errors += 1
            return invalid

        text = request["text"]
        target_language = request["targetLanguage"]

        try:
            if self.timeout is not None:
                translated = await asyncio.wait_for(
                    self.provider.translate(text, target_language), self.timeout
                )
            else:
                translated = await self.provider.translate(text, target_language)
        except ProviderError as exc:
            logger.error(
                "[service] lang=%s provider error: %s", target_language, exc
            )
            self._stats.provider_failures += 1
            return ProviderFailure(str(exc))
        except (asyncio.TimeoutError, TimeoutError):
            logger.error(
                "[service] lang=%s provider timed out (deadline=%ss)",
                target_language, self.timeout,
            )
            self._stats.provider_failures += 1
            return ProviderFailure(f"provider timed out (deadline={self.timeout}s)")
        except Exception as exc:
            logger.exception("[service] lang=%s unexpected provider failure", target_language)
            self._stats.internal_failures += 1
            return InternalFailure(f"unexpected provider failure: {exc!r}")

        try:
            record = self.store.create(text, translated, target_language)
        except Exception as exc:
            logger.exception("[service] lang=%s failed to persist translation", target_language)
            self._stats.internal_failures += 1
            return InternalFailure(f"failed to persist translation: {exc!r}")

        logger.debug(
            "[service] id=%d lang=%s action=TRANSLATE chars=%d",
            record.id, target_language, len(text),
        )
        self._stats.translated += 1
        return Translated(record)

    def recent_history(self, limit: int | None = None) -> list[TranslationRecord]:
        """Return up to ``limit`` records, most recent first."""
        if limit is None:
            limit = self.default_limit
        return self.store.recent(limit)
