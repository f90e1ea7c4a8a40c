"""In-memory record store with monotonically assigned identifiers."""

import logging
import threading
from datetime import datetime, timezone
from typing import Callable

from translateswift.models import TranslationRecord

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class RecordStore:
    """Holds translation records and serves recency-ordered slices.

    The store owns both the record collection and the identifier counter.
    ``create`` runs under a lock so that concurrent callers (threads or
    tasks) never observe duplicate identifiers or lost inserts.

    Args:
        max_records: Optional upper bound on stored records. When exceeded,
            the record with the lowest identifier is evicted. ``None`` keeps
            everything for the lifetime of the process.
        clock: Callable returning the creation timestamp for new records.
    """

    def __init__(
        self,
        max_records: int | None = None,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        if max_records is not None and max_records <= 0:
            raise ValueError("max_records must be a positive integer or None")
        self.max_records = max_records
        self._clock = clock or _utcnow
        self._lock = threading.Lock()
        # Insertion order == identifier order
        self._records: dict[int, TranslationRecord] = {}
        self._next_id = 1

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)

    def create(
        self,
        source_text: str,
        translated_text: str,
        target_language: str,
    ) -> TranslationRecord:
        """Assign the next identifier, stamp the creation time and store."""
        with self._lock:
            record = TranslationRecord(
                id=self._next_id,
                source_text=source_text,
                translated_text=translated_text,
                target_language=target_language,
                created_at=self._clock(),
            )
            self._next_id += 1
            self._records[record.id] = record

            if self.max_records is not None and len(self._records) > self.max_records:
                oldest_id = next(iter(self._records))
                del self._records[oldest_id]
                logger.debug("[store] evicted id=%d (max_records=%d)", oldest_id, self.max_records)

        return record

    def recent(self, limit: int) -> list[TranslationRecord]:
        """Return up to ``limit`` records, most recent first.

        Ordering is by ``created_at`` descending with ties broken by
        descending identifier.
        """
        if limit <= 0:
            return []
        with self._lock:
            snapshot = list(self._records.values())
        snapshot.sort(key=lambda r: (r.created_at, r.id), reverse=True)
        return snapshot[:limit]
