"""Translation record data model."""

from dataclasses import dataclass
from datetime import datetime
from typing import Any


@dataclass(frozen=True)
class TranslationRecord:
    """A persisted translation outcome. Immutable once created."""

    id: int
    source_text: str
    translated_text: str
    target_language: str
    created_at: datetime

    def to_payload(self) -> dict[str, Any]:
        """Build the outgoing record payload (camelCase wire keys)."""
        return {
            "id": self.id,
            "sourceText": self.source_text,
            "translatedText": self.translated_text,
            "targetLanguage": self.target_language,
            "createdAt": self.created_at.isoformat(),
        }
