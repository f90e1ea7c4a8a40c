"""Environment variable loading with defaults."""

import os
from pathlib import Path

from dotenv import load_dotenv

# Load .envdefault first (base defaults), then .env (overrides)
_base_dir = Path(__file__).resolve().parent.parent
load_dotenv(_base_dir / ".envdefault")
load_dotenv(_base_dir / ".env", override=True)

SERVICE_NAME: str = os.environ.get("SERVICE_NAME", "translateswift")

# MQTT broker
BROKER_HOST: str = os.environ.get("BROKER_HOST", "localhost")
BROKER_PORT: int = int(os.environ.get("BROKER_PORT", "1883"))

# Provider
TRANSLATION_PROVIDER: str = os.environ.get("TRANSLATION_PROVIDER", "echo")
# 0 disables the deadline around provider calls
PROVIDER_TIMEOUT_SECONDS: float = float(os.environ.get("PROVIDER_TIMEOUT_SECONDS", "0"))

# Google Cloud Translation (v2 REST)
GOOGLE_TRANSLATE_API_KEY: str = os.environ.get("GOOGLE_TRANSLATE_API_KEY", "")
GOOGLE_TRANSLATE_ENDPOINT: str = os.environ.get(
    "GOOGLE_TRANSLATE_ENDPOINT",
    "https://translation.googleapis.com/language/translate/v2",
)

# History
HISTORY_DEFAULT_LIMIT: int = int(os.environ.get("HISTORY_DEFAULT_LIMIT", "10"))
# 0 keeps every record for the lifetime of the process
HISTORY_MAX_RECORDS: int = int(os.environ.get("HISTORY_MAX_RECORDS", "0"))

# Logging
LOG_LEVEL: str = os.environ.get("LOG_LEVEL", "INFO")

LANGUAGE_OPTIONS: list[dict[str, str]] = [
    {"value": "es", "label": "Spanish"},
    {"value": "fr", "label": "French"},
    {"value": "de", "label": "German"},
    {"value": "it", "label": "Italian"},
    {"value": "pt", "label": "Portuguese"},
    {"value": "ru", "label": "Russian"},
    {"value": "ja", "label": "Japanese"},
    {"value": "ko", "label": "Korean"},
    {"value": "zh", "label": "Chinese"},
    {"value": "ar", "label": "Arabic"},
]

LANGUAGES: list[str] = [option["value"] for option in LANGUAGE_OPTIONS]
