"""Google Cloud Translation provider (v2 REST API, API-key auth)."""

import logging

import httpx

from translateswift.providers.base import (
    ProviderConfigurationError,
    ProviderError,
    TranslationProvider,
)

logger = logging.getLogger(__name__)


class GoogleTranslateProvider(TranslationProvider):
    """Translates text using the Google Cloud Translation v2 endpoint.

    Args:
        api_key: API key. ``None`` reads GOOGLE_TRANSLATE_API_KEY from config.
        endpoint: v2 translate URL. ``None`` reads GOOGLE_TRANSLATE_ENDPOINT.
        client: Optional pre-built ``httpx.AsyncClient``.
        timeout: Per-request HTTP timeout in seconds.
    """

    def __init__(
        self,
        api_key: str | None = None,
        endpoint: str | None = None,
        client: httpx.AsyncClient | None = None,
        timeout: float = 30.0,
    ) -> None:
        # Import here so explicitly configured providers skip env loading
        if api_key is None or endpoint is None:
            from translateswift.config import (
                GOOGLE_TRANSLATE_API_KEY,
                GOOGLE_TRANSLATE_ENDPOINT,
            )

            if api_key is None:
                api_key = GOOGLE_TRANSLATE_API_KEY
            if endpoint is None:
                endpoint = GOOGLE_TRANSLATE_ENDPOINT

        # A missing key is reported on first use, not here
        self.api_key: str = api_key
        self.endpoint: str = endpoint.rstrip("/")
        self._client: httpx.AsyncClient = client or httpx.AsyncClient(timeout=timeout)

    async def translate(self, text: str, target_lang: str) -> str:
        if not self.api_key:
            logger.error("GOOGLE_TRANSLATE_API_KEY is not configured")
            raise ProviderConfigurationError("GOOGLE_TRANSLATE_API_KEY is required")

        payload = {"q": text, "target": target_lang, "format": "text"}

        try:
            response = await self._client.post(
                self.endpoint,
                params={"key": self.api_key},
                json=payload,
            )
            response.raise_for_status()
            data = response.json()
        except httpx.HTTPStatusError as exc:
            logger.error(
                "Google Translate API error: %s %s",
                exc.response.status_code,
                exc.response.reason_phrase,
            )
            raise ProviderError(
                f"Google Translate returned HTTP {exc.response.status_code}", exc
            ) from exc
        except httpx.HTTPError as exc:
            logger.error("Google Translate request failed: %s", exc)
            raise ProviderError("Google Translate request failed", exc) from exc
        except ValueError as exc:
            logger.error("Google Translate returned a non-JSON body")
            raise ProviderError("Google Translate returned a non-JSON body", exc) from exc

        try:
            translated = data["data"]["translations"][0]["translatedText"]
        except (KeyError, IndexError, TypeError) as exc:
            logger.error("Google Translate returned an unexpected body: %r", data)
            raise ProviderError("Google Translate returned an unexpected body", exc) from exc

        if not isinstance(translated, str):
            raise ProviderError("Google Translate returned a non-string translation")
        return translated

    async def close(self) -> None:
        """Close the underlying HTTP client."""
        await self._client.aclose()
