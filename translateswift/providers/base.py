"""Abstract translation provider interface."""

from abc import ABC, abstractmethod


class ProviderError(Exception):
    """Raised by providers for any remote failure.

    Covers timeouts, transport errors, HTTP errors, malformed responses
    and unsupported language codes. The underlying exception, if any, is
    available as ``cause`` (and ``__cause__``).
    """

    def __init__(self, message: str, cause: BaseException | None = None) -> None:
        super().__init__(message)
        self.cause = cause


class ProviderConfigurationError(ProviderError):
    """The provider is missing required configuration (e.g. an API key)."""


class TranslationProvider(ABC):
    """Base class for all translation providers."""

    @abstractmethod
    async def translate(self, text: str, target_lang: str) -> str:
        """Translate text into target_lang.

        Args:
            text: Source text to translate.
            target_lang: Target language code (e.g. "es").

        Returns:
            Translated text.

        Raises:
            ProviderError: The remote capability failed.
        """
        ...

    async def close(self) -> None:
        """Release any transport resources held by the provider."""
