from translateswift.providers.base import (
    ProviderConfigurationError,
    ProviderError,
    TranslationProvider,
)
from translateswift.providers.echo import EchoProvider
from translateswift.providers.google import GoogleTranslateProvider

PROVIDERS: dict[str, type] = {
    "echo": EchoProvider,
    "google": GoogleTranslateProvider,
}


def load_provider(name: str, **kwargs) -> TranslationProvider:
    """Load a translation provider by name."""
    cls = PROVIDERS.get(name)
    if cls is None:
        raise ValueError(
            f"Unknown provider '{name}'. Available: {list(PROVIDERS.keys())}"
        )
    return cls(**kwargs)
