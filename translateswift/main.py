"""Entry point: async event loop, signal handlers."""

import asyncio
import logging
import signal


def main() -> None:
    """Main entry point for the translation service."""
    from translateswift import config
    from translateswift.mqtt_handler import MqttHandler
    from translateswift.providers import load_provider
    from translateswift.service import TranslationService
    from translateswift.store import RecordStore

    # Configure logging
    logging.basicConfig(
        level=getattr(logging, config.LOG_LEVEL.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
    )
    logger = logging.getLogger(__name__)

    logger.info(
        "Translation service starting: name=%s, provider=%s",
        config.SERVICE_NAME,
        config.TRANSLATION_PROVIDER,
    )

    provider = load_provider(config.TRANSLATION_PROVIDER)
    max_records = config.HISTORY_MAX_RECORDS if config.HISTORY_MAX_RECORDS > 0 else None
    store = RecordStore(max_records=max_records)
    service = TranslationService(
        store=store,
        provider=provider,
        timeout=config.PROVIDER_TIMEOUT_SECONDS,
        default_limit=config.HISTORY_DEFAULT_LIMIT,
    )

    handler = MqttHandler(
        broker_host=config.BROKER_HOST,
        broker_port=config.BROKER_PORT,
        service_name=config.SERVICE_NAME,
        languages=config.LANGUAGES,
        service=service,
    )

    # Run with signal handling
    loop = asyncio.new_event_loop()
    asyncio.set_event_loop(loop)

    async def run_with_shutdown() -> None:
        for sig in (signal.SIGINT, signal.SIGTERM):
            loop.add_signal_handler(sig, lambda: asyncio.ensure_future(handler.shutdown()))

        await handler.run()

    try:
        loop.run_until_complete(run_with_shutdown())
    except KeyboardInterrupt:
        pass  # Signal handler already triggered shutdown
    finally:
        loop.close()
        logger.info("Translation service stopped")


if __name__ == "__main__":
    main()
