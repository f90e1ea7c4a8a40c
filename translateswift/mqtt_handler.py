"""MQTT client: subscriptions, LWT setup, request routing."""

import asyncio
import json
import logging
from typing import Any

import aiomqtt

from translateswift.boundary import Response, recent_endpoint, translate_endpoint
from translateswift.service import TranslationService

logger = logging.getLogger(__name__)

TOPIC_PREFIX = "translateswift"


class MqttHandler:
    """Manages MQTT connection, subscriptions, and request routing.

    Requests arrive on ``translateswift/in/{requestId}/{action}`` and
    replies are published on ``translateswift/out/{requestId}/{action}``.

    Args:
        broker_host: MQTT broker hostname.
        broker_port: MQTT broker port.
        service_name: Unique service identifier.
        languages: List of supported language codes.
        service: Translation service instance.
    """

    def __init__(
        self,
        broker_host: str,
        broker_port: int,
        service_name: str,
        languages: list[str],
        service: TranslationService,
    ) -> None:
        self.broker_host = broker_host
        self.broker_port = broker_port
        self.service_name = service_name
        self.languages = languages
        self.service = service

        self.status_topic = f"{TOPIC_PREFIX}/out/{service_name}/status"
        self.online_payload = json.dumps(
            {"name": service_name, "languages": languages, "online": True}
        )
        self.offline_payload = json.dumps(
            {"name": service_name, "languages": [], "online": False}
        )

        self._client: aiomqtt.Client | None = None
        self._shutdown_event = asyncio.Event()
        # Requests in flight, one task each
        self._active_tasks: set[asyncio.Task] = set()

    async def publish_response(
        self,
        request_id: str,
        action: str,
        response: Response,
    ) -> None:
        """Publish a response for one request.

        Args:
            request_id: Request identifier from the topic.
            action: "translate" or "recent".
            response: Response to serialize.
        """
        if self._client is None:
            logger.warning("Cannot publish: MQTT client not connected")
            return

        topic = f"{TOPIC_PREFIX}/out/{request_id}/{action}"
        try:
            await self._client.publish(
                topic, json.dumps(response.to_payload()), qos=1
            )
            logger.debug("Published to %s: status=%d", topic, response.status)
        except Exception:
            logger.exception("Failed to publish to %s", topic)

    async def run(self) -> None:
        """Run the MQTT client with reconnection loop."""
        while not self._shutdown_event.is_set():
            try:
                await self._connect_and_listen()
            except aiomqtt.MqttError as exc:
                if self._shutdown_event.is_set():
                    break
                logger.warning("MQTT connection lost (%s), reconnecting in 3s...", exc)
                try:
                    await asyncio.wait_for(
                        self._shutdown_event.wait(), timeout=3.0
                    )
                    break  # Shutdown requested during reconnect wait
                except asyncio.TimeoutError:
                    continue  # Retry connection
            except asyncio.CancelledError:
                break

    async def _connect_and_listen(self) -> None:
        """Connect to broker, subscribe, and process messages."""
        will = aiomqtt.Will(
            topic=self.status_topic,
            payload=self.offline_payload,
            qos=1,
            retain=True,
        )

        async with aiomqtt.Client(
            hostname=self.broker_host,
            port=self.broker_port,
            clean_session=True,
            will=will,
        ) as client:
            self._client = client
            logger.info("Connected to MQTT broker at %s:%d", self.broker_host, self.broker_port)

            await client.publish(
                self.status_topic, self.online_payload, qos=1, retain=True
            )
            logger.info("Published online status to %s", self.status_topic)

            await client.subscribe(f"{TOPIC_PREFIX}/in/+/translate", qos=1)
            await client.subscribe(f"{TOPIC_PREFIX}/in/+/recent", qos=1)
            logger.info("Subscribed to %s/in/+/translate and recent", TOPIC_PREFIX)

            await self.service.start_stats_logger()

            async for message in client.messages:
                if self._shutdown_event.is_set():
                    break
                self._fire_task(self._handle_message_safely(message))

    def _fire_task(self, coro) -> asyncio.Task:
        """Create a tracked fire-and-forget task."""
        task = asyncio.create_task(coro)
        self._active_tasks.add(task)
        task.add_done_callback(self._active_tasks.discard)
        return task

    async def _drain_active_tasks(self) -> None:
        """Wait until no request task is in flight.

        Tasks started while waiting are picked up by the next iteration;
        finished tasks remove themselves via their done callback.
        """
        while self._active_tasks:
            pending = list(self._active_tasks)
            await asyncio.gather(*pending, return_exceptions=True)
            self._active_tasks.difference_update(pending)

    async def _handle_message_safely(self, message: aiomqtt.Message) -> None:
        try:
            await self._handle_message(message)
        except Exception:
            logger.exception("Error processing message on topic %s", message.topic)

    async def _handle_message(self, message: aiomqtt.Message) -> None:
        """Route an incoming MQTT request to the matching endpoint."""
        topic_str = str(message.topic)
        parts = topic_str.split("/")
        if len(parts) != 4 or parts[0] != TOPIC_PREFIX or parts[1] != "in":
            return

        # translateswift/in/{requestId}/{action}
        request_id = parts[2]
        action = parts[3]

        if action not in ("translate", "recent"):
            return

        try:
            body = _decode_json(message.payload)
        except (json.JSONDecodeError, UnicodeDecodeError):
            logger.warning("Invalid JSON on topic %s", topic_str)
            if action == "translate":
                await self.publish_response(
                    request_id, action, Response(400, {"message": "Invalid JSON body"})
                )
                return
            body = None

        if action == "translate":
            response = await translate_endpoint(self.service, body)
        else:
            limit = body.get("limit") if isinstance(body, dict) else None
            response = recent_endpoint(self.service, limit)

        logger.debug(
            "[mqtt] request=%s action=%s status=%d", request_id, action, response.status
        )
        await self.publish_response(request_id, action, response)

    async def shutdown(self) -> None:
        """Gracefully shut down the MQTT handler."""
        if self._shutdown_event.is_set():
            return  # Already shutting down
        logger.info("Shutting down MQTT handler...")
        self._shutdown_event.set()

        # Let in-flight requests finish; none of them leaves a partial record
        await self._drain_active_tasks()

        await self.service.stop()

        # Publish offline status then disconnect
        if self._client is not None:
            try:
                await self._client.publish(
                    self.status_topic, self.offline_payload, qos=1, retain=True
                )
                logger.info("Published offline status")
            except Exception:
                logger.warning("Failed to publish offline status during shutdown")
            # Force-disconnect to break out of async for client.messages
            try:
                self._client._client.disconnect()
            except Exception:
                pass


def _decode_json(payload: Any) -> Any:
    """Decode an MQTT payload as JSON. An empty payload decodes to None."""
    if isinstance(payload, (bytes, bytearray)):
        payload = payload.decode("utf-8")
    if payload is None or payload == "":
        return None
    if isinstance(payload, (int, float)):
        return payload
    return json.loads(payload)
