"""Compose Braze /users/track webhook requests from pipeline events.

For an ``$identify`` event carrying ``$set`` properties the inbound event
looks like::

    {"event": "$identify", "properties": {"$set": {"email": "test@posthog"}}}

and the allow-listed ``$set`` keys become a single Braze attributes object.
Events whose name is in ``eventsToExport`` become a single Braze event
object with ``$set`` stripped from its properties.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

import structlog

from .config import BrazeConfig, parse_config
from .endpoints import users_track_url
from .models import BrazeAttribute, BrazeEvent, InboundEvent, UsersTrackBody, WebhookRequest
from .timestamps import Clock, iso_date_string, last_midnight, parse_timestamp, system_clock

logger = structlog.get_logger(__name__)


def _build_attributes(event: InboundEvent, config: BrazeConfig) -> list[BrazeAttribute]:
    filtered = {
        key: value
        for key, value in event.set_properties.items()
        if key in config.user_properties_to_export
    }
    should_import = (
        config.import_user_attributes_in_all_events or event.event in config.events_to_export
    )
    if not should_import or not filtered:
        return []
    return [BrazeAttribute(external_id=event.distinct_id, custom=filtered)]


def _event_time(event: InboundEvent, clock: Clock) -> str:
    timestamp = parse_timestamp(event.timestamp)
    if timestamp is None:
        if event.timestamp:
            logger.warning(
                "Unparseable event timestamp, using last midnight",
                timestamp=event.timestamp,
            )
        timestamp = last_midnight(clock)
    return iso_date_string(timestamp)


def _build_events(event: InboundEvent, config: BrazeConfig, clock: Clock) -> list[BrazeEvent]:
    if event.event not in config.events_to_export:
        return []
    return [
        BrazeEvent(
            properties=event.properties_without_set(),
            external_id=event.distinct_id,
            name=event.event,
            time=_event_time(event, clock),
        )
    ]


def generate_request_body(
    event: InboundEvent,
    config: BrazeConfig,
    clock: Clock = system_clock,
) -> UsersTrackBody:
    """Derive the attributes and events for a single inbound event."""
    return UsersTrackBody(
        attributes=_build_attributes(event, config),
        events=_build_events(event, config, clock),
    )


def compose_webhook(
    event: InboundEvent | Mapping[str, Any],
    config: BrazeConfig | Mapping[str, Any],
    *,
    clock: Clock = system_clock,
) -> WebhookRequest | None:
    """Build the /users/track request for ``event``.

    Returns None when neither attributes nor events are exported.

    Raises:
        ConfigurationError: the config is invalid or names an unknown region
    """
    if not isinstance(config, BrazeConfig):
        config = parse_config(config)
    if not isinstance(event, InboundEvent):
        event = InboundEvent.from_dict(event)

    body = generate_request_body(event, config, clock)
    if body.is_empty():
        logger.info("Nothing to export, event is empty.", event_name=event.event)
        return None

    url = users_track_url(config.braze_endpoint)
    logger.debug(
        "Composed Braze users/track request",
        event_name=event.event,
        url=url,
        attributes=len(body.attributes),
        events=len(body.events),
    )
    return WebhookRequest(
        url=url,
        body=body.to_json(),
        headers={
            "Accept": "application/json",
            "Content-Type": "application/json",
            "Authorization": f"Bearer {config.api_key}",
        },
        method="POST",
    )
