"""Braze /users/track export for analytics pipeline events."""

from .composer import compose_webhook, generate_request_body
from .config import AllowList, BrazeConfig, load_config, parse_config
from .endpoints import ENDPOINTS_MAP, resolve_base_url, users_track_url
from .exceptions import BrazeExportError, BrazeExportErrorCodes, ConfigurationError
from .models import (
    BooleanChoice,
    BrazeAttribute,
    BrazeEndpoint,
    BrazeEvent,
    BrazeUserAlias,
    InboundEvent,
    UsersTrackBody,
    WebhookRequest,
)
from .timestamps import Clock, iso_date_string, last_midnight, system_clock

__all__ = [
    "compose_webhook",
    "generate_request_body",
    "AllowList",
    "BrazeConfig",
    "load_config",
    "parse_config",
    "ENDPOINTS_MAP",
    "resolve_base_url",
    "users_track_url",
    "BrazeExportError",
    "BrazeExportErrorCodes",
    "ConfigurationError",
    "BooleanChoice",
    "BrazeAttribute",
    "BrazeEndpoint",
    "BrazeEvent",
    "BrazeUserAlias",
    "InboundEvent",
    "UsersTrackBody",
    "WebhookRequest",
    "Clock",
    "iso_date_string",
    "last_midnight",
    "system_clock",
]
