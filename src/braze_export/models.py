"""Inbound event and Braze /users/track data models."""

from __future__ import annotations

import json
import math
from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import date, datetime
from enum import StrEnum
from typing import Any

import httpx

SET_PROPERTIES_KEY = "$set"


class BooleanChoice(StrEnum):
    """Yes/No choice used by the plugin configuration form."""

    YES = "Yes"
    NO = "No"


class BrazeEndpoint(StrEnum):
    """Braze REST endpoint region codes."""

    US_01 = "US-01"
    US_02 = "US-02"
    US_03 = "US-03"
    US_04 = "US-04"
    US_05 = "US-05"
    US_06 = "US-06"
    US_08 = "US-08"
    EU_01 = "EU-01"
    EU_02 = "EU-02"


@dataclass
class InboundEvent:
    """A single analytics event handed over by the event pipeline.

    ``timestamp`` may be a datetime, an ISO-8601 string, epoch milliseconds
    or None.
    """

    event: str
    distinct_id: str
    properties: dict[str, Any] = field(default_factory=dict)
    timestamp: datetime | str | int | float | None = None
    uuid: str | None = None
    team_id: int | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> InboundEvent:
        """Build an InboundEvent from a pipeline event dict."""
        return cls(
            event=data["event"],
            distinct_id=data["distinct_id"],
            properties=dict(data.get("properties") or {}),
            timestamp=data.get("timestamp"),
            uuid=data.get("uuid"),
            team_id=data.get("team_id"),
        )

    @property
    def set_properties(self) -> dict[str, Any]:
        """User attribute updates carried under ``$set``."""
        value = self.properties.get(SET_PROPERTIES_KEY)
        if not isinstance(value, Mapping):
            return {}
        return dict(value)

    def properties_without_set(self) -> dict[str, Any]:
        return {key: value for key, value in self.properties.items() if key != SET_PROPERTIES_KEY}


@dataclass(frozen=True)
class BrazeUserAlias:
    """Braze user alias object."""

    alias_name: str
    alias_label: str

    def to_dict(self) -> dict[str, str]:
        return {"alias_name": self.alias_name, "alias_label": self.alias_label}


@dataclass
class BrazeAttribute:
    """Braze user attributes object.

    Arbitrary profile keys live in ``custom``; the identifier and flag fields
    Braze defines are typed. On serialization the typed fields override a
    custom key with the same name.
    """

    external_id: str | None = None
    user_alias: BrazeUserAlias | None = None
    braze_id: str | None = None
    update_existing_only: bool | None = None
    push_token_import: bool | None = None
    custom: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = dict(self.custom)
        if self.external_id is not None:
            result["external_id"] = self.external_id
        if self.user_alias is not None:
            result["user_alias"] = self.user_alias.to_dict()
        if self.braze_id is not None:
            result["braze_id"] = self.braze_id
        if self.update_existing_only is not None:
            result["_update_existing_only"] = self.update_existing_only
        if self.push_token_import is not None:
            result["push_token_import"] = self.push_token_import
        return result


@dataclass
class BrazeEvent:
    """Braze event object.

    See https://www.braze.com/docs/api/objects_filters/event_object/
    """

    name: str
    time: str
    external_id: str | None = None
    properties: dict[str, Any] | None = None
    user_alias: BrazeUserAlias | None = None
    braze_id: str | None = None
    app_id: str | None = None
    update_existing_only: bool | None = None

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {}
        if self.properties is not None:
            result["properties"] = self.properties
        if self.external_id is not None:
            result["external_id"] = self.external_id
        result["name"] = self.name
        result["time"] = self.time
        if self.user_alias is not None:
            result["user_alias"] = self.user_alias.to_dict()
        if self.braze_id is not None:
            result["braze_id"] = self.braze_id
        if self.app_id is not None:
            result["app_id"] = self.app_id
        if self.update_existing_only is not None:
            result["_update_existing_only"] = self.update_existing_only
        return result


def _replace_non_finite(value: Any) -> Any:
    """Swap NaN and infinities for None, which JSON can represent."""
    if isinstance(value, float) and not math.isfinite(value):
        return None
    if isinstance(value, dict):
        return {key: _replace_non_finite(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [_replace_non_finite(item) for item in value]
    return value


def _json_default(value: Any) -> Any:
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    return str(value)


@dataclass
class UsersTrackBody:
    """Request body for POST /users/track."""

    attributes: list[BrazeAttribute] = field(default_factory=list)
    events: list[BrazeEvent] = field(default_factory=list)

    def is_empty(self) -> bool:
        return not self.attributes and not self.events

    def to_dict(self) -> dict[str, Any]:
        return {
            "attributes": [attribute.to_dict() for attribute in self.attributes],
            "events": [event.to_dict() for event in self.events],
        }

    def to_json(self) -> str:
        """Serialize as compact JSON. Non-finite floats are written as null."""
        return json.dumps(
            _replace_non_finite(self.to_dict()),
            separators=(",", ":"),
            ensure_ascii=False,
            allow_nan=False,
            default=_json_default,
        )


@dataclass(frozen=True)
class WebhookRequest:
    """Outbound HTTP request descriptor handed back to the dispatcher."""

    url: str
    body: str
    headers: dict[str, str]
    method: str = "POST"

    def to_dict(self) -> dict[str, Any]:
        return {
            "url": self.url,
            "body": self.body,
            "headers": dict(self.headers),
            "method": self.method,
        }

    def build_httpx_request(self) -> httpx.Request:
        """Return an unsent httpx.Request for this descriptor."""
        return httpx.Request(
            self.method,
            self.url,
            headers=self.headers,
            content=self.body.encode("utf-8"),
        )
