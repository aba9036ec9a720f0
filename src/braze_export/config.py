"""Braze export plugin configuration (pydantic BaseModel)."""

from __future__ import annotations

from collections.abc import Iterator, Mapping, Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
from pydantic.alias_generators import to_camel

from .exceptions import BrazeExportErrorCodes, ConfigurationError
from .models import BooleanChoice, BrazeEndpoint


@dataclass(frozen=True)
class AllowList:
    """Comma separated allow-list parsed into exact-match entries.

    Entries are not trimmed: ``"a, b"`` yields ``"a"`` and ``" b"``.
    """

    entries: tuple[str, ...] = ()

    @classmethod
    def parse(cls, raw: str | int | float | Sequence[str] | None) -> AllowList:
        """Parse a comma separated string or an already split sequence.

        Numbers (a bare YAML scalar such as ``2023``) are read as their string
        form. Any other type is rejected with ValueError.
        """
        if raw is None or raw == "":
            return cls()
        if isinstance(raw, (int, float)) and not isinstance(raw, bool):
            raw = str(raw)
        if isinstance(raw, str):
            return cls(tuple(raw.split(",")))
        if isinstance(raw, (list, tuple)):
            return cls(tuple(str(entry) for entry in raw))
        raise ValueError(f"allow-list must be a comma separated string, got {type(raw).__name__}")

    def __contains__(self, item: object) -> bool:
        return item in self.entries

    def __iter__(self) -> Iterator[str]:
        return iter(self.entries)

    def __len__(self) -> int:
        return len(self.entries)


class BrazeConfig(BaseModel):
    """Per-plugin configuration.

    Accepts the camelCase keys of the plugin config form as well as the
    snake_case field names. Yes/No choices are stored as bools.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )

    braze_endpoint: BrazeEndpoint
    api_key: str = Field(default="", repr=False)
    import_campaigns: bool = False
    import_canvases: bool = False
    import_custom_events: bool = False
    import_feeds: bool = False
    import_kpis: bool = Field(default=False, alias="importKPIs")
    import_segments: bool = False
    import_sessions: bool = False
    events_to_export: AllowList = Field(default_factory=AllowList)
    user_properties_to_export: AllowList = Field(default_factory=AllowList)
    import_user_attributes_in_all_events: bool = False

    @field_validator("api_key", mode="before")
    @classmethod
    def _default_api_key(cls, value: Any) -> Any:
        return "" if value is None else value

    @field_validator(
        "import_campaigns",
        "import_canvases",
        "import_custom_events",
        "import_feeds",
        "import_kpis",
        "import_segments",
        "import_sessions",
        "import_user_attributes_in_all_events",
        mode="before",
    )
    @classmethod
    def _parse_choice(cls, value: Any) -> Any:
        if value is None:
            return False
        if isinstance(value, str):
            return value == BooleanChoice.YES
        return value

    @field_validator("events_to_export", "user_properties_to_export", mode="before")
    @classmethod
    def _parse_allow_list(cls, value: Any) -> Any:
        if isinstance(value, AllowList):
            return value
        return AllowList.parse(value)


_ENDPOINT_FIELDS = {"brazeEndpoint", "braze_endpoint"}


def parse_config(data: Mapping[str, Any]) -> BrazeConfig:
    """Validate a raw config mapping and return a BrazeConfig."""
    if not isinstance(data, Mapping):
        raise ConfigurationError(
            code=BrazeExportErrorCodes.VALIDATION,
            message=f"Config must be a mapping, got {type(data).__name__}",
        )
    try:
        return BrazeConfig.model_validate(dict(data))
    except ValidationError as e:
        endpoint_failed = any(
            err["loc"] and err["loc"][0] in _ENDPOINT_FIELDS for err in e.errors()
        )
        code = (
            BrazeExportErrorCodes.UNKNOWN_ENDPOINT
            if endpoint_failed
            else BrazeExportErrorCodes.VALIDATION
        )
        raise ConfigurationError(
            code=code,
            message=f"Config validation failed: {e}",
            cause=e,
        ) from e


def _read_yaml(path: Path) -> dict[str, Any]:
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigurationError(
            code=BrazeExportErrorCodes.READ_FILE,
            message=f"Failed to read config file: {path}",
            cause=e,
        ) from e
    try:
        data: dict[str, Any] = yaml.safe_load(text) or {}
    except yaml.YAMLError as e:
        raise ConfigurationError(
            code=BrazeExportErrorCodes.PARSE_YAML,
            message=f"Failed to parse YAML: {path}",
            cause=e,
        ) from e
    return data


def load_config(path: Path) -> BrazeConfig:
    """Load a BrazeConfig from a YAML file."""
    return parse_config(_read_yaml(path))
