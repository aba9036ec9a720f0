"""Braze REST endpoint lookup."""

from __future__ import annotations

from .exceptions import BrazeExportErrorCodes, ConfigurationError
from .models import BrazeEndpoint

ENDPOINTS_MAP: dict[BrazeEndpoint, str] = {
    BrazeEndpoint.US_01: "https://rest.iad-01.braze.com",
    BrazeEndpoint.US_02: "https://rest.iad-02.braze.com",
    BrazeEndpoint.US_03: "https://rest.iad-03.braze.com",
    BrazeEndpoint.US_04: "https://rest.iad-04.braze.com",
    BrazeEndpoint.US_05: "https://rest.iad-05.braze.com",
    BrazeEndpoint.US_06: "https://rest.iad-06.braze.com",
    BrazeEndpoint.US_08: "https://rest.iad-08.braze.com",
    BrazeEndpoint.EU_01: "https://rest.fra-01.braze.eu",
    BrazeEndpoint.EU_02: "https://rest.fra-02.braze.eu",
}

USERS_TRACK_PATH = "/users/track"


def resolve_base_url(endpoint: BrazeEndpoint | str) -> str:
    """Return the REST base URL for a region code."""
    try:
        return ENDPOINTS_MAP[BrazeEndpoint(endpoint)]
    except (KeyError, ValueError) as e:
        raise ConfigurationError(
            code=BrazeExportErrorCodes.UNKNOWN_ENDPOINT,
            message=f"Unknown Braze endpoint: {endpoint!r}",
            cause=e,
        ) from e


def users_track_url(endpoint: BrazeEndpoint | str) -> str:
    return f"{resolve_base_url(endpoint)}{USERS_TRACK_PATH}"
