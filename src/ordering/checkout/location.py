"""Customer location for delivery, pinned on the map or read from the device.

Device geolocation is a single-shot request to an external capability. It
either yields one coordinate pair or fails; a failure (permission denied,
timeout, no fix) is reported as ``LocationUnavailable`` and the customer may
retry or pin the map by hand. Cancelling the awaiting task cancels the
request.
"""

import asyncio

from protean.exceptions import ValidationError
from protean.fields import Float

from ordering.domain import logger, ordering


@ordering.value_object
class Coordinates:
    lat: Float(required=True, min_value=-90.0, max_value=90.0)
    lng: Float(required=True, min_value=-180.0, max_value=180.0)


class LocationDenied(Exception):
    """The customer or the device refused to share a location."""


class LocationUnavailable(Exception):
    """No location could be obtained; recoverable by retrying or pinning manually."""

    DENIED = "denied"
    TIMEOUT = "timeout"
    FAILED = "failed"

    def __init__(self, reason, detail=None):
        self.reason = reason
        self.detail = detail
        super().__init__(f"Location unavailable ({reason})" + (f": {detail}" if detail else ""))


async def acquire_location(locate, timeout=10.0) -> Coordinates:
    """Await one ``(lat, lng)`` pair from ``locate()``.

    ``locate`` is a zero-argument coroutine function provided by the device
    integration.
    """
    try:
        lat, lng = await asyncio.wait_for(locate(), timeout=timeout)
    except (LocationDenied, PermissionError) as exc:
        logger.info("location_denied", detail=str(exc))
        raise LocationUnavailable(LocationUnavailable.DENIED, str(exc) or None) from exc
    except TimeoutError as exc:
        logger.info("location_timeout", timeout=timeout)
        raise LocationUnavailable(LocationUnavailable.TIMEOUT) from exc
    except (OSError, ValueError, TypeError) as exc:
        logger.warning("location_failed", detail=str(exc))
        raise LocationUnavailable(LocationUnavailable.FAILED, str(exc) or None) from exc

    try:
        return Coordinates(lat=lat, lng=lng)
    except ValidationError as exc:
        raise LocationUnavailable(LocationUnavailable.FAILED, "Device reported invalid coordinates") from exc
