"""Delivery fee calculation from the store and customer locations.

Distance is the great-circle (Haversine) distance on a sphere of radius
6371 km. The first kilometre costs the flat ``base_rate``; every kilometre
after that costs ``per_km_rate``, pro rata. The fee is computed from the
unrounded distance and only the final amount is rounded, upwards, to a whole
currency unit. The distance reported back is rounded to two decimals for
display.
"""

import math

from protean.fields import Boolean, Float, Integer

from catalogue.shared.money import ceil_money, parse_amount
from ordering.domain import ordering
from shared.config import MANILA_LAT, MANILA_LNG

EARTH_RADIUS_KM = 6371
FLAT_RATE_KM = 1


@ordering.value_object
class DeliveryQuote:
    """Distance and fee for one pinned delivery location.

    ``available`` is false when the store location is not configured; the
    fee is then zero and delivery cannot be offered.
    """

    distance_km: Float(default=0.0)
    fee: Integer(default=0)
    available: Boolean(default=True)


UNAVAILABLE = DeliveryQuote(distance_km=0.0, fee=0, available=False)

# Operator setting keys, as stored by the settings source
_RECORD_FIELDS = {
    "store_lat": "store_lat",
    "store_lng": "store_lng",
    "delivery_rate_base": "base_rate",
    "delivery_rate_per_km": "per_km_rate",
}


def _store_located(lat, lng):
    # A store pinned at exactly 0,0 is treated as not configured
    if not (lat and lng):
        return False
    return _valid_coordinate(lat, 90) and _valid_coordinate(lng, 180)


def _valid_coordinate(value, limit):
    if value is None or isinstance(value, bool):
        return False
    try:
        value = float(value)
    except (TypeError, ValueError):
        return False
    return math.isfinite(value) and -limit <= value <= limit


def haversine_km(lat1, lng1, lat2, lng2) -> float:
    d_lat = math.radians(lat2 - lat1)
    d_lng = math.radians(lng2 - lng1)
    a = (
        math.sin(d_lat / 2) ** 2
        + math.cos(math.radians(lat1)) * math.cos(math.radians(lat2)) * math.sin(d_lng / 2) ** 2
    )
    # Floating-point error can push ``a`` just outside [0, 1] near antipodes
    a = min(1.0, max(0.0, a))
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return EARTH_RADIUS_KM * c


def fee_for_distance(distance_km, base_rate, per_km_rate) -> int:
    fee = base_rate
    if distance_km > FLAT_RATE_KM:
        fee += (distance_km - FLAT_RATE_KM) * per_km_rate
    return ceil_money(fee)


def quote(store_lat, store_lng, customer_lat, customer_lng, base_rate, per_km_rate) -> DeliveryQuote:
    """Price delivery from the store to the customer's pin.

    Unset or out-of-range store coordinates give the ``UNAVAILABLE`` quote
    instead of an error, so pickup orders can still go through.
    """
    if not _store_located(store_lat, store_lng):
        return UNAVAILABLE

    distance = haversine_km(float(store_lat), float(store_lng), customer_lat, customer_lng)
    return DeliveryQuote(
        distance_km=round(distance, 2),
        fee=fee_for_distance(distance, base_rate, per_km_rate),
    )


@ordering.value_object
class DeliverySettings:
    """Operator-maintained store location and delivery rates."""

    store_lat: Float(default=MANILA_LAT)
    store_lng: Float(default=MANILA_LNG)
    base_rate: Float(min_value=0.0, default=50.0)
    per_km_rate: Float(min_value=0.0, default=15.0)

    @classmethod
    def from_config(cls, settings):
        return cls(
            store_lat=settings.store_lat,
            store_lng=settings.store_lng,
            base_rate=settings.delivery_rate_base,
            per_km_rate=settings.delivery_rate_per_km,
        )

    @classmethod
    def from_records(cls, records, defaults=None):
        """Build settings from ``{"id": key, "value": text}`` rows.

        Values that do not parse as numbers keep the default.
        """
        values = (defaults if defaults is not None else cls()).to_dict()
        for record in records:
            field = _RECORD_FIELDS.get(record.get("id"))
            amount = parse_amount(record.get("value"))
            if field is not None and amount is not None:
                values[field] = amount
        return cls(**values)

    @property
    def is_configured(self) -> bool:
        return _store_located(self.store_lat, self.store_lng)

    def quote_to(self, lat, lng) -> DeliveryQuote:
        return quote(self.store_lat, self.store_lng, lat, lng, self.base_rate, self.per_km_rate)
