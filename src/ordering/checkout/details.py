"""Customer-entered checkout details."""

from enum import Enum

from protean.fields import String, Text, ValueObject

from ordering.checkout.delivery import DeliveryQuote
from ordering.checkout.location import Coordinates
from ordering.domain import ordering


class ServiceType(Enum):
    PICKUP = "pickup"
    DELIVERY = "delivery"


class PickupTime(Enum):
    SOON = "5-10"
    QUARTER_HOUR = "15-20"
    HALF_HOUR = "25-30"
    CUSTOM = "custom"


@ordering.value_object
class CustomerInfo:
    name: String(required=True, sanitize=False)
    contact_number: String(required=True, max_length=50, sanitize=False)

    @classmethod
    def entered(cls, name, contact_number):
        """Build from form input, ignoring surrounding whitespace."""
        return cls(name=name.strip(), contact_number=contact_number.strip())


@ordering.value_object
class DeliveryDetails:
    """Where the order goes and what it costs to get there."""

    location: ValueObject(Coordinates, required=True)
    quote: ValueObject(DeliveryQuote, required=True)
    landmark: Text(sanitize=False)


def describe_pickup_time(pickup_time, custom_time=None) -> str:
    pickup_time = PickupTime(pickup_time)
    if pickup_time is PickupTime.CUSTOM:
        return (custom_time or "").strip()
    return f"{pickup_time.value} minutes"
