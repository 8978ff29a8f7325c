"""Checkout: turns the session's cart into an order message.

The customer fills in their details, chooses pickup or delivery, pins a
delivery location (each new pin re-prices delivery from scratch), and picks a
payment method. Placing the order renders the summary, builds the chat link
and empties the cart. Nothing is stored server-side.
"""

from protean.exceptions import ValidationError
from protean.fields import Float, Integer, Text

from ordering.cart.pricing import cart_total
from ordering.checkout.details import CustomerInfo, DeliveryDetails, PickupTime, ServiceType, describe_pickup_time
from ordering.checkout.location import Coordinates, acquire_location
from ordering.checkout.payment import find_payment_method
from ordering.checkout.summary import build_summary, handoff_url
from ordering.domain import logger, ordering
from shared.config import get_settings


@ordering.value_object
class PlacedOrder:
    message: Text(required=True, sanitize=False)
    handoff_url: Text(required=True, sanitize=False)
    items_total: Float(required=True)
    delivery_fee: Integer(default=0)
    total: Float(required=True)


class Checkout:
    def __init__(self, store, delivery_settings, payment_methods=(), settings=None):
        self.store = store
        self.delivery_settings = delivery_settings
        self.payment_methods = tuple(payment_methods)
        self.settings = settings or get_settings()

        self.customer_name = ""
        self.contact_number = ""
        self.service_type = ServiceType.PICKUP
        self.pickup_time = PickupTime.SOON
        self.custom_time = ""
        self.landmark = ""
        self.notes = ""
        self.payment_method_id = self.payment_methods[0].id if self.payment_methods else None

        self.location = None
        self.quote = None

    # -------------------------------------------------------------------
    # Delivery
    # -------------------------------------------------------------------
    def choose_service(self, service_type):
        self.service_type = ServiceType(service_type)

    def choose_pickup_time(self, pickup_time, custom_time=""):
        self.pickup_time = PickupTime(pickup_time)
        self.custom_time = custom_time or ""

    def pin_location(self, lat, lng):
        """Price delivery to a newly pinned location."""
        try:
            location = Coordinates(lat=lat, lng=lng)
        except ValidationError:
            raise ValidationError({"location": ["Latitude or longitude is out of range"]}) from None

        quote = self.delivery_settings.quote_to(location.lat, location.lng)
        self.location = location
        self.quote = quote
        logger.info(
            "delivery_quoted",
            distance_km=quote.distance_km,
            fee=quote.fee,
            available=quote.available,
        )
        return quote

    async def use_device_location(self, locate, timeout=10.0):
        """Pin the device's current location.

        Raises ``LocationUnavailable`` when no location could be read; the
        previous pin and quote are kept in that case.
        """
        location = await acquire_location(locate, timeout=timeout)
        return self.pin_location(location.lat, location.lng)

    # -------------------------------------------------------------------
    # Totals
    # -------------------------------------------------------------------
    @property
    def is_delivery(self) -> bool:
        return self.service_type is ServiceType.DELIVERY

    @property
    def items_total(self) -> float:
        return cart_total(self.store.state)

    @property
    def delivery_fee(self) -> int:
        if not self.is_delivery or self.quote is None:
            return 0
        return self.quote.fee

    @property
    def final_total(self) -> float:
        return self.items_total + self.delivery_fee

    # -------------------------------------------------------------------
    # Validation
    # -------------------------------------------------------------------
    def errors(self):
        errors = {}
        if not self.customer_name.strip():
            errors["customer_name"] = ["Full name is required"]
        if not self.contact_number.strip():
            errors["contact_number"] = ["Contact number is required"]
        if self.is_delivery:
            if self.location is None:
                errors["location"] = ["Pin your delivery location on the map"]
            elif not self.quote.available:
                errors["location"] = ["Delivery is not available right now"]
        elif self.pickup_time is PickupTime.CUSTOM and not self.custom_time.strip():
            errors["custom_time"] = ["Enter your preferred pickup time"]
        if not self.payment_method_id:
            errors["payment_method"] = ["Choose a payment method"]
        if self.store.state.is_empty:
            errors["cart"] = ["Your cart is empty"]
        return errors

    def is_details_valid(self) -> bool:
        return not self.errors()

    # -------------------------------------------------------------------
    # Placement
    # -------------------------------------------------------------------
    def place_order(self) -> PlacedOrder:
        errors = self.errors()
        if errors:
            raise ValidationError(errors)

        customer = CustomerInfo.entered(self.customer_name, self.contact_number)
        payment = find_payment_method(self.payment_methods, self.payment_method_id) or self.payment_method_id
        delivery = None
        pickup_time = None
        if self.is_delivery:
            delivery = DeliveryDetails(location=self.location, quote=self.quote, landmark=self.landmark.strip() or None)
        else:
            pickup_time = describe_pickup_time(self.pickup_time, self.custom_time)

        message = build_summary(
            self.store.state,
            customer,
            payment,
            service_type=self.service_type,
            delivery=delivery,
            pickup_time=pickup_time,
            notes=self.notes,
            shop_name=self.settings.shop_name,
            currency_symbol=self.settings.currency_symbol,
        )
        order = PlacedOrder(
            message=message,
            handoff_url=handoff_url(message, self.settings.messenger_page_id),
            items_total=self.items_total,
            delivery_fee=self.delivery_fee,
            total=self.final_total,
        )

        logger.info(
            "order_placed",
            service_type=self.service_type.value,
            line_count=len(self.store.lines),
            total=order.total,
        )
        self.store.clear_cart()
        return order
