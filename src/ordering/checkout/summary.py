"""Order summary: the message handed to the shop's chat channel.

The summary is plain text, rendered the same way every time for the same
input, and sent verbatim: URL-encoded onto the shop's chat link, which the
customer's messaging app opens. Delivery of the message is up to that app.
"""

from urllib.parse import quote as url_quote

from protean.exceptions import ValidationError

from catalogue.shared.money import format_amount
from ordering.cart.pricing import cart_total, line_total
from ordering.checkout.details import ServiceType

CHAT_LINK = "https://m.me/{page_id}?text={text}"
MAP_LINK = "https://www.google.com/maps?q={lat},{lng}"


def _trim(number) -> str:
    return f"{float(number):.2f}".rstrip("0").rstrip(".")


def _money(amount, currency_symbol) -> str:
    return f"{currency_symbol}{format_amount(amount)}"


def map_link(location) -> str:
    return MAP_LINK.format(lat=location.lat, lng=location.lng)


def handoff_url(message, page_id) -> str:
    """Chat link that opens a conversation with ``message`` pre-filled."""
    return CHAT_LINK.format(page_id=page_id, text=url_quote(message, safe=""))


def describe_line(line, currency_symbol="₱") -> str:
    """``• Name (Variation) + Add-on, Add-on x2 x3 - ₱total``"""
    text = f"• {line.name}"
    if line.selected_variation is not None:
        text += f" ({line.selected_variation.name})"
    if line.selected_add_ons:
        names = [
            f"{add_on.name} x{add_on.quantity}" if add_on.quantity > 1 else add_on.name
            for add_on in line.selected_add_ons
        ]
        text += " + " + ", ".join(names)
    quantity = _trim(line.quantity)
    if line.is_measured:
        quantity += f" {line.measurement_unit}"
    text += f" x{quantity} - {_money(line_total(line), currency_symbol)}"
    return text


def build_summary(
    cart,
    customer,
    payment,
    service_type=ServiceType.PICKUP,
    delivery=None,
    pickup_time=None,
    notes=None,
    shop_name="5J's Frozen",
    currency_symbol="₱",
) -> str:
    """Render the order message.

    Args:
        cart: The ``CartState`` being ordered.
        customer: ``CustomerInfo`` with name and contact number.
        payment: The chosen ``PaymentMethod``, or its id when unknown.
        service_type: Pickup or delivery.
        delivery: ``DeliveryDetails``; required for delivery orders.
        pickup_time: Human-readable pickup time for pickup orders.
        notes: Free-text special instructions.
    """
    if cart.is_empty:
        raise ValidationError({"cart": ["Cannot place an order with an empty cart"]})

    service_type = ServiceType(service_type)
    is_delivery = service_type is ServiceType.DELIVERY
    if is_delivery and delivery is None:
        raise ValidationError({"delivery": ["A delivery location is required for delivery orders"]})

    items_total = cart_total(cart)
    delivery_fee = delivery.quote.fee if is_delivery else 0

    sections = [f"🛒 {shop_name} ORDER"]

    who = [
        f"👤 Customer: {customer.name}",
        f"📞 Contact: {customer.contact_number}",
        f"📍 Service: {service_type.value.capitalize()}",
    ]
    if not is_delivery and pickup_time:
        who.append(f"⏰ Pickup Time: {pickup_time}")
    sections.append("\n".join(who))

    if is_delivery:
        block = [
            "🛵 Delivery Info:",
            f"   • Map Location: {map_link(delivery.location)}",
            f"   • Distance: {_trim(delivery.quote.distance_km)} km",
            f"   • Fee: {_money(delivery_fee, currency_symbol)}",
        ]
        if delivery.landmark:
            block.append(f"   • Landmark: {delivery.landmark}")
        sections.append("\n".join(block))

    sections.append("\n".join(["📋 ORDER DETAILS:", *(describe_line(line, currency_symbol) for line in cart.lines)]))

    totals = [f"💵 Items Total: {_money(items_total, currency_symbol)}"]
    if is_delivery:
        totals.append(f"🛵 Delivery Fee: {_money(delivery_fee, currency_symbol)}")
    totals.append(f"💰 TOTAL AMOUNT: {_money(items_total + delivery_fee, currency_symbol)}")
    sections.append("\n".join(totals))

    payment_name = getattr(payment, "name", None) or str(payment)
    paying = [f"💳 Payment: {payment_name}"]
    if getattr(payment, "needs_receipt", False):
        paying.append("📸 Payment Screenshot: Please attach your payment receipt screenshot")
    sections.append("\n".join(paying))

    if notes and notes.strip():
        sections.append(f"📝 Notes: {notes.strip()}")

    sections.append(f"Please confirm this order to proceed. Thank you for choosing {shop_name}! 🥟")
    return "\n\n".join(sections)
