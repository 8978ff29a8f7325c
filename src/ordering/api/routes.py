"""FastAPI routes for the Ordering domain: delivery quotes and checkout."""

from fastapi import APIRouter, Depends, HTTPException
from protean.exceptions import ValidationError

from catalogue.item.item import Variation
from ordering.api.schemas import (
    CheckoutSummaryRequest,
    CheckoutSummaryResponse,
    DeliveryQuoteRequest,
    DeliveryQuoteResponse,
)
from ordering.cart.cart import CartLine, CartState
from ordering.cart.identity import DEFAULT_VARIATION, LineKey, SelectedAddOn, add_on_key, group_add_ons
from ordering.cart.store import CartStore
from ordering.checkout.checkout import Checkout
from ordering.checkout.delivery import DeliverySettings
from ordering.checkout.payment import PaymentMethod
from shared.config import StorefrontSettings, get_settings


def _cart_from_lines(lines) -> CartState:
    cart_lines = []
    for line in lines:
        variation = Variation(**line.variation.model_dump(mode="json")) if line.variation else None
        add_ons = group_add_ons(SelectedAddOn(**add_on.model_dump(mode="json")) for add_on in line.add_ons)
        key = LineKey(
            item_id=line.item_id,
            variation_id=variation.id if variation else DEFAULT_VARIATION,
            add_ons=add_on_key(add_ons),
        )
        quantity = line.quantity
        if not line.measurement_unit:
            if not quantity.is_integer():
                raise ValidationError({"lines": [f"{line.name} is sold in whole units"]})
            quantity = int(quantity)
        cart_lines.append(
            CartLine(
                key=key,
                item_id=line.item_id,
                name=line.name,
                measurement_unit=line.measurement_unit,
                quantity=quantity,
                selected_variation=variation,
                selected_add_ons=list(add_ons),
                unit_price=line.unit_price,
            )
        )
    if len({line.id for line in cart_lines}) != len(cart_lines):
        raise ValidationError({"lines": ["The same selection appears on more than one line"]})
    return CartState(lines=cart_lines)


# ---------------------------------------------------------------------------
# Delivery Router
# ---------------------------------------------------------------------------
delivery_router = APIRouter(prefix="/delivery", tags=["delivery"])


@delivery_router.post("/quotes", response_model=DeliveryQuoteResponse)
async def quote_delivery(
    body: DeliveryQuoteRequest,
    settings: StorefrontSettings = Depends(get_settings),
) -> DeliveryQuoteResponse:
    quote = DeliverySettings.from_config(settings).quote_to(body.lat, body.lng)
    return DeliveryQuoteResponse(**quote.to_dict())


# ---------------------------------------------------------------------------
# Checkout Router
# ---------------------------------------------------------------------------
checkout_router = APIRouter(prefix="/checkout", tags=["checkout"])


@checkout_router.post("/summary", response_model=CheckoutSummaryResponse)
async def summarize_order(
    body: CheckoutSummaryRequest,
    settings: StorefrontSettings = Depends(get_settings),
) -> CheckoutSummaryResponse:
    """Render the order message and chat link for a client-held cart.

    1. Rebuild the cart from the submitted lines
    2. Price delivery from the pinned location, if delivering
    3. Render the summary
    """
    try:
        store = CartStore.from_state(_cart_from_lines(body.lines))
        checkout = Checkout(
            store,
            DeliverySettings.from_config(settings),
            payment_methods=[PaymentMethod(**body.payment_method.model_dump())],
            settings=settings,
        )
        checkout.customer_name = body.customer_name
        checkout.contact_number = body.contact_number
        checkout.choose_service(body.service_type)
        checkout.choose_pickup_time(body.pickup_time, body.custom_time)
        checkout.landmark = body.landmark or ""
        checkout.notes = body.notes or ""
        if body.lat is not None and body.lng is not None:
            checkout.pin_location(body.lat, body.lng)

        order = checkout.place_order()
    except ValidationError as exc:
        raise HTTPException(status_code=422, detail=exc.messages) from exc

    return CheckoutSummaryResponse(**order.to_dict())
