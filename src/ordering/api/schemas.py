"""Pydantic request/response schemas for the Ordering API.

These are external contracts, separate from the cart and checkout models.
The cart is held by the client; requests carry the lines as the client sees
them and the server only prices delivery and renders the order message.
"""

from pydantic import BaseModel, Field

from catalogue.item.item import AddOnCategory
from ordering.checkout.details import PickupTime, ServiceType


# ---------------------------------------------------------------------------
# Shared sub-models
# ---------------------------------------------------------------------------
class VariationSchema(BaseModel):
    id: str
    name: str
    price: float = Field(ge=0)


class AddOnSchema(BaseModel):
    id: str
    name: str
    price: float = Field(default=0.0, ge=0)
    category: AddOnCategory = AddOnCategory.EXTRAS
    quantity: int = Field(default=1, ge=1)


class CartLineSchema(BaseModel):
    item_id: str
    name: str
    quantity: float = Field(gt=0)
    unit_price: float = Field(ge=0)
    measurement_unit: str | None = None
    variation: VariationSchema | None = None
    add_ons: list[AddOnSchema] = Field(default_factory=list)


class PaymentMethodSchema(BaseModel):
    id: str
    name: str
    account_number: str | None = None
    account_name: str | None = None
    qr_code_url: str | None = None


# ---------------------------------------------------------------------------
# Delivery
# ---------------------------------------------------------------------------
class DeliveryQuoteRequest(BaseModel):
    lat: float = Field(ge=-90, le=90)
    lng: float = Field(ge=-180, le=180)

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "lat": 14.6091,
                    "lng": 121.0223,
                }
            ]
        }
    }


class DeliveryQuoteResponse(BaseModel):
    distance_km: float
    fee: int
    available: bool


# ---------------------------------------------------------------------------
# Checkout
# ---------------------------------------------------------------------------
class CheckoutSummaryRequest(BaseModel):
    customer_name: str
    contact_number: str
    service_type: ServiceType = ServiceType.PICKUP
    pickup_time: PickupTime = PickupTime.SOON
    custom_time: str | None = None
    lat: float | None = None
    lng: float | None = None
    landmark: str | None = None
    payment_method: PaymentMethodSchema
    notes: str | None = None
    lines: list[CartLineSchema] = Field(min_length=1)


class CheckoutSummaryResponse(BaseModel):
    message: str
    handoff_url: str
    items_total: float
    delivery_fee: int
    total: float
