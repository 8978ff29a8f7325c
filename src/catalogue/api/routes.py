"""FastAPI routes for the Catalogue domain: operator pricing tools."""

from fastapi import APIRouter

from catalogue.api.schemas import DiscountRequest, DiscountResponse
from catalogue.domain import logger
from catalogue.item.discount import derive_discount_price

discount_router = APIRouter(prefix="/catalogue", tags=["catalogue"])


@discount_router.post("/discounts", response_model=DiscountResponse)
async def derive_discount(body: DiscountRequest) -> DiscountResponse:
    """Preview the discounted price for an operator's discount input.

    A value that is not a number yields ``null``: the discount is cleared.
    """
    price = derive_discount_price(body.base_price, body.mode, body.value)
    logger.debug("discount_derived", mode=body.mode.value, discount_price=price)
    return DiscountResponse(discount_price=price)
