"""Pydantic request/response schemas for the Catalogue API."""

from pydantic import BaseModel, Field

from catalogue.item.discount import DiscountMode


class DiscountRequest(BaseModel):
    base_price: float = Field(ge=0)
    mode: DiscountMode = DiscountMode.FIXED
    value: float | str | None = None

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "base_price": 100,
                    "mode": "percentage",
                    "value": 20,
                }
            ]
        }
    }


class DiscountResponse(BaseModel):
    discount_price: float | None
