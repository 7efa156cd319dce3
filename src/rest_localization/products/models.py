from decimal import Decimal

from pydantic import BaseModel, Field

from rest_localization.localization import localizable


@localizable("name", "price")
class Product(BaseModel):
    """Product record with per-culture overrides."""

    name: str = Field(min_length=1, max_length=255)
    name_localizations: dict[str, str | None] | None = None

    price: Decimal
    price_localizations: dict[str, Decimal | None] | None = None


class ProductDto(BaseModel):
    """Product resolved for one culture."""

    name: str = ""
    price: Decimal = Decimal(0)
