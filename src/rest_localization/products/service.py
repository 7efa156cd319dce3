"""In-memory product records used by the sample API."""

from decimal import Decimal

from rest_localization.localization import LocalizationMapper
from rest_localization.products.models import Product, ProductDto

PRODUCTS: tuple[Product, ...] = (
    Product(
        name="Apple",
        name_localizations={"de": "Apfel", "de-AT": "Paradeisapfel", "zh": "苹果"},
        price=Decimal("1.20"),
        price_localizations={"de": Decimal("1.10"), "de-CH": Decimal("1.90")},
    ),
    Product(
        name="Tomato",
        name_localizations={"de": "Tomate", "de-AT": "Paradeiser", "en-GB": None},
        price=Decimal("2.50"),
        price_localizations={"en-GB": Decimal("2.10"), "de-AT": None},
    ),
    Product(
        name="Potato",
        name_localizations={"de": "Kartoffel", "de-AT": "Erdapfel", "zh": "土豆"},
        price=Decimal("0.80"),
    ),
    Product(
        name="Cookie",
        name_localizations={"en-GB": "Biscuit", "de": "Keks", "de-AT": "Keks"},
        price=Decimal("3.00"),
        price_localizations={"en-GB": Decimal("2.70")},
    ),
)


def get_products() -> list[Product]:
    return [product.model_copy(deep=True) for product in PRODUCTS]


def get_product_dtos(
    mapper: LocalizationMapper, culture: str | None = None
) -> list[ProductDto]:
    """Products as DTOs with values localized for ``culture``."""
    return [
        mapper.map_all(
            ProductDto.model_validate(product, from_attributes=True),
            product,
            culture,
        )
        for product in get_products()
    ]
