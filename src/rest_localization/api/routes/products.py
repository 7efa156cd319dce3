from typing import Annotated, Any

from fastapi import APIRouter, Query

from rest_localization.api.deps import MapperDep
from rest_localization.products import (
    Product,
    ProductDto,
    get_product_dtos,
    get_products,
)

router = APIRouter(prefix="/products", tags=["products"])


@router.get("", response_model=list[Product])
def read_products() -> Any:
    """Get all products with their localizations."""
    return get_products()


@router.get("/dto", response_model=list[ProductDto])
def read_product_dtos(
    mapper: MapperDep,
    culture: Annotated[
        str | None,
        Query(description="Culture of the values (default: request culture)"),
    ] = None,
) -> Any:
    """Get products localized for a culture."""
    return get_product_dtos(mapper, culture)
