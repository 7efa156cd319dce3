from rest_localization.products.models import Product, ProductDto
from rest_localization.products.service import get_product_dtos, get_products

__all__ = [
    # Models
    "Product",
    "ProductDto",
    # Service
    "get_product_dtos",
    "get_products",
]
