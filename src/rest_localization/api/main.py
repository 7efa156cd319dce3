from fastapi import APIRouter

from rest_localization.api.routes import cultures, products

api_router = APIRouter()
api_router.include_router(cultures.router)
api_router.include_router(products.router)
