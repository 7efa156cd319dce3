from typing import Annotated

from fastapi import APIRouter, Query

from rest_localization.api.deps import CatalogDep, CultureContextDep, LocaleDatabaseDep
from rest_localization.cultures import CultureDescription, CultureScope

router = APIRouter(prefix="/cultures", tags=["cultures"])


@router.get("", response_model=list[str])
def read_cultures(catalog: CatalogDep) -> list[str]:
    """Get the supported culture identifiers."""
    return catalog.list_supported_cultures()


@router.get("/description", response_model=list[CultureDescription])
def read_culture_descriptions(catalog: CatalogDep) -> list[CultureDescription]:
    """Get the supported culture descriptions."""
    return catalog.list_supported_culture_descriptions()


@router.get("/system", response_model=list[CultureDescription])
def read_system_cultures(
    database: LocaleDatabaseDep,
    neutral: Annotated[bool, Query()] = True,
    specific: Annotated[bool, Query()] = True,
    installed: Annotated[bool, Query()] = True,
    custom: Annotated[bool, Query()] = False,
    replacement: Annotated[bool, Query()] = False,
) -> list[CultureDescription]:
    """Get the locale database cultures selected by the category flags.

    Independent of the supported culture catalog.
    """
    scope = CultureScope(neutral, specific, installed, custom, replacement)
    return database.cultures(scope)


@router.get("/current", response_model=str)
def read_current_culture(context: CultureContextDep) -> str:
    """Get the current culture of the request."""
    return context.current_culture()
