from typing import Annotated

from fastapi import Depends, Request

from rest_localization.core.config import Settings, get_settings
from rest_localization.cultures import CultureCatalog, CultureContext, LocaleDatabase
from rest_localization.cultures.database import get_locale_database
from rest_localization.localization import LocalizationMapper

SettingsDep = Annotated[Settings, Depends(get_settings)]


def get_catalog(request: Request) -> CultureCatalog:
    catalog: CultureCatalog = request.app.state.culture_catalog
    return catalog


def get_culture_context(request: Request) -> CultureContext:
    context: CultureContext = request.app.state.culture_context
    return context


def get_mapper(request: Request) -> LocalizationMapper:
    mapper: LocalizationMapper = request.app.state.localization_mapper
    return mapper


CatalogDep = Annotated[CultureCatalog, Depends(get_catalog)]
CultureContextDep = Annotated[CultureContext, Depends(get_culture_context)]
MapperDep = Annotated[LocalizationMapper, Depends(get_mapper)]
LocaleDatabaseDep = Annotated[LocaleDatabase, Depends(get_locale_database)]
