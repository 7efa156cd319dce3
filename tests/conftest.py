"""
Pytest configuration and shared fixtures for culture and localization tests.
"""
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Optional

import pytest
from pydantic import BaseModel

from rest_localization.cultures import (
    CultureCatalog,
    CultureContext,
    CultureContextKind,
    LocaleDatabase,
)
from rest_localization.localization import (
    LocalizationMapper,
    LocalizationResolver,
    PropertyDescriptorCache,
)

SUPPORTED_CULTURES = ["en", "en-US", "en-GB", "de", "de-DE", "de-AT", "de-CH", "zh"]


class Article(BaseModel):
    """Localizable record used across resolver and mapper tests"""

    title: str
    title_localizations: Optional[dict[str, Optional[str]]] = None

    price: Decimal = Decimal("9.90")
    price_localizations: Optional[dict[str, Optional[Decimal]]] = None

    sku: str = "A-1"


class ArticleDto(BaseModel):
    title: str = ""
    price: Decimal = Decimal(0)
    sku: str = ""


@dataclass
class Label:
    """Dataclass record discovered by the naming convention"""

    text: Optional[str] = None
    text_localizations: dict[str, Optional[str]] = field(default_factory=dict)


@pytest.fixture(scope="session")
def locale_database():
    """Bundled CLDR locale database"""
    return LocaleDatabase()


@pytest.fixture
def catalog(locale_database):
    """Catalog of the sample application cultures"""
    return CultureCatalog.build(
        SUPPORTED_CULTURES,
        default_culture="en-US",
        database=locale_database,
    )


@pytest.fixture
def context(catalog):
    return CultureContext(catalog)


@pytest.fixture
def process_context(locale_database):
    process_catalog = CultureCatalog.build(
        SUPPORTED_CULTURES,
        default_culture="en-US",
        context_kind=CultureContextKind.PROCESS_WIDE,
        database=locale_database,
    )
    return CultureContext(process_catalog)


@pytest.fixture
def descriptor_cache():
    """Fresh descriptor cache per test"""
    return PropertyDescriptorCache()


@pytest.fixture
def resolver(descriptor_cache):
    return LocalizationResolver(cache=descriptor_cache)


@pytest.fixture
def mapper(resolver):
    return LocalizationMapper(resolver)


@pytest.fixture
def price_article():
    """Article with the German price localizations"""
    return Article(
        title="Price",
        title_localizations={"de-AT": "Preis-AT", "de": "Preis-DE"},
    )
