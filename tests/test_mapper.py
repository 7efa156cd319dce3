"""
Unit tests for mapping localized values onto target objects.
"""
from dataclasses import dataclass
from decimal import Decimal
from typing import Optional

import pytest
from pydantic import BaseModel, ConfigDict

from rest_localization.core.exceptions import (
    InvalidArgumentError,
    MissingTargetPropertyError,
)
from rest_localization.localization import LocalizationMapper, LocalizationResolver
from rest_localization.products import Product
from tests.conftest import Article, ArticleDto, Label


class TitleOnly(BaseModel):
    title: str = ""


class FrozenDto(BaseModel):
    model_config = ConfigDict(frozen=True)

    title: str = ""


class Untitled(BaseModel):
    title: Optional[str] = None
    title_localizations: Optional[dict[str, Optional[str]]] = None


@dataclass
class LabelView:
    text: str = ""


class Gift(Product):
    note: str = ""
    note_localizations: Optional[dict[str, Optional[str]]] = None


class GiftDto(BaseModel):
    name: str = ""
    note: str = ""


class TestMapOne:
    """Tests for LocalizationMapper.map_one"""

    def test_writes_localized_value(self, mapper, price_article):
        dto = ArticleDto()
        mapper.map_one(dto, price_article, "title", "de-CH")
        assert dto.title == "Preis-DE"
        assert dto.price == Decimal(0)

    def test_blank_name(self, mapper, price_article):
        with pytest.raises(InvalidArgumentError):
            mapper.map_one(ArticleDto(), price_article, "", "de")

    def test_missing_target_property_skipped(self, mapper, price_article):
        target = TitleOnly()
        mapper.map_one(target, price_article, "price", "de")
        assert not hasattr(target, "price")

    def test_missing_target_property_strict(self, mapper, price_article):
        with pytest.raises(MissingTargetPropertyError):
            mapper.map_one(TitleOnly(), price_article, "price", "de", strict=True)

    def test_readonly_target_skipped(self, mapper, price_article):
        target = FrozenDto()
        mapper.map_one(target, price_article, "title", "de")
        assert target.title == ""

    def test_absent_base_value_writes_nothing(self, mapper):
        source = Untitled(title_localizations={"de": "Titel"})
        target = TitleOnly(title="unchanged")
        mapper.map_one(target, source, "title", "de")
        assert target.title == "unchanged"

    def test_uses_context_culture(self, context, descriptor_cache, price_article):
        mapper = LocalizationMapper(LocalizationResolver(context, descriptor_cache))
        dto = ArticleDto()
        with context.scoped("de-AT"):
            mapper.map_one(dto, price_article, "title")
        assert dto.title == "Preis-AT"


class TestMapAll:
    """Tests for LocalizationMapper.map_all"""

    def test_maps_localizable_fields(self, mapper):
        article = Article(
            title="Price",
            title_localizations={"de": "Preis"},
            price=Decimal("10.00"),
            price_localizations={"de-AT": Decimal("12.00"), "de": None},
            sku="A-9",
        )
        dto = ArticleDto(sku="kept")
        result = mapper.map_all(dto, article, "de-AT")

        assert result is dto
        assert dto.title == "Preis"
        assert dto.price == Decimal("12.00")
        assert dto.sku == "kept"

    def test_tombstone_maps_base_value(self, mapper):
        article = Article(
            title="Price",
            price=Decimal("10.00"),
            price_localizations={"de": None},
        )
        dto = mapper.map_all(ArticleDto(), article, "de-CH")
        assert dto.price == Decimal("10.00")

    def test_source_is_not_mutated(self, mapper, price_article):
        before = price_article.model_dump()
        mapper.map_all(ArticleDto(), price_article, "de-AT")
        assert price_article.model_dump() == before

    def test_target_subset(self, mapper, price_article):
        target = mapper.map_all(TitleOnly(), price_article, "de-AT")
        assert target.title == "Preis-AT"

    def test_subclass_of_declared_type(self, mapper):
        gift = Gift(
            name="Apple",
            name_localizations={"de": "Apfel"},
            price=Decimal("1.20"),
            note="Gift",
            note_localizations={"de": "Geschenk"},
        )
        dto = mapper.map_all(GiftDto(), gift, "de")
        assert dto.name == "Apfel"
        assert dto.note == "Geschenk"

    def test_dataclass_source_and_target(self, mapper):
        label = Label(text="Save", text_localizations={"de-AT": "Sichern", "de": None})
        view = mapper.map_all(LabelView(), label, "de-AT")
        assert view.text == "Sichern"
        view = mapper.map_all(LabelView(), label, "de-DE")
        assert view.text == "Save"
