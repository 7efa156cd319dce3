"""
Tests for the HTTP API.

Covers culture listings, request culture negotiation, localized product
DTOs and translated error responses.
"""
from decimal import Decimal
import threading

from fastapi.testclient import TestClient
import i18n
import pytest

from rest_localization.i18n import translate, translate_with_fallback
from rest_localization.main import create_app
from tests.conftest import SUPPORTED_CULTURES


@pytest.fixture
def client():
    with TestClient(create_app()) as test_client:
        yield test_client


def _products(response) -> dict[str, Decimal]:
    return {item["name"]: Decimal(item["price"]) for item in response.json()}


class TestCultureRoutes:
    """Tests for the /cultures endpoints"""

    def test_list_cultures(self, client):
        response = client.get("/cultures")
        assert response.status_code == 200
        assert response.json() == SUPPORTED_CULTURES

    def test_list_descriptions(self, client):
        response = client.get("/cultures/description")
        assert response.status_code == 200
        items = response.json()
        assert [item["identifier"] for item in items] == SUPPORTED_CULTURES
        assert set(items[0]) == {"identifier", "nativeName", "englishName"}

    def test_system_cultures_neutral_only(self, client):
        response = client.get(
            "/cultures/system", params={"specific": False, "installed": False}
        )
        assert response.status_code == 200
        identifiers = {item["identifier"] for item in response.json()}
        assert "en" in identifiers
        assert "en-US" not in identifiers

    def test_system_cultures_without_filter(self, client):
        response = client.get(
            "/cultures/system",
            params={"neutral": False, "specific": False, "installed": False},
        )
        assert response.status_code == 400
        body = response.json()
        assert body["error_code"] == "INVALID_CULTURE_FILTER"
        assert body["message"] == "Missing culture type selection"

    def test_error_message_in_request_culture(self, client):
        response = client.get(
            "/cultures/system",
            params={"neutral": False, "specific": False, "installed": False},
            headers={"Accept-Language": "de-AT"},
        )
        assert response.status_code == 400
        assert response.json()["message"] == "Keine Kulturtypen ausgewählt"
        assert response.headers["Content-Language"] == "de-AT"


class TestRequestCulture:
    """Tests for Accept-Language negotiation"""

    def test_default_culture(self, client):
        response = client.get("/cultures/current")
        assert response.json() == "en-US"
        assert response.headers["Content-Language"] == "en-US"

    def test_highest_quality_wins(self, client):
        response = client.get(
            "/cultures/current", headers={"Accept-Language": "de-CH;q=0.8, zh"}
        )
        assert response.json() == "zh"

    def test_unsupported_culture_skipped(self, client):
        response = client.get(
            "/cultures/current", headers={"Accept-Language": "fr-FR,de;q=0.5"}
        )
        assert response.json() == "de"

    def test_neutral_language_of_tag(self, client):
        response = client.get(
            "/cultures/current", headers={"Accept-Language": "de-LI"}
        )
        assert response.json() == "de"

    def test_requests_do_not_leak_culture(self, client):
        client.get("/cultures/current", headers={"Accept-Language": "zh"})
        assert client.get("/cultures/current").json() == "en-US"


class TestProductRoutes:
    """Tests for the /products endpoints"""

    def test_products_with_localizations(self, client):
        response = client.get("/products")
        assert response.status_code == 200
        apple = response.json()[0]
        assert apple["name"] == "Apple"
        assert apple["name_localizations"]["de-AT"] == "Paradeisapfel"

    def test_dtos_for_explicit_culture(self, client):
        response = client.get("/products/dto", params={"culture": "de-AT"})
        assert response.status_code == 200
        assert _products(response) == {
            "Paradeisapfel": Decimal("1.10"),
            "Paradeiser": Decimal("2.50"),
            "Erdapfel": Decimal("0.80"),
            "Keks": Decimal("3.00"),
        }

    def test_dtos_for_request_culture(self, client):
        response = client.get("/products/dto", headers={"Accept-Language": "en-GB"})
        assert _products(response) == {
            "Apple": Decimal("1.20"),
            "Tomato": Decimal("2.10"),
            "Potato": Decimal("0.80"),
            "Biscuit": Decimal("2.70"),
        }

    def test_dtos_for_bare_language(self, client):
        """A bare language uses a country variant when there is no exact entry"""
        response = client.get("/products/dto", params={"culture": "en"})
        names = set(_products(response))
        assert names == {"Apple", "Tomato", "Potato", "Biscuit"}

    def test_dtos_for_default_culture(self, client):
        response = client.get("/products/dto")
        assert set(_products(response)) == {"Apple", "Tomato", "Potato", "Cookie"}


class TestTranslations:
    """Tests for error message translation"""

    def test_translate_specific_culture(self):
        assert translate("error_unknown_culture", "de-AT", name="fr") == (
            "Unbekannte Kultur fr"
        )

    def test_untranslated_language_uses_english(self):
        assert translate("error_unknown_culture", "zh", name="fr") == (
            "Unknown culture fr"
        )

    def test_global_locale_untouched(self):
        i18n.set("locale", "en")
        assert translate("error_empty_catalog", "de") == "Keine Kulturen angegeben"
        assert i18n.get("locale") == "en"

    def test_concurrent_translations_keep_language(self):
        expected = {
            "de": "Unbekannte Kultur fr",
            "en": "Unknown culture fr",
        }
        for culture in expected:
            translate("error_unknown_culture", culture, name="fr")
        barrier = threading.Barrier(8)
        results: list[tuple[str, str]] = []

        def worker(culture: str) -> None:
            barrier.wait()
            for _ in range(50):
                results.append(
                    (culture, translate("error_unknown_culture", culture, name="fr"))
                )

        threads = [
            threading.Thread(target=worker, args=(culture,))
            for culture in ["de", "en"] * 4
        ]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert all(message == expected[culture] for culture, message in results)

    def test_fallback_for_unknown_key(self):
        assert translate_with_fallback("error_nope", "de", fallback="Oops") == "Oops"
