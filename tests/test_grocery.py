"""Tests for grocery store and product search."""
import pytest
import responses

from conftest import KROGER_URL, PLACES_URL, TOKEN_URL, query_of
from toolkit import invoke
from tools.search_grocery_stores import TOOL as STORES, is_known_chain
from tools.search_products import TOOL as PRODUCTS

PRODUCTS_URL = f"{KROGER_URL}/products"


def place(name, **extra):
    return {"name": name, "formatted_address": f"{name} Street", "place_id": f"id-{name}", **extra}


class TestBrandFilter:
    def test_local_grocer_excluded(self):
        assert not is_known_chain("Acme Local Grocer")

    def test_chain_store_included(self):
        assert is_known_chain("Kroger Marketplace #12")
        assert is_known_chain("fred meyer")
        assert is_known_chain("Jay C Food Store")
        assert is_known_chain("Smith's Food and Drug")

    @pytest.mark.parametrize(
        "name", ["Jay Cee Liquor", "Pay Less Shoes", "Smith's Hardware", "Target Optical", "Rinaldi's Deli"]
    )
    def test_unrelated_businesses_excluded(self, name):
        assert not is_known_chain(name)


class TestSearchGroceryStores:
    @responses.activate
    def test_only_known_chains_are_returned(self, caller):
        responses.add(
            responses.GET,
            PLACES_URL,
            json={
                "status": "OK",
                "results": [
                    place("Acme Local Grocer"),
                    place("Kroger Marketplace #12", rating=4.3, opening_hours={"open_now": True}),
                ],
            },
        )

        result = invoke(STORES, {"location": "Cincinnati, OH"}, caller)

        assert result.data == {
            "stores": [
                {
                    "name": "Kroger Marketplace #12",
                    "address": "Kroger Marketplace #12 Street",
                    "rating": 4.3,
                    "placeId": "id-Kroger Marketplace #12",
                    "openNow": True,
                }
            ]
        }
        assert result.text == "Found 1 grocery stores near Cincinnati, OH."
        query = query_of(responses.calls[0])
        assert query["query"] == ["grocery stores in Cincinnati, OH"]
        assert query["key"] == ["places-key"]

    @responses.activate
    def test_no_chain_matches_is_an_empty_list(self, caller):
        responses.add(responses.GET, PLACES_URL, json={"status": "OK", "results": [place("Corner Shop")]})

        result = invoke(STORES, {"location": "Nowhere"}, caller)

        assert result.data == {"stores": []}
        assert "Nowhere" in result.text

    @responses.activate
    def test_missing_results_treated_as_empty(self, caller):
        responses.add(responses.GET, PLACES_URL, json={"status": "ZERO_RESULTS"})

        assert invoke(STORES, {"location": "Nowhere"}, caller).data == {"stores": []}

    @responses.activate
    def test_denied_request_returns_apology(self, caller):
        responses.add(
            responses.GET,
            PLACES_URL,
            json={"status": "REQUEST_DENIED", "error_message": "The provided API key is invalid."},
        )

        result = invoke(STORES, {"location": "Cincinnati"}, caller)

        assert result.data is None
        assert result.text == STORES.failure_text
        assert result.ui["type"] == "alert"

    @responses.activate
    def test_transport_failure_returns_result_not_none(self, caller):
        responses.add(responses.GET, PLACES_URL, status=502)

        result = invoke(STORES, {"location": "Cincinnati"}, caller)

        assert result is not None
        assert result.data is None


def kroger_products():
    return {
        "data": [
            {
                "productId": "0001111041700",
                "description": "Kroger 2% Reduced Fat Milk",
                "brand": "Kroger",
                "images": [
                    {
                        "perspective": "front",
                        "featured": True,
                        "sizes": [
                            {"size": "thumbnail", "url": "https://img/thumb.jpg"},
                            {"size": "medium", "url": "https://img/medium.jpg"},
                        ],
                    }
                ],
                "items": [{"size": "1 gal", "price": {"regular": 3.49, "promo": 2.99}}],
            },
            {"productId": "2", "description": "Oat Milk"},
        ]
    }


class TestSearchProducts:
    @responses.activate
    def test_token_then_search(self, caller):
        responses.add(responses.POST, TOKEN_URL, json={"access_token": "tok-1", "expires_in": 1800})
        responses.add(responses.GET, PRODUCTS_URL, json=kroger_products())

        result = invoke(PRODUCTS, {"term": "milk", "locationId": "01400943", "limit": 5}, caller)

        assert result.data["products"][0] == {
            "productId": "0001111041700",
            "description": "Kroger 2% Reduced Fat Milk",
            "brand": "Kroger",
            "imageUrl": "https://img/medium.jpg",
            "size": "1 gal",
            "price": 2.99,
        }
        assert result.data["products"][1]["imageUrl"] is None
        search = responses.calls[1].request
        assert search.headers["Authorization"] == "Bearer tok-1"
        assert query_of(responses.calls[1]) == {
            "filter.term": ["milk"],
            "filter.limit": ["5"],
            "filter.locationId": ["01400943"],
        }

    @responses.activate
    def test_token_is_reused_until_expiry(self, caller, clock):
        responses.add(responses.POST, TOKEN_URL, json={"access_token": "tok-1", "expires_in": 1800})
        responses.add(responses.POST, TOKEN_URL, json={"access_token": "tok-2", "expires_in": 1800})
        responses.add(responses.GET, PRODUCTS_URL, json=kroger_products())

        invoke(PRODUCTS, {"term": "milk"}, caller)
        invoke(PRODUCTS, {"term": "eggs"}, caller)
        token_calls = [call for call in responses.calls if call.request.url == TOKEN_URL]
        assert len(token_calls) == 1

        clock.advance(1800)
        invoke(PRODUCTS, {"term": "bread"}, caller)
        token_calls = [call for call in responses.calls if call.request.url == TOKEN_URL]
        assert len(token_calls) == 2
        assert responses.calls[-1].request.headers["Authorization"] == "Bearer tok-2"

    @responses.activate
    def test_failed_authentication_returns_apology(self, caller):
        responses.add(responses.POST, TOKEN_URL, json={"error": "invalid_client"}, status=401)

        result = invoke(PRODUCTS, {"term": "milk"}, caller)

        assert result.data is None
        assert result.text == PRODUCTS.failure_text
        assert len(responses.calls) == 1

    @responses.activate
    def test_no_products(self, caller):
        responses.add(responses.POST, TOKEN_URL, json={"access_token": "tok-1", "expires_in": 1800})
        responses.add(responses.GET, PRODUCTS_URL, json={"data": []})

        result = invoke(PRODUCTS, {"term": "unobtainium"}, caller)

        assert result.data is None
        assert "unobtainium" in result.text
