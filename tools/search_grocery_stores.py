"""Tool: search-grocery-stores

Finds grocery stores near a free-text location with the Google Places text
search API, keeping only stores that belong to a known retail chain.
"""
from typing import List, Optional

from pydantic import BaseModel, Field

from toolkit import render
from toolkit.contract import CallerContext, InputSchema, Schema, ToolResult, define
from toolkit.errors import UpstreamFailure
from toolkit.extract import as_list, contains_any
from toolkit.http import parse

KNOWN_CHAINS = (
    "Kroger",
    "Ralphs",
    "Fred Meyer",
    "King Soopers",
    "Fry's Food",
    "Smith's Food",
    "QFC",
    "Harris Teeter",
    "Dillons",
    "Food 4 Less",
    "Mariano's",
    "Pick 'n Save",
    "Metro Market",
    "City Market",
    "Baker's Supermarket",
    "Gerbes",
    "Jay C Food",
    "Pay Less Super Market",
    "Safeway",
    "Albertsons",
    "Whole Foods",
    "Trader Joe's",
    "Walmart",
    "Costco",
    "Aldi",
    "Publix",
    "H-E-B",
)

# Places statuses that mean "the request worked".
OK_STATUSES = {"OK", "ZERO_RESULTS"}


class StoreSearchInput(InputSchema):
    location: str = Field(..., min_length=1, description="City, neighbourhood or address to search near")


class OpeningHours(BaseModel):
    open_now: Optional[bool] = None


class Place(BaseModel):
    name: str
    formatted_address: Optional[str] = None
    rating: Optional[float] = None
    place_id: Optional[str] = None
    opening_hours: Optional[OpeningHours] = None


class PlacesResponse(BaseModel):
    status: str = "OK"
    results: Optional[List[Place]] = None
    error_message: Optional[str] = None


class Store(Schema):
    name: str
    address: Optional[str] = None
    rating: Optional[float] = None
    place_id: Optional[str] = None
    open_now: Optional[bool] = None


class StoreSearchOutput(Schema):
    stores: List[Store]


def is_known_chain(name: str) -> bool:
    return contains_any(name, KNOWN_CHAINS)


def search_grocery_stores(params: StoreSearchInput, caller: CallerContext) -> ToolResult:
    url = caller.settings.require("PLACES_API_URL")
    body = caller.get_json(
        url,
        {
            "query": f"grocery stores in {params.location}",
            "type": "grocery_or_supermarket",
            "key": caller.settings.require("GOOGLE_PLACES_API_KEY"),
        },
    )
    places = parse(PlacesResponse, body, url=url)
    if places.status not in OK_STATUSES:
        raise UpstreamFailure(
            f"Places search returned {places.status}: {places.error_message or 'no details'}", url=url
        )

    stores = [
        Store(
            name=place.name,
            address=place.formatted_address,
            rating=place.rating,
            place_id=place.place_id,
            open_now=place.opening_hours.open_now if place.opening_hours else None,
        )
        for place in as_list(places.results)
        if is_known_chain(place.name)
    ]
    if not stores:
        return ToolResult.success(
            f"I couldn't find any well-known grocery chains near {params.location}.",
            StoreSearchOutput(stores=[]),
            render.alert(
                f"No known grocery chains near {params.location}.",
                title="No stores found",
                variant="info",
            ),
        )

    ui = render.table(
        [
            ("name", "Store", "text"),
            ("address", "Address", "text"),
            ("rating", "Rating", "number"),
            ("openNow", "Open now", "boolean"),
        ],
        [store.model_dump(by_alias=True) for store in stores],
    )
    return ToolResult.success(
        f"Found {len(stores)} grocery stores near {params.location}.",
        StoreSearchOutput(stores=stores),
        ui,
    )


TOOL = define({
    "id": "search-grocery-stores",
    "name": "Search Grocery Stores",
    "description": "Finds well-known grocery chain stores near a location",
    "input": StoreSearchInput,
    "output": StoreSearchOutput,
    "pricing": {"pricePerUse": 0, "currency": "USD"},
    "handler": search_grocery_stores,
    "requires": ("GOOGLE_PLACES_API_KEY",),
    "usage": {"location": "Cincinnati, OH"},
    "failure_text": "Sorry, I couldn't search for grocery stores right now.",
})
