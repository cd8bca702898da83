"""Shared pytest fixtures and helpers for tool tests."""
from typing import Dict, List
from urllib.parse import parse_qs, urlparse

import pytest

from main import load_tools
from toolkit import CallerContext, ToolRegistry
from toolkit.config import DEFAULTS, Settings
from toolkit.credentials import MemoryCredentialStore

TEST_VALUES = {
    **DEFAULTS,
    "GOOGLE_PLACES_API_KEY": "places-key",
    "KROGER_CLIENT_ID": "client-id",
    "KROGER_CLIENT_SECRET": "client-secret",
}

WEATHER_URL = DEFAULTS["WEATHER_API_URL"]
MEALDB_URL = DEFAULTS["MEALDB_API_URL"]
PLACES_URL = DEFAULTS["PLACES_API_URL"]
KROGER_URL = DEFAULTS["KROGER_API_URL"]
TOKEN_URL = DEFAULTS["KROGER_TOKEN_URL"]


class FakeClock:
    def __init__(self, now: float = 1000.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def settings():
    return Settings(values=dict(TEST_VALUES))


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def credentials(clock):
    return MemoryCredentialStore(clock=clock)


@pytest.fixture
def caller(settings, credentials):
    return CallerContext(caller_id="agent-1", settings=settings, credentials=credentials)


@pytest.fixture
def registry():
    return load_tools(ToolRegistry())


# ── Plain helper functions ─────────────────────────────────────────────────
# Test files import these directly:
#   from conftest import query_of

def query_of(call) -> Dict[str, List[str]]:
    """Decoded query string of a recorded `responses` call."""
    return parse_qs(urlparse(call.request.url).query)


def meal_record(**overrides) -> Dict[str, object]:
    record: Dict[str, object] = {
        "idMeal": "52771",
        "strMeal": "Spicy Arrabiata Penne",
        "strCategory": "Vegetarian",
        "strArea": "Italian",
        "strInstructions": "Bring a pot of water to the boil.\r\n\r\n  Add the penne.  \r\nServe hot.",
        "strMealThumb": "https://www.themealdb.com/images/media/meals/ustsqw1468250014.jpg",
        "strTags": "Pasta,Curry",
        "strYoutube": "https://www.youtube.com/watch?v=1IszT_guI08",
        "strIngredient1": "penne rigate",
        "strMeasure1": "1 pound",
        "strIngredient2": "olive oil",
        "strMeasure2": "1/4 cup",
        "strIngredient3": "",
        "strMeasure3": "",
        "strIngredient4": None,
        "strMeasure4": None,
    }
    record.update(overrides)
    return record
