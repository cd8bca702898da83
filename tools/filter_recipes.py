"""Tool: filter-recipes

Lists recipes that use an ingredient, belong to a category, or come from an
area. The filter kind picks TheMealDB's query parameter; an unknown kind is
answered without calling the API.
"""
from typing import List, Optional

from pydantic import Field

from toolkit import render
from toolkit.contract import CallerContext, InputSchema, Schema, ToolResult, define
from toolkit.extract import as_list
from toolkit.http import parse

from tools._mealdb import MealSummaryList, endpoint

FILTER_PARAMS = {
    "ingredient": "i",
    "category": "c",
    "area": "a",
}


class FilterInput(InputSchema):
    filter_type: str = Field(..., description="One of: ingredient, category, area")
    filter_value: str = Field(..., min_length=1, description="Value to filter by, e.g. 'Italian'")


class MealItem(Schema):
    id: str
    name: str
    thumbnail: Optional[str] = None


class FilterOutput(Schema):
    meals: List[MealItem]
    count: int


def filter_recipes(params: FilterInput, caller: CallerContext) -> ToolResult:
    kind = params.filter_type.strip().lower()
    key = FILTER_PARAMS.get(kind)
    if key is None:
        return ToolResult.failure(
            f"Unsupported filter type '{params.filter_type}'. "
            f"Use one of: {', '.join(FILTER_PARAMS)}.",
            title="Invalid filter",
            variant="warning",
        )

    url = endpoint(caller, "filter.php")
    listing = parse(MealSummaryList, caller.get_json(url, {key: params.filter_value}), url=url)
    meals = [
        MealItem(id=meal.idMeal, name=meal.strMeal, thumbnail=meal.strMealThumb)
        for meal in as_list(listing.meals)
    ]
    if not meals:
        return ToolResult.failure(
            f"No recipes found for {kind} '{params.filter_value}'.",
            title="No recipes found",
            variant="info",
        )

    ui = render.table(
        [("name", "Recipe", "text"), ("id", "ID", "text"), ("thumbnail", "Image", "image")],
        [meal.model_dump() for meal in meals],
    )
    return ToolResult.success(
        f"Found {len(meals)} recipes for {kind} '{params.filter_value}'.",
        FilterOutput(meals=meals, count=len(meals)),
        ui,
    )


TOOL = define({
    "id": "filter-recipes",
    "name": "Filter Recipes",
    "description": "Lists recipes by main ingredient, category or area",
    "input": FilterInput,
    "output": FilterOutput,
    "pricing": {"pricePerUse": 0, "currency": "USD"},
    "handler": filter_recipes,
    "usage": {"filterType": "area", "filterValue": "Italian"},
    "failure_text": "Sorry, I couldn't filter recipes right now.",
})
