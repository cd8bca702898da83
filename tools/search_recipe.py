"""Tool: search-recipe

Looks a recipe up by name on TheMealDB and returns the first match.
"""
from pydantic import Field

from toolkit.contract import CallerContext, InputSchema, ToolResult, define

from tools._mealdb import Recipe, fetch_meal, recipe_result, to_recipe


class RecipeSearchInput(InputSchema):
    name: str = Field(..., min_length=1, description="Recipe name to search for, e.g. 'Arrabiata'")


def search_recipe(params: RecipeSearchInput, caller: CallerContext) -> ToolResult:
    meal = fetch_meal(
        caller,
        "search.php",
        {"s": params.name},
        f"I couldn't find a recipe called '{params.name}'.",
    )
    return recipe_result(to_recipe(meal), "Here is the recipe for")


TOOL = define({
    "id": "search-recipe",
    "name": "Search Recipe",
    "description": "Finds a recipe by name and returns its ingredients and instructions",
    "input": RecipeSearchInput,
    "output": Recipe,
    "pricing": {"pricePerUse": 0, "currency": "USD"},
    "handler": search_recipe,
    "usage": {"name": "Arrabiata"},
    "failure_text": "Sorry, I couldn't look up that recipe right now.",
})
