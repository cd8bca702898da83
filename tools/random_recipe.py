"""Tool: random-recipe"""
from toolkit.contract import CallerContext, InputSchema, ToolResult, define

from tools._mealdb import Recipe, fetch_meal, recipe_result, to_recipe


class RandomRecipeInput(InputSchema):
    pass


def random_recipe(params: RandomRecipeInput, caller: CallerContext) -> ToolResult:
    meal = fetch_meal(caller, "random.php", None, "No random recipe came back this time. Try again.")
    return recipe_result(to_recipe(meal), "How about")


TOOL = define({
    "id": "random-recipe",
    "name": "Random Recipe",
    "description": "Suggests a random recipe with ingredients and instructions",
    "input": RandomRecipeInput,
    "output": Recipe,
    "pricing": {"pricePerUse": 0, "currency": "USD"},
    "handler": random_recipe,
    "failure_text": "Sorry, I couldn't fetch a random recipe right now.",
})
