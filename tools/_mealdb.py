"""Shared pieces for the TheMealDB recipe tools."""
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from toolkit import render
from toolkit.contract import CallerContext, Schema, ToolResult
from toolkit.extract import as_list, first, indexed_pairs, split_lines
from toolkit.http import parse

# TheMealDB records carry strIngredient1..20 / strMeasure1..20.
INGREDIENT_SLOTS = 20


class Meal(BaseModel):
    model_config = ConfigDict(extra="allow")

    idMeal: str
    strMeal: str
    strCategory: Optional[str] = None
    strArea: Optional[str] = None
    strInstructions: Optional[str] = None
    strMealThumb: Optional[str] = None
    strTags: Optional[str] = None
    strYoutube: Optional[str] = None

    def field(self, key: str) -> Any:
        return getattr(self, key, None)


class MealList(BaseModel):
    meals: Optional[List[Meal]] = None


class MealSummary(BaseModel):
    idMeal: str
    strMeal: str
    strMealThumb: Optional[str] = None


class MealSummaryList(BaseModel):
    meals: Optional[List[MealSummary]] = None


class Recipe(Schema):
    id: str
    name: str
    category: Optional[str] = None
    area: Optional[str] = None
    ingredients: List[str] = Field(default_factory=list, description="'<ingredient> - <measure>' lines")
    instructions: List[str] = Field(default_factory=list, description="Instruction steps")
    thumbnail: Optional[str] = None
    youtube: Optional[str] = None
    tags: List[str] = Field(default_factory=list)


def endpoint(caller: CallerContext, path: str) -> str:
    return f"{caller.settings.require('MEALDB_API_URL').rstrip('/')}/{path}"


def fetch_meal(caller: CallerContext, path: str, params: Optional[Dict[str, str]], missing: str) -> Meal:
    """Call a meal-returning endpoint and return the first meal."""
    url = endpoint(caller, path)
    listing = parse(MealList, caller.get_json(url, params), url=url)
    return first(as_list(listing.meals), missing)


def to_recipe(meal: Meal) -> Recipe:
    tags = [tag.strip() for tag in (meal.strTags or "").split(",") if tag.strip()]
    return Recipe(
        id=meal.idMeal,
        name=meal.strMeal,
        category=meal.strCategory or None,
        area=meal.strArea or None,
        ingredients=indexed_pairs(meal.field, "strIngredient", "strMeasure", INGREDIENT_SLOTS),
        instructions=split_lines(meal.strInstructions),
        thumbnail=meal.strMealThumb or None,
        youtube=meal.strYoutube or None,
        tags=tags,
    )


def recipe_result(recipe: Recipe, lead: str) -> ToolResult:
    origin = " ".join(part for part in (recipe.area, recipe.category) if part)
    text = f"{lead} {recipe.name}" + (f" ({origin})" if origin else "") + (
        f" with {len(recipe.ingredients)} ingredients."
    )
    children = [
        render.table(
            [("ingredient", "Ingredient", "text")],
            [{"ingredient": line} for line in recipe.ingredients],
        ),
        render.card("Instructions", "\n".join(recipe.instructions)),
    ]
    ui = render.image_card(recipe.name, recipe.thumbnail, origin, children)
    return ToolResult.success(text, recipe, ui)
