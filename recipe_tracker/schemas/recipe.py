from datetime import datetime
from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class RecipeIngredientInput(BaseModel):
    ingredient_id: int = Field(validation_alias=AliasChoices("ingredientId", "ingredient_id"))
    quantity: str = Field(max_length=60)


class RecipeInput(BaseModel):
    name: str = Field(max_length=140)
    servings: int
    time_needed_minutes: int = Field(
        validation_alias=AliasChoices("timeNeeded", "time_needed_minutes", "time_needed"),
    )
    ingredients: list[RecipeIngredientInput] = Field(default_factory=list)
    instructions: list[str] = Field(default_factory=list)


class RecipeUpdate(BaseModel):
    id: int
    recipe: RecipeInput


class RecipeSummaryRead(BaseModel):
    id: int
    name: str
    servings: int
    time_needed_minutes: int
    owner_user_id: int
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class RecipeIngredientRead(BaseModel):
    id: int
    recipe_id: int
    ingredient_id: int | None
    quantity: str
    ingredient_name: str | None = None
    ingredient_unit: str | None = None


class RecipeInstructionRead(BaseModel):
    id: int
    recipe_id: int
    step_number: int
    instruction: str

    model_config = ConfigDict(from_attributes=True)


class FullRecipeRead(RecipeSummaryRead):
    ingredients: list[RecipeIngredientRead] = Field(default_factory=list)
    instructions: list[RecipeInstructionRead] = Field(default_factory=list)


class ExportedIngredient(BaseModel):
    name: str = Field(min_length=1)
    unit: str
    quantity: str


class ExportedRecipe(BaseModel):
    name: str
    servings: int
    time_needed: int
    ingredients: list[ExportedIngredient] = Field(default_factory=list)
    instructions: list[str] = Field(default_factory=list)


class RecipeExportBundle(BaseModel):
    version: str = "1.0"
    export_date: datetime = Field(alias="exportDate")
    recipes: list[ExportedRecipe] = Field(default_factory=list)

    model_config = ConfigDict(populate_by_name=True)


class RecipeImportBundle(BaseModel):
    # Recipes stay raw here; each one is validated on its own so a bad entry
    # only fails that recipe.
    version: str | None = None
    recipes: list[dict[str, Any]] = Field(min_length=1)


class RecipeExportRequest(BaseModel):
    ids: list[int] = Field(default_factory=list)


class RecipeImportRequest(BaseModel):
    bundle: dict[str, Any]


class ImportSummary(BaseModel):
    imported: int = 0
    failed: int = 0
    errors: list[str] = Field(default_factory=list)
