from datetime import datetime

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class ShoppingListItemInput(BaseModel):
    ingredient_id: int | None = Field(default=None, validation_alias=AliasChoices("ingredientId", "ingredient_id"))
    ingredient_name: str = Field(max_length=120, validation_alias=AliasChoices("ingredientName", "ingredient_name"))
    ingredient_unit: str = Field(
        default="",
        max_length=40,
        validation_alias=AliasChoices("ingredientUnit", "ingredient_unit"),
    )
    quantity: str = Field(max_length=120)


class ShoppingListAddRequest(BaseModel):
    items: list[ShoppingListItemInput] = Field(default_factory=list)


class ShoppingListFromRecipesRequest(BaseModel):
    recipe_ids: list[int] = Field(default_factory=list, validation_alias=AliasChoices("recipeIds", "recipe_ids", "ids"))


class ShoppingListItemUpdate(BaseModel):
    id: int
    quantity: str = Field(max_length=255)


class ShoppingListItemRead(BaseModel):
    id: int
    ingredient_id: int | None
    ingredient_name: str
    ingredient_unit: str
    quantity: str
    owner_user_id: int
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)
