from __future__ import annotations

from typing import Any

from sqlalchemy.orm import Session

from recipe_tracker.core.errors import NotFoundOrForbiddenError, ServiceValidationError
from recipe_tracker.models.ingredient import Ingredient
from recipe_tracker.models.recipe import Recipe, RecipeIngredient, RecipeInstruction
from recipe_tracker.schemas.recipe import (
    FullRecipeRead,
    RecipeIngredientRead,
    RecipeInput,
    RecipeInstructionRead,
    RecipeSummaryRead,
)
from recipe_tracker.schemas.results import OperationResult
from recipe_tracker.services.store import parse_model, store_operation


def get_user_recipe_or_error(db: Session, recipe_id: int, user_id: int) -> Recipe:
    recipe = (
        db.query(Recipe)
        .filter(
            Recipe.id == recipe_id,
            Recipe.owner_user_id == user_id,
        )
        .first()
    )
    if not recipe:
        raise NotFoundOrForbiddenError("Recipe not found")
    return recipe


def to_full_recipe_read(recipe: Recipe) -> FullRecipeRead:
    return FullRecipeRead(
        id=recipe.id,
        name=recipe.name,
        servings=recipe.servings,
        time_needed_minutes=recipe.time_needed_minutes,
        owner_user_id=recipe.owner_user_id,
        created_at=recipe.created_at,
        ingredients=[
            RecipeIngredientRead(
                id=line.id,
                recipe_id=line.recipe_id,
                ingredient_id=line.ingredient_id,
                quantity=line.quantity,
                ingredient_name=line.ingredient.name if line.ingredient else None,
                ingredient_unit=line.ingredient.unit if line.ingredient else None,
            )
            for line in recipe.ingredients
        ],
        instructions=[RecipeInstructionRead.model_validate(step) for step in recipe.instructions],
    )


def validate_recipe_input(db: Session, payload: RecipeInput, owner_id: int) -> RecipeInput:
    """Check a recipe against the form rules and return a trimmed copy."""
    name = payload.name.strip()
    if not name:
        raise ServiceValidationError("Recipe name is required")
    if payload.servings <= 0:
        raise ServiceValidationError("Valid number of servings is required")
    if payload.time_needed_minutes <= 0:
        raise ServiceValidationError("Valid time needed is required")
    if not payload.ingredients:
        raise ServiceValidationError("Recipe must have at least one ingredient")
    if not payload.instructions:
        raise ServiceValidationError("Recipe must have at least one instruction")
    if any(not line.quantity.strip() for line in payload.ingredients):
        raise ServiceValidationError("All ingredients must have a quantity")
    if any(not step.strip() for step in payload.instructions):
        raise ServiceValidationError("All instruction steps must be filled out")

    requested_ids = {line.ingredient_id for line in payload.ingredients}
    owned_ids = {
        ingredient_id
        for (ingredient_id,) in (
            db.query(Ingredient.id)
            .filter(
                Ingredient.id.in_(requested_ids),
                Ingredient.owner_user_id == owner_id,
            )
            .all()
        )
    }
    missing_ids = sorted(requested_ids - owned_ids)
    if missing_ids:
        raise NotFoundOrForbiddenError("Ingredient not found", details={"ingredient_ids": missing_ids})

    return payload.model_copy(
        update={
            "name": name,
            "ingredients": [
                line.model_copy(update={"quantity": line.quantity.strip()}) for line in payload.ingredients
            ],
            "instructions": [step.strip() for step in payload.instructions],
        }
    )


def _attach_children(recipe: Recipe, payload: RecipeInput) -> None:
    for line in payload.ingredients:
        recipe.ingredients.append(RecipeIngredient(ingredient_id=line.ingredient_id, quantity=line.quantity))

    # Step numbers are always rebuilt from list position.
    for step_number, instruction in enumerate(payload.instructions, start=1):
        recipe.instructions.append(RecipeInstruction(step_number=step_number, instruction=instruction))


def create_recipe(db: Session, payload: RecipeInput, owner_id: int) -> Recipe:
    """Stage a validated recipe with its lines and steps; the caller commits."""
    payload = validate_recipe_input(db, payload, owner_id)

    recipe = Recipe(
        owner_user_id=owner_id,
        name=payload.name,
        servings=payload.servings,
        time_needed_minutes=payload.time_needed_minutes,
    )
    _attach_children(recipe, payload)

    db.add(recipe)
    db.flush()
    return recipe


@store_operation("Failed to add recipe")
def add_recipe(db: Session, recipe_input: RecipeInput | dict[str, Any], owner_id: int) -> OperationResult:
    payload = parse_model(RecipeInput, recipe_input)

    recipe = create_recipe(db, payload, owner_id)
    db.commit()
    db.refresh(recipe)
    return OperationResult.ok("Recipe added successfully", recipe=to_full_recipe_read(recipe))


@store_operation("Failed to load recipe")
def get_recipe(db: Session, recipe_id: int, owner_id: int) -> OperationResult:
    recipe = get_user_recipe_or_error(db, recipe_id=recipe_id, user_id=owner_id)
    return OperationResult.ok("Recipe retrieved successfully", recipe=to_full_recipe_read(recipe))


@store_operation("Failed to load recipes")
def list_recipes(db: Session, owner_id: int) -> OperationResult:
    recipes = (
        db.query(Recipe)
        .filter(Recipe.owner_user_id == owner_id)
        .order_by(Recipe.created_at.desc(), Recipe.id.desc())
        .all()
    )
    return OperationResult.ok(
        "Recipes retrieved successfully",
        recipes=[RecipeSummaryRead.model_validate(recipe) for recipe in recipes],
    )


@store_operation("Failed to update recipe")
def update_recipe(
    db: Session,
    recipe_id: int,
    recipe_input: RecipeInput | dict[str, Any],
    owner_id: int,
) -> OperationResult:
    payload = parse_model(RecipeInput, recipe_input)
    recipe = get_user_recipe_or_error(db, recipe_id=recipe_id, user_id=owner_id)
    payload = validate_recipe_input(db, payload, owner_id)

    recipe.name = payload.name
    recipe.servings = payload.servings
    recipe.time_needed_minutes = payload.time_needed_minutes

    # Full replace: drop every line and step, then insert the new set.
    db.query(RecipeIngredient).filter(RecipeIngredient.recipe_id == recipe.id).delete(synchronize_session=False)
    db.query(RecipeInstruction).filter(RecipeInstruction.recipe_id == recipe.id).delete(synchronize_session=False)
    db.expire(recipe, ["ingredients", "instructions"])
    _attach_children(recipe, payload)

    db.add(recipe)
    db.commit()
    db.refresh(recipe)
    return OperationResult.ok("Recipe updated successfully", recipe=to_full_recipe_read(recipe))


@store_operation("Failed to delete recipe")
def delete_recipe(db: Session, recipe_id: int, owner_id: int) -> OperationResult:
    recipe = get_user_recipe_or_error(db, recipe_id=recipe_id, user_id=owner_id)

    db.delete(recipe)
    db.commit()
    return OperationResult.ok("Recipe deleted successfully")
