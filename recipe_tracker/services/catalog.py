from sqlalchemy.orm import Session

from recipe_tracker.core.errors import NotFoundOrForbiddenError
from recipe_tracker.models.ingredient import Ingredient
from recipe_tracker.schemas.ingredients import IngredientRead
from recipe_tracker.schemas.results import OperationResult
from recipe_tracker.services.store import require_text, store_operation


def get_user_ingredient_or_error(db: Session, ingredient_id: int, user_id: int) -> Ingredient:
    ingredient = (
        db.query(Ingredient)
        .filter(
            Ingredient.id == ingredient_id,
            Ingredient.owner_user_id == user_id,
        )
        .first()
    )
    if not ingredient:
        raise NotFoundOrForbiddenError("Ingredient not found")
    return ingredient


@store_operation("Failed to add ingredient")
def add_ingredient(db: Session, name: str, unit: str, owner_id: int) -> OperationResult:
    ingredient = Ingredient(
        owner_user_id=owner_id,
        name=require_text(name, "Ingredient name is required"),
        unit=require_text(unit, "Ingredient unit is required"),
    )

    db.add(ingredient)
    db.commit()
    db.refresh(ingredient)
    return OperationResult.ok("Ingredient added successfully", ingredient=IngredientRead.model_validate(ingredient))


@store_operation("Failed to load ingredients")
def list_ingredients(db: Session, owner_id: int) -> OperationResult:
    ingredients = (
        db.query(Ingredient)
        .filter(Ingredient.owner_user_id == owner_id)
        .order_by(Ingredient.created_at.desc(), Ingredient.id.desc())
        .all()
    )
    return OperationResult.ok(
        "Ingredients retrieved successfully",
        ingredients=[IngredientRead.model_validate(ingredient) for ingredient in ingredients],
    )


@store_operation("Failed to update ingredient")
def update_ingredient(db: Session, ingredient_id: int, name: str, unit: str, owner_id: int) -> OperationResult:
    name = require_text(name, "Ingredient name is required")
    unit = require_text(unit, "Ingredient unit is required")
    ingredient = get_user_ingredient_or_error(db, ingredient_id=ingredient_id, user_id=owner_id)

    ingredient.name = name
    ingredient.unit = unit

    db.add(ingredient)
    db.commit()
    db.refresh(ingredient)
    return OperationResult.ok("Ingredient updated successfully", ingredient=IngredientRead.model_validate(ingredient))


@store_operation("Failed to delete ingredient")
def delete_ingredient(db: Session, ingredient_id: int, owner_id: int) -> OperationResult:
    ingredient = get_user_ingredient_or_error(db, ingredient_id=ingredient_id, user_id=owner_id)

    db.delete(ingredient)
    db.commit()
    return OperationResult.ok("Ingredient deleted successfully")
