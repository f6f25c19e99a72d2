from __future__ import annotations

from datetime import datetime
import json
import logging
from typing import Any

from pydantic import ValidationError
from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from recipe_tracker.core.errors import RecipeTrackerError, ServiceValidationError
from recipe_tracker.models.ingredient import Ingredient
from recipe_tracker.schemas.recipe import (
    ExportedIngredient,
    ExportedRecipe,
    ImportSummary,
    RecipeExportBundle,
    RecipeImportBundle,
    RecipeIngredientInput,
    RecipeInput,
)
from recipe_tracker.schemas.results import OperationResult
from recipe_tracker.services.recipes import create_recipe, get_user_recipe_or_error
from recipe_tracker.services.store import format_validation_error, parse_model, store_operation

logger = logging.getLogger("recipe_tracker.transfer")

EXPORT_FORMAT_VERSION = "1.0"


def _to_exported_recipe(db: Session, recipe_id: int, owner_id: int) -> ExportedRecipe:
    recipe = get_user_recipe_or_error(db, recipe_id=recipe_id, user_id=owner_id)
    return ExportedRecipe(
        name=recipe.name,
        servings=recipe.servings,
        time_needed=recipe.time_needed_minutes,
        ingredients=[
            ExportedIngredient(
                name=line.ingredient.name,
                unit=line.ingredient.unit,
                quantity=line.quantity,
            )
            for line in recipe.ingredients
            if line.ingredient is not None
        ],
        instructions=[step.instruction for step in recipe.instructions],
    )


@store_operation("Failed to export recipes")
def export_recipes(db: Session, recipe_ids: list[int], owner_id: int) -> OperationResult:
    exported: list[ExportedRecipe] = []
    for recipe_id in recipe_ids:
        try:
            exported.append(_to_exported_recipe(db, recipe_id, owner_id))
        except RecipeTrackerError:
            continue

    if not exported:
        raise ServiceValidationError("No recipes found to export")

    now = datetime.utcnow()
    bundle = RecipeExportBundle(version=EXPORT_FORMAT_VERSION, export_date=now, recipes=exported)
    return OperationResult.ok(
        f"Exported {len(exported)} recipe(s)",
        bundle=bundle.model_dump(mode="json", by_alias=True),
        filename=f"recipes-export-{now.date().isoformat()}.json",
    )


def resolve_ingredient(db: Session, name: str, unit: str, owner_id: int) -> Ingredient:
    """Find the owner's ingredient by name and unit (case-insensitive) or create it."""
    name = name.strip()
    unit = unit.strip()
    existing = (
        db.query(Ingredient)
        .filter(
            Ingredient.owner_user_id == owner_id,
            func.casefold(Ingredient.name) == name.casefold(),
            func.casefold(Ingredient.unit) == unit.casefold(),
        )
        .order_by(Ingredient.id.asc())
        .first()
    )
    if existing:
        return existing

    if not name or not unit:
        raise ServiceValidationError("Imported ingredients need a name and unit")

    ingredient = Ingredient(owner_user_id=owner_id, name=name, unit=unit)
    db.add(ingredient)
    db.flush()
    return ingredient


def _import_one(db: Session, raw_recipe: dict[str, Any], owner_id: int) -> None:
    exported = ExportedRecipe.model_validate(raw_recipe)

    lines = [
        RecipeIngredientInput(
            ingredient_id=resolve_ingredient(db, item.name, item.unit, owner_id).id,
            quantity=item.quantity,
        )
        for item in exported.ingredients
    ]
    payload = RecipeInput(
        name=exported.name,
        servings=exported.servings,
        time_needed_minutes=exported.time_needed,
        ingredients=lines,
        instructions=exported.instructions,
    )
    create_recipe(db, payload, owner_id)


@store_operation("Failed to import recipes")
def import_recipes(db: Session, bundle: RecipeImportBundle | dict[str, Any], owner_id: int) -> OperationResult:
    envelope = parse_model(RecipeImportBundle, bundle, message="Invalid import file format")

    summary = ImportSummary()
    for index, raw_recipe in enumerate(envelope.recipes, start=1):
        label = raw_recipe.get("name") or f"#{index}"
        try:
            _import_one(db, raw_recipe, owner_id)
            db.commit()
        except ValidationError as exc:
            db.rollback()
            summary.errors.append(f"Recipe {label}: {format_validation_error(exc)}")
        except RecipeTrackerError as exc:
            db.rollback()
            summary.errors.append(f"Recipe {label}: {exc.message}")
        except SQLAlchemyError as exc:
            db.rollback()
            logger.exception(json.dumps({"event": "import_recipe_failed", "recipe": str(label)}))
            summary.errors.append(f"Recipe {label}: {getattr(exc, 'orig', None) or exc}")
        else:
            summary.imported += 1

    summary.failed = len(summary.errors)
    logger.info(
        json.dumps({"event": "recipes_imported", "imported": summary.imported, "failed": summary.failed})
    )

    if summary.imported == 0:
        raise ServiceValidationError("No recipes were imported", details=summary.model_dump())

    message = f"Successfully imported {summary.imported} recipe(s)"
    if summary.failed:
        message += f", {summary.failed} failed"
    return OperationResult.ok(message, summary=summary)
