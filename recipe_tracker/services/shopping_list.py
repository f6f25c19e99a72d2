from __future__ import annotations

import json
import logging
from typing import Any

from sqlalchemy import func
from sqlalchemy.orm import Session

from recipe_tracker.core.errors import NotFoundOrForbiddenError, ServiceValidationError
from recipe_tracker.models.ingredient import Ingredient
from recipe_tracker.models.recipe import Recipe
from recipe_tracker.models.shopping_list import ShoppingListItem
from recipe_tracker.schemas.results import OperationResult
from recipe_tracker.schemas.shopping_list import ShoppingListItemInput, ShoppingListItemRead
from recipe_tracker.services.quantities import combine_quantities
from recipe_tracker.services.store import parse_model, require_text, store_operation

logger = logging.getLogger("recipe_tracker.shopping_list")


def _get_user_item_or_error(db: Session, item_id: int, user_id: int) -> ShoppingListItem:
    item = (
        db.query(ShoppingListItem)
        .filter(
            ShoppingListItem.id == item_id,
            ShoppingListItem.owner_user_id == user_id,
        )
        .first()
    )
    if not item:
        raise NotFoundOrForbiddenError("Shopping list item not found")
    return item


def _find_matching_item(db: Session, item: ShoppingListItemInput, owner_id: int) -> ShoppingListItem | None:
    query = db.query(ShoppingListItem).filter(ShoppingListItem.owner_user_id == owner_id)

    if item.ingredient_id is not None:
        match = query.filter(ShoppingListItem.ingredient_id == item.ingredient_id).order_by(ShoppingListItem.id).first()
        if match:
            return match

    return (
        query.filter(
            func.casefold(ShoppingListItem.ingredient_name) == item.ingredient_name.casefold(),
            func.casefold(ShoppingListItem.ingredient_unit) == item.ingredient_unit.casefold(),
        )
        .order_by(ShoppingListItem.id)
        .first()
    )


def _owned_items(db: Session, owner_id: int) -> list[ShoppingListItemRead]:
    items = (
        db.query(ShoppingListItem)
        .filter(ShoppingListItem.owner_user_id == owner_id)
        .order_by(ShoppingListItem.created_at.asc(), ShoppingListItem.id.asc())
        .all()
    )
    return [ShoppingListItemRead.model_validate(item) for item in items]


def merge_items(db: Session, items: list[ShoppingListItemInput], owner_id: int) -> tuple[int, int]:
    """Stage ``items`` into the owner's list; returns (created, merged) counts."""
    catalog_ids = {item.ingredient_id for item in items if item.ingredient_id is not None}
    if catalog_ids:
        owned = {
            ingredient_id
            for (ingredient_id,) in db.query(Ingredient.id)
            .filter(Ingredient.id.in_(catalog_ids), Ingredient.owner_user_id == owner_id)
            .all()
        }
        if catalog_ids - owned:
            raise NotFoundOrForbiddenError("Ingredient not found")

    created = merged = 0
    for incoming in items:
        incoming = incoming.model_copy(
            update={
                "ingredient_name": require_text(incoming.ingredient_name, "Item name is required"),
                "ingredient_unit": incoming.ingredient_unit.strip(),
                "quantity": require_text(incoming.quantity, "Quantity cannot be empty"),
            }
        )

        existing = _find_matching_item(db, incoming, owner_id)
        if existing:
            existing.quantity = combine_quantities(existing.quantity, incoming.quantity)
            if existing.ingredient_id is None and incoming.ingredient_id is not None:
                existing.ingredient_id = incoming.ingredient_id
            merged += 1
        else:
            db.add(
                ShoppingListItem(
                    owner_user_id=owner_id,
                    ingredient_id=incoming.ingredient_id,
                    ingredient_name=incoming.ingredient_name,
                    ingredient_unit=incoming.ingredient_unit,
                    quantity=incoming.quantity,
                )
            )
            created += 1
        # Later items in the same batch must see this one.
        db.flush()

    return created, merged


@store_operation("Failed to add items to shopping list")
def add_items(
    db: Session,
    items: list[ShoppingListItemInput | dict[str, Any]],
    owner_id: int,
) -> OperationResult:
    parsed = [parse_model(ShoppingListItemInput, item) for item in items]
    if not parsed:
        raise ServiceValidationError("No items to add")

    created, merged = merge_items(db, parsed, owner_id)
    db.commit()

    logger.info(json.dumps({"event": "shopping_items_added", "user_id": owner_id, "created": created, "merged": merged}))
    return OperationResult.ok("Items added to shopping list", items=_owned_items(db, owner_id))


@store_operation("Failed to add recipes to shopping list")
def add_from_recipes(db: Session, recipe_ids: list[int], owner_id: int) -> OperationResult:
    recipes: list[Recipe] = []
    if recipe_ids:
        recipes = (
            db.query(Recipe)
            .filter(Recipe.id.in_(recipe_ids), Recipe.owner_user_id == owner_id)
            .order_by(Recipe.id)
            .all()
        )

    items = [
        ShoppingListItemInput(
            ingredient_id=line.ingredient_id,
            ingredient_name=line.ingredient.name,
            ingredient_unit=line.ingredient.unit,
            quantity=line.quantity,
        )
        for recipe in recipes
        for line in recipe.ingredients
        if line.ingredient is not None
    ]
    if not items:
        raise ServiceValidationError("No recipe ingredients found to add")

    merge_items(db, items, owner_id)
    db.commit()
    return OperationResult.ok(
        f"Added ingredients from {len(recipes)} recipe(s) to shopping list",
        items=_owned_items(db, owner_id),
    )


@store_operation("Failed to load shopping list")
def list_items(db: Session, owner_id: int) -> OperationResult:
    return OperationResult.ok("Shopping list retrieved successfully", items=_owned_items(db, owner_id))


@store_operation("Failed to update shopping list item")
def update_item(db: Session, item_id: int, quantity: str, owner_id: int) -> OperationResult:
    quantity = require_text(quantity, "Quantity cannot be empty")
    item = _get_user_item_or_error(db, item_id=item_id, user_id=owner_id)

    item.quantity = quantity

    db.add(item)
    db.commit()
    db.refresh(item)
    return OperationResult.ok("Item updated successfully", item=ShoppingListItemRead.model_validate(item))


@store_operation("Failed to delete shopping list item")
def delete_item(db: Session, item_id: int, owner_id: int) -> OperationResult:
    item = _get_user_item_or_error(db, item_id=item_id, user_id=owner_id)

    db.delete(item)
    db.commit()
    return OperationResult.ok("Item deleted successfully")


@store_operation("Failed to clear shopping list")
def clear(db: Session, owner_id: int) -> OperationResult:
    deleted = db.query(ShoppingListItem).filter(ShoppingListItem.owner_user_id == owner_id).delete(synchronize_session=False)
    db.commit()
    return OperationResult.ok("Shopping list cleared", deleted=deleted)


@store_operation("Failed to export shopping list")
def export_text(db: Session, owner_id: int) -> OperationResult:
    lines = [
        " ".join(part for part in ("•", item.quantity, item.ingredient_unit, item.ingredient_name) if part)
        for item in _owned_items(db, owner_id)
    ]
    return OperationResult.ok("Shopping list exported", text="\n".join(lines))
