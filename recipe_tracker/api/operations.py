"""The closed set of operations the UI may call, bound to their stores."""

from __future__ import annotations

from typing import Any

from recipe_tracker.core.dispatch import Dispatcher, Operation, OperationContext
from recipe_tracker.core.session import SessionManager
from recipe_tracker.schemas.auth import UserLogin, UserRegister
from recipe_tracker.schemas.devtools import QueryRequest
from recipe_tracker.schemas.ingredients import IngredientCreate, IngredientUpdate
from recipe_tracker.schemas.recipe import RecipeExportRequest, RecipeImportRequest, RecipeInput, RecipeUpdate
from recipe_tracker.schemas.results import EntityIdRequest
from recipe_tracker.schemas.shopping_list import (
    ShoppingListAddRequest,
    ShoppingListFromRecipesRequest,
    ShoppingListItemUpdate,
)
from recipe_tracker.services import catalog, credentials, devtools, recipe_transfer, recipes, shopping_list
from recipe_tracker.services.store import parse_model


def _register(ctx: OperationContext, payload: dict[str, Any]):
    data = parse_model(UserRegister, payload)
    return credentials.register(ctx.db, data.username, data.password)


def _login(ctx: OperationContext, payload: dict[str, Any]):
    data = parse_model(UserLogin, payload)
    return credentials.login(ctx.db, ctx.sessions, data.username, data.password)


def _add_ingredient(ctx: OperationContext, payload: dict[str, Any]):
    data = parse_model(IngredientCreate, payload)
    return catalog.add_ingredient(ctx.db, data.name, data.unit, ctx.user_id)


def _update_ingredient(ctx: OperationContext, payload: dict[str, Any]):
    data = parse_model(IngredientUpdate, payload)
    return catalog.update_ingredient(ctx.db, data.id, data.name, data.unit, ctx.user_id)


def _delete_ingredient(ctx: OperationContext, payload: dict[str, Any]):
    data = parse_model(EntityIdRequest, payload)
    return catalog.delete_ingredient(ctx.db, data.id, ctx.user_id)


def _add_recipe(ctx: OperationContext, payload: dict[str, Any]):
    return recipes.add_recipe(ctx.db, parse_model(RecipeInput, payload), ctx.user_id)


def _update_recipe(ctx: OperationContext, payload: dict[str, Any]):
    data = parse_model(RecipeUpdate, payload)
    return recipes.update_recipe(ctx.db, data.id, data.recipe, ctx.user_id)


def _delete_recipe(ctx: OperationContext, payload: dict[str, Any]):
    data = parse_model(EntityIdRequest, payload)
    return recipes.delete_recipe(ctx.db, data.id, ctx.user_id)


def _get_recipe(ctx: OperationContext, payload: dict[str, Any]):
    data = parse_model(EntityIdRequest, payload)
    return recipes.get_recipe(ctx.db, data.id, ctx.user_id)


def _export_recipes(ctx: OperationContext, payload: dict[str, Any]):
    data = parse_model(RecipeExportRequest, payload)
    return recipe_transfer.export_recipes(ctx.db, data.ids, ctx.user_id)


def _import_recipes(ctx: OperationContext, payload: dict[str, Any]):
    data = parse_model(RecipeImportRequest, payload, message="Invalid import file format")
    return recipe_transfer.import_recipes(ctx.db, data.bundle, ctx.user_id)


def _add_shopping_items(ctx: OperationContext, payload: dict[str, Any]):
    data = parse_model(ShoppingListAddRequest, payload)
    return shopping_list.add_items(ctx.db, data.items, ctx.user_id)


def _add_shopping_items_from_recipes(ctx: OperationContext, payload: dict[str, Any]):
    data = parse_model(ShoppingListFromRecipesRequest, payload)
    return shopping_list.add_from_recipes(ctx.db, data.recipe_ids, ctx.user_id)


def _update_shopping_item(ctx: OperationContext, payload: dict[str, Any]):
    data = parse_model(ShoppingListItemUpdate, payload)
    return shopping_list.update_item(ctx.db, data.id, data.quantity, ctx.user_id)


def _delete_shopping_item(ctx: OperationContext, payload: dict[str, Any]):
    data = parse_model(EntityIdRequest, payload)
    return shopping_list.delete_item(ctx.db, data.id, ctx.user_id)


def _execute_query(ctx: OperationContext, payload: dict[str, Any]):
    data = parse_model(QueryRequest, payload)
    return devtools.execute_query(ctx.db, data.query)


OPERATIONS: tuple[Operation, ...] = (
    Operation("auth.register", _register, requires_auth=False),
    Operation("auth.login", _login, requires_auth=False),
    Operation("auth.logout", lambda ctx, _: credentials.logout(ctx.sessions), requires_auth=False),
    Operation(
        "auth.getCurrentUser",
        lambda ctx, _: credentials.current_user(ctx.db, ctx.sessions, ctx.token),
        requires_auth=False,
    ),
    Operation("ingredients.add", _add_ingredient),
    Operation("ingredients.update", _update_ingredient),
    Operation("ingredients.delete", _delete_ingredient),
    Operation("ingredients.getAll", lambda ctx, _: catalog.list_ingredients(ctx.db, ctx.user_id)),
    Operation("recipes.add", _add_recipe),
    Operation("recipes.update", _update_recipe),
    Operation("recipes.delete", _delete_recipe),
    Operation("recipes.getAll", lambda ctx, _: recipes.list_recipes(ctx.db, ctx.user_id)),
    Operation("recipes.getById", _get_recipe),
    Operation("recipes.export", _export_recipes),
    Operation("recipes.import", _import_recipes),
    Operation("shoppingList.addItems", _add_shopping_items),
    Operation("shoppingList.addFromRecipes", _add_shopping_items_from_recipes),
    Operation("shoppingList.getAll", lambda ctx, _: shopping_list.list_items(ctx.db, ctx.user_id)),
    Operation("shoppingList.update", _update_shopping_item),
    Operation("shoppingList.delete", _delete_shopping_item),
    Operation("shoppingList.clear", lambda ctx, _: shopping_list.clear(ctx.db, ctx.user_id)),
    Operation("shoppingList.exportText", lambda ctx, _: shopping_list.export_text(ctx.db, ctx.user_id)),
    Operation("devtools.isDev", lambda ctx, _: devtools.is_dev(), requires_auth=False),
    Operation(
        "devtools.wipeDatabase",
        lambda ctx, _: devtools.wipe_database(ctx.db, ctx.sessions),
        requires_auth=False,
        dev_only=True,
    ),
    Operation(
        "devtools.getDatabaseStats",
        lambda ctx, _: devtools.database_stats(ctx.db),
        requires_auth=False,
        dev_only=True,
    ),
    Operation(
        "devtools.seedDatabase",
        lambda ctx, _: devtools.seed_database(ctx.db),
        requires_auth=False,
        dev_only=True,
    ),
    Operation(
        "devtools.exportDatabase",
        lambda ctx, _: devtools.export_database(ctx.db),
        requires_auth=False,
        dev_only=True,
    ),
    Operation("devtools.executeQuery", _execute_query, requires_auth=False, dev_only=True),
)


def build_dispatcher(sessions: SessionManager | None = None) -> Dispatcher:
    return Dispatcher(OPERATIONS, sessions=sessions)
