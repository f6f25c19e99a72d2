"""Diagnostics for development builds: wipe, stats, seed, dump and read-only SQL."""

from __future__ import annotations

from datetime import datetime
import json
import logging
from pathlib import Path
from typing import Any

from sqlalchemy import func, select, text
from sqlalchemy.orm import Session

from recipe_tracker.core.config import settings
from recipe_tracker.core.database import Base
from recipe_tracker.core.errors import ServiceValidationError
from recipe_tracker.core.security import hash_password
from recipe_tracker.core.session import SessionManager
from recipe_tracker.models.ingredient import Ingredient
from recipe_tracker.models.recipe import Recipe
from recipe_tracker.models.user import User
from recipe_tracker.schemas.recipe import RecipeIngredientInput, RecipeInput
from recipe_tracker.schemas.results import OperationResult
from recipe_tracker.services.recipe_transfer import resolve_ingredient
from recipe_tracker.services.recipes import create_recipe
from recipe_tracker.services.sample_data import DEMO_PASSWORD, DEMO_USERNAME, SAMPLE_INGREDIENTS, SAMPLE_RECIPES
from recipe_tracker.services.store import store_operation

logger = logging.getLogger("recipe_tracker.devtools")

ALLOWED_QUERY_PREFIXES = ("SELECT", "PRAGMA")
REDACTED = "<redacted>"


def is_dev() -> bool:
    return settings.dev_mode


@store_operation("Failed to wipe database")
def wipe_database(db: Session, sessions: SessionManager) -> OperationResult:
    connection = db.connection()
    Base.metadata.drop_all(bind=connection)
    Base.metadata.create_all(bind=connection)
    db.commit()
    sessions.close()

    logger.warning(json.dumps({"event": "database_wiped"}))
    return OperationResult.ok("Database wiped successfully")


@store_operation("Failed to read database stats")
def database_stats(db: Session) -> OperationResult:
    url = db.get_bind().url
    db_path = url.database or ":memory:"
    file_size = 0
    if url.get_backend_name() == "sqlite" and db_path != ":memory:" and Path(db_path).exists():
        file_size = Path(db_path).stat().st_size

    tables = [
        {"name": table.name, "rowCount": db.execute(select(func.count()).select_from(table)).scalar_one()}
        for table in Base.metadata.sorted_tables
    ]
    user_count = db.execute(select(func.count()).select_from(User)).scalar_one()

    return OperationResult.ok(
        "Database stats retrieved",
        stats={"userCount": user_count, "tables": tables, "dbPath": db_path, "fileSize": file_size},
    )


@store_operation("Failed to seed database")
def seed_database(db: Session) -> OperationResult:
    user = db.query(User).filter(User.username == DEMO_USERNAME).first()
    if user is None:
        user = User(username=DEMO_USERNAME, password_hash=hash_password(DEMO_PASSWORD))
        db.add(user)
        db.flush()

    ingredients_before = db.query(Ingredient).filter(Ingredient.owner_user_id == user.id).count()
    for sample in SAMPLE_INGREDIENTS:
        resolve_ingredient(db, sample.name, sample.unit, user.id)
    ingredients_added = db.query(Ingredient).filter(Ingredient.owner_user_id == user.id).count() - ingredients_before

    existing_names = {name for (name,) in db.query(Recipe.name).filter(Recipe.owner_user_id == user.id).all()}
    recipes_added = 0
    for sample in SAMPLE_RECIPES:
        if sample.name in existing_names:
            continue
        payload = RecipeInput(
            name=sample.name,
            servings=sample.servings,
            time_needed_minutes=sample.time_needed_minutes,
            ingredients=[
                RecipeIngredientInput(
                    ingredient_id=resolve_ingredient(db, line.name, line.unit, user.id).id,
                    quantity=line.quantity,
                )
                for line in sample.ingredients
            ],
            instructions=list(sample.instructions),
        )
        create_recipe(db, payload, user.id)
        recipes_added += 1

    db.commit()
    return OperationResult.ok(
        f"Seeded {ingredients_added} ingredient(s) and {recipes_added} recipe(s) for {DEMO_USERNAME}",
        seeded={"username": DEMO_USERNAME, "ingredients": ingredients_added, "recipes": recipes_added},
    )


def _plain_row(row: Any) -> dict[str, Any]:
    # BLOB columns come back as bytes, which JSON cannot carry.
    return {key: value.hex() if isinstance(value, bytes) else value for key, value in row.items()}


def _redact(row: dict[str, Any]) -> dict[str, Any]:
    if "password_hash" in row:
        row["password_hash"] = REDACTED
    return row


@store_operation("Failed to export database")
def export_database(db: Session) -> OperationResult:
    data = {
        table.name: [_redact(_plain_row(row)) for row in db.execute(select(table)).mappings().all()]
        for table in Base.metadata.sorted_tables
    }
    return OperationResult.ok("Database exported", data=data, exportDate=datetime.utcnow())


def is_read_only_query(query: str) -> bool:
    # Prefix check only; it does not parse the statement.
    return (query or "").strip().upper().startswith(ALLOWED_QUERY_PREFIXES)


@store_operation("Query failed")
def execute_query(db: Session, query: str) -> OperationResult:
    if not is_read_only_query(query):
        raise ServiceValidationError("Only SELECT and PRAGMA queries are allowed")

    result = db.execute(text(query.strip()))
    rows = [_plain_row(row) for row in result.mappings().all()] if result.returns_rows else []
    db.rollback()
    return OperationResult.ok(f"Query returned {len(rows)} row(s)", results=rows)
