from collections.abc import Callable

from sqlalchemy.orm import Session

from recipe_tracker.core.session import SessionManager
from recipe_tracker.models.ingredient import Ingredient
from recipe_tracker.models.recipe import Recipe
from recipe_tracker.models.user import User
from recipe_tracker.services import devtools
from recipe_tracker.services.sample_data import SAMPLE_INGREDIENTS, SAMPLE_RECIPES


def test_execute_query_only_allows_reads(db: Session, chef: User) -> None:
    for statement in ("DELETE FROM users", "  drop table users", "UPDATE users SET username = 'x'"):
        result = devtools.execute_query(db, statement)
        assert result.success is False
        assert result.error == "ValidationError"
        assert result.message == "Only SELECT and PRAGMA queries are allowed"

    assert db.query(User).count() == 1

    rows = devtools.execute_query(db, "select id, username from users").to_payload()["results"]
    assert rows == [{"id": chef.id, "username": "chef_john"}]

    columns = devtools.execute_query(db, "PRAGMA table_info(recipes)").to_payload()["results"]
    assert "time_needed_minutes" in {column["name"] for column in columns}


def test_execute_query_reports_sql_errors(db: Session) -> None:
    result = devtools.execute_query(db, "SELECT * FROM missing_table")

    assert result.success is False
    assert result.error == "StorageError"
    assert result.message.startswith("Query failed: ")


def test_database_stats(db: Session, chef: User, make_ingredient: Callable[..., Ingredient]) -> None:
    make_ingredient(chef, "Flour", "cup")

    stats = devtools.database_stats(db).to_payload()["stats"]

    assert stats["userCount"] == 1
    assert stats["dbPath"] == ":memory:"
    assert stats["fileSize"] == 0
    counts = {table["name"]: table["rowCount"] for table in stats["tables"]}
    assert counts["users"] == 1
    assert counts["ingredients"] == 1
    assert counts["shopping_list"] == 0


def test_seed_database_is_idempotent(db: Session) -> None:
    first = devtools.seed_database(db)
    assert first.success is True
    assert first.to_payload()["seeded"] == {
        "username": "demo_chef",
        "ingredients": len(SAMPLE_INGREDIENTS),
        "recipes": len(SAMPLE_RECIPES),
    }

    second = devtools.seed_database(db).to_payload()["seeded"]
    assert second["ingredients"] == 0
    assert second["recipes"] == 0
    assert db.query(User).count() == 1
    assert db.query(Recipe).count() == len(SAMPLE_RECIPES)


def test_export_database_redacts_password_hashes(db: Session, chef: User) -> None:
    data = devtools.export_database(db).to_payload()["data"]

    assert data["users"][0]["username"] == "chef_john"
    assert data["users"][0]["password_hash"] == devtools.REDACTED
    assert data["recipes"] == []


def test_wipe_database_clears_rows_and_session(db: Session, sessions: SessionManager) -> None:
    devtools.seed_database(db)
    demo = db.query(User).one()
    sessions.open(user_id=demo.id, username=demo.username)

    result = devtools.wipe_database(db, sessions)

    assert result.success is True
    assert sessions.current() is None
    assert db.query(User).count() == 0
    assert db.query(Recipe).count() == 0
    assert db.query(Ingredient).count() == 0


def test_execute_query_returns_blobs_as_hex(db: Session) -> None:
    result = devtools.execute_query(db, "SELECT x'ff00' AS b, 'text' AS t")

    assert result.to_payload()["results"] == [{"b": "ff00", "t": "text"}]
