from collections.abc import Callable
from datetime import datetime

from sqlalchemy.orm import Session

from recipe_tracker.models.ingredient import Ingredient
from recipe_tracker.models.recipe import Recipe
from recipe_tracker.models.user import User
from recipe_tracker.services import catalog, recipe_transfer, recipes


def _add_pancakes(db: Session, owner: User, make_ingredient: Callable[..., Ingredient]) -> int:
    flour = make_ingredient(owner, "Flour", "cup")
    milk = make_ingredient(owner, "Milk", "cup")
    result = recipes.add_recipe(
        db,
        {
            "name": "Pancakes",
            "servings": 4,
            "timeNeeded": 20,
            "ingredients": [
                {"ingredientId": flour.id, "quantity": "2"},
                {"ingredientId": milk.id, "quantity": "1.5"},
            ],
            "instructions": ["Mix", "Cook"],
        },
        owner.id,
    )
    return result.to_payload()["recipe"]["id"]


def test_export_bundle_format(db: Session, chef: User, make_ingredient: Callable[..., Ingredient]) -> None:
    recipe_id = _add_pancakes(db, chef, make_ingredient)

    result = recipe_transfer.export_recipes(db, [recipe_id, 9999], chef.id)

    assert result.success is True
    assert result.message == "Exported 1 recipe(s)"
    payload = result.to_payload()
    bundle = payload["bundle"]
    assert bundle["version"] == "1.0"
    datetime.fromisoformat(bundle["exportDate"])
    assert bundle["recipes"] == [
        {
            "name": "Pancakes",
            "servings": 4,
            "time_needed": 20,
            "ingredients": [
                {"name": "Flour", "unit": "cup", "quantity": "2"},
                {"name": "Milk", "unit": "cup", "quantity": "1.5"},
            ],
            "instructions": ["Mix", "Cook"],
        }
    ]
    assert payload["filename"].startswith("recipes-export-")
    assert payload["filename"].endswith(".json")


def test_export_skips_foreign_recipes(
    db: Session,
    chef: User,
    other_chef: User,
    make_ingredient: Callable[..., Ingredient],
) -> None:
    recipe_id = _add_pancakes(db, chef, make_ingredient)

    result = recipe_transfer.export_recipes(db, [recipe_id], other_chef.id)

    assert result.success is False
    assert result.error == "ValidationError"
    assert result.message == "No recipes found to export"


def test_import_into_other_account_reuses_and_creates_ingredients(
    db: Session,
    chef: User,
    other_chef: User,
    make_ingredient: Callable[..., Ingredient],
) -> None:
    recipe_id = _add_pancakes(db, chef, make_ingredient)
    bundle = recipe_transfer.export_recipes(db, [recipe_id], chef.id).to_payload()["bundle"]
    make_ingredient(other_chef, "flour", "CUP")

    result = recipe_transfer.import_recipes(db, bundle, other_chef.id)

    assert result.success is True
    assert result.message == "Successfully imported 1 recipe(s)"
    assert result.to_payload()["summary"] == {"imported": 1, "failed": 0, "errors": []}

    names = sorted(item["name"] for item in catalog.list_ingredients(db, other_chef.id).to_payload()["ingredients"])
    assert names == ["Milk", "flour"]

    imported = recipes.list_recipes(db, other_chef.id).to_payload()["recipes"]
    full = recipes.get_recipe(db, imported[0]["id"], other_chef.id).to_payload()["recipe"]
    assert [line["quantity"] for line in full["ingredients"]] == ["2", "1.5"]
    assert [step["instruction"] for step in full["instructions"]] == ["Mix", "Cook"]


def test_import_collects_per_recipe_failures(db: Session, chef: User) -> None:
    bundle = {
        "version": "1.0",
        "recipes": [
            {
                "name": "Toast",
                "servings": 1,
                "time_needed": 5,
                "ingredients": [{"name": "Bread", "unit": "slice", "quantity": "2"}],
                "instructions": ["Toast the bread"],
            },
            {
                "name": "Broken",
                "servings": 2,
                "time_needed": 10,
                "ingredients": [{"name": "Butter", "unit": "tbsp", "quantity": "1"}],
                "instructions": [],
            },
        ],
    }

    result = recipe_transfer.import_recipes(db, bundle, chef.id)

    assert result.success is True
    assert result.message == "Successfully imported 1 recipe(s), 1 failed"
    summary = result.to_payload()["summary"]
    assert summary["failed"] == 1
    assert summary["errors"] == ["Recipe Broken: Recipe must have at least one instruction"]
    # The failed recipe must not leave its ingredient behind.
    assert db.query(Ingredient).filter(Ingredient.name == "Butter").count() == 0


def test_import_rejects_malformed_bundle(db: Session, chef: User) -> None:
    for bundle in ({}, {"recipes": []}, {"recipes": "nope"}):
        result = recipe_transfer.import_recipes(db, bundle, chef.id)
        assert result.success is False
        assert result.message == "Invalid import file format"


def test_import_with_nothing_imported_fails(db: Session, chef: User) -> None:
    result = recipe_transfer.import_recipes(db, {"recipes": [{"name": "Nameless"}]}, chef.id)

    assert result.success is False
    assert result.message == "No recipes were imported"
    assert result.to_payload()["details"]["failed"] == 1
    assert db.query(Recipe).count() == 0


def test_reimport_matches_non_ascii_ingredients(db: Session, chef: User) -> None:
    bundle = {
        "recipes": [
            {
                "name": "Omelette",
                "servings": 1,
                "time_needed": 10,
                "ingredients": [{"name": "ŒUFS", "unit": "pièce", "quantity": "3"}],
                "instructions": ["Battre et cuire"],
            }
        ]
    }

    assert recipe_transfer.import_recipes(db, bundle, chef.id).success is True
    assert recipe_transfer.import_recipes(db, bundle, chef.id).success is True

    bundle["recipes"][0]["ingredients"][0].update(name="œufs", unit="PIÈCE")
    assert recipe_transfer.import_recipes(db, bundle, chef.id).success is True

    names = [name for (name,) in db.query(Ingredient.name).filter(Ingredient.owner_user_id == chef.id).all()]
    assert names == ["ŒUFS"]
    assert db.query(Recipe).count() == 3
