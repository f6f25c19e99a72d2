from collections.abc import Callable

from sqlalchemy.orm import Session

from recipe_tracker.models.ingredient import Ingredient
from recipe_tracker.models.user import User
from recipe_tracker.services import catalog


def test_add_ingredient_trims_and_validates(db: Session, chef: User) -> None:
    result = catalog.add_ingredient(db, "  Flour ", " cup ", chef.id)

    assert result.success is True
    ingredient = result.to_payload()["ingredient"]
    assert ingredient["name"] == "Flour"
    assert ingredient["unit"] == "cup"
    assert ingredient["owner_user_id"] == chef.id

    missing_name = catalog.add_ingredient(db, "   ", "cup", chef.id)
    missing_unit = catalog.add_ingredient(db, "Sugar", "", chef.id)
    assert missing_name.error == "ValidationError"
    assert missing_name.message == "Ingredient name is required"
    assert missing_unit.message == "Ingredient unit is required"


def test_list_ingredients_is_scoped_and_newest_first(db: Session, chef: User, other_chef: User) -> None:
    catalog.add_ingredient(db, "Flour", "cup", chef.id)
    catalog.add_ingredient(db, "Milk", "cup", chef.id)
    catalog.add_ingredient(db, "Rice", "g", other_chef.id)

    result = catalog.list_ingredients(db, chef.id)

    names = [item["name"] for item in result.to_payload()["ingredients"]]
    assert names == ["Milk", "Flour"]


def test_update_and_delete_are_owner_scoped(
    db: Session,
    chef: User,
    other_chef: User,
    make_ingredient: Callable[..., Ingredient],
) -> None:
    flour_id = make_ingredient(chef, "Flour", "cup").id

    foreign_update = catalog.update_ingredient(db, flour_id, "Stolen", "kg", other_chef.id)
    assert foreign_update.success is False
    assert foreign_update.error == "NotFoundOrForbidden"
    assert foreign_update.message == "Ingredient not found"

    updated = catalog.update_ingredient(db, flour_id, "Whole Wheat Flour", "g", chef.id)
    assert updated.to_payload()["ingredient"]["name"] == "Whole Wheat Flour"

    assert catalog.delete_ingredient(db, flour_id, other_chef.id).error == "NotFoundOrForbidden"
    assert catalog.delete_ingredient(db, flour_id, chef.id).success is True
    assert catalog.delete_ingredient(db, flour_id, chef.id).message == "Ingredient not found"
