from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from recipe_tracker.core.database import Base

if TYPE_CHECKING:
    from recipe_tracker.models.ingredient import Ingredient
    from recipe_tracker.models.recipe import Recipe
    from recipe_tracker.models.shopping_list import ShoppingListItem


class User(Base):
    __tablename__ = "users"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    username: Mapped[str] = mapped_column(String(40), nullable=False, unique=True)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow, nullable=False)

    ingredients: Mapped[list[Ingredient]] = relationship(back_populates="owner", passive_deletes=True)
    recipes: Mapped[list[Recipe]] = relationship(back_populates="owner", passive_deletes=True)
    shopping_list_items: Mapped[list[ShoppingListItem]] = relationship(back_populates="owner", passive_deletes=True)
