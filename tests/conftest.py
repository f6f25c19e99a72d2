import os

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("PASSWORD_HASH_ITERATIONS", "1000")

from collections.abc import Callable, Generator

import pytest
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from recipe_tracker import models  # noqa: F401
from recipe_tracker.core.database import Base
from recipe_tracker.core.security import hash_password
from recipe_tracker.core.session import SessionManager
from recipe_tracker.models.ingredient import Ingredient
from recipe_tracker.models.user import User


@pytest.fixture
def engine() -> Generator[Engine, None, None]:
    test_engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=test_engine)
    yield test_engine
    Base.metadata.drop_all(bind=test_engine)
    test_engine.dispose()


@pytest.fixture
def db(engine: Engine) -> Generator[Session, None, None]:
    session = sessionmaker(autocommit=False, autoflush=False, bind=engine)()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def sessions() -> SessionManager:
    return SessionManager()


@pytest.fixture
def make_user(db: Session) -> Callable[..., User]:
    def _make_user(username: str, password: str = "secret123") -> User:
        user = User(username=username, password_hash=hash_password(password))
        db.add(user)
        db.commit()
        db.refresh(user)
        return user

    return _make_user


@pytest.fixture
def make_ingredient(db: Session) -> Callable[..., Ingredient]:
    def _make_ingredient(owner: User, name: str, unit: str) -> Ingredient:
        ingredient = Ingredient(owner_user_id=owner.id, name=name, unit=unit)
        db.add(ingredient)
        db.commit()
        db.refresh(ingredient)
        return ingredient

    return _make_ingredient


@pytest.fixture
def chef(make_user: Callable[..., User]) -> User:
    return make_user("chef_john")


@pytest.fixture
def other_chef(make_user: Callable[..., User]) -> User:
    return make_user("chef_mary")
