from __future__ import annotations

import json
import logging

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from recipe_tracker.core.errors import AuthError, ConflictError, ServiceValidationError
from recipe_tracker.core.security import hash_password, verify_password
from recipe_tracker.core.session import SessionManager
from recipe_tracker.models.user import User
from recipe_tracker.schemas.auth import UserRead
from recipe_tracker.schemas.results import OperationResult
from recipe_tracker.services.store import store_operation

logger = logging.getLogger("recipe_tracker.auth")

MIN_USERNAME_LENGTH = 3
MIN_PASSWORD_LENGTH = 6
INVALID_CREDENTIALS = "Invalid username or password"


@store_operation("Failed to create account", expose_detail=False)
def register(db: Session, username: str, password: str) -> OperationResult:
    username = (username or "").strip()
    password = password or ""

    if len(username) < MIN_USERNAME_LENGTH:
        raise ServiceValidationError(f"Username must be at least {MIN_USERNAME_LENGTH} characters long")
    if len(password.strip()) < MIN_PASSWORD_LENGTH:
        raise ServiceValidationError(f"Password must be at least {MIN_PASSWORD_LENGTH} characters long")

    user = User(username=username, password_hash=hash_password(password))
    db.add(user)
    try:
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        raise ConflictError("Username already exists") from exc
    db.refresh(user)

    logger.info(json.dumps({"event": "user_registered", "user_id": user.id}))
    return OperationResult.ok("Account created successfully", user=UserRead.model_validate(user))


@store_operation("Login failed", expose_detail=False)
def login(db: Session, sessions: SessionManager, username: str, password: str) -> OperationResult:
    user = db.query(User).filter(User.username == (username or "").strip()).first()
    if not user or not verify_password(password or "", user.password_hash):
        raise AuthError(INVALID_CREDENTIALS)

    session = sessions.open(user_id=user.id, username=user.username)
    logger.info(json.dumps({"event": "user_logged_in", "user_id": user.id}))
    return OperationResult.ok("Login successful", user=UserRead.model_validate(user), token=session.token)


def logout(sessions: SessionManager) -> OperationResult:
    sessions.close()
    return OperationResult.ok("Logged out successfully")


def current_user(db: Session, sessions: SessionManager, token: str | None = None) -> UserRead | None:
    session = sessions.current(token)
    if session is None:
        return None

    try:
        user = db.get(User, session.user_id)
    except SQLAlchemyError:
        logger.warning(json.dumps({"event": "current_user_lookup_failed", "user_id": session.user_id}))
        return None

    if user is None:
        # The account vanished underneath the session (e.g. a wipe).
        sessions.close()
        return None

    return UserRead.model_validate(user)
