from sqlalchemy.orm import Session

from recipe_tracker.core.session import SessionManager
from recipe_tracker.models.user import User
from recipe_tracker.services import credentials


def test_register_creates_user_without_exposing_hash(db: Session) -> None:
    result = credentials.register(db, "  chef_john ", "secret123")

    assert result.success is True
    assert result.message == "Account created successfully"
    payload = result.to_payload()
    assert payload["user"]["username"] == "chef_john"
    assert "password_hash" not in payload["user"]

    stored = db.query(User).filter(User.username == "chef_john").one()
    assert stored.password_hash.startswith("pbkdf2_sha256$")
    assert stored.password_hash != "secret123"


def test_register_validates_lengths(db: Session) -> None:
    short_name = credentials.register(db, "ab", "secret123")
    assert short_name.success is False
    assert short_name.error == "ValidationError"
    assert short_name.message == "Username must be at least 3 characters long"

    short_password = credentials.register(db, "chef_john", "  12345  ")
    assert short_password.success is False
    assert short_password.message == "Password must be at least 6 characters long"

    assert db.query(User).count() == 0


def test_register_duplicate_username_is_conflict(db: Session) -> None:
    assert credentials.register(db, "chef_john", "secret123").success

    duplicate = credentials.register(db, "chef_john", "another123")

    assert duplicate.success is False
    assert duplicate.error == "ConflictError"
    assert duplicate.message == "Username already exists"
    assert db.query(User).count() == 1


def test_login_opens_session_and_rejects_bad_credentials(db: Session, sessions: SessionManager) -> None:
    credentials.register(db, "chef_john", "secret123")

    wrong_password = credentials.login(db, sessions, "chef_john", "secret999")
    unknown_user = credentials.login(db, sessions, "nobody", "secret123")
    assert wrong_password.error == "AuthError"
    assert wrong_password.message == "Invalid username or password"
    assert unknown_user.message == wrong_password.message
    assert sessions.current() is None

    result = credentials.login(db, sessions, "chef_john", "secret123")
    assert result.success is True
    assert result.message == "Login successful"
    assert result.to_payload()["token"] == sessions.current().token


def test_current_user_and_logout(db: Session, sessions: SessionManager) -> None:
    assert credentials.current_user(db, sessions) is None

    credentials.register(db, "chef_john", "secret123")
    credentials.login(db, sessions, "chef_john", "secret123")

    user = credentials.current_user(db, sessions)
    assert user is not None
    assert user.username == "chef_john"
    assert credentials.current_user(db, sessions, token="bogus") is None

    result = credentials.logout(sessions)
    assert result.success is True
    assert credentials.current_user(db, sessions) is None


def test_current_user_drops_session_when_user_row_is_gone(db: Session, sessions: SessionManager) -> None:
    credentials.register(db, "chef_john", "secret123")
    credentials.login(db, sessions, "chef_john", "secret123")

    db.query(User).delete()
    db.commit()

    assert credentials.current_user(db, sessions) is None
    assert sessions.current() is None
