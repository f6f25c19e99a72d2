from datetime import datetime, timezone
import hashlib
import hmac
import secrets

import jwt
from jwt import InvalidTokenError

from recipe_tracker.core.config import settings


def hash_password(password: str) -> str:
    salt = secrets.token_bytes(16)
    digest = hashlib.pbkdf2_hmac(
        "sha256",
        password.encode("utf-8"),
        salt,
        settings.password_hash_iterations,
    )
    return f"pbkdf2_sha256${settings.password_hash_iterations}${salt.hex()}${digest.hex()}"


def verify_password(password: str, password_hash: str) -> bool:
    try:
        algorithm, iterations, salt_hex, hash_hex = password_hash.split("$")
        if algorithm != "pbkdf2_sha256":
            return False
        salt = bytes.fromhex(salt_hex)
        rounds = int(iterations)
    except ValueError:
        return False

    digest = hashlib.pbkdf2_hmac(
        "sha256",
        password.encode("utf-8"),
        salt,
        rounds,
    )
    return hmac.compare_digest(digest.hex(), hash_hex)


def create_session_token(*, user_id: int, username: str, session_id: str) -> str:
    now = datetime.now(tz=timezone.utc)
    payload = {"sub": str(user_id), "username": username, "sid": session_id, "iat": now}
    return jwt.encode(payload, settings.session_secret_key, algorithm=settings.session_token_algorithm)


def decode_session_token(token: str) -> dict | None:
    try:
        return jwt.decode(token, settings.session_secret_key, algorithms=[settings.session_token_algorithm])
    except InvalidTokenError:
        return None
