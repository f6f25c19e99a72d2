from __future__ import annotations

from collections.abc import Callable
import functools
import json
import logging
from typing import Any, ParamSpec, TypeVar

from pydantic import BaseModel, ValidationError
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from recipe_tracker.core.errors import RecipeTrackerError, ServiceValidationError, StorageError
from recipe_tracker.schemas.results import OperationResult

logger = logging.getLogger("recipe_tracker.store")

P = ParamSpec("P")
M = TypeVar("M", bound=BaseModel)


def store_operation(
    failure_message: str,
    *,
    expose_detail: bool = True,
) -> Callable[[Callable[P, OperationResult]], Callable[P, OperationResult]]:
    """Turn a store function that raises into one that always returns a result.

    Domain errors keep their kind and message. Storage errors are rolled back,
    logged and reported as ``StorageError`` with ``failure_message``; the driver
    text is appended unless ``expose_detail`` is off.
    """

    def decorator(func: Callable[P, OperationResult]) -> Callable[P, OperationResult]:
        @functools.wraps(func)
        def wrapper(*args: P.args, **kwargs: P.kwargs) -> OperationResult:
            db = args[0]
            try:
                return func(*args, **kwargs)
            except RecipeTrackerError as exc:
                _rollback(db)
                return OperationResult.fail(exc)
            except SQLAlchemyError as exc:
                _rollback(db)
                logger.exception(json.dumps({"event": "storage_error", "operation": func.__name__}))
                message = failure_message
                if expose_detail:
                    message = f"{failure_message}: {getattr(exc, 'orig', None) or exc}"
                return OperationResult.fail(StorageError(message))

        return wrapper

    return decorator


def _rollback(db: object) -> None:
    if isinstance(db, Session):
        db.rollback()


def require_text(value: str | None, message: str) -> str:
    cleaned = (value or "").strip()
    if not cleaned:
        raise ServiceValidationError(message)
    return cleaned


def format_validation_error(exc: ValidationError) -> str:
    error = exc.errors()[0]
    location = ".".join(str(part) for part in error["loc"])
    return f"{location}: {error['msg']}" if location else error["msg"]


def parse_model(model: type[M], data: Any, message: str | None = None) -> M:
    """Validate ``data`` against ``model``; instances pass straight through."""
    if isinstance(data, model):
        return data
    try:
        return model.model_validate(data)
    except ValidationError as exc:
        raise ServiceValidationError(message or format_validation_error(exc)) from exc
