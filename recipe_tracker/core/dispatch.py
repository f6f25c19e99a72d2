from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass
import json
import logging
from time import perf_counter
from typing import Any

from pydantic import BaseModel
from sqlalchemy.orm import Session

from recipe_tracker.core.config import settings
from recipe_tracker.core.errors import AuthError, RecipeTrackerError, ServiceValidationError, StorageError
from recipe_tracker.core.session import SessionManager
from recipe_tracker.schemas.auth import UserRead
from recipe_tracker.schemas.results import OperationResult
from recipe_tracker.services.credentials import current_user

logger = logging.getLogger("recipe_tracker.dispatch")

DEV_ONLY_MESSAGE = "DevTools are only available in development mode"


@dataclass
class OperationContext:
    db: Session
    sessions: SessionManager
    user: UserRead | None = None
    token: str | None = None

    @property
    def user_id(self) -> int:
        if self.user is None:
            raise AuthError()
        return self.user.id


@dataclass(frozen=True)
class Operation:
    name: str
    handler: Callable[[OperationContext, dict[str, Any]], Any]
    requires_auth: bool = True
    dev_only: bool = False


class Dispatcher:
    """Routes named operations from the UI to the stores.

    Owns the process session. Operations that need a user are refused before
    their store is called when nobody is logged in, and dev-only operations are
    refused unless ``settings.dev_mode`` is on.
    """

    def __init__(self, operations: Iterable[Operation], sessions: SessionManager | None = None) -> None:
        self.sessions = sessions or SessionManager()
        self._operations = {operation.name: operation for operation in operations}

    def names(self) -> list[str]:
        return sorted(self._operations)

    def has(self, name: str) -> bool:
        return name in self._operations

    def dispatch(self, name: str, payload: Any, db: Session, token: str | None = None) -> Any:
        started = perf_counter()
        context = OperationContext(db=db, sessions=self.sessions, token=token)
        result = self._run(name, payload, context)
        try:
            response = _to_plain(result)
        except ValueError:
            logger.exception(json.dumps({"event": "operation_result_unserializable", "operation": name}))
            result = OperationResult.fail(StorageError(f"Operation {name} failed"))
            response = result.to_payload()

        success = result.success if isinstance(result, OperationResult) else True
        event = {
            "event": "operation_completed",
            "operation": name,
            "success": success,
            "error": result.error if isinstance(result, OperationResult) else None,
            "user_id": context.user.id if context.user else None,
            "duration_ms": round((perf_counter() - started) * 1000, 2),
        }
        if success:
            logger.info(json.dumps(event))
        else:
            logger.warning(json.dumps(event))

        return response

    def _run(self, name: str, payload: Any, context: OperationContext) -> Any:
        operation = self._operations.get(name)
        if operation is None:
            return OperationResult.fail(ServiceValidationError(f"Unknown operation: {name}"))

        if operation.dev_only and not settings.dev_mode:
            return OperationResult.fail(AuthError(DEV_ONLY_MESSAGE))

        if operation.requires_auth:
            context.user = current_user(context.db, context.sessions, context.token)
            if context.user is None:
                return OperationResult.fail(AuthError("User not authenticated"))

        try:
            return operation.handler(context, payload if payload is not None else {})
        except RecipeTrackerError as exc:
            context.db.rollback()
            return OperationResult.fail(exc)
        except Exception:
            context.db.rollback()
            logger.exception(json.dumps({"event": "operation_crashed", "operation": name}))
            return OperationResult.fail(StorageError(f"Operation {name} failed"))


def _to_plain(result: Any) -> Any:
    if isinstance(result, OperationResult):
        return result.to_payload()
    if isinstance(result, BaseModel):
        return result.model_dump(mode="json")
    return result
