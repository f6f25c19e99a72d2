from typing import Any

from pydantic import BaseModel, ConfigDict

from recipe_tracker.core.errors import RecipeTrackerError


class OperationResult(BaseModel):
    """Uniform `{success, message, error?, ...payload}` envelope.

    Payload fields (``user``, ``recipe``, ``items`` ...) are stored as extras so
    each operation names its own data the way the UI reads it.
    """

    success: bool
    message: str
    error: str | None = None

    model_config = ConfigDict(extra="allow")

    @classmethod
    def ok(cls, message: str, **payload: Any) -> "OperationResult":
        return cls(success=True, message=message, **payload)

    @classmethod
    def fail(cls, exc: RecipeTrackerError) -> "OperationResult":
        payload: dict[str, Any] = {}
        if exc.details:
            payload["details"] = dict(exc.details)
        return cls(success=False, message=exc.message, error=exc.kind, **payload)

    def to_payload(self) -> dict[str, Any]:
        payload = self.model_dump(mode="json")
        if payload.get("error") is None:
            payload.pop("error", None)
        return payload


class EntityIdRequest(BaseModel):
    id: int
