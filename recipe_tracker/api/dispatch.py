from typing import Any

from fastapi import APIRouter, Body, Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from recipe_tracker.core.database import get_db
from recipe_tracker.core.dispatch import Dispatcher

router = APIRouter(prefix="/dispatch", tags=["dispatch"])
bearer_scheme = HTTPBearer(auto_error=False)


def get_dispatcher(request: Request) -> Dispatcher:
    return request.app.state.dispatcher


@router.get("")
def list_operations(dispatcher: Dispatcher = Depends(get_dispatcher)) -> dict[str, list[str]]:
    return {"operations": dispatcher.names()}


@router.post("/{operation}")
def dispatch_operation(
    operation: str,
    request: Request,
    payload: dict[str, Any] | None = Body(default=None),
    db: Session = Depends(get_db),
    dispatcher: Dispatcher = Depends(get_dispatcher),
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> Any:
    if not dispatcher.has(operation):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Unknown operation: {operation}")

    token = credentials.credentials if credentials else None
    result = dispatcher.dispatch(operation, payload, db, token=token)

    session = dispatcher.sessions.current(token)
    request.state.user_id = session.user_id if session else None
    return result
