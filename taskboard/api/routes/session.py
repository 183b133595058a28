"""Session — selection login, logout and the current session state.

Invariants:
    - Login with an unknown user id answers 404 and leaves the session as it was
    - Logout always succeeds (clearing an anonymous session is a no-op)
"""

import logging

from fastapi import APIRouter, Depends

from taskboard.api.dependencies import get_board
from taskboard.core.domain_types import UserId
from taskboard.core.errors import ResourceNotFoundError
from taskboard.schemas.board import LoginRequest, SessionResponse, UserResponse
from taskboard.services.task_board import TaskBoard

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/session", tags=["session"])


def session_response(board: TaskBoard) -> SessionResponse:
    user = board.current_user
    return SessionResponse(
        status=board.session_status.value,
        user=UserResponse.from_entity(user) if user else None,
    )


@router.get("", response_model=SessionResponse)
async def get_session(board: TaskBoard = Depends(get_board)):
    return session_response(board)


@router.post("/login", response_model=SessionResponse)
async def login(body: LoginRequest, board: TaskBoard = Depends(get_board)):
    """Bind the session to an existing user."""
    if not board.login(UserId(body.user_id)):
        raise ResourceNotFoundError("User", body.user_id)
    return session_response(board)


@router.post("/logout", response_model=SessionResponse)
async def logout(board: TaskBoard = Depends(get_board)):
    board.logout()
    return session_response(board)
