"""Users — the open user list (selection login) and registration."""

import logging

from fastapi import APIRouter, Depends, status

from taskboard.api.dependencies import get_board, raise_outcome
from taskboard.schemas.board import UserCreate, UserResponse
from taskboard.services.task_board import TaskBoard

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/users", tags=["users"])


@router.get("", response_model=list[UserResponse])
async def list_users(board: TaskBoard = Depends(get_board)):
    """All known users, in id order."""
    return [UserResponse.from_entity(u) for u in board.users]


@router.post(
    "", response_model=UserResponse, status_code=status.HTTP_201_CREATED,
)
async def register_user(body: UserCreate, board: TaskBoard = Depends(get_board)):
    """Register a user and log them in."""
    user = await board.register_user(body.name, body.email)
    if user is None:
        raise_outcome(board)
    return UserResponse.from_entity(user)
