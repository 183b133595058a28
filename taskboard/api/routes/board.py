"""Board — the current user's buckets and the reload action.

Invariants:
    - GET never touches the store; it renders the snapshot as it is
    - An anonymous session gets empty buckets, not an error
    - Reload failures are reported through the board's error field (200), the
      same way the initial load reports them
"""

import logging

from fastapi import APIRouter, Depends

from taskboard.api.dependencies import get_board
from taskboard.api.routes.session import session_response
from taskboard.schemas.board import BoardResponse
from taskboard.services.task_board import TaskBoard

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/board", tags=["board"])


def board_response(board: TaskBoard) -> BoardResponse:
    return BoardResponse.build(
        session_response(board),
        board.board_view(),
        loading=board.state.loading,
        initialized=board.state.initialized,
        error=board.error_message,
    )


@router.get("", response_model=BoardResponse)
async def get_board_view(board: TaskBoard = Depends(get_board)):
    return board_response(board)


@router.post("/reload", response_model=BoardResponse)
async def reload_board(board: TaskBoard = Depends(get_board)):
    """Re-read users, tasks and comments from the store."""
    await board.reload()
    return board_response(board)
