"""API Dependencies — access to the process-wide TaskBoard from route handlers.

Invariants:
    - The board is created once by the lifespan and stored on app.state
    - A refused or failed board action is re-raised as its TaskBoardError so the
      global handler renders it (400 rejected, 404 unknown task, 503 store failure)

Design Decisions:
    - Dependency function over module import: tests override get_board with a
      board built on a fake gateway
"""

from typing import NoReturn

from fastapi import Request

from taskboard.services.task_board import TaskBoard


def get_board(request: Request) -> TaskBoard:
    """FastAPI dependency for the board."""
    board = getattr(request.app.state, "board", None)
    if board is None:
        raise RuntimeError("Task board not initialized")
    return board


def raise_outcome(board: TaskBoard) -> NoReturn:
    """Raise whatever made the last board action return nothing."""
    if board.state.rejection is not None:
        raise board.state.rejection
    if board.error is not None:
        raise board.error
    raise RuntimeError("Board action failed without an error")
