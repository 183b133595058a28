"""Tasks — create, toggle, move (drag-and-drop), delete, drafts and comments.

Invariants:
    - Every write goes through the board's coordinator; routes hold no state
    - Responses reflect the snapshot after the confirmed write
"""

import logging

from fastapi import APIRouter, Depends, status

from taskboard.api.dependencies import get_board, raise_outcome
from taskboard.core.domain_types import TaskId
from taskboard.core.errors import ResourceNotFoundError
from taskboard.core.views import find_task
from taskboard.schemas.board import (
    CommentCreate, CommentResponse, DraftUpdate, TaskCreate, TaskMove, TaskResponse,
)
from taskboard.services.task_board import TaskBoard

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/tasks", tags=["tasks"])


def _task_response(board: TaskBoard, task_id: TaskId) -> TaskResponse:
    task = find_task(board.snapshot.tasks, task_id)
    if task is None:
        raise ResourceNotFoundError("Task", task_id)
    return TaskResponse.from_entity(task)


@router.post(
    "", response_model=TaskResponse, status_code=status.HTTP_201_CREATED,
)
async def create_task(body: TaskCreate, board: TaskBoard = Depends(get_board)):
    task = await board.create_task(body.text)
    if task is None:
        raise_outcome(board)
    return TaskResponse.from_entity(task)


@router.post("/{task_id}/toggle", response_model=TaskResponse)
async def toggle_task(task_id: int, board: TaskBoard = Depends(get_board)):
    if not await board.toggle_task(TaskId(task_id)):
        raise_outcome(board)
    return _task_response(board, TaskId(task_id))


@router.put("/{task_id}/move", response_model=TaskResponse)
async def move_task(
    task_id: int, body: TaskMove, board: TaskBoard = Depends(get_board),
):
    """Drop a task onto the complete/incomplete bucket."""
    if not await board.move_task(TaskId(task_id), body.completed):
        raise_outcome(board)
    return _task_response(board, TaskId(task_id))


@router.delete("/{task_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_task(task_id: int, board: TaskBoard = Depends(get_board)):
    """Delete a task and, through the store cascade, its comments."""
    if not await board.delete_task(TaskId(task_id)):
        raise_outcome(board)


@router.put("/{task_id}/draft", status_code=status.HTTP_204_NO_CONTENT)
async def update_draft(
    task_id: int, body: DraftUpdate, board: TaskBoard = Depends(get_board),
):
    board.set_draft(TaskId(task_id), body.text)


@router.post(
    "/{task_id}/comments", response_model=CommentResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_comment(
    task_id: int, body: CommentCreate, board: TaskBoard = Depends(get_board),
):
    """Add a comment; without content, the pending draft is submitted."""
    if body.content is None:
        comment = await board.submit_draft(TaskId(task_id))
    else:
        comment = await board.create_comment(TaskId(task_id), body.content)
    if comment is None:
        raise_outcome(board)
    return CommentResponse.from_entity(comment)
