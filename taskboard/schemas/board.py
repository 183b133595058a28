"""Board Schemas — Pydantic models for the board's HTTP boundary.

Invariants:
    - Request bodies only bound length; blank-text rules belong to the coordinator
      so every front end gets the same refusal
    - Response field names are the semantic ones (owner_id, not user_id)

Design Decisions:
    - from_entity classmethods: routes convert frozen dataclasses explicitly,
      schemas never import the snapshot
"""

from datetime import datetime

from pydantic import BaseModel, Field

from taskboard.core.entities import Comment, Task, User
from taskboard.core.views import BoardView, TaskCard


# --- Requests -----------------------------------------------------------------

class UserCreate(BaseModel):
    """Registration form."""
    name: str = Field(max_length=200)
    email: str = Field(max_length=320)


class LoginRequest(BaseModel):
    """Selection login: pick an existing user by id."""
    user_id: int


class TaskCreate(BaseModel):
    text: str = Field(max_length=10_000)


class TaskMove(BaseModel):
    """Drag-and-drop target: the bucket's completion state."""
    completed: bool


class DraftUpdate(BaseModel):
    text: str = Field(max_length=10_000)


class CommentCreate(BaseModel):
    """Comment body; omitted content submits the task's pending draft."""
    content: str | None = Field(None, max_length=10_000)


# --- Responses ----------------------------------------------------------------

class UserResponse(BaseModel):
    id: int
    name: str
    email: str

    @classmethod
    def from_entity(cls, user: User) -> "UserResponse":
        return cls(id=user.id, name=user.name, email=user.email)


class TaskResponse(BaseModel):
    id: int
    text: str
    completed: bool
    owner_id: int

    @classmethod
    def from_entity(cls, task: Task) -> "TaskResponse":
        return cls(id=task.id, text=task.text, completed=task.completed, owner_id=task.owner_id)


class CommentResponse(BaseModel):
    id: int
    task_id: int
    user_id: int
    user_name: str
    content: str
    created_at: datetime

    @classmethod
    def from_entity(cls, comment: Comment) -> "CommentResponse":
        return cls(
            id=comment.id, task_id=comment.task_id, user_id=comment.user_id,
            user_name=comment.user_name, content=comment.content,
            created_at=comment.created_at,
        )


class SessionResponse(BaseModel):
    status: str
    user: UserResponse | None = None


class TaskCardResponse(BaseModel):
    task: TaskResponse
    comments: list[CommentResponse] = []
    draft: str = ""

    @classmethod
    def from_card(cls, card: TaskCard) -> "TaskCardResponse":
        return cls(
            task=TaskResponse.from_entity(card.task),
            comments=[CommentResponse.from_entity(c) for c in card.comments],
            draft=card.draft,
        )


class BoardResponse(BaseModel):
    """Everything a front end needs to draw the board."""
    session: SessionResponse
    incomplete: list[TaskCardResponse] = []
    complete: list[TaskCardResponse] = []
    loading: bool = False
    initialized: bool = False
    error: str | None = None

    @classmethod
    def build(
        cls, session: SessionResponse, view: BoardView | None,
        loading: bool, initialized: bool, error: str | None,
    ) -> "BoardResponse":
        return cls(
            session=session,
            incomplete=[TaskCardResponse.from_card(c) for c in view.incomplete] if view else [],
            complete=[TaskCardResponse.from_card(c) for c in view.complete] if view else [],
            loading=loading,
            initialized=initialized,
            error=error,
        )
