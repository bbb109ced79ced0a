from sqlmodel import SQLModel, Field
from enum import Enum
from typing import Optional
from datetime import datetime, timezone
from .helper import id_generator


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class TaskStatus(str, Enum):
    """Workflow status of a task. Any status may move to any other."""
    TODO = "todo"
    IN_PROGRESS = "in_progress"
    DONE = "done"


class TaskPriority(str, Enum):
    """Optional task priority."""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class Board(SQLModel, table=True):
    """Kanban-style board that owns its tasks."""
    id: str = Field(default_factory=id_generator('board', 10), primary_key=True)
    name: str = Field(index=True)
    description: Optional[str] = Field(default=None)
    color: Optional[str] = Field(default=None)
    created_at: datetime = Field(default_factory=utc_now, index=True)
    updated_at: datetime = Field(default_factory=utc_now)


class Task(SQLModel, table=True):
    """Work unit within a board."""
    id: str = Field(default_factory=id_generator('task', 10), primary_key=True)
    board_id: str = Field(foreign_key="board.id", index=True, ondelete="CASCADE")
    title: str
    description: Optional[str] = Field(default=None)
    status: TaskStatus = Field(default=TaskStatus.TODO, index=True)
    priority: Optional[TaskPriority] = Field(default=None)
    assigned_to: Optional[str] = Field(default=None)
    due_date: Optional[datetime] = Field(default=None)
    position: int = Field(default=0)
    created_at: datetime = Field(default_factory=utc_now, index=True)
    updated_at: datetime = Field(default_factory=utc_now)
