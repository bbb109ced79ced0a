from pydantic import BaseModel, Field
from typing import Any, Dict, Optional
from datetime import datetime
from models.boards import TaskPriority, TaskStatus


class CreateTaskRequest(BaseModel):
    """Schema for creating a new task. New tasks always start as `todo`."""
    board_id: Optional[Any] = Field(default=None, description="Board that owns the task (required)")
    title: Optional[Any] = Field(default=None, description="Task title (required)")
    description: Optional[Any] = Field(default=None, description="Task description")
    priority: Optional[Any] = Field(default=None, description="low, medium or high")
    assigned_to: Optional[Any] = Field(default=None, description="Free-text assignee")
    due_date: Optional[Any] = Field(default=None, description="ISO-8601 due date")
    position: Optional[Any] = Field(default=None, description="Ordering position within the board")


class UpdateTaskRequest(BaseModel):
    """
    Schema for partially updating a task.

    Fields left out of the body are not touched; fields sent as null are
    cleared.
    """
    title: Optional[Any] = Field(default=None, description="New task title")
    description: Optional[Any] = Field(default=None, description="New task description")
    status: Optional[Any] = Field(default=None, description="todo, in_progress or done")
    priority: Optional[Any] = Field(default=None, description="low, medium, high or null to clear")
    assigned_to: Optional[Any] = Field(default=None, description="New assignee or null to clear")
    due_date: Optional[Any] = Field(default=None, description="New ISO-8601 due date or null to clear")
    position: Optional[Any] = Field(default=None, description="New ordering position")

    def to_patch(self) -> Dict[str, Any]:
        """Only the fields the caller actually sent, including explicit nulls."""
        return self.model_dump(exclude_unset=True)


class TaskResponse(BaseModel):
    """Schema for task responses."""
    id: str = Field(..., description="Task ID")
    board_id: str = Field(..., description="Owning board ID")
    title: str = Field(..., description="Task title")
    description: Optional[Any] = Field(default=None, description="Task description")
    status: TaskStatus = Field(..., description="Task status")
    priority: Optional[TaskPriority] = Field(default=None, description="Task priority")
    assigned_to: Optional[Any] = Field(default=None, description="Assignee")
    due_date: Optional[datetime] = Field(default=None, description="Due date")
    position: int = Field(default=0, description="Ordering position within the board")
    created_at: datetime = Field(..., description="Creation timestamp")
    updated_at: datetime = Field(..., description="Last modification timestamp")

    model_config = {"from_attributes": True}
