from pydantic import BaseModel, Field
from typing import Any, List, Optional
from datetime import datetime
from .tasks import TaskResponse


class CreateBoardRequest(BaseModel):
    """Schema for creating a new board."""
    name: Optional[Any] = Field(default=None, description="Board name (required)")
    description: Optional[Any] = Field(default=None, description="Board description")
    color: Optional[Any] = Field(default=None, description="Display color hint")


class BoardResponse(BaseModel):
    """Schema for board responses."""
    id: str = Field(..., description="Board ID")
    name: str = Field(..., description="Board name")
    description: Optional[str] = Field(default=None, description="Board description")
    color: Optional[str] = Field(default=None, description="Display color hint")
    created_at: datetime = Field(..., description="Creation timestamp")
    updated_at: datetime = Field(..., description="Last modification timestamp")

    model_config = {"from_attributes": True}  # Allows Pydantic to work with SQLModel objects


class BoardDetailResponse(BoardResponse):
    """Schema for a board together with its ordered tasks."""
    tasks: List[TaskResponse] = Field(default_factory=list, description="Tasks on the board")
