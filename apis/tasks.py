from fastapi import APIRouter, Depends, Query, status
from sqlmodel import Session
from database import get_session
from lifecycle.manager import TaskLifecycleManager
from store.sql import SQLRecordStore
from apis.schemas.tasks import CreateTaskRequest, UpdateTaskRequest, TaskResponse
from typing import List, Optional

router = APIRouter(prefix="/tasks", tags=["tasks"])


@router.post("", response_model=TaskResponse, status_code=status.HTTP_201_CREATED)
async def create_task(
    task_data: CreateTaskRequest,
    db_session: Session = Depends(get_session)
) -> TaskResponse:
    """Create new task on an existing board."""
    manager = TaskLifecycleManager(SQLRecordStore(db_session))
    task = manager.create_task(
        board_id=task_data.board_id,
        title=task_data.title,
        description=task_data.description,
        priority=task_data.priority,
        assigned_to=task_data.assigned_to,
        due_date=task_data.due_date,
        position=task_data.position
    )

    return TaskResponse.model_validate(task)


@router.get("", response_model=List[TaskResponse])
async def list_tasks(
    board_id: Optional[str] = Query(default=None, description="Board whose tasks to list (required)"),
    db_session: Session = Depends(get_session)
) -> List[TaskResponse]:
    """List the tasks of one board."""
    manager = TaskLifecycleManager(SQLRecordStore(db_session))
    tasks = manager.list_tasks(board_id)

    return [TaskResponse.model_validate(task) for task in tasks]


@router.get("/{task_id}", response_model=TaskResponse)
async def get_task(
    task_id: str,
    db_session: Session = Depends(get_session)
) -> TaskResponse:
    """Get a single task."""
    manager = TaskLifecycleManager(SQLRecordStore(db_session))
    task = manager.get_task(task_id)

    return TaskResponse.model_validate(task)


@router.patch("/{task_id}", response_model=TaskResponse)
async def update_task(
    task_id: str,
    task_data: UpdateTaskRequest,
    db_session: Session = Depends(get_session)
) -> TaskResponse:
    """Update task (move status, edit fields, clear optional fields)."""
    manager = TaskLifecycleManager(SQLRecordStore(db_session))
    task = manager.update_task(task_id, task_data.to_patch())

    return TaskResponse.model_validate(task)


@router.delete("/{task_id}", response_model=TaskResponse)
async def delete_task(
    task_id: str,
    db_session: Session = Depends(get_session)
) -> TaskResponse:
    """Permanently delete a task. Returns the deleted task."""
    manager = TaskLifecycleManager(SQLRecordStore(db_session))
    deleted_task = manager.delete_task(task_id)

    return TaskResponse.model_validate(deleted_task)
