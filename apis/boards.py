from fastapi import APIRouter, Depends, status
from sqlmodel import Session
from database import get_session
from lifecycle.manager import TaskLifecycleManager
from store.sql import SQLRecordStore
from .schemas.boards import BoardDetailResponse, BoardResponse, CreateBoardRequest
from .schemas.tasks import TaskResponse
from typing import List

router = APIRouter(prefix="/boards", tags=["boards"])


@router.get("")
async def list_boards(
    db_session: Session = Depends(get_session)
) -> List[BoardResponse]:
    """List all boards, newest first."""
    manager = TaskLifecycleManager(SQLRecordStore(db_session))
    boards = manager.list_boards()

    return [BoardResponse.model_validate(board) for board in boards]


@router.get("/{board_id}")
async def get_board(
    board_id: str,
    db_session: Session = Depends(get_session)
) -> BoardDetailResponse:
    """Get board with all of its tasks in board order."""
    manager = TaskLifecycleManager(SQLRecordStore(db_session))

    # Raises NotFoundError when the board does not exist
    board = manager.get_board(board_id)
    tasks = manager.list_tasks(board_id)

    return BoardDetailResponse(
        **BoardResponse.model_validate(board).model_dump(),
        tasks=[TaskResponse.model_validate(task) for task in tasks]
    )


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_board(
    board_data: CreateBoardRequest,
    db_session: Session = Depends(get_session)
) -> BoardResponse:
    """Create a new board."""
    manager = TaskLifecycleManager(SQLRecordStore(db_session))
    new_board = manager.create_board(
        name=board_data.name,
        description=board_data.description,
        color=board_data.color
    )

    return BoardResponse.model_validate(new_board)


@router.delete("/{board_id}")
async def delete_board(
    board_id: str,
    db_session: Session = Depends(get_session)
) -> BoardResponse:
    """Delete a board and every task on it. Returns the deleted board."""
    manager = TaskLifecycleManager(SQLRecordStore(db_session))
    deleted_board = manager.delete_board(board_id)

    return BoardResponse.model_validate(deleted_board)
