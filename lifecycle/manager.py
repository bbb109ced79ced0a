"""
Task lifecycle rules on top of a record store.

The manager holds no record state between calls: every operation re-reads
what it needs from the store right before acting. Validation that needs no
store runs first, so invalid input never causes a write.
"""

from typing import Any, Dict, List, Mapping, Optional
from helpers.errors import (
    InvalidEnumError, InvalidFieldError, MissingParameterError, NotFoundError
)
from helpers.validation import (
    coerce_due_date, validate_board_reference, validate_enum, validate_optional_string,
    validate_position, validate_required_string
)
from models.boards import Board, Task, TaskPriority, TaskStatus
from settings import logger
from store.base import RecordKind, RecordStore

TASK_ORDER = (("position", "asc"), ("created_at", "desc"), ("id", "asc"))
BOARD_ORDER = (("created_at", "desc"), ("id", "asc"))

UPDATABLE_TASK_FIELDS = ("title", "description", "status", "priority", "assigned_to", "due_date", "position")


class TaskLifecycleManager:
    """Creates, lists, updates and deletes tasks and boards."""

    def __init__(self, store: RecordStore):
        self.store = store

    # Boards

    def create_board(self, name: Any, description: Any = None, color: Any = None) -> Board:
        fields = {
            "name": validate_required_string(name, "name").strip(),
            "description": validate_optional_string(description, "description"),
            "color": validate_optional_string(color, "color"),
        }
        board = self.store.create_record(RecordKind.BOARD, fields)
        logger.info("Board created", extra={"board_id": board.id})
        return board

    def list_boards(self) -> List[Board]:
        return self.store.list_records(RecordKind.BOARD, order_by=BOARD_ORDER)

    def get_board(self, board_id: str) -> Board:
        board = self.store.get_record(RecordKind.BOARD, board_id)
        if board is None:
            logger.warning("Board not found", extra={"board_id": board_id})
            raise NotFoundError("board", board_id)
        return board

    def delete_board(self, board_id: str) -> Board:
        """Delete a board together with all of its tasks."""
        deleted = self.store.delete_cascade(RecordKind.BOARD, board_id)
        if deleted is None:
            logger.warning("Board not found", extra={"board_id": board_id})
            raise NotFoundError("board", board_id)
        logger.info("Board deleted with its tasks", extra={"board_id": board_id})
        return deleted

    # Tasks

    def create_task(
        self,
        board_id: Any,
        title: Any,
        description: Any = None,
        priority: Any = None,
        assigned_to: Any = None,
        due_date: Any = None,
        position: Any = None,
    ) -> Task:
        """
        Create a task on an existing board.

        New tasks always start as `todo`; there is no way to pick another
        initial status.
        """
        board_id = validate_required_string(board_id, "board_id")
        fields: Dict[str, Any] = {
            "board_id": board_id,
            "title": validate_required_string(title, "title"),
            "description": validate_optional_string(description, "description"),
            "status": TaskStatus.TODO,
            "priority": validate_enum(priority, TaskPriority, "priority"),
            "assigned_to": validate_optional_string(assigned_to, "assigned_to"),
            "due_date": coerce_due_date(due_date),
        }
        if position is not None:
            fields["position"] = validate_position(position)

        validate_board_reference(board_id, lambda ref: self.store.get_record(RecordKind.BOARD, ref))

        task = self.store.create_record(RecordKind.TASK, fields)
        logger.info("Task created", extra={"task_id": task.id, "board_id": board_id})
        return task

    def list_tasks(self, board_id: Optional[str]) -> List[Task]:
        """Tasks of one board by position, newest first among equal positions."""
        if not board_id:
            raise MissingParameterError("board_id")
        return self.store.list_records(RecordKind.TASK, {"board_id": board_id}, TASK_ORDER)

    def get_task(self, task_id: str) -> Task:
        task = self.store.get_record(RecordKind.TASK, task_id)
        if task is None:
            logger.warning("Task not found", extra={"task_id": task_id})
            raise NotFoundError("task", task_id)
        return task

    def update_task(self, task_id: str, patch: Mapping[str, Any]) -> Task:
        """
        Merge the fields present in `patch` into a task.

        A key that is missing is left alone; a key mapped to None clears the
        field where the field is nullable. Status moves are unrestricted.
        """
        changes = self._validate_patch(patch)

        updated = self.store.update_record(RecordKind.TASK, task_id, changes)
        if updated is None:
            logger.warning("Task not found", extra={"task_id": task_id})
            raise NotFoundError("task", task_id)

        logger.info("Task updated", extra={"task_id": task_id, "fields": sorted(changes)})
        return updated

    def delete_task(self, task_id: str) -> Task:
        """Delete a task and return its last known state."""
        deleted = self.store.delete_record(RecordKind.TASK, task_id)
        if deleted is None:
            logger.warning("Task not found", extra={"task_id": task_id})
            raise NotFoundError("task", task_id)
        logger.info("Task deleted", extra={"task_id": task_id, "board_id": deleted.board_id})
        return deleted

    def _validate_patch(self, patch: Mapping[str, Any]) -> Dict[str, Any]:
        unknown = sorted(set(patch) - set(UPDATABLE_TASK_FIELDS))
        if unknown:
            raise InvalidFieldError(unknown[0], f"{unknown[0]} cannot be updated")

        changes: Dict[str, Any] = {}
        if "title" in patch:
            changes["title"] = validate_required_string(patch["title"], "title")
        if "description" in patch:
            changes["description"] = validate_optional_string(patch["description"], "description")
        if "status" in patch:
            status = validate_enum(patch["status"], TaskStatus, "status")
            if status is None:
                raise InvalidEnumError("status", None, [member.value for member in TaskStatus])
            changes["status"] = status
        if "priority" in patch:
            changes["priority"] = validate_enum(patch["priority"], TaskPriority, "priority")
        if "assigned_to" in patch:
            changes["assigned_to"] = validate_optional_string(patch["assigned_to"], "assigned_to")
        if "due_date" in patch:
            changes["due_date"] = coerce_due_date(patch["due_date"])
        if "position" in patch:
            changes["position"] = validate_position(patch["position"])
        return changes
