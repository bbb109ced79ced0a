from abc import ABC, abstractmethod
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple, Type, Union
from models.boards import Board, Task


class RecordKind(str, Enum):
    """Kinds of records the store persists."""
    BOARD = "board"
    TASK = "task"

    @property
    def model(self) -> Type[Union[Board, Task]]:
        return Board if self is RecordKind.BOARD else Task


Record = Union[Board, Task]
OrderBy = Sequence[Tuple[str, str]]


class RecordStore(ABC):
    """Generic CRUD persistence for boards and tasks."""

    @abstractmethod
    def create_record(self, kind: RecordKind, fields: Mapping[str, Any]) -> Record:
        """Insert a record and return it with generated id and timestamps."""
        pass

    @abstractmethod
    def get_record(self, kind: RecordKind, record_id: str) -> Optional[Record]:
        pass

    @abstractmethod
    def list_records(
        self,
        kind: RecordKind,
        filters: Optional[Mapping[str, Any]] = None,
        order_by: OrderBy = (),
    ) -> List[Record]:
        """
        List records matching every equality filter.

        Args:
            kind: Record kind to list
            filters: Field name to required value
            order_by: (field, "asc" | "desc") pairs applied in order
        """
        pass

    @abstractmethod
    def update_record(self, kind: RecordKind, record_id: str, patch: Mapping[str, Any]) -> Optional[Record]:
        """Apply only the fields in `patch`, advance `updated_at`, return None when missing."""
        pass

    @abstractmethod
    def delete_record(self, kind: RecordKind, record_id: str) -> Optional[Record]:
        """Delete a record and return a detached snapshot of it, None when missing."""
        pass

    @abstractmethod
    def delete_cascade(self, kind: RecordKind, record_id: str) -> Optional[Record]:
        """Delete a board and every task on it in one transaction."""
        pass


def snapshot(record: Record) -> Record:
    """Detached copy of a record that survives its deletion."""
    data: Dict[str, Any] = record.model_dump()
    return type(record).model_validate(data)
