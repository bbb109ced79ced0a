from typing import Any, List, Mapping, Optional
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, select
from helpers.errors import StoreUnavailableError
from models.boards import Task, utc_now
from settings import logger
from .base import OrderBy, Record, RecordKind, RecordStore, snapshot


class SQLRecordStore(RecordStore):
    """Record store backed by a SQLModel session."""

    def __init__(self, db_session: Session):
        self.db_session = db_session

    def _commit(self, operation: str, kind: RecordKind, record: Optional[Record] = None) -> None:
        try:
            self.db_session.commit()
            if record is not None:
                self.db_session.refresh(record)
        except SQLAlchemyError as e:
            self.db_session.rollback()
            logger.error("Record store commit failed", extra={
                "operation": operation,
                "kind": kind.value,
                "error": str(e)
            })
            raise StoreUnavailableError(f"Failed to {operation} {kind.value}") from e

    def _read(self, operation: str, kind: RecordKind, statement):
        try:
            return self.db_session.exec(statement).all()
        except SQLAlchemyError as e:
            logger.error("Record store query failed", extra={
                "operation": operation,
                "kind": kind.value,
                "error": str(e)
            })
            raise StoreUnavailableError(f"Failed to {operation} {kind.value}") from e

    def create_record(self, kind: RecordKind, fields: Mapping[str, Any]) -> Record:
        record = kind.model(**fields)
        self.db_session.add(record)
        self._commit("create", kind, record)
        return record

    def get_record(self, kind: RecordKind, record_id: str) -> Optional[Record]:
        model = kind.model
        statement = select(model).where(model.id == record_id)
        records = self._read("fetch", kind, statement)
        return records[0] if records else None

    def list_records(
        self,
        kind: RecordKind,
        filters: Optional[Mapping[str, Any]] = None,
        order_by: OrderBy = (),
    ) -> List[Record]:
        model = kind.model
        statement = select(model)
        for field, value in (filters or {}).items():
            statement = statement.where(getattr(model, field) == value)
        for field, direction in order_by:
            column = getattr(model, field)
            statement = statement.order_by(column.desc() if direction == "desc" else column.asc())
        return list(self._read("list", kind, statement))

    def update_record(self, kind: RecordKind, record_id: str, patch: Mapping[str, Any]) -> Optional[Record]:
        record = self.get_record(kind, record_id)
        if record is None:
            return None

        for field, value in patch.items():
            setattr(record, field, value)
        record.updated_at = utc_now()

        self.db_session.add(record)
        self._commit("update", kind, record)
        return record

    def delete_record(self, kind: RecordKind, record_id: str) -> Optional[Record]:
        record = self.get_record(kind, record_id)
        if record is None:
            return None

        deleted = snapshot(record)
        self.db_session.delete(record)
        self._commit("delete", kind)
        return deleted

    def delete_cascade(self, kind: RecordKind, record_id: str) -> Optional[Record]:
        if kind is not RecordKind.BOARD:
            raise ValueError(f"Cascade delete is not defined for {kind.value} records")

        board = self.get_record(kind, record_id)
        if board is None:
            return None

        deleted = snapshot(board)
        # Tasks and board go in the same transaction; a failed commit rolls back both
        task_statement = select(Task).where(Task.board_id == record_id)
        for task in self._read("list", RecordKind.TASK, task_statement):
            self.db_session.delete(task)
        try:
            self.db_session.flush()
        except SQLAlchemyError as e:
            self.db_session.rollback()
            logger.error("Record store cascade failed", extra={
                "board_id": record_id,
                "error": str(e)
            })
            raise StoreUnavailableError("Failed to delete board tasks") from e
        self.db_session.delete(board)
        self._commit("delete", kind)
        return deleted
