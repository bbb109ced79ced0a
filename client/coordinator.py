"""
Optimistic update coordinator.

Every mutation is applied to the local cache first and is then either
confirmed with the server's record or rolled back. Rolling back restores
the cache as it was before the oldest still-pending mutation started and
replays every other local change and confirmation made since, in the order
they happened, so only the failed mutation's own change is undone. A
mutation never stays pending once its request has finished, failed, timed
out or been cancelled.
"""

import asyncio
import copy
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Awaitable, Callable, Dict, List, Optional, Tuple, Union
from models.boards import TaskStatus
from models.helper import generate_id
from settings import logger
from .api import ApiError, BoardApiClient
from .cache import CacheSnapshot, LocalCache, Record


class MutationState(str, Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    ROLLED_BACK = "rolled_back"


@dataclass
class MutationFailure:
    """Why a mutation was rolled back."""
    kind: str
    message: str


@dataclass
class Mutation:
    """One tentative change and its outcome."""
    id: str
    action: str
    target_id: Optional[str]
    snapshot: CacheSnapshot
    state: MutationState = MutationState.PENDING
    result: Optional[Record] = None
    error: Optional[MutationFailure] = None


Listener = Callable[[Mutation], None]

# (owning mutation id, step that re-applies one cache change)
JournalEntry = Tuple[Optional[str], Callable[[], Any]]


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


class OptimisticUpdateCoordinator:
    """Applies board and task mutations locally before the server confirms them."""

    def __init__(self, client: BoardApiClient, cache: Optional[LocalCache] = None, timeout: Optional[float] = None):
        self.client = client
        self.cache = cache if cache is not None else LocalCache()
        self.timeout = timeout
        self.pending: Dict[str, Mutation] = {}
        self._baseline: Optional[CacheSnapshot] = None
        self._journal: List[JournalEntry] = []
        self._confirm_listeners: List[Listener] = []
        self._rollback_listeners: List[Listener] = []

    def on_confirm(self, listener: Listener) -> None:
        self._confirm_listeners.append(listener)

    def on_rollback(self, listener: Listener) -> None:
        self._rollback_listeners.append(listener)

    async def refresh_board(self, board_id: str) -> Record:
        """Fetch a board with its tasks and load it into the cache."""
        board = await self.client.get_board(board_id)
        self._apply(None, lambda: self.cache.load_board(board))
        return board

    async def create_board(self, fields: Dict[str, Any]) -> Mutation:
        placeholder_id = generate_id("temp")
        placeholder = {
            "id": placeholder_id,
            "name": fields.get("name"),
            "description": fields.get("description"),
            "color": fields.get("color"),
            "created_at": _now_iso(),
            "updated_at": _now_iso(),
        }

        def confirm(board: Record) -> None:
            if not self.cache.replace_board(placeholder_id, board):
                self.cache.insert_board(board, front=True)

        return await self._run(
            "create_board", placeholder_id,
            lambda: self.cache.insert_board(dict(placeholder), front=True),
            lambda: self.client.create_board(fields),
            confirm
        )

    async def delete_board(self, board_id: str) -> Mutation:
        """Remove a board and its cached tasks, restoring both if the server refuses."""
        return await self._run(
            "delete_board", board_id,
            lambda: self.cache.remove_board(board_id),
            lambda: self.client.delete_board(board_id),
            lambda deleted: None
        )

    async def create_task(self, board_id: str, fields: Dict[str, Any]) -> Mutation:
        """
        Append a placeholder task, then swap in the server record at the same
        position. The placeholder always starts as `todo`, like the server.
        """
        placeholder_id = generate_id("temp")
        placeholder = {
            "id": placeholder_id,
            "board_id": board_id,
            "title": fields.get("title"),
            "description": fields.get("description"),
            "status": TaskStatus.TODO.value,
            "priority": fields.get("priority"),
            "assigned_to": fields.get("assigned_to"),
            "due_date": fields.get("due_date"),
            "position": fields.get("position") or 0,
            "created_at": _now_iso(),
            "updated_at": _now_iso(),
        }
        payload = dict(fields, board_id=board_id)

        def confirm(task: Record) -> None:
            if not self.cache.replace_task(placeholder_id, task):
                self.cache.insert_task(task)

        return await self._run(
            "create_task", placeholder_id,
            lambda: self.cache.insert_task(dict(placeholder)),
            lambda: self.client.create_task(payload),
            confirm
        )

    async def update_task(self, task_id: str, patch: Dict[str, Any]) -> Mutation:
        """Apply a partial patch locally; keys absent from `patch` are untouched."""
        def confirm(task: Record) -> None:
            if not self.cache.replace_task(task_id, task):
                self.cache.insert_task(task)

        return await self._run(
            "update_task", task_id,
            lambda: self.cache.patch_task(task_id, patch),
            lambda: self.client.update_task(task_id, patch),
            confirm
        )

    async def change_status(self, task_id: str, status: Union[TaskStatus, str]) -> Mutation:
        return await self.update_task(task_id, {"status": TaskStatus(status).value})

    async def delete_task(self, task_id: str) -> Mutation:
        return await self._run(
            "delete_task", task_id,
            lambda: self.cache.remove_task(task_id),
            lambda: self.client.delete_task(task_id),
            lambda deleted: None
        )

    def _apply(self, owner: Optional[str], step: Callable[[], Any]) -> None:
        """Run a cache change and journal it while any mutation is pending."""
        step()
        if self.pending:
            self._journal.append((owner, step))

    def _settle(self) -> None:
        if not self.pending:
            self._baseline = None
            self._journal = []

    async def _run(
        self,
        action: str,
        target_id: Optional[str],
        apply_local: Callable[[], Any],
        request: Callable[[], Awaitable[Record]],
        confirm: Callable[[Record], None],
    ) -> Mutation:
        mutation = Mutation(
            id=generate_id("mutation"),
            action=action,
            target_id=target_id,
            snapshot=self.cache.snapshot()
        )
        if not self.pending:
            self._baseline = mutation.snapshot
        self.pending[mutation.id] = mutation
        self._apply(mutation.id, apply_local)

        try:
            if self.timeout is not None:
                result = await asyncio.wait_for(request(), self.timeout)
            else:
                result = await request()
        except asyncio.CancelledError:
            self._roll_back(mutation, MutationFailure("cancelled", "Request was abandoned by the caller"))
            raise
        except asyncio.TimeoutError:
            self._roll_back(mutation, MutationFailure("timeout", f"No response within {self.timeout} seconds"))
        except ApiError as e:
            self._roll_back(mutation, MutationFailure(e.kind, e.message))
        except Exception as e:
            self._roll_back(mutation, MutationFailure("unexpected", str(e)))
            raise
        else:
            self._apply(mutation.id, lambda: confirm(copy.deepcopy(result)))
            mutation.result = result
            mutation.state = MutationState.CONFIRMED
            self.pending.pop(mutation.id, None)
            self._settle()
            logger.info("Optimistic mutation confirmed", extra={
                "mutation_id": mutation.id,
                "action": action,
                "target_id": target_id
            })
            for listener in self._confirm_listeners:
                listener(mutation)

        return mutation

    def _roll_back(self, mutation: Mutation, failure: MutationFailure) -> None:
        """Undo only this mutation's local change, keeping everything else that happened since."""
        self._journal = [(owner, step) for owner, step in self._journal if owner != mutation.id]
        self.cache.restore(self._baseline)
        for _, step in self._journal:
            step()

        mutation.error = failure
        mutation.state = MutationState.ROLLED_BACK
        self.pending.pop(mutation.id, None)
        self._settle()
        logger.warning("Optimistic mutation rolled back", extra={
            "mutation_id": mutation.id,
            "action": mutation.action,
            "target_id": mutation.target_id,
            "kind": failure.kind,
            "error": failure.message
        })
        for listener in self._rollback_listeners:
            listener(mutation)
