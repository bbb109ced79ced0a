import copy
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

Record = Dict[str, Any]


@dataclass(frozen=True)
class CacheSnapshot:
    """Deep copy of the cache contents at one point in time."""
    boards: List[Record]
    tasks: List[Record]


@dataclass
class LocalCache:
    """
    Client-side view of boards and tasks.

    Records are plain dicts in the API's wire format. List order is display
    order, so replacements happen in place.
    """
    boards: List[Record] = field(default_factory=list)
    tasks: List[Record] = field(default_factory=list)

    def snapshot(self) -> CacheSnapshot:
        return CacheSnapshot(boards=copy.deepcopy(self.boards), tasks=copy.deepcopy(self.tasks))

    def restore(self, snapshot: CacheSnapshot) -> None:
        self.boards = copy.deepcopy(snapshot.boards)
        self.tasks = copy.deepcopy(snapshot.tasks)

    def load_board(self, board: Record) -> None:
        """Replace the cached board and its tasks with a fetched board detail."""
        board = copy.deepcopy(board)
        tasks = board.pop("tasks", [])
        self.tasks = [task for task in self.tasks if task.get("board_id") != board["id"]] + tasks
        if not self.replace_board(board["id"], board):
            self.boards.append(board)

    def find_board(self, board_id: str) -> Optional[Record]:
        return next((board for board in self.boards if board["id"] == board_id), None)

    def insert_board(self, board: Record, front: bool = False) -> None:
        if front:
            self.boards.insert(0, board)
        else:
            self.boards.append(board)

    def replace_board(self, board_id: str, board: Record) -> bool:
        for index, existing in enumerate(self.boards):
            if existing["id"] == board_id:
                self.boards[index] = board
                return True
        return False

    def remove_board(self, board_id: str) -> None:
        """Drop a board and, like the server cascade, every cached task on it."""
        self.boards = [board for board in self.boards if board["id"] != board_id]
        self.tasks = [task for task in self.tasks if task.get("board_id") != board_id]

    def find_task(self, task_id: str) -> Optional[Record]:
        return next((task for task in self.tasks if task["id"] == task_id), None)

    def tasks_for_board(self, board_id: str) -> List[Record]:
        return [task for task in self.tasks if task.get("board_id") == board_id]

    def insert_task(self, task: Record) -> None:
        self.tasks.append(task)

    def replace_task(self, task_id: str, task: Record) -> bool:
        for index, existing in enumerate(self.tasks):
            if existing["id"] == task_id:
                self.tasks[index] = task
                return True
        return False

    def patch_task(self, task_id: str, patch: Dict[str, Any]) -> bool:
        task = self.find_task(task_id)
        if task is None:
            return False
        task.update(patch)
        return True

    def remove_task(self, task_id: str) -> None:
        self.tasks = [task for task in self.tasks if task["id"] != task_id]
