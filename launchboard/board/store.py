# launchboard/board/store.py
"""Task entity store and the filtered, grouped board view"""
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

from loguru import logger
from pydantic import ValidationError

from launchboard.board.entities import BoardTask
from launchboard.db.gateway import DataGateway
from launchboard.db.models.enums import TaskStatus, COLUMN_ORDER

TASKS_TABLE = "tasks"

Snapshot = Tuple[BoardTask, ...]


@dataclass(frozen=True)
class QuarantinedRow:
    """A gateway row that failed validation and is kept off the board"""
    row_id: Optional[str]
    reason: str
    row: Mapping[str, Any]


class TaskStore:
    """Local, authoritative list of the board's tasks for one session"""

    def __init__(self, tasks: Iterable[BoardTask] = ()):
        self._tasks: List[BoardTask] = list(tasks)
        self.quarantined: List[QuarantinedRow] = []

    @classmethod
    async def load(cls, gateway: DataGateway) -> "TaskStore":
        store = cls()
        await store.refresh(gateway)
        return store

    async def refresh(self, gateway: DataGateway) -> None:
        """Refetch every task from the gateway, in position order"""
        rows = await gateway.select(TASKS_TABLE, order=["position", "created_at"])
        self.ingest(rows)

    def ingest(self, rows: Iterable[Mapping[str, Any]]) -> None:
        """Replace the store contents with validated rows; quarantine the rest"""
        accepted: List[BoardTask] = []
        quarantined: List[QuarantinedRow] = []

        for row in rows:
            try:
                accepted.append(BoardTask.model_validate(dict(row)))
            except ValidationError as e:
                fields = ", ".join(".".join(str(p) for p in err["loc"]) for err in e.errors())
                quarantined.append(QuarantinedRow(row_id=row.get("id"), reason=f"invalid {fields}", row=row))

        for entry in quarantined:
            logger.warning(f"Quarantined task row {entry.row_id}: {entry.reason}")

        self._tasks = accepted
        self.quarantined = quarantined

    @property
    def tasks(self) -> List[BoardTask]:
        return list(self._tasks)

    def __len__(self) -> int:
        return len(self._tasks)

    def get(self, task_id: str) -> Optional[BoardTask]:
        return next((t for t in self._tasks if t.id == task_id), None)

    def replace(self, tasks: Iterable[BoardTask]) -> None:
        self._tasks = list(tasks)

    def snapshot(self) -> Snapshot:
        # Tasks are only ever replaced via model_copy, so a shallow copy is enough
        return tuple(self._tasks)

    def restore(self, snapshot: Snapshot) -> None:
        self._tasks = list(snapshot)

    def upsert(self, task: BoardTask) -> None:
        for index, existing in enumerate(self._tasks):
            if existing.id == task.id:
                self._tasks[index] = task
                return
        self._tasks.append(task)

    def remove(self, task_id: str) -> Optional[BoardTask]:
        task = self.get(task_id)
        if task is not None:
            self._tasks = [t for t in self._tasks if t.id != task_id]
        return task

    def next_position(self, status: TaskStatus) -> int:
        """Position for a task appended to the bottom of a column"""
        positions = [t.position for t in self._tasks if t.status == status]
        return max(positions) + 1 if positions else 0


@dataclass(frozen=True)
class BoardFilters:
    """Active toolbar filters; empty values match everything"""
    search: Optional[str] = None
    phase: Optional[str] = None
    category: Optional[str] = None
    priority: Optional[str] = None

    @property
    def is_active(self) -> bool:
        return any((self.search, self.phase, self.category, self.priority))


def _matches_search(task: BoardTask, needle: str) -> bool:
    needle = needle.lower()
    if needle in task.title.lower():
        return True
    return bool(task.description) and needle in task.description.lower()


def apply_filters(tasks: Sequence[BoardTask], filters: BoardFilters) -> List[BoardTask]:
    """Tasks passing every active filter, in input order"""
    result = []
    for task in tasks:
        if filters.search and not _matches_search(task, filters.search):
            continue
        if filters.phase and task.phase != filters.phase:
            continue
        if filters.category and task.category != filters.category:
            continue
        if filters.priority and task.priority != filters.priority:
            continue
        result.append(task)
    return result


def group_by_status(tasks: Sequence[BoardTask]) -> Dict[TaskStatus, List[BoardTask]]:
    """Partition into the five columns, each ordered by position"""
    grouped: Dict[TaskStatus, List[BoardTask]] = {status: [] for status in COLUMN_ORDER}

    for task in tasks:
        status = TaskStatus.parse(task.status)
        if status is None:
            logger.warning(f"Dropping task {task.id} with unknown status {task.status!r} from board view")
            continue
        grouped[status].append(task)

    for column in grouped.values():
        column.sort(key=lambda t: t.position)
    return grouped
