# launchboard/board/reducer.py
"""
Pure move computation for the kanban board.

compute_move() takes the full task list, the dragged task and a drop target
(a column id or another task id) and returns a new list where the affected
columns are renumbered 0..n-1. Input tasks are never mutated.
"""
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence, Tuple

from loguru import logger

from launchboard.board.entities import BoardTask
from launchboard.db.models.enums import TaskStatus


@dataclass(frozen=True)
class MoveResult:
    """Outcome of one compute_move call"""
    tasks: List[BoardTask] = field(default_factory=list)
    applied: bool = False
    status_changed: bool = False
    old_status: Optional[TaskStatus] = None
    new_status: Optional[TaskStatus] = None

    @property
    def status_transition(self) -> Optional[Tuple[TaskStatus, TaskStatus]]:
        if not self.status_changed:
            return None
        return self.old_status, self.new_status


def column_tasks(tasks: Sequence[BoardTask], status: TaskStatus) -> List[BoardTask]:
    """Tasks of one column in display order (stable for equal positions)"""
    return sorted((t for t in tasks if t.status == status), key=lambda t: t.position)


def _renumber(column: Sequence[BoardTask], status: TaskStatus, placements: Dict[str, Tuple[TaskStatus, int]]):
    for index, task in enumerate(column):
        placements[task.id] = (status, index)


def compute_move(tasks: Sequence[BoardTask], active_id: str, over_id: str) -> MoveResult:
    """Move active_id onto over_id and return the renumbered task list"""
    by_id = {t.id: t for t in tasks}
    active = by_id.get(active_id)

    if active is None:
        logger.warning(f"Ignoring move of unknown task {active_id}")
        return MoveResult(tasks=list(tasks))

    if over_id == active_id:
        return MoveResult(tasks=list(tasks))

    over_task = None
    target_status = TaskStatus.parse(over_id)
    if target_status is None:
        over_task = by_id.get(over_id)
        if over_task is None:
            logger.warning(f"Ignoring move of task {active_id} onto unknown target {over_id}")
            return MoveResult(tasks=list(tasks))
        target_status = over_task.status

    old_status = active.status

    target_column = [t for t in column_tasks(tasks, target_status) if t.id != active_id]
    if over_task is not None:
        target_index = next(i for i, t in enumerate(target_column) if t.id == over_task.id)
    else:
        target_index = len(target_column)
    target_column.insert(target_index, active)

    placements: Dict[str, Tuple[TaskStatus, int]] = {}
    _renumber(target_column, target_status, placements)

    status_changed = old_status != target_status
    if status_changed:
        source_column = [t for t in column_tasks(tasks, old_status) if t.id != active_id]
        _renumber(source_column, old_status, placements)

    updated: List[BoardTask] = []
    for task in tasks:
        placement = placements.get(task.id)
        if placement is not None and placement != task.placement():
            status, position = placement
            task = task.model_copy(update={"status": status, "position": position})
        updated.append(task)

    return MoveResult(
        tasks=updated,
        applied=True,
        status_changed=status_changed,
        old_status=old_status if status_changed else None,
        new_status=target_status if status_changed else None,
    )
