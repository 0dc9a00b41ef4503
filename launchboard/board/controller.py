# launchboard/board/controller.py
"""
Drag gesture state machine.

IDLE -> DRAGGING on start(), optimistic reordering on every over(),
DRAGGING -> COMMITTING -> IDLE on end(), or straight back to IDLE on
cancel(). Only end() talks to the gateway.
"""
import asyncio
import enum
from dataclasses import dataclass, field
from typing import List, Optional

from loguru import logger

from launchboard.board.entities import BoardTask
from launchboard.board.reducer import MoveResult, compute_move
from launchboard.board.store import TASKS_TABLE, Snapshot, TaskStore
from launchboard.db.gateway import DataGateway
from launchboard.db.models.enums import ActivityAction, TaskStatus

ACTIVITY_TABLE = "task_activity"


class DragState(str, enum.Enum):
    IDLE = "idle"
    DRAGGING = "dragging"
    COMMITTING = "committing"


class DragStateError(RuntimeError):
    """Gesture event received in a state that cannot accept it"""


@dataclass
class CommitResult:
    """What a finished gesture did to the board"""
    task_id: str
    cancelled: bool = False
    status_changed: bool = False
    old_status: Optional[TaskStatus] = None
    new_status: Optional[TaskStatus] = None
    changed_ids: List[str] = field(default_factory=list)
    failed_ids: List[str] = field(default_factory=list)
    activity_logged: bool = False
    rolled_back: bool = False

    @property
    def succeeded(self) -> bool:
        return not self.cancelled and not self.failed_ids


class DragController:
    """Runs one drag gesture at a time against a TaskStore"""

    def __init__(
            self,
            store: TaskStore,
            gateway: DataGateway,
            actor_id: Optional[str] = None,
            rollback_on_failure: bool = False
    ):
        self.store = store
        self.gateway = gateway
        self.actor_id = actor_id
        self.rollback_on_failure = rollback_on_failure

        self._state = DragState.IDLE
        self._active: Optional[BoardTask] = None
        self._snapshot: Optional[Snapshot] = None

    @property
    def state(self) -> DragState:
        return self._state

    @property
    def active_task(self) -> Optional[BoardTask]:
        return self._active

    def start(self, active_id: str) -> bool:
        """Capture the dragged task; False when it no longer exists"""
        if self._state is not DragState.IDLE:
            raise DragStateError(f"cannot start a drag while {self._state.value}")

        task = self.store.get(active_id)
        if task is None:
            logger.warning(f"Drag start on unknown task {active_id}")
            return False

        self._active = task
        self._snapshot = self.store.snapshot()
        self._state = DragState.DRAGGING
        logger.debug(f"Drag started for task {active_id} in {task.status.value}")
        return True

    def over(self, over_id: Optional[str]) -> Optional[MoveResult]:
        """Apply a speculative move for the current hover target"""
        if self._state is not DragState.DRAGGING:
            raise DragStateError(f"drag-over received while {self._state.value}")
        if over_id is None:
            return None

        result = compute_move(self.store.tasks, self._active.id, over_id)
        if result.applied:
            self.store.replace(result.tasks)
        return result

    def cancel(self) -> CommitResult:
        """Drop the optimistic state and restore the last committed board"""
        if self._state is not DragState.DRAGGING:
            raise DragStateError(f"cannot cancel while {self._state.value}")

        task_id = self._active.id
        self.store.restore(self._snapshot)
        self._reset()
        logger.debug(f"Drag of task {task_id} cancelled")
        return CommitResult(task_id=task_id, cancelled=True)

    async def end(self, over_id: Optional[str]) -> CommitResult:
        """Finish the gesture: final move, diff, remote writes, activity entry"""
        if self._state is not DragState.DRAGGING:
            raise DragStateError(f"drag-end received while {self._state.value}")

        if over_id is None:
            return self.cancel()

        active_id = self._active.id
        if over_id != active_id:
            result = compute_move(self.store.tasks, active_id, over_id)
            if not result.applied:
                # Drop target vanished; nothing sensible to persist
                return self.cancel()
            self.store.replace(result.tasks)

        self._state = DragState.COMMITTING
        snapshot = self._snapshot
        try:
            return await self._commit(active_id, snapshot)
        finally:
            self._reset()

    async def _commit(self, active_id: str, snapshot: Snapshot) -> CommitResult:
        before = {t.id: t for t in snapshot}
        changed = [
            t for t in self.store.tasks
            if t.id in before and before[t.id].placement() != t.placement()
        ]

        old_status = before[active_id].status
        moved = self.store.get(active_id)
        new_status = moved.status if moved is not None else old_status

        result = CommitResult(
            task_id=active_id,
            status_changed=old_status != new_status,
            old_status=old_status if old_status != new_status else None,
            new_status=new_status if old_status != new_status else None,
            changed_ids=[t.id for t in changed],
        )

        outcomes = await asyncio.gather(
            *(self.gateway.update(TASKS_TABLE, t.id, {"status": t.status.value, "position": t.position})
              for t in changed),
            return_exceptions=True
        )
        for task, outcome in zip(changed, outcomes):
            if isinstance(outcome, Exception):
                logger.error(f"Failed to persist move of task {task.id}: {outcome}")
                result.failed_ids.append(task.id)

        if result.status_changed and active_id in result.failed_ids:
            logger.warning(f"Status change of task {active_id} not persisted; activity entry skipped")
        elif result.status_changed:
            result.activity_logged = await self._log_status_change(active_id, old_status, new_status)

        if result.failed_ids and self.rollback_on_failure:
            self.store.restore(snapshot)
            result.rolled_back = True
            logger.warning(f"Restored board after {len(result.failed_ids)} failed writes for task {active_id}")

        logger.info(
            f"Drag of task {active_id} committed: {len(result.changed_ids)} changed, "
            f"{len(result.failed_ids)} failed"
        )
        return result

    async def _log_status_change(self, task_id: str, old_status: TaskStatus, new_status: TaskStatus) -> bool:
        try:
            await self.gateway.insert(ACTIVITY_TABLE, {
                "task_id": task_id,
                "user_id": self.actor_id,
                "action": ActivityAction.STATUS_CHANGE.value,
                "field_name": "status",
                "old_value": old_status.label,
                "new_value": new_status.label,
            })
            return True
        except Exception as e:
            logger.error(f"Failed to log status change for task {task_id}: {e}")
            return False

    def _reset(self) -> None:
        self._state = DragState.IDLE
        self._active = None
        self._snapshot = None
