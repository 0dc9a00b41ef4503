# launchboard/api/v1/endpoints/board.py
"""Kanban board view and drag-and-drop moves"""
from fastapi import APIRouter, Depends, HTTPException, Query, status
from typing import Dict, List, Optional
from loguru import logger

from launchboard.auth.dependencies import require_admin
from launchboard.api.v1.schemas.tasks import (
    BoardColumn, BoardResponse, MoveResponse, TaskMoveRequest, TaskResponse
)
from launchboard.api.v1.schemas.users import SessionUser
from launchboard.board.controller import DragController
from launchboard.board.store import BoardFilters, TaskStore, apply_filters, group_by_status
from launchboard.core.config import settings
from launchboard.db import crud
from launchboard.db.gateway import DataGateway, GatewayError, get_gateway
from launchboard.db.models.enums import TaskStatus, TaskPriority
from launchboard.exceptions.board import TaskNotFoundError, GatewayUnavailableError

router = APIRouter()


def _columns(store: TaskStore) -> Dict[TaskStatus, List[TaskResponse]]:
    return {
        column: [TaskResponse.from_task(t) for t in tasks]
        for column, tasks in group_by_status(store.tasks).items()
    }


@router.get("", response_model=BoardResponse)
async def get_board(
    search: Optional[str] = Query(None, description="Case-insensitive title/description match"),
    phase: Optional[str] = Query(None),
    category: Optional[str] = Query(None),
    priority: Optional[TaskPriority] = Query(None),
    gateway: DataGateway = Depends(get_gateway),
    current_user: SessionUser = Depends(require_admin)
):
    """Grouped, filtered board with the phase and category lists"""
    try:
        store = await TaskStore.load(gateway)
        filters = BoardFilters(
            search=search or None,
            phase=phase or None,
            category=category or None,
            priority=priority.value if priority else None
        )
        grouped = group_by_status(apply_filters(store.tasks, filters))

        phases = await crud.taxonomy.list_entries(gateway, crud.taxonomy.PHASES)
        categories = await crud.taxonomy.list_entries(gateway, crud.taxonomy.CATEGORIES)

        return BoardResponse(
            columns=[
                BoardColumn(
                    status=column,
                    label=column.label,
                    tasks=[TaskResponse.from_task(t) for t in tasks]
                )
                for column, tasks in grouped.items()
            ],
            total=len(store),
            filtered=filters.is_active,
            phases=[p["name"] for p in phases],
            categories=[c["name"] for c in categories]
        )

    except HTTPException:
        raise
    except GatewayError as e:
        logger.error(f"Failed to load board: {e}")
        raise GatewayUnavailableError()
    except Exception as e:
        logger.error(f"Failed to load board: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to load board"
        )


@router.post("/move", response_model=MoveResponse)
async def move_task(
    move: TaskMoveRequest,
    gateway: DataGateway = Depends(get_gateway),
    current_user: SessionUser = Depends(require_admin)
):
    """Run one drag gesture and persist the resulting placements"""
    try:
        store = await TaskStore.load(gateway)
        controller = DragController(
            store,
            gateway,
            actor_id=current_user.id,
            rollback_on_failure=settings.BOARD_ROLLBACK_ON_FAILURE
        )

        if not controller.start(move.active_id):
            raise TaskNotFoundError(move.active_id)

        for hover_id in move.hover_ids:
            controller.over(hover_id)

        result = await controller.end(move.over_id)

        return MoveResponse(
            task_id=result.task_id,
            cancelled=result.cancelled,
            status_changed=result.status_changed,
            old_status=result.old_status,
            new_status=result.new_status,
            changed_ids=result.changed_ids,
            failed_ids=result.failed_ids,
            activity_logged=result.activity_logged,
            rolled_back=result.rolled_back,
            columns=_columns(store)
        )

    except HTTPException:
        raise
    except GatewayError as e:
        logger.error(f"Failed to move task {move.active_id}: {e}")
        raise GatewayUnavailableError()
    except Exception as e:
        logger.error(f"Failed to move task {move.active_id}: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to move task"
        )
