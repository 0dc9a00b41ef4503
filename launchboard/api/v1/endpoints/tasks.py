# launchboard/api/v1/endpoints/tasks.py
"""Task edit modal operations: CRUD, comments and activity"""
from fastapi import APIRouter, Depends, HTTPException, Path, Query, status
from typing import List, Optional
from loguru import logger

from launchboard.auth.dependencies import require_admin
from launchboard.api.v1.schemas.tasks import (
    TaskCreate, TaskUpdate, TaskResponse, CommentCreate, CommentResponse, ActivityResponse
)
from launchboard.api.v1.schemas.users import SessionUser
from launchboard.board.entities import BoardTask
from launchboard.db import crud
from launchboard.db.gateway import DataGateway, GatewayError, Row, get_gateway
from launchboard.exceptions.board import TaskNotFoundError, GatewayUnavailableError

router = APIRouter()


async def _existing_task(gateway: DataGateway, task_id: str) -> Row:
    task = await crud.task.get_task(gateway, task_id)
    if not task:
        raise TaskNotFoundError(task_id)
    return task


def _response(row: Row) -> TaskResponse:
    return TaskResponse.from_task(BoardTask.model_validate(row))


@router.post("", response_model=TaskResponse, status_code=status.HTTP_201_CREATED)
async def create_task(
    task_data: TaskCreate,
    gateway: DataGateway = Depends(get_gateway),
    current_user: SessionUser = Depends(require_admin)
):
    """Create a task at the bottom of its column"""
    try:
        task = await crud.task.create_task(gateway, task_data, current_user.id)
        return _response(task)

    except HTTPException:
        raise
    except GatewayError as e:
        logger.error(f"Failed to create task: {e}")
        raise GatewayUnavailableError()
    except Exception as e:
        logger.error(f"Failed to create task: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to create task"
        )


@router.get("/{task_id}", response_model=TaskResponse)
async def get_task(
    task_id: str = Path(..., description="Task id"),
    gateway: DataGateway = Depends(get_gateway),
    current_user: SessionUser = Depends(require_admin)
):
    try:
        return _response(await _existing_task(gateway, task_id))
    except HTTPException:
        raise
    except GatewayError as e:
        logger.error(f"Failed to get task {task_id}: {e}")
        raise GatewayUnavailableError()


@router.put("/{task_id}", response_model=TaskResponse)
async def update_task(
    updates: TaskUpdate,
    task_id: str = Path(..., description="Task id"),
    gateway: DataGateway = Depends(get_gateway),
    current_user: SessionUser = Depends(require_admin)
):
    """Edit task fields; a status change is recorded in the activity log"""
    try:
        task = await _existing_task(gateway, task_id)
        updated = await crud.task.update_task(gateway, task, updates, current_user.id)
        return _response(updated)

    except HTTPException:
        raise
    except GatewayError as e:
        logger.error(f"Failed to update task {task_id}: {e}")
        raise GatewayUnavailableError()
    except Exception as e:
        logger.error(f"Failed to update task {task_id}: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to update task"
        )


@router.delete("/{task_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_task(
    task_id: str = Path(..., description="Task id"),
    gateway: DataGateway = Depends(get_gateway),
    current_user: SessionUser = Depends(require_admin)
):
    try:
        await _existing_task(gateway, task_id)
        await crud.task.delete_task(gateway, task_id)
        logger.info(f"Task {task_id} deleted by user {current_user.id}")

    except HTTPException:
        raise
    except GatewayError as e:
        logger.error(f"Failed to delete task {task_id}: {e}")
        raise GatewayUnavailableError()


@router.get("/{task_id}/comments", response_model=List[CommentResponse])
async def list_comments(
    task_id: str = Path(..., description="Task id"),
    gateway: DataGateway = Depends(get_gateway),
    current_user: SessionUser = Depends(require_admin)
):
    """Comments, newest first"""
    try:
        await _existing_task(gateway, task_id)
        return await crud.task.get_comments(gateway, task_id)
    except HTTPException:
        raise
    except GatewayError as e:
        logger.error(f"Failed to list comments for task {task_id}: {e}")
        raise GatewayUnavailableError()


@router.post("/{task_id}/comments", response_model=CommentResponse, status_code=status.HTTP_201_CREATED)
async def add_comment(
    comment: CommentCreate,
    task_id: str = Path(..., description="Task id"),
    gateway: DataGateway = Depends(get_gateway),
    current_user: SessionUser = Depends(require_admin)
):
    try:
        await _existing_task(gateway, task_id)
        return await crud.task.add_comment(gateway, task_id, current_user.id, comment.content)
    except HTTPException:
        raise
    except GatewayError as e:
        logger.error(f"Failed to add comment to task {task_id}: {e}")
        raise GatewayUnavailableError()


@router.get("/{task_id}/activity", response_model=List[ActivityResponse])
async def list_activity(
    task_id: str = Path(..., description="Task id"),
    limit: Optional[int] = Query(None, ge=1, le=200),
    gateway: DataGateway = Depends(get_gateway),
    current_user: SessionUser = Depends(require_admin)
):
    """Activity log, newest first"""
    try:
        await _existing_task(gateway, task_id)
        return await crud.task.get_activity(gateway, task_id, limit=limit)
    except HTTPException:
        raise
    except GatewayError as e:
        logger.error(f"Failed to list activity for task {task_id}: {e}")
        raise GatewayUnavailableError()
