# launchboard/db/crud/task.py
"""Task, comment and activity persistence through the data gateway"""
import enum
from typing import Optional, List, Dict, Any
from loguru import logger

from launchboard.db.gateway import DataGateway, Row
from launchboard.db.models.enums import TaskStatus, ActivityAction
from launchboard.api.v1.schemas.tasks import TaskCreate, TaskUpdate
from launchboard.core.config import settings

TASKS = "tasks"
COMMENTS = "task_comments"
ACTIVITY = "task_activity"


def _column_values(data: Dict[str, Any]) -> Dict[str, Any]:
    """Enum members stored as their plain text value"""
    return {k: v.value if isinstance(v, enum.Enum) else v for k, v in data.items()}


async def get_task(gateway: DataGateway, task_id: str) -> Optional[Row]:
    """Get one task row by id"""
    rows = await gateway.select(TASKS, filters={"id": task_id}, limit=1)
    return rows[0] if rows else None


async def next_position(gateway: DataGateway, status: TaskStatus) -> int:
    """Position for a task appended to the bottom of a column"""
    rows = await gateway.select(TASKS, filters={"status": status.value}, order=["-position"], limit=1)
    return rows[0]["position"] + 1 if rows else 0


async def log_activity(
        gateway: DataGateway,
        task_id: str,
        user_id: Optional[str],
        action: ActivityAction,
        field_name: Optional[str] = None,
        old_value: Optional[str] = None,
        new_value: Optional[str] = None
) -> Optional[Row]:
    """Append an activity entry; failures are logged and never fail the caller"""
    try:
        return await gateway.insert(ACTIVITY, {
            "task_id": task_id,
            "user_id": user_id,
            "action": action.value,
            "field_name": field_name,
            "old_value": old_value,
            "new_value": new_value,
        })
    except Exception as e:
        logger.error(f"Failed to log {action.value} activity for task {task_id}: {e}")
        return None


async def create_task(gateway: DataGateway, task_data: TaskCreate, creator_id: Optional[str]) -> Row:
    """Create a task at the bottom of its column"""
    values = _column_values(task_data.model_dump())
    values["position"] = await next_position(gateway, task_data.status)
    values["created_by"] = creator_id

    task = await gateway.insert(TASKS, values)
    await log_activity(gateway, task["id"], creator_id, ActivityAction.CREATED, new_value=task["title"])

    logger.info(f"Task created: {task['title']} in {task_data.status.value} by user {creator_id}")
    return task


async def update_task(gateway: DataGateway, task: Row, updates: TaskUpdate, editor_id: Optional[str]) -> Row:
    """Apply a partial edit; a status change moves the task to the bottom of its new column"""
    update_data = _column_values(updates.model_dump(exclude_unset=True))
    if not update_data:
        return task

    old_status = TaskStatus.parse(task.get("status"))
    new_status = updates.status if "status" in update_data else old_status
    status_changed = new_status is not None and new_status != old_status

    if status_changed:
        update_data["position"] = await next_position(gateway, new_status)

    await gateway.update(TASKS, task["id"], update_data)

    if status_changed:
        await log_activity(
            gateway, task["id"], editor_id, ActivityAction.STATUS_CHANGE,
            field_name="status",
            old_value=old_status.label if old_status else task.get("status"),
            new_value=new_status.label
        )
    else:
        await log_activity(gateway, task["id"], editor_id, ActivityAction.UPDATED,
                           field_name=", ".join(sorted(update_data)))

    logger.info(f"Task {task['id']} updated by user {editor_id}: {sorted(update_data)}")
    return {**task, **update_data}


async def delete_task(gateway: DataGateway, task_id: str) -> None:
    """Delete a task together with its comments and activity"""
    for table in (COMMENTS, ACTIVITY):
        for row in await gateway.select(table, filters={"task_id": task_id}):
            await gateway.delete(table, row["id"])
    await gateway.delete(TASKS, task_id)
    logger.info(f"Task deleted: {task_id}")


async def get_comments(gateway: DataGateway, task_id: str) -> List[Row]:
    """Comments for a task, newest first"""
    return await gateway.select(COMMENTS, filters={"task_id": task_id}, order=["-created_at"])


async def add_comment(gateway: DataGateway, task_id: str, user_id: Optional[str], content: str) -> Row:
    """Store a comment and record a preview of it in the activity log"""
    comment = await gateway.insert(COMMENTS, {"task_id": task_id, "user_id": user_id, "content": content})
    await log_activity(
        gateway, task_id, user_id, ActivityAction.ADDED_COMMENT,
        new_value=content[:settings.COMMENT_PREVIEW_LENGTH]
    )
    return comment


async def get_activity(gateway: DataGateway, task_id: str, limit: Optional[int] = None) -> List[Row]:
    """Activity for a task, newest first"""
    return await gateway.select(
        ACTIVITY,
        filters={"task_id": task_id},
        order=["-created_at"],
        limit=limit or settings.ACTIVITY_LOG_LIMIT
    )
