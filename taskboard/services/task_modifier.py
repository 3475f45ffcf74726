"""
Task modifications

Every function returns a new Task and leaves its argument untouched.
Mutations advance updatedAt; subtask order only changes through reorder_subtask.
"""

import uuid
from typing import Optional, Tuple
from pydantic import ValidationError as PydanticValidationError
from taskboard.models.task import Subtask, Task, TaskCreate, TaskStatus
from taskboard.utils.date_utils import (
    calculate_default_end_time,
    current_time_string,
    current_timestamp_ms,
    duration_between,
    minutes_to_time,
    parse_date_key,
    time_to_minutes,
)
from taskboard.utils.error_handler import ValidationError
from taskboard.utils.logger import logger

EDITABLE_FIELDS = {"title", "description", "date", "start_time", "end_time", "status", "archived"}


def new_task(fields: TaskCreate, now_ms: Optional[int] = None) -> Task:
    """
    Build a new task with defaults filled in

    Args:
        fields: Creation fields
        now_ms: Creation instant in epoch ms, defaults to now

    Returns:
        Task with id, equal createdAt/updatedAt, start time (now when missing)
        and end time (start + default duration when missing)
    """
    timestamp = now_ms if now_ms is not None else current_timestamp_ms()
    start_time = fields.start_time or current_time_string()
    end_time = fields.end_time or calculate_default_end_time(start_time)

    return Task(
        id=fields.id or str(uuid.uuid4()),
        title=fields.title,
        description=fields.description,
        date=fields.date,
        start_time=start_time,
        end_time=end_time,
        status=fields.status,
        subtasks=[subtask.model_copy() for subtask in fields.subtasks],
        archived=fields.archived,
        created_at=timestamp,
        updated_at=timestamp,
    )


def touch(task: Task, now_ms: Optional[int] = None, **changes) -> Task:
    """
    Copy of task with changes applied and updatedAt advanced

    The changed record is validated like one read from the store.

    Raises:
        ValidationError: If a changed field has the wrong type or value
    """
    timestamp = now_ms if now_ms is not None else current_timestamp_ms()
    changes["updated_at"] = max(timestamp, task.updated_at, task.created_at)
    try:
        updated = Task.model_validate({**task.model_dump(), **changes})
    except PydanticValidationError as e:
        fields = ", ".join(str(error["loc"][0]) for error in e.errors() if error["loc"])
        raise ValidationError(f"Invalid value for task {task.id}: {fields}") from e
    # Subtask instances passed in changes must not be shared with the source task
    return updated.model_copy(deep=True)


def set_status(task: Task, status: TaskStatus) -> Task:
    return touch(task, status=status)


def set_archived(task: Task, archived: bool) -> Task:
    return touch(task, archived=archived)


def toggle_archived(task: Task) -> Task:
    return set_archived(task, not task.archived)


def update_fields(task: Task, **changes) -> Task:
    """
    Edit task fields by attribute name

    Raises:
        ValidationError: On unknown or immutable fields, a date that is not a
            calendar day, or a value of the wrong type (e.g. unknown status)
    """
    unknown = set(changes) - EDITABLE_FIELDS
    if unknown:
        raise ValidationError(f"Cannot edit fields: {', '.join(sorted(unknown))}")

    if "date" in changes:
        date_value = changes["date"].strip() if isinstance(changes["date"], str) else None
        if parse_date_key(date_value) is None:
            raise ValidationError(f"Task date must be a calendar day (YYYY-MM-DD), got {changes['date']!r}")
        changes["date"] = date_value

    return touch(task, **changes)


def set_start_time(task: Task, start_time: str) -> Task:
    """Move start time and keep the current duration"""
    duration = duration_between(task.start_time, task.end_time)
    end_time = minutes_to_time(time_to_minutes(start_time) + duration)
    return touch(task, start_time=start_time, end_time=end_time)


def set_end_time(task: Task, end_time: str) -> Task:
    """Set end time; an end before the start means the next day"""
    return touch(task, end_time=end_time)


def set_duration(task: Task, duration_minutes: int) -> Task:
    """Set end time to start + duration"""
    if duration_minutes < 0:
        raise ValidationError("Duration must not be negative")
    end_time = minutes_to_time(time_to_minutes(task.start_time) + duration_minutes)
    return touch(task, end_time=end_time)


def _subtask_index(task: Task, subtask_id: str) -> int:
    for index, subtask in enumerate(task.subtasks):
        if subtask.id == subtask_id:
            return index
    return -1


def add_subtask(task: Task, title: str, subtask_id: Optional[str] = None) -> Task:
    """
    Append a checklist item

    Raises:
        ValidationError: If the title is blank
    """
    title = title.strip()
    if not title:
        raise ValidationError("Subtask title must not be empty")

    subtask = Subtask(id=subtask_id or str(uuid.uuid4()), title=title, completed=False)
    return touch(task, subtasks=list(task.subtasks) + [subtask])


def remove_subtask(task: Task, subtask_id: str) -> Task:
    if _subtask_index(task, subtask_id) < 0:
        logger.warning(f"Subtask {subtask_id} not found in task {task.id}")
        return task
    return touch(task, subtasks=[s for s in task.subtasks if s.id != subtask_id])


def rename_subtask(task: Task, subtask_id: str, title: str) -> Task:
    """Rename a checklist item; a blank title keeps the old one"""
    index = _subtask_index(task, subtask_id)
    if index < 0:
        logger.warning(f"Subtask {subtask_id} not found in task {task.id}")
        return task

    subtasks = [subtask.model_copy() for subtask in task.subtasks]
    subtasks[index] = subtasks[index].model_copy(update={"title": title.strip() or subtasks[index].title})
    return touch(task, subtasks=subtasks)


def toggle_subtask(task: Task, subtask_id: str) -> Task:
    index = _subtask_index(task, subtask_id)
    if index < 0:
        logger.warning(f"Subtask {subtask_id} not found in task {task.id}")
        return task

    subtasks = [subtask.model_copy() for subtask in task.subtasks]
    subtasks[index] = subtasks[index].model_copy(update={"completed": not subtasks[index].completed})
    return touch(task, subtasks=subtasks)


def reorder_subtask(task: Task, active_id: str, over_id: str) -> Task:
    """
    Move the active subtask to the position of the one it was dropped on

    Unknown ids or a drop onto itself leave the task unchanged.
    """
    old_index = _subtask_index(task, active_id)
    new_index = _subtask_index(task, over_id)
    if old_index < 0 or new_index < 0 or old_index == new_index:
        return task

    subtasks = list(task.subtasks)
    moved = subtasks.pop(old_index)
    subtasks.insert(new_index, moved)
    return touch(task, subtasks=subtasks)


def subtask_progress(task: Task) -> Tuple[int, int]:
    """(completed, total) checklist items"""
    done = sum(1 for subtask in task.subtasks if subtask.completed)
    return done, len(task.subtasks)
