"""
Task model
"""

from enum import Enum
from typing import Optional, List
from pydantic import BaseModel, Field, ConfigDict, field_validator, model_validator
from taskboard.utils.date_utils import parse_date_key


def require_date_key(value: str) -> str:
    """
    Check that value is a real calendar day in YYYY-MM-DD form

    Raises:
        ValueError: On blank, malformed or impossible dates (e.g. 2024-02-30)
    """
    value = value.strip()
    if parse_date_key(value) is None:
        raise ValueError(f"date must be a calendar day in YYYY-MM-DD form, got '{value}'")
    return value


class TaskStatus(str, Enum):
    """Task status values as stored by the task server"""
    NOT_STARTED = "Not Started"
    IN_PROGRESS = "In Progress"
    COMPLETED = "Completed"


class Subtask(BaseModel):
    """Checklist item inside a task"""

    id: str
    title: str
    completed: bool = False


class Task(BaseModel):
    """Task model"""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    title: str
    description: str = ""
    date: str  # YYYY-MM-DD
    start_time: str = Field("", alias="startTime")  # HH:MM
    end_time: str = Field("", alias="endTime")  # HH:MM, earlier than start means next day
    status: TaskStatus = TaskStatus.NOT_STARTED
    subtasks: List[Subtask] = []
    archived: bool = False
    created_at: int = Field(0, alias="createdAt")  # epoch ms
    updated_at: int = Field(0, alias="updatedAt")  # epoch ms

    @field_validator("date")
    @classmethod
    def date_not_empty(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("date must not be empty")
        return value

    @model_validator(mode="after")
    def updated_not_before_created(self) -> "Task":
        if self.updated_at < self.created_at:
            self.updated_at = self.created_at
        return self


class TaskCreate(BaseModel):
    """Task creation model, the store assigns id and timestamps when missing"""

    model_config = ConfigDict(populate_by_name=True)

    id: Optional[str] = None
    title: str
    description: str = ""
    date: str
    start_time: Optional[str] = Field(None, alias="startTime")
    end_time: Optional[str] = Field(None, alias="endTime")
    status: TaskStatus = TaskStatus.NOT_STARTED
    subtasks: List[Subtask] = []
    archived: bool = False

    @field_validator("date")
    @classmethod
    def date_is_calendar_day(cls, value: str) -> str:
        return require_date_key(value)


class TaskReplace(Task):
    """Full-record replace body; unlike stored records the date must be a real day"""

    @field_validator("date")
    @classmethod
    def date_is_calendar_day(cls, value: str) -> str:
        return require_date_key(value)


class BulkStatusUpdate(BaseModel):
    """Admin bulk status change"""

    model_config = ConfigDict(populate_by_name=True)

    task_ids: List[str] = Field(alias="taskIds")
    status: TaskStatus


class BulkArchiveUpdate(BaseModel):
    """Admin bulk archive / unarchive"""

    model_config = ConfigDict(populate_by_name=True)

    task_ids: List[str] = Field(alias="taskIds")
    archived: bool = True
