"""
Pytest configuration and fixtures
"""

import pytest
from datetime import datetime, timezone
from unittest.mock import AsyncMock, MagicMock
from taskboard.api.task_store_client import TaskStoreClient
from taskboard.models.task import Task, TaskStatus
from taskboard.services.analytics_service import AnalyticsService
from taskboard.storage.task_repository import TaskRepository


def to_ms(year, month, day, hour=12):
    """Epoch milliseconds of a UTC instant"""
    return int(datetime(year, month, day, hour, tzinfo=timezone.utc).timestamp() * 1000)


@pytest.fixture
def timestamp_ms():
    """Factory for epoch-millisecond timestamps"""
    return to_ms


@pytest.fixture
def make_task():
    """Factory for tasks with sensible defaults"""
    def factory(
        task_id="t1",
        date="2024-06-10",
        status=TaskStatus.NOT_STARTED,
        created_at=None,
        **fields,
    ):
        created = created_at if created_at is not None else to_ms(2024, 6, 1)
        fields.setdefault("title", f"Task {task_id}")
        fields.setdefault("start_time", "09:00")
        fields.setdefault("end_time", "11:00")
        return Task(
            id=task_id,
            date=date,
            status=status,
            created_at=created,
            updated_at=created,
            **fields,
        )
    return factory


@pytest.fixture
def today():
    """Wednesday; its Sunday-start week is 2024-06-09 .. 2024-06-15"""
    return datetime(2024, 6, 12, 9, 30)


@pytest.fixture(autouse=True)
def clear_analytics_cache():
    """Memoized aggregates must not leak between tests"""
    AnalyticsService.clear_cache()
    yield
    AnalyticsService.clear_cache()


@pytest.fixture
def repository(tmp_path):
    """Task repository with temporary database"""
    repo = TaskRepository(tmp_path / "tasks.db")
    yield repo
    repo.close()


@pytest.fixture
def mock_store_client(make_task):
    """Mock task store client"""
    client = MagicMock(spec=TaskStoreClient)
    stored = make_task("stored_1", title="Stored Task")
    client.list_tasks = AsyncMock(return_value=[stored])
    client.create_task = AsyncMock(return_value=stored)
    client.update_task = AsyncMock(side_effect=lambda task: task)
    client.delete_task = AsyncMock(return_value=None)
    return client
