"""
Task store API client
"""

from typing import List, Optional
import httpx
from taskboard.api.base_client import BaseAPIClient
from taskboard.config.settings import settings
from taskboard.config.constants import MAX_RETRIES, TASKS_ENDPOINT
from taskboard.models.task import Task, TaskCreate
from taskboard.services.snapshot import TaskSnapshot
from taskboard.utils.error_handler import StoreError, TaskNotFoundError


class TaskStoreClient(BaseAPIClient):
    """Client for the task persistence server"""

    def __init__(
        self,
        base_url: Optional[str] = None,
        max_retries: int = MAX_RETRIES,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize task store client

        Args:
            base_url: API root, defaults to TASK_API_URL
            max_retries: Attempts per request
            transport: Optional httpx transport
        """
        super().__init__(base_url or settings.TASK_API_URL, max_retries=max_retries, transport=transport)

    async def list_tasks(self) -> List[Task]:
        """
        Get all tasks

        Returns:
            Every stored task
        """
        data = await self.get(TASKS_ENDPOINT)
        tasks = [Task.model_validate(item) for item in data or []]
        self.logger.debug(f"Fetched {len(tasks)} tasks from store")
        return tasks

    async def fetch_snapshot(self) -> TaskSnapshot:
        """Fetch all tasks as a read-only snapshot for the analytics engine"""
        return TaskSnapshot(await self.list_tasks())

    async def create_task(self, fields: TaskCreate) -> Task:
        """
        Create a task; the store assigns id and timestamps when missing

        Args:
            fields: Creation fields

        Returns:
            Stored task
        """
        payload = fields.model_dump(mode="json", by_alias=True, exclude_none=True)
        data = await self.post(TASKS_ENDPOINT, json_data=payload)
        task = Task.model_validate(data)
        self.logger.info(f"Created task {task.id} ({task.title})")
        return task

    async def update_task(self, task: Task) -> Task:
        """
        Replace a stored task; the store refreshes updatedAt

        Raises:
            TaskNotFoundError: If the store does not know the task
        """
        payload = task.model_dump(mode="json", by_alias=True)
        try:
            data = await self.put(f"{TASKS_ENDPOINT}/{task.id}", json_data=payload)
        except StoreError as e:
            if e.status_code == 404:
                raise TaskNotFoundError(task.id) from e
            raise

        updated = Task.model_validate(data)
        self.logger.info(f"Updated task {updated.id}")
        return updated

    async def delete_task(self, task_id: str) -> None:
        """Delete a task by id"""
        await self.delete(f"{TASKS_ENDPOINT}/{task_id}")
        self.logger.info(f"Deleted task {task_id}")
