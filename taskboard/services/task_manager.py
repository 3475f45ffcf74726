"""
Task management service
"""

from typing import Callable, List
from taskboard.api.task_store_client import TaskStoreClient
from taskboard.models.task import Task, TaskCreate, TaskStatus
from taskboard.services import task_modifier
from taskboard.utils.date_utils import calculate_default_end_time, current_time_string
from taskboard.utils.logger import logger


class TaskManager:
    """Service for creating and editing tasks through the task store"""

    def __init__(self, store_client: TaskStoreClient):
        """
        Initialize task manager

        Args:
            store_client: Task store API client
        """
        self.client = store_client
        self.logger = logger

    async def list_tasks(self) -> List[Task]:
        return await self.client.list_tasks()

    async def create_task(self, fields: TaskCreate) -> Task:
        """
        Create a task with default start (now) and end (start + default duration)

        Args:
            fields: Creation fields

        Returns:
            Stored task
        """
        start_time = fields.start_time or current_time_string()
        end_time = fields.end_time or calculate_default_end_time(start_time)
        fields = fields.model_copy(update={"start_time": start_time, "end_time": end_time})

        task = await self.client.create_task(fields)
        self.logger.info(f"[TaskManager] Created '{task.title}' on {task.date} {task.start_time}-{task.end_time}")
        return task

    async def modify(self, task: Task, change: Callable[[Task], Task]) -> Task:
        """
        Apply a modification and persist it

        Args:
            task: Current task
            change: Function returning the modified task

        Returns:
            Stored task, or the original when the change was a no-op
        """
        updated = change(task)
        if updated is task:
            self.logger.debug(f"[TaskManager] No change for task {task.id}")
            return task
        return await self.client.update_task(updated)

    async def set_status(self, task: Task, status: TaskStatus) -> Task:
        return await self.modify(task, lambda t: task_modifier.set_status(t, status))

    async def toggle_archived(self, task: Task) -> Task:
        return await self.modify(task, task_modifier.toggle_archived)

    async def update_fields(self, task: Task, **changes) -> Task:
        return await self.modify(task, lambda t: task_modifier.update_fields(t, **changes))

    async def add_subtask(self, task: Task, title: str) -> Task:
        return await self.modify(task, lambda t: task_modifier.add_subtask(t, title))

    async def remove_subtask(self, task: Task, subtask_id: str) -> Task:
        return await self.modify(task, lambda t: task_modifier.remove_subtask(t, subtask_id))

    async def toggle_subtask(self, task: Task, subtask_id: str) -> Task:
        return await self.modify(task, lambda t: task_modifier.toggle_subtask(t, subtask_id))

    async def reorder_subtask(self, task: Task, active_id: str, over_id: str) -> Task:
        return await self.modify(task, lambda t: task_modifier.reorder_subtask(t, active_id, over_id))

    async def delete_task(self, task_id: str) -> None:
        await self.client.delete_task(task_id)
        self.logger.info(f"[TaskManager] Deleted task {task_id}")

    async def _bulk(self, task_ids: List[str], change: Callable[[Task], Task]) -> List[Task]:
        wanted = set(task_ids)
        tasks = [task for task in await self.client.list_tasks() if task.id in wanted]

        missing = wanted - {task.id for task in tasks}
        if missing:
            self.logger.warning(f"[TaskManager] Bulk edit skipped unknown tasks: {sorted(missing)}")

        updated = []
        for task in tasks:
            updated.append(await self.modify(task, change))
        return updated

    async def bulk_update_status(self, task_ids: List[str], status: TaskStatus) -> List[Task]:
        """
        Set the status of several tasks

        Args:
            task_ids: Ids of tasks to update
            status: New status

        Returns:
            Updated tasks
        """
        updated = await self._bulk(task_ids, lambda t: task_modifier.set_status(t, status))
        self.logger.info(f"[TaskManager] Set status '{status.value}' on {len(updated)} tasks")
        return updated

    async def bulk_set_archived(self, task_ids: List[str], archived: bool = True) -> List[Task]:
        """
        Archive or unarchive several tasks

        Args:
            task_ids: Ids of tasks to update
            archived: Target archived flag

        Returns:
            Updated tasks
        """
        updated = await self._bulk(task_ids, lambda t: task_modifier.set_archived(t, archived))
        self.logger.info(f"[TaskManager] Set archived={archived} on {len(updated)} tasks")
        return updated
