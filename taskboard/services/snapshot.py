"""
Task snapshots and the providers the analytics engine reads them from
"""

import hashlib
import json
from abc import ABC, abstractmethod
from typing import Iterable, Iterator, Tuple
from taskboard.models.task import Task
from taskboard.storage.task_repository import TaskRepository


def _fingerprint(tasks: Tuple[Task, ...]) -> str:
    payload = json.dumps(
        [task.model_dump(mode="json", by_alias=True) for task in tasks],
        sort_keys=True,
    )
    return hashlib.sha256(payload.encode("utf-8")).hexdigest()


class TaskSnapshot:
    """
    Read-only copy of the task collection at one point in time

    Two snapshots with the same content compare equal and hash alike, so a
    snapshot can key memoized computations.
    """

    def __init__(self, tasks: Iterable[Task]):
        self._tasks = tuple(task.model_copy(deep=True) for task in tasks)
        self.fingerprint = _fingerprint(self._tasks)

    @property
    def tasks(self) -> Tuple[Task, ...]:
        return self._tasks

    def __len__(self) -> int:
        return len(self._tasks)

    def __iter__(self) -> Iterator[Task]:
        return iter(self._tasks)

    def __hash__(self) -> int:
        return hash(self.fingerprint)

    def __eq__(self, other) -> bool:
        if not isinstance(other, TaskSnapshot):
            return NotImplemented
        return self.fingerprint == other.fingerprint

    def __repr__(self) -> str:
        return f"TaskSnapshot(tasks={len(self._tasks)}, fingerprint={self.fingerprint[:12]})"


class SnapshotProvider(ABC):
    """Synchronous source of task snapshots"""

    @abstractmethod
    def get_snapshot(self) -> TaskSnapshot:
        """Return the current task snapshot"""


class StaticSnapshotProvider(SnapshotProvider):
    """Snapshot held in memory, e.g. after an HTTP fetch or file load"""

    def __init__(self, tasks: Iterable[Task] = ()):
        self._snapshot = TaskSnapshot(tasks)

    def set_tasks(self, tasks: Iterable[Task]):
        """Replace the held snapshot"""
        self._snapshot = TaskSnapshot(tasks)

    def get_snapshot(self) -> TaskSnapshot:
        return self._snapshot


class RepositorySnapshotProvider(SnapshotProvider):
    """Snapshot read from the SQLite repository on every request"""

    def __init__(self, repository: TaskRepository):
        self.repository = repository

    def get_snapshot(self) -> TaskSnapshot:
        return TaskSnapshot(self.repository.list_tasks())
