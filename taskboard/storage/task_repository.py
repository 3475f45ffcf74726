"""
SQLite task repository backing the persistence server
"""

import json
import sqlite3
from pathlib import Path
from typing import List, Optional, Union
from pydantic import ValidationError as PydanticValidationError
from taskboard.models.task import Task
from taskboard.utils.error_handler import TaskNotFoundError
from taskboard.utils.logger import logger

_COLUMNS = (
    "id", "title", "description", "date", "startTime", "endTime",
    "subtasks", "status", "archived", "createdAt", "updatedAt",
)


class TaskRepository:
    """Task table with JSON-encoded subtasks"""

    def __init__(self, db_path: Union[Path, str]):
        """
        Initialize repository and ensure the schema exists

        Args:
            db_path: Path to SQLite database file, or ":memory:"
        """
        self.db_path = str(db_path)
        self.logger = logger
        self._conn: Optional[sqlite3.Connection] = None
        self._init_database()

    def _get_connection(self) -> sqlite3.Connection:
        """Get database connection"""
        if self._conn is None:
            if self.db_path != ":memory:":
                Path(self.db_path).parent.mkdir(parents=True, exist_ok=True)
            self._conn = sqlite3.connect(self.db_path, check_same_thread=False)
            self._conn.row_factory = sqlite3.Row
        return self._conn

    def _init_database(self):
        """Create the tasks table and migrate databases that predate archiving"""
        conn = self._get_connection()
        conn.execute(
            """
            CREATE TABLE IF NOT EXISTS tasks (
                id TEXT PRIMARY KEY,
                title TEXT,
                description TEXT,
                date TEXT,
                startTime TEXT,
                endTime TEXT,
                subtasks TEXT,
                status TEXT,
                archived INTEGER DEFAULT 0,
                createdAt INTEGER,
                updatedAt INTEGER
            )
            """
        )

        columns = [row["name"] for row in conn.execute("PRAGMA table_info(tasks)")]
        if "archived" not in columns:
            conn.execute("ALTER TABLE tasks ADD COLUMN archived INTEGER DEFAULT 0")
            self.logger.info("Added archived column to existing tasks table")

        conn.commit()
        self.logger.debug(f"Task database ready at {self.db_path}")

    def _row_to_task(self, row: sqlite3.Row) -> Optional[Task]:
        """Task from a row, None when the row cannot form a valid task"""
        try:
            subtasks = json.loads(row["subtasks"] or "[]")
        except json.JSONDecodeError as e:
            self.logger.warning(f"Invalid subtasks JSON for task {row['id']}: {e}")
            subtasks = []

        try:
            return Task.model_validate({
                "id": row["id"],
                "title": row["title"] or "",
                "description": row["description"] or "",
                "date": row["date"],
                "startTime": row["startTime"] or "",
                "endTime": row["endTime"] or "",
                "subtasks": subtasks,
                "status": row["status"],
                "archived": bool(row["archived"]),
                "createdAt": row["createdAt"] or 0,
                "updatedAt": row["updatedAt"] or 0,
            })
        except PydanticValidationError as e:
            self.logger.warning(f"Skipping unreadable task row {row['id']}: {e.error_count()} invalid field(s)")
            return None

    def _task_values(self, task: Task) -> tuple:
        return (
            task.id,
            task.title,
            task.description,
            task.date,
            task.start_time,
            task.end_time,
            json.dumps([subtask.model_dump() for subtask in task.subtasks]),
            task.status.value,
            1 if task.archived else 0,
            task.created_at,
            task.updated_at,
        )

    def list_tasks(self) -> List[Task]:
        """All stored tasks in insertion order"""
        rows = self._get_connection().execute("SELECT * FROM tasks ORDER BY rowid").fetchall()
        tasks = (self._row_to_task(row) for row in rows)
        return [task for task in tasks if task is not None]

    def get_task(self, task_id: str) -> Optional[Task]:
        """Task by id, None when missing or unreadable"""
        row = self._get_connection().execute(
            "SELECT * FROM tasks WHERE id = ?", (task_id,)
        ).fetchone()
        return self._row_to_task(row) if row else None

    def insert_task(self, task: Task) -> Task:
        """Insert a new task record"""
        conn = self._get_connection()
        placeholders = ", ".join("?" for _ in _COLUMNS)
        conn.execute(
            f"INSERT INTO tasks ({', '.join(_COLUMNS)}) VALUES ({placeholders})",
            self._task_values(task),
        )
        conn.commit()
        self.logger.info(f"Stored task {task.id} ({task.title})")
        return task

    def update_task(self, task: Task) -> Task:
        """
        Replace every mutable field of an existing task

        createdAt is never rewritten.

        Raises:
            TaskNotFoundError: If no task has this id
        """
        conn = self._get_connection()
        values = self._task_values(task)
        cursor = conn.execute(
            """
            UPDATE tasks SET title = ?, description = ?, date = ?, startTime = ?, endTime = ?,
                subtasks = ?, status = ?, archived = ?, updatedAt = ?
            WHERE id = ?
            """,
            values[1:9] + (task.updated_at, task.id),
        )
        conn.commit()

        if cursor.rowcount == 0:
            raise TaskNotFoundError(task.id)

        self.logger.info(f"Updated task {task.id}")
        return self.get_task(task.id)

    def delete_task(self, task_id: str) -> bool:
        """Delete task, returns False when nothing was deleted"""
        conn = self._get_connection()
        cursor = conn.execute("DELETE FROM tasks WHERE id = ?", (task_id,))
        conn.commit()

        if cursor.rowcount == 0:
            self.logger.warning(f"Delete requested for unknown task {task_id}")
            return False

        self.logger.info(f"Deleted task {task_id}")
        return True

    def close(self):
        """Close database connection"""
        if self._conn is not None:
            self._conn.close()
            self._conn = None
