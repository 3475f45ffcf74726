"""
Main application entry point
"""

import argparse
import asyncio
from typing import List, Optional
from taskboard.api.task_store_client import TaskStoreClient
from taskboard.config.settings import settings
from taskboard.models.analytics import RangeRequest, TimeRange
from taskboard.services.analytics_service import AnalyticsService
from taskboard.services.snapshot import StaticSnapshotProvider
from taskboard.services.task_manager import TaskManager
from taskboard.utils.error_handler import TaskboardError, format_error_message
from taskboard.utils.formatters import format_dashboard, format_task_line
from taskboard.utils.logger import logger


class TaskboardApp:
    """Command-line client of the task server"""

    def __init__(self, store_client: Optional[TaskStoreClient] = None):
        """Initialize application"""
        self.store_client = store_client or TaskStoreClient()
        self.task_manager = TaskManager(self.store_client)
        self.snapshot_provider = StaticSnapshotProvider()
        self.analytics_service = AnalyticsService(self.snapshot_provider)
        self.logger = logger

    async def refresh(self):
        """Reload the task snapshot from the store"""
        snapshot = await self.store_client.fetch_snapshot()
        self.snapshot_provider.set_tasks(snapshot.tasks)
        self.logger.info(f"Loaded {len(snapshot)} tasks")

    async def report(self, request: RangeRequest) -> str:
        """
        Build the dashboard report for a range

        Args:
            request: Range request

        Returns:
            Report text, or a user-facing error message
        """
        try:
            await self.refresh()
            return format_dashboard(self.analytics_service.get_dashboard(request))
        except TaskboardError as e:
            return format_error_message(e)

    async def agenda(self, day: str) -> str:
        """Tasks of one day as text lines"""
        try:
            await self.refresh()
        except TaskboardError as e:
            return format_error_message(e)

        tasks = self.analytics_service.get_day_agenda(day)
        if not tasks:
            return f"No tasks on {day}"
        return "\n".join(format_task_line(task) for task in tasks)

    async def stop(self):
        """Release the HTTP client"""
        await self.store_client.close()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="taskboard", description="Task calendar and dashboard")
    commands = parser.add_subparsers(dest="command", required=True)

    report = commands.add_parser("report", help="Print dashboard KPIs and trend")
    report.add_argument("--range", dest="range_", choices=[r.value for r in TimeRange], default=TimeRange.ALL.value)
    report.add_argument("--start", help="Custom range start (YYYY-MM-DD)")
    report.add_argument("--end", help="Custom range end (YYYY-MM-DD)")

    agenda = commands.add_parser("agenda", help="Print the tasks of one day")
    agenda.add_argument("day", help="Day (YYYY-MM-DD)")

    commands.add_parser("serve", help="Run the task server")
    return parser


async def run(args: argparse.Namespace) -> str:
    app = TaskboardApp()
    try:
        if args.command == "report":
            request = RangeRequest(range=TimeRange(args.range_), custom_start=args.start, custom_end=args.end)
            return await app.report(request)
        return await app.agenda(args.day)
    finally:
        await app.stop()


def main(argv: Optional[List[str]] = None):
    """Main entry point"""
    args = build_parser().parse_args(argv)
    settings.validate()

    if args.command == "serve":
        import uvicorn
        uvicorn.run("taskboard.web.main:app", host="0.0.0.0", port=settings.WEB_PORT)
        return

    print(asyncio.run(run(args)))


if __name__ == "__main__":
    main()
