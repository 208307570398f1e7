"""CLI-side handler wrappers over the goal scheduler."""

from __future__ import annotations

from mc_crafter.models import Goal, SchedulerStatus
from mc_crafter.scheduler import Scheduler


class CliGoalHandler:
    """Simple sync-friendly facade over the async goal scheduler."""

    def __init__(self, scheduler: Scheduler) -> None:
        self._scheduler = scheduler

    def submit_goal(self, action: str, target: str, count: int | None = None, requester: str = "cli") -> str:
        return self._scheduler.submit(action, target, count, requester=requester)

    def get_goal(self, goal_id: str) -> Goal:
        return self._scheduler.get_goal(goal_id)

    def list_recent_goals(self, limit: int = 20) -> list[Goal]:
        return self._scheduler.list_recent_goals(limit=limit)

    def status(self) -> SchedulerStatus:
        return self._scheduler.get_status()

    def stop(self) -> None:
        self._scheduler.stop()
