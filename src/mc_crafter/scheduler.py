"""Single-flight goal queue that plans and executes gather/craft goals in order."""

from __future__ import annotations

import asyncio
import json
import logging
from collections import deque
from datetime import datetime, timezone
from pathlib import Path
from typing import Protocol
from uuid import uuid4

from mc_crafter.capabilities import CancellationToken, InventoryView, Notifier
from mc_crafter.execution import StepExecutor
from mc_crafter.models import (
    Goal,
    GoalAction,
    GoalStatus,
    Plan,
    SchedulerStatus,
    Step,
    StepKind,
    StepStatus,
)
from mc_crafter.planning import PlanResolver

DEFAULT_GATHER_COUNT = 64


class GoalHistoryStore(Protocol):
    """Persistence contract for finished goals."""

    def append(self, goal: Goal) -> None:
        """Persist a finished goal record."""

    def list_recent(self, limit: int) -> list[Goal]:
        """Return up to ``limit`` newest goals."""


class InMemoryHistoryStore:
    """Bounded in-memory history store."""

    def __init__(self, max_goals: int = 1_000) -> None:
        self._goals: deque[Goal] = deque(maxlen=max_goals)

    def append(self, goal: Goal) -> None:
        self._goals.appendleft(goal)

    def list_recent(self, limit: int) -> list[Goal]:
        return list(self._goals)[:limit]


class JsonlHistoryStore:
    """JSONL-backed goal history; plans are kept as step summaries only."""

    def __init__(self, file_path: str | Path) -> None:
        self._path = Path(file_path)
        self._path.parent.mkdir(parents=True, exist_ok=True)

    def append(self, goal: Goal) -> None:
        payload = {
            "id": goal.id,
            "action": goal.action.value,
            "target": goal.target,
            "count": goal.count,
            "requester": goal.requester,
            "status": goal.status.value,
            "submitted_at": goal.submitted_at.isoformat(),
            "started_at": goal.started_at.isoformat() if goal.started_at else None,
            "finished_at": goal.finished_at.isoformat() if goal.finished_at else None,
            "result": goal.result,
            "error": goal.error,
            "steps": [
                {"step": step.describe(), "status": step.status.value} for step in (goal.plan.steps if goal.plan else [])
            ],
        }
        with self._path.open("a", encoding="utf-8") as handle:
            handle.write(json.dumps(payload) + "\n")

    def list_recent(self, limit: int) -> list[Goal]:
        if not self._path.exists():
            return []

        goals: list[Goal] = []
        with self._path.open("r", encoding="utf-8") as handle:
            for line in handle:
                if not line.strip():
                    continue
                payload = json.loads(line)
                goals.append(
                    Goal(
                        id=payload["id"],
                        action=GoalAction(payload["action"]),
                        target=payload["target"],
                        count=payload["count"],
                        requester=payload.get("requester", "system"),
                        status=GoalStatus(payload["status"]),
                        submitted_at=datetime.fromisoformat(payload["submitted_at"]),
                        started_at=_parse_time(payload.get("started_at")),
                        finished_at=_parse_time(payload.get("finished_at")),
                        result=payload.get("result"),
                        error=payload.get("error"),
                    )
                )

        goals.reverse()
        return goals[:limit]


def _parse_time(value: str | None) -> datetime | None:
    return datetime.fromisoformat(value) if value else None


class Scheduler:
    """Queue-backed async runtime that runs one goal at a time.

    Failures never escape the worker: a failed step aborts the rest of its plan,
    marks the goal failed and the next queued goal starts normally.
    """

    def __init__(
        self,
        resolver: PlanResolver,
        executor: StepExecutor,
        inventory: InventoryView,
        *,
        notifier: Notifier | None = None,
        history_store: GoalHistoryStore | None = None,
        step_timeout_seconds: float | None = None,
        step_delay_seconds: float = 0.0,
        goal_delay_seconds: float = 0.0,
        max_queue_size: int = 1_000,
        logger: logging.Logger | None = None,
    ) -> None:
        self._resolver = resolver
        self._executor = executor
        self._inventory = inventory
        self._graph = resolver.graph
        self._notifier = notifier
        self._history_store = history_store or InMemoryHistoryStore(max_goals=max_queue_size)
        self._step_timeout_seconds = step_timeout_seconds
        self._step_delay_seconds = step_delay_seconds
        self._goal_delay_seconds = goal_delay_seconds
        self._logger = logger or logging.getLogger("mc_crafter.scheduler")

        self._goals: dict[str, Goal] = {}
        self._queue: asyncio.Queue[str] = asyncio.Queue(maxsize=max_queue_size)
        self._worker_task: asyncio.Task[None] | None = None
        self._current: Goal | None = None
        self._cancel = CancellationToken()

    async def start(self) -> None:
        """Start the worker loop once for this scheduler."""
        if self._worker_task and not self._worker_task.done():
            return

        self._worker_task = asyncio.create_task(self._worker_loop(), name="goal-scheduler-worker")
        self._logger.info("scheduler_started", extra={"queue_maxsize": self._queue.maxsize})

    async def close(self) -> None:
        """Cancel the worker task and wait for it to exit."""
        if not self._worker_task:
            return

        self._worker_task.cancel()
        try:
            await self._worker_task
        except asyncio.CancelledError:
            pass
        finally:
            self._worker_task = None

        self._logger.info("scheduler_closed")

    def submit(self, action: str, target: str, count: int | None = None, requester: str = "system") -> str:
        """Build a goal from raw command fields and enqueue it."""
        goal_action = GoalAction(action)
        if count is None:
            count = DEFAULT_GATHER_COUNT if goal_action is GoalAction.GATHER else 1
        goal = Goal(
            id=uuid4().hex,
            action=goal_action,
            target=self._graph.normalize(target),
            count=count,
            requester=requester,
        )
        return self.enqueue(goal)

    def enqueue(self, goal: Goal) -> str:
        """Append a goal to the FIFO and wake the worker if a loop is running."""
        if goal.count < 1:
            raise ValueError(f"Goal count must be positive, got {goal.count}")
        goal.status = GoalStatus.QUEUED
        self._goals[goal.id] = goal
        self._queue.put_nowait(goal.id)
        self._logger.info(
            "goal_enqueued",
            extra={
                "goal_id": goal.id,
                "action": goal.action.value,
                "target": goal.target,
                "count": goal.count,
                "queue_size": self._queue.qsize(),
            },
        )
        self._ensure_worker()
        return goal.id

    def stop(self) -> None:
        """Drop queued goals and ask the running goal to stop at its next step boundary."""
        dropped = 0
        while True:
            try:
                goal_id = self._queue.get_nowait()
            except asyncio.QueueEmpty:
                break
            goal = self._goals[goal_id]
            self._finish(goal, GoalStatus.FAILED, error="Cancelled before start")
            self._queue.task_done()
            dropped += 1

        self._cancel.request_cancel()
        self._cancel = CancellationToken()
        self._logger.info(
            "scheduler_stop_requested",
            extra={"dropped_goals": dropped, "current_goal": self._current.id if self._current else None},
        )

    clear = stop

    def get_status(self) -> SchedulerStatus:
        return SchedulerStatus(
            current_goal=self._current,
            queue_length=self._queue.qsize(),
            is_running=self._current is not None,
        )

    def get_goal(self, goal_id: str) -> Goal:
        """Return goal state for the given id."""
        if goal_id not in self._goals:
            raise KeyError(f"Unknown goal id: {goal_id}")
        return self._goals[goal_id]

    def list_recent_goals(self, limit: int = 20) -> list[Goal]:
        """Return most recent in-memory goals and persisted history entries."""
        in_memory = sorted(self._goals.values(), key=lambda goal: goal.submitted_at, reverse=True)
        if len(in_memory) >= limit:
            return in_memory[:limit]

        persisted = self._history_store.list_recent(limit)
        merged: list[Goal] = []
        seen: set[str] = set()
        for goal in [*in_memory, *persisted]:
            if goal.id in seen:
                continue
            seen.add(goal.id)
            merged.append(goal)
            if len(merged) >= limit:
                break
        return merged

    async def wait_idle(self) -> None:
        """Wait until every queued goal has finished."""
        await self._queue.join()

    def _ensure_worker(self) -> None:
        if self._worker_task and not self._worker_task.done():
            return
        try:
            asyncio.get_running_loop()
        except RuntimeError:
            return
        self._worker_task = asyncio.create_task(self._worker_loop(), name="goal-scheduler-worker")

    async def _worker_loop(self) -> None:
        while True:
            goal_id = await self._queue.get()
            try:
                await self._execute_goal(self._goals[goal_id])
            finally:
                self._queue.task_done()
            if self._goal_delay_seconds:
                await asyncio.sleep(self._goal_delay_seconds)

    async def _execute_goal(self, goal: Goal) -> None:
        goal.status = GoalStatus.RUNNING
        goal.started_at = datetime.now(timezone.utc)
        self._current = goal
        cancel = self._cancel
        self._logger.info("goal_started", extra={"goal_id": goal.id, "target": goal.target, "count": goal.count})

        try:
            await self._run_goal(goal, cancel)
        except asyncio.CancelledError:
            self._finish(goal, GoalStatus.FAILED, error="Closed")
            raise
        except Exception as exc:  # noqa: BLE001 - no failure may escape the scheduler.
            self._logger.exception("goal_crashed", extra={"goal_id": goal.id})
            self._finish(goal, GoalStatus.FAILED, error=f"{type(exc).__name__}: {exc}")
        finally:
            self._current = None

    async def _run_goal(self, goal: Goal, cancel: CancellationToken) -> None:
        plan = self._build_plan(goal)
        goal.plan = plan
        if not plan.ok:
            self._finish(goal, GoalStatus.FAILED, error=plan.detail or plan.error.value)
            return

        if not plan.steps:
            have = self._graph.count_held(self._inventory, goal.target)
            self._finish(goal, GoalStatus.COMPLETED, result=f"Already have {goal.target} x{have}")
            return

        self._logger.info(
            "goal_planned",
            extra={"goal_id": goal.id, "steps": [step.describe() for step in plan.steps]},
        )
        for index, step in enumerate(plan.steps, start=1):
            if cancel.cancelled:
                self._finish(goal, GoalStatus.FAILED, error="Cancelled")
                return

            have = self._graph.count_held(self._inventory, step.item)
            if have >= step.required:
                step.status = StepStatus.SKIPPED
                self._logger.info(
                    "step_skipped",
                    extra={"goal_id": goal.id, "index": index, "step": step.describe(), "have": have},
                )
                continue

            if not await self._run_step(step, cancel):
                step.status = StepStatus.FAILED
                self._finish(goal, GoalStatus.FAILED, error=step.error or f"Failed to get {step.item}")
                return
            step.status = StepStatus.DONE

            if self._step_delay_seconds:
                await asyncio.sleep(self._step_delay_seconds)

        if cancel.cancelled:
            self._finish(goal, GoalStatus.FAILED, error="Cancelled")
            return

        if goal.action is not GoalAction.MAKE:
            self._finish(goal, GoalStatus.COMPLETED, result=f"Gathered {goal.target} x{goal.count}")
            return

        have = self._graph.count_held(self._inventory, goal.target)
        if have >= goal.count:
            self._finish(goal, GoalStatus.COMPLETED, result=f"Crafted {goal.target} x{goal.count}")
        else:
            self._finish(
                goal,
                GoalStatus.FAILED,
                error=f"Could not complete crafting {goal.target}: have {have} of {goal.count}",
            )

    async def _run_step(self, step: Step, cancel: CancellationToken) -> bool:
        try:
            return await asyncio.wait_for(self._executor.run(step, cancel), timeout=self._step_timeout_seconds)
        except asyncio.TimeoutError:
            step.error = f"Step {step.describe()} timed out after {self._step_timeout_seconds}s"
            self._logger.warning("step_timeout", extra={"step": step.describe()})
        except Exception as exc:  # noqa: BLE001 - provider errors become step failures.
            step.error = f"{type(exc).__name__}: {exc}"
            self._logger.exception("step_crashed", extra={"step": step.describe()})
        return False

    def _build_plan(self, goal: Goal) -> Plan:
        if goal.action is GoalAction.MAKE:
            return self._resolver.resolve(goal.target, goal.count, self._inventory)

        have = self._graph.count_held(self._inventory, goal.target)
        step = Step(kind=StepKind.GATHER, item=goal.target, count=goal.count, required=have + goal.count)
        return Plan(target=goal.target, quantity=goal.count, steps=[step])

    def _finish(self, goal: Goal, status: GoalStatus, *, result: str | None = None, error: str | None = None) -> None:
        goal.status = status
        goal.result = result
        goal.error = error
        goal.finished_at = datetime.now(timezone.utc)
        self._history_store.append(goal)

        if status is GoalStatus.COMPLETED:
            self._logger.info("goal_completed", extra={"goal_id": goal.id, "result": result})
            self._notify(result or f"Done: {goal.target}")
        else:
            self._logger.warning("goal_failed", extra={"goal_id": goal.id, "error": error})
            self._notify(f"Could not {goal.action.value} {goal.target}: {error}")

    def _notify(self, message: str) -> None:
        if self._notifier is not None:
            self._notifier.notify(message)
