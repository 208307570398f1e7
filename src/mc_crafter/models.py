from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum


@dataclass(frozen=True, slots=True)
class Recipe:
    """One crafting recipe; ``alias_of`` marks an alternate producer of another item."""

    name: str
    output_count: int
    ingredients: dict[str, int]
    needs_station: bool = False
    alias_of: str | None = None

    def __post_init__(self) -> None:
        if self.output_count < 1:
            raise ValueError(f"Recipe {self.name!r} must produce at least one item")
        if not self.ingredients:
            raise ValueError(f"Recipe {self.name!r} has no ingredients")

    @property
    def output_item(self) -> str:
        return self.alias_of or self.name


class StepKind(str, Enum):
    GATHER = "gather"
    CRAFT = "craft"


class StepStatus(str, Enum):
    PENDING = "pending"
    SKIPPED = "skipped"
    DONE = "done"
    FAILED = "failed"


class StepError(str, Enum):
    MISSING_STATION = "missing_station"
    GATHER_FAILED = "gather_failed"
    CRAFT_FAILED = "craft_failed"


class PlanError(str, Enum):
    UNKNOWN_RECIPE = "unknown_recipe"
    DEPTH_EXCEEDED = "depth_exceeded"


@dataclass(slots=True)
class Step:
    kind: StepKind
    item: str
    count: int
    recipe: Recipe | None = None
    required: int = 0
    status: StepStatus = StepStatus.PENDING
    error: str | None = None

    def __post_init__(self) -> None:
        if not self.required:
            self.required = self.count

    def describe(self) -> str:
        return f"{self.kind.value} {self.item} x{self.count}"


@dataclass(slots=True)
class Plan:
    """Ordered steps for one request; suppliers always precede the craft that consumes them."""

    target: str
    quantity: int
    steps: list[Step] = field(default_factory=list)
    error: PlanError | None = None
    detail: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


class GoalAction(str, Enum):
    MAKE = "make"
    MINE = "mine"
    GATHER = "gather"


class GoalStatus(str, Enum):
    """Lifecycle states for submitted goals."""

    QUEUED = "queued"
    RUNNING = "running"
    COMPLETED = "completed"
    FAILED = "failed"


@dataclass(slots=True)
class Goal:
    id: str
    action: GoalAction
    target: str
    count: int
    requester: str = "system"
    status: GoalStatus = GoalStatus.QUEUED
    submitted_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    started_at: datetime | None = None
    finished_at: datetime | None = None
    result: str | None = None
    error: str | None = None
    plan: Plan | None = None


@dataclass(frozen=True, slots=True)
class StationRef:
    """Where a crafting station was secured."""

    x: int
    y: int
    z: int
    block: str = "crafting_table"


@dataclass(slots=True)
class SchedulerStatus:
    current_goal: Goal | None
    queue_length: int
    is_running: bool
