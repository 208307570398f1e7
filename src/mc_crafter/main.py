"""CLI startup entrypoint for MC Crafter."""

from __future__ import annotations

import asyncio
import logging

import typer
from rich import print
from rich.console import Console
from rich.logging import RichHandler

from mc_crafter.cli import CliGoalHandler
from mc_crafter.config import settings
from mc_crafter.execution import StepExecutor
from mc_crafter.models import Goal, GoalStatus, Plan
from mc_crafter.planning import PlanResolver
from mc_crafter.recipes import RecipeGraph
from mc_crafter.scheduler import InMemoryHistoryStore, JsonlHistoryStore, Scheduler
from mc_crafter.simulation import MemoryNotifier, SimulatedWorld

app = typer.Typer(help="MC Crafter planning and execution entrypoint")


@app.callback()
def _configure_logging() -> None:
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def _build_graph() -> RecipeGraph:
    if settings.recipes_path:
        return RecipeGraph.from_json(settings.recipes_path)
    return RecipeGraph.default()


def _parse_have(values: list[str]) -> dict[str, int]:
    held: dict[str, int] = {}
    for value in values:
        item, sep, amount = value.partition("=")
        if not sep or not item.strip() or not amount.strip().isdigit():
            raise typer.BadParameter(f"Expected item=count, got {value!r}", param_hint="--have")
        held[item.strip()] = held.get(item.strip(), 0) + int(amount)
    return held


def _build_scheduler(graph: RecipeGraph, world: SimulatedWorld, notifier: MemoryNotifier) -> Scheduler:
    resolver = PlanResolver(graph, world, station_probe=world, max_depth=settings.max_plan_depth)
    executor = StepExecutor(gatherer=world, crafter=world, notifier=notifier)
    history = JsonlHistoryStore(settings.history_path) if settings.history_path else InMemoryHistoryStore()
    return Scheduler(
        resolver,
        executor,
        world,
        notifier=notifier,
        history_store=history,
        step_timeout_seconds=settings.step_timeout_seconds,
        step_delay_seconds=settings.step_delay_seconds,
        goal_delay_seconds=settings.goal_delay_seconds,
    )


def _format_plan(plan: Plan) -> list[str]:
    return [f"{index}. {step.describe()} [{step.status.value}]" for index, step in enumerate(plan.steps, start=1)]


def _run_goal(action: str, target: str, count: int | None, have: list[str], station_nearby: bool) -> None:
    graph = _build_graph()
    world = SimulatedWorld(graph, _parse_have(have), station_nearby=station_nearby)
    notifier = MemoryNotifier()
    scheduler = _build_scheduler(graph, world, notifier)
    handler = CliGoalHandler(scheduler)

    async def _run() -> Goal:
        await scheduler.start()
        goal_id = handler.submit_goal(action, target, count)
        await scheduler.wait_idle()
        goal = handler.get_goal(goal_id)
        await scheduler.close()
        return goal

    goal = asyncio.run(_run())
    print(
        {
            "goal": goal.id,
            "target": goal.target,
            "status": goal.status.value,
            "result": goal.result,
            "error": goal.error,
            "steps": _format_plan(goal.plan) if goal.plan else [],
            "progress": notifier.messages,
            "inventory": world.inventory,
        }
    )
    if goal.status is not GoalStatus.COMPLETED:
        raise typer.Exit(code=1)


@app.command()
def start() -> None:
    """Show runtime configuration."""
    print(
        {
            "app_name": settings.app_name,
            "max_plan_depth": settings.max_plan_depth,
            "recipes_path": settings.recipes_path,
            "history_path": settings.history_path,
        }
    )


@app.command()
def recipe(item: str) -> None:
    """Show the recipe used to craft ITEM."""
    graph = _build_graph()
    name = graph.normalize(item)
    found = graph.get_recipe(name)
    if found is None:
        print({"item": name, "recipe": None, "primitive": graph.is_known(name)})
        raise typer.Exit(code=1)
    print(
        {
            "item": name,
            "recipe": found.name,
            "output_count": found.output_count,
            "ingredients": found.ingredients,
            "needs_station": found.needs_station,
        }
    )


@app.command()
def aliases(category: str) -> None:
    """List concrete blocks for a gathering category such as ore or log."""
    graph = _build_graph()
    print({"category": category, "blocks": graph.resolve_alias(graph.normalize(category))})


@app.command()
def plan(
    item: str,
    count: int = typer.Option(1, min=1, help="How many to make"),
    have: list[str] = typer.Option([], help="Held items as item=count, repeatable"),
    station_nearby: bool = typer.Option(False, help="Pretend a crafting table is placed nearby"),
) -> None:
    """Resolve ITEM into ordered gather/craft steps without running them."""
    graph = _build_graph()
    world = SimulatedWorld(graph, _parse_have(have), station_nearby=station_nearby)
    resolver = PlanResolver(graph, world, station_probe=world, max_depth=settings.max_plan_depth)
    result = resolver.resolve(graph.normalize(item), count)
    print(
        {
            "target": result.target,
            "quantity": result.quantity,
            "steps": _format_plan(result),
            "error": result.error.value if result.error else None,
            "detail": result.detail,
        }
    )
    if not result.ok:
        raise typer.Exit(code=1)


@app.command()
def make(
    item: str,
    count: int = typer.Option(1, min=1, help="How many to make"),
    have: list[str] = typer.Option([], help="Held items as item=count, repeatable"),
    station_nearby: bool = typer.Option(False, help="Pretend a crafting table is placed nearby"),
) -> None:
    """Plan and run a make goal in the simulated world."""
    _run_goal("make", item, count, have, station_nearby)


@app.command()
def mine(
    target: str,
    count: int = typer.Option(None, min=1, help="How many to collect (gather goals default to 64)"),
    have: list[str] = typer.Option([], help="Held items as item=count, repeatable"),
) -> None:
    """Run a single gather goal in the simulated world."""
    _run_goal("mine" if count else "gather", target, count, have, False)


if __name__ == "__main__":
    app()
