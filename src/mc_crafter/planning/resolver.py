"""Recursive expansion of an (item, quantity) request into ordered gather/craft steps."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field

from mc_crafter.capabilities import InventoryView, StationProbe
from mc_crafter.models import Plan, PlanError, Recipe, Step, StepKind
from mc_crafter.recipes import GenericMaterial, RecipeGraph

STATION_ITEM = "crafting_table"
DEFAULT_MAX_DEPTH = 10


@dataclass(slots=True)
class _Expansion:
    plan: Plan
    inventory: InventoryView
    # Holdings the plan expects after its steps so far; seeded lazily from the live inventory.
    ledger: dict[str, int] = field(default_factory=dict)
    station_planned: bool = False


class PlanResolver:
    """Greedy depth-first planner.

    Every branch resolves its own demand against the live inventory, so two
    siblings needing the same ingredient both plan for it. Each step's
    ``required`` is the holding the plan expects once that step has run; the
    scheduler skips a step only when the world already holds that much.
    """

    def __init__(
        self,
        graph: RecipeGraph,
        inventory: InventoryView,
        *,
        station_probe: StationProbe | None = None,
        max_depth: int = DEFAULT_MAX_DEPTH,
        logger: logging.Logger | None = None,
    ) -> None:
        self._graph = graph
        self._inventory = inventory
        self._station_probe = station_probe
        self._max_depth = max_depth
        self._logger = logger or logging.getLogger("mc_crafter.planning")

    @property
    def graph(self) -> RecipeGraph:
        return self._graph

    def resolve(self, item: str, quantity: int, inventory: InventoryView | None = None) -> Plan:
        if inventory is None:
            inventory = self._inventory
        plan = Plan(target=item, quantity=quantity)

        if not self._graph.is_known(item):
            plan.error = PlanError.UNKNOWN_RECIPE
            plan.detail = f"Unknown recipe: {item}"
            self._logger.warning("plan_unknown_item", extra={"item": item})
            return plan

        self._expand(item, quantity, 0, _Expansion(plan=plan, inventory=inventory))
        self._logger.info(
            "plan_resolved",
            extra={
                "item": item,
                "quantity": quantity,
                "steps": [step.describe() for step in plan.steps],
                "error": plan.error.value if plan.error else None,
            },
        )
        return plan

    def _expand(self, item: str, quantity: int, depth: int, ctx: _Expansion) -> None:
        plan = ctx.plan
        if plan.error is not None:
            return
        if depth > self._max_depth:
            plan.error = PlanError.DEPTH_EXCEEDED
            plan.detail = f"Recipe expansion for {plan.target} exceeded depth {self._max_depth} at {item}"
            self._logger.warning("plan_depth_exceeded", extra={"item": item, "depth": depth})
            return

        have = self._graph.count_held(ctx.inventory, item)
        if have >= quantity:
            self._logger.debug("plan_satisfied", extra={"item": item, "have": have, "need": quantity})
            return
        needed = quantity - have

        rule = self._graph.generic_material(item)
        if rule is not None:
            self._expand_generic(rule, needed, depth, ctx)
            return

        recipe = self._graph.get_recipe(item)
        if recipe is not None and recipe.name != item and not self._holds_ingredients(recipe, needed, ctx.inventory):
            recipe = None

        if recipe is None:
            self._append(ctx, Step(kind=StepKind.GATHER, item=item, count=needed), produced=needed)
            return

        crafts = math.ceil(needed / recipe.output_count)
        if recipe.needs_station and not self._station_available(ctx):
            # A station is placed, never consumed: one per plan is enough.
            ctx.station_planned = True
            self._expand(STATION_ITEM, 1, depth + 1, ctx)

        consumed = {ingredient: amount * crafts for ingredient, amount in recipe.ingredients.items()}
        for ingredient, amount in consumed.items():
            self._expand(ingredient, amount, depth + 1, ctx)

        if plan.error is not None:
            return
        self._append(
            ctx,
            Step(kind=StepKind.CRAFT, item=item, count=needed, recipe=recipe),
            produced=crafts * recipe.output_count,
            consumed=consumed,
        )

    def _expand_generic(self, rule: GenericMaterial, needed: int, depth: int, ctx: _Expansion) -> None:
        if self._graph.generic_material(rule.source) is not None:
            source = rule.source
        else:
            source = self._graph.concrete_source(rule, ctx.inventory)

        units = rule.source_units(needed)
        self._expand(source, units, depth + 1, ctx)
        if ctx.plan.error is not None:
            return
        self._append(
            ctx,
            Step(kind=StepKind.CRAFT, item=rule.name, count=needed),
            produced=needed,
            consumed={source: units},
        )

    def _append(self, ctx: _Expansion, step: Step, *, produced: int, consumed: dict[str, int] | None = None) -> None:
        for ingredient, amount in (consumed or {}).items():
            ctx.ledger[ingredient] = max(0, self._expected(ctx, ingredient) - amount)
        step.required = self._expected(ctx, step.item) + produced
        ctx.ledger[step.item] = step.required
        ctx.plan.steps.append(step)

    def _expected(self, ctx: _Expansion, item: str) -> int:
        if item not in ctx.ledger:
            ctx.ledger[item] = self._graph.count_held(ctx.inventory, item)
        return ctx.ledger[item]

    def _holds_ingredients(self, recipe: Recipe, needed: int, inventory: InventoryView) -> bool:
        # Alias producers (block -> ingots) only apply to material already on hand.
        crafts = math.ceil(needed / recipe.output_count)
        return all(
            self._graph.count_held(inventory, ingredient) >= amount * crafts
            for ingredient, amount in recipe.ingredients.items()
        )

    def _station_available(self, ctx: _Expansion) -> bool:
        if ctx.station_planned or ctx.inventory.count_of(STATION_ITEM) > 0:
            return True
        return bool(self._station_probe and self._station_probe.station_nearby())
