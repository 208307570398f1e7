"""In-memory world used for local CLI demos and tests.

``SimulatedWorld`` implements every provider contract the planner consumes, so a
full goal can run without a game client. Failures can be injected per item.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Iterable, Mapping

from mc_crafter.capabilities import CancellationToken
from mc_crafter.models import Recipe, StationRef
from mc_crafter.planning import STATION_ITEM
from mc_crafter.recipes import RecipeGraph


class MemoryNotifier:
    """Keeps progress lines in order of arrival."""

    def __init__(self) -> None:
        self.messages: list[str] = []

    def notify(self, message: str) -> None:
        self.messages.append(message)


class SimulatedWorld:
    def __init__(
        self,
        graph: RecipeGraph,
        inventory: Mapping[str, int] | None = None,
        *,
        station_nearby: bool = False,
        unreachable: Iterable[str] = (),
        uncraftable: Iterable[str] = (),
        enforce_tools: bool = False,
        logger: logging.Logger | None = None,
    ) -> None:
        self._graph = graph
        self._inventory: dict[str, int] = {item: int(count) for item, count in (inventory or {}).items() if count}
        self._station: StationRef | None = StationRef(x=1, y=64, z=0) if station_nearby else None
        self._unreachable = set(unreachable)
        self._uncraftable = set(uncraftable)
        self._enforce_tools = enforce_tools
        self._logger = logger or logging.getLogger("mc_crafter.simulation")
        self.calls: list[tuple[str, str, int]] = []

    @property
    def inventory(self) -> dict[str, int]:
        return dict(self._inventory)

    def count_of(self, item: str) -> int:
        return self._inventory.get(item, 0)

    def station_nearby(self) -> bool:
        return self._station is not None

    async def gather(self, item: str, count: int, cancel: CancellationToken) -> bool:
        self.calls.append(("gather", item, count))
        if cancel.cancelled or item in self._unreachable:
            return False

        blocks = self._graph.resolve_alias(item)
        if self._enforce_tools:
            required = self._graph.required_tool(blocks[0])
            if required and not any(self._graph.can_tool_mine(tool, required) for tool in self._held_tools()):
                self._logger.info("gather_missing_tool", extra={"item": item, "required_tool": required})
                return False

        self._add(item, count)
        return True

    async def ensure_station(self, cancel: CancellationToken) -> StationRef | None:
        self.calls.append(("ensure_station", STATION_ITEM, 1))
        if cancel.cancelled:
            return None
        if self._station is None and self._take(STATION_ITEM, 1):
            self._station = StationRef(x=1, y=64, z=0)
        return self._station

    async def craft(
        self,
        item: str,
        recipe: Recipe | None,
        count: int,
        station: StationRef | None,
        cancel: CancellationToken,
    ) -> bool:
        self.calls.append(("craft", item, count))
        if cancel.cancelled or item in self._uncraftable:
            return False

        if recipe is None:
            rule = self._graph.generic_material(item)
            if rule is not None and not rule.variants:
                return self._craft_generic(rule.name, rule.source, rule.source_units(count), count)
            recipe = self._concrete_recipe(item)
        if recipe is None:
            return False
        if recipe.needs_station and station is None:
            return False

        crafts = math.ceil(count / recipe.output_count)
        demand = {ingredient: amount * crafts for ingredient, amount in recipe.ingredients.items()}
        if any(self._graph.count_held(self, ingredient) < amount for ingredient, amount in demand.items()):
            return False
        for ingredient, amount in demand.items():
            self._take(ingredient, amount)

        self._add(recipe.output_item, crafts * recipe.output_count)
        return True

    def _craft_generic(self, item: str, source: str, units: int, count: int) -> bool:
        # Generic outputs follow their expansion rule, not the grid recipe.
        if not self._take(source, units):
            return False
        self._add(item, count)
        return True

    def _concrete_recipe(self, item: str) -> Recipe | None:
        rule = self._graph.generic_material(item)
        if rule is None:
            return self._graph.get_recipe(item)
        for variant in rule.variants:
            recipe = self._graph.get_recipe(variant)
            if recipe and all(self.count_of(ingredient) > 0 for ingredient in recipe.ingredients):
                return recipe
        return None

    def _held_tools(self) -> list[str]:
        return [item for item, count in self._inventory.items() if count > 0 and item.endswith("_pickaxe")]

    def _add(self, item: str, count: int) -> None:
        self._inventory[item] = self._inventory.get(item, 0) + count

    def _take(self, item: str, count: int) -> bool:
        rule = self._graph.generic_material(item)
        pools = [item, *(rule.variants if rule else ())]
        if sum(self.count_of(pool) for pool in pools) < count:
            return False
        remaining = count
        for pool in pools:
            used = min(self.count_of(pool), remaining)
            if used:
                self._inventory[pool] -= used
                remaining -= used
            if not remaining:
                break
        return True
