from __future__ import annotations

import math

from mc_crafter.models import PlanError, Recipe, StepKind
from mc_crafter.planning import PlanResolver
from mc_crafter.recipes import RecipeGraph


class DictInventory:
    def __init__(self, items: dict[str, int] | None = None) -> None:
        self.items = items or {}

    def count_of(self, item: str) -> int:
        return self.items.get(item, 0)


class FixedProbe:
    def __init__(self, nearby: bool) -> None:
        self.nearby = nearby

    def station_nearby(self) -> bool:
        return self.nearby


def _summary(plan) -> list[tuple[str, str, int]]:
    return [(step.kind.value, step.item, step.count) for step in plan.steps]


def _resolver(items: dict[str, int] | None = None, *, nearby: bool = False, graph: RecipeGraph | None = None):
    inventory = DictInventory(items)
    return PlanResolver(graph or RecipeGraph.default(), inventory, station_probe=FixedProbe(nearby)), inventory


def test_primitive_item_resolves_to_single_gather() -> None:
    resolver, _ = _resolver({"cobblestone": 2})

    plan = resolver.resolve("cobblestone", 5)

    assert plan.ok
    assert _summary(plan) == [("gather", "cobblestone", 3)]
    assert plan.steps[0].required == 5


def test_already_satisfied_request_is_empty() -> None:
    resolver, _ = _resolver({"torch": 8, "oak_planks": 1, "birch_planks": 3})

    assert resolver.resolve("torch", 8).steps == []
    assert resolver.resolve("planks", 4).steps == []


def test_sticks_from_empty_inventory() -> None:
    resolver, _ = _resolver()

    plan = resolver.resolve("stick", 4)

    assert _summary(plan) == [
        ("gather", "oak_log", 1),
        ("craft", "planks", 2),
        ("craft", "stick", 4),
    ]


def test_crafting_table_uses_held_planks() -> None:
    resolver, _ = _resolver({"oak_planks": 4})

    plan = resolver.resolve("crafting_table", 1)

    assert _summary(plan) == [("craft", "crafting_table", 1)]
    assert plan.steps[0].recipe is not None
    assert plan.steps[0].recipe.name == "crafting_table"


def test_diamond_pickaxe_acquires_station_first() -> None:
    resolver, _ = _resolver()

    plan = resolver.resolve("diamond_pickaxe", 1)

    assert plan.ok
    assert _summary(plan) == [
        ("gather", "oak_log", 1),
        ("craft", "planks", 4),
        ("craft", "crafting_table", 1),
        ("gather", "diamond", 3),
        ("gather", "oak_log", 1),
        ("craft", "planks", 1),
        ("craft", "stick", 2),
        ("craft", "diamond_pickaxe", 1),
    ]


def test_station_subtree_skipped_when_station_nearby_or_held() -> None:
    nearby, _ = _resolver(nearby=True)
    held, _ = _resolver({"crafting_table": 1})

    for resolver in (nearby, held):
        items = [step.item for step in resolver.resolve("diamond_pickaxe", 1).steps]
        assert "crafting_table" not in items
        assert items[-1] == "diamond_pickaxe"


def test_partial_holdings_reduce_demand_and_set_required_total() -> None:
    resolver, _ = _resolver({"stick": 1})

    plan = resolver.resolve("stick", 4)

    assert _summary(plan) == [
        ("gather", "oak_log", 1),
        ("craft", "planks", 2),
        ("craft", "stick", 3),
    ]
    assert plan.steps[-1].required == 4


def test_log_gather_uses_species_already_held() -> None:
    resolver, _ = _resolver({"birch_log": 1})

    plan = resolver.resolve("planks", 8)

    assert _summary(plan) == [("gather", "birch_log", 1), ("craft", "planks", 8)]
    assert plan.steps[0].required == 2


def test_output_count_rounds_crafts_up() -> None:
    resolver, _ = _resolver({"stick": 2})

    plan = resolver.resolve("torch", 5)

    assert _summary(plan) == [("gather", "coal", 2), ("craft", "torch", 5)]


def test_sibling_branches_are_not_merged() -> None:
    resolver, _ = _resolver(nearby=True)

    plan = resolver.resolve("fence", 1)

    plank_crafts = [step for step in plan.steps if step.kind is StepKind.CRAFT and step.item == "planks"]
    assert [step.count for step in plank_crafts] == [4, 1]
    assert plan.steps[-1].item == "fence"


def test_alias_producer_used_only_when_block_is_held() -> None:
    resolver, _ = _resolver({"diamond_block": 1})

    plan = resolver.resolve("diamond", 3)

    assert _summary(plan) == [("craft", "diamond", 3)]
    assert plan.steps[0].recipe is not None
    assert plan.steps[0].recipe.name == "diamond_from_block"


def test_every_craft_is_supplied_by_earlier_steps() -> None:
    graph = RecipeGraph.default()
    resolver, _ = _resolver(graph=graph)

    for target in ("diamond_pickaxe", "bow", "piston", "hopper", "torch"):
        plan = resolver.resolve(target, 2)
        assert plan.ok, target
        held: dict[str, int] = {}
        for step in plan.steps:
            if step.kind is StepKind.GATHER:
                held[step.item] = held.get(step.item, 0) + step.count
                continue
            if step.recipe is None:
                rule = graph.generic_material(step.item)
                assert rule is not None
                source = rule.source if graph.generic_material(rule.source) else graph.resolve_alias(rule.source)[0]
                consumed = {source: rule.source_units(step.count)}
                output, produced = step.item, step.count
            else:
                crafts = math.ceil(step.count / step.recipe.output_count)
                consumed = {item: amount * crafts for item, amount in step.recipe.ingredients.items()}
                output, produced = step.recipe.output_item, crafts * step.recipe.output_count
            for item, amount in consumed.items():
                assert held.get(item, 0) >= amount, (target, step.describe(), item)
                held[item] -= amount
            held[output] = held.get(output, 0) + produced
        assert held.get(target, 0) >= 2, target


def test_nested_station_recipes_plan_one_table() -> None:
    resolver, _ = _resolver()

    plan = resolver.resolve("hopper", 1)

    items = [step.item for step in plan.steps]
    assert items.count("crafting_table") == 1
    assert items.index("crafting_table") < items.index("chest") < items.index("hopper")


def test_cyclic_recipes_stop_at_depth_bound() -> None:
    graph = RecipeGraph(
        [
            Recipe(name="alpha", output_count=1, ingredients={"beta": 1}),
            Recipe(name="beta", output_count=1, ingredients={"alpha": 1}),
        ]
    )
    resolver = PlanResolver(graph, DictInventory(), max_depth=10)

    plan = resolver.resolve("alpha", 1)

    assert plan.error is PlanError.DEPTH_EXCEEDED
    assert "alpha" in (plan.detail or "")


def test_unknown_target_is_reported() -> None:
    resolver, _ = _resolver()

    plan = resolver.resolve("unobtainium", 1)

    assert plan.error is PlanError.UNKNOWN_RECIPE
    assert plan.steps == []
