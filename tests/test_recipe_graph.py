from __future__ import annotations

import json
from pathlib import Path

import pytest

from mc_crafter.models import Recipe
from mc_crafter.recipes import RecipeGraph


class DictInventory:
    def __init__(self, items: dict[str, int] | None = None) -> None:
        self.items = items or {}

    def count_of(self, item: str) -> int:
        return self.items.get(item, 0)


def test_get_recipe_exact_match() -> None:
    graph = RecipeGraph.default()

    recipe = graph.get_recipe("diamond_pickaxe")

    assert recipe is not None
    assert recipe.ingredients == {"diamond": 3, "stick": 2}
    assert recipe.needs_station is True


def test_get_recipe_falls_back_to_alias_producer() -> None:
    graph = RecipeGraph.default()

    recipe = graph.get_recipe("iron_ingot")

    assert recipe is not None
    assert recipe.name == "iron_ingot_from_block"
    assert recipe.output_item == "iron_ingot"
    assert recipe.output_count == 9


def test_primitive_items_have_no_recipe() -> None:
    graph = RecipeGraph.default()

    assert graph.get_recipe("cobblestone") is None
    assert graph.get_recipe("oak_log") is None
    assert graph.is_known("cobblestone")
    assert not graph.is_known("unobtainium")


def test_resolve_alias_expands_categories() -> None:
    graph = RecipeGraph.default()

    assert graph.resolve_alias("log")[0] == "oak_log"
    assert "diamond_ore" in graph.resolve_alias("ore")
    assert graph.resolve_alias("obsidian") == ["obsidian"]


def test_normalize_applies_shorthands() -> None:
    graph = RecipeGraph.default()

    assert graph.normalize("Crafting-Table") == "crafting_table"
    assert graph.normalize("sticks") == "stick"
    assert graph.normalize("workbench") == "crafting_table"
    assert graph.normalize("diamond pickaxe") == "diamond_pickaxe"


def test_count_held_aggregates_plank_species() -> None:
    graph = RecipeGraph.default()
    inventory = DictInventory({"oak_planks": 2, "birch_planks": 3, "stick": 1})

    assert graph.count_held(inventory, "planks") == 5
    assert graph.count_held(inventory, "stick") == 1
    assert graph.count_held(inventory, "oak_planks") == 2


def test_concrete_source_prefers_held_species() -> None:
    graph = RecipeGraph.default()
    rule = graph.generic_material("planks")

    assert rule is not None
    assert graph.concrete_source(rule, DictInventory()) == "oak_log"
    assert graph.concrete_source(rule, DictInventory({"spruce_log": 2})) == "spruce_log"


def test_tool_tiers() -> None:
    graph = RecipeGraph.default()

    assert graph.required_tool("diamond_ore") == "iron_pickaxe"
    assert graph.can_tool_mine("diamond_pickaxe", "iron_pickaxe")
    assert not graph.can_tool_mine("stone_pickaxe", "iron_pickaxe")
    assert not graph.can_tool_mine(None, "wooden_pickaxe")
    assert graph.can_tool_mine(None, None)


def test_recipe_rejects_invalid_definitions() -> None:
    with pytest.raises(ValueError):
        Recipe(name="nothing", output_count=0, ingredients={"dirt": 1})
    with pytest.raises(ValueError):
        Recipe(name="free_lunch", output_count=1, ingredients={})


def test_from_json_loads_custom_table(tmp_path: Path) -> None:
    path = tmp_path / "recipes.json"
    path.write_text(
        json.dumps(
            {
                "recipes": {
                    "gizmo": {"count": 2, "ingredients": {"gear": 3}, "needs_station": True},
                    "gear_from_scrap": {"count": 1, "ingredients": {"scrap": 4}, "alias_of": "gear"},
                }
            }
        ),
        encoding="utf-8",
    )

    graph = RecipeGraph.from_json(path)

    gizmo = graph.get_recipe("gizmo")
    assert gizmo is not None and gizmo.output_count == 2 and gizmo.needs_station
    gear = graph.get_recipe("gear")
    assert gear is not None and gear.name == "gear_from_scrap"
    assert graph.is_known("scrap")
    assert graph.resolve_alias("ore")


def test_from_json_requires_recipes(tmp_path: Path) -> None:
    path = tmp_path / "empty.json"
    path.write_text("{}", encoding="utf-8")

    with pytest.raises(ValueError):
        RecipeGraph.from_json(path)
