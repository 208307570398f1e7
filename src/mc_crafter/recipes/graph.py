"""Read-only recipe lookups: exact and alias producers, gathering categories, tool tiers."""

from __future__ import annotations

import json
import math
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from pathlib import Path

from mc_crafter.capabilities import InventoryView
from mc_crafter.models import Recipe

from . import data


@dataclass(frozen=True, slots=True)
class GenericMaterial:
    """Expansion rule for an ingredient that any concrete variant satisfies.

    ``source`` is either a gathering category (resolved to one concrete block) or
    another generic material (resolved recursively). One unit of source yields
    ``divisor`` units of this material.
    """

    name: str
    source: str
    divisor: int
    variants: tuple[str, ...] = field(default_factory=tuple)

    def source_units(self, needed: int) -> int:
        return math.ceil(needed / self.divisor)


DEFAULT_GENERICS = (
    GenericMaterial(name="planks", source="log", divisor=4, variants=tuple(data.PLANK_SPECIES)),
    GenericMaterial(name="stick", source="planks", divisor=2),
)


def normalize_name(name: str) -> str:
    return "_".join(name.strip().lower().replace("-", "_").split())


class RecipeGraph:
    """Static item -> recipe table, loaded once and never mutated."""

    def __init__(
        self,
        recipes: Iterable[Recipe],
        *,
        block_aliases: Mapping[str, list[str]] | None = None,
        tool_requirements: Mapping[str, str] | None = None,
        tool_tiers: list[str] | None = None,
        generics: Iterable[GenericMaterial] = DEFAULT_GENERICS,
        shorthands: Mapping[str, str] | None = None,
    ) -> None:
        self._recipes: dict[str, Recipe] = {recipe.name: recipe for recipe in recipes}
        self._block_aliases = dict(block_aliases if block_aliases is not None else data.BLOCK_ALIASES)
        self._tool_requirements = dict(tool_requirements if tool_requirements is not None else data.TOOL_REQUIREMENTS)
        self._tool_tiers = list(tool_tiers or data.TOOL_TIERS)
        self._generics = {rule.name: rule for rule in generics}
        self._shorthands = dict(shorthands if shorthands is not None else data.NAME_SHORTHANDS)
        self._known = self._collect_known_items()

    @classmethod
    def default(cls) -> RecipeGraph:
        recipes = [
            Recipe(name=name, output_count=count, ingredients=dict(ingredients), needs_station=station)
            for name, (count, ingredients, station) in data.CRAFTING_RECIPES.items()
        ]
        recipes.extend(
            Recipe(
                name=name,
                output_count=count,
                ingredients=dict(ingredients),
                needs_station=station,
                alias_of=alias_of,
            )
            for name, (alias_of, count, ingredients, station) in data.ALIAS_RECIPES.items()
        )
        return cls(recipes)

    @classmethod
    def from_json(cls, path: str | Path) -> RecipeGraph:
        """Load a custom table.

        Expected shape::

            {"recipes": {"torch": {"count": 4, "ingredients": {"coal": 1, "stick": 1},
                                    "needs_station": false, "alias_of": null}},
             "block_aliases": {...}, "tool_requirements": {...}}

        Missing ``block_aliases``/``tool_requirements`` fall back to the shipped tables.
        """
        payload = json.loads(Path(path).read_text(encoding="utf-8"))
        raw_recipes = payload.get("recipes")
        if not isinstance(raw_recipes, dict) or not raw_recipes:
            raise ValueError(f"Recipe file {path} has no 'recipes' table")

        recipes = [
            Recipe(
                name=name,
                output_count=int(entry.get("count", 1)),
                ingredients={item: int(amount) for item, amount in entry.get("ingredients", {}).items()},
                needs_station=bool(entry.get("needs_station", False)),
                alias_of=entry.get("alias_of"),
            )
            for name, entry in raw_recipes.items()
        ]
        return cls(
            recipes,
            block_aliases=payload.get("block_aliases"),
            tool_requirements=payload.get("tool_requirements"),
        )

    def get_recipe(self, item: str) -> Recipe | None:
        """Exact-name recipe, else the first recipe producing ``item`` as an alias."""
        recipe = self._recipes.get(item)
        if recipe is not None:
            return recipe
        for candidate in self._recipes.values():
            if candidate.alias_of == item:
                return candidate
        return None

    def resolve_alias(self, category: str) -> list[str]:
        """Expand a gathering category (``ore``, ``log``) to concrete block names."""
        return list(self._block_aliases.get(category, [category]))

    def normalize(self, name: str) -> str:
        normalized = normalize_name(name)
        return self._shorthands.get(normalized, normalized)

    def is_known(self, item: str) -> bool:
        return item in self._known

    def generic_material(self, item: str) -> GenericMaterial | None:
        return self._generics.get(item)

    def count_held(self, inventory: InventoryView, item: str) -> int:
        rule = self._generics.get(item)
        if rule is None or not rule.variants:
            return inventory.count_of(item)
        return inventory.count_of(item) + sum(inventory.count_of(variant) for variant in rule.variants)

    def concrete_source(self, rule: GenericMaterial, inventory: InventoryView | None = None) -> str:
        """Pick the block to gather for ``rule``: a variant already held, else the first alias."""
        candidates = self.resolve_alias(rule.source)
        if inventory is not None:
            for candidate in candidates:
                if inventory.count_of(candidate) > 0:
                    return candidate
        return candidates[0]

    def required_tool(self, block: str) -> str | None:
        return self._tool_requirements.get(block)

    def can_tool_mine(self, tool: str | None, required: str | None) -> bool:
        if not required:
            return True
        return self._tier_index(tool) >= self._tier_index(required)

    def _tier_index(self, tool: str | None) -> int:
        if not tool:
            return -1
        for index, tier in enumerate(self._tool_tiers):
            if tool.startswith(f"{tier}_"):
                return index
        return -1

    def _collect_known_items(self) -> set[str]:
        known: set[str] = set(self._recipes)
        for recipe in self._recipes.values():
            known.update(recipe.ingredients)
            if recipe.alias_of:
                known.add(recipe.alias_of)
        for category, blocks in self._block_aliases.items():
            known.add(category)
            known.update(blocks)
        known.update(self._tool_requirements)
        known.update(self._tool_requirements.values())
        for rule in self._generics.values():
            known.add(rule.name)
            known.update(rule.variants)
        known.update(data.LOG_SPECIES)
        return known
