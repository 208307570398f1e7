"""Vanilla crafting tables shipped with the planner.

Entries are ``name: (output_count, ingredients, needs_station)``. ``planks`` in an
ingredient list means any wood species.
"""

from __future__ import annotations

CRAFTING_RECIPES: dict[str, tuple[int, dict[str, int], bool]] = {
    # Wood processing
    "oak_planks": (4, {"oak_log": 1}, False),
    "birch_planks": (4, {"birch_log": 1}, False),
    "spruce_planks": (4, {"spruce_log": 1}, False),
    "jungle_planks": (4, {"jungle_log": 1}, False),
    "acacia_planks": (4, {"acacia_log": 1}, False),
    "dark_oak_planks": (4, {"dark_oak_log": 1}, False),
    "mangrove_planks": (4, {"mangrove_log": 1}, False),
    "cherry_planks": (4, {"cherry_log": 1}, False),
    # Basic items
    "stick": (4, {"planks": 2}, False),
    "crafting_table": (1, {"planks": 4}, False),
    "chest": (1, {"planks": 8}, True),
    "furnace": (1, {"cobblestone": 8}, True),
    "torch": (4, {"coal": 1, "stick": 1}, False),
    # Wooden tools
    "wooden_pickaxe": (1, {"planks": 3, "stick": 2}, True),
    "wooden_axe": (1, {"planks": 3, "stick": 2}, True),
    "wooden_shovel": (1, {"planks": 1, "stick": 2}, True),
    "wooden_sword": (1, {"planks": 2, "stick": 1}, True),
    "wooden_hoe": (1, {"planks": 2, "stick": 2}, True),
    # Stone tools
    "stone_pickaxe": (1, {"cobblestone": 3, "stick": 2}, True),
    "stone_axe": (1, {"cobblestone": 3, "stick": 2}, True),
    "stone_shovel": (1, {"cobblestone": 1, "stick": 2}, True),
    "stone_sword": (1, {"cobblestone": 2, "stick": 1}, True),
    "stone_hoe": (1, {"cobblestone": 2, "stick": 2}, True),
    # Iron tools
    "iron_pickaxe": (1, {"iron_ingot": 3, "stick": 2}, True),
    "iron_axe": (1, {"iron_ingot": 3, "stick": 2}, True),
    "iron_shovel": (1, {"iron_ingot": 1, "stick": 2}, True),
    "iron_sword": (1, {"iron_ingot": 2, "stick": 1}, True),
    "iron_hoe": (1, {"iron_ingot": 2, "stick": 2}, True),
    # Gold tools
    "golden_pickaxe": (1, {"gold_ingot": 3, "stick": 2}, True),
    "golden_axe": (1, {"gold_ingot": 3, "stick": 2}, True),
    "golden_shovel": (1, {"gold_ingot": 1, "stick": 2}, True),
    "golden_sword": (1, {"gold_ingot": 2, "stick": 1}, True),
    "golden_hoe": (1, {"gold_ingot": 2, "stick": 2}, True),
    # Diamond tools
    "diamond_pickaxe": (1, {"diamond": 3, "stick": 2}, True),
    "diamond_axe": (1, {"diamond": 3, "stick": 2}, True),
    "diamond_shovel": (1, {"diamond": 1, "stick": 2}, True),
    "diamond_sword": (1, {"diamond": 2, "stick": 1}, True),
    "diamond_hoe": (1, {"diamond": 2, "stick": 2}, True),
    # Armor
    "iron_helmet": (1, {"iron_ingot": 5}, True),
    "iron_chestplate": (1, {"iron_ingot": 8}, True),
    "iron_leggings": (1, {"iron_ingot": 7}, True),
    "iron_boots": (1, {"iron_ingot": 4}, True),
    "diamond_helmet": (1, {"diamond": 5}, True),
    "diamond_chestplate": (1, {"diamond": 8}, True),
    "diamond_leggings": (1, {"diamond": 7}, True),
    "diamond_boots": (1, {"diamond": 4}, True),
    "leather_helmet": (1, {"leather": 5}, True),
    "leather_chestplate": (1, {"leather": 8}, True),
    "leather_leggings": (1, {"leather": 7}, True),
    "leather_boots": (1, {"leather": 4}, True),
    # Storage blocks
    "iron_block": (1, {"iron_ingot": 9}, True),
    "gold_block": (1, {"gold_ingot": 9}, True),
    "diamond_block": (1, {"diamond": 9}, True),
    "coal_block": (1, {"coal": 9}, True),
    "lapis_block": (1, {"lapis_lazuli": 9}, True),
    "redstone_block": (1, {"redstone": 9}, True),
    "emerald_block": (1, {"emerald": 9}, True),
    # Combat
    "bow": (1, {"stick": 3, "string": 3}, True),
    "arrow": (4, {"flint": 1, "stick": 1, "feather": 1}, True),
    "shield": (1, {"planks": 6, "iron_ingot": 1}, True),
    # Food
    "bread": (1, {"wheat": 3}, True),
    "cake": (1, {"wheat": 3, "sugar": 2, "egg": 1, "milk_bucket": 3}, True),
    "cookie": (8, {"wheat": 2, "cocoa_beans": 1}, True),
    "golden_apple": (1, {"apple": 1, "gold_ingot": 8}, True),
    "golden_carrot": (1, {"carrot": 1, "gold_nugget": 8}, True),
    # Misc
    "bucket": (1, {"iron_ingot": 3}, True),
    "compass": (1, {"iron_ingot": 4, "redstone": 1}, True),
    "clock": (1, {"gold_ingot": 4, "redstone": 1}, True),
    "bed": (1, {"planks": 3, "wool": 3}, True),
    "ladder": (3, {"stick": 7}, True),
    "fence": (3, {"planks": 4, "stick": 2}, True),
    "fence_gate": (1, {"planks": 2, "stick": 4}, True),
    "door": (3, {"planks": 6}, True),
    "trapdoor": (2, {"planks": 6}, True),
    "boat": (1, {"planks": 5}, True),
    "minecart": (1, {"iron_ingot": 5}, True),
    "rail": (16, {"iron_ingot": 6, "stick": 1}, True),
    "powered_rail": (6, {"gold_ingot": 6, "stick": 1, "redstone": 1}, True),
    # Redstone
    "piston": (1, {"planks": 3, "cobblestone": 4, "iron_ingot": 1, "redstone": 1}, True),
    "sticky_piston": (1, {"piston": 1, "slime_ball": 1}, True),
    "observer": (1, {"cobblestone": 6, "redstone": 2, "quartz": 1}, True),
    "hopper": (1, {"iron_ingot": 5, "chest": 1}, True),
    "dispenser": (1, {"cobblestone": 7, "bow": 1, "redstone": 1}, True),
    "dropper": (1, {"cobblestone": 7, "redstone": 1}, True),
    "lever": (1, {"stick": 1, "cobblestone": 1}, False),
    "stone_button": (1, {"stone": 1}, False),
    "wooden_button": (1, {"planks": 1}, False),
    "pressure_plate": (1, {"stone": 2}, True),
    # Brewing and enchanting
    "brewing_stand": (1, {"blaze_rod": 1, "cobblestone": 3}, True),
    "cauldron": (1, {"iron_ingot": 7}, True),
    "glass_bottle": (3, {"glass": 3}, True),
    "enchanting_table": (1, {"diamond": 2, "obsidian": 4, "book": 1}, True),
    "bookshelf": (1, {"planks": 6, "book": 3}, True),
    "book": (1, {"paper": 3, "leather": 1}, True),
    "paper": (3, {"sugar_cane": 3}, True),
    "anvil": (1, {"iron_block": 3, "iron_ingot": 4}, True),
    "smithing_table": (1, {"iron_ingot": 2, "planks": 4}, True),
    # Decorative
    "glass_pane": (16, {"glass": 6}, True),
    "iron_bars": (16, {"iron_ingot": 6}, True),
    "painting": (1, {"stick": 8, "wool": 1}, True),
    "item_frame": (1, {"stick": 8, "leather": 1}, True),
    "sign": (3, {"planks": 6, "stick": 1}, True),
    "blast_furnace": (1, {"iron_ingot": 5, "furnace": 1, "smooth_stone": 3}, True),
    "smoker": (1, {"furnace": 1, "oak_log": 4}, True),
}

# name: (alias_of, output_count, ingredients, needs_station)
ALIAS_RECIPES: dict[str, tuple[str, int, dict[str, int], bool]] = {
    "iron_ingot_from_block": ("iron_ingot", 9, {"iron_block": 1}, False),
    "gold_ingot_from_block": ("gold_ingot", 9, {"gold_block": 1}, False),
    "diamond_from_block": ("diamond", 9, {"diamond_block": 1}, False),
}

LOG_SPECIES = [
    "oak_log",
    "birch_log",
    "spruce_log",
    "jungle_log",
    "acacia_log",
    "dark_oak_log",
    "mangrove_log",
    "cherry_log",
]

PLANK_SPECIES = [log.replace("_log", "_planks") for log in LOG_SPECIES]

BLOCK_ALIASES: dict[str, list[str]] = {
    "wood": LOG_SPECIES[:6],
    "log": LOG_SPECIES[:6],
    "planks": PLANK_SPECIES[:6],
    "ore": [
        "coal_ore",
        "iron_ore",
        "gold_ore",
        "diamond_ore",
        "emerald_ore",
        "lapis_ore",
        "redstone_ore",
        "copper_ore",
    ],
    "stone": ["stone", "cobblestone", "deepslate", "andesite", "diorite", "granite"],
    "dirt": ["dirt", "grass_block", "coarse_dirt", "podzol"],
    "sand": ["sand", "red_sand"],
    "gravel": ["gravel"],
    "coal": ["coal_ore", "deepslate_coal_ore"],
    "iron": ["iron_ore", "deepslate_iron_ore"],
    "gold": ["gold_ore", "deepslate_gold_ore"],
    "diamond": ["diamond_ore", "deepslate_diamond_ore"],
    "emerald": ["emerald_ore", "deepslate_emerald_ore"],
    "redstone": ["redstone_ore", "deepslate_redstone_ore"],
    "lapis": ["lapis_ore", "deepslate_lapis_ore"],
    "copper": ["copper_ore", "deepslate_copper_ore"],
    "netherite": ["ancient_debris"],
    "crops": ["wheat", "carrots", "potatoes", "beetroots"],
    "leaves": ["oak_leaves", "birch_leaves", "spruce_leaves", "jungle_leaves", "acacia_leaves", "dark_oak_leaves"],
}

TOOL_REQUIREMENTS: dict[str, str] = {
    "stone": "wooden_pickaxe",
    "cobblestone": "wooden_pickaxe",
    "iron_ore": "stone_pickaxe",
    "deepslate_iron_ore": "stone_pickaxe",
    "gold_ore": "iron_pickaxe",
    "deepslate_gold_ore": "iron_pickaxe",
    "diamond_ore": "iron_pickaxe",
    "deepslate_diamond_ore": "iron_pickaxe",
    "emerald_ore": "iron_pickaxe",
    "deepslate_emerald_ore": "iron_pickaxe",
    "redstone_ore": "iron_pickaxe",
    "deepslate_redstone_ore": "iron_pickaxe",
    "obsidian": "diamond_pickaxe",
    "ancient_debris": "diamond_pickaxe",
}

TOOL_TIERS = ["wooden", "stone", "iron", "golden", "diamond", "netherite"]

# Player shorthand -> canonical item id.
NAME_SHORTHANDS: dict[str, str] = {
    "pickaxe": "wooden_pickaxe",
    "axe": "wooden_axe",
    "sword": "wooden_sword",
    "shovel": "wooden_shovel",
    "table": "crafting_table",
    "workbench": "crafting_table",
    "sticks": "stick",
    "plank": "oak_planks",
    "planks": "oak_planks",
}
