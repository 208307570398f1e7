"""Recipe tables and lookups."""

from .graph import DEFAULT_GENERICS, GenericMaterial, RecipeGraph, normalize_name

__all__ = ["DEFAULT_GENERICS", "GenericMaterial", "RecipeGraph", "normalize_name"]
