"""Dependency expansion from requests to ordered steps."""

from .resolver import DEFAULT_MAX_DEPTH, STATION_ITEM, PlanResolver

__all__ = ["DEFAULT_MAX_DEPTH", "PlanResolver", "STATION_ITEM"]
