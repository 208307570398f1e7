"""Contracts for the world-interaction layer the planner drives."""

from __future__ import annotations

from typing import Protocol

from mc_crafter.models import Recipe, StationRef


class CancellationToken:
    """Cooperative stop flag passed into every provider call."""

    def __init__(self) -> None:
        self._cancel_requested = False

    @property
    def cancelled(self) -> bool:
        return self._cancel_requested

    def request_cancel(self) -> None:
        self._cancel_requested = True


class InventoryView(Protocol):
    """Live read access to the agent's inventory."""

    def count_of(self, item: str) -> int:
        """Return how many of ``item`` are held right now."""


class StationProbe(Protocol):
    """Reports whether a placed crafting station is within reach."""

    def station_nearby(self) -> bool:
        """Return True when a usable station is already placed nearby."""


class Gatherer(Protocol):
    """Mines, chops or collects primitive materials."""

    async def gather(self, item: str, count: int, cancel: CancellationToken) -> bool:
        """Collect ``count`` more of ``item``; False when it cannot be done."""


class Crafter(Protocol):
    """Secures crafting stations and performs crafts."""

    async def ensure_station(self, cancel: CancellationToken) -> StationRef | None:
        """Find, place or build a crafting station; None when none can be secured."""

    async def craft(
        self,
        item: str,
        recipe: Recipe | None,
        count: int,
        station: StationRef | None,
        cancel: CancellationToken,
    ) -> bool:
        """Craft at least ``count`` of ``item``."""


class Notifier(Protocol):
    """Receives short progress lines for the requesting player."""

    def notify(self, message: str) -> None:
        """Deliver ``message`` to the user-facing layer."""
