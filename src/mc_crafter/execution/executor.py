"""Runs a single plan step against the gatherer/crafter providers."""

from __future__ import annotations

import logging

from mc_crafter.capabilities import CancellationToken, Crafter, Gatherer, Notifier
from mc_crafter.models import Step, StepError, StepKind


class StepExecutor:
    """Delegates one step to the matching provider and reports success as a bool.

    The executor never mutates the step's status; the scheduler owns that. On
    failure ``step.error`` carries a short diagnostic.
    """

    def __init__(
        self,
        gatherer: Gatherer,
        crafter: Crafter,
        *,
        notifier: Notifier | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        self._gatherer = gatherer
        self._crafter = crafter
        self._notifier = notifier
        self._logger = logger or logging.getLogger("mc_crafter.execution")
        self._steps_completed = 0

    @property
    def steps_completed(self) -> int:
        return self._steps_completed

    async def run(self, step: Step, cancel: CancellationToken | None = None) -> bool:
        cancel = cancel or CancellationToken()
        if step.kind is StepKind.GATHER:
            ok = await self._gather(step, cancel)
        else:
            ok = await self._craft(step, cancel)

        if ok:
            self._steps_completed += 1
            self._notify(f"Step {self._steps_completed}: {step.describe()} done")
        else:
            self._logger.warning("step_failed", extra={"step": step.describe(), "error": step.error})
        return ok

    async def _gather(self, step: Step, cancel: CancellationToken) -> bool:
        if await self._gatherer.gather(step.item, step.count, cancel):
            return True
        step.error = f"{StepError.GATHER_FAILED.value}: could not gather {step.item} x{step.count}"
        return False

    async def _craft(self, step: Step, cancel: CancellationToken) -> bool:
        station = None
        if step.recipe is not None and step.recipe.needs_station:
            station = await self._crafter.ensure_station(cancel)
            if station is None:
                step.error = f"{StepError.MISSING_STATION.value}: no crafting station for {step.item}"
                return False

        if await self._crafter.craft(step.item, step.recipe, step.count, station, cancel):
            return True
        step.error = f"{StepError.CRAFT_FAILED.value}: could not craft {step.item} x{step.count}"
        return False

    def _notify(self, message: str) -> None:
        self._logger.info("step_done", extra={"progress": message})
        if self._notifier is not None:
            self._notifier.notify(message)
