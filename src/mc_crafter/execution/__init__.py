"""Per-step execution against capability providers."""

from .executor import StepExecutor

__all__ = ["StepExecutor"]
