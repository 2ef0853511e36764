"""Observer interface between the simulator and whatever displays it."""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional, Protocol, runtime_checkable

if TYPE_CHECKING:
    from mobsim.simulation.step_context import StepReport
    from mobsim.spatial.field import Field


@runtime_checkable
class SimulatorView(Protocol):
    """Receives the field after every step and decides whether to keep going.

    Views must treat the field as read-only.
    """

    def show_status(self, step: int, field: "Field", report: Optional["StepReport"]) -> None:
        ...

    def is_viable(self, field: "Field") -> bool:
        ...


class NullView:
    """View used when nothing is watching; runs until extinction."""

    def show_status(self, step: int, field: "Field", report: Optional["StepReport"]) -> None:
        return None

    def is_viable(self, field: "Field") -> bool:
        return field.is_viable()
