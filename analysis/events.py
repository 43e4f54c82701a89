"""
Event Model for the Bandwidth Allocator.

Records the decisions of one allocation pass and renders them as the
step-by-step trace printed before the final table.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator, List, Optional


class EventType(Enum):
    """Types of events in an allocation pass."""
    FULL = "full"
    PARTIAL = "partial"
    EXHAUSTED = "exhausted"


@dataclass
class AllocationEvent:
    """
    Represents a single decision of the allocation pass.

    Attributes:
        position: Rank position of the demand considered (0-based)
        event_type: Type of event
        name: Demand involved in event (None for EXHAUSTED)
        ratio: Ratio of the demand, formatted for display
        remaining_before: Bandwidth left in the pool before the decision
        granted: Bandwidth handed out by the decision
        credited: Priority value credited by the decision
    """
    position: int
    event_type: EventType
    name: Optional[str] = None
    ratio: str = ""
    remaining_before: float = 0.0
    granted: float = 0.0
    credited: float = 0.0

    def trace_lines(self, show_credit: bool = False) -> List[str]:
        """
        Trace lines for this decision.

        A grant prints the demand being considered followed by the outcome;
        exhaustion prints a single stop line.
        """
        if self.event_type == EventType.EXHAUSTED:
            return ["No more bandwidth to allocate. Stopping."]

        lines = [
            f"Considering Task '{self.name}' (Ratio: {self.ratio}). "
            f"Remaining Bandwidth: {self.remaining_before:.2f}"
        ]
        if self.event_type == EventType.FULL:
            lines.append(f"  -> Allocated full demand ({self.granted:.2f})")
        else:
            lines.append(f"  -> Allocated remaining bandwidth ({self.granted:.2f})")
        if show_credit:
            lines.append(f"     credited value {self.credited:.2f}")
        return lines

    def __str__(self) -> str:
        return "\n".join(self.trace_lines())


@dataclass
class EventLog:
    """Ordered trace of one allocation pass."""
    events: List[AllocationEvent] = field(default_factory=list)

    def add(self, event: AllocationEvent) -> None:
        self.events.append(event)

    def get_events_by_type(self, event_type: EventType) -> List[AllocationEvent]:
        return [e for e in self.events if e.event_type == event_type]

    @property
    def stopped_early(self) -> bool:
        """True when the pool ran dry before every demand was reached."""
        return any(e.event_type == EventType.EXHAUSTED for e in self.events)

    def __iter__(self) -> Iterator[AllocationEvent]:
        return iter(self.events)

    def __len__(self) -> int:
        return len(self.events)

    def display(self, show_credit: bool = False) -> str:
        """
        Render the whole pass as trace text.

        Args:
            show_credit: Also print the priority value credited per grant
        """
        lines = []
        for event in self.events:
            lines.extend(event.trace_lines(show_credit))
        return "\n".join(lines)
