"""
step.py — Replay Events & Step Sequences
=========================================
Every algorithm is a generator that yields events.  An event is the
smallest change the player can show:

    • Visit         – one node joins the visited set
    • PathSnapshot  – the highlighted edge set is REPLACED by this one
    • Outcome       – terminal verdict (cycle / negative cycle / count)

Design decisions:
  - Events are frozen dataclasses.  The algorithm generator is the only
    writer; the player and renderer are pure readers.
  - A StepSequence is the whole run, collected BEFORE replay starts.
    Changing the replay speed can therefore only change *when* a frame
    appears, never *what* it shows.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Iterable, Iterator, List, Mapping, Optional, Tuple, Union


# ---------------------------------------------------------------------------
# Events
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class PathEdge:
    from_node: int
    to_node:   int

    def to_dict(self) -> dict:
        return {"from": self.from_node, "to": self.to_node}


@dataclass(frozen=True)
class Visit:
    node: int

    def to_dict(self) -> dict:
        return {"type": "visit", "node": self.node}


@dataclass(frozen=True)
class PathSnapshot:
    edges: Tuple[PathEdge, ...] = ()

    def to_dict(self) -> dict:
        return {"type": "path", "edges": [e.to_dict() for e in self.edges]}


class OutcomeKind(Enum):
    NO_CYCLE        = "no_cycle"
    CYCLE_FOUND     = "cycle_found"
    NEGATIVE_CYCLE  = "negative_cycle"
    COMPONENT_COUNT = "component_count"


@dataclass(frozen=True)
class Outcome:
    """
    Attributes:
        kind  : OutcomeKind.
        edges : CYCLE_FOUND only — the cycle, closing edge last.
        count : COMPONENT_COUNT only — number of connected components.
    """

    kind:  OutcomeKind
    edges: Tuple[PathEdge, ...] = ()
    count: Optional[int]        = None

    @property
    def message(self) -> str:
        """Plain-English text for the rendering collaborator."""
        if self.kind is OutcomeKind.NO_CYCLE:
            return "No cycle detected."
        if self.kind is OutcomeKind.CYCLE_FOUND:
            closing = self.edges[-1] if self.edges else None
            if closing is None:
                return "Cycle detected."
            return f"Cycle detected (closed by edge {closing.from_node} → {closing.to_node})."
        if self.kind is OutcomeKind.NEGATIVE_CYCLE:
            return "Negative cycle detected: shortest paths are undefined."
        noun = "component" if self.count == 1 else "components"
        return f"{self.count} connected {noun}."

    def to_dict(self) -> dict:
        return {
            "type":    "outcome",
            "kind":    self.kind.value,
            "edges":   [e.to_dict() for e in self.edges],
            "count":   self.count,
            "message": self.message,
        }


Event = Union[Visit, PathSnapshot, Outcome]


# ---------------------------------------------------------------------------
# StepSequence
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class StepSequence:
    """
    Attributes:
        algorithm : Registry key of the algorithm that produced it.
        start     : Start node id (None for union-find).
        events    : The ordered, immutable event tuple.
        distances : Final single-source distances for the shortest-path
                    algorithms ({node_id: dist}, inf when unreachable).
                    Empty for the others.
    """

    algorithm: str
    start:     Optional[int]
    events:    Tuple[Event, ...]       = ()
    distances: Mapping[int, float]     = field(default_factory=dict)

    def __len__(self) -> int:
        return len(self.events)

    def __iter__(self) -> Iterator[Event]:
        return iter(self.events)

    def __getitem__(self, idx: int) -> Event:
        return self.events[idx]

    @property
    def outcome(self) -> Optional[Outcome]:
        if self.events and isinstance(self.events[-1], Outcome):
            return self.events[-1]
        return None

    def visit_order(self) -> List[int]:
        return [ev.node for ev in self.events if isinstance(ev, Visit)]

    def final_path(self) -> Tuple[PathEdge, ...]:
        for ev in reversed(self.events):
            if isinstance(ev, PathSnapshot):
                return ev.edges
        return ()

    def to_dict(self) -> dict:
        return {
            "algorithm": self.algorithm,
            "start":     self.start,
            "events":    [ev.to_dict() for ev in self.events],
            "distances": {str(k): (v if v != float("inf") else None) for k, v in self.distances.items()},
        }


# ---------------------------------------------------------------------------
# Helpers shared by the algorithm generators
# ---------------------------------------------------------------------------
def snapshot(pairs: Iterable[Tuple[int, int]]) -> PathSnapshot:
    return PathSnapshot(tuple(PathEdge(a, b) for a, b in pairs))


def tree_snapshot(order: Iterable[int], previous: Dict[int, Optional[int]]) -> PathSnapshot:
    """Every (previous[v] → v) link, in node order — the whole parent tree."""
    return snapshot((previous[v], v) for v in order if previous.get(v) is not None)
