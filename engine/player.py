"""
player.py — Step-Sequence Playback Engine
==========================================
The Player replays a finished StepSequence at a fixed cadence.  It
never recomputes anything: it moves a cursor and folds events into the
visible state.

    Visit         → appended to `visited` (ordered, no duplicates)
    PathSnapshot  → REPLACES `path`
    Outcome       → stored once; replay ends.  NEGATIVE_CYCLE also
                    clears `path` — there is no meaningful path to show.

One frame per tick.  A frame is one event, except that a Visit directly
followed by a PathSnapshot is shown together (Dijkstra finalising a node
and its new tree appear at the same moment).

State machine:
    IDLE      →  play()    →  PLAYING
    PLAYING   →  stop()    →  STOPPED   (state frozen in place)
    STOPPED   →  resume()  →  PLAYING
    PLAYING   →  (sequence exhausted / Outcome) → FINISHED
    any       →  reset()   →  IDLE

Timers:
  At most one timer is pending per Player.  Every reschedule, stop and
  reset cancels the held handle first, and each scheduled callback
  carries a generation number — a callback that was already in flight
  when it got cancelled sees a stale generation and does nothing.
  The default scheduler fires on timer threads, so state is guarded
  by a lock; observers are notified outside it.
"""

import logging
import threading
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, List, Optional, Tuple

import config
from graph import InvalidSpeedError
from algorithms.step import Outcome, OutcomeKind, PathEdge, PathSnapshot, StepSequence, Visit
from engine.scheduler import ThreadingScheduler

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# States
# ---------------------------------------------------------------------------
class PlayerStatus(Enum):
    IDLE     = "idle"
    PLAYING  = "playing"
    STOPPED  = "stopped"
    FINISHED = "finished"


@dataclass(frozen=True)
class PlayerSnapshot:
    """Immutable view handed to observers and the HTTP layer."""

    status:  PlayerStatus
    cursor:  int
    total:   int
    visited: Tuple[int, ...]
    path:    Tuple[PathEdge, ...]
    outcome: Optional[Outcome]

    @property
    def running(self) -> bool:
        return self.status is PlayerStatus.PLAYING

    def to_dict(self) -> dict:
        return {
            "status":  self.status.value,
            "running": self.running,
            "cursor":  self.cursor,
            "total":   self.total,
            "visited": list(self.visited),
            "path":    [e.to_dict() for e in self.path],
            "outcome": self.outcome.to_dict() if self.outcome else None,
        }


def validate_interval(interval_ms: int) -> int:
    if not isinstance(interval_ms, int) or isinstance(interval_ms, bool):
        raise InvalidSpeedError(interval_ms, config.MIN_SPEED_MS, config.MAX_SPEED_MS)
    if not config.MIN_SPEED_MS <= interval_ms <= config.MAX_SPEED_MS:
        raise InvalidSpeedError(interval_ms, config.MIN_SPEED_MS, config.MAX_SPEED_MS)
    return interval_ms


Observer = Callable[[PlayerSnapshot], None]


# ---------------------------------------------------------------------------
# Player
# ---------------------------------------------------------------------------
class Player:
    """
    Attributes:
        status      : Current PlayerStatus.
        sequence    : The StepSequence being replayed (None before play()).
        cursor      : Index of the next event to deliver.
        visited     : Nodes visited so far, in emission order.
        path        : Highlighted edges as of the latest PathSnapshot.
        outcome     : Terminal Outcome once delivered.
        interval_ms : Milliseconds between ticks.
    """

    def __init__(self, scheduler: Any = None, interval_ms: int = config.DEFAULT_SPEED_MS):
        self._scheduler = scheduler or ThreadingScheduler()
        self._lock      = threading.RLock()
        self._observers: List[Observer] = []
        self._handle: Any      = None
        self._generation: int  = 0

        self.interval_ms: int  = validate_interval(interval_ms)
        self.sequence: Optional[StepSequence] = None
        self._clear()

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    def play(self, sequence: StepSequence, interval_ms: Optional[int] = None) -> bool:
        """
        Start replaying `sequence` from the beginning.  Shows the first
        frame immediately.  Returns False (and changes nothing) if a
        replay is already running.
        """
        if interval_ms is not None:
            validate_interval(interval_ms)
        with self._lock:
            if self.status is PlayerStatus.PLAYING:
                return False
            self._cancel_timer()
            if interval_ms is not None:
                self.interval_ms = interval_ms
            self.sequence = sequence
            self._clear()
            self.status = PlayerStatus.PLAYING
            logger.info("Replaying %s: %d events every %d ms",
                        sequence.algorithm, len(sequence), self.interval_ms)
            snap = self._frame()
        self._notify(snap)
        return True

    def resume(self) -> bool:
        """Continue a stopped replay from where it froze."""
        with self._lock:
            if self.status is not PlayerStatus.STOPPED:
                return False
            self.status = PlayerStatus.PLAYING
            snap = self._frame()
        self._notify(snap)
        return True

    def stop(self) -> None:
        """Cancel the pending tick; keep visited / path exactly as they are."""
        with self._lock:
            self._cancel_timer()
            if self.status is PlayerStatus.PLAYING:
                self.status = PlayerStatus.STOPPED
                logger.info("Replay stopped at %d/%d", self.cursor, self.total)
            snap = self._snapshot()
        self._notify(snap)

    def reset(self) -> None:
        """Cancel the pending tick and clear everything except the sequence."""
        with self._lock:
            self._cancel_timer()
            self._clear()
            snap = self._snapshot()
        self._notify(snap)

    # ------------------------------------------------------------------
    # Manual stepping
    # ------------------------------------------------------------------
    def step(self) -> bool:
        """Deliver one frame by hand while not playing.  False at the end."""
        with self._lock:
            if self.status is PlayerStatus.PLAYING or self.sequence is None:
                return False
            if self.outcome is not None or self.cursor >= self.total:
                return False
            self._apply_frame()
            self.status = PlayerStatus.FINISHED if self._exhausted() else PlayerStatus.STOPPED
            snap = self._snapshot()
        self._notify(snap)
        return True

    # ------------------------------------------------------------------
    # Speed
    # ------------------------------------------------------------------
    def set_interval(self, interval_ms: int) -> None:
        """Takes effect from the next scheduled tick."""
        validate_interval(interval_ms)
        with self._lock:
            self.interval_ms = interval_ms

    # ------------------------------------------------------------------
    # Observers
    # ------------------------------------------------------------------
    def subscribe(self, observer: Observer) -> Callable[[], None]:
        self._observers.append(observer)

        def unsubscribe() -> None:
            if observer in self._observers:
                self._observers.remove(observer)

        return unsubscribe

    # ------------------------------------------------------------------
    # Read-only accessors
    # ------------------------------------------------------------------
    @property
    def running(self) -> bool:
        return self.status is PlayerStatus.PLAYING

    @property
    def total(self) -> int:
        return len(self.sequence) if self.sequence is not None else 0

    @property
    def has_pending_timer(self) -> bool:
        return self._handle is not None

    def snapshot(self) -> PlayerSnapshot:
        with self._lock:
            return self._snapshot()

    # ------------------------------------------------------------------
    # Internal  (callers hold the lock)
    # ------------------------------------------------------------------
    def _clear(self) -> None:
        self.status:  PlayerStatus              = PlayerStatus.IDLE
        self.cursor:  int                       = 0
        self.visited: List[int]                 = []
        self.path:    Tuple[PathEdge, ...]      = ()
        self.outcome: Optional[Outcome]         = None

    def _frame(self) -> PlayerSnapshot:
        """Deliver one frame, then either finish or book the next tick."""
        if not self._exhausted():
            self._apply_frame()
        if self._exhausted():
            self.status = PlayerStatus.FINISHED
            logger.info("Replay finished after %d events", self.cursor)
        else:
            self._schedule()
        return self._snapshot()

    def _apply_frame(self) -> None:
        event = self.sequence[self.cursor]
        self._apply(event)
        self.cursor += 1
        if (
            isinstance(event, Visit)
            and self.cursor < self.total
            and isinstance(self.sequence[self.cursor], PathSnapshot)
        ):
            self._apply(self.sequence[self.cursor])
            self.cursor += 1

    def _apply(self, event) -> None:
        if isinstance(event, Visit):
            if event.node not in self.visited:
                self.visited.append(event.node)
        elif isinstance(event, PathSnapshot):
            self.path = event.edges
        elif isinstance(event, Outcome):
            self.outcome = event
            if event.kind is OutcomeKind.NEGATIVE_CYCLE:
                self.path = ()

    def _exhausted(self) -> bool:
        return self.outcome is not None or self.cursor >= self.total

    def _schedule(self) -> None:
        self._cancel_timer()
        generation = self._generation
        self._handle = self._scheduler.schedule(self.interval_ms, lambda: self._on_tick(generation))
        logger.debug("Tick booked in %d ms (generation %d)", self.interval_ms, generation)

    def _cancel_timer(self) -> None:
        if self._handle is not None:
            self._scheduler.cancel(self._handle)
            self._handle = None
        self._generation += 1

    def _on_tick(self, generation: int) -> None:
        with self._lock:
            if generation != self._generation or self.status is not PlayerStatus.PLAYING:
                return
            self._handle = None
            snap = self._frame()
        self._notify(snap)

    def _snapshot(self) -> PlayerSnapshot:
        return PlayerSnapshot(
            status=self.status,
            cursor=self.cursor,
            total=self.total,
            visited=tuple(self.visited),
            path=self.path,
            outcome=self.outcome,
        )

    def _notify(self, snap: PlayerSnapshot) -> None:
        for observer in list(self._observers):
            observer(snap)
