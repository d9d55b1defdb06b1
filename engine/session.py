"""
session.py — Editing Session
=============================
The one object the UI (or the HTTP layer) talks to.  It owns the graph,
the selected algorithm, the replay speed, the last computed sequence
and the Player, and exposes exactly the inputs an editor produces:

    add_node / add_edge / delete_node / delete_edge / set_edge_weight
    set_start_node / select_algorithm / set_speed
    play / stop / reset

and the outputs a renderer needs (state()).

While a replay is running the graph is locked: edits and start-node
changes raise PlaybackActiveError instead of silently racing the
animation.

The HTTP layer serves requests on several threads, so every edit and
the whole of play() (check, compute, start) run under one lock.
"""

import logging
import threading
from typing import Optional, Union

import config
from graph import Graph, EdgeKind, PlaybackActiveError
from algorithms import Algorithm, AlgoInfo, require_algorithm, run
from algorithms.step import StepSequence
from engine.player import Player, PlayerSnapshot, validate_interval

logger = logging.getLogger(__name__)


class Session:
    """
    Attributes:
        graph     : The Graph being edited.
        algorithm : AlgoInfo of the selected algorithm.
        speed_ms  : Replay interval in ms.
        sequence  : Last computed StepSequence (None until play()).
        player    : The Player.
    """

    def __init__(self, graph: Optional[Graph] = None, scheduler=None):
        self.graph:     Graph                  = graph or Graph()
        self.algorithm: AlgoInfo               = require_algorithm(config.DEFAULT_ALGORITHM)
        self.speed_ms:  int                    = config.DEFAULT_SPEED_MS
        self.sequence:  Optional[StepSequence] = None
        self.player:    Player                 = Player(scheduler, self.speed_ms)
        self._lock = threading.RLock()

    # ==================================================================
    # GRAPH EDITS
    # ==================================================================
    def add_node(self, label: Optional[str] = None) -> int:
        with self._lock:
            self._ensure_idle()
            return self.graph.add_node(label)

    def add_edge(self, source: int, target: int, weight: int = 1, kind=EdgeKind.UNDIRECTED) -> Optional[int]:
        with self._lock:
            self._ensure_idle()
            return self.graph.add_edge(source, target, weight, kind)

    def delete_node(self, node_id: int) -> None:
        with self._lock:
            self._ensure_idle()
            self.graph.delete_node(node_id)

    def delete_edge(self, source: int, target: int) -> int:
        with self._lock:
            self._ensure_idle()
            return self.graph.delete_edge(source, target)

    def set_edge_weight(self, source: int, target: int, weight: int) -> bool:
        with self._lock:
            self._ensure_idle()
            return self.graph.set_edge_weight(source, target, weight)

    def set_start_node(self, node_id: Optional[int]) -> None:
        with self._lock:
            self._ensure_idle()
            self.graph.set_start(node_id)

    # ==================================================================
    # CONFIG
    # ==================================================================
    def select_algorithm(self, key: Union[str, Algorithm]) -> AlgoInfo:
        info = require_algorithm(key)
        with self._lock:
            self.algorithm = info
        return info

    def set_speed(self, interval_ms: int) -> None:
        validate_interval(interval_ms)
        with self._lock:
            self.speed_ms = interval_ms
            self.player.set_interval(interval_ms)

    # ==================================================================
    # PLAYBACK
    # ==================================================================
    def play(self) -> bool:
        """
        Compute the selected algorithm from the current start node and
        start replaying it.  No-op (False) while a replay is running.
        Raises MissingStartNodeError before computing if one is needed.
        """
        with self._lock:
            if self.player.running:
                return False
            sequence = run(self.graph, self.graph.start, self.algorithm.key)
            self.sequence = sequence
            self.player.reset()
            return self.player.play(sequence, self.speed_ms)

    def stop(self) -> None:
        with self._lock:
            self.player.stop()

    def reset(self) -> None:
        with self._lock:
            self.player.reset()

    @property
    def running(self) -> bool:
        return self.player.running

    def state(self) -> PlayerSnapshot:
        return self.player.snapshot()

    def to_dict(self) -> dict:
        with self._lock:
            return {
                "graph":       self.graph.to_dict(),
                "algorithm":   self.algorithm.key,
                "speed_ms":    self.speed_ms,
                "speed_range": {
                    "min":  config.MIN_SPEED_MS,
                    "max":  config.MAX_SPEED_MS,
                    "step": config.SPEED_STEP_MS,
                },
                "player":      self.state().to_dict(),
            }

    # ------------------------------------------------------------------
    def _ensure_idle(self) -> None:
        if self.player.running:
            logger.debug("Edit refused: replay in progress")
            raise PlaybackActiveError("Stop or reset the replay before editing the graph")
