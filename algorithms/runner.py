"""
runner.py — Algorithm Runner
=============================
Turns (graph, start, algorithm) into a finished StepSequence.

    Idle  →  Computing  →  Done

Everything happens synchronously: the generator is exhausted before the
sequence is handed to anyone, so the player never sees a half-built run.
Validation (unknown algorithm, missing or unknown start node) happens
BEFORE the generator is created.
"""

import logging
from typing import List, Optional, Union

from graph import Graph, MissingStartNodeError
from algorithms import Algorithm, require_algorithm
from algorithms.step import Event, StepSequence

logger = logging.getLogger(__name__)


def run(
    graph: Graph,
    start: Optional[int],
    algorithm: Union[str, Algorithm],
) -> StepSequence:
    info = require_algorithm(algorithm)

    if info.requires_start:
        if start is None:
            raise MissingStartNodeError(info.key)
        graph.require_node(start)
    elif start is not None and start not in graph.nodes:
        start = None

    # algorithms read a private copy so later edits can't leak into a run
    snapshot = graph.copy()
    gen = info.fn(snapshot, start)

    events: List[Event] = []
    distances = {}
    while True:
        try:
            events.append(next(gen))
        except StopIteration as stop:
            distances = stop.value or {}
            break

    logger.info("Computed %s from %s: %d events", info.key, start, len(events))
    return StepSequence(
        algorithm=info.key,
        start=start,
        events=tuple(events),
        distances=dict(distances),
    )
