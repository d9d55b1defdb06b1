"""
errors.py — Domain Exceptions
==============================
Every error the engine raises on purpose derives from VisualizerError,
so the HTTP layer can map the whole family to JSON in one handler.

Rejected edits (duplicate edge, self-loop) are NOT errors — the graph
simply ignores them.  These exceptions cover caller-side validation.
"""


class VisualizerError(Exception):
    """Base class for all engine errors."""


class UnknownNodeError(VisualizerError, KeyError):
    def __init__(self, node_id):
        super().__init__(node_id)
        self.node_id = node_id

    def __str__(self) -> str:
        return f"Unknown node: {self.node_id}"


class MissingStartNodeError(VisualizerError, ValueError):
    """Raised before a run when the algorithm needs a start node and none is set."""

    def __init__(self, algorithm: str):
        super().__init__(f"'{algorithm}' needs a start node")
        self.algorithm = algorithm


class UnknownAlgorithmError(VisualizerError, KeyError):
    def __init__(self, key):
        super().__init__(key)
        self.key = key

    def __str__(self) -> str:
        return f"Unknown algorithm: {self.key}"


class InvalidSpeedError(VisualizerError, ValueError):
    def __init__(self, interval_ms, low: int, high: int):
        super().__init__(f"Speed {interval_ms} ms outside {low}..{high} ms")
        self.interval_ms = interval_ms


class PlaybackActiveError(VisualizerError, RuntimeError):
    """The graph is locked while a replay is running."""
