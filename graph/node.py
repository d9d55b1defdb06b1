from typing import Optional


# ---------------------------------------------------------------------------
# Node
# ---------------------------------------------------------------------------
class Node:
    """
    Identity only — position and colour belong to the renderer.

    Attributes:
        id    : Integer handed out by the owning Graph's counter.
        label : Human-readable name shown on the canvas (defaults to str(id)).
    """

    __slots__ = ("id", "label")

    def __init__(self, node_id: int, label: Optional[str] = None):
        self.id:    int = node_id
        self.label: str = label or str(node_id)

    # ------------------------------------------------------------------
    # Serialisation
    # ------------------------------------------------------------------
    def to_dict(self) -> dict:
        return {"id": self.id, "label": self.label}

    @classmethod
    def from_dict(cls, data: dict) -> "Node":
        return cls(node_id=int(data["id"]), label=data.get("label"))

    # ------------------------------------------------------------------
    # Dunder
    # ------------------------------------------------------------------
    def __repr__(self) -> str:
        return f"Node(id={self.id}, label={self.label})"

    def __eq__(self, other) -> bool:
        return isinstance(other, Node) and self.id == other.id and self.label == other.label

    def __hash__(self) -> int:
        return hash(self.id)
