"""Flow graph model: typed nodes and labeled edges describing an agent strategy.

Flow graphs come from a generation call or from hand editing and are
replaced wholesale on each refinement. Edges may point at nodes that no
longer exist; consumers skip those instead of failing.
"""

import json
from enum import Enum
from typing import Any, Iterator

from pydantic import ValidationError

from agentforge.models.base import CamelModel


class FlowParseError(Exception):
    """Raised when completion text cannot be turned into a FlowData."""
    pass


class FlowNodeType(str, Enum):
    start = "start"
    prompt = "prompt"
    tool_call = "tool_call"
    decision = "decision"
    end = "end"
    action = "action"


class FlowNode(CamelModel):
    """a step in the flow; x/y are layout only."""

    id: str
    label: str
    type: FlowNodeType
    description: str | None = None
    x: float = 0.0
    y: float = 0.0

    name: str | None = None
    prompt_id: str | None = None
    tool_id: str | None = None
    config: dict[str, Any] | None = None


class FlowEdge(CamelModel):
    """a directed link between two nodes."""

    id: str
    source: str
    target: str
    label: str | None = None
    condition: str | None = None
    order_index: int | None = None


class FlowData(CamelModel):
    """The full flow graph for one agent."""

    id: str | None = None
    name: str | None = None
    description: str | None = None
    is_default: bool | None = None
    summary: str
    nodes: list[FlowNode]
    edges: list[FlowEdge]

    def entry_node(self) -> FlowNode | None:
        """First ``start`` node, else the first node in list order."""
        for node in self.nodes:
            if node.type == FlowNodeType.start:
                return node
        return self.nodes[0] if self.nodes else None

    def resolved_edges(self) -> Iterator[FlowEdge]:
        """Yield edges whose source and target both name existing nodes."""
        node_ids = {node.id for node in self.nodes}
        for edge in self.edges:
            if edge.source in node_ids and edge.target in node_ids:
                yield edge

    def dangling_edges(self) -> list[FlowEdge]:
        node_ids = {node.id for node in self.nodes}
        return [
            edge for edge in self.edges
            if edge.source not in node_ids or edge.target not in node_ids
        ]

    @classmethod
    def from_completion(cls, text: str | None) -> "FlowData":
        """Parse the JSON text returned by a flow generation call.

        Empty text is treated as ``{}``, which fails validation because
        ``summary``, ``nodes`` and ``edges`` are all required.

        Raises:
            FlowParseError: if the text is not JSON or not a valid flow.
        """
        try:
            data = json.loads(text or "{}")
        except json.JSONDecodeError as e:
            raise FlowParseError(f"Flow completion is not valid JSON: {e}") from e
        if not isinstance(data, dict):
            raise FlowParseError("Flow completion must be a JSON object")
        try:
            return cls.model_validate(data)
        except ValidationError as e:
            raise FlowParseError(f"Flow completion does not match the flow schema: {e}") from e
