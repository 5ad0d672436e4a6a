"""Flow engine: walk the routing graph from a start node until no successor.

Routing is exact label lookup in the current node's successor table. A
label with no registered successor ends the run normally, which is how a
node stops the flow early. Only one node runs at a time.
"""

import logging
from collections import deque
from dataclasses import dataclass, field
from typing import Any, Optional

import networkx as nx

from core.flow.errors import FlowConfigurationError, MaxStepsExceededError, NodeExecutionError
from core.flow.node import ExecutionRecord, Node

logger = logging.getLogger(__name__)


@dataclass
class FlowResult:
    """Outcome of a completed run."""

    action: Optional[str]
    records: list[ExecutionRecord] = field(default_factory=list)

    @property
    def path(self) -> list[str]:
        """Node names in activation order."""
        return [record.node for record in self.records]

    def record_for(self, node_name: str) -> ExecutionRecord:
        """Last activation record of the named node."""
        for record in reversed(self.records):
            if record.node == node_name:
                return record
        raise KeyError(node_name)


class Flow:
    """Runs a graph of nodes against one shared state object.

    The graph is validated before every run. Without ``max_steps`` it must
    be acyclic, since a back-edge would loop forever. With ``max_steps``
    cycles are allowed and the run aborts once the step budget is spent.

    Example:
        flow = Flow(start=detector)
        result = await flow.run(state)
        print(result.path)
    """

    def __init__(self, start: Node, max_steps: Optional[int] = None, name: str = "flow"):
        if max_steps is not None and max_steps < 1:
            raise ValueError("max_steps must be >= 1")
        self.start = start
        self.max_steps = max_steps
        self.name = name

    def nodes(self) -> list[Node]:
        """All nodes reachable from start, in breadth-first discovery order."""
        seen: dict[int, Node] = {id(self.start): self.start}
        queue = deque([self.start])
        while queue:
            node = queue.popleft()
            for successor in node.successors.values():
                if id(successor) not in seen:
                    seen[id(successor)] = successor
                    queue.append(successor)
        return list(seen.values())

    def describe(self) -> dict[str, dict[str, str]]:
        """Routing table as {node name: {label: successor name}}."""
        return {
            node.name: {label: succ.name for label, succ in node.successors.items()}
            for node in self.nodes()
        }

    def to_graph(self) -> nx.DiGraph:
        """Build a networkx view of the routing table, one edge per label."""
        nodes = self.nodes()
        names: dict[str, Node] = {}
        for node in nodes:
            other = names.get(node.name)
            if other is not None and other is not node:
                raise FlowConfigurationError(f"Duplicate node name in {self.name}: {node.name}")
            names[node.name] = node

        graph = nx.DiGraph()
        for node in nodes:
            graph.add_node(node.name)
            for label, successor in node.successors.items():
                if graph.has_edge(node.name, successor.name):
                    graph.edges[node.name, successor.name]["labels"].append(label)
                else:
                    graph.add_edge(node.name, successor.name, labels=[label])
        return graph

    def validate(self) -> None:
        """Raise FlowConfigurationError if the graph can't be run safely."""
        graph = self.to_graph()
        if self.max_steps is not None:
            return
        try:
            cycle = nx.find_cycle(graph, source=self.start.name)
        except nx.NetworkXNoCycle:
            return
        path = " -> ".join(edge[0] for edge in cycle) + f" -> {cycle[-1][1]}"
        raise FlowConfigurationError(
            f"{self.name} contains a cycle ({path}); set max_steps to allow it"
        )

    async def run(self, state: Any) -> FlowResult:
        """Run the graph to completion against ``state``.

        Raises:
            FlowConfigurationError: Graph failed validation; nothing ran.
            NodeExecutionError: A node failed; nodes after it did not run.
            MaxStepsExceededError: The step budget ran out.
        """
        self.validate()

        records: list[ExecutionRecord] = []
        current: Optional[Node] = self.start
        action: Optional[str] = None
        logger.info(f"{self.name}: starting at {self.start.name}")

        while current is not None:
            if self.max_steps is not None and len(records) >= self.max_steps:
                logger.error(f"{self.name}: step budget of {self.max_steps} exhausted")
                raise MaxStepsExceededError(self.max_steps, current.name)

            try:
                record = await current.run_activation(state)
            except NodeExecutionError as e:
                logger.error(f"{self.name}: aborted at {e.node_name}.{e.phase}: {e.cause}")
                raise

            records.append(record)
            action = record.action
            successor = current.successors.get(action)
            if successor is None:
                logger.info(
                    f"{self.name}: finished after {current.name} "
                    f"(action '{action}' has no successor, {len(records)} steps)"
                )
            else:
                logger.debug(f"{self.name}: {current.name} --{action}--> {successor.name}")
            current = successor

        return FlowResult(action=action, records=records)
